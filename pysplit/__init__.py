################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################

from pysplit.common.exceptions import (CleanupException, ConversionException,
                                       IllegalStateException, OpenException,
                                       PlanningException, ReadException,
                                       SplitException, SplitSourceException)
from pysplit.common.identifier import Identifier
from pysplit.common.read_options import ConversionErrorPolicy, ReadOptions
from pysplit.read.converter import MappingRowConverter, RowConverter
from pysplit.read.lifecycle import LifecycleState
from pysplit.read.listener import (LoggingReadListener, MetricsReadListener,
                                   ReadListener)
from pysplit.read.read_builder import ReadBuilder
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import ScanTokenSplit, SliceSplit, Split, TokenRangeSplit
from pysplit.read.split_read import SplitRead
from pysplit.source.split_source import (SplitSource, scan_token_source,
                                         slice_scroll_source,
                                         token_range_source)

__all__ = [
    'CleanupException',
    'ConversionErrorPolicy',
    'ConversionException',
    'Identifier',
    'IllegalStateException',
    'LifecycleState',
    'LoggingReadListener',
    'MappingRowConverter',
    'MetricsReadListener',
    'OpenException',
    'PlanningException',
    'ReadBuilder',
    'ReadConfiguration',
    'ReadException',
    'ReadListener',
    'ReadOptions',
    'RowConverter',
    'ScanTokenSplit',
    'SliceSplit',
    'Split',
    'SplitException',
    'SplitRead',
    'SplitSource',
    'SplitSourceException',
    'TokenRangeSplit',
    'scan_token_source',
    'slice_scroll_source',
    'token_range_source',
]
