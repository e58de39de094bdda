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

from dataclasses import dataclass
from typing import Any, Callable, Union

from pysplit.common.identifier import Identifier
from pysplit.read.cursor.record_cursor import RecordCursor
from pysplit.read.cursor.row_batch_cursor import RowBatchCursor
from pysplit.read.cursor.scroll_cursor import ScrollCursor
from pysplit.read.cursor.token_range_cursor import TokenRangeCursor
from pysplit.read.planner.scan_token_split_planner import ScanTokenSplitPlanner
from pysplit.read.planner.slice_split_planner import SliceSplitPlanner
from pysplit.read.planner.split_planner import SplitPlanner
from pysplit.read.planner.token_range_split_planner import \
    TokenRangeSplitPlanner


@dataclass(frozen=True)
class SplitSource:
    """
    The planner and cursor of one backend shape. A read picks its source once; the
    scan and every split read only talk to the planner and cursor held here.
    """
    name: str
    planner: SplitPlanner
    cursor: RecordCursor

    def new_read_builder(self, client_factory: Callable[[], Any], table: Union[str, Identifier]):
        from pysplit.read.read_builder import ReadBuilder

        return ReadBuilder(self, client_factory, table)


def token_range_source() -> SplitSource:
    """Wide-column stores sharded over a token ring."""
    return SplitSource("token-range", TokenRangeSplitPlanner(), TokenRangeCursor())


def slice_scroll_source() -> SplitSource:
    """Search indices read with sliced scroll queries."""
    return SplitSource("slice-scroll", SliceSplitPlanner(), ScrollCursor())


def scan_token_source() -> SplitSource:
    """Stores that hand out scan tokens and stream rows in batches."""
    return SplitSource("scan-token", ScanTokenSplitPlanner(), RowBatchCursor())
