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

from datetime import timedelta
from enum import Enum

from pysplit.common.options.config_option import ConfigOption
from pysplit.common.options.config_options import ConfigOptions


class ConversionErrorPolicy(str, Enum):
    """
    What a split does with a record its converter rejects.
    """
    FAIL = "fail"
    SKIP = "skip"


class ReadOptions:
    """Options of split-based reads."""

    DEFAULT_BATCH_SIZE: int = 1024

    PARALLELISM: ConfigOption[int] = (
        ConfigOptions.key("read.parallelism")
        .int_type()
        .at_least(1)
        .default_value(1)
        .with_description("Desired number of splits. Advisory, a planner may return fewer or more.")
    )

    BATCH_SIZE: ConfigOption[int] = (
        ConfigOptions.key("read.batch-size")
        .int_type()
        .at_least(1)
        .default_value(DEFAULT_BATCH_SIZE)
        .with_description("Number of records fetched per page or batch from the backend.")
    )

    SCROLL_KEEP_ALIVE: ConfigOption[timedelta] = (
        ConfigOptions.key("read.scroll.keep-alive")
        .duration_type()
        .default_value(timedelta(minutes=1))
        .with_description("How long the backend keeps a scroll context alive between two pages.")
    )

    CONSISTENCY: ConfigOption[str] = (
        ConfigOptions.key("read.consistency")
        .string_type()
        .no_default_value()
        .with_description("Consistency or staleness hint passed through to the backend query.")
    )

    CONVERSION_ERROR_POLICY: ConfigOption[ConversionErrorPolicy] = (
        ConfigOptions.key("read.conversion.error-policy")
        .enum_type(ConversionErrorPolicy)
        .default_value(ConversionErrorPolicy.FAIL)
        .with_description("Whether a record that fails conversion fails its split or is skipped.")
    )

    CONVERSION_MAX_SKIPPED_RECORDS: ConfigOption[int] = (
        ConfigOptions.key("read.conversion.max-skipped-records")
        .int_type()
        .at_least(-1)
        .default_value(-1)
        .with_description("With the skip policy, fail the split once more records than this are skipped. "
                          "-1 means unlimited.")
    )

    MAX_WORKERS: ConfigOption[int] = (
        ConfigOptions.key("read.max-workers")
        .int_type()
        .at_least(1)
        .default_value(1)
        .with_description("Number of splits read concurrently by a local TableRead.")
    )
