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

from typing import List

from pysplit.client.token_range_client import TokenRangeClient
from pysplit.common.exceptions import PlanningException
from pysplit.read.planner.split_planner import SplitPlanner
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import TokenRangeSplit


class TokenRangeSplitPlanner(SplitPlanner):
    """One split per token range of the store's own sharding of the ring."""

    def _create_splits(self, client: TokenRangeClient, config: ReadConfiguration,
                       desired_parallelism: int) -> List[TokenRangeSplit]:
        if not client.table_exists(config.table):
            raise PlanningException(config.table.get_full_name(), "table does not exist")
        token_ranges = client.split_token_ranges(config.table, desired_parallelism)
        return [
            TokenRangeSplit(split_id=i, start_token=token_range.start, end_token=token_range.end)
            for i, token_range in enumerate(token_ranges)
        ]
