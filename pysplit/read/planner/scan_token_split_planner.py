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

from pysplit.client.scan_token_client import ScanTokenClient
from pysplit.common.exceptions import PlanningException
from pysplit.read.planner.split_planner import SplitPlanner
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import ScanTokenSplit


class ScanTokenSplitPlanner(SplitPlanner):
    """
    One split per scan token. The backend decides the real parallelism from its data
    distribution, so the desired parallelism is ignored.
    """

    def _create_splits(self, client: ScanTokenClient, config: ReadConfiguration,
                       desired_parallelism: int) -> List[ScanTokenSplit]:
        if not client.table_exists(config.table):
            raise PlanningException(config.table.get_full_name(), "table does not exist")
        tokens = client.build_scan_tokens(config.table, config.columns, config.query, config.batch_size)
        return [ScanTokenSplit(split_id=i, token=token) for i, token in enumerate(tokens)]
