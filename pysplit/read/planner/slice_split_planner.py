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

from pysplit.client.search_client import SearchClient
from pysplit.common.exceptions import PlanningException
from pysplit.read.planner.split_planner import SplitPlanner
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import SliceSplit


class SliceSplitPlanner(SplitPlanner):
    """
    Emits exactly desired_parallelism slices. The index is not partitioned here; the
    backend hashes each hit into one slice when the query runs.
    """

    def _create_splits(self, client: SearchClient, config: ReadConfiguration,
                       desired_parallelism: int) -> List[SliceSplit]:
        index = config.table.get_full_name()
        if not client.index_exists(index):
            raise PlanningException(index, "index does not exist")
        return [
            SliceSplit(split_id=i, slice_id=i, max_slices=desired_parallelism)
            for i in range(desired_parallelism)
        ]
