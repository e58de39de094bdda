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

import logging
from abc import ABC, abstractmethod
from typing import List

from pysplit.common.exceptions import PlanningException
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import Split

logger = logging.getLogger(__name__)


class SplitPlanner(ABC):
    """
    Turns a read configuration and a desired parallelism into an ordered list of
    disjoint splits. The planner owns the client it plans with and always closes it.
    """

    def plan(self, config: ReadConfiguration, desired_parallelism: int) -> List[Split]:
        if desired_parallelism < 1:
            raise ValueError(f"desired_parallelism must be at least 1, got {desired_parallelism}")

        table = config.table.get_full_name()
        logger.info(f"execute {type(self).__name__} for {table}, desired parallelism: {desired_parallelism}")
        client = None
        try:
            client = config.new_client()
            splits = self._create_splits(client, config, desired_parallelism)
        except PlanningException:
            raise
        except Exception as e:
            raise PlanningException(table, f"{type(e).__name__}: {e}") from e
        finally:
            if client is not None:
                self._close_client(client, table)

        logger.info(f"Planned {len(splits)} splits for {table}")
        return splits

    @abstractmethod
    def _create_splits(self, client, config: ReadConfiguration, desired_parallelism: int) -> List[Split]:
        pass

    @staticmethod
    def _close_client(client, table: str):
        try:
            client.close()
        except Exception as e:
            logger.warning(f"Closing the planning client of {table} failed: {e}")
