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
"""
Module to read a split source into a Ray Dataset, by using the Ray Datasource API.
"""
import logging
from functools import partial
from typing import Iterable, List, Optional

import pyarrow
import ray
from packaging.version import parse
from ray.data.datasource import Datasource

from pysplit.read.split import Split
from pysplit.read.table_read import TableRead

logger = logging.getLogger(__name__)

# Ray version constants for compatibility
RAY_VERSION_SCHEMA_IN_READ_TASK = "2.48.0"  # Schema moved from BlockMetadata to ReadTask


class SplitDatasource(Datasource):
    """
    Ray Data Datasource reading the splits of one plan.

    Every read task runs one SplitRead lifecycle per split it was given, on its own
    clients; tasks share nothing but the pickled source, configuration and splits.
    """

    def __init__(self, table_read: TableRead, splits: List[Split]):
        self.table_read = table_read
        self.splits = splits

    def get_name(self) -> str:
        return f"SplitSource({self.table_read.source.name}:{self.table_read.config.table.get_full_name()})"

    def estimate_inmemory_data_size(self) -> Optional[int]:
        if not self.splits:
            return 0
        # splits carry no size information
        return None

    @staticmethod
    def _distribute_splits_into_equal_chunks(splits: Iterable[Split], n_chunks: int) -> List[List[Split]]:
        """Round-robin the splits over n_chunks tasks, keeping plan order within a task."""
        chunks = [list() for _ in range(n_chunks)]
        for i, split in enumerate(splits):
            chunks[i % n_chunks].append(split)
        return chunks

    def get_read_tasks(self, parallelism: int, **kwargs) -> List:
        """Return a list of read tasks that can be executed in parallel."""
        from ray.data.block import BlockMetadata
        from ray.data.datasource import ReadTask

        if parallelism < 1:
            raise ValueError(f"parallelism must be at least 1, got {parallelism}")

        if parallelism > len(self.splits):
            parallelism = max(1, len(self.splits))
            logger.warning(
                f"Reducing the parallelism to {parallelism}, as that is the number of splits"
            )

        # Extract these to avoid serializing the entire self object in closures
        source = self.table_read.source
        config = self.table_read.config
        converter = self.table_read.converter
        schema = config.schema

        def _get_read_task(
                splits: List[Split],
                source=source,
                config=config,
                converter=converter,
        ) -> Iterable[pyarrow.Table]:
            """Read function that will be executed by Ray workers."""
            worker_table_read = TableRead(source, config, converter)
            arrow_table = worker_table_read.to_arrow(splits)
            return [arrow_table]

        get_read_task = partial(
            _get_read_task,
            source=source,
            config=config,
            converter=converter,
        )

        read_tasks = []
        for chunk_splits in self._distribute_splits_into_equal_chunks(self.splits, parallelism):
            if not chunk_splits:
                continue

            metadata_kwargs = {
                'num_rows': None,
                'size_bytes': None,
                'input_files': None,
                'exec_stats': None,  # Will be populated by Ray during execution
            }
            if parse(ray.__version__) < parse(RAY_VERSION_SCHEMA_IN_READ_TASK):
                metadata_kwargs['schema'] = schema
            metadata = BlockMetadata(**metadata_kwargs)

            read_task_kwargs = {
                'read_fn': partial(get_read_task, chunk_splits),
                'metadata': metadata,
            }
            if parse(ray.__version__) >= parse(RAY_VERSION_SCHEMA_IN_READ_TASK):
                read_task_kwargs['schema'] = schema

            read_tasks.append(ReadTask(**read_task_kwargs))

        return read_tasks
