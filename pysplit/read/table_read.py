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
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterator, List, Optional

import pandas
import polars
import pyarrow

from pysplit.common.read_options import ReadOptions
from pysplit.read.converter import RowConverter
from pysplit.read.listener import ReadListener
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import Split
from pysplit.read.split_read import SplitRead

logger = logging.getLogger(__name__)

_SPLIT_DONE = object()


class _SplitFailure:

    def __init__(self, error: BaseException):
        self.error = error


class TableRead:
    """Reads the rows of planned splits, each split in its own SplitRead lifecycle."""

    CHUNK_SIZE = 65536
    QUEUE_POLL_SECONDS = 0.1

    def __init__(self, source, config: ReadConfiguration,
                 converter: Optional[RowConverter] = None,
                 listener: Optional[ReadListener] = None):
        from pysplit.source.split_source import SplitSource

        self.source: SplitSource = source
        self.config = config
        self.converter = converter
        self.listener = listener
        self.max_workers = config.options.get(ReadOptions.MAX_WORKERS)

    def new_split_read(self, split: Split) -> SplitRead:
        return SplitRead(split, self.config, self.source.cursor, self.converter, self.listener)

    def to_iterator(self, splits: List[Split]) -> Iterator[tuple]:
        if self.max_workers > 1 and len(splits) > 1:
            return self._concurrent_read(splits, iter)

        def _record_generator():
            for split in splits:
                yield from self.new_split_read(split)

        return _record_generator()

    def to_arrow_batch_reader(self, splits: List[Split]) -> pyarrow.ipc.RecordBatchReader:
        schema = self.config.schema
        batch_iterator = self._arrow_batch_generator(splits, schema)
        return pyarrow.ipc.RecordBatchReader.from_batches(schema, batch_iterator)

    def to_arrow(self, splits: List[Split]) -> pyarrow.Table:
        batch_reader = self.to_arrow_batch_reader(splits)
        return batch_reader.read_all()

    def to_pandas(self, splits: List[Split]) -> pandas.DataFrame:
        return self.to_arrow(splits).to_pandas()

    def to_polars(self, splits: List[Split]) -> polars.DataFrame:
        return polars.from_arrow(self.to_arrow(splits))

    def to_ray(self, splits: List[Split], override_num_blocks: Optional[int] = None) -> "ray.data.dataset.Dataset":
        import ray

        from pysplit.read.ray_datasource import SplitDatasource

        if not splits:
            return ray.data.from_arrow(self.config.schema.empty_table())

        if override_num_blocks is None:
            override_num_blocks = max(1, min(len(splits), self.config.parallelism))
        return ray.data.read_datasource(
            SplitDatasource(self, splits),
            override_num_blocks=override_num_blocks,
        )

    def _arrow_batch_generator(self, splits: List[Split], schema: pyarrow.Schema) -> Iterator[pyarrow.RecordBatch]:
        if self.max_workers > 1 and len(splits) > 1:
            yield from self._concurrent_read(splits, lambda split_read: self._split_batches(split_read, schema))
            return

        for split in splits:
            yield from self._split_batches(self.new_split_read(split), schema)

    def _split_batches(self, split_read: SplitRead, schema: pyarrow.Schema) -> Iterator[pyarrow.RecordBatch]:
        row_tuple_chunk = []
        for row in split_read:
            row_tuple_chunk.append(row)
            if len(row_tuple_chunk) >= self.CHUNK_SIZE:
                yield self.convert_rows_to_arrow_batch(row_tuple_chunk, schema)
                row_tuple_chunk = []

        if row_tuple_chunk:
            yield self.convert_rows_to_arrow_batch(row_tuple_chunk, schema)

    def _concurrent_read(self, splits: List[Split], read_split: Callable[[SplitRead], Iterator[Any]]) -> Iterator[Any]:
        """
        Reads splits on max_workers threads and yields what read_split produces for each
        split, in arrival order. Items pass through a queue of max_workers slots, so a
        worker holds at most one backend batch ahead of the consumer. Leaving the
        iterator early, or a failing split, cancels every split still being read.
        """
        logger.info(f"Reading {len(splits)} splits with {self.max_workers} workers")
        results = queue.Queue(maxsize=self.max_workers)
        stopped = threading.Event()
        split_reads = [self.new_split_read(split) for split in splits]

        def _put(item) -> bool:
            while not stopped.is_set():
                try:
                    results.put(item, timeout=self.QUEUE_POLL_SECONDS)
                    return True
                except queue.Full:
                    continue
            return False

        def _produce(split_read: SplitRead):
            items = read_split(split_read)
            try:
                for item in items:
                    if not _put(item):
                        return
            except Exception as e:
                _put(_SplitFailure(e))
                return
            finally:
                items.close()
            _put(_SPLIT_DONE)

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        futures = [executor.submit(_produce, split_read) for split_read in split_reads]
        try:
            remaining = len(futures)
            while remaining:
                item = results.get()
                if item is _SPLIT_DONE:
                    remaining -= 1
                elif isinstance(item, _SplitFailure):
                    raise item.error
                else:
                    yield item
        finally:
            stopped.set()
            for future, split_read in zip(futures, split_reads):
                # a future that cannot be cancelled is running or done
                if not future.cancel():
                    split_read.cancel()
            executor.shutdown(wait=True)

    @staticmethod
    def convert_rows_to_arrow_batch(row_tuples: List[tuple], schema: pyarrow.Schema) -> pyarrow.RecordBatch:
        columns_data = zip(*row_tuples)
        pydict = {name: list(column) for name, column in zip(schema.names, columns_data)}
        return pyarrow.RecordBatch.from_pydict(pydict, schema=schema)
