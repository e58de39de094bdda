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

from typing import Any, Callable, Dict, Optional, Union

import pyarrow

from pysplit.common.identifier import Identifier
from pysplit.common.options import Options
from pysplit.common.read_options import ReadOptions
from pysplit.read.converter import RowConverter
from pysplit.read.listener import ReadListener
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.table_read import TableRead
from pysplit.read.table_scan import TableScan


class ReadBuilder:
    """Builds the configuration of one read, then its scan and its read."""

    def __init__(self, source, client_factory: Callable[[], Any], table: Union[str, Identifier]):
        from pysplit.source.split_source import SplitSource

        self.source: SplitSource = source
        self._client_factory = client_factory
        self._table = table if isinstance(table, Identifier) else Identifier.from_string(table)
        self._schema: Optional[pyarrow.Schema] = None
        self._query: Optional[str] = None
        self._consistency: Optional[str] = None
        self._parallelism: Optional[int] = None
        self._batch_size: Optional[int] = None
        self._options = Options()
        self._converter: Optional[RowConverter] = None
        self._listener: Optional[ReadListener] = None

    def with_schema(self, schema: pyarrow.Schema) -> 'ReadBuilder':
        """The columns to read, in output order, with the arrow types rows are converted to."""
        self._schema = schema
        return self

    def with_query(self, query: str) -> 'ReadBuilder':
        self._query = query
        return self

    def with_consistency(self, consistency: str) -> 'ReadBuilder':
        self._consistency = consistency
        return self

    def with_parallelism(self, parallelism: int) -> 'ReadBuilder':
        """
        Set the desired number of splits. This overrides the option 'read.parallelism'.
        The planner may return fewer or more splits.
        """
        if parallelism < 1:
            raise ValueError(f"parallelism must be at least 1, got {parallelism}")
        self._parallelism = parallelism
        return self

    def with_batch_size(self, batch_size: int) -> 'ReadBuilder':
        """
        Set the number of records fetched per page or batch. This overrides the option
        'read.batch-size'. It bounds memory, not correctness.
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self._batch_size = batch_size
        return self

    def with_options(self, options: Dict[str, Any]) -> 'ReadBuilder':
        for key, value in options.items():
            self._options.data[key] = value
        return self

    def with_converter(self, converter: RowConverter) -> 'ReadBuilder':
        self._converter = converter
        return self

    def with_listener(self, listener: ReadListener) -> 'ReadBuilder':
        self._listener = listener
        return self

    def build_config(self) -> ReadConfiguration:
        if self._schema is None:
            raise ValueError("A read schema is required, call with_schema first")
        options = self._options.copy()
        return ReadConfiguration(
            client_factory=self._client_factory,
            table=self._table,
            schema=self._schema,
            query=self._query,
            consistency=self._consistency if self._consistency is not None
            else options.get(ReadOptions.CONSISTENCY),
            parallelism=self._parallelism if self._parallelism is not None
            else options.get(ReadOptions.PARALLELISM),
            batch_size=self._batch_size if self._batch_size is not None
            else options.get(ReadOptions.BATCH_SIZE),
            options=options,
        )

    def new_scan(self) -> TableScan:
        return TableScan(self.source, self.build_config())

    def new_read(self) -> TableRead:
        return TableRead(self.source, self.build_config(), self._converter, self._listener)
