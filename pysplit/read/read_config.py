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

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, List, Optional

import pyarrow

from pysplit.common.identifier import Identifier
from pysplit.common.options import Options
from pysplit.common.read_options import ReadOptions


@dataclass(frozen=True)
class ReadConfiguration:
    """
    Everything a planner and a cursor need to know about one logical read.

    client_factory is called once by the planner and once per split by the cursor,
    each call must return a new client owned by the caller. It has to be picklable
    when splits are read by remote workers.
    """
    client_factory: Callable[[], Any]
    table: Identifier
    schema: pyarrow.Schema
    query: Optional[str] = None
    consistency: Optional[str] = None
    parallelism: int = 1
    batch_size: int = ReadOptions.DEFAULT_BATCH_SIZE
    options: Options = field(default_factory=Options)

    def __post_init__(self):
        if self.client_factory is None:
            raise ValueError("client_factory must not be None")
        if self.parallelism < 1:
            raise ValueError(f"parallelism must be at least 1, got {self.parallelism}")
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {self.batch_size}")

    @property
    def columns(self) -> List[str]:
        return list(self.schema.names)

    @property
    def scroll_keep_alive(self) -> timedelta:
        return self.options.get(ReadOptions.SCROLL_KEEP_ALIVE)

    def new_client(self):
        return self.client_factory()
