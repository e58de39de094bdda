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

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from pysplit.common.identifier import Identifier


@dataclass(frozen=True)
class TokenRange:
    """
    A range of the token ring, exclusive start and inclusive end. A range whose end
    is not greater than its start wraps around the ring.
    """
    start: int
    end: int

    def is_wrapped(self) -> bool:
        return self.end <= self.start

    def contains(self, token: int) -> bool:
        if self.is_wrapped():
            return token > self.start or token <= self.end
        return self.start < token <= self.end


class TokenRangeClient(ABC):
    """
    Client of a wide-column store that shards its tables over a token ring.
    Sessions, credentials and the native protocol live behind this interface.
    """

    @abstractmethod
    def table_exists(self, table: Identifier) -> bool:
        """Whether the keyspace-qualified table exists."""

    @abstractmethod
    def split_token_ranges(self, table: Identifier, split_count: int) -> List[TokenRange]:
        """
        Splits the token ring of the table into roughly split_count disjoint ranges covering
        the whole ring, using the store's native token-sharding primitive.
        """

    @abstractmethod
    def query(self, table: Identifier, columns: List[str], token_range: TokenRange,
              query: Optional[str], consistency: Optional[str], fetch_size: int) -> Iterable[Any]:
        """
        Selects the columns of every row whose partition token falls in token_range,
        optionally restricted by a where-clause query.
        """

    @abstractmethod
    def close(self):
        """Closes the session and releases its connections."""
