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
from typing import Any, Iterable, List, Optional

from pysplit.common.identifier import Identifier


class RowScanner(ABC):
    """
    Scanner rebuilt from one scan token. Rows arrive in batches; the scanner
    knows whether more batches remain.
    """

    @abstractmethod
    def has_more_rows(self) -> bool:
        pass

    @abstractmethod
    def next_rows(self) -> Iterable[Any]:
        """Fetches the next batch of rows. The batch may be empty."""

    @abstractmethod
    def close(self):
        pass


class ScanTokenClient(ABC):
    """
    Client of a store that describes scannable portions of a table with opaque,
    serializable scan tokens.
    """

    @abstractmethod
    def table_exists(self, table: Identifier) -> bool:
        pass

    @abstractmethod
    def build_scan_tokens(self, table: Identifier, columns: List[str], query: Optional[str],
                          batch_size: int) -> List[bytes]:
        """
        Computes serialized scan tokens for the table. The store decides how many
        tokens there are from its data distribution.
        """

    @abstractmethod
    def open_scanner(self, token: bytes) -> RowScanner:
        """Deserializes a scan token into a scanner bound to this client."""

    @abstractmethod
    def close(self):
        pass
