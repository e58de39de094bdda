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
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Optional


@dataclass
class ScrollPage:
    """One page of a scrolled search: the continuation id and the hit sources."""
    scroll_id: Optional[str]
    hits: List[Dict[str, Any]] = field(default_factory=list)


class SearchClient(ABC):
    """
    Client of a search index that pages through results with scroll continuations and
    subdivides a query into hash-based slices.
    """

    @abstractmethod
    def index_exists(self, index: str) -> bool:
        pass

    @abstractmethod
    def search(self, index: str, query: Optional[str], slice_id: Optional[int], max_slices: Optional[int],
               size: int, keep_alive: timedelta) -> ScrollPage:
        """
        Issues the initial scrolled search. slice_id and max_slices are None when the
        search is not sliced.
        """

    @abstractmethod
    def scroll(self, scroll_id: str, keep_alive: timedelta) -> ScrollPage:
        """Fetches the page following the one scroll_id was returned with."""

    @abstractmethod
    def clear_scroll(self, scroll_id: str) -> bool:
        """Releases the server side scroll context. Returns whether the backend acknowledged it."""

    @abstractmethod
    def close(self):
        pass
