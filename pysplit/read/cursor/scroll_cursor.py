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

import collections
import logging
import threading
from typing import Any, Deque, Optional

from pysplit.client.search_client import ScrollPage, SearchClient
from pysplit.read.cursor.record_cursor import CursorContext, RecordCursor
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import SliceSplit

logger = logging.getLogger(__name__)


class ScrollContext(CursorContext):

    def __init__(self, split: SliceSplit, config: ReadConfiguration):
        super().__init__(split, config)
        self.client: Optional[SearchClient] = None
        self.scroll_id: Optional[str] = None
        self.page: Deque[Any] = collections.deque()
        self.started = False
        self.exhausted = False
        self.fetching = False
        self.lock = threading.Lock()


class ScrollCursor(RecordCursor):
    """
    Pages through one slice of a scrolled search. The initial search is issued by the
    first advance, continuation pages only once the current page is used up. A page
    without hits ends the split and releases the scroll context.
    """

    def create_context(self, split: SliceSplit, config: ReadConfiguration) -> ScrollContext:
        return ScrollContext(split, config)

    def _open(self, context: ScrollContext):
        split: SliceSplit = context.split
        logger.info(f"split: {split.split_id}, slice {split.slice_id} of {split.max_slices}")

    def _next(self, context: ScrollContext) -> Optional[Any]:
        while not context.page:
            if context.exhausted:
                return None
            page = self._guarded_fetch(context)
            if page is None:
                return None
            context.scroll_id = page.scroll_id
            if not page.hits:
                context.exhausted = True
                self._clear_scroll(context)
                return None
            context.page.extend(page.hits)
        return context.page.popleft()

    def _guarded_fetch(self, context: ScrollContext) -> Optional[ScrollPage]:
        """
        Runs one search or scroll request. A close that arrives while the request is in
        flight is completed here, once the request has returned the scroll id to clear.
        Returns None when the context was closed.
        """
        with context.lock:
            if context.end_of_split:
                return None
            context.fetching = True
        try:
            page = self._fetch_page(context)
        except Exception:
            if self._finish_fetch(context):
                super().close(context)
            raise
        if self._finish_fetch(context):
            context.scroll_id = page.scroll_id
            super().close(context)
            return None
        return page

    @staticmethod
    def _finish_fetch(context: ScrollContext) -> bool:
        """Ends the in-flight request, returns whether the context was closed meanwhile."""
        with context.lock:
            context.fetching = False
            return context.end_of_split

    def _fetch_page(self, context: ScrollContext) -> ScrollPage:
        config = context.config
        keep_alive = config.scroll_keep_alive
        if not context.started:
            context.started = True
            split: SliceSplit = context.split
            sliced = split.max_slices > 1
            return context.client.search(
                config.table.get_full_name(),
                config.query,
                split.slice_id if sliced else None,
                split.max_slices if sliced else None,
                config.batch_size,
                keep_alive,
            )
        return context.client.scroll(context.scroll_id, keep_alive)

    def _clear_scroll(self, context: ScrollContext):
        if context.scroll_id is None:
            return
        scroll_id, context.scroll_id = context.scroll_id, None
        succeeded = context.client.clear_scroll(scroll_id)
        logger.info(f"Clear scroll response: {succeeded}")

    def _close(self, context: ScrollContext):
        context.page.clear()
        context.exhausted = True
        if context.scroll_id is not None and context.client is not None:
            self._release(context, "scroll context", lambda: self._clear_scroll(context))

    def close(self, context: ScrollContext):
        with context.lock:
            if context.fetching:
                # the fetching thread releases scroll and client once its request returns
                context.end_of_split = True
                context.page.clear()
                return
        super().close(context)
