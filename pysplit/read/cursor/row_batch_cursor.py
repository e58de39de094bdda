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
from typing import Any, Iterator, Optional

from pysplit.client.scan_token_client import RowScanner, ScanTokenClient
from pysplit.read.cursor.record_cursor import CursorContext, RecordCursor
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import ScanTokenSplit

logger = logging.getLogger(__name__)

_END_OF_BATCH = object()


class RowBatchContext(CursorContext):

    def __init__(self, split: ScanTokenSplit, config: ReadConfiguration):
        super().__init__(split, config)
        self.client: Optional[ScanTokenClient] = None
        self.scanner: Optional[RowScanner] = None
        self.batch: Optional[Iterator[Any]] = None
        self.batches_fetched = 0


class RowBatchCursor(RecordCursor):
    """
    Streams the rows of a scanner rebuilt from the split's scan token. When the current
    batch is used up the scanner is asked whether more rows exist; exactly one batch
    is fetched per positive answer.
    """

    def create_context(self, split: ScanTokenSplit, config: ReadConfiguration) -> RowBatchContext:
        return RowBatchContext(split, config)

    def _open(self, context: RowBatchContext):
        logger.info(f"Execute open: split {context.split.split_id}")
        context.scanner = context.client.open_scanner(context.split.token)

    def _next(self, context: RowBatchContext) -> Optional[Any]:
        while True:
            if context.batch is not None:
                row = next(context.batch, _END_OF_BATCH)
                if row is None:
                    # None ends a split, a null row inside a batch must not
                    logger.debug(f"Dropping null row of split {context.split.split_id}")
                    continue
                if row is not _END_OF_BATCH:
                    return row
                context.batch = None
            # empty batches loop back to the has_more_rows check
            if not context.scanner.has_more_rows():
                return None
            context.batch = iter(context.scanner.next_rows())
            context.batches_fetched += 1

    def _close(self, context: RowBatchContext):
        context.batch = None
        if context.scanner is not None:
            scanner, context.scanner = context.scanner, None
            self._release(context, "scanner", scanner.close)
