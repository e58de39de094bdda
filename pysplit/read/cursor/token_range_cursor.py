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
from typing import Any, Deque, Optional

from pysplit.client.token_range_client import TokenRange, TokenRangeClient
from pysplit.read.cursor.record_cursor import CursorContext, RecordCursor
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import TokenRangeSplit

logger = logging.getLogger(__name__)


class TokenRangeContext(CursorContext):

    def __init__(self, split: TokenRangeSplit, config: ReadConfiguration):
        super().__init__(split, config)
        self.client: Optional[TokenRangeClient] = None
        self.buffer: Deque[Any] = collections.deque()


class TokenRangeCursor(RecordCursor):
    """
    Runs one query over the split's token range when the split opens and serves
    advance from the materialized result, which is bounded by the split size.
    """

    def create_context(self, split: TokenRangeSplit, config: ReadConfiguration) -> TokenRangeContext:
        return TokenRangeContext(split, config)

    def _open(self, context: TokenRangeContext):
        split: TokenRangeSplit = context.split
        config = context.config
        logger.info(f"split: {split.split_id}, token range ({split.start_token}, {split.end_token}]")
        rows = context.client.query(
            config.table,
            config.columns,
            TokenRange(split.start_token, split.end_token),
            config.query,
            config.consistency,
            config.batch_size,
        )
        context.buffer.extend(rows)

    def _next(self, context: TokenRangeContext) -> Optional[Any]:
        if not context.buffer:
            return None
        return context.buffer.popleft()

    def _close(self, context: TokenRangeContext):
        context.buffer.clear()
