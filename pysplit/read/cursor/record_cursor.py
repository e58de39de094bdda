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
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

from pysplit.common.exceptions import (CleanupException, OpenException,
                                       ReadException, SplitException)
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import Split

logger = logging.getLogger(__name__)


class CursorContext:
    """
    State of one opened split, threaded through open, advance and close.

    Every resource field is None until acquired and reset to None once released,
    so close works on a context whose open failed halfway and can run again.
    """

    def __init__(self, split: Split, config: ReadConfiguration):
        self.split = split
        self.config = config
        self.client = None
        self.end_of_split = False
        self.cleanup_errors: List[CleanupException] = []

    def drain_cleanup_errors(self) -> List[CleanupException]:
        errors, self.cleanup_errors = self.cleanup_errors, []
        return errors


class RecordCursor(ABC):
    """
    Reads the raw records of one split, folding the backend's pagination into advance.

    Cursors are stateless strategies; all per-split state lives in the CursorContext,
    so one cursor can serve any number of concurrent splits.
    """

    def create_context(self, split: Split, config: ReadConfiguration) -> CursorContext:
        return CursorContext(split, config)

    def open(self, split: Split, config: ReadConfiguration) -> CursorContext:
        """Creates and opens a context, closing it again when opening fails."""
        context = self.create_context(split, config)
        try:
            self.open_context(context)
        except Exception:
            self.close(context)
            raise
        return context

    def open_context(self, context: CursorContext):
        try:
            context.client = context.config.new_client()
            self._open(context)
        except SplitException:
            raise
        except Exception as e:
            raise OpenException(context.split.split_id, f"{type(e).__name__}: {e}") from e

    def advance(self, context: CursorContext) -> Optional[Any]:
        """
        Returns the next raw record, or None at the end of the split. Once None was
        returned it is returned for every later call without touching the backend.
        """
        if context.end_of_split:
            return None
        try:
            record = self._next(context)
        except SplitException:
            raise
        except Exception as e:
            raise ReadException(context.split.split_id, f"{type(e).__name__}: {e}") from e
        if record is None:
            context.end_of_split = True
        return record

    def close(self, context: CursorContext):
        """Releases what the context holds. Never raises; failures land in context.cleanup_errors."""
        context.end_of_split = True
        self._close(context)
        if context.client is not None:
            client, context.client = context.client, None
            self._release(context, "client", client.close)

    @staticmethod
    def _release(context: CursorContext, resource: str, release: Callable[[], Any]):
        try:
            release()
        except Exception as e:
            error = CleanupException(context.split.split_id, f"closing {resource} failed: {e}")
            error.__cause__ = e
            context.cleanup_errors.append(error)
            logger.warning(f"{error}")

    @abstractmethod
    def _open(self, context: CursorContext):
        """Acquires the backend resources of the split. context.client is already set."""

    @abstractmethod
    def _next(self, context: CursorContext) -> Optional[Any]:
        pass

    def _close(self, context: CursorContext):
        """Releases split resources other than the client."""
