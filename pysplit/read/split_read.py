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
import time
from typing import Any, Callable, Iterator, Optional

from pysplit.common.exceptions import (ConversionException,
                                       IllegalStateException, OpenException,
                                       ReadException, SplitException)
from pysplit.common.read_options import ConversionErrorPolicy, ReadOptions
from pysplit.read.converter import MappingRowConverter, RowConverter
from pysplit.read.cursor.record_cursor import CursorContext, RecordCursor
from pysplit.read.lifecycle import LifecycleState, SplitLifecycle
from pysplit.read.listener import LoggingReadListener, ReadListener
from pysplit.read.metrics import ReadMetrics
from pysplit.read.read_config import ReadConfiguration
from pysplit.read.split import Split

logger = logging.getLogger(__name__)


class SplitRead:
    """
    Drives the lifecycle of one split on one worker: open, pull records, close.

    Records can be pulled (reached_end / next_record), iterated, or pushed to a
    collector with run. Whatever way the split ends, by exhaustion, failure or
    cancel(), the cursor's resources are released by the single transition into
    CLOSED.
    """

    def __init__(self,
                 split: Split,
                 config: ReadConfiguration,
                 cursor: RecordCursor,
                 converter: Optional[RowConverter] = None,
                 listener: Optional[ReadListener] = None):
        self.split = split
        self.config = config
        self.metrics = ReadMetrics(split.split_id)
        self._cursor = cursor
        self._converter = converter or MappingRowConverter(config.schema)
        self._listener = listener or LoggingReadListener()
        self._lifecycle = SplitLifecycle(split.split_id)
        self._context: Optional[CursorContext] = None
        self._next_row: Optional[tuple] = None
        self._has_next = False
        self._cancelled = False
        self._error_policy = config.options.get(ReadOptions.CONVERSION_ERROR_POLICY)
        self._max_skipped = config.options.get(ReadOptions.CONVERSION_MAX_SKIPPED_RECORDS)

    @property
    def state(self) -> LifecycleState:
        return self._lifecycle.state

    @property
    def lifecycle(self) -> SplitLifecycle:
        return self._lifecycle

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def open(self) -> 'SplitRead':
        self._lifecycle.transition(LifecycleState.OPENING)
        try:
            self._context = self._cursor.create_context(self.split, self.config)
            self._cursor.open_context(self._context)
        except SplitException as e:
            self._fail(e)
            raise
        except Exception as e:
            error = OpenException(self.split.split_id, f"{type(e).__name__}: {e}")
            self._fail(error)
            raise error from e

        if not self._lifecycle.try_transition(LifecycleState.OPENING, LifecycleState.READY):
            # cancelled while opening, release what open acquired after the cancel
            self._cursor.close(self._context)
            self._drain_cleanup_errors()
            return self

        self.metrics.opened_at = time.time()
        self._listener.on_open(self.split)
        return self

    def reached_end(self) -> bool:
        if self._has_next:
            return False
        self._fetch_next()
        return not self._has_next

    def next_record(self) -> Optional[tuple]:
        """Returns the next row, or None once the split has reached its end."""
        if self.reached_end():
            return None
        row, self._next_row, self._has_next = self._next_row, None, False
        return row

    def run(self, collector: Callable[[tuple], Any]) -> int:
        """Pushes every row of the split to collector and closes the split. Returns the row count."""
        count = 0
        for row in self:
            collector(row)
            count += 1
        return count

    def cancel(self):
        """
        Stops the split from any state and any thread. No further advance is issued and
        a record still in flight is dropped.
        """
        self._cancelled = True
        if not self._lifecycle.is_closed():
            logger.info(f"Cancelling split {self.split.split_id} in state {self.state.name}")
        self.close()

    def close(self):
        if not self._lifecycle.close():
            return
        self._next_row, self._has_next = None, False
        if self._context is not None:
            self._cursor.close(self._context)
            self._drain_cleanup_errors()
        self.metrics.closed_at = time.time()
        self._listener.on_close(self.split, self.metrics)

    def __iter__(self) -> Iterator[tuple]:
        if self.state is LifecycleState.CREATED:
            self.open()
        try:
            while not self.reached_end():
                yield self.next_record()
        finally:
            self.close()

    def __enter__(self) -> 'SplitRead':
        if self.state is LifecycleState.CREATED:
            self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _fetch_next(self):
        while True:
            if not self._lifecycle.try_transition(LifecycleState.READY, LifecycleState.ADVANCING):
                state = self.state
                if state in (LifecycleState.EXHAUSTED, LifecycleState.CLOSED):
                    return
                raise IllegalStateException(
                    f"Split {self.split.split_id} cannot advance in state {state.name}")

            try:
                raw = self._cursor.advance(self._context)
            except Exception as e:
                if self._lifecycle.is_closed() and self._cancelled:
                    logger.debug(f"Split {self.split.split_id} advance interrupted by cancel: {e}")
                    self._drain_cleanup_errors()
                    return
                error = e if isinstance(e, SplitException) else ReadException(
                    self.split.split_id, f"{type(e).__name__}: {e}")
                self._fail(error)
                if error is e:
                    raise
                raise error from e

            if self._lifecycle.is_closed():
                # a close during advance may have been completed by the cursor afterwards
                self._drain_cleanup_errors()
                return

            if raw is None:
                self._lifecycle.try_transition(LifecycleState.ADVANCING, LifecycleState.EXHAUSTED)
                return

            row = self._convert(raw)
            if row is None:
                if self._lifecycle.try_transition(LifecycleState.ADVANCING, LifecycleState.READY):
                    continue
                return

            if self._lifecycle.try_transition(LifecycleState.ADVANCING, LifecycleState.READY):
                self.metrics.records_read += 1
                self._listener.on_record(self.split)
                self._next_row, self._has_next = row, True
            return

    def _convert(self, raw: Any) -> Optional[tuple]:
        """Converts a record; None means the record was skipped."""
        try:
            return self._converter.to_internal(raw)
        except Exception as e:
            reason = e.reason if isinstance(e, SplitException) else f"{type(e).__name__}: {e}"
            error = ConversionException(reason, self.split.split_id, getattr(e, 'field', None))
            error.__cause__ = e

        if self._error_policy is ConversionErrorPolicy.SKIP and (
                self._max_skipped < 0 or self.metrics.records_skipped < self._max_skipped):
            self.metrics.records_skipped += 1
            self._listener.on_skip(self.split, error)
            return None

        if self._error_policy is ConversionErrorPolicy.SKIP:
            logger.warning(
                f"Split {self.split.split_id} skipped {self.metrics.records_skipped} records, "
                f"more than read.conversion.max-skipped-records allows")
        self._fail(error)
        raise error

    def _fail(self, error: SplitException):
        self.metrics.errors += 1
        self._listener.on_error(self.split, error)
        self.close()

    def _drain_cleanup_errors(self):
        for error in self._context.drain_cleanup_errors():
            self.metrics.cleanup_errors += 1
            self._listener.on_cleanup_error(self.split, error)
