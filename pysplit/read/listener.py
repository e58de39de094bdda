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
"""
Observability hooks of the split lifecycle.

A SplitRead calls its listener when the split opens, per emitted or skipped record,
on failures, on cleanup failures and when the split closes. Listeners must not raise.
"""

import logging
import threading
from collections import defaultdict
from typing import Any, Dict

from pysplit.common.exceptions import CleanupException, ConversionException, SplitException
from pysplit.read.metrics import ReadMetrics
from pysplit.read.split import Split

logger = logging.getLogger(__name__)


class ReadListener:
    """Does nothing. Subclasses override the events they care about."""

    def on_open(self, split: Split):
        pass

    def on_record(self, split: Split):
        pass

    def on_skip(self, split: Split, error: ConversionException):
        pass

    def on_error(self, split: Split, error: SplitException):
        pass

    def on_cleanup_error(self, split: Split, error: CleanupException):
        pass

    def on_close(self, split: Split, metrics: ReadMetrics):
        pass


class LoggingReadListener(ReadListener):

    def on_open(self, split: Split):
        logger.info(f"Opened split {split.split_id}: {split}")

    def on_skip(self, split: Split, error: ConversionException):
        logger.debug(f"Skipped record of split {split.split_id}: {error.reason}")

    def on_error(self, split: Split, error: SplitException):
        logger.error(f"{error}", exc_info=error)

    def on_cleanup_error(self, split: Split, error: CleanupException):
        logger.warning(f"{error}")

    def on_close(self, split: Split, metrics: ReadMetrics):
        logger.info(
            f"Closed split {split.split_id}: {metrics.records_read} records read, "
            f"{metrics.records_skipped} skipped")


class MetricsReadListener(LoggingReadListener):
    """
    Aggregates the metrics of every split it observes.

    Example:
        >>> listener = MetricsReadListener()
        >>> read_builder.with_listener(listener).new_read().to_arrow(splits)
        >>> listener.get_metrics()['records_read']
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._totals: Dict[str, int] = defaultdict(int)
        self._splits: Dict[int, ReadMetrics] = {}

    def on_open(self, split: Split):
        super().on_open(split)
        with self._lock:
            self._totals['splits_opened'] += 1

    def on_error(self, split: Split, error: SplitException):
        super().on_error(split, error)
        with self._lock:
            self._totals['splits_failed'] += 1

    def on_close(self, split: Split, metrics: ReadMetrics):
        super().on_close(split, metrics)
        with self._lock:
            self._splits[split.split_id] = metrics
            self._totals['splits_closed'] += 1
            self._totals['records_read'] += metrics.records_read
            self._totals['records_skipped'] += metrics.records_skipped
            self._totals['cleanup_errors'] += metrics.cleanup_errors

    def get_metrics(self) -> Dict[str, Any]:
        with self._lock:
            result: Dict[str, Any] = {
                key: self._totals[key] for key in
                ('splits_opened', 'splits_closed', 'splits_failed',
                 'records_read', 'records_skipped', 'cleanup_errors')
            }
            result['splits'] = {split_id: metrics.to_dict() for split_id, metrics in self._splits.items()}
        return result
