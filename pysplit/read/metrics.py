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

import time
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class ReadMetrics:
    """Counters of one split lifecycle. Never shared between splits."""
    split_id: int
    records_read: int = 0
    records_skipped: int = 0
    errors: int = 0
    cleanup_errors: int = 0
    created_at: float = field(default_factory=time.time)
    opened_at: Optional[float] = None
    closed_at: Optional[float] = None

    def open_seconds(self) -> Optional[float]:
        if self.opened_at is None:
            return None
        return self.opened_at - self.created_at

    def elapsed_seconds(self) -> Optional[float]:
        if self.closed_at is None:
            return None
        return self.closed_at - self.created_at

    def to_dict(self) -> Dict[str, float]:
        elapsed = self.elapsed_seconds()
        return {
            'split_id': self.split_id,
            'records_read': self.records_read,
            'records_skipped': self.records_skipped,
            'errors': self.errors,
            'cleanup_errors': self.cleanup_errors,
            'elapsed': elapsed if elapsed is not None else 0,
            'throughput': self.records_read / elapsed if elapsed else 0,
        }
