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
import threading
from enum import Enum
from typing import Deque, Dict, FrozenSet, List

from pysplit.common.exceptions import IllegalStateException


class LifecycleState(Enum):
    CREATED = "created"
    OPENING = "opening"
    READY = "ready"
    ADVANCING = "advancing"
    EXHAUSTED = "exhausted"
    CLOSED = "closed"


_TRANSITIONS: Dict[LifecycleState, FrozenSet[LifecycleState]] = {
    LifecycleState.CREATED: frozenset({LifecycleState.OPENING, LifecycleState.CLOSED}),
    LifecycleState.OPENING: frozenset({LifecycleState.READY, LifecycleState.CLOSED}),
    LifecycleState.READY: frozenset({LifecycleState.ADVANCING, LifecycleState.CLOSED}),
    LifecycleState.ADVANCING: frozenset({LifecycleState.READY, LifecycleState.EXHAUSTED, LifecycleState.CLOSED}),
    LifecycleState.EXHAUSTED: frozenset({LifecycleState.CLOSED}),
    LifecycleState.CLOSED: frozenset(),
}


class SplitLifecycle:
    """
    State machine of one split on one worker.

    CREATED -> OPENING -> READY -> (ADVANCING <-> READY) -> EXHAUSTED -> CLOSED, and
    CLOSED from every other state. CLOSED is terminal: close() moves into it exactly
    once, which is what makes releasing the split's resources run exactly once.
    """

    HISTORY_SIZE = 32

    def __init__(self, split_id: int):
        self.split_id = split_id
        self._state = LifecycleState.CREATED
        self._history: Deque[LifecycleState] = collections.deque(
            [LifecycleState.CREATED], maxlen=self.HISTORY_SIZE)
        self._lock = threading.Lock()

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def history(self) -> List[LifecycleState]:
        """The most recent transitions, oldest first."""
        with self._lock:
            return list(self._history)

    def is_closed(self) -> bool:
        return self._state is LifecycleState.CLOSED

    def transition(self, target: LifecycleState):
        with self._lock:
            if target not in _TRANSITIONS[self._state]:
                raise IllegalStateException(
                    f"Split {self.split_id} cannot move from {self._state.name} to {target.name}")
            self._set(target)

    def try_transition(self, expected: LifecycleState, target: LifecycleState) -> bool:
        """
        Moves to target only if the current state is expected. Returns False when another
        caller changed the state first, e.g. a cancellation closed the split.
        """
        with self._lock:
            if self._state is not expected:
                return False
            if target not in _TRANSITIONS[expected]:
                raise IllegalStateException(
                    f"Split {self.split_id} cannot move from {expected.name} to {target.name}")
            self._set(target)
            return True

    def close(self) -> bool:
        """Enters CLOSED. Returns True only for the call that actually closed the lifecycle."""
        with self._lock:
            if self._state is LifecycleState.CLOSED:
                return False
            self._set(LifecycleState.CLOSED)
            return True

    def _set(self, target: LifecycleState):
        self._state = target
        self._history.append(target)
