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
import threading
import unittest

from pysplit import IllegalStateException, LifecycleState
from pysplit.read.lifecycle import SplitLifecycle


class LifecycleTest(unittest.TestCase):

    def test_normal_path(self):
        lifecycle = SplitLifecycle(0)
        lifecycle.transition(LifecycleState.OPENING)
        lifecycle.transition(LifecycleState.READY)
        for _ in range(3):
            lifecycle.transition(LifecycleState.ADVANCING)
            lifecycle.transition(LifecycleState.READY)
        lifecycle.transition(LifecycleState.ADVANCING)
        lifecycle.transition(LifecycleState.EXHAUSTED)
        self.assertTrue(lifecycle.close())
        self.assertEqual(lifecycle.state, LifecycleState.CLOSED)
        self.assertEqual(lifecycle.history[-3:],
                         [LifecycleState.ADVANCING, LifecycleState.EXHAUSTED, LifecycleState.CLOSED])

    def test_closed_is_terminal(self):
        lifecycle = SplitLifecycle(0)
        self.assertTrue(lifecycle.close())
        self.assertFalse(lifecycle.close())
        for state in LifecycleState:
            with self.assertRaises(IllegalStateException):
                lifecycle.transition(state)

    def test_closed_reachable_from_every_state(self):
        paths = {
            LifecycleState.CREATED: [],
            LifecycleState.OPENING: [LifecycleState.OPENING],
            LifecycleState.READY: [LifecycleState.OPENING, LifecycleState.READY],
            LifecycleState.ADVANCING: [LifecycleState.OPENING, LifecycleState.READY, LifecycleState.ADVANCING],
            LifecycleState.EXHAUSTED: [LifecycleState.OPENING, LifecycleState.READY, LifecycleState.ADVANCING,
                                       LifecycleState.EXHAUSTED],
        }
        for state, path in paths.items():
            lifecycle = SplitLifecycle(0)
            for target in path:
                lifecycle.transition(target)
            self.assertEqual(lifecycle.state, state)
            self.assertTrue(lifecycle.close())
            self.assertTrue(lifecycle.is_closed())

    def test_illegal_transition(self):
        lifecycle = SplitLifecycle(7)
        with self.assertRaises(IllegalStateException) as context:
            lifecycle.transition(LifecycleState.ADVANCING)
        self.assertIn("Split 7", str(context.exception))

    def test_try_transition_loses_against_close(self):
        lifecycle = SplitLifecycle(0)
        lifecycle.transition(LifecycleState.OPENING)
        lifecycle.transition(LifecycleState.READY)
        lifecycle.transition(LifecycleState.ADVANCING)
        lifecycle.close()
        self.assertFalse(lifecycle.try_transition(LifecycleState.ADVANCING, LifecycleState.READY))
        self.assertEqual(lifecycle.state, LifecycleState.CLOSED)

    def test_concurrent_close_wins_once(self):
        lifecycle = SplitLifecycle(0)
        results = []
        barrier = threading.Barrier(8)

        def close():
            barrier.wait()
            results.append(lifecycle.close())

        threads = [threading.Thread(target=close) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(results.count(True), 1)


if __name__ == '__main__':
    unittest.main()
