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
import unittest

import pyarrow as pa
from parameterized import parameterized

from pysplit import (Identifier, PlanningException, ReadConfiguration,
                     ScanTokenSplit, SliceSplit, TokenRangeSplit)
from pysplit.client.token_range_client import TokenRange
from pysplit.read.planner.scan_token_split_planner import ScanTokenSplitPlanner
from pysplit.read.planner.slice_split_planner import SliceSplitPlanner
from pysplit.read.planner.token_range_split_planner import \
    TokenRangeSplitPlanner
from pysplit.tests.fake_clients import (ClientFactory, FakeScanTokenClient,
                                        FakeSearchClient,
                                        FakeTokenRangeClient, partition_token)


class PlannerTest(unittest.TestCase):

    def setUp(self):
        self.schema = pa.schema([pa.field('id', pa.int64(), nullable=False), ('name', pa.string())])
        self.rows = [{'id': i, 'name': f'name-{i}'} for i in range(100)]

    def _config(self, factory, table='ks.users', parallelism=4):
        return ReadConfiguration(
            client_factory=factory,
            table=Identifier.from_string(table),
            schema=self.schema,
            parallelism=parallelism,
        )

    @parameterized.expand([(1,), (3,), (4,), (16,)])
    def test_token_ranges_are_disjoint_and_cover_the_table(self, parallelism):
        factory = ClientFactory(FakeTokenRangeClient, {'ks.users': self.rows})
        splits = TokenRangeSplitPlanner().plan(self._config(factory, parallelism=parallelism), parallelism)

        self.assertEqual(len(splits), parallelism)
        self.assertEqual([s.split_id for s in splits], list(range(parallelism)))
        self.assertTrue(all(isinstance(s, TokenRangeSplit) for s in splits))
        for position in range(len(self.rows)):
            token = partition_token(position)
            owners = [s for s in splits if TokenRange(s.start_token, s.end_token).contains(token)]
            self.assertEqual(len(owners), 1, f"token {token} owned by {owners}")

    @parameterized.expand([(1,), (5,)])
    def test_slice_planner_emits_exactly_desired_parallelism(self, parallelism):
        factory = ClientFactory(FakeSearchClient, {'logs': self.rows})
        splits = SliceSplitPlanner().plan(self._config(factory, table='logs'), parallelism)

        self.assertEqual(splits, [
            SliceSplit(split_id=i, slice_id=i, max_slices=parallelism) for i in range(parallelism)
        ])

    @parameterized.expand([(1,), (2,), (64,)])
    def test_scan_token_planner_ignores_desired_parallelism(self, parallelism):
        factory = ClientFactory(FakeScanTokenClient, {'users': self.rows}, tablet_rows=30)
        splits = ScanTokenSplitPlanner().plan(self._config(factory, table='users'), parallelism)

        self.assertEqual(len(splits), 4)
        self.assertTrue(all(isinstance(s, ScanTokenSplit) for s in splits))
        self.assertEqual(len({s.token for s in splits}), 4)

    def test_empty_table_yields_zero_splits(self):
        factory = ClientFactory(FakeScanTokenClient, {'users': []})
        splits = ScanTokenSplitPlanner().plan(self._config(factory, table='users'), 4)
        self.assertEqual(splits, [])

    def test_planner_closes_its_client(self):
        factory = ClientFactory(FakeTokenRangeClient, {'ks.users': self.rows})
        TokenRangeSplitPlanner().plan(self._config(factory), 4)
        self.assertEqual(len(factory.clients), 1)
        self.assertEqual(factory.clients[0].close_count, 1)

    @parameterized.expand([
        ("token_range", TokenRangeSplitPlanner(), FakeTokenRangeClient),
        ("slice", SliceSplitPlanner(), FakeSearchClient),
        ("scan_token", ScanTokenSplitPlanner(), FakeScanTokenClient),
    ])
    def test_missing_table_fails_planning(self, _, planner, client_class):
        factory = ClientFactory(client_class, {'ks.other': []})
        with self.assertRaises(PlanningException) as context:
            planner.plan(self._config(factory), 2)
        self.assertIn("ks.users", str(context.exception))
        self.assertEqual(factory.clients[0].close_count, 1)

    def test_unreachable_backend_fails_planning(self):
        factory = ClientFactory(FakeTokenRangeClient, {'ks.users': self.rows})
        factory.fail = True
        with self.assertRaises(PlanningException) as context:
            TokenRangeSplitPlanner().plan(self._config(factory), 2)
        self.assertIn("connection refused", str(context.exception))

    def test_backend_error_is_wrapped_and_client_closed(self):
        factory = ClientFactory(FakeTokenRangeClient, {'ks.users': self.rows}, fail_on={'split_token_ranges'})
        with self.assertRaises(PlanningException) as context:
            TokenRangeSplitPlanner().plan(self._config(factory), 2)
        self.assertIsNotNone(context.exception.__cause__)
        self.assertEqual(factory.clients[0].close_count, 1)

    def test_planning_client_close_failure_is_not_raised(self):
        factory = ClientFactory(FakeSearchClient, {'logs': self.rows}, fail_on={'close'})
        with self.assertLogs('pysplit.read.planner.split_planner', level='WARNING'):
            splits = SliceSplitPlanner().plan(self._config(factory, table='logs'), 2)
        self.assertEqual(len(splits), 2)

    def test_desired_parallelism_must_be_positive(self):
        factory = ClientFactory(FakeSearchClient, {'logs': self.rows})
        with self.assertRaises(ValueError):
            SliceSplitPlanner().plan(self._config(factory, table='logs'), 0)


if __name__ == '__main__':
    unittest.main()
