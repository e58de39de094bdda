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
import ray

from pysplit import slice_scroll_source, token_range_source
from pysplit.read.ray_datasource import SplitDatasource
from pysplit.tests.fake_clients import (ClientFactory, FakeSearchClient,
                                        FakeTokenRangeClient)


class RayDataTest(unittest.TestCase):
    """Tests for Ray Data integration of split sources."""

    @classmethod
    def setUpClass(cls):
        if not ray.is_initialized():
            ray.init(ignore_reinit_error=True, num_cpus=2)

    @classmethod
    def tearDownClass(cls):
        try:
            if ray.is_initialized():
                ray.shutdown()
        except Exception:
            pass

    def setUp(self):
        self.schema = pa.schema([
            ('id', pa.int64()),
            ('name', pa.string()),
        ])
        self.rows = [{'id': i, 'name': f'name-{i}'} for i in range(200)]

    def _builder(self, parallelism):
        factory = ClientFactory(FakeTokenRangeClient, {'ks.users': self.rows})
        return token_range_source().new_read_builder(factory, 'ks.users') \
            .with_schema(self.schema) \
            .with_parallelism(parallelism)

    def test_basic_ray_data_read(self):
        builder = self._builder(4)
        splits = builder.new_scan().plan().splits()
        ray_dataset = builder.new_read().to_ray(splits)

        self.assertIsNotNone(ray_dataset, "Ray dataset should not be None")
        self.assertEqual(ray_dataset.count(), 200, "Should have 200 rows")

        df = ray_dataset.to_pandas().sort_values('id').reset_index(drop=True)
        self.assertEqual(df['id'].tolist(), list(range(200)))
        self.assertEqual(df['name'].tolist(), [f'name-{i}' for i in range(200)])

    def test_ray_data_read_with_num_blocks(self):
        builder = self._builder(8)
        splits = builder.new_scan().plan().splits()
        ray_dataset = builder.new_read().to_ray(splits, override_num_blocks=2)
        self.assertEqual(ray_dataset.count(), 200)
        self.assertEqual(sorted(ray_dataset.to_pandas()['id'].tolist()), list(range(200)))

    def test_ray_data_read_with_filter(self):
        builder = self._builder(4)
        builder.with_query('name=name-7')
        splits = builder.new_scan().plan().splits()
        df = builder.new_read().to_ray(splits).to_pandas()
        self.assertEqual(df['id'].tolist(), [7])

    def test_ray_data_read_sliced_scroll(self):
        docs = [{'id': i, 'name': f'doc-{i}'} for i in range(60)]
        factory = ClientFactory(FakeSearchClient, {'logs': docs})
        builder = slice_scroll_source().new_read_builder(factory, 'logs') \
            .with_schema(self.schema) \
            .with_parallelism(3) \
            .with_batch_size(7)
        splits = builder.new_scan().plan().splits()
        ray_dataset = builder.new_read().to_ray(splits)
        self.assertEqual(sorted(ray_dataset.to_pandas()['id'].tolist()), list(range(60)))

    def test_ray_data_read_empty_plan(self):
        builder = self._builder(4)
        ray_dataset = builder.new_read().to_ray([])
        self.assertEqual(ray_dataset.count(), 0)
        self.assertEqual(ray_dataset.schema().names, ['id', 'name'])

    def test_splits_are_distributed_round_robin(self):
        builder = self._builder(5)
        splits = builder.new_scan().plan().splits()
        chunks = SplitDatasource._distribute_splits_into_equal_chunks(splits, 2)
        self.assertEqual([[s.split_id for s in chunk] for chunk in chunks], [[0, 2, 4], [1, 3]])

        datasource = SplitDatasource(builder.new_read(), splits)
        self.assertIn('token-range', datasource.get_name())
        self.assertIsNone(datasource.estimate_inmemory_data_size())
        self.assertEqual(len(datasource.get_read_tasks(10)), 5)
        self.assertEqual(SplitDatasource(builder.new_read(), []).estimate_inmemory_data_size(), 0)


if __name__ == '__main__':
    unittest.main()
