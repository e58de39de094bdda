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
from collections import namedtuple

import pyarrow as pa

from pysplit import ConversionException, MappingRowConverter


class MappingRowConverterTest(unittest.TestCase):

    def setUp(self):
        self.schema = pa.schema([
            pa.field('id', pa.int64(), nullable=False),
            ('name', pa.string()),
            ('score', pa.float64()),
        ])
        self.converter = MappingRowConverter(self.schema)

    def test_mapping_in_schema_order(self):
        row = self.converter.to_internal({'score': 1.5, 'name': 'a', 'id': 1, 'ignored': True})
        self.assertEqual(row, (1, 'a', 1.5))

    def test_row_object_attributes(self):
        Row = namedtuple('Row', ['id', 'name', 'score'])
        self.assertEqual(self.converter.to_internal(Row(2, 'b', None)), (2, 'b', None))

    def test_missing_nullable_field_is_null(self):
        self.assertEqual(self.converter.to_internal({'id': 3}), (3, None, None))

    def test_null_in_non_nullable_field(self):
        with self.assertRaises(ConversionException) as context:
            self.converter.to_internal({'id': None, 'name': 'x'})
        self.assertEqual(context.exception.field, 'id')
        self.assertEqual(context.exception.operation, 'convert')

    def test_type_mismatch(self):
        with self.assertRaises(ConversionException) as context:
            self.converter.to_internal({'id': 'not-a-number'})
        self.assertEqual(context.exception.field, 'id')
        self.assertIsNotNone(context.exception.__cause__)


if __name__ == '__main__':
    unittest.main()
