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

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional

import pyarrow

from pysplit.common.exceptions import ConversionException


class RowConverter(ABC):
    """
    Maps one raw backend record to an internal row, a tuple ordered by the read schema.
    """

    @abstractmethod
    def to_internal(self, raw: Any) -> tuple:
        """
        Raises ConversionException on a type mismatch or a null in a non-nullable field.
        """


class MappingRowConverter(RowConverter):
    """
    Reads the schema's fields by name from a mapping, e.g. a search hit source, or from
    the attributes of a row object, and casts each value to its arrow field type.
    """

    def __init__(self, schema: pyarrow.Schema):
        self.schema = schema

    def to_internal(self, raw: Any) -> tuple:
        values = []
        for field in self.schema:
            value = self._field_value(raw, field.name)
            if value is None:
                if not field.nullable:
                    raise ConversionException(
                        f"Field '{field.name}' is not nullable but the record has no value for it",
                        field=field.name)
                values.append(None)
                continue
            values.append(self._cast(field, value))
        return tuple(values)

    @staticmethod
    def _field_value(raw: Any, name: str) -> Optional[Any]:
        if isinstance(raw, Mapping):
            return raw.get(name)
        return getattr(raw, name, None)

    @staticmethod
    def _cast(field: pyarrow.Field, value: Any) -> Any:
        try:
            return pyarrow.scalar(value, type=field.type).as_py()
        except (pyarrow.ArrowException, TypeError, ValueError) as e:
            raise ConversionException(
                f"Cannot convert value {value!r} of field '{field.name}' to {field.type}: {e}",
                field=field.name) from e
