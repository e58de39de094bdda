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
from datetime import timedelta
from enum import Enum
from typing import Any, Type

from pysplit.common.time_utils import parse_duration


class OptionsUtils:
    """Converts raw option values, usually strings from a user dict, to option types."""

    @staticmethod
    def convert_value(value: Any, target_type: Type) -> Any:
        """
        Convert a raw value to the target type of an option.

        Raises:
            ValueError: If the value cannot be read as the target type
        """
        if value is None:
            return None
        if isinstance(target_type, type) and issubclass(target_type, Enum):
            return OptionsUtils.convert_to_enum(value, target_type)
        if target_type is int:
            return OptionsUtils.convert_to_int(value)
        if target_type is timedelta:
            return OptionsUtils.convert_to_duration(value)
        if target_type is str:
            return OptionsUtils.convert_to_string(value)
        raise ValueError(f"Unsupported option type: {target_type}")

    @staticmethod
    def convert_to_string(value: Any) -> str:
        """The form values are stored in, readable back by convert_value."""
        if isinstance(value, Enum):
            return str(value.value)
        if isinstance(value, timedelta):
            return f"{int(value / timedelta(milliseconds=1))} ms"
        return str(value)

    @staticmethod
    def convert_to_int(value: Any) -> int:
        # bool is an int subclass but never a count
        if isinstance(value, bool):
            raise ValueError(f"Cannot convert {value!r} to int")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                raise ValueError(f"Cannot convert '{value}' to int") from None
        raise ValueError(f"Cannot convert {type(value).__name__} to int")

    @staticmethod
    def convert_to_duration(value: Any) -> timedelta:
        if isinstance(value, timedelta):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return timedelta(milliseconds=value)
        if isinstance(value, str):
            return timedelta(milliseconds=parse_duration(value))
        raise ValueError(f"Cannot convert {type(value).__name__} to a duration")

    @staticmethod
    def convert_to_enum(value: Any, enum_class: Type[Enum]) -> Enum:
        if isinstance(value, enum_class):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            for member in enum_class:
                if str(member.value).lower() == text or member.name.lower() == text:
                    return member
        raise ValueError(
            f"Cannot convert '{value}' to {enum_class.__name__}. "
            f"Valid values: {[member.value for member in enum_class]}")
