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
from typing import Generic, Optional, Type, TypeVar

from pysplit.common.options.config_option import ConfigOption

T = TypeVar('T')


class ConfigOptions:
    """
    Entry point for declaring options:

        batch_size = ConfigOptions.key("read.batch-size").int_type().at_least(1).default_value(1024)
        consistency = ConfigOptions.key("read.consistency").string_type().no_default_value()
    """

    @staticmethod
    def key(key: str) -> 'OptionBuilder':
        if not key:
            raise ValueError("Key must not be None or empty.")
        return ConfigOptions.OptionBuilder(key)

    class OptionBuilder:
        """Picks the value type of the option."""

        def __init__(self, key: str):
            self.key = key

        def int_type(self) -> 'ConfigOptions.TypedConfigOptionBuilder[int]':
            return ConfigOptions.TypedConfigOptionBuilder(self.key, int)

        def string_type(self) -> 'ConfigOptions.TypedConfigOptionBuilder[str]':
            return ConfigOptions.TypedConfigOptionBuilder(self.key, str)

        def duration_type(self) -> 'ConfigOptions.TypedConfigOptionBuilder[timedelta]':
            """Values like '30 s' or '1 min'; plain numbers are milliseconds."""
            return ConfigOptions.TypedConfigOptionBuilder(self.key, timedelta)

        def enum_type(self, enum_class: Type[T]) -> 'ConfigOptions.TypedConfigOptionBuilder[T]':
            if not issubclass(enum_class, Enum):
                raise ValueError("enum_class must be a subclass of Enum")
            return ConfigOptions.TypedConfigOptionBuilder(self.key, enum_class)

    class TypedConfigOptionBuilder(Generic[T]):

        def __init__(self, key: str, clazz: Type[T]):
            self.key = key
            self.clazz = clazz
            self.minimum: Optional[int] = None

        def at_least(self, minimum: int) -> 'ConfigOptions.TypedConfigOptionBuilder[T]':
            if self.clazz is not int:
                raise ValueError(f"Only int options take a lower bound, '{self.key}' is {self.clazz.__name__}")
            self.minimum = minimum
            return self

        def default_value(self, value: T) -> ConfigOption[T]:
            option = ConfigOption(self.key, self.clazz, value, self.minimum)
            option.check(value)
            return option

        def no_default_value(self) -> ConfigOption[T]:
            return ConfigOption(self.key, self.clazz, None, self.minimum)
