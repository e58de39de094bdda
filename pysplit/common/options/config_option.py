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
import dataclasses
from dataclasses import dataclass
from typing import Any, Generic, Optional, Type, TypeVar

T = TypeVar('T')


@dataclass(frozen=True)
class ConfigOption(Generic[T]):
    """
    One typed read option: the key it is looked up by, the type raw values are
    converted to, its default and, for numeric options, the smallest accepted value.

    Built through ConfigOptions.key(...), never mutated afterwards.
    """
    name: str
    clazz: Type[T]
    default: Optional[T] = None
    minimum: Optional[int] = None
    description: str = ""

    def __post_init__(self):
        if not self.name:
            raise ValueError("Option key must not be empty.")

    def key(self) -> str:
        return self.name

    def get_clazz(self) -> Type[T]:
        return self.clazz

    def has_default_value(self) -> bool:
        return self.default is not None

    def default_value(self) -> Optional[T]:
        return self.default

    def with_description(self, description: str) -> 'ConfigOption[T]':
        return dataclasses.replace(self, description=description)

    def check(self, value: Any) -> Any:
        """Returns value unchanged, or raises ValueError when it is out of range."""
        if self.minimum is not None and value is not None and value < self.minimum:
            raise ValueError(f"Option '{self.name}' must be at least {self.minimum}, got {value}")
        return value

    def __str__(self) -> str:
        return f"key: '{self.name}'; default_value: {self.default}"
