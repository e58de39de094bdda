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

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Identifier:
    """Names the table, index or keyspace-qualified table a read targets."""

    database: Optional[str]
    object: str

    @classmethod
    def create(cls, database: Optional[str], object: str) -> "Identifier":
        return cls(database, object)

    @classmethod
    def from_string(cls, full_name: str) -> "Identifier":
        if not full_name:
            raise ValueError("Identifier must not be empty")
        parts = full_name.split(".")
        if len(parts) == 1:
            return cls(None, parts[0])
        elif len(parts) == 2:
            return cls(parts[0], parts[1])
        else:
            raise ValueError("Invalid identifier format: {}".format(full_name))

    def get_full_name(self) -> str:
        if self.database:
            return "{}.{}".format(self.database, self.object)
        return self.object

    def get_database_name(self) -> Optional[str]:
        return self.database

    def get_object_name(self) -> str:
        return self.object

    def __str__(self) -> str:
        return self.get_full_name()
