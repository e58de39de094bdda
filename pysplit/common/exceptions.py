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

from typing import Optional


class SplitSourceException(Exception):
    """Base exception of split-based reads"""


class IllegalStateException(SplitSourceException):
    """A split lifecycle was driven through a transition it does not allow"""


class PlanningException(SplitSourceException):
    """Planning failed; the whole read is aborted before any split is assigned"""

    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"Failed to plan splits for {table}: {message}")


class SplitException(SplitSourceException):
    """Failure scoped to one split and the backend operation that raised it"""

    def __init__(self, split_id: Optional[int], operation: str, message: str):
        self.split_id = split_id
        self.operation = operation
        self.reason = message
        super().__init__(f"Split {split_id} failed during {operation}: {message}")


class OpenException(SplitException):
    """Opening a split failed, usually on authentication or connection"""

    def __init__(self, split_id: Optional[int], message: str):
        super().__init__(split_id, "open", message)


class ReadException(SplitException):
    """Pulling the next record of a split failed on backend I/O"""

    def __init__(self, split_id: Optional[int], message: str):
        super().__init__(split_id, "advance", message)


class ConversionException(SplitException):
    """A raw backend record could not be converted into an internal row"""

    def __init__(self, message: str, split_id: Optional[int] = None, field: Optional[str] = None):
        self.field = field
        super().__init__(split_id, "convert", message)


class CleanupException(SplitException):
    """Releasing the resources of a split failed. Logged, never raised to the engine"""

    def __init__(self, split_id: Optional[int], message: str):
        super().__init__(split_id, "close", message)
