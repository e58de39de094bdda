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

import pickle
from dataclasses import dataclass


@dataclass(frozen=True)
class Split:
    """
    One independently readable partition of a read. Splits of one plan are disjoint
    and together cover everything the read selects.
    """
    split_id: int

    def to_bytes(self) -> bytes:
        return pickle.dumps(self)

    @staticmethod
    def from_bytes(data: bytes) -> 'Split':
        split = pickle.loads(data)
        if not isinstance(split, Split):
            raise TypeError(f"Expected Split, but got {type(split).__name__}")
        return split


@dataclass(frozen=True)
class TokenRangeSplit(Split):
    """Rows whose partition token is in (start_token, end_token]."""
    start_token: int
    end_token: int


@dataclass(frozen=True)
class SliceSplit(Split):
    """One hash slice of a scrolled search."""
    slice_id: int
    max_slices: int

    def __post_init__(self):
        if not 0 <= self.slice_id < self.max_slices:
            raise ValueError(f"slice_id must be in [0, {self.max_slices}), got {self.slice_id}")


@dataclass(frozen=True)
class ScanTokenSplit(Split):
    """A serialized scan token issued by the backend."""
    token: bytes
