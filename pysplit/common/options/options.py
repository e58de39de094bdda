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
from typing import Any, Dict, Optional

from pysplit.common.options.config_option import ConfigOption
from pysplit.common.options.options_utils import OptionsUtils


class Options:
    """
    Raw option values by key, as a user passes them to ReadBuilder.with_options.
    Values stay raw until read through get, which converts and range checks them.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data = dict(data) if data else {}

    def to_map(self) -> Dict[str, Any]:
        return self.data

    def get(self, option: ConfigOption, default=None):
        """
        Returns the value of option converted to its type, else default, else the
        option's own default.

        Raises:
            ValueError: If the stored value cannot be converted or is out of range
        """
        raw_value = self.data.get(option.key())
        if raw_value is not None:
            return option.check(OptionsUtils.convert_value(raw_value, option.get_clazz()))
        return default if default is not None else option.default_value()

    def set(self, option: ConfigOption, value):
        option.check(value)
        self.data[option.key()] = OptionsUtils.convert_to_string(value)

    def contains(self, option: ConfigOption) -> bool:
        return option.key() in self.data

    def copy(self) -> 'Options':
        return Options(self.data)

    def __eq__(self, other):
        return isinstance(other, Options) and self.data == other.data

    def __repr__(self):
        return f"Options({self.data})"
