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
import re

_DURATION_PATTERN = re.compile(r'^(\d+)\s*([a-z]*)$')

_MILLIS_PER_UNIT = {
    label: millis for labels, millis in (
        (('', 'ms', 'milli', 'millis', 'millisecond', 'milliseconds'), 1),
        (('s', 'sec', 'secs', 'second', 'seconds'), 1000),
        (('m', 'min', 'mins', 'minute', 'minutes'), 60 * 1000),
        (('h', 'hour', 'hours'), 60 * 60 * 1000),
        (('d', 'day', 'days'), 24 * 60 * 60 * 1000))
    for label in labels
}


def parse_duration(text: str) -> int:
    """Parses a duration such as '30 s', '1min' or '250' into milliseconds."""
    if text is None:
        raise ValueError("duration cannot be None")

    match = _DURATION_PATTERN.match(text.strip().lower())
    if not match:
        raise ValueError(f"'{text}' is not a duration, expected a number followed by an optional unit")

    number, unit = match.groups()
    if unit not in _MILLIS_PER_UNIT:
        raise ValueError(
            f"Time interval unit label '{unit}' does not match any of the recognized units: "
            f"d, h, min, s, ms")
    return int(number) * _MILLIS_PER_UNIT[unit]
