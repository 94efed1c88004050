# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Pattern-based checkers for the ``format`` keyword.

These are deliberately approximate: each format is a regular expression (or a
compile/parse attempt) rather than a full grammar. Unknown formats pass.
"""

import re
from typing import Callable, Dict, Optional
from urllib.parse import urlsplit


FormatChecker = Callable[[str], bool]

EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,4}$", re.IGNORECASE)

HOSTNAME_PATTERN = re.compile(
    r"^(?=.{1,255}$)[0-9A-Za-z](?:(?:[0-9A-Za-z]|-){0,61}[0-9A-Za-z])?"
    r"(?:\.[0-9A-Za-z](?:(?:[0-9A-Za-z]|-){0,61}[0-9A-Za-z])?)*\.?$"
)

DATE_TIME_PATTERN = re.compile(
    r"^[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-2][0-9]:[0-5][0-9]:[0-5][0-9](Z|[\-+][0-9]{2}:[0-5][0-9])$"
)

# from: http://stackoverflow.com/a/17871737
IPV4_PATTERN = re.compile(
    r"^((25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])\.){3,3}(25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])$"
)

# from: http://stackoverflow.com/a/17871737
IPV6_PATTERN = re.compile(
    r"^(([0-9a-fA-F]{1,4}:){7,7}[0-9a-fA-F]{1,4}|([0-9a-fA-F]{1,4}:){1,7}:|"
    r"([0-9a-fA-F]{1,4}:){1,6}:[0-9a-fA-F]{1,4}|([0-9a-fA-F]{1,4}:){1,5}(:[0-9a-fA-F]{1,4}){1,2}|"
    r"([0-9a-fA-F]{1,4}:){1,4}(:[0-9a-fA-F]{1,4}){1,3}|([0-9a-fA-F]{1,4}:){1,3}(:[0-9a-fA-F]{1,4}){1,4}|"
    r"([0-9a-fA-F]{1,4}:){1,2}(:[0-9a-fA-F]{1,4}){1,5}|[0-9a-fA-F]{1,4}:((:[0-9a-fA-F]{1,4}){1,6})|"
    r":((:[0-9a-fA-F]{1,4}){1,7}|:)|fe80:(:[0-9a-fA-F]{0,4}){0,4}%[0-9a-zA-Z]{1,}|"
    r"::(ffff(:0{1,4}){0,1}:){0,1}((25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9]).){3,3}"
    r"(25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])|([0-9a-fA-F]{1,4}:){1,4}:)$"
)

UUID_PATTERN = re.compile(r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$")

# RFC 3986 reserved + unreserved characters and percent escapes
_URI_CHARACTERS = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*$")
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _matches(pattern: "re.Pattern") -> FormatChecker:
    def _check(value: str) -> bool:
        return pattern.match(value) is not None
    return _check


def is_regex(value: str) -> bool:
    try:
        re.compile(value)
    except re.error:
        return False
    return True


def is_uri(value: str) -> bool:
    if not _URI_CHARACTERS.match(value) or _BAD_PERCENT_ESCAPE.search(value):
        return False
    try:
        # .port raises on a malformed port, urlsplit on malformed IPv6 hosts
        urlsplit(value).port
    except ValueError:
        return False
    return True


FORMAT_CHECKERS: Dict[str, FormatChecker] = {
    "date-time": _matches(DATE_TIME_PATTERN),
    "email": _matches(EMAIL_PATTERN),
    "hostname": _matches(HOSTNAME_PATTERN),
    "ipv4": _matches(IPV4_PATTERN),
    "ipv6": _matches(IPV6_PATTERN),
    "regex": is_regex,
    "uri": is_uri,
    "uuid": _matches(UUID_PATTERN),
}


def get_format_checker(format_name: Optional[str]) -> Optional[FormatChecker]:
    """Return the checker for a format tag, or None when the tag is unknown."""
    if format_name is None:
        return None
    return FORMAT_CHECKERS.get(format_name)


def check_format(format_name: Optional[str], value: str) -> bool:
    """Check a string against a format tag. Unknown or absent tags always pass."""
    checker = get_format_checker(format_name)
    if checker is None:
        return True
    return checker(value)
