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

"""RFC 6901 JSON pointer helpers for ``#``-rooted schema fragments and data paths."""

from __future__ import annotations

from typing import List, Union

JsonPointer = str

ROOT_TOKEN = "#"


def escape_token(token: Union[str, int]) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return str(token).replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def join_pointer(base: JsonPointer, *tokens: Union[str, int]) -> JsonPointer:
    """Append escaped tokens to a ``#``-rooted pointer."""
    parts = [base or ROOT_TOKEN]
    parts.extend(escape_token(t) for t in tokens)
    return "/".join(parts)


def split_pointer(pointer: JsonPointer) -> List[str]:
    """Split a ``#``-rooted pointer into unescaped tokens.

    ``"#"`` and ``""`` both yield an empty list.
    """
    if pointer.startswith(ROOT_TOKEN):
        pointer = pointer[len(ROOT_TOKEN):]
    if not pointer:
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"Invalid JSON pointer: '{pointer}'")
    return [unescape_token(t) for t in pointer[1:].split("/")]
