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

"""Runtime kinds of data nodes and JSON value equality."""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, FrozenSet

from ..exceptions import InvalidDataError


class DataKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def is_numeric(self) -> bool:
        return self in (DataKind.INTEGER, DataKind.NUMBER)


# JSON Schema type tag -> kinds satisfying it. "integer" is a subset of "number".
TYPE_TAGS: Dict[str, FrozenSet[DataKind]] = {
    "array": frozenset({DataKind.ARRAY}),
    "boolean": frozenset({DataKind.BOOLEAN}),
    "integer": frozenset({DataKind.INTEGER}),
    "number": frozenset({DataKind.INTEGER, DataKind.NUMBER}),
    "null": frozenset({DataKind.NULL}),
    "object": frozenset({DataKind.OBJECT}),
    "string": frozenset({DataKind.STRING}),
}


def classify(value: Any) -> DataKind:
    """Return the kind of a data node.

    Raises:
        InvalidDataError: If the value is not a JSON value.
    """
    if value is None:
        return DataKind.NULL
    # bool is a subclass of int
    if isinstance(value, bool):
        return DataKind.BOOLEAN
    if isinstance(value, int):
        return DataKind.INTEGER
    if isinstance(value, float):
        return DataKind.NUMBER
    if isinstance(value, str):
        return DataKind.STRING
    if isinstance(value, (list, tuple)):
        return DataKind.ARRAY
    if isinstance(value, Mapping):
        return DataKind.OBJECT
    raise InvalidDataError(
        f"Unsupported data node of type {type(value).__name__}: {value!r}"
    )


def json_equal(left: Any, right: Any) -> bool:
    """JSON value equality: booleans never equal numbers, 1 equals 1.0."""
    left_kind = classify(left)
    right_kind = classify(right)

    if left_kind.is_numeric and right_kind.is_numeric:
        return left == right
    if left_kind != right_kind:
        return False

    if left_kind == DataKind.ARRAY:
        return len(left) == len(right) and all(
            json_equal(a, b) for a, b in zip(left, right)
        )
    if left_kind == DataKind.OBJECT:
        if set(left.keys()) != set(right.keys()):
            return False
        return all(json_equal(left[k], right[k]) for k in left)
    return left == right


def to_json_text(value: Any) -> str:
    """Render a value for diagnostics, falling back to repr for non-JSON values."""
    try:
        return json.dumps(value, sort_keys=False, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)
