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

"""Diagnostic records produced by the validation engine."""

from __future__ import annotations

from dataclasses import dataclass

from ..models.schema import Schema
from ..utils.json_pointer import JsonPointer


@dataclass(frozen=True)
class ValidationError:
    """One failed constraint: the schema node that failed, where, and why."""

    schema: Schema
    path: JsonPointer
    message: str

    @property
    def pointer(self) -> str:
        return self.schema.pointer

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


Diagnostic = ValidationError
