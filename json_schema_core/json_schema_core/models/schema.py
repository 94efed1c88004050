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

"""Schema tree model.

A :class:`Schema` holds the JSON Schema keywords of one schema object. It is
plain data: construction and reference expansion mutate it, validation only
reads it. Container-valued keywords default to empty containers and the
boolean keywords default to their JSON Schema defaults, so traversal code
never has to special-case a missing keyword.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

# Attributes describing where a node lives; never overwritten by copy_from so
# that a reference node keeps its own identity after expansion.
IDENTITY_FIELDS: Tuple[str, ...] = ("parent", "uri", "fragment")


@dataclass(eq=False, repr=False)
class Schema:
    # JSON Reference; set only on a node that has not been expanded yet
    reference: Optional[str] = None

    # raw mapping the node was parsed from
    data: Any = None

    parent: Optional["Schema"] = None
    uri: str = ""
    fragment: Optional[str] = None

    # basic descriptors
    id: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    default: Any = None

    # validation: any
    all_of: List["Schema"] = field(default_factory=list)
    any_of: List["Schema"] = field(default_factory=list)
    one_of: List["Schema"] = field(default_factory=list)
    definitions: Dict[str, "Schema"] = field(default_factory=dict)
    enum: Optional[List[Any]] = None
    not_: Optional["Schema"] = None
    type: List[str] = field(default_factory=list)

    # validation: array
    additional_items: Union[bool, "Schema"] = True
    items: Union[None, "Schema", List["Schema"]] = None
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: bool = False

    # validation: number/integer
    max: Optional[Union[int, float]] = None
    max_exclusive: bool = False
    min: Optional[Union[int, float]] = None
    min_exclusive: bool = False
    multiple_of: Optional[Union[int, float]] = None

    # validation: object
    additional_properties: Union[bool, "Schema"] = True
    dependencies: Dict[str, Union[List[str], "Schema"]] = field(default_factory=dict)
    max_properties: Optional[int] = None
    min_properties: Optional[int] = None
    pattern_properties: Dict[Union[str, re.Pattern], "Schema"] = field(default_factory=dict)
    properties: Dict[str, "Schema"] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)
    strict_properties: bool = False

    # validation: string
    format: Optional[str] = None
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[Union[str, re.Pattern]] = None

    # hyperschema; carried, never evaluated
    links: List[Any] = field(default_factory=list)
    media: Optional[Dict[str, Any]] = None
    read_only: bool = False
    path_start: Optional[str] = None

    @property
    def pointer(self) -> str:
        """Stable identity of this node: document URI plus JSON pointer fragment.

        Nodes built by hand without a fragment get a per-object token so that
        two distinct nodes never share a pointer.
        """
        if self.fragment is None:
            return f"{self.uri}#<{id(self):x}>"
        return f"{self.uri}{self.fragment}"

    @property
    def is_reference(self) -> bool:
        return self.reference is not None

    def children(self) -> Iterator["Schema"]:
        """Yield every directly owned subschema."""
        yield from self.all_of
        yield from self.any_of
        yield from self.one_of
        yield from self.definitions.values()
        yield from self.pattern_properties.values()
        yield from self.properties.values()

        if self.not_ is not None:
            yield self.not_

        # either one schema (list validation) or several (tuple validation)
        if isinstance(self.items, list):
            yield from self.items
        elif self.items is not None:
            yield self.items

        if isinstance(self.additional_items, Schema):
            yield self.additional_items
        if isinstance(self.additional_properties, Schema):
            yield self.additional_properties

        # simple dependencies are name lists
        for dependency in self.dependencies.values():
            if isinstance(dependency, Schema):
                yield dependency

    def copy_from(self, other: "Schema") -> None:
        """Overwrite every copyable attribute with the value held by ``other``."""
        for name in COPYABLE_FIELDS:
            setattr(self, name, getattr(other, name))

    def __repr__(self) -> str:
        if self.is_reference:
            return f"Schema(pointer={self.pointer!r}, reference={self.reference!r})"
        return f"Schema(pointer={self.pointer!r})"


COPYABLE_FIELDS: Tuple[str, ...] = tuple(
    f.name for f in fields(Schema) if f.name not in IDENTITY_FIELDS
)
