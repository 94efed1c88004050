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

"""In-place expansion of local JSON references in a schema tree."""

import logging
from typing import Dict, List, Set

from ..exceptions import UnresolvedReferenceError
from ..models.schema import Schema
from ..utils.json_pointer import ROOT_TOKEN, join_pointer, split_pointer

logger = logging.getLogger(__name__)


class ReferenceExpander:
    """Expands local JSON references (``#``, ``#/definitions/...``) in place.

    Each reference node receives a shallow copy of its target's attributes
    and keeps its own parent, uri and fragment, so the expanded tree may
    reach a node from itself. Remote references are not supported.
    """

    def __init__(self, root: Schema):
        self.root = root
        self._index: Dict[str, Schema] = {}

    def expand(self) -> Schema:
        """Expand every reference reachable from the root; returns the root."""
        self._index = {}
        references = self._collect(self.root)

        for schema in references:
            if schema.is_reference:
                self._expand_one(schema, chain=[])

        logger.debug("Expanded %d reference(s) under %s", len(references), self.root.pointer)
        return self.root

    def _collect(self, root: Schema) -> List[Schema]:
        """Index every node by fragment and return the reference nodes."""
        references: List[Schema] = []
        seen: Set[int] = set()
        stack = [root]
        while stack:
            schema = stack.pop()
            if id(schema) in seen:
                continue
            seen.add(id(schema))

            if schema.fragment is not None:
                self._index.setdefault(schema.fragment, schema)
            if schema.is_reference:
                references.append(schema)
            stack.extend(schema.children())
        return references

    def _resolve(self, schema: Schema) -> Schema:
        reference = schema.reference
        if not reference.startswith(ROOT_TOKEN):
            raise UnresolvedReferenceError(
                f"Cannot resolve remote reference '{reference}' at {schema.pointer}"
            )
        try:
            tokens = split_pointer(reference)
        except ValueError as e:
            raise UnresolvedReferenceError(f"Invalid reference '{reference}' at {schema.pointer}") from e

        target = self._index.get(join_pointer(ROOT_TOKEN, *tokens))
        if target is None:
            raise UnresolvedReferenceError(
                f"Reference '{reference}' at {schema.pointer} does not point to a schema"
            )
        return target

    def _expand_one(self, schema: Schema, chain: List[Schema]) -> None:
        if any(schema is seen for seen in chain):
            refs = " -> ".join(s.reference for s in chain + [schema])
            raise UnresolvedReferenceError(f"Reference cycle detected: {refs}")

        target = self._resolve(schema)
        # expand the target first so reference chains collapse
        if target.is_reference:
            self._expand_one(target, chain + [schema])

        schema.copy_from(target)


def expand_references(root: Schema) -> Schema:
    """Expand local references in place and return the root for convenience."""
    return ReferenceExpander(root).expand()
