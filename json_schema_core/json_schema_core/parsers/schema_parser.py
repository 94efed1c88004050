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

"""Build :class:`Schema` trees from already-decoded schema documents."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from jsonschema.exceptions import SchemaError as MetaSchemaError
from jsonschema.validators import Draft4Validator, validator_for

from ..config import validator_config
from ..exceptions import SchemaParseError
from ..models.data_kind import TYPE_TAGS
from ..models.schema import Schema
from ..utils.json_pointer import ROOT_TOKEN, join_pointer

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_non_negative_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class SchemaParser:
    """Parser turning a JSON-like schema document into a :class:`Schema` tree.

    ``$ref`` nodes are kept as reference nodes; run the reference expander
    before validating.
    """

    def __init__(self, check_meta_schema: Optional[bool] = None):
        """Initialize schema parser.

        Args:
            check_meta_schema: Check a document that declares ``$schema``
                against that meta-schema before parsing. If None, uses
                global config.
        """
        self.check_meta_schema = (
            check_meta_schema if check_meta_schema is not None else validator_config.check_meta_schema
        )

    def parse(self, raw: Union[Mapping, bool], uri: str = "") -> Schema:
        """Parse a whole schema document.

        Args:
            raw: Decoded schema document (mapping or boolean).
            uri: Document URI used as the prefix of every node pointer.

        Raises:
            SchemaParseError: If the document is not a valid schema.
        """
        # only a declared draft names a meta-schema to check against
        if self.check_meta_schema and isinstance(raw, Mapping) and "$schema" in raw:
            self._check_meta_schema(raw)

        logger.debug("Parsing schema document '%s'", uri or ROOT_TOKEN)
        return self._parse_node(raw, parent=None, uri=uri, fragment=ROOT_TOKEN)

    @staticmethod
    def _check_meta_schema(raw: Mapping) -> None:
        validator_cls = validator_for(raw, default=Draft4Validator)
        try:
            validator_cls.check_schema(raw)
        except MetaSchemaError as e:
            path = join_pointer(ROOT_TOKEN, *e.absolute_path) if e.absolute_path else ROOT_TOKEN
            raise SchemaParseError(f"Schema does not match its meta-schema: {e.message}", path) from e

    # ---- nodes ---------------------------------------------------------------

    def _parse_node(self, raw: Any, *, parent: Optional[Schema], uri: str, fragment: str) -> Schema:
        schema = Schema(parent=parent, uri=uri, fragment=fragment, data=raw)

        if isinstance(raw, bool):
            # false accepts nothing: "not" an unconstrained schema
            if raw is False:
                schema.not_ = Schema(parent=schema, uri=uri, fragment=join_pointer(fragment, "not"))
            return schema

        if not isinstance(raw, Mapping):
            raise SchemaParseError(
                f"Schema must be an object or boolean, got {type(raw).__name__}", fragment
            )

        if "$ref" in raw:
            reference = raw["$ref"]
            if not isinstance(reference, str):
                raise SchemaParseError("'$ref' must be a string", join_pointer(fragment, "$ref"))
            schema.reference = reference
            return schema

        self._parse_descriptors(schema, raw)
        self._parse_any(schema, raw)
        self._parse_array(schema, raw)
        self._parse_numeric(schema, raw)
        self._parse_object(schema, raw)
        self._parse_string(schema, raw)
        self._parse_hyper_schema(schema, raw)
        return schema

    def _child(self, schema: Schema, raw: Any, *tokens: Union[str, int]) -> Schema:
        return self._parse_node(
            raw, parent=schema, uri=schema.uri, fragment=join_pointer(schema.fragment, *tokens)
        )

    def _child_list(self, schema: Schema, raw: Mapping, keyword: str) -> List[Schema]:
        value = raw.get(keyword, [])
        if not isinstance(value, list):
            raise SchemaParseError(f"'{keyword}' must be an array of schemas", join_pointer(schema.fragment, keyword))
        return [self._child(schema, item, keyword, i) for i, item in enumerate(value)]

    def _child_map(self, schema: Schema, raw: Mapping, keyword: str) -> Dict[str, Schema]:
        value = raw.get(keyword, {})
        if not isinstance(value, Mapping):
            raise SchemaParseError(f"'{keyword}' must be an object of schemas", join_pointer(schema.fragment, keyword))
        return {key: self._child(schema, item, keyword, key) for key, item in value.items()}

    @staticmethod
    def _get(schema: Schema, raw: Mapping, keyword: str, check, expected: str) -> Any:
        if keyword not in raw:
            return None
        value = raw[keyword]
        if not check(value):
            raise SchemaParseError(f"'{keyword}' must be {expected}", join_pointer(schema.fragment, keyword))
        return value

    @staticmethod
    def _compile(schema: Schema, pattern: Any, *tokens: str) -> "re.Pattern":
        if not isinstance(pattern, str):
            raise SchemaParseError("Pattern must be a string", join_pointer(schema.fragment, *tokens))
        try:
            return re.compile(pattern)
        except re.error as e:
            raise SchemaParseError(f"Invalid regular expression '{pattern}': {e}", join_pointer(schema.fragment, *tokens)) from e

    # ---- keyword groups -------------------------------------------------------

    def _parse_descriptors(self, schema: Schema, raw: Mapping) -> None:
        schema.id = raw.get("id", raw.get("$id"))
        schema.title = raw.get("title")
        schema.description = raw.get("description")
        schema.default = raw.get("default")

    def _parse_any(self, schema: Schema, raw: Mapping) -> None:
        schema.all_of = self._child_list(schema, raw, "allOf")
        schema.any_of = self._child_list(schema, raw, "anyOf")
        schema.one_of = self._child_list(schema, raw, "oneOf")
        schema.definitions = self._child_map(schema, raw, "definitions")

        schema.enum = self._get(schema, raw, "enum", lambda v: isinstance(v, list), "an array")

        if "not" in raw:
            schema.not_ = self._child(schema, raw["not"], "not")

        raw_type = raw.get("type")
        if raw_type is not None:
            types = [raw_type] if isinstance(raw_type, str) else raw_type
            if not isinstance(types, list) or not all(isinstance(t, str) for t in types):
                raise SchemaParseError("'type' must be a string or an array of strings", join_pointer(schema.fragment, "type"))
            unknown = [t for t in types if t not in TYPE_TAGS]
            if unknown:
                raise SchemaParseError(f"Unknown type(s) {unknown}", join_pointer(schema.fragment, "type"))
            schema.type = list(types)

    def _parse_array(self, schema: Schema, raw: Mapping) -> None:
        additional_items = raw.get("additionalItems", True)
        if isinstance(additional_items, bool):
            schema.additional_items = additional_items
        else:
            schema.additional_items = self._child(schema, additional_items, "additionalItems")

        if "items" in raw:
            items = raw["items"]
            if isinstance(items, list):
                schema.items = [self._child(schema, item, "items", i) for i, item in enumerate(items)]
            else:
                schema.items = self._child(schema, items, "items")

        schema.max_items = self._get(schema, raw, "maxItems", _is_non_negative_int, "a non-negative integer")
        schema.min_items = self._get(schema, raw, "minItems", _is_non_negative_int, "a non-negative integer")
        schema.unique_items = bool(self._get(schema, raw, "uniqueItems", lambda v: isinstance(v, bool), "a boolean"))

    def _parse_numeric(self, schema: Schema, raw: Mapping) -> None:
        schema.max = self._get(schema, raw, "maximum", _is_number, "a number")
        schema.min = self._get(schema, raw, "minimum", _is_number, "a number")

        # draft 4 uses boolean flags, draft 6+ uses the bound itself
        exclusive_max = raw.get("exclusiveMaximum")
        if isinstance(exclusive_max, bool):
            schema.max_exclusive = exclusive_max
        elif _is_number(exclusive_max):
            if schema.max is None or exclusive_max <= schema.max:
                schema.max = exclusive_max
                schema.max_exclusive = True
        elif exclusive_max is not None:
            raise SchemaParseError("'exclusiveMaximum' must be a boolean or a number", join_pointer(schema.fragment, "exclusiveMaximum"))

        exclusive_min = raw.get("exclusiveMinimum")
        if isinstance(exclusive_min, bool):
            schema.min_exclusive = exclusive_min
        elif _is_number(exclusive_min):
            if schema.min is None or exclusive_min >= schema.min:
                schema.min = exclusive_min
                schema.min_exclusive = True
        elif exclusive_min is not None:
            raise SchemaParseError("'exclusiveMinimum' must be a boolean or a number", join_pointer(schema.fragment, "exclusiveMinimum"))

        schema.multiple_of = self._get(
            schema, raw, "multipleOf", lambda v: _is_number(v) and v > 0, "a positive number"
        )

    def _parse_object(self, schema: Schema, raw: Mapping) -> None:
        additional_properties = raw.get("additionalProperties", True)
        if isinstance(additional_properties, bool):
            schema.additional_properties = additional_properties
        else:
            schema.additional_properties = self._child(schema, additional_properties, "additionalProperties")

        dependencies = raw.get("dependencies", {})
        if not isinstance(dependencies, Mapping):
            raise SchemaParseError("'dependencies' must be an object", join_pointer(schema.fragment, "dependencies"))
        for key, dependency in dependencies.items():
            if isinstance(dependency, list):
                schema.dependencies[key] = list(dependency)
            else:
                schema.dependencies[key] = self._child(schema, dependency, "dependencies", key)

        schema.max_properties = self._get(schema, raw, "maxProperties", _is_non_negative_int, "a non-negative integer")
        schema.min_properties = self._get(schema, raw, "minProperties", _is_non_negative_int, "a non-negative integer")

        pattern_properties = raw.get("patternProperties", {})
        if not isinstance(pattern_properties, Mapping):
            raise SchemaParseError("'patternProperties' must be an object", join_pointer(schema.fragment, "patternProperties"))
        for pattern, subschema in pattern_properties.items():
            compiled = self._compile(schema, pattern, "patternProperties", pattern)
            schema.pattern_properties[compiled] = self._child(schema, subschema, "patternProperties", pattern)

        schema.properties = self._child_map(schema, raw, "properties")

        required = self._get(
            schema, raw, "required",
            lambda v: isinstance(v, list) and all(isinstance(k, str) for k in v),
            "an array of strings",
        )
        schema.required = list(required) if required is not None else []

        schema.strict_properties = bool(
            self._get(schema, raw, "strictProperties", lambda v: isinstance(v, bool), "a boolean")
        )

    def _parse_string(self, schema: Schema, raw: Mapping) -> None:
        schema.format = self._get(schema, raw, "format", lambda v: isinstance(v, str), "a string")
        schema.max_length = self._get(schema, raw, "maxLength", _is_non_negative_int, "a non-negative integer")
        schema.min_length = self._get(schema, raw, "minLength", _is_non_negative_int, "a non-negative integer")
        if "pattern" in raw:
            schema.pattern = self._compile(schema, raw["pattern"], "pattern")

    def _parse_hyper_schema(self, schema: Schema, raw: Mapping) -> None:
        schema.links = list(raw.get("links", []))
        schema.media = raw.get("media")
        schema.read_only = bool(raw.get("readOnly", False))
        schema.path_start = raw.get("pathStart")


def parse_schema(raw: Union[Mapping, bool], uri: str = "", check_meta_schema: Optional[bool] = None) -> Schema:
    """Parse a decoded schema document into a :class:`Schema` tree."""
    return SchemaParser(check_meta_schema=check_meta_schema).parse(raw, uri=uri)
