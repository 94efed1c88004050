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

"""Recursive validation of data trees against expanded schema trees.

Every applicable check runs for every visited (schema, data) pair, so a single
call reports every failure it can find. Diagnostics are appended to a sink in
traversal order; ``anyOf``, ``oneOf`` and ``not`` evaluate their subschemas
against a throwaway sink and only report a summary.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Sequence, Set, Tuple

from ..exceptions import SchemaError, UnresolvedReferenceError
from ..models.data_kind import TYPE_TAGS, DataKind, classify, json_equal, to_json_text
from ..models.schema import Schema
from ..utils.json_pointer import ROOT_TOKEN, JsonPointer, join_pointer
from .diagnostic import ValidationError
from .formats import check_format

logger = logging.getLogger(__name__)

ErrorSink = List[ValidationError]


def _display(value: Any) -> str:
    # strings are shown bare, everything else as JSON
    if isinstance(value, str):
        return value
    return to_json_text(value)


def _pattern_text(pattern: Any) -> str:
    return getattr(pattern, "pattern", pattern)


class _ValidationRun:
    """State for a single top-level validation call.

    Holds the root diagnostics list, the set of visited
    ``(schema pointer, data path)`` keys and the keys whose checks are still
    running. Never shared between calls.
    """

    def __init__(self) -> None:
        self.errors: ErrorSink = []
        self._visits: Set[Tuple[str, JsonPointer]] = set()
        self._active: Set[Tuple[str, JsonPointer]] = set()

    def validate_data(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.is_reference:
            raise UnresolvedReferenceError(
                f"Schema {schema.pointer} still references '{schema.reference}'; "
                "expand references before validating"
            )

        # detect a validation loop
        if not self._first_visit(schema, errors, path):
            return False

        kind = classify(data)
        key = (schema.pointer, path)
        self._active.add(key)
        try:
            valid = True
            # every check runs; no short-circuit between checks
            for check in _ANY_CHECKS + _KIND_CHECKS[kind]:
                valid = check(self, schema, data, errors, path) and valid
        finally:
            self._active.discard(key)
        return valid

    def _first_visit(self, schema: Schema, errors: ErrorSink, path: JsonPointer) -> bool:
        key = (schema.pointer, path)
        if key not in self._visits:
            self._visits.add(key)
            return True

        logger.warning("Validation loop detected at %s for schema %s", path, schema.pointer)
        error = ValidationError(schema, path, "Validation loop detected.")
        errors.append(error)
        # a cycle still in progress is reported even from a discarded
        # combinator sink; a revisit of a finished key stays local
        if key in self._active and errors is not self.errors:
            self.errors.append(error)
        return False

    # ---- helpers -------------------------------------------------------------

    @staticmethod
    def _get_extra_keys(schema: Schema, data: Dict[str, Any]) -> List[str]:
        """Keys not covered by ``properties`` or any ``patternProperties`` regex."""
        extra = [key for key in data.keys() if key not in schema.properties]
        for pattern in schema.pattern_properties:
            extra = [key for key in extra if not re.search(pattern, key)]
        return extra

    def _validate_extra(self, schema: Schema, data: Dict[str, Any], errors: ErrorSink, path: JsonPointer) -> bool:
        extra = self._get_extra_keys(schema, data)
        if not extra:
            return True
        message = f"Extra keys in object: {', '.join(sorted(extra))}."
        errors.append(ValidationError(schema, path, message))
        return False

    def _check_required(
        self,
        schema: Schema,
        data: Dict[str, Any],
        errors: ErrorSink,
        path: JsonPointer,
        required: Sequence[str],
    ) -> bool:
        if not required:
            return True
        missing = [key for key in required if key not in data]
        if not missing:
            return True
        message = (
            f'Missing required keys "{", ".join(sorted(missing))}" in object; '
            f'keys are "{", ".join(sorted(data.keys()))}".'
        )
        errors.append(ValidationError(schema, path, message))
        return False

    # ---- validation: any -----------------------------------------------------

    def _validate_all_of(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if not schema.all_of:
            return True
        valid = all(self.validate_data(subschema, data, errors, path) for subschema in schema.all_of)
        if not valid:
            message = 'Data did not match all subschemas of "allOf" condition.'
            errors.append(ValidationError(schema, path, message))
        return valid

    def _validate_any_of(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if not schema.any_of:
            return True
        valid = any(self.validate_data(subschema, data, [], path) for subschema in schema.any_of)
        if not valid:
            message = 'Data did not match any subschema of "anyOf" condition.'
            errors.append(ValidationError(schema, path, message))
        return valid

    def _validate_enum(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.enum is None:
            return True
        if any(json_equal(data, member) for member in schema.enum):
            return True
        message = (
            f"Expected data to be a member of enum {to_json_text(schema.enum)}, "
            f"value was: {_display(data)}."
        )
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_one_of(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if not schema.one_of:
            return True
        num_valid = sum(1 for subschema in schema.one_of if self.validate_data(subschema, data, [], path))
        if num_valid != 1:
            message = 'Data did not match exactly one subschema of "oneOf" condition.'
            errors.append(ValidationError(schema, path, message))
        return num_valid == 1

    def _validate_not(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.not_ is None:
            return True
        # sub-errors would be worded for the inverse condition; drop them
        valid = not self.validate_data(schema.not_, data, [], path)
        if not valid:
            message = 'Data matched subschema of "not" condition.'
            errors.append(ValidationError(schema, path, message))
        return valid

    def _validate_type(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if not schema.type:
            return True
        kind = classify(data)
        if any(kind in TYPE_TAGS.get(tag, ()) for tag in schema.type):
            return True
        message = f'Expected data to be of type "{"/".join(schema.type)}"; value was: {to_json_text(data)}.'
        errors.append(ValidationError(schema, path, message))
        return False

    # ---- validation: array ---------------------------------------------------

    def _validate_items(self, schema: Schema, data: Sequence[Any], errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.items is None:
            return True

        if isinstance(schema.items, list):
            count = len(schema.items)
            if len(data) < count:
                message = f"Expected array to have at least {count} item(s), had {len(data)} item(s)."
                errors.append(ValidationError(schema, path, message))
                return False
            # a schema-valued additionalItems leaves surplus items unchecked
            if len(data) > count and schema.additional_items is False:
                message = f"Expected array to have no more than {count} item(s), had {len(data)} item(s)."
                errors.append(ValidationError(schema, path, message))
                return False
            valid = True
            for i, subschema in enumerate(schema.items):
                valid = self.validate_data(subschema, data[i], errors, join_pointer(path, i)) and valid
            return valid

        valid = True
        for i, value in enumerate(data):
            valid = self.validate_data(schema.items, value, errors, join_pointer(path, i)) and valid
        return valid

    def _validate_max_items(self, schema: Schema, data: Sequence[Any], errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.max_items is None or len(data) <= schema.max_items:
            return True
        message = f"Expected array to have no more than {schema.max_items} item(s), had {len(data)} item(s)."
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_min_items(self, schema: Schema, data: Sequence[Any], errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.min_items is None or len(data) >= schema.min_items:
            return True
        message = f"Expected array to have at least {schema.min_items} item(s), had {len(data)} item(s)."
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_unique_items(self, schema: Schema, data: Sequence[Any], errors: ErrorSink, path: JsonPointer) -> bool:
        if not schema.unique_items:
            return True
        for i, left in enumerate(data):
            if any(json_equal(left, right) for right in data[i + 1:]):
                message = "Expected array items to be unique, but duplicate items were found."
                errors.append(ValidationError(schema, path, message))
                return False
        return True

    # ---- validation: integer/number ------------------------------------------

    def _validate_max(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.max is None:
            return True
        if schema.max_exclusive and data < schema.max:
            return True
        if not schema.max_exclusive and data <= schema.max:
            return True
        exclusive = "true" if schema.max_exclusive else "false"
        message = (
            f"Expected data to be smaller than maximum {schema.max} (exclusive: {exclusive}), "
            f"value was: {data}."
        )
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_min(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.min is None:
            return True
        if schema.min_exclusive and data > schema.min:
            return True
        if not schema.min_exclusive and data >= schema.min:
            return True
        exclusive = "true" if schema.min_exclusive else "false"
        message = (
            f"Expected data to be larger than minimum {schema.min} (exclusive: {exclusive}), "
            f"value was: {data}."
        )
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_multiple_of(self, schema: Schema, data: Any, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.multiple_of is None:
            return True
        if data % schema.multiple_of == 0:
            return True
        message = f"Expected data to be a multiple of {schema.multiple_of}, value was: {data}."
        errors.append(ValidationError(schema, path, message))
        return False

    # ---- validation: object --------------------------------------------------

    def _validate_additional_properties(
        self, schema: Schema, data: Dict[str, Any], errors: ErrorSink, path: JsonPointer
    ) -> bool:
        if schema.additional_properties is True:
            return True

        # every property not matched by properties/patternProperties is
        # validated against the subschema
        if isinstance(schema.additional_properties, Schema):
            valid = True
            for key in self._get_extra_keys(schema, data):
                valid = self.validate_data(
                    schema.additional_properties, data[key], errors, join_pointer(path, key)
                ) and valid
            return valid

        return self._validate_extra(schema, data, errors, path)

    def _validate_dependencies(self, schema: Schema, data: Dict[str, Any], errors: ErrorSink, path: JsonPointer) -> bool:
        valid = True
        for key, dependency in schema.dependencies.items():
            # an absent key fulfills its dependency by definition
            if key not in data:
                continue
            if isinstance(dependency, Schema):
                valid = self.validate_data(dependency, data, errors, path) and valid
            else:
                valid = self._check_required(schema, data, errors, path, dependency) and valid
        return valid

    def _validate_max_properties(self, schema: Schema, data: Dict[str, Any], errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.max_properties is None or len(data) <= schema.max_properties:
            return True
        message = f"Expected object to have a maximum of {schema.max_properties} property/ies; it had {len(data)}."
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_min_properties(self, schema: Schema, data: Dict[str, Any], errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.min_properties is None or len(data) >= schema.min_properties:
            return True
        message = f"Expected object to have a minimum of {schema.min_properties} property/ies; it had {len(data)}."
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_pattern_properties(
        self, schema: Schema, data: Dict[str, Any], errors: ErrorSink, path: JsonPointer
    ) -> bool:
        valid = True
        for pattern, subschema in schema.pattern_properties.items():
            for key, value in data.items():
                if re.search(pattern, key):
                    valid = self.validate_data(subschema, value, errors, join_pointer(path, key)) and valid
        return valid

    def _validate_properties(self, schema: Schema, data: Dict[str, Any], errors: ErrorSink, path: JsonPointer) -> bool:
        valid = True
        for key, subschema in schema.properties.items():
            if key in data:
                valid = self.validate_data(subschema, data[key], errors, join_pointer(path, key)) and valid
        return valid

    def _validate_required(self, schema: Schema, data: Dict[str, Any], errors: ErrorSink, path: JsonPointer) -> bool:
        return self._check_required(schema, data, errors, path, schema.required)

    def _validate_strict_properties(
        self, schema: Schema, data: Dict[str, Any], errors: ErrorSink, path: JsonPointer
    ) -> bool:
        if not schema.strict_properties:
            return True
        no_extra = self._validate_extra(schema, data, errors, path)
        all_present = self._check_required(schema, data, errors, path, list(schema.properties.keys()))
        return no_extra and all_present

    # ---- validation: string --------------------------------------------------

    def _validate_format(self, schema: Schema, data: str, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.format is None or check_format(schema.format, data):
            return True
        message = f'Expected data to match "{schema.format}" format, value was: {data}.'
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_max_length(self, schema: Schema, data: str, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.max_length is None or len(data) <= schema.max_length:
            return True
        message = (
            f"Expected string to have a maximum length of {schema.max_length}, "
            f"was {len(data)} character(s) long."
        )
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_min_length(self, schema: Schema, data: str, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.min_length is None or len(data) >= schema.min_length:
            return True
        message = (
            f"Expected string to have a minimum length of {schema.min_length}, "
            f"was {len(data)} character(s) long."
        )
        errors.append(ValidationError(schema, path, message))
        return False

    def _validate_pattern(self, schema: Schema, data: str, errors: ErrorSink, path: JsonPointer) -> bool:
        if schema.pattern is None or re.search(schema.pattern, data):
            return True
        message = f'Expected string to match pattern "{_pattern_text(schema.pattern)}", value was: {data}.'
        errors.append(ValidationError(schema, path, message))
        return False


Check = Callable[[_ValidationRun, Schema, Any, ErrorSink, JsonPointer], bool]

_ANY_CHECKS: Tuple[Check, ...] = (
    _ValidationRun._validate_all_of,
    _ValidationRun._validate_any_of,
    _ValidationRun._validate_enum,
    _ValidationRun._validate_one_of,
    _ValidationRun._validate_not,
    _ValidationRun._validate_type,
)

_ARRAY_CHECKS: Tuple[Check, ...] = (
    _ValidationRun._validate_items,
    _ValidationRun._validate_max_items,
    _ValidationRun._validate_min_items,
    _ValidationRun._validate_unique_items,
)

_NUMBER_CHECKS: Tuple[Check, ...] = (
    _ValidationRun._validate_max,
    _ValidationRun._validate_min,
    _ValidationRun._validate_multiple_of,
)

_OBJECT_CHECKS: Tuple[Check, ...] = (
    _ValidationRun._validate_additional_properties,
    _ValidationRun._validate_dependencies,
    _ValidationRun._validate_max_properties,
    _ValidationRun._validate_min_properties,
    _ValidationRun._validate_pattern_properties,
    _ValidationRun._validate_properties,
    _ValidationRun._validate_required,
    _ValidationRun._validate_strict_properties,
)

_STRING_CHECKS: Tuple[Check, ...] = (
    _ValidationRun._validate_format,
    _ValidationRun._validate_max_length,
    _ValidationRun._validate_min_length,
    _ValidationRun._validate_pattern,
)

# one entry per DataKind
_KIND_CHECKS: Dict[DataKind, Tuple[Check, ...]] = {
    DataKind.NULL: (),
    DataKind.BOOLEAN: (),
    DataKind.INTEGER: _NUMBER_CHECKS,
    DataKind.NUMBER: _NUMBER_CHECKS,
    DataKind.STRING: _STRING_CHECKS,
    DataKind.ARRAY: _ARRAY_CHECKS,
    DataKind.OBJECT: _OBJECT_CHECKS,
}


class Validator:
    """Validates data against one expanded schema tree.

    The validator keeps no state between calls; each call gets a fresh
    visited set and diagnostics list, so one instance may be shared.
    """

    def __init__(self, schema: Schema):
        self.schema = schema

    def validate(self, data: Any) -> Tuple[bool, List[ValidationError]]:
        """Validate data and collect every diagnostic.

        Returns:
            ``(ok, errors)`` where ``ok`` is true when no diagnostic was recorded.

        Raises:
            InvalidDataError: If a data node is not a JSON value.
            UnresolvedReferenceError: If an unexpanded reference is reached.
        """
        run = _ValidationRun()
        run.validate_data(self.schema, data, run.errors, ROOT_TOKEN)
        ok = not run.errors
        logger.debug(
            "Validated data against %s: ok=%s, %d diagnostic(s)", self.schema.pointer, ok, len(run.errors)
        )
        return ok, run.errors

    def validate_or_fail(self, data: Any) -> None:
        """Validate data, raising :class:`SchemaError` with every diagnostic on failure."""
        ok, errors = self.validate(data)
        if not ok:
            raise SchemaError(errors)


def validate(schema: Schema, data: Any) -> Tuple[bool, List[ValidationError]]:
    """Validate data against a schema tree; see :meth:`Validator.validate`."""
    return Validator(schema).validate(data)


def validate_or_fail(schema: Schema, data: Any) -> None:
    """Validate data against a schema tree; see :meth:`Validator.validate_or_fail`."""
    Validator(schema).validate_or_fail(data)
