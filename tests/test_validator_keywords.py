from __future__ import annotations

import pytest

from json_schema_core import validate


def _errors(schema, data):
    ok, errors = validate(schema, data)
    assert ok is (not errors)
    return [(e.path, e.message) for e in errors]


# ---- arrays -----------------------------------------------------------------


def test_list_items_apply_to_every_element(schema_of) -> None:
    schema = schema_of({"items": {"type": "integer"}})

    assert _errors(schema, [1, 2, 3]) == []
    assert _errors(schema, [1, "a", 3, None]) == [
        ("#/1", 'Expected data to be of type "integer"; value was: "a".'),
        ("#/3", 'Expected data to be of type "integer"; value was: null.'),
    ]


def test_tuple_items_require_every_position(schema_of) -> None:
    schema = schema_of({"items": [{"type": "string"}, {"type": "integer"}]})

    assert _errors(schema, ["a"]) == [("#", "Expected array to have at least 2 item(s), had 1 item(s).")]
    assert _errors(schema, ["a", 1, True]) == []
    assert _errors(schema, ["a", "b"]) == [("#/1", 'Expected data to be of type "integer"; value was: "b".')]


def test_tuple_items_without_additional_items(schema_of) -> None:
    schema = schema_of({"items": [{"type": "string"}], "additionalItems": False})

    assert _errors(schema, ["a"]) == []
    assert _errors(schema, ["a", "b"]) == [("#", "Expected array to have no more than 1 item(s), had 2 item(s).")]


def test_tuple_items_with_additional_items_schema_leave_surplus_unchecked(schema_of) -> None:
    schema = schema_of({"items": [{"type": "string"}], "additionalItems": {"type": "string"}})

    assert _errors(schema, ["a", 1]) == []


def test_item_count_bounds(schema_of) -> None:
    schema = schema_of({"minItems": 2, "maxItems": 3})

    assert _errors(schema, [1, 2]) == []
    assert _errors(schema, [1]) == [("#", "Expected array to have at least 2 item(s), had 1 item(s).")]
    assert _errors(schema, [1, 2, 3, 4]) == [("#", "Expected array to have no more than 3 item(s), had 4 item(s).")]


@pytest.mark.parametrize(
    "data, unique",
    [
        ([1, 2, 3], True),
        ([1, 2, 1], False),
        ([1, True], True),
        ([1, 1.0], False),
        ([{"a": 1}, {"a": 1.0}], False),
        ([[1, 2], [2, 1]], True),
    ],
)
def test_unique_items(schema_of, data, unique) -> None:
    schema = schema_of({"uniqueItems": True})

    expected = [] if unique else [("#", "Expected array items to be unique, but duplicate items were found.")]
    assert _errors(schema, data) == expected


# ---- numbers ----------------------------------------------------------------


def test_inclusive_and_exclusive_maximum(schema_of) -> None:
    inclusive = schema_of({"maximum": 10})
    exclusive = schema_of({"maximum": 10, "exclusiveMaximum": True})

    assert _errors(inclusive, 10) == []
    assert _errors(inclusive, 11) == [
        ("#", "Expected data to be smaller than maximum 10 (exclusive: false), value was: 11.")
    ]
    assert _errors(exclusive, 9.5) == []
    assert _errors(exclusive, 10) == [
        ("#", "Expected data to be smaller than maximum 10 (exclusive: true), value was: 10.")
    ]


def test_inclusive_and_exclusive_minimum(schema_of) -> None:
    inclusive = schema_of({"minimum": 0})
    exclusive = schema_of({"minimum": 0, "exclusiveMinimum": True})

    assert _errors(inclusive, 0) == []
    assert _errors(exclusive, 0) == [
        ("#", "Expected data to be larger than minimum 0 (exclusive: true), value was: 0.")
    ]
    assert _errors(exclusive, 0.1) == []


def test_multiple_of(schema_of) -> None:
    schema = schema_of({"multipleOf": 3})

    assert _errors(schema, 9) == []
    assert _errors(schema, 10) == [("#", "Expected data to be a multiple of 3, value was: 10.")]
    assert _errors(schema_of({"multipleOf": 0.5}), 2.5) == []


def test_numeric_checks_skip_other_kinds(schema_of) -> None:
    schema = schema_of({"maximum": 0, "multipleOf": 7})

    assert _errors(schema, "abc") == []
    assert _errors(schema, True) == []


# ---- objects ----------------------------------------------------------------


def test_additional_properties_false_lists_extra_keys(schema_of) -> None:
    schema = schema_of({"properties": {"a": {"type": "string"}}, "additionalProperties": False})

    assert _errors(schema, {"a": "x"}) == []
    assert _errors(schema, {"a": "x", "b": 1}) == [("#", "Extra keys in object: b.")]


def test_additional_properties_ignore_pattern_matched_keys(schema_of) -> None:
    schema = schema_of({
        "properties": {"a": {}},
        "patternProperties": {"^x-": {}},
        "additionalProperties": False,
    })

    assert _errors(schema, {"a": 1, "x-b": 2, "z": 3, "y": 4}) == [("#", "Extra keys in object: y, z.")]


def test_additional_properties_schema_applies_to_extra_keys(schema_of) -> None:
    schema = schema_of({"properties": {"a": {}}, "additionalProperties": {"type": "integer"}})

    assert _errors(schema, {"a": "s", "b": 1, "c": "no"}) == [
        ("#/c", 'Expected data to be of type "integer"; value was: "no".')
    ]


def test_pattern_properties_may_overlap(schema_of) -> None:
    schema = schema_of({"patternProperties": {"^a": {"type": "string"}, "b$": {"maxLength": 1}}})

    assert _errors(schema, {"ab": "xyz"}) == [
        ("#/ab", "Expected string to have a maximum length of 1, was 3 character(s) long.")
    ]
    assert _errors(schema, {"ab": 1}) == [("#/ab", 'Expected data to be of type "string"; value was: 1.')]


def test_required_lists_sorted_missing_and_present_keys(schema_of) -> None:
    schema = schema_of({"required": ["b", "a"]})

    assert _errors(schema, {"a": 1, "b": 2}) == []
    assert _errors(schema, {"d": 1, "c": 2}) == [
        ("#", 'Missing required keys "a, b" in object; keys are "c, d".')
    ]


def test_dependencies(schema_of) -> None:
    schema = schema_of({"dependencies": {"a": ["b"], "c": {"required": ["d"]}}})

    assert _errors(schema, {"x": 1}) == []
    assert _errors(schema, {"a": 1, "b": 2}) == []
    assert _errors(schema, {"a": False}) == [("#", 'Missing required keys "b" in object; keys are "a".')]
    assert _errors(schema, {"c": 1}) == [("#", 'Missing required keys "d" in object; keys are "c".')]


def test_strict_properties_requires_exactly_declared_keys(schema_of) -> None:
    schema = schema_of({"properties": {"a": {}, "b": {}}, "strictProperties": True})

    assert _errors(schema, {"a": 1, "b": 2}) == []
    assert _errors(schema, {"a": 1, "c": 2}) == [
        ("#", "Extra keys in object: c."),
        ("#", 'Missing required keys "b" in object; keys are "a, c".'),
    ]


def test_property_count_bounds_run_in_declaration_order(schema_of) -> None:
    schema = schema_of({"maxProperties": 1, "minProperties": 1, "required": ["z"]})

    assert _errors(schema, {"z": 1}) == []
    assert _errors(schema, {}) == [
        ("#", "Expected object to have a minimum of 1 property/ies; it had 0."),
        ("#", 'Missing required keys "z" in object; keys are "".'),
    ]
    assert _errors(schema, {"a": 1, "b": 2}) == [
        ("#", "Expected object to have a maximum of 1 property/ies; it had 2."),
        ("#", 'Missing required keys "z" in object; keys are "a, b".'),
    ]


# ---- strings ----------------------------------------------------------------


def test_lengths_count_characters(schema_of) -> None:
    schema = schema_of({"minLength": 2, "maxLength": 3})

    assert _errors(schema, "héé") == []
    assert _errors(schema, "ééééé") == [
        ("#", "Expected string to have a maximum length of 3, was 5 character(s) long.")
    ]
    assert _errors(schema, "é") == [
        ("#", "Expected string to have a minimum length of 2, was 1 character(s) long.")
    ]


def test_pattern_searches_the_string(schema_of) -> None:
    anchored = schema_of({"pattern": "^[a-z]+$"})

    assert _errors(anchored, "abc") == []
    assert _errors(anchored, "ab1") == [("#", 'Expected string to match pattern "^[a-z]+$", value was: ab1.')]
    assert _errors(schema_of({"pattern": "b"}), "abc") == []


def test_format(schema_of) -> None:
    schema = schema_of({"format": "email"})

    assert _errors(schema, "user@example.com") == []
    assert _errors(schema, "nope") == [("#", 'Expected data to match "email" format, value was: nope.')]
    assert _errors(schema_of({"format": "color"}), "anything") == []


def test_string_checks_skip_other_kinds(schema_of) -> None:
    schema = schema_of({"maxLength": 0, "pattern": "^$", "format": "uuid"})

    assert _errors(schema, 12345) == []
    assert _errors(schema, ["x"]) == []
