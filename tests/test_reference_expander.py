from __future__ import annotations

import pytest

from json_schema_core import ReferenceExpander, UnresolvedReferenceError, expand_references, parse_schema, validate


def _parse(raw):
    return parse_schema(raw, check_meta_schema=False)


def test_reference_copies_target_attributes_but_keeps_identity() -> None:
    root = _parse({
        "definitions": {"name": {"type": "string", "minLength": 1}},
        "properties": {"first": {"$ref": "#/definitions/name"}},
    })
    node = root.properties["first"]

    assert expand_references(root) is root
    assert not node.is_reference
    assert node.type == ["string"]
    assert node.min_length == 1
    assert node.parent is root
    assert node.pointer == "#/properties/first"


def test_reference_chains_collapse() -> None:
    root = _parse({
        "definitions": {
            "a": {"$ref": "#/definitions/b"},
            "b": {"type": "integer"},
        },
        "items": {"$ref": "#/definitions/a"},
    })

    ReferenceExpander(root).expand()

    assert root.items.type == ["integer"]
    assert root.definitions["a"].type == ["integer"]


def test_expanded_tree_validates() -> None:
    root = expand_references(_parse({
        "definitions": {"positive": {"type": "integer", "minimum": 1}},
        "properties": {"count": {"$ref": "#/definitions/positive"}},
    }))

    assert validate(root, {"count": 3})[0]
    ok, errors = validate(root, {"count": 0})
    assert not ok
    assert errors[0].path == "#/count"
    assert errors[0].pointer == "#/properties/count"


def test_escaped_pointer_tokens_resolve() -> None:
    root = expand_references(_parse({
        "definitions": {"a/b": {"type": "null"}},
        "properties": {"x": {"$ref": "#/definitions/a~1b"}},
    }))

    assert root.properties["x"].type == ["null"]


@pytest.mark.parametrize(
    "raw",
    [
        {"properties": {"a": {"$ref": "#/definitions/missing"}}},
        {"properties": {"a": {"$ref": "other.json#/definitions/a"}}},
        {"definitions": {"a": {"$ref": "#/definitions/b"}, "b": {"$ref": "#/definitions/a"}}},
        {"$ref": "#"},
    ],
)
def test_unresolvable_references_raise(raw) -> None:
    with pytest.raises(UnresolvedReferenceError):
        expand_references(_parse(raw))
