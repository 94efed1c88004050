from __future__ import annotations

from json_schema_core.models.schema import COPYABLE_FIELDS, IDENTITY_FIELDS, Schema


def test_defaults_are_empty_containers_and_json_schema_defaults() -> None:
    schema = Schema()

    assert schema.all_of == [] and schema.any_of == [] and schema.one_of == []
    assert schema.properties == {} and schema.pattern_properties == {}
    assert schema.definitions == {} and schema.dependencies == {}
    assert schema.type == [] and schema.required == []
    assert schema.enum is None
    assert schema.additional_items is True
    assert schema.additional_properties is True
    assert schema.max_exclusive is False
    assert schema.min_exclusive is False
    assert schema.unique_items is False
    assert schema.strict_properties is False


def test_default_containers_are_not_shared() -> None:
    first, second = Schema(), Schema()
    first.properties["a"] = Schema()
    first.required.append("a")

    assert second.properties == {}
    assert second.required == []


def test_pointer_joins_uri_and_fragment() -> None:
    schema = Schema(uri="file:///tmp/s.json", fragment="#/properties/a")

    assert schema.pointer == "file:///tmp/s.json#/properties/a"


def test_hand_built_nodes_get_distinct_pointers() -> None:
    assert Schema().pointer != Schema().pointer


def test_children_yields_every_owned_subschema_in_order() -> None:
    parts = {name: Schema(fragment=f"#/{name}") for name in (
        "all", "any", "one", "def", "pattern", "prop", "not", "item0", "item1", "addprops", "dep",
    )}
    schema = Schema(
        all_of=[parts["all"]],
        any_of=[parts["any"]],
        one_of=[parts["one"]],
        definitions={"d": parts["def"]},
        pattern_properties={"^x": parts["pattern"]},
        properties={"p": parts["prop"]},
        not_=parts["not"],
        items=[parts["item0"], parts["item1"]],
        additional_properties=parts["addprops"],
        dependencies={"a": ["b"], "c": parts["dep"]},
    )

    children = list(schema.children())

    assert children == [
        parts["all"], parts["any"], parts["one"], parts["def"], parts["pattern"], parts["prop"],
        parts["not"], parts["item0"], parts["item1"], parts["addprops"], parts["dep"],
    ]


def test_children_is_a_one_shot_generator() -> None:
    schema = Schema(items=Schema())
    children = schema.children()

    assert len(list(children)) == 1
    assert list(children) == []


def test_copy_from_keeps_identity_fields() -> None:
    parent = Schema(fragment="#")
    target = Schema(fragment="#/definitions/t", type=["string"], min_length=2)
    reference = Schema(parent=parent, fragment="#/properties/r", reference="#/definitions/t")

    reference.copy_from(target)

    assert reference.reference is None
    assert reference.type == ["string"]
    assert reference.min_length == 2
    assert reference.parent is parent
    assert reference.pointer == "#/properties/r"


def test_copyable_fields_exclude_identity() -> None:
    assert not set(IDENTITY_FIELDS) & set(COPYABLE_FIELDS)
    assert "not_" in COPYABLE_FIELDS
    assert "reference" in COPYABLE_FIELDS
