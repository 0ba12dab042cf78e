from __future__ import annotations

import pytest

from json_form_schema.errors import SchemaDepthError, SchemaReferenceError
from json_form_schema.id_tree import to_id_schema
from json_form_schema.schema_utils import collect_ids


def test_flat_object(validator, flat_schema):
    assert to_id_schema(validator, flat_schema, None, flat_schema) == {
        "$id": "root",
        "a": {"$id": "root_a"},
        "b": {"$id": "root_b"},
    }


def test_custom_prefix_and_separator(validator, flat_schema):
    id_schema = to_id_schema(validator, flat_schema, id_prefix="form", id_separator=".")
    assert id_schema == {"$id": "form", "a": {"$id": "form.a"}, "b": {"$id": "form.b"}}


def test_base_id_overrides_prefix(validator, flat_schema):
    id_schema = to_id_schema(validator, flat_schema, "outer_field", id_prefix="ignored")
    assert id_schema["a"] == {"$id": "outer_field_a"}


def test_nested_objects_keep_declared_order(validator):
    schema = {
        "type": "object",
        "properties": {
            "z": {"type": "string"},
            "address": {
                "type": "object",
                "properties": {"street": {"type": "string"}, "city": {"type": "string"}},
            },
        },
    }
    id_schema = to_id_schema(validator, schema)
    assert list(id_schema) == ["$id", "z", "address"]
    assert id_schema["address"] == {
        "$id": "root_address",
        "street": {"$id": "root_address_street"},
        "city": {"$id": "root_address_city"},
    }


def test_all_of_is_resolved_before_ids_are_generated(validator):
    schema = {
        "allOf": [
            {"properties": {"a": {"type": "string"}}},
            {"properties": {"b": {"type": "number"}}},
        ]
    }
    assert to_id_schema(validator, schema, root_schema=schema) == {
        "$id": "root",
        "a": {"$id": "root_a"},
        "b": {"$id": "root_b"},
    }


class TestArrays:
    def test_array_of_scalars_has_only_its_own_id(self, validator):
        assert to_id_schema(validator, {"type": "array", "items": {"type": "string"}}) == {"$id": "root"}

    def test_array_delegates_to_item_schema(self, validator):
        schema = {
            "type": "array",
            "items": {"type": "object", "properties": {"x": {"type": "string"}}},
        }
        assert to_id_schema(validator, schema) == {"$id": "root", "x": {"$id": "root_x"}}

    def test_bare_reference_items_are_resolved(self, validator):
        root = {"defs": {"item": {"type": "object", "properties": {"name": {"type": "string"}}}}}
        schema = {
            "type": "object",
            "properties": {"items": {"type": "array", "items": {"$ref": "#/defs/item"}}},
        }
        assert to_id_schema(validator, schema, root_schema=root) == {
            "$id": "root",
            "items": {"$id": "root_items", "name": {"$id": "root_items_name"}},
        }


class TestCycles:
    def test_self_reference_returns_single_id(self, validator):
        root = {"defs": {"node": {"$ref": "#/defs/node"}}}
        assert to_id_schema(validator, {"$ref": "#/defs/node"}, root_schema=root) == {"$id": "root"}

    def test_recursive_tree_stops_at_repeat(self, validator, tree_root_schema):
        id_schema = to_id_schema(validator, {"$ref": "#/definitions/node"}, root_schema=tree_root_schema)
        assert id_schema == {
            "$id": "root",
            "name": {"$id": "root_name"},
            "children": {"$id": "root_children"},
        }

    def test_sibling_branches_do_not_trip_each_other(self, validator):
        root = {"definitions": {"point": {"type": "object", "properties": {"x": {"type": "number"}}}}}
        schema = {
            "type": "object",
            "properties": {
                "start": {"$ref": "#/definitions/point"},
                "end": {"$ref": "#/definitions/point"},
            },
        }
        id_schema = to_id_schema(validator, schema, root_schema=root)
        assert id_schema["start"] == {"$id": "root_start", "x": {"$id": "root_start_x"}}
        assert id_schema["end"] == {"$id": "root_end", "x": {"$id": "root_end_x"}}


def test_dependencies_follow_form_data(validator, payment_schema):
    without = to_id_schema(validator, payment_schema, root_schema=payment_schema, form_data={})
    with_card = to_id_schema(validator, payment_schema, root_schema=payment_schema, form_data={"credit_card": 1})
    assert "billing_address" not in without
    assert with_card["billing_address"] == {"$id": "root_billing_address"}


def test_nested_form_data_that_is_not_an_object(validator, payment_schema):
    schema = {"type": "object", "properties": {"payment": payment_schema}}
    id_schema = to_id_schema(validator, schema, root_schema=schema, form_data={"payment": "pending"})
    assert "billing_address" not in id_schema["payment"]
    assert id_schema["payment"]["credit_card"] == {"$id": "root_payment_credit_card"}


def test_ids_are_unique(validator, tree_root_schema, payment_schema):
    schema = {
        "type": "object",
        "properties": {
            "tree": {"$ref": "#/definitions/node"},
            "payment": payment_schema,
        },
        "definitions": tree_root_schema["definitions"],
    }
    ids = collect_ids(to_id_schema(validator, schema, root_schema=schema, form_data={"payment": {"credit_card": 1}}))
    assert len(ids) == len(set(ids))
    assert "root_payment_billing_address" in ids


def test_missing_reference_propagates(validator):
    schema = {"type": "object", "properties": {"a": {"$ref": "#/definitions/missing"}}}
    with pytest.raises(SchemaReferenceError):
        to_id_schema(validator, schema, root_schema=schema)


def test_depth_ceiling(validator):
    schema = {"type": "string"}
    for name in "rqp":
        schema = {"type": "object", "properties": {name: schema}}
    with pytest.raises(SchemaDepthError):
        to_id_schema(validator, schema, max_depth=2)
    assert to_id_schema(validator, schema, max_depth=3)["p"]["q"]["r"] == {"$id": "root_p_q_r"}
