from __future__ import annotations

from json_form_schema.validator import JsonSchemaValidator


def test_plain_condition(validator):
    condition = {"type": "object", "properties": {"kind": {"enum": ["a"]}}}
    assert validator.is_valid(condition, {"kind": "a"})
    assert not validator.is_valid(condition, {"kind": "b"})


def test_local_references_resolve_against_root():
    root = {"definitions": {"kind": {"enum": ["x"]}}}
    condition = {"type": "object", "properties": {"kind": {"$ref": "#/definitions/kind"}}}
    validator = JsonSchemaValidator()
    assert validator.is_valid(condition, {"kind": "x"}, root)
    assert not validator.is_valid(condition, {"kind": "y"}, root)


def test_condition_is_not_mutated(validator):
    condition = {"properties": {"kind": {"$ref": "#/definitions/kind"}}}
    validator.is_valid(condition, {"kind": "x"}, {"definitions": {"kind": {}}})
    assert condition == {"properties": {"kind": {"$ref": "#/definitions/kind"}}}
