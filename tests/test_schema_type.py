from __future__ import annotations

import pytest

from json_form_schema.schema_type import SchemaType, get_schema_type, guess_type


@pytest.mark.parametrize(
    "schema, expected",
    [
        ({"type": "object"}, SchemaType.OBJECT),
        ({"type": "integer", "properties": {}}, SchemaType.INTEGER),
        ({"type": ["string"]}, SchemaType.STRING),
        ({"type": ["string", "null"]}, SchemaType.STRING),
        ({"type": ["string", "number"]}, SchemaType.MULTI),
        ({"type": ["string", "number", "null"]}, SchemaType.MULTI),
        ({"properties": {"a": {}}}, SchemaType.OBJECT),
        ({"items": {"type": "string"}}, SchemaType.ARRAY),
        ({"enum": ["a", "b"]}, SchemaType.STRING),
        ({"enum": [1, 2]}, SchemaType.STRING),
        ({"enum": [1, 2.5]}, SchemaType.STRING),
        ({"enum": [True, "x"]}, SchemaType.STRING),
        ({"enum": [True, False]}, SchemaType.STRING),
        ({"enum": [None]}, SchemaType.STRING),
        ({"enum": []}, SchemaType.UNKNOWN),
        ({"const": 1, "properties": {"a": {}}}, SchemaType.INTEGER),
        ({"const": False}, SchemaType.BOOLEAN),
        ({}, SchemaType.UNKNOWN),
        ({"$ref": "#/definitions/x"}, SchemaType.UNKNOWN),
        ({"type": "mystery"}, SchemaType.UNKNOWN),
        (None, SchemaType.UNKNOWN),
    ],
)
def test_get_schema_type(schema, expected):
    assert get_schema_type(schema) == expected


def test_schema_type_compares_as_string():
    assert get_schema_type({"type": "object"}) == "object"


def test_guess_type_distinguishes_bool_from_int():
    assert guess_type(True) == SchemaType.BOOLEAN
    assert guess_type(3) == SchemaType.INTEGER
    assert guess_type(None) == SchemaType.NULL
