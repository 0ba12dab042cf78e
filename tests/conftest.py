from __future__ import annotations

import pytest

from json_form_schema.validator import JsonSchemaValidator


@pytest.fixture
def validator() -> JsonSchemaValidator:
    return JsonSchemaValidator()


@pytest.fixture
def flat_schema():
    return {
        "type": "object",
        "properties": {
            "a": {"type": "string"},
            "b": {"type": "number"},
        },
    }


@pytest.fixture
def tree_root_schema():
    """Root schema whose `node` definition refers to itself through an array."""
    return {
        "definitions": {
            "node": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "children": {"type": "array", "items": {"$ref": "#/definitions/node"}},
                },
            }
        }
    }


@pytest.fixture
def payment_schema():
    return {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "credit_card": {"type": "number"},
        },
        "dependencies": {
            "credit_card": {
                "properties": {"billing_address": {"type": "string"}},
                "required": ["billing_address"],
            }
        },
    }
