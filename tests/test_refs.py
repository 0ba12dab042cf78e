from __future__ import annotations

import pytest

from json_form_schema.errors import SchemaReferenceError, SchemaResolutionError
from json_form_schema.refs import find_schema_definition

ROOT = {
    "definitions": {
        "name": {"type": "string", "title": "Name"},
        "alias": {"$ref": "#/definitions/name", "title": "Alias"},
        "loop": {"$ref": "#/definitions/loop"},
        "a/b": {"type": "integer"},
        "list": [{"type": "boolean"}],
        "scalar": 3,
    }
}


def test_finds_definition():
    assert find_schema_definition("#/definitions/name", ROOT) == {"type": "string", "title": "Name"}


def test_root_pointer():
    assert find_schema_definition("#", ROOT) is ROOT


def test_follows_chained_references_with_local_overrides():
    assert find_schema_definition("#/definitions/alias", ROOT) == {"type": "string", "title": "Alias"}


def test_self_referencing_chain_stops_without_error():
    assert find_schema_definition("#/definitions/loop", ROOT) == {"$ref": "#/definitions/loop"}


def test_escaped_pointer_and_list_index():
    assert find_schema_definition("#/definitions/a~1b", ROOT) == {"type": "integer"}
    assert find_schema_definition("#/definitions/list/0", ROOT) == {"type": "boolean"}


@pytest.mark.parametrize(
    "ref",
    [
        "#/definitions/missing",
        "#/definitions/list/3",
        "#/definitions/scalar",
        "other.json#/definitions/name",
        "#definitions",
        42,
    ],
)
def test_unresolvable_references(ref):
    with pytest.raises(SchemaReferenceError) as exc_info:
        find_schema_definition(ref, ROOT)
    assert exc_info.value.ref == ref
    assert isinstance(exc_info.value, SchemaResolutionError)
    assert isinstance(exc_info.value, ValueError)
