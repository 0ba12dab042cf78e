from __future__ import annotations

from enum import Enum
from typing import Any

from .constants import CONST_KEY, ENUM_KEY, ITEMS_KEY, PROPERTIES_KEY, TYPE_KEY


class SchemaType(str, Enum):
    OBJECT = 'object'
    ARRAY = 'array'
    STRING = 'string'
    NUMBER = 'number'
    INTEGER = 'integer'
    BOOLEAN = 'boolean'
    NULL = 'null'
    MULTI = 'multi'
    UNKNOWN = 'unknown'


def guess_type(value: Any) -> SchemaType:
    """Kind of a JSON value, as it would be declared in a schema."""
    if value is None:
        return SchemaType.NULL
    if isinstance(value, bool):
        return SchemaType.BOOLEAN
    if isinstance(value, int):
        return SchemaType.INTEGER
    if isinstance(value, float):
        return SchemaType.NUMBER
    if isinstance(value, str):
        return SchemaType.STRING
    if isinstance(value, (list, tuple)):
        return SchemaType.ARRAY
    if isinstance(value, dict):
        return SchemaType.OBJECT
    return SchemaType.UNKNOWN


def _declared_type(name: Any) -> SchemaType:
    try:
        return SchemaType(name)
    except ValueError:
        return SchemaType.UNKNOWN


def get_schema_type(schema: Any) -> SchemaType:
    """Classify a (possibly unresolved) schema node.

    The declared `type` wins. A two-member list containing "null" is a nullable
    single type; any other multi-member list is MULTI. Without a declared type the
    kind is inferred from `const`, `properties`, `items` and `enum`, in that order.
    Any non-empty `enum` is a STRING field, whatever its values are.
    Callers must resolve `$ref` nodes first to get a meaningful answer.
    """
    if not isinstance(schema, dict):
        return SchemaType.UNKNOWN

    declared = schema.get(TYPE_KEY)
    if isinstance(declared, (list, tuple)):
        types = list(dict.fromkeys(declared))
        if len(types) == 2 and 'null' in types:
            types.remove('null')
        if len(types) == 1:
            return _declared_type(types[0])
        return SchemaType.MULTI if types else SchemaType.UNKNOWN
    if declared is not None:
        return _declared_type(declared)

    if CONST_KEY in schema:
        return guess_type(schema[CONST_KEY])
    if PROPERTIES_KEY in schema:
        return SchemaType.OBJECT
    if ITEMS_KEY in schema:
        return SchemaType.ARRAY

    values = schema.get(ENUM_KEY)
    if isinstance(values, list) and values:
        return SchemaType.STRING

    return SchemaType.UNKNOWN
