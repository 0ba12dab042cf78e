from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from jsonschema import Draft7Validator
from jsonschema.validators import validator_for
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT7

from .constants import REF_KEY

ROOT_SCHEMA_URI = 'urn:json-form-schema:root'


class SchemaValidator(Protocol):
    def is_valid(self, schema: Dict[str, Any], form_data: Any, root_schema: Optional[Dict[str, Any]] = None) -> bool:
        ...


def _rebase_refs(node: Any) -> Any:
    """Point local `#...` references at the registered root schema."""
    if isinstance(node, dict):
        out = {}
        for key, value in node.items():
            if key == REF_KEY and isinstance(value, str) and value.startswith('#'):
                out[key] = ROOT_SCHEMA_URI + value
            else:
                out[key] = _rebase_refs(value)
        return out
    if isinstance(node, list):
        return [_rebase_refs(item) for item in node]
    return node


class JsonSchemaValidator:
    """Checks form data against a schema fragment with `jsonschema`.

    Used only to decide which `oneOf` branch of a dependency is active. Local
    references inside the fragment resolve against the root schema.
    """

    def __init__(self, default_cls=Draft7Validator):
        self.default_cls = default_cls

    def is_valid(self, schema: Dict[str, Any], form_data: Any, root_schema: Optional[Dict[str, Any]] = None) -> bool:
        cls = validator_for(root_schema or schema, default=self.default_cls)
        root_resource = Resource.from_contents(root_schema or {}, default_specification=DRAFT7)
        registry = Registry().with_resource(ROOT_SCHEMA_URI, root_resource)
        return cls(_rebase_refs(schema), registry=registry).is_valid(form_data)
