from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple

from .accessors import get_form_value
from .constants import DEFAULT_MAX_DEPTH, ITEMS_KEY, PROPERTIES_KEY, REF_KEY
from .errors import SchemaDepthError
from .merge import AllOfMerger
from .retrieve import is_guarded, needs_resolution, retrieve_schema
from .schema_type import SchemaType, get_schema_type
from .validator import SchemaValidator

logger = logging.getLogger(__name__)


def is_bare_reference(schema: Any) -> bool:
    return isinstance(schema, dict) and REF_KEY in schema


class TreeBuilder:
    """Walks a schema alongside form data and labels every visited field.

    Subclasses decide the marker key stored on each node and how a child label
    is derived from its parent label and property name.
    """

    marker_key = ''

    def __init__(
        self,
        validator: Optional[SchemaValidator],
        root_schema: Optional[Dict[str, Any]] = None,
        custom_merge_all_of: Optional[AllOfMerger] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self.validator = validator
        self.root_schema = root_schema
        self.custom_merge_all_of = custom_merge_all_of
        self.max_depth = max_depth

    def child_label(self, label: str, name: str) -> str:
        raise NotImplementedError

    def resolve(self, schema: Any, form_data: Any) -> Dict[str, Any]:
        return retrieve_schema(
            self.validator,
            schema,
            self.root_schema,
            form_data,
            self.custom_merge_all_of,
            self.max_depth,
        )

    def build(self, schema: Any, label: str, form_data: Any) -> Dict[str, Any]:
        return self._walk(schema, label, form_data, (), 0)

    def _walk(self, schema: Any, label: str, form_data: Any, recurse_list: Tuple[Dict[str, Any], ...], depth: int) -> Dict[str, Any]:
        if depth > self.max_depth:
            raise SchemaDepthError(self.max_depth)
        node: Dict[str, Any] = {self.marker_key: label}
        if not isinstance(schema, dict):
            return node

        if needs_resolution(schema):
            resolved = self.resolve(schema, form_data)
            if not is_guarded(resolved, recurse_list):
                return self._walk(resolved, label, form_data, recurse_list + (resolved,), depth + 1)
            logger.debug("Schema for %s already visited; not descending", label)

        items = schema.get(ITEMS_KEY)
        if ITEMS_KEY in schema:
            if not is_bare_reference(items):
                return self._walk(items, label, form_data, recurse_list, depth + 1)
            resolved_items = self.resolve(items, form_data)
            if not is_guarded(resolved_items, recurse_list):
                return self._walk(resolved_items, label, form_data, recurse_list + (resolved_items,), depth + 1)

        properties = schema.get(PROPERTIES_KEY)
        if get_schema_type(schema) == SchemaType.OBJECT and isinstance(properties, dict):
            for name, field in properties.items():
                node[name] = self._walk(
                    field,
                    self.child_label(label, name),
                    # Form data may not be an object yet, e.g. a freshly added array item.
                    get_form_value(form_data, name),
                    recurse_list,
                    depth + 1,
                )
        return node
