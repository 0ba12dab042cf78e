from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .accessors import get_form_value, set_value_by_path
from .config import FormOptions
from .constants import ITEMS_KEY, PROPERTIES_KEY
from .id_tree import to_id_schema
from .path_tree import to_path_schema
from .paths import split_path
from .retrieve import retrieve_schema
from .schema_utils import field_paths
from .validator import JsonSchemaValidator, SchemaValidator

logger = logging.getLogger(__name__)


@dataclass
class ResolvedForm:
    """Everything the rendering layer needs; it must not re-resolve any of it."""

    schema: Dict[str, Any]
    id_schema: Dict[str, Any]
    path_schema: Dict[str, Any]
    form_data: Any


class FormSchema:
    """Binds a validator, root schema and options for one form session."""

    def __init__(
        self,
        root_schema: Dict[str, Any],
        validator: Optional[SchemaValidator] = None,
        options: Optional[FormOptions] = None,
    ):
        self.root_schema = root_schema
        self.validator = validator or JsonSchemaValidator()
        self.options = options or FormOptions()

    def retrieve_schema(self, schema: Optional[Dict[str, Any]] = None, form_data: Any = None) -> Dict[str, Any]:
        return retrieve_schema(
            self.validator,
            self.root_schema if schema is None else schema,
            self.root_schema,
            form_data,
            self.options.custom_merge_all_of,
            self.options.max_depth,
        )

    def to_id_schema(self, schema: Optional[Dict[str, Any]] = None, base_id: Optional[str] = None,
                     form_data: Any = None) -> Dict[str, Any]:
        return to_id_schema(
            self.validator,
            self.root_schema if schema is None else schema,
            base_id,
            self.root_schema,
            form_data,
            self.options.id_prefix,
            self.options.id_separator,
            self.options.custom_merge_all_of,
            self.options.max_depth,
        )

    def to_path_schema(self, schema: Optional[Dict[str, Any]] = None, name: str = '',
                       form_data: Any = None) -> Dict[str, Any]:
        return to_path_schema(
            self.validator,
            self.root_schema if schema is None else schema,
            name,
            self.root_schema,
            form_data,
            self.options.custom_merge_all_of,
            self.options.max_depth,
        )

    def resolve(self, form_data: Any = None) -> ResolvedForm:
        schema = self.retrieve_schema(form_data=form_data)
        return ResolvedForm(
            schema=schema,
            id_schema=self.to_id_schema(form_data=form_data),
            path_schema=self.to_path_schema(form_data=form_data),
            form_data=form_data,
        )

    def field_paths(self, form_data: Any = None) -> Dict[str, str]:
        return field_paths(self.to_id_schema(form_data=form_data), self.to_path_schema(form_data=form_data))

    def apply_change(self, form_data: Any, field_id: str, value: Any) -> ResolvedForm:
        """Store `value` for the field with id `field_id` and resolve again.

        The caller's form data is left untouched.

        :raises KeyError: no field with that id exists for the current form data
        :raises ValueError: the field sits inside an array item the path cannot address
        """
        paths = self.field_paths(form_data)
        if field_id not in paths:
            raise KeyError(field_id)
        self._ensure_addressable(field_id, paths[field_id], form_data)
        updated = set_value_by_path(deepcopy(form_data), paths[field_id], value)
        logger.debug("Field %s (%r) changed", field_id, paths[field_id])
        return self.resolve(updated)

    def _ensure_addressable(self, field_id: str, path: str, form_data: Any) -> None:
        # Array items share the array's path, so nothing below an `items` envelope has a path of its own.
        schema = self.retrieve_schema(form_data=form_data)
        data = form_data
        for part in split_path(path):
            if ITEMS_KEY in schema:
                raise ValueError(f"Field {field_id} sits inside array items and has no data path")
            properties = schema.get(PROPERTIES_KEY)
            if not isinstance(properties, dict) or part not in properties:
                return
            data = get_form_value(data, part)
            schema = self.retrieve_schema(properties[part], form_data=data)
