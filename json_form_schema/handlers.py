from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import gradio as gr

from .accessors import get_form_value, get_value_by_path
from .config import FormOptions, default_form_options
from .constants import DEFAULT_ID_PREFIX, DEFAULT_ID_SEPARATOR, ITEMS_KEY, PROPERTIES_KEY
from .enum_options import EnumOption, enum_options_index_for_value, options_list
from .form import FormSchema, ResolvedForm
from .io_utils import parse_field_value, parse_json_text, read_schema_document
from .paths import split_path
from .schema_utils import collect_ids, field_paths, leaf_ids

logger = logging.getLogger(__name__)


def build_form(schema: Dict[str, Any], id_prefix: Optional[str] = None, id_separator: Optional[str] = None) -> FormSchema:
    defaults = default_form_options()
    options = FormOptions(
        id_prefix=id_prefix or defaults.id_prefix,
        id_separator=id_separator or defaults.id_separator,
        max_depth=defaults.max_depth,
    )
    return FormSchema(schema, options=options)


def summarize(resolved: ResolvedForm) -> str:
    ids = collect_ids(resolved.id_schema)
    return f"Resolved {len(ids)} fields ({len(leaf_ids(resolved.id_schema))} inputs)."


def load_schema_handler(file_obj):
    if file_obj is None:
        return None, "No file uploaded."
    try:
        schema = read_schema_document(file_obj)
    except ValueError as e:
        return None, f"Error parsing schema: {str(e)}"
    return schema, "Schema loaded."


def resolve_form_handler(schema, form_text, id_prefix=DEFAULT_ID_PREFIX, id_separator=DEFAULT_ID_SEPARATOR):
    """Resolve the uploaded schema for the typed form data.

    Returns (resolved schema, id tree, path tree, form data, status, field dropdown update).
    """
    if schema is None:
        return None, None, None, None, "No schema loaded.", gr.update(choices=[], value=None)
    try:
        form_data = parse_json_text(form_text, default={})
        resolved = build_form(schema, id_prefix, id_separator).resolve(form_data)
    except ValueError as e:
        logger.info("Resolution failed: %s", e)
        return None, None, None, None, f"Error: {str(e)}", gr.update(choices=[], value=None)

    choices = leaf_ids(resolved.id_schema)
    return (
        resolved.schema,
        resolved.id_schema,
        resolved.path_schema,
        resolved.form_data,
        summarize(resolved),
        gr.update(choices=choices, value=choices[0] if choices else None),
    )


def apply_field_change_handler(schema, form_data, field_id, raw_value, id_prefix=DEFAULT_ID_PREFIX,
                               id_separator=DEFAULT_ID_SEPARATOR):
    """Route a value typed for `field_id` back into the form data and resolve again.

    Returns (resolved schema, id tree, path tree, form data, status).
    """
    if schema is None:
        return None, None, None, form_data, "No schema loaded."
    if not field_id:
        return gr.update(), gr.update(), gr.update(), form_data, "Select a field first."
    try:
        resolved = build_form(schema, id_prefix, id_separator).apply_change(
            form_data if form_data is not None else {}, field_id, parse_field_value(raw_value)
        )
    except KeyError:
        return gr.update(), gr.update(), gr.update(), form_data, f"Unknown field: {field_id}"
    except ValueError as e:
        return gr.update(), gr.update(), gr.update(), form_data, f"Error: {str(e)}"
    return resolved.schema, resolved.id_schema, resolved.path_schema, resolved.form_data, summarize(resolved)


def enum_fields(resolved_form: FormSchema, form_data: Any) -> List[Dict[str, Any]]:
    """Describe every enum-like input of the resolved form for the renderer.

    Each entry carries the field id, its data path, label, options and the
    currently selected option index.
    """
    id_schema = resolved_form.to_id_schema(form_data=form_data)
    path_schema = resolved_form.to_path_schema(form_data=form_data)
    paths = field_paths(id_schema, path_schema)
    schema = resolved_form.retrieve_schema(form_data=form_data)

    fields: List[Dict[str, Any]] = []
    for field_id in leaf_ids(id_schema):
        path = paths.get(field_id, '')
        field_schema = _schema_at_path(resolved_form, schema, path, form_data)
        options: Optional[List[EnumOption]] = options_list(field_schema) if field_schema else None
        if not options:
            continue
        parts = split_path(path)
        fields.append({
            'id': field_id,
            'path': path,
            'label': field_schema.get('title') or (parts[-1] if parts else field_id),
            'options': options,
            'selected': enum_options_index_for_value(get_value_by_path(form_data, path), options),
        })
    return fields


def _unwrap_items(resolved_form: FormSchema, schema: Any, form_data: Any):
    # Array fields share their item's path, so descend through `items` wrappers.
    for _ in range(resolved_form.options.max_depth):
        if not isinstance(schema, dict) or PROPERTIES_KEY in schema or not isinstance(schema.get(ITEMS_KEY), dict):
            break
        schema = resolved_form.retrieve_schema(schema[ITEMS_KEY], form_data=form_data)
    return schema


def _schema_at_path(resolved_form: FormSchema, schema: Dict[str, Any], path: str, form_data: Any):
    current = schema
    data = form_data
    for part in split_path(path):
        current = _unwrap_items(resolved_form, current, data)
        properties = current.get(PROPERTIES_KEY) if isinstance(current, dict) else None
        if not isinstance(properties, dict) or part not in properties:
            return None
        data = get_form_value(data, part)
        current = resolved_form.retrieve_schema(properties[part], form_data=data)
    return _unwrap_items(resolved_form, current, data)
