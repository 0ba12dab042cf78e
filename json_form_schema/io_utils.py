from __future__ import annotations

import json
from typing import Any, Dict


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return json.loads(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def read_schema_document(file_obj) -> Dict[str, Any]:
    schema = read_json_content(file_obj)
    if not isinstance(schema, dict):
        raise ValueError(f"A schema must be a JSON object, got {type(schema).__name__}.")
    return schema


def parse_json_text(text: str, default: Any = None) -> Any:
    """Parse JSON typed into a textbox; blank input yields `default`."""
    if text is None or not text.strip():
        return default
    return json.loads(text)


def parse_field_value(raw: str) -> Any:
    """Interpret a typed field value as JSON when possible, otherwise as a plain string."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw
