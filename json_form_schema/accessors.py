from __future__ import annotations

from typing import Any

from .paths import split_path


def get_form_value(form_data: Any, name: str) -> Any:
    """Return the value stored under `name`, or None when form data is not a mapping.

    Form data is frequently not yet an object, e.g. when an array item has just
    been added and not populated.
    """
    if isinstance(form_data, dict):
        return form_data.get(name)
    return None


def get_value_by_path(data: Any, path: str) -> Any:
    """Retrieve a value from nested form data using a path-tree `$name`.

    Dict segments are looked up by key and list segments by integer index.
    Missing segments yield None.
    """
    val = data
    for key in split_path(path):
        if isinstance(val, dict):
            if key not in val:
                return None
            val = val[key]
        elif isinstance(val, list):
            try:
                val = val[int(key)]
            except (ValueError, IndexError):
                return None
        else:
            return None
    return val


def set_value_by_path(data: Any, path: str, value: Any):
    """Set a value in nested form data by dot path.

    Missing or scalar intermediate segments are replaced by empty dicts; lists are
    only crossed through an integer segment. The root path replaces the whole
    document.

    :raises ValueError: the path crosses a list without naming an item index
    """
    parts = split_path(path)
    if not parts:
        return value

    if not isinstance(data, (dict, list)):
        data = {}

    current = data
    for part, following in zip(parts, parts[1:] + [None]):
        if isinstance(current, list):
            if not part.isdigit() or int(part) >= len(current):
                raise ValueError(f"Path '{path}' crosses a list at '{part}' without a valid item index")
            key = int(part)
        else:
            key = part
        if following is None:
            current[key] = value
            break
        nxt = current[key] if isinstance(current, list) else current.get(key)
        if not isinstance(nxt, (dict, list)):
            nxt = {}
            current[key] = nxt
        current = nxt
    return data
