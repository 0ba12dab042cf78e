from __future__ import annotations

from typing import Any, Dict, List

from .constants import ID_KEY, NAME_KEY

MARKER_KEYS = (ID_KEY, NAME_KEY)


def _collect(tree: Any, marker: str) -> List[str]:
    values: List[str] = []
    if not isinstance(tree, dict):
        return values
    if marker in tree:
        values.append(tree[marker])
    for key, child in tree.items():
        if key not in MARKER_KEYS:
            values.extend(_collect(child, marker))
    return values


def collect_ids(id_schema: Dict[str, Any]) -> List[str]:
    """All `$id` values of an identifier tree, parents before children."""
    return _collect(id_schema, ID_KEY)


def collect_paths(path_schema: Dict[str, Any]) -> List[str]:
    return _collect(path_schema, NAME_KEY)


def tree_shape(tree: Any) -> Dict[str, Any]:
    """Nested key structure of an id or path tree with the marker keys dropped."""
    if not isinstance(tree, dict):
        return {}
    return {key: tree_shape(child) for key, child in tree.items() if key not in MARKER_KEYS}


def field_paths(id_schema: Dict[str, Any], path_schema: Dict[str, Any]) -> Dict[str, str]:
    """Pair every field id with its data path by walking both trees together."""
    pairs: Dict[str, str] = {}
    if ID_KEY in id_schema and NAME_KEY in path_schema:
        pairs[id_schema[ID_KEY]] = path_schema[NAME_KEY]
    for key, child in id_schema.items():
        if key in MARKER_KEYS:
            continue
        other = path_schema.get(key)
        if isinstance(child, dict) and isinstance(other, dict):
            pairs.update(field_paths(child, other))
    return pairs


def leaf_ids(id_schema: Dict[str, Any]) -> List[str]:
    """Ids of nodes without children, i.e. the fields a renderer draws inputs for."""
    children = [child for key, child in id_schema.items() if key not in MARKER_KEYS]
    if not children:
        return [id_schema[ID_KEY]] if ID_KEY in id_schema else []
    out: List[str] = []
    for child in children:
        if isinstance(child, dict):
            out.extend(leaf_ids(child))
    return out
