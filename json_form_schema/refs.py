from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from .constants import REF_KEY
from .errors import SchemaReferenceError
from .merge import merge_schemas
from .paths import split_json_pointer

logger = logging.getLogger(__name__)


def _lookup_pointer(ref: Any, root_schema: Any) -> Any:
    if not isinstance(ref, str) or not ref.startswith('#'):
        raise SchemaReferenceError(ref, "only local '#' references are supported")
    try:
        tokens = split_json_pointer(ref)
    except ValueError as exc:
        raise SchemaReferenceError(ref, str(exc)) from exc

    current = root_schema
    for token in tokens:
        if isinstance(current, dict) and token in current:
            current = current[token]
        elif isinstance(current, list) and token.isdigit() and int(token) < len(current):
            current = current[int(token)]
        else:
            raise SchemaReferenceError(ref, f"segment '{token}' is missing")
    if not isinstance(current, dict):
        raise SchemaReferenceError(ref, 'target is not a schema object')
    return current


def find_schema_definition(ref: str, root_schema: Dict[str, Any]) -> Dict[str, Any]:
    """Find the schema a local `$ref` points at inside `root_schema`.

    Chained references are followed. A chain that comes back to a pointer it has
    already visited stops there and returns the node still carrying its `$ref`.
    """
    return _find_definition(ref, root_schema or {}, ())


def _find_definition(ref: str, root_schema: Dict[str, Any], seen: Tuple[str, ...]) -> Dict[str, Any]:
    target = _lookup_pointer(ref, root_schema)
    seen = seen + (ref,)
    next_ref = target.get(REF_KEY)
    if next_ref is None:
        return target
    if next_ref in seen:
        logger.debug("Reference chain %s loops back to %s", ' -> '.join(seen), next_ref)
        return target

    remaining = {k: v for k, v in target.items() if k != REF_KEY}
    resolved = _find_definition(next_ref, root_schema, seen)
    if remaining:
        return merge_schemas(resolved, remaining)
    return resolved
