from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Sequence

from .constants import ENUM_KEY, ITEMS_KEY, PROPERTIES_KEY, REQUIRED_KEY, TYPE_KEY
from .equality import deep_equals
from .errors import UnresolvableCompositionError

# Receives the ordered fragments [base, *branches] and returns one merged fragment.
AllOfMerger = Callable[[Sequence[Dict[str, Any]]], Dict[str, Any]]


def union_required(left: List[Any], right: List[Any]) -> List[Any]:
    merged = list(left)
    for name in right:
        if name not in merged:
            merged.append(name)
    return merged


def merge_schemas(left: Dict[str, Any], right: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge two schema fragments; `right` wins on conflicts.

    Nested mappings merge recursively and `required` lists are unioned.
    """
    acc = dict(left)
    for key, right_value in right.items():
        left_value = acc.get(key)
        if isinstance(left_value, dict) and isinstance(right_value, dict):
            acc[key] = merge_schemas(left_value, right_value)
        elif key == REQUIRED_KEY and isinstance(left_value, list) and isinstance(right_value, list):
            acc[key] = union_required(left_value, right_value)
        else:
            acc[key] = right_value
    return acc


def _as_type_list(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def intersect_types(left: Any, right: Any):
    left_types = _as_type_list(left)
    right_types = _as_type_list(right)
    result: List[str] = []
    for name in left_types:
        if name in right_types:
            candidate = name
        elif name == 'number' and 'integer' in right_types:
            candidate = 'integer'
        elif name == 'integer' and 'number' in right_types:
            candidate = 'integer'
        else:
            continue
        if candidate not in result:
            result.append(candidate)
    if not result:
        raise UnresolvableCompositionError(
            f"allOf branches declare incompatible types {left!r} and {right!r}"
        )
    return result[0] if len(result) == 1 else result


def intersect_enums(left: List[Any], right: List[Any]) -> List[Any]:
    result = [v for v in left if any(deep_equals(v, other) for other in right)]
    if not result:
        raise UnresolvableCompositionError(
            f"allOf branches declare disjoint enums {left!r} and {right!r}"
        )
    return result


def merge_subschemas(left: Dict[str, Any], right: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two schemas that must both hold, as for the branches of `allOf`."""
    acc = dict(left)
    for key, right_value in right.items():
        if key not in acc:
            acc[key] = right_value
            continue
        left_value = acc[key]
        if key == TYPE_KEY:
            acc[key] = intersect_types(left_value, right_value)
        elif key == REQUIRED_KEY and isinstance(left_value, list) and isinstance(right_value, list):
            acc[key] = union_required(left_value, right_value)
        elif key == ENUM_KEY and isinstance(left_value, list) and isinstance(right_value, list):
            acc[key] = intersect_enums(left_value, right_value)
        elif key == PROPERTIES_KEY and isinstance(left_value, dict) and isinstance(right_value, dict):
            properties = dict(left_value)
            for name, prop in right_value.items():
                if isinstance(properties.get(name), dict) and isinstance(prop, dict):
                    properties[name] = merge_subschemas(properties[name], prop)
                else:
                    properties[name] = prop
            acc[key] = properties
        elif key == ITEMS_KEY and isinstance(left_value, dict) and isinstance(right_value, dict):
            acc[key] = merge_subschemas(left_value, right_value)
        elif isinstance(left_value, dict) and isinstance(right_value, dict):
            acc[key] = merge_schemas(left_value, right_value)
        else:
            acc[key] = right_value
    return acc


def merge_all_of(fragments: Sequence[Dict[str, Any]]) -> Dict[str, Any]:
    """Default `allOf` policy: merge fragments left to right.

    Later fragments win on scalar conflicts, `properties` merge key-wise,
    `required` concatenates without duplicates, and `type` / `enum` values are
    intersected. An empty intersection raises UnresolvableCompositionError.
    """
    merged: Dict[str, Any] = {}
    for fragment in fragments:
        if not isinstance(fragment, dict):
            raise UnresolvableCompositionError(f"Cannot merge non-object schema {fragment!r}")
        merged = merge_subschemas(merged, fragment)
    return merged


def pick_merger(custom_merge_all_of: Optional[AllOfMerger]) -> AllOfMerger:
    return custom_merge_all_of or merge_all_of
