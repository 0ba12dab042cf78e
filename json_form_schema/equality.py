from __future__ import annotations

from typing import Any, Optional

from .constants import REQUIRED_KEY, TYPE_KEY

# Keywords whose list values are compared as sets.
UNORDERED_KEYS = frozenset({REQUIRED_KEY, TYPE_KEY})


def deep_equals(a: Any, b: Any) -> bool:
    """Structural equality over parsed schema / form-data trees.

    Mapping key order is ignored. Sequence order matters except for the values of
    `required` and `type`. Booleans never equal numbers, and callables compare
    equal to each other so attached handlers do not defeat cycle detection.
    """
    return _equals(a, b, None)


def _equals(a: Any, b: Any, key: Optional[str]) -> bool:
    if callable(a) and callable(b):
        return True
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, dict) and isinstance(b, dict):
        if a.keys() != b.keys():
            return False
        return all(_equals(a[k], b[k], k) for k in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        if len(a) != len(b):
            return False
        if key in UNORDERED_KEYS:
            return _unordered_equals(list(a), list(b))
        return all(_equals(x, y, None) for x, y in zip(a, b))
    if isinstance(a, (dict, list, tuple)) or isinstance(b, (dict, list, tuple)):
        return False
    return a == b


def _unordered_equals(a: list, b: list) -> bool:
    remaining = list(b)
    for item in a:
        for idx, candidate in enumerate(remaining):
            if _equals(item, candidate, None):
                del remaining[idx]
                break
        else:
            return False
    return not remaining
