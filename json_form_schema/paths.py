from __future__ import annotations

from typing import List
from urllib.parse import unquote


def escape_path_segment(segment: str) -> str:
    """Escape a single property name for dot-path representation.

    - Dots are escaped as '\\.' so names like 'gpt-3.5-turbo' remain one segment.
    - Backslashes are escaped as '\\\\' to preserve round-tripping.
    """
    if not isinstance(segment, str):
        segment = str(segment)
    return segment.replace('\\', '\\\\').replace('.', '\\.')


def join_path(parent: str, name) -> str:
    escaped = escape_path_segment(name)
    return f"{parent}.{escaped}" if parent else escaped


def split_path(path: str) -> List[str]:
    """Split a dot path on unescaped '.' and unescape each segment."""
    if not path:
        return []
    if not isinstance(path, str):
        path = str(path)

    parts: List[str] = []
    buf: List[str] = []
    escaping = False

    for ch in path:
        if escaping:
            buf.append(ch)
            escaping = False
        elif ch == '\\':
            escaping = True
        elif ch == '.':
            parts.append(''.join(buf))
            buf = []
        else:
            buf.append(ch)

    if escaping:
        # Trailing backslash; treat as literal.
        buf.append('\\')

    parts.append(''.join(buf))
    return [p for p in parts if p != '']


def split_json_pointer(ref: str) -> List[str]:
    """Split the fragment of a local `$ref` ('#/a/b~1c') into decoded tokens."""
    fragment = unquote(ref[1:])
    if not fragment:
        return []
    if not fragment.startswith('/'):
        raise ValueError(f"Invalid JSON pointer: {fragment}")
    return [token.replace('~1', '/').replace('~0', '~') for token in fragment[1:].split('/')]
