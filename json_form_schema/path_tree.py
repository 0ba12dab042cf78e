from __future__ import annotations

from typing import Any, Dict, Optional

from .constants import DEFAULT_MAX_DEPTH, NAME_KEY
from .merge import AllOfMerger
from .paths import join_path
from .tree_builder import TreeBuilder
from .validator import SchemaValidator


class PathTreeBuilder(TreeBuilder):
    marker_key = NAME_KEY

    def child_label(self, label: str, name: str) -> str:
        return join_path(label, name)


def to_path_schema(
    validator: Optional[SchemaValidator],
    schema: Any,
    name: str = '',
    root_schema: Optional[Dict[str, Any]] = None,
    form_data: Any = None,
    custom_merge_all_of: Optional[AllOfMerger] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Dict[str, Any]:
    """Generate the path tree for `schema`; same shape as `to_id_schema`.

    Each `$name` is the dot path of the field inside the form data, with the
    root at `name` ('' by default).
    """
    return PathTreeBuilder(validator, root_schema, custom_merge_all_of, max_depth).build(schema, name, form_data)
