from __future__ import annotations

from typing import Any, Dict, Optional

from .constants import DEFAULT_ID_PREFIX, DEFAULT_ID_SEPARATOR, DEFAULT_MAX_DEPTH, ID_KEY
from .merge import AllOfMerger
from .tree_builder import TreeBuilder
from .validator import SchemaValidator


class IdTreeBuilder(TreeBuilder):
    marker_key = ID_KEY

    def __init__(self, validator, root_schema=None, custom_merge_all_of=None, max_depth=DEFAULT_MAX_DEPTH,
                 id_separator: str = DEFAULT_ID_SEPARATOR):
        super().__init__(validator, root_schema, custom_merge_all_of, max_depth)
        self.id_separator = id_separator

    def child_label(self, label: str, name: str) -> str:
        return f"{label}{self.id_separator}{name}"


def to_id_schema(
    validator: Optional[SchemaValidator],
    schema: Any,
    base_id: Optional[str] = None,
    root_schema: Optional[Dict[str, Any]] = None,
    form_data: Any = None,
    id_prefix: str = DEFAULT_ID_PREFIX,
    id_separator: str = DEFAULT_ID_SEPARATOR,
    custom_merge_all_of: Optional[AllOfMerger] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Dict[str, Any]:
    """Generate the identifier tree for `schema`.

    Every node carries `$id`; object nodes also carry one child per declared
    property, keyed by property name, whose id is `parent_id + id_separator + name`.

    >>> to_id_schema(None, {'type': 'object', 'properties': {'a': {'type': 'string'}}})
    {'$id': 'root', 'a': {'$id': 'root_a'}}
    """
    builder = IdTreeBuilder(validator, root_schema, custom_merge_all_of, max_depth, id_separator)
    return builder.build(schema, base_id or id_prefix, form_data)
