from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .constants import ANY_OF_KEY, CONST_KEY, ENUM_KEY, ENUM_NAMES_KEY, ID_KEY, ONE_OF_KEY
from .equality import deep_equals

IdLike = Union[str, Dict[str, Any]]


@dataclass(frozen=True)
class EnumOption:
    label: str
    value: Any
    schema: Optional[Dict[str, Any]] = field(default=None, compare=False)


def _to_id(id_: IdLike, suffix: str) -> str:
    base = id_ if isinstance(id_, str) else id_[ID_KEY]
    return f"{base}__{suffix}"


def description_id(id_: IdLike) -> str:
    return _to_id(id_, 'description')


def error_id(id_: IdLike) -> str:
    return _to_id(id_, 'error')


def examples_id(id_: IdLike) -> str:
    return _to_id(id_, 'examples')


def help_id(id_: IdLike) -> str:
    return _to_id(id_, 'help')


def title_id(id_: IdLike) -> str:
    return _to_id(id_, 'title')


def aria_described_by_ids(id_: IdLike, include_examples: bool = False) -> str:
    """Space-separated ids a widget references through `aria-describedby`."""
    examples = f" {examples_id(id_)}" if include_examples else ''
    return f"{error_id(id_)} {description_id(id_)}{examples}"


def option_id(id_: str, option_index: int) -> str:
    return f"{id_}-{option_index}"


def _constant_value(schema: Dict[str, Any]):
    if CONST_KEY in schema:
        return schema[CONST_KEY]
    values = schema.get(ENUM_KEY)
    if isinstance(values, list) and len(values) == 1:
        return values[0]
    raise ValueError(f"schema cannot be inferred as a constant: {schema!r}")


def _label(value: Any) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def options_list(schema: Dict[str, Any]) -> Optional[List[EnumOption]]:
    """Selectable options of an enum-like schema, or None when it has none.

    Options come from `enum` (labelled by `enumNames` when present) or from
    constant `oneOf` / `anyOf` branches (labelled by their `title`).
    """
    values = schema.get(ENUM_KEY)
    if isinstance(values, list):
        names = schema.get(ENUM_NAMES_KEY) or []
        return [
            EnumOption(label=names[i] if i < len(names) else _label(value), value=value)
            for i, value in enumerate(values)
        ]

    alternatives = schema.get(ONE_OF_KEY) or schema.get(ANY_OF_KEY)
    if not isinstance(alternatives, list):
        return None
    options: List[EnumOption] = []
    for alternative in alternatives:
        if not isinstance(alternative, dict):
            continue
        value = _constant_value(alternative)
        options.append(EnumOption(label=alternative.get('title', _label(value)), value=value, schema=alternative))
    return options


def enum_options_is_selected(value: Any, selected: Any) -> bool:
    if isinstance(selected, list):
        return any(deep_equals(item, value) for item in selected)
    return deep_equals(selected, value)


def enum_options_index_for_value(value: Any, options: Optional[List[EnumOption]], multiple: bool = False):
    """String index (or list of indexes when `multiple`) of the options matching `value`."""
    selected = [str(i) for i, option in enumerate(options or []) if enum_options_is_selected(option.value, value)]
    if multiple:
        return selected
    return selected[0] if selected else None


def enum_options_value_for_index(value_index: Any, options: Optional[List[EnumOption]], empty_value: Any = None):
    """Inverse of `enum_options_index_for_value`; unknown indexes map to `empty_value`."""
    options = options or []
    if isinstance(value_index, list):
        values = [enum_options_value_for_index(index, options) for index in value_index]
        return [v for v in values if v != empty_value]

    if value_index in ('', None):
        return empty_value
    try:
        index = int(value_index)
    except (TypeError, ValueError):
        return empty_value
    if 0 <= index < len(options):
        return options[index].value
    return empty_value
