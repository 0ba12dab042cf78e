from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .constants import DEFAULT_ID_PREFIX, DEFAULT_ID_SEPARATOR, DEFAULT_MAX_DEPTH
from .merge import AllOfMerger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormOptions:
    id_prefix: str = DEFAULT_ID_PREFIX
    id_separator: str = DEFAULT_ID_SEPARATOR
    custom_merge_all_of: Optional[AllOfMerger] = None
    max_depth: int = DEFAULT_MAX_DEPTH


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    return raw


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < 1:
        logger.warning("Ignoring %s=%r: must be positive", name, raw)
        return default
    return value


def default_form_options(custom_merge_all_of: Optional[AllOfMerger] = None) -> FormOptions:
    return FormOptions(
        id_prefix=_env_str('JSON_FORM_ID_PREFIX', DEFAULT_ID_PREFIX),
        id_separator=_env_str('JSON_FORM_ID_SEPARATOR', DEFAULT_ID_SEPARATOR),
        custom_merge_all_of=custom_merge_all_of,
        max_depth=_env_int('JSON_FORM_MAX_DEPTH', DEFAULT_MAX_DEPTH),
    )
