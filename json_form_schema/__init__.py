"""Core logic for JSON Form Schema.

The Gradio demo lives in `app.py`. This package contains pure functions that:
- resolve `$ref`, `allOf` and `dependencies` into an effective schema
- classify schema nodes
- derive per-field identifier and data-path trees
- map enum options and widget ids for a rendering layer
"""
from .config import FormOptions, default_form_options
from .equality import deep_equals
from .errors import (
    SchemaDepthError,
    SchemaReferenceError,
    SchemaResolutionError,
    UnresolvableCompositionError,
)
from .form import FormSchema, ResolvedForm
from .id_tree import to_id_schema
from .merge import merge_all_of, merge_schemas
from .path_tree import to_path_schema
from .retrieve import retrieve_schema
from .schema_type import SchemaType, get_schema_type
from .validator import JsonSchemaValidator

__all__ = [
    'FormOptions',
    'FormSchema',
    'JsonSchemaValidator',
    'ResolvedForm',
    'SchemaDepthError',
    'SchemaReferenceError',
    'SchemaResolutionError',
    'SchemaType',
    'UnresolvableCompositionError',
    'deep_equals',
    'default_form_options',
    'get_schema_type',
    'merge_all_of',
    'merge_schemas',
    'retrieve_schema',
    'to_id_schema',
    'to_path_schema',
]
