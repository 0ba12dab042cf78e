from __future__ import annotations

ID_KEY = '$id'
NAME_KEY = '$name'
REF_KEY = '$ref'
ALL_OF_KEY = 'allOf'
ANY_OF_KEY = 'anyOf'
ONE_OF_KEY = 'oneOf'
CONST_KEY = 'const'
DEPENDENCIES_KEY = 'dependencies'
ENUM_KEY = 'enum'
ENUM_NAMES_KEY = 'enumNames'
ITEMS_KEY = 'items'
PROPERTIES_KEY = 'properties'
REQUIRED_KEY = 'required'
TYPE_KEY = 'type'

# Keywords that make a node a proxy or composite of its effective schema.
RESOLVABLE_KEYS = (REF_KEY, DEPENDENCIES_KEY, ALL_OF_KEY)

DEFAULT_ID_PREFIX = 'root'
DEFAULT_ID_SEPARATOR = '_'
DEFAULT_MAX_DEPTH = 100
