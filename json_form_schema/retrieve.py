from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    ALL_OF_KEY,
    DEFAULT_MAX_DEPTH,
    DEPENDENCIES_KEY,
    ONE_OF_KEY,
    PROPERTIES_KEY,
    REF_KEY,
    REQUIRED_KEY,
    RESOLVABLE_KEYS,
)
from .equality import deep_equals
from .errors import SchemaDepthError, UnresolvableCompositionError
from .merge import AllOfMerger, pick_merger, union_required
from .refs import find_schema_definition
from .validator import JsonSchemaValidator, SchemaValidator

logger = logging.getLogger(__name__)


def needs_resolution(schema: Any) -> bool:
    return isinstance(schema, dict) and any(key in schema for key in RESOLVABLE_KEYS)


def is_guarded(schema: Dict[str, Any], recurse_list: Tuple[Dict[str, Any], ...]) -> bool:
    return any(deep_equals(seen, schema) for seen in recurse_list)


class _Resolver:
    """One top-level resolution call; holds only the read-only call parameters."""

    def __init__(self, validator, root_schema, custom_merge_all_of, max_depth):
        self.validator: SchemaValidator = validator or JsonSchemaValidator()
        self.root_schema: Dict[str, Any] = root_schema or {}
        self.merge: AllOfMerger = pick_merger(custom_merge_all_of)
        self.max_depth = max_depth

    def retrieve(self, schema: Any, form_data: Any, recurse_list: Tuple[Dict[str, Any], ...], depth: int) -> Dict[str, Any]:
        if not isinstance(schema, dict):
            return {}
        if not needs_resolution(schema):
            return schema
        if depth > self.max_depth:
            raise SchemaDepthError(self.max_depth)

        expanded = self.expand(schema, form_data, recurse_list, depth)
        if is_guarded(expanded, recurse_list):
            logger.debug("Cycle detected while resolving %s; stopping", expanded.get(REF_KEY, 'schema'))
            return expanded
        return self.retrieve(expanded, form_data, recurse_list + (expanded,), depth + 1)

    def expand(self, schema, form_data, recurse_list, depth) -> Dict[str, Any]:
        if REF_KEY in schema:
            return self.expand_reference(schema)
        if DEPENDENCIES_KEY in schema:
            return self.expand_dependencies(schema, form_data, recurse_list, depth)
        return self.expand_all_of(schema, form_data, recurse_list, depth)

    def expand_reference(self, schema: Dict[str, Any]) -> Dict[str, Any]:
        local = {k: v for k, v in schema.items() if k != REF_KEY}
        target = find_schema_definition(schema[REF_KEY], self.root_schema)
        return {**target, **local}

    def expand_all_of(self, schema, form_data, recurse_list, depth) -> Dict[str, Any]:
        branches = schema[ALL_OF_KEY]
        if not isinstance(branches, list):
            raise UnresolvableCompositionError(f"allOf must be a list, got {type(branches).__name__}")
        base = {k: v for k, v in schema.items() if k != ALL_OF_KEY}
        resolved = [self.retrieve(branch, form_data, recurse_list, depth + 1) for branch in branches]
        return self.merge([base] + resolved)

    def expand_dependencies(self, schema, form_data, recurse_list, depth) -> Dict[str, Any]:
        dependencies = schema[DEPENDENCIES_KEY]
        if not isinstance(dependencies, dict):
            raise UnresolvableCompositionError(
                f"dependencies must be an object, got {type(dependencies).__name__}"
            )
        resolved = {k: v for k, v in schema.items() if k != DEPENDENCIES_KEY}
        if not isinstance(form_data, dict):
            return resolved

        properties = resolved.get(PROPERTIES_KEY)
        for key, dependency in dependencies.items():
            if key not in form_data:
                continue
            if isinstance(properties, dict) and key not in properties:
                continue
            if isinstance(dependency, list):
                resolved = self.with_dependent_properties(resolved, dependency)
            elif isinstance(dependency, dict):
                resolved = self.with_dependent_schema(resolved, key, dependency, form_data, recurse_list, depth)
            else:
                raise UnresolvableCompositionError(f"Invalid dependency for '{key}': {dependency!r}")
        return resolved

    @staticmethod
    def with_dependent_properties(schema: Dict[str, Any], additionally_required: List[str]) -> Dict[str, Any]:
        required = schema.get(REQUIRED_KEY)
        if isinstance(required, list):
            return {**schema, REQUIRED_KEY: union_required(required, additionally_required)}
        return {**schema, REQUIRED_KEY: list(additionally_required)}

    def with_dependent_schema(self, schema, key, dependency, form_data, recurse_list, depth) -> Dict[str, Any]:
        dependent = self.retrieve(dependency, form_data, recurse_list, depth + 1)
        one_of = dependent.get(ONE_OF_KEY)
        dependent = {k: v for k, v in dependent.items() if k != ONE_OF_KEY}
        schema = self.merge([schema, dependent])
        if one_of is None:
            return schema
        if not isinstance(one_of, list):
            raise UnresolvableCompositionError(f"oneOf in dependency '{key}' must be a list")

        branches = [self.retrieve(branch, form_data, recurse_list, depth + 1) for branch in one_of]
        matching = [branch for branch in branches if self.branch_matches(branch, key, form_data)]
        if len(matching) != 1:
            logger.warning(
                "Ignoring oneOf in dependency '%s': %d branches match the form data, expected exactly one",
                key,
                len(matching),
            )
            return schema

        branch = matching[0]
        branch_properties = {k: v for k, v in branch[PROPERTIES_KEY].items() if k != key}
        return self.merge([schema, {**branch, PROPERTIES_KEY: branch_properties}])

    def branch_matches(self, branch: Dict[str, Any], key: str, form_data: Any) -> bool:
        properties = branch.get(PROPERTIES_KEY)
        if not isinstance(properties, dict) or key not in properties:
            return False
        condition = {'type': 'object', PROPERTIES_KEY: {key: properties[key]}}
        return self.validator.is_valid(condition, form_data, self.root_schema)


def retrieve_schema(
    validator: Optional[SchemaValidator],
    schema: Any,
    root_schema: Optional[Dict[str, Any]] = None,
    form_data: Any = None,
    custom_merge_all_of: Optional[AllOfMerger] = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Dict[str, Any]:
    """Resolve `$ref`, `dependencies` and `allOf` on `schema` for the current form data.

    Expansion repeats until the node carries none of those keywords or an
    expansion structurally equal to an earlier one shows up, in which case that
    node is returned as-is. Nested `properties`/`items` are left untouched; the
    id and path builders resolve them as they walk.

    :param validator: decides which `oneOf` branch of a dependency is active;
        defaults to a `JsonSchemaValidator`
    :param custom_merge_all_of: replaces the default `allOf` merge policy
    :raises SchemaReferenceError: a `$ref` target is missing from `root_schema`
    :raises UnresolvableCompositionError: composition keywords cannot be merged
    :raises SchemaDepthError: expansion goes deeper than `max_depth`
    """
    resolver = _Resolver(validator, root_schema, custom_merge_all_of, max_depth)
    return resolver.retrieve(schema, form_data, (), 0)
