from __future__ import annotations


class SchemaResolutionError(ValueError):
    """Base class for failures while resolving a schema."""


class SchemaReferenceError(SchemaResolutionError):
    """A `$ref` points at a location that does not exist in the root schema."""

    def __init__(self, ref, reason: str = ''):
        self.ref = ref
        message = f"Could not find a definition for {ref}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnresolvableCompositionError(SchemaResolutionError):
    """An `allOf`/`dependencies` merge cannot be completed."""


class SchemaDepthError(SchemaResolutionError):
    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"Schema nesting exceeds the maximum depth of {max_depth}")
