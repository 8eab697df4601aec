"""Object type schema: descriptors, declarative loading and the registry."""

from graphcr.schema.loader import (
    PropertySpec,
    SchemaSpec,
    TypeSpec,
    load_schema,
    parse_schema,
    validate_schema,
)
from graphcr.schema.registry import DEFAULT_RESERVED_TYPES, TypeRegistry
from graphcr.schema.types import LinkRole, PropertyDescriptor, PropertyKind, TypeDescriptor

__all__ = [
    "LinkRole",
    "PropertyKind",
    "PropertyDescriptor",
    "TypeDescriptor",
    "PropertySpec",
    "TypeSpec",
    "SchemaSpec",
    "load_schema",
    "parse_schema",
    "validate_schema",
    "TypeRegistry",
    "DEFAULT_RESERVED_TYPES",
]
