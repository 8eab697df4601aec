"""Declarative schema loading.

The object types the resolver knows about are described by a schema
document instead of being discovered by runtime reflection:

    types:
      - name: midgard_topic
        name_property: name
        links: {up: up}
        properties:
          - {name: guid, kind: identifier}
          - {name: name, kind: string}
          - {name: up, kind: link, target: midgard_topic}

load_schema() validates the document and returns a SchemaSpec that a
TypeRegistry is built from.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from graphcr.errors import ErrorContext, SchemaValidationError
from graphcr.schema.types import LinkRole, PropertyKind

logger = logging.getLogger(__name__)


class PropertySpec(BaseModel):
    """One declared property."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(..., min_length=1, description="Property name")
    kind: PropertyKind = Field(default=PropertyKind.STRING, description="Storage kind")
    target: str | None = Field(
        default=None, description="Statically bound link target type; omit for dynamic links"
    )

    @field_validator("kind", mode="before")
    @classmethod
    def coerce_kind(cls, v: Any) -> PropertyKind:
        if isinstance(v, PropertyKind):
            return v
        try:
            return PropertyKind(str(v).lower())
        except ValueError:
            logger.warning(f"Unknown property kind '{v}', treating it as '{PropertyKind.OTHER.value}'")
            return PropertyKind.OTHER


class TypeSpec(BaseModel):
    """One declared object type."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Type name")
    properties: list[PropertySpec] = Field(default_factory=list)
    links: dict[LinkRole, str] = Field(
        default_factory=dict, description="Link role -> name of the property playing it"
    )
    name_property: str | None = Field(default=None, description="Name-bearing property")


class SchemaSpec(BaseModel):
    """A complete schema document."""

    model_config = ConfigDict(extra="forbid")

    types: list[TypeSpec] = Field(default_factory=list)

    def get(self, name: str) -> TypeSpec | None:
        for type_spec in self.types:
            if type_spec.name == name:
                return type_spec
        return None

    @property
    def type_names(self) -> list[str]:
        return [t.name for t in self.types]


def parse_schema(data: dict[str, Any] | SchemaSpec) -> SchemaSpec:
    """Validate a schema document.

    Args:
        data: Parsed schema document or an already built SchemaSpec.

    Returns:
        The validated SchemaSpec.

    Raises:
        SchemaValidationError: If the document is malformed or inconsistent.
    """
    if isinstance(data, SchemaSpec):
        schema = data
    else:
        try:
            schema = SchemaSpec.model_validate(data)
        except ValidationError as e:
            errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
            raise SchemaValidationError(
                message=f"Schema document failed validation ({len(errors)} error(s))",
                errors=errors,
                cause=e,
            ) from e

    errors = validate_schema(schema)
    if errors:
        raise SchemaValidationError(
            message=f"Schema is inconsistent: {errors[0]}",
            errors=errors,
        )
    return schema


def validate_schema(schema: SchemaSpec) -> list[str]:
    """Cross-check type and link declarations. Returns a list of problems."""
    errors: list[str] = []
    known: set[str] = set()
    for type_spec in schema.types:
        if type_spec.name in known:
            errors.append(f"duplicate type '{type_spec.name}'")
        known.add(type_spec.name)

    for type_spec in schema.types:
        props: dict[str, PropertySpec] = {}
        for prop in type_spec.properties:
            if prop.name in props:
                errors.append(f"{type_spec.name}: duplicate property '{prop.name}'")
            props[prop.name] = prop
            if prop.target is not None and prop.target not in known:
                errors.append(
                    f"{type_spec.name}.{prop.name}: link target '{prop.target}' is not a declared type"
                )
            if prop.target is not None and not prop.kind.is_link:
                errors.append(
                    f"{type_spec.name}.{prop.name}: only link or identifier properties can have a target"
                )

        for role, prop_name in type_spec.links.items():
            bound = props.get(prop_name)
            if bound is None:
                errors.append(
                    f"{type_spec.name}: '{role.value}' role bound to undeclared property '{prop_name}'"
                )
            elif not bound.kind.is_link:
                errors.append(
                    f"{type_spec.name}: '{role.value}' role bound to non-link property '{prop_name}'"
                )

        if type_spec.name_property is not None:
            named = props.get(type_spec.name_property)
            if named is None:
                errors.append(
                    f"{type_spec.name}: name_property '{type_spec.name_property}' is not declared"
                )
            elif not named.kind.is_string:
                errors.append(
                    f"{type_spec.name}: name_property '{type_spec.name_property}' is not a string"
                )

    return errors


def load_schema(path: str | Path) -> SchemaSpec:
    """Load and validate a YAML schema file."""
    path = Path(path)
    if not path.exists():
        raise SchemaValidationError(
            message=f"Schema file not found: {path}",
            context=ErrorContext(extra={"path": str(path)}),
        )

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SchemaValidationError(
            message=f"Failed to parse YAML schema: {e}",
            context=ErrorContext(extra={"path": str(path)}),
            cause=e,
        ) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SchemaValidationError(
            message=f"Schema must be a YAML object, got {type(data).__name__}",
            context=ErrorContext(extra={"path": str(path)}),
        )

    schema = parse_schema(data)
    logger.info(f"Loaded {len(schema.types)} type(s) from {path}")
    return schema
