"""Type and property descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PropertyKind(str, Enum):
    """Primitive storage kind of a declared property."""

    STRING = "string"
    TEXT = "text"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    UNSIGNED_INTEGER = "unsigned_integer"
    FLOAT = "float"
    TIMESTAMP = "timestamp"
    IDENTIFIER = "identifier"
    LINK = "link"
    OTHER = "other"

    @property
    def is_string(self) -> bool:
        return self in (PropertyKind.STRING, PropertyKind.TEXT)

    @property
    def is_link(self) -> bool:
        """Kinds that may reference another object."""
        return self in (PropertyKind.LINK, PropertyKind.IDENTIFIER)


class LinkRole(str, Enum):
    """Hierarchy-defining property roles."""

    PARENT = "parent"
    UP = "up"


@dataclass(frozen=True)
class PropertyDescriptor:
    """Definition of one declared property.

    Attributes:
        name: Property name.
        kind: Primitive storage kind.
        link_target: Statically bound target type name, or None when the
            target is dynamic (resolved per instance).
    """

    name: str
    kind: PropertyKind
    link_target: str | None = None

    @property
    def is_link(self) -> bool:
        return self.kind.is_link

    @property
    def is_dynamic_link(self) -> bool:
        """Untyped reference stored as a generic identifier."""
        return self.link_target is None and self.kind is PropertyKind.IDENTIFIER


@dataclass(frozen=True)
class TypeDescriptor:
    """Definition of one object type.

    Attributes:
        name: Type name.
        properties: Declared properties in declaration order.
        links: Role bindings as (role, property name) pairs.
        name_property: Explicitly declared name-bearing property, if any.
    """

    name: str
    properties: tuple[PropertyDescriptor, ...] = ()
    links: tuple[tuple[LinkRole, str], ...] = ()
    name_property: str | None = field(default=None)

    def get_property(self, name: str) -> PropertyDescriptor | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def has_property(self, name: str) -> bool:
        return self.get_property(name) is not None

    def link_property_name(self, role: LinkRole) -> str | None:
        """Name of the property bound to a link role, or None."""
        for bound_role, prop_name in self.links:
            if bound_role is role:
                return prop_name
        return None

    @property
    def roles(self) -> tuple[LinkRole, ...]:
        return tuple(role for role, _ in self.links)

    @property
    def property_names(self) -> list[str]:
        return [p.name for p in self.properties]
