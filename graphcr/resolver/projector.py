"""Projection of objects into generic, repository-agnostic nodes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, NamedTuple

from graphcr.errors import LookupFailedError, NotFoundError
from graphcr.ports.store import ObjectRecord
from graphcr.resolver.paths import PathResolver, is_segment
from graphcr.schema.types import PropertyDescriptor, PropertyKind

logger = logging.getLogger(__name__)

METADATA_PROPERTY = "metadata"


class TypeTag(IntEnum):
    """Abstract property types, numbered like the content-repository API."""

    UNDEFINED = 0
    STRING = 1
    LONG = 3
    DOUBLE = 4
    DATE = 5
    BOOLEAN = 6
    PATH = 8
    WEAKREFERENCE = 10

    @property
    def label(self) -> str:
        return _TAG_LABELS[self]


_TAG_LABELS = {
    TypeTag.UNDEFINED: "undefined",
    TypeTag.STRING: "String",
    TypeTag.LONG: "Long",
    TypeTag.DOUBLE: "Double",
    TypeTag.DATE: "Date",
    TypeTag.BOOLEAN: "Boolean",
    TypeTag.PATH: "Path",
    TypeTag.WEAKREFERENCE: "WeakReference",
}

KIND_TAGS: dict[PropertyKind, TypeTag] = {
    PropertyKind.STRING: TypeTag.STRING,
    PropertyKind.TEXT: TypeTag.STRING,
    PropertyKind.BOOLEAN: TypeTag.BOOLEAN,
    PropertyKind.INTEGER: TypeTag.LONG,
    PropertyKind.UNSIGNED_INTEGER: TypeTag.LONG,
    PropertyKind.FLOAT: TypeTag.DOUBLE,
    PropertyKind.TIMESTAMP: TypeTag.DATE,
    PropertyKind.IDENTIFIER: TypeTag.WEAKREFERENCE,
    PropertyKind.LINK: TypeTag.WEAKREFERENCE,
}


def classify(prop: PropertyDescriptor, name_property: PropertyDescriptor | None = None) -> TypeTag:
    """Abstract type tag of a declared property.

    The name-bearing property is tagged PATH instead of STRING.
    """
    if prop.kind.is_string and name_property is not None and prop.name == name_property.name:
        return TypeTag.PATH
    return KIND_TAGS.get(prop.kind, TypeTag.UNDEFINED)


class PropertyValue(NamedTuple):
    value: Any
    tag: TypeTag


@dataclass(frozen=True)
class NodeStub:
    """Placeholder marking that a named child exists."""


@dataclass
class NodeView:
    """Externally visible projection of one object.

    Attributes:
        properties: Property name -> (value, tag), in projection order.
        children: Child name -> placeholder, in children_of order.
    """

    properties: dict[str, PropertyValue] = field(default_factory=dict)
    children: dict[str, NodeStub] = field(default_factory=dict)

    def set_property(self, name: str, value: Any, tag: TypeTag) -> None:
        """Set a value together with its type tag."""
        if tag is None:
            raise ValueError(f"Property '{name}' needs a type tag")
        self.properties[name] = PropertyValue(value, TypeTag(tag))

    def add_child(self, name: str) -> None:
        self.children[name] = NodeStub()

    def get_property(self, name: str) -> PropertyValue | None:
        return self.properties.get(name)

    def has_child(self, name: str) -> bool:
        return name in self.children

    def to_dict(self) -> dict[str, Any]:
        """Flat form: ``name`` -> value, ``:name`` -> tag label, child -> {}."""
        result: dict[str, Any] = {}
        for name, prop in self.properties.items():
            result[name] = prop.value
            result[f":{name}"] = prop.tag.label
        for name in self.children:
            result[name] = {}
        return result


class NodeProjector:
    """Materializes NodeViews for paths.

    Every declared property of the object's type is copied with its type
    tag, except the identifier (always projected as ``<prefix>:<id-prop>``
    tagged STRING) and the metadata field, whose values are merged in under
    ``<prefix>:<name>`` keys. Each child whose name is a usable path
    segment gets an empty placeholder.
    """

    def __init__(self, resolver: PathResolver, namespace_prefix: str = "mgd") -> None:
        self.resolver = resolver
        self.walker = resolver.walker
        self.registry = resolver.registry
        self.namespace_prefix = namespace_prefix

    @property
    def identifier_key(self) -> str:
        return self.namespaced(self.registry.identifier_property)

    def namespaced(self, name: str) -> str:
        return f"{self.namespace_prefix}:{name}"

    def project(self, path: str) -> NodeView:
        """Project the object at a path.

        Raises:
            NotFoundError: If the path does not resolve, for any reason.
        """
        try:
            record = self.resolver.resolve(path)
        except LookupFailedError as e:
            raise NotFoundError(path=path, message=f"No object at {path}", cause=e) from e
        return self.project_record(record)

    def project_record(self, record: ObjectRecord) -> NodeView:
        """Project an already resolved object."""
        descriptor = self.registry.describe_type(record.type_name)
        name_property = self.registry.name_property(descriptor)
        node = NodeView()

        for prop in descriptor.properties:
            if prop.name in (self.registry.identifier_property, METADATA_PROPERTY):
                continue
            node.set_property(prop.name, record.get(prop.name), classify(prop, name_property))

        metadata_type = self.registry.metadata_type()
        if metadata_type is not None:
            for prop in metadata_type.properties:
                node.set_property(
                    self.namespaced(prop.name), record.metadata.get(prop.name), classify(prop)
                )

        node.set_property(self.identifier_key, record.identifier, TypeTag.STRING)

        for child in self.walker.children_of(record):
            child_name = self.walker.name_of(child)
            if child_name and is_segment(child_name):
                node.add_child(child_name)

        logger.debug(
            f"Projected {record.type_name} {record.identifier}: "
            f"{len(node.properties)} properties, {len(node.children)} children"
        )
        return node
