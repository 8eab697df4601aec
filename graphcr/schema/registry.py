"""Type registry backed by a declarative schema."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from graphcr.errors import LinkMetadataError, UnknownTypeError
from graphcr.schema.loader import SchemaSpec, TypeSpec, parse_schema
from graphcr.schema.types import LinkRole, PropertyDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)

DEFAULT_RESERVED_TYPES = ("midgard_attachment", "midgard_parameter")

NAME_PROPERTY = "name"

_MISSING = object()


class TypeRegistry:
    """Lookup of object types and their link-property metadata.

    Descriptors are built lazily from the schema, one type name at a time,
    and memoized for the lifetime of the registry. The caches are filled
    under a lock, so concurrent readers always see complete entries.

    Example:
        >>> registry = TypeRegistry(load_schema("schema.yaml"))
        >>> topic = registry.describe_type("midgard_topic")
        >>> registry.link_property(topic, LinkRole.UP).link_target
        'midgard_topic'
    """

    def __init__(
        self,
        schema: SchemaSpec | dict,
        reserved_types: Iterable[str] = DEFAULT_RESERVED_TYPES,
        metadata_type: str | None = None,
        identifier_property: str = "guid",
        name_property_policy: str = "declared",
    ) -> None:
        self.schema = parse_schema(schema)
        self.reserved_types = frozenset(reserved_types)
        self.metadata_type_name = metadata_type
        self.identifier_property = identifier_property
        self.name_property_policy = name_property_policy

        self._specs: dict[str, TypeSpec] = {t.name: t for t in self.schema.types}
        self._descriptors: dict[str, TypeDescriptor] = {}
        self._name_properties: dict[str, PropertyDescriptor | None] = {}
        self._lock = threading.Lock()

        if metadata_type is not None and metadata_type not in self._specs:
            raise UnknownTypeError(
                metadata_type, message=f"Metadata type '{metadata_type}' is not declared"
            )

        logger.info(
            f"Type registry ready: {len(self._specs)} type(s), "
            f"{len(self.reserved_types & self._specs.keys())} reserved"
        )

    def describe_type(self, name: str) -> TypeDescriptor:
        """Return the descriptor of a registered type.

        Raises:
            UnknownTypeError: If the name is not registered.
        """
        descriptor = self._descriptors.get(name)
        if descriptor is not None:
            return descriptor

        spec = self._specs.get(name)
        if spec is None:
            raise UnknownTypeError(name)

        with self._lock:
            descriptor = self._descriptors.get(name)
            if descriptor is None:
                descriptor = self._build_descriptor(spec)
                self._descriptors[name] = descriptor
                logger.debug(f"Described type {name}")
        return descriptor

    def _build_descriptor(self, spec: TypeSpec) -> TypeDescriptor:
        properties = tuple(
            PropertyDescriptor(name=p.name, kind=p.kind, link_target=p.target)
            for p in spec.properties
        )
        links = tuple(
            (role, spec.links[role]) for role in (LinkRole.PARENT, LinkRole.UP) if role in spec.links
        )
        return TypeDescriptor(
            name=spec.name,
            properties=properties,
            links=links,
            name_property=spec.name_property,
        )

    def all_types(self) -> list[TypeDescriptor]:
        """All addressable types in declaration order.

        Reserved auxiliary types and the metadata type are excluded.
        """
        return [
            self.describe_type(name)
            for name in self._specs
            if not self.is_reserved(name) and name != self.metadata_type_name
        ]

    def type_names(self) -> list[str]:
        return [t.name for t in self.all_types()]

    def is_registered(self, name: str) -> bool:
        return name in self._specs

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_types

    def _resolve(self, type_or_name: TypeDescriptor | str) -> TypeDescriptor:
        if isinstance(type_or_name, TypeDescriptor):
            return type_or_name
        return self.describe_type(type_or_name)

    def link_property(
        self, type_or_name: TypeDescriptor | str, role: LinkRole
    ) -> PropertyDescriptor | None:
        """The property playing a link role on a type, or None."""
        descriptor = self._resolve(type_or_name)
        prop_name = descriptor.link_property_name(role)
        if prop_name is None:
            return None
        prop = descriptor.get_property(prop_name)
        if prop is None or not prop.is_link:
            raise LinkMetadataError(
                f"{descriptor.name}: '{role.value}' role bound to unusable property '{prop_name}'"
            )
        return prop

    def link_properties(
        self, type_or_name: TypeDescriptor | str
    ) -> list[tuple[LinkRole, PropertyDescriptor]]:
        """All (role, property) pairs of a type, PARENT before UP."""
        descriptor = self._resolve(type_or_name)
        result = []
        for role in (LinkRole.PARENT, LinkRole.UP):
            prop = self.link_property(descriptor, role)
            if prop is not None:
                result.append((role, prop))
        return result

    def link_fields(self, type_or_name: TypeDescriptor | str) -> list[str]:
        """Distinct names of the properties bound to any link role."""
        names: list[str] = []
        for _, prop in self.link_properties(type_or_name):
            if prop.name not in names:
                names.append(prop.name)
        return names

    def name_property(self, type_or_name: TypeDescriptor | str) -> PropertyDescriptor | None:
        """The name-bearing property of a type, or None if it has none.

        With the 'fixed' policy only a string property literally called
        'name' qualifies. With the 'declared' policy a type's explicit
        name_property wins, falling back to the 'fixed' rule.
        """
        descriptor = self._resolve(type_or_name)
        cached = self._name_properties.get(descriptor.name, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]

        prop: PropertyDescriptor | None = None
        if self.name_property_policy == "declared" and descriptor.name_property:
            prop = descriptor.get_property(descriptor.name_property)
        if prop is None:
            candidate = descriptor.get_property(NAME_PROPERTY)
            if candidate is not None and candidate.kind.is_string:
                prop = candidate

        with self._lock:
            self._name_properties.setdefault(descriptor.name, prop)
        return prop

    def metadata_type(self) -> TypeDescriptor | None:
        """The auxiliary metadata type merged into every node, if configured."""
        if self.metadata_type_name is None:
            return None
        return self.describe_type(self.metadata_type_name)
