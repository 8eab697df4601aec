"""Object store Port interface for graphcr."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ObjectRecord:
    """One persisted object.

    Attributes:
        identifier: Stable unique identifier (e.g. a GUID string).
        type_name: Name of the object's registered type.
        values: Native values of the declared properties. Link properties
            hold the identifier of the referenced object, or None.
        metadata: Values of the auxiliary metadata properties.
    """

    identifier: str
    type_name: str
    values: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)


class ObjectStorePort(ABC):
    """Abstract port for the persisted object graph.

    The resolver only reads from the store. Implementations answer from
    whatever backs them and raise StoreError subclasses for infrastructure
    failures; absence is always reported with None or an empty result,
    never with an exception.
    """

    @abstractmethod
    def list_children(
        self, type_name: str, parent_identifier: str, link_fields: Sequence[str]
    ) -> list[ObjectRecord]:
        """List records of a type linked to a parent.

        Args:
            type_name: Type of the records to return.
            parent_identifier: Identifier of the parent object.
            link_fields: Link properties of the type that may hold the
                parent's identifier; a record matches if any of them does.

        Returns:
            Matching records in store order.
        """
        ...

    @abstractmethod
    def list_unlinked(self, type_name: str, link_fields: Sequence[str]) -> list[ObjectRecord]:
        """List records of a type whose link fields are all unset.

        Args:
            type_name: Type of the records to return.
            link_fields: Link properties that must all be empty.

        Returns:
            Matching records in store order.
        """
        ...

    @abstractmethod
    def get_by_identifier(self, identifier: str) -> ObjectRecord | None:
        """Get a record by its stable identifier.

        Args:
            identifier: Stable unique identifier.

        Returns:
            The record, or None if the store does not know it.
        """
        ...

    @abstractmethod
    def get_parent(self, record: ObjectRecord, link_field: str) -> ObjectRecord | None:
        """Follow one link property of a record.

        Args:
            record: Record whose link to follow.
            link_field: Link property to follow.

        Returns:
            The referenced record, or None when the link is unset or
            points at an object that does not exist.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise.
        """
        ...
