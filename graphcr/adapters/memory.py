"""In-memory object store adapter.

This adapter keeps ObjectRecords in a dictionary, in insertion order. It is
used by the test-suite and by the CLI when a fixtures file is configured,
and can simulate an unreachable store for error handling tests.

Example:
    >>> from graphcr.adapters.memory import InMemoryObjectStore
    >>> store = InMemoryObjectStore()
    >>> store.add(ObjectRecord("g-root", "midgard_topic", {"name": "root", "up": None}))
    >>> store.load_fixtures("fixtures.yaml")
    >>> store.get_by_identifier("g-root").get("name")
    'root'
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import yaml

from graphcr.errors import ErrorContext, StoreError, StoreUnavailableError
from graphcr.ports.store import ObjectRecord, ObjectStorePort

logger = logging.getLogger(__name__)


class InMemoryObjectStore(ObjectStorePort):
    """In-memory object store.

    Attributes:
        query_count: Number of list queries answered since creation.
    """

    def __init__(self, records: Iterable[ObjectRecord] | None = None) -> None:
        self._records: dict[str, ObjectRecord] = {}
        self._lock = threading.Lock()
        self._healthy = True
        self.query_count = 0
        for record in records or ():
            self.add(record)

    def add(self, record: ObjectRecord) -> ObjectRecord:
        """Add a record.

        Raises:
            ValueError: If the identifier is empty or already stored.
        """
        if not record.identifier:
            raise ValueError("Record identifier cannot be empty")
        with self._lock:
            if record.identifier in self._records:
                raise ValueError(f"Duplicate identifier: {record.identifier}")
            self._records[record.identifier] = record
        return record

    def remove(self, identifier: str) -> bool:
        """Remove a record. Returns False if it was not stored."""
        with self._lock:
            return self._records.pop(identifier, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def set_healthy(self, healthy: bool) -> None:
        """Simulate an unreachable store when healthy is False."""
        self._healthy = healthy

    def _ensure_available(self) -> None:
        if not self._healthy:
            raise StoreUnavailableError()

    def _snapshot(self) -> list[ObjectRecord]:
        with self._lock:
            return list(self._records.values())

    def list_children(
        self, type_name: str, parent_identifier: str, link_fields: Sequence[str]
    ) -> list[ObjectRecord]:
        self._ensure_available()
        self.query_count += 1
        return [
            record
            for record in self._snapshot()
            if record.type_name == type_name
            and any(record.get(f) == parent_identifier for f in link_fields)
        ]

    def list_unlinked(self, type_name: str, link_fields: Sequence[str]) -> list[ObjectRecord]:
        self._ensure_available()
        self.query_count += 1
        return [
            record
            for record in self._snapshot()
            if record.type_name == type_name and not any(record.get(f) for f in link_fields)
        ]

    def get_by_identifier(self, identifier: str) -> ObjectRecord | None:
        self._ensure_available()
        return self._records.get(identifier)

    def get_parent(self, record: ObjectRecord, link_field: str) -> ObjectRecord | None:
        self._ensure_available()
        target = record.get(link_field)
        if not target:
            return None
        parent = self._records.get(target)
        if parent is None:
            logger.debug(
                f"Dangling link {record.type_name}.{link_field} on {record.identifier} -> {target}"
            )
        return parent

    def health_check(self) -> bool:
        return self._healthy

    def load_fixtures(self, source: str | Path | dict[str, Any]) -> int:
        """Load records from a fixtures document.

        The document holds an ``objects`` list; each entry has ``type``,
        ``guid``, and optional ``values`` and ``metadata`` mappings.

        Args:
            source: Path to a YAML file, or an already parsed document.

        Returns:
            Number of records loaded.

        Raises:
            StoreError: If the file is missing or an entry is malformed.
        """
        if isinstance(source, dict):
            data = source
            origin = "<dict>"
        else:
            path = Path(source)
            origin = str(path)
            if not path.exists():
                raise StoreError(
                    message=f"Fixtures file not found: {path}",
                    context=ErrorContext(extra={"path": origin}),
                    recoverable=False,
                )
            try:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise StoreError(
                    message=f"Failed to parse fixtures: {e}",
                    context=ErrorContext(extra={"path": origin}),
                    cause=e,
                    recoverable=False,
                ) from e

        loaded = 0
        for index, entry in enumerate(data.get("objects") or []):
            if not isinstance(entry, dict) or not entry.get("type") or not entry.get("guid"):
                raise StoreError(
                    message=f"Fixture entry {index} needs 'type' and 'guid'",
                    context=ErrorContext(extra={"path": origin, "entry": index}),
                    recoverable=False,
                )
            try:
                self.add(
                    ObjectRecord(
                        identifier=str(entry["guid"]),
                        type_name=str(entry["type"]),
                        values=dict(entry.get("values") or {}),
                        metadata=dict(entry.get("metadata") or {}),
                    )
                )
            except ValueError as e:
                raise StoreError(
                    message=f"Fixture entry {index}: {e}",
                    context=ErrorContext(extra={"path": origin, "entry": index}),
                    cause=e,
                    recoverable=False,
                ) from e
            loaded += 1

        logger.info(f"Loaded {loaded} fixture object(s) from {origin}")
        return loaded
