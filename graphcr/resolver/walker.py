"""Walking the live object graph one level at a time."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from graphcr.errors import ChildNotFoundError
from graphcr.ports.store import ObjectRecord, ObjectStorePort
from graphcr.resolver.analyzer import ChildTypeAnalyzer
from graphcr.schema.registry import TypeRegistry
from graphcr.schema.types import TypeDescriptor

logger = logging.getLogger(__name__)


class ObjectGraphWalker:
    """Enumerates the children of live objects and finds children by name.

    Children of an object are the union, across all of its type's child
    candidate types, of the records the store links to it. The store is
    queried once per candidate type and results are concatenated in
    candidate order. Per-type queries are independent reads, so they can
    optionally run on a thread pool; the concatenation order is the same
    either way.

    Attributes:
        registry: Type metadata.
        analyzer: Child type analysis.
        store: Object store port.
        parallel: Whether per-type queries run on a thread pool.
        max_workers: Thread pool size when parallel.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        analyzer: ChildTypeAnalyzer,
        store: ObjectStorePort,
        parallel: bool = False,
        max_workers: int = 4,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.registry = registry
        self.analyzer = analyzer
        self.store = store
        self.parallel = parallel
        self.max_workers = max_workers

    def name_of(self, record: ObjectRecord) -> str | None:
        """Value of the record's name-bearing property.

        Returns None when the record's type has no name property; such
        objects cannot be reached by path.
        """
        prop = self.registry.name_property(record.type_name)
        if prop is None:
            return None
        value = record.get(prop.name)
        return None if value is None else str(value)

    def _query(self, record: ObjectRecord, child_type: TypeDescriptor) -> list[ObjectRecord]:
        link_fields = self.analyzer.matching_link_fields(child_type, record.type_name)
        children = self.store.list_children(child_type.name, record.identifier, link_fields)
        logger.debug(
            f"{len(children)} {child_type.name} child(ren) of {record.identifier} via {link_fields}"
        )
        return children

    def children_of(self, record: ObjectRecord) -> list[ObjectRecord]:
        """All children of a record, concatenated across candidate types.

        Duplicates are not removed; the store is trusted to return each
        record under exactly one type.
        """
        candidates = self.analyzer.child_candidates(record.type_name)
        if not candidates:
            return []

        if self.parallel and len(candidates) > 1:
            workers = min(self.max_workers, len(candidates))
            with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="graphcr") as executor:
                batches = list(executor.map(lambda t: self._query(record, t), candidates))
        else:
            batches = [self._query(record, child_type) for child_type in candidates]

        children: list[ObjectRecord] = []
        for batch in batches:
            children.extend(batch)
        return children

    def child_named(self, record: ObjectRecord, name: str) -> ObjectRecord:
        """First child whose name matches exactly (case-sensitive).

        With several same-named siblings the first one in children_of order
        wins; that order depends on the store.

        Raises:
            ChildNotFoundError: If no child carries the name.
        """
        for child in self.children_of(record):
            if self.name_of(child) == name:
                return child
        raise ChildNotFoundError(record.identifier, name)
