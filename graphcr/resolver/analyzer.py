"""Child type analysis.

A type T is a child candidate of a parent type P when one of T's structural
link properties (the ones bound to the ``parent`` or ``up`` role) either

- is a dynamic reference stored as a generic identifier, so it may point at
  an object of any type, or
- is statically declared to target P.

Types without link properties never appear as children of anything.
"""

from __future__ import annotations

import logging
import threading

from graphcr.schema.registry import TypeRegistry
from graphcr.schema.types import LinkRole, PropertyDescriptor, TypeDescriptor

logger = logging.getLogger(__name__)


def link_matches(prop: PropertyDescriptor, parent_type: str) -> bool:
    """Whether a link property can reference an object of parent_type."""
    if prop.is_dynamic_link:
        return True
    return prop.link_target == parent_type


class ChildTypeAnalyzer:
    """Computes which types may legally appear as children of a type.

    Results are memoized per parent type name. Order follows the registry's
    declaration order, so it is stable for a given schema.
    """

    def __init__(self, registry: TypeRegistry) -> None:
        self.registry = registry
        self._candidates: dict[str, tuple[TypeDescriptor, ...]] = {}
        self._lock = threading.Lock()

    def child_candidates(self, parent_type: TypeDescriptor | str) -> list[TypeDescriptor]:
        """Types whose instances may be children of parent_type.

        Raises:
            UnknownTypeError: If parent_type is not registered.
        """
        parent = (
            parent_type
            if isinstance(parent_type, TypeDescriptor)
            else self.registry.describe_type(parent_type)
        )
        cached = self._candidates.get(parent.name)
        if cached is not None:
            return list(cached)

        candidates = tuple(
            child for child in self.registry.all_types() if self.matching_roles(child, parent)
        )
        with self._lock:
            self._candidates.setdefault(parent.name, candidates)
        logger.debug(
            f"Child candidates of {parent.name}: {[c.name for c in candidates] or 'none'}"
        )
        return list(candidates)

    def matching_roles(
        self, child_type: TypeDescriptor | str, parent_type: TypeDescriptor | str
    ) -> list[LinkRole]:
        """Roles of child_type whose link property qualifies for parent_type."""
        parent_name = parent_type.name if isinstance(parent_type, TypeDescriptor) else parent_type
        return [
            role
            for role, prop in self.registry.link_properties(child_type)
            if link_matches(prop, parent_name)
        ]

    def matching_link_fields(
        self, child_type: TypeDescriptor | str, parent_type: TypeDescriptor | str
    ) -> list[str]:
        """Names of the link properties of child_type that may hold a parent_type object."""
        names: list[str] = []
        for role in self.matching_roles(child_type, parent_type):
            prop = self.registry.link_property(child_type, role)
            if prop is not None and prop.name not in names:
                names.append(prop.name)
        return names

    def is_child_candidate(
        self, child_type: TypeDescriptor | str, parent_type: TypeDescriptor | str
    ) -> bool:
        child_name = child_type.name if isinstance(child_type, TypeDescriptor) else child_type
        return any(c.name == child_name for c in self.child_candidates(parent_type))
