"""Forward and reverse path resolution."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from graphcr.errors import ChildNotFoundError, InvalidPathError, NodeNotFoundError, NoWorkspaceError
from graphcr.ports.store import ObjectRecord
from graphcr.resolver.walker import ObjectGraphWalker
from graphcr.schema.types import LinkRole

logger = logging.getLogger(__name__)

ROOT_PATH = "/"
SEPARATOR = "/"
RESERVED_SEGMENTS = frozenset(role.value for role in LinkRole)

DEFAULT_ROLE_ORDER = (LinkRole.PARENT, LinkRole.UP)


def split_path(path: str) -> list[str]:
    """Split a path into its segments.

    A leading slash and a single trailing slash are ignored, so "a/b",
    "/a/b" and "/a/b/" are the same path. "/" has no segments.

    Raises:
        InvalidPathError: For an empty path, an empty interior segment
            ("/a//b") or a segment named after a link role.
    """
    if not isinstance(path, str) or not path:
        raise InvalidPathError(str(path), "path is empty")
    if path == ROOT_PATH:
        return []

    body = path[1:] if path.startswith(SEPARATOR) else path
    if body.endswith(SEPARATOR):
        body = body[:-1]

    segments = body.split(SEPARATOR)
    for segment in segments:
        if not segment:
            raise InvalidPathError(path, "empty path segment")
        if segment in RESERVED_SEGMENTS:
            raise InvalidPathError(path, f"segment '{segment}' is reserved")
    return segments


def is_segment(name: str) -> bool:
    """Whether a name can be used as a single path segment."""
    return bool(name) and SEPARATOR not in name and name not in RESERVED_SEGMENTS


def join_path(segments: Iterable[str]) -> str:
    return SEPARATOR + SEPARATOR.join(segments)


def normalize_path(path: str) -> str:
    """Canonical form of a path: leading slash, no trailing slash."""
    return join_path(split_path(path))


class PathResolver:
    """Resolves paths to objects and objects back to paths.

    Forward resolution starts at the workspace root and looks up one named
    child per segment. Reverse resolution climbs structural links, trying
    the roles in ``role_order`` (``parent`` before ``up`` by default), and
    stops at the first object without a parent.

    Attributes:
        walker: Graph walker used for child lookups.
        root_types: Types that may hold the workspace root; all addressable
            types when empty.
        role_order: Order in which structural link roles are tried.
    """

    def __init__(
        self,
        walker: ObjectGraphWalker,
        root_types: Sequence[str] | None = None,
        role_order: Sequence[LinkRole | str] = DEFAULT_ROLE_ORDER,
    ) -> None:
        self.walker = walker
        self.registry = walker.registry
        self.store = walker.store
        self.root_types = list(root_types or [])
        self.role_order = tuple(LinkRole(role) for role in role_order)
        for type_name in self.root_types:
            self.registry.describe_type(type_name)

    def root(self) -> ObjectRecord:
        """The workspace root: the first unlinked object of a root type.

        Raises:
            NoWorkspaceError: If the store holds no root object.
        """
        type_names = self.root_types or self.registry.type_names()
        for type_name in type_names:
            records = self.store.list_unlinked(type_name, self.registry.link_fields(type_name))
            if records:
                return records[0]
        raise NoWorkspaceError(type_names=list(type_names))

    def resolve(self, path: str) -> ObjectRecord:
        """Walk a path from the root to an object.

        Raises:
            InvalidPathError: If the path is malformed.
            NoWorkspaceError: If there is no root object.
            NodeNotFoundError: If a segment has no matching child; carries
                the full original path.
        """
        segments = split_path(path)
        current = self.root()
        for segment in segments:
            try:
                current = self.walker.child_named(current, segment)
            except ChildNotFoundError as e:
                logger.debug(f"Resolution of {path} stopped at segment '{segment}'")
                raise NodeNotFoundError(path, cause=e) from e
        logger.debug(f"Resolved {path} to {current.type_name} {current.identifier}")
        return current

    def structural_parent(self, record: ObjectRecord) -> ObjectRecord | None:
        """The object a record hangs under, or None.

        Each role in role_order is tried in turn; unset and dangling links
        count as no parent.
        """
        for role in self.role_order:
            prop = self.registry.link_property(record.type_name, role)
            if prop is None:
                continue
            parent = self.store.get_parent(record, prop.name)
            if parent is not None:
                return parent
        return None

    def climb(self, record: ObjectRecord) -> list[ObjectRecord]:
        """The chain of structural ancestors, starting with the record itself.

        Stops at the first object without a parent, or before the first
        repeated identifier when the links form a cycle.
        """
        chain = [record]
        seen = {record.identifier}
        current = record
        while True:
            parent = self.structural_parent(current)
            if parent is None:
                break
            if parent.identifier in seen:
                logger.warning(f"Link cycle at {parent.identifier} while building path of {record.identifier}")
                break
            seen.add(parent.identifier)
            chain.append(parent)
            current = parent
        return chain

    def is_anchored(self, record: ObjectRecord) -> bool:
        """Whether climbing from a record ends at the workspace root.

        Raises:
            NoWorkspaceError: If there is no root object.
        """
        return self.climb(record)[-1].identifier == self.root().identifier

    def path_for(self, record: ObjectRecord) -> str:
        """Reconstruct the path of a record by climbing its parents.

        The workspace root contributes no segment. Any other topmost object
        keeps its name, so a record that hangs off nothing never comes back
        as "/". The result is best effort: it resolves back to the same
        record only if the record is anchored at the root, reached through
        the same link roles, and its name is unique among its siblings.
        """
        chain = self.climb(record)
        try:
            root_identifier = self.root().identifier
        except NoWorkspaceError:
            root_identifier = None
        if chain[-1].identifier == root_identifier:
            chain.pop()

        return join_path(self.walker.name_of(item) or "" for item in reversed(chain))
