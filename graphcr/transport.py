"""Read-only repository transport over a schema-described object graph.

RepositoryTransport is what a hierarchical content-repository client talks
to. It exposes the object graph as a tree of path-addressed nodes: reads go
through the resolver, everything that would write, version, lock or query
is rejected with UnsupportedOperationError.

Example:
    >>> config = load_config("graphcr.yaml")
    >>> transport = build_transport(config)
    >>> transport.login("tests")
    True
    >>> node = transport.get_node("/news")
    >>> transport.get_node_path_for_identifier(node.get_property("mgd:guid").value)
    '/news'
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from graphcr import __version__
from graphcr.adapters.memory import InMemoryObjectStore
from graphcr.config.settings import GraphCRConfig
from graphcr.errors import (
    ConfigValidationError,
    LookupFailedError,
    NoSuchWorkspaceError,
    NotFoundError,
    UnsupportedOperationError,
)
from graphcr.ports.store import ObjectStorePort
from graphcr.resolver.analyzer import ChildTypeAnalyzer
from graphcr.resolver.paths import DEFAULT_ROLE_ORDER, ROOT_PATH, SEPARATOR, PathResolver
from graphcr.resolver.projector import NodeProjector, NodeView, PropertyValue
from graphcr.resolver.walker import ObjectGraphWalker
from graphcr.schema.loader import load_schema
from graphcr.schema.registry import TypeRegistry
from graphcr.schema.types import LinkRole

logger = logging.getLogger(__name__)

REPOSITORY_DESCRIPTORS: dict[str, Any] = {
    "jcr.repository.name": "graphcr",
    "jcr.repository.version": __version__,
    "level.1.supported": True,
    "level.2.supported": False,
    "option.transactions.supported": False,
    "option.versioning.supported": False,
    "option.observation.supported": False,
    "option.locking.supported": False,
    "option.query.sql.supported": False,
}


class RepositoryTransport:
    """Repository-facing facade composing registry, walker, resolver and projector.

    Attributes:
        registry: Type metadata.
        store: Object store port.
        workspaces: Names accepted by login().
        workspace_name: Workspace of the last successful login, if any.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        store: ObjectStorePort,
        workspaces: Sequence[str] = ("tests",),
        root_types: Sequence[str] | None = None,
        role_order: Sequence[LinkRole | str] = DEFAULT_ROLE_ORDER,
        namespace_prefix: str = "mgd",
        namespace_uri: str = "http://www.midgard-project.org/repligard/1.4",
        parallel_child_queries: bool = False,
        max_workers: int = 4,
    ) -> None:
        self.registry = registry
        self.store = store
        self.workspaces = list(workspaces)
        self.namespace_prefix = namespace_prefix
        self.namespace_uri = namespace_uri
        self.workspace_name: str | None = None

        self.analyzer = ChildTypeAnalyzer(registry)
        self.walker = ObjectGraphWalker(
            registry,
            self.analyzer,
            store,
            parallel=parallel_child_queries,
            max_workers=max_workers,
        )
        self.resolver = PathResolver(self.walker, root_types=root_types, role_order=role_order)
        self.projector = NodeProjector(self.resolver, namespace_prefix=namespace_prefix)

    # ── Session ────────────────────────────────────────────────────────────

    def get_accessible_workspace_names(self) -> list[str]:
        """Workspace names that can be used when logging in."""
        return list(self.workspaces)

    def login(self, workspace_name: str, credentials: Any = None) -> bool:
        """Bind the transport to a workspace.

        Credentials are passed through untouched; validating them is the
        job of the layer in front of the transport.

        Raises:
            NoSuchWorkspaceError: If the workspace name is not declared.
        """
        if workspace_name not in self.workspaces:
            raise NoSuchWorkspaceError(workspace_name)
        self.workspace_name = workspace_name
        logger.info(f"Logged in to workspace {workspace_name}")
        return True

    def get_namespaces(self) -> dict[str, str]:
        """Registered namespace prefix -> URI mappings."""
        return {self.namespace_prefix: self.namespace_uri}

    def get_repository_descriptors(self) -> dict[str, Any]:
        return dict(REPOSITORY_DESCRIPTORS)

    # ── Reads ──────────────────────────────────────────────────────────────

    def get_node(self, path: str) -> NodeView:
        """Get the node stored at an absolute path.

        Raises:
            NotFoundError: If nothing is stored at the path.
        """
        return self.projector.project(path)

    def get_property(self, path: str) -> PropertyValue:
        """Get a single property by its absolute path (node path + property name).

        Raises:
            NotFoundError: If the node or the property does not exist.
        """
        body = path[:-1] if len(path) > 1 and path.endswith(SEPARATOR) else path
        node_path, _, name = body.rpartition(SEPARATOR)
        if not name:
            raise NotFoundError(path=path, message=f"No property at {path}")

        node = self.get_node(node_path or ROOT_PATH)
        prop = node.get_property(name)
        if prop is None:
            raise NotFoundError(path=path, message=f"No property at {path}")
        return prop

    def get_node_path_for_identifier(self, identifier: str) -> str:
        """Get the absolute path of the object with a stable identifier.

        Only objects the tree can address have a path: reserved and
        metadata records, and objects whose links do not lead back to the
        workspace root, are reported as not found.

        Raises:
            NotFoundError: If the store does not know the identifier, or the
                object is not part of the tree.
        """
        record = self.store.get_by_identifier(identifier) if identifier else None
        if record is None:
            raise NotFoundError(identifier=identifier, message=f"No object with identifier {identifier}")
        if self.registry.is_reserved(record.type_name) or record.type_name == self.registry.metadata_type_name:
            raise NotFoundError(
                identifier=identifier,
                message=f"Object {identifier} of type {record.type_name} has no path",
            )
        try:
            anchored = self.resolver.is_anchored(record)
        except LookupFailedError as e:
            raise NotFoundError(identifier=identifier, message=f"No path for {identifier}", cause=e) from e
        if not anchored:
            raise NotFoundError(
                identifier=identifier,
                message=f"Object {identifier} is not reachable from the workspace root",
            )
        return self.resolver.path_for(record)

    # ── Rejected operations ────────────────────────────────────────────────

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(operation)

    def get_binary_stream(self, path: str) -> Any:
        raise self._unsupported("get_binary_stream")

    def copy_node(self, src_abs_path: str, dst_abs_path: str, src_workspace: str | None = None) -> None:
        raise self._unsupported("copy_node")

    def clone_from(
        self, src_workspace: str, src_abs_path: str, dest_abs_path: str, remove_existing: bool
    ) -> None:
        raise self._unsupported("clone_from")

    def move_node(self, src_abs_path: str, dst_abs_path: str) -> None:
        raise self._unsupported("move_node")

    def delete_node(self, path: str) -> None:
        raise self._unsupported("delete_node")

    def delete_property(self, path: str) -> None:
        raise self._unsupported("delete_property")

    def store_node(self, node: Any) -> None:
        raise self._unsupported("store_node")

    def store_property(self, prop: Any) -> None:
        raise self._unsupported("store_property")

    def get_node_types(self, node_types: Sequence[str] = ()) -> Any:
        raise self._unsupported("get_node_types")

    def register_node_types_cnd(self, cnd: str, allow_update: bool) -> None:
        raise self._unsupported("register_node_types_cnd")

    def register_node_types(self, types: Any, allow_update: bool) -> None:
        raise self._unsupported("register_node_types")

    def query(self, query: Any) -> Any:
        raise self._unsupported("query")

    def checkin_item(self, path: str) -> None:
        raise self._unsupported("checkin_item")

    def checkout_item(self, path: str) -> None:
        raise self._unsupported("checkout_item")

    def restore_item(self, remove_existing: bool, version_path: str, path: str) -> None:
        raise self._unsupported("restore_item")

    def get_version_history(self, path: str) -> Any:
        raise self._unsupported("get_version_history")


def build_registry(config: GraphCRConfig) -> TypeRegistry:
    """Build a TypeRegistry from the configured schema file."""
    if not config.schema_file:
        raise ConfigValidationError(message="schema_file is not configured", field="schema_file")
    return TypeRegistry(
        load_schema(config.schema_file),
        reserved_types=config.reserved_types,
        metadata_type=config.metadata_type,
        identifier_property=config.identifier_property,
        name_property_policy=config.name_property_policy,
    )


def build_transport(
    config: GraphCRConfig,
    store: ObjectStorePort | None = None,
    registry: TypeRegistry | None = None,
) -> RepositoryTransport:
    """Wire a RepositoryTransport from configuration.

    Args:
        config: Loaded configuration.
        store: Object store to read from. Defaults to an in-memory store
            filled from ``config.fixtures_file`` when one is configured.
        registry: Prebuilt registry; built from ``config.schema_file``
            when omitted.
    """
    registry = registry or build_registry(config)
    if store is None:
        memory_store = InMemoryObjectStore()
        if config.fixtures_file:
            memory_store.load_fixtures(config.fixtures_file)
        store = memory_store

    return RepositoryTransport(
        registry,
        store,
        workspaces=config.workspaces,
        root_types=config.root_types,
        role_order=config.link_role_order,
        namespace_prefix=config.namespace_prefix,
        namespace_uri=config.namespace_uri,
        parallel_child_queries=config.parallel_child_queries,
        max_workers=config.max_workers,
    )
