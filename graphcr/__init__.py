"""graphcr - hierarchical content-repository access to a schema-described object graph.

Objects of registered types, linked through ``parent``/``up`` properties,
are exposed as a strict tree of path-addressed nodes.

Quick Start:
    from graphcr import InMemoryObjectStore, RepositoryTransport, TypeRegistry, load_schema

    registry = TypeRegistry(load_schema("schema.yaml"))
    store = InMemoryObjectStore()
    store.load_fixtures("fixtures.yaml")

    transport = RepositoryTransport(registry, store, root_types=["midgard_topic"])
    transport.login("tests")
    node = transport.get_node("/news")
"""

from __future__ import annotations

__version__ = "0.3.0"

from graphcr.adapters.memory import InMemoryObjectStore
from graphcr.config import GraphCRConfig, load_config
from graphcr.errors import (
    ChildNotFoundError,
    GraphCRError,
    InvalidPathError,
    NodeNotFoundError,
    NoSuchWorkspaceError,
    NotFoundError,
    NoWorkspaceError,
    UnknownTypeError,
    UnsupportedOperationError,
)
from graphcr.ports.store import ObjectRecord, ObjectStorePort
from graphcr.resolver import (
    ChildTypeAnalyzer,
    NodeProjector,
    NodeView,
    ObjectGraphWalker,
    PathResolver,
    PropertyValue,
    TypeTag,
)
from graphcr.schema import (
    LinkRole,
    PropertyDescriptor,
    PropertyKind,
    TypeDescriptor,
    TypeRegistry,
    load_schema,
)
from graphcr.transport import RepositoryTransport, build_transport

__all__ = [
    "__version__",
    # Schema
    "TypeRegistry",
    "TypeDescriptor",
    "PropertyDescriptor",
    "PropertyKind",
    "LinkRole",
    "load_schema",
    # Store
    "ObjectStorePort",
    "ObjectRecord",
    "InMemoryObjectStore",
    # Resolver
    "ChildTypeAnalyzer",
    "ObjectGraphWalker",
    "PathResolver",
    "NodeProjector",
    "NodeView",
    "PropertyValue",
    "TypeTag",
    # Transport
    "RepositoryTransport",
    "build_transport",
    # Config
    "GraphCRConfig",
    "load_config",
    # Errors
    "GraphCRError",
    "UnknownTypeError",
    "ChildNotFoundError",
    "InvalidPathError",
    "NodeNotFoundError",
    "NoWorkspaceError",
    "NotFoundError",
    "NoSuchWorkspaceError",
    "UnsupportedOperationError",
]
