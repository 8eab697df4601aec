"""Tests for RepositoryTransport and its wiring from configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from graphcr import __version__
from graphcr.adapters import InMemoryObjectStore
from graphcr.config import GraphCRConfig, load_config
from graphcr.errors import (
    ConfigValidationError,
    NoSuchWorkspaceError,
    NotFoundError,
    StoreUnavailableError,
    UnsupportedOperationError,
)
from graphcr.ports import ObjectRecord
from graphcr.resolver import TypeTag
from graphcr.schema import TypeRegistry
from graphcr.transport import RepositoryTransport, build_registry, build_transport


class TestSession:
    def test_workspace_names(self, transport: RepositoryTransport) -> None:
        assert transport.get_accessible_workspace_names() == ["tests"]

    def test_login(self, registry: TypeRegistry, store: InMemoryObjectStore) -> None:
        transport = RepositoryTransport(registry, store, workspaces=["tests", "live"])

        assert transport.workspace_name is None
        assert transport.login("live", credentials={"user": "admin"}) is True
        assert transport.workspace_name == "live"

    def test_login_unknown_workspace(self, transport: RepositoryTransport) -> None:
        with pytest.raises(NoSuchWorkspaceError) as exc_info:
            transport.login("live")

        assert exc_info.value.message == "Workspace live not defined"
        assert transport.workspace_name == "tests"

    def test_namespaces(self, transport: RepositoryTransport) -> None:
        assert transport.get_namespaces() == {
            "mgd": "http://www.midgard-project.org/repligard/1.4"
        }

    def test_descriptors(self, transport: RepositoryTransport) -> None:
        descriptors = transport.get_repository_descriptors()

        assert descriptors["jcr.repository.version"] == __version__
        assert descriptors["level.2.supported"] is False
        descriptors["level.2.supported"] = True
        assert transport.get_repository_descriptors()["level.2.supported"] is False


class TestGetNode:
    def test_get_node(self, transport: RepositoryTransport) -> None:
        node = transport.get_node("/news/today")

        assert node.get_property("title") == ("Today", TypeTag.STRING)
        assert list(node.children) == ["comments"]

    def test_get_root(self, transport: RepositoryTransport) -> None:
        assert transport.get_node("/").get_property("mgd:guid").value == "t-root"

    @pytest.mark.parametrize("path", ["/missing/x", "/news//today", "/news/up", ""])
    def test_not_found(self, transport: RepositoryTransport, path: str) -> None:
        with pytest.raises(NotFoundError):
            transport.get_node(path)

    def test_store_failure_is_not_not_found(self, transport: RepositoryTransport) -> None:
        transport.store.set_healthy(False)
        with pytest.raises(StoreUnavailableError):
            transport.get_node("/news")

    def test_parallel_child_queries(self, registry: TypeRegistry, store: InMemoryObjectStore) -> None:
        transport = RepositoryTransport(
            registry, store, root_types=["midgard_topic"], parallel_child_queries=True, max_workers=2
        )
        assert list(transport.get_node("/news").children) == ["today", "comments", "todo"]


class TestGetProperty:
    def test_get_property(self, transport: RepositoryTransport) -> None:
        assert transport.get_property("/news/title") == ("News", TypeTag.STRING)

    def test_link_named_property(self, transport: RepositoryTransport) -> None:
        assert transport.get_property("/news/up") == ("t-root", TypeTag.WEAKREFERENCE)

    def test_root_property(self, transport: RepositoryTransport) -> None:
        assert transport.get_property("/mgd:guid").value == "t-root"

    @pytest.mark.parametrize("path", ["/", "", "/news/nothing", "/missing/title"])
    def test_missing_property(self, transport: RepositoryTransport, path: str) -> None:
        with pytest.raises(NotFoundError):
            transport.get_property(path)


class TestGetNodePathForIdentifier:
    @pytest.mark.parametrize(
        "identifier,path",
        [
            ("t-root", "/"),
            ("t-news", "/news"),
            ("a-today", "/news/today"),
            ("a-comment", "/news/comments"),
            ("n-todo", "/news/todo"),
        ],
    )
    def test_paths(self, transport: RepositoryTransport, identifier: str, path: str) -> None:
        assert transport.get_node_path_for_identifier(identifier) == path

    def test_round_trip_through_get_node(self, transport: RepositoryTransport) -> None:
        path = transport.get_node_path_for_identifier("a-today")
        node = transport.get_node(path)
        assert node.get_property("mgd:guid").value == "a-today"

    @pytest.mark.parametrize("identifier", ["g-unknown", ""])
    def test_unknown_identifier(self, transport: RepositoryTransport, identifier: str) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            transport.get_node_path_for_identifier(identifier)
        assert exc_info.value.identifier == identifier

    @pytest.mark.parametrize("identifier", ["p-admin", "att-logo"])
    def test_objects_outside_the_tree(self, transport: RepositoryTransport, identifier: str) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            transport.get_node_path_for_identifier(identifier)
        assert exc_info.value.identifier == identifier

    @pytest.mark.parametrize(
        "record",
        [
            ObjectRecord("p-setting", "midgard_parameter", {"parentguid": "t-news"}),
            ObjectRecord("m-news", "midgard_metadata", {}),
        ],
    )
    def test_reserved_and_metadata_records(self, transport: RepositoryTransport, record: ObjectRecord) -> None:
        transport.store.add(record)

        with pytest.raises(NotFoundError, match="has no path"):
            transport.get_node_path_for_identifier(record.identifier)

    def test_dangling_link(self, transport: RepositoryTransport) -> None:
        transport.store.add(ObjectRecord("t-orphan", "midgard_topic", {"name": "orphan", "up": "t-gone"}))

        with pytest.raises(NotFoundError, match="not reachable"):
            transport.get_node_path_for_identifier("t-orphan")

    def test_link_cycle(self, transport: RepositoryTransport) -> None:
        transport.store.add(ObjectRecord("t-a", "midgard_topic", {"name": "a", "up": "t-b"}))
        transport.store.add(ObjectRecord("t-b", "midgard_topic", {"name": "b", "up": "t-a"}))

        with pytest.raises(NotFoundError):
            transport.get_node_path_for_identifier("t-b")

    def test_no_workspace(self, transport: RepositoryTransport) -> None:
        transport.store.remove("t-root")

        with pytest.raises(NotFoundError) as exc_info:
            transport.get_node_path_for_identifier("t-news")
        assert exc_info.value.identifier == "t-news"

    @pytest.mark.parametrize("identifier", ["t-root", "t-news", "t-sports", "a-today", "a-comment", "n-todo"])
    def test_every_path_fetches_its_own_node(self, transport: RepositoryTransport, identifier: str) -> None:
        node = transport.get_node(transport.get_node_path_for_identifier(identifier))
        assert node.get_property("mgd:guid").value == identifier


class TestUnsupportedOperations:
    @pytest.mark.parametrize(
        "operation,args",
        [
            ("get_binary_stream", ("/news/logo",)),
            ("copy_node", ("/news", "/copy")),
            ("clone_from", ("live", "/news", "/news", False)),
            ("move_node", ("/news", "/old-news")),
            ("delete_node", ("/news",)),
            ("delete_property", ("/news/title",)),
            ("store_node", (object(),)),
            ("store_property", (object(),)),
            ("get_node_types", ()),
            ("register_node_types_cnd", ("[mgd:topic]", False)),
            ("register_node_types", ([], False)),
            ("query", ("SELECT * FROM [nt:base]",)),
            ("checkin_item", ("/news",)),
            ("checkout_item", ("/news",)),
            ("restore_item", (False, "/versions/1", "/news")),
            ("get_version_history", ("/news",)),
        ],
    )
    def test_rejected(self, transport: RepositoryTransport, operation: str, args: tuple[Any, ...]) -> None:
        with pytest.raises(UnsupportedOperationError) as exc_info:
            getattr(transport, operation)(*args)
        assert exc_info.value.operation == operation


class TestBuildTransport:
    def test_from_config_file(self, project_dir: Path) -> None:
        config = load_config(project_dir / "graphcr.yaml")
        transport = build_transport(config)

        assert transport.get_accessible_workspace_names() == ["tests", "staging"]
        transport.login("staging")
        assert transport.get_node_path_for_identifier("a-comment") == "/news/comments"

    def test_with_explicit_store(self, project_dir: Path, store: InMemoryObjectStore) -> None:
        config = load_config(project_dir / "graphcr.yaml")
        store.remove("t-sports")
        transport = build_transport(config, store=store)

        assert transport.store is store
        assert list(transport.get_node("/").children) == ["news"]

    def test_link_role_order_from_config(self, project_dir: Path, schema_data: dict[str, Any]) -> None:
        config = load_config(project_dir / "graphcr.yaml")
        config.link_role_order = ["up", "parent"]
        transport = build_transport(config, registry=TypeRegistry(schema_data, metadata_type="midgard_metadata"))

        assert transport.get_node_path_for_identifier("a-comment") == "/news/today/comments"

    def test_without_fixtures_store_is_empty(self, project_dir: Path) -> None:
        config = GraphCRConfig(schema_file=str(project_dir / "schema.yaml"))
        transport = build_transport(config)

        with pytest.raises(NotFoundError):
            transport.get_node("/")

    def test_missing_schema_file(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            build_registry(GraphCRConfig())
        assert exc_info.value.field == "schema_file"

    def test_registry_settings(self, project_dir: Path) -> None:
        config = GraphCRConfig(
            schema_file=str(project_dir / "schema.yaml"),
            reserved_types=["midgard_parameter"],
            name_property_policy="fixed",
        )
        registry = build_registry(config)

        assert "midgard_attachment" in registry.type_names()
        assert registry.name_property("net_example_note") is None
        assert registry.metadata_type().name == "midgard_metadata"
