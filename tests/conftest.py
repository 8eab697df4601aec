"""Pytest fixtures for graphcr tests."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest
import yaml

from graphcr.adapters.memory import InMemoryObjectStore
from graphcr.resolver.analyzer import ChildTypeAnalyzer
from graphcr.resolver.paths import PathResolver
from graphcr.resolver.projector import NodeProjector
from graphcr.resolver.walker import ObjectGraphWalker
from graphcr.schema.registry import TypeRegistry
from graphcr.transport import RepositoryTransport

SCHEMA: dict[str, Any] = {
    "types": [
        {
            "name": "midgard_topic",
            "name_property": "name",
            "links": {"up": "up"},
            "properties": [
                {"name": "id", "kind": "unsigned_integer"},
                {"name": "guid", "kind": "identifier"},
                {"name": "name", "kind": "string"},
                {"name": "title", "kind": "string"},
                {"name": "extra", "kind": "text"},
                {"name": "score", "kind": "integer"},
                {"name": "up", "kind": "link", "target": "midgard_topic"},
                {"name": "metadata", "kind": "other"},
            ],
        },
        {
            "name": "midgard_article",
            "links": {"parent": "topic", "up": "up"},
            "properties": [
                {"name": "id", "kind": "unsigned_integer"},
                {"name": "guid", "kind": "identifier"},
                {"name": "name", "kind": "string"},
                {"name": "title", "kind": "string"},
                {"name": "content", "kind": "text"},
                {"name": "rating", "kind": "float"},
                {"name": "topic", "kind": "link", "target": "midgard_topic"},
                {"name": "up", "kind": "link", "target": "midgard_article"},
            ],
        },
        {
            "name": "net_example_note",
            "name_property": "slug",
            "links": {"parent": "owner"},
            "properties": [
                {"name": "guid", "kind": "identifier"},
                {"name": "slug", "kind": "string"},
                {"name": "body", "kind": "text"},
                {"name": "owner", "kind": "identifier"},
            ],
        },
        {
            "name": "midgard_person",
            "properties": [
                {"name": "guid", "kind": "identifier"},
                {"name": "firstname", "kind": "string"},
                {"name": "lastname", "kind": "string"},
            ],
        },
        {
            "name": "midgard_attachment",
            "links": {"parent": "parentguid"},
            "properties": [
                {"name": "guid", "kind": "identifier"},
                {"name": "name", "kind": "string"},
                {"name": "mimetype", "kind": "string"},
                {"name": "parentguid", "kind": "identifier"},
            ],
        },
        {
            "name": "midgard_parameter",
            "links": {"parent": "parentguid"},
            "properties": [
                {"name": "guid", "kind": "identifier"},
                {"name": "domain", "kind": "string"},
                {"name": "name", "kind": "string"},
                {"name": "value", "kind": "text"},
                {"name": "parentguid", "kind": "identifier"},
            ],
        },
        {
            "name": "midgard_metadata",
            "properties": [
                {"name": "created", "kind": "timestamp"},
                {"name": "revised", "kind": "timestamp"},
                {"name": "creator", "kind": "identifier"},
                {"name": "revision", "kind": "unsigned_integer"},
                {"name": "hidden", "kind": "boolean"},
            ],
        },
    ]
}

OBJECTS: list[dict[str, Any]] = [
    {
        "type": "midgard_topic",
        "guid": "t-root",
        "values": {"id": 1, "name": "root", "title": "Root", "up": None},
        "metadata": {"created": "2011-01-10T09:00:00", "revision": 1, "hidden": False},
    },
    {
        "type": "midgard_topic",
        "guid": "t-news",
        "values": {"id": 2, "name": "news", "title": "News", "extra": "", "score": 10, "up": "t-root"},
        "metadata": {"created": "2011-01-11T09:00:00", "revision": 3, "hidden": False},
    },
    {
        "type": "midgard_topic",
        "guid": "t-sports",
        "values": {"id": 3, "name": "sports", "title": "Sports", "score": 5, "up": "t-root"},
    },
    {
        "type": "midgard_article",
        "guid": "a-today",
        "values": {
            "id": 1,
            "name": "today",
            "title": "Today",
            "content": "<p>Hello</p>",
            "rating": 4.5,
            "topic": "t-news",
            "up": None,
        },
    },
    {
        "type": "midgard_article",
        "guid": "a-comment",
        "values": {"id": 2, "name": "comments", "title": "Comments", "topic": "t-news", "up": "a-today"},
    },
    {
        "type": "net_example_note",
        "guid": "n-todo",
        "values": {"slug": "todo", "body": "Write more news", "owner": "t-news"},
    },
    {
        "type": "midgard_attachment",
        "guid": "att-logo",
        "values": {"name": "logo.png", "mimetype": "image/png", "parentguid": "t-news"},
    },
    {
        "type": "midgard_person",
        "guid": "p-admin",
        "values": {"firstname": "Ada", "lastname": "Admin"},
    },
]


@pytest.fixture
def schema_data() -> dict[str, Any]:
    return copy.deepcopy(SCHEMA)


@pytest.fixture
def fixtures_data() -> dict[str, Any]:
    return {"objects": copy.deepcopy(OBJECTS)}


@pytest.fixture
def registry(schema_data: dict[str, Any]) -> TypeRegistry:
    return TypeRegistry(schema_data, metadata_type="midgard_metadata")


@pytest.fixture
def store(fixtures_data: dict[str, Any]) -> InMemoryObjectStore:
    store = InMemoryObjectStore()
    store.load_fixtures(fixtures_data)
    return store


@pytest.fixture
def analyzer(registry: TypeRegistry) -> ChildTypeAnalyzer:
    return ChildTypeAnalyzer(registry)


@pytest.fixture
def walker(
    registry: TypeRegistry, analyzer: ChildTypeAnalyzer, store: InMemoryObjectStore
) -> ObjectGraphWalker:
    return ObjectGraphWalker(registry, analyzer, store)


@pytest.fixture
def resolver(walker: ObjectGraphWalker) -> PathResolver:
    return PathResolver(walker, root_types=["midgard_topic"])


@pytest.fixture
def projector(resolver: PathResolver) -> NodeProjector:
    return NodeProjector(resolver)


@pytest.fixture
def transport(registry: TypeRegistry, store: InMemoryObjectStore) -> RepositoryTransport:
    transport = RepositoryTransport(registry, store, root_types=["midgard_topic"])
    transport.login("tests")
    return transport


@pytest.fixture
def project_dir(tmp_path: Path, schema_data: dict[str, Any], fixtures_data: dict[str, Any]) -> Path:
    """A directory holding graphcr.yaml, schema.yaml and fixtures.yaml."""
    (tmp_path / "schema.yaml").write_text(yaml.safe_dump(schema_data, sort_keys=False))
    (tmp_path / "fixtures.yaml").write_text(yaml.safe_dump(fixtures_data, sort_keys=False))
    (tmp_path / "graphcr.yaml").write_text(
        yaml.safe_dump(
            {
                "workspaces": ["tests", "staging"],
                "schema_file": "schema.yaml",
                "fixtures_file": "fixtures.yaml",
                "root_types": ["midgard_topic"],
                "metadata_type": "midgard_metadata",
            },
            sort_keys=False,
        )
    )
    return tmp_path
