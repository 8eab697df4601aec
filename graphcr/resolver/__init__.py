"""Schema-driven hierarchical resolver."""

from graphcr.resolver.analyzer import ChildTypeAnalyzer, link_matches
from graphcr.resolver.paths import (
    DEFAULT_ROLE_ORDER,
    ROOT_PATH,
    PathResolver,
    is_segment,
    join_path,
    normalize_path,
    split_path,
)
from graphcr.resolver.projector import (
    KIND_TAGS,
    NodeProjector,
    NodeStub,
    NodeView,
    PropertyValue,
    TypeTag,
    classify,
)
from graphcr.resolver.walker import ObjectGraphWalker

__all__ = [
    "ChildTypeAnalyzer",
    "link_matches",
    "ObjectGraphWalker",
    "PathResolver",
    "DEFAULT_ROLE_ORDER",
    "ROOT_PATH",
    "split_path",
    "is_segment",
    "join_path",
    "normalize_path",
    "NodeProjector",
    "NodeView",
    "NodeStub",
    "PropertyValue",
    "TypeTag",
    "KIND_TAGS",
    "classify",
]
