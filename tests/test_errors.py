"""Tests for the graphcr error hierarchy."""

from __future__ import annotations

import pytest

from graphcr.errors import (
    ChildNotFoundError,
    ConfigValidationError,
    ErrorCode,
    ErrorContext,
    GraphCRError,
    InvalidPathError,
    LookupFailedError,
    NodeNotFoundError,
    NoSuchWorkspaceError,
    NotFoundError,
    NoWorkspaceError,
    SchemaError,
    SchemaValidationError,
    StoreUnavailableError,
    UnknownTypeError,
    UnsupportedOperationError,
)


class TestErrorCode:
    @pytest.mark.parametrize(
        "code,category",
        [
            (ErrorCode.UNKNOWN_TYPE, "schema"),
            (ErrorCode.CHILD_NOT_FOUND, "lookup"),
            (ErrorCode.NOT_FOUND, "lookup"),
            (ErrorCode.INVALID_CONFIG, "config"),
            (ErrorCode.STORE_UNAVAILABLE, "store"),
            (ErrorCode.UNSUPPORTED_OPERATION, "operation"),
            (ErrorCode.UNKNOWN, "unknown"),
        ],
    )
    def test_category(self, code: ErrorCode, category: str) -> None:
        assert code.category == category


class TestErrorContext:
    def test_to_dict_drops_unset_fields(self) -> None:
        context = ErrorContext(path="/news")
        data = context.to_dict()

        assert data["path"] == "/news"
        assert "identifier" not in data
        assert "timestamp" in data

    def test_format_location(self) -> None:
        context = ErrorContext(workspace="tests", path="/news/x", segment="x")
        assert context.format_location() == "workspace=tests > path=/news/x > segment=x"

    def test_format_location_empty(self) -> None:
        assert ErrorContext().format_location() == "unknown location"


class TestGraphCRError:
    def test_defaults(self) -> None:
        error = GraphCRError()

        assert error.message == "An unexpected error occurred"
        assert error.error_code is ErrorCode.UNKNOWN
        assert error.recoverable is True
        assert error.cause is None

    def test_str_includes_code_and_location(self) -> None:
        error = NodeNotFoundError("/news/missing")
        assert str(error) == "[E102] No object at /news/missing | at path=/news/missing"

    def test_extra_context_is_collected(self) -> None:
        error = GraphCRError("boom", attempt=3)
        assert error.context.extra == {"attempt": 3}

    def test_recoverable_override(self) -> None:
        assert LookupFailedError(recoverable=False).recoverable is False
        assert LookupFailedError().recoverable is True

    def test_format_verbose(self) -> None:
        cause = ChildNotFoundError("t-news", "missing")
        error = NotFoundError(path="/news/missing", cause=cause)
        text = error.format_verbose()

        assert "Error [E105]: Not found: /news/missing" in text
        assert "Location: path=/news/missing" in text
        assert "Caused by: " in text
        assert "Learn more: " in text

    def test_to_dict(self) -> None:
        data = UnsupportedOperationError("move_node").to_dict()

        assert data["error_code"] == "E401"
        assert data["error_type"] == "UnsupportedOperationError"
        assert data["recoverable"] is False
        assert data["context"]["extra"] == {"operation": "move_node"}

    def test_custom_suggestions_replace_defaults(self) -> None:
        error = NoWorkspaceError(suggestions=["Load fixtures first"])
        assert error.suggestions == ["Load fixtures first"]

    def test_default_suggestions_are_copied(self) -> None:
        error = InvalidPathError("//", "empty path segment")
        error.suggestions.append("mutated")
        assert "mutated" not in InvalidPathError.default_suggestions


class TestHierarchy:
    def test_schema_errors_are_not_recoverable(self) -> None:
        for error in (
            UnknownTypeError("ghost"),
            SchemaValidationError("bad", errors=["x"]),
        ):
            assert isinstance(error, SchemaError)
            assert error.recoverable is False

    def test_lookup_failures(self) -> None:
        for error in (
            ChildNotFoundError("t-root", "x"),
            InvalidPathError("/a//b", "empty path segment"),
            NodeNotFoundError("/x"),
            NoWorkspaceError(),
            NotFoundError(path="/x"),
        ):
            assert isinstance(error, LookupFailedError)

    def test_workspace_and_operation_errors_are_not_lookups(self) -> None:
        assert not isinstance(NoSuchWorkspaceError("live"), LookupFailedError)
        assert not isinstance(UnsupportedOperationError("query"), LookupFailedError)


class TestSpecificErrors:
    def test_unknown_type(self) -> None:
        error = UnknownTypeError("ghost")

        assert error.type_name == "ghost"
        assert error.message == "Unknown type: ghost"
        assert error.context.type_name == "ghost"

    def test_child_not_found(self) -> None:
        error = ChildNotFoundError("t-news", "tomorrow")

        assert error.parent_identifier == "t-news"
        assert error.name == "tomorrow"
        assert error.context.segment == "tomorrow"

    def test_not_found_message_falls_back_to_target(self) -> None:
        assert NotFoundError(identifier="g-1").message == "Not found: g-1"
        assert NotFoundError(path="/a", message="No object at /a").message == "No object at /a"

    def test_no_such_workspace(self) -> None:
        error = NoSuchWorkspaceError("live")

        assert error.message == "Workspace live not defined"
        assert error.context.workspace == "live"

    def test_unsupported_operation(self) -> None:
        error = UnsupportedOperationError("store_node")
        assert error.message == "Not supported: store_node"
        assert error.operation == "store_node"

    def test_schema_validation_errors_in_dict(self) -> None:
        error = SchemaValidationError("bad schema", errors=["a", "b"])
        assert error.to_dict()["errors"] == ["a", "b"]

    def test_config_validation_str_names_field(self) -> None:
        error = ConfigValidationError("too small", field="max_workers", value=0)

        assert str(error).endswith("(field: max_workers)")
        assert error.to_dict()["value"] == "0"

    def test_store_unavailable(self) -> None:
        error = StoreUnavailableError()
        assert error.error_code is ErrorCode.STORE_UNAVAILABLE
        assert error.recoverable is True
