"""Custom exception hierarchy for graphcr.

graphcr provides an error hierarchy with:
- Structured error codes for programmatic handling
- Rich context (path, identifier, type) for debugging
- Actionable suggestions for recovery
- Documentation links for learning more

All graphcr errors inherit from GraphCRError. Lookup failures raised inside
the walker and resolver are local signals; the repository-facing layer turns
them into exactly one NotFoundError carrying the caller's path or identifier.

Example:
    try:
        transport.get_node("/news/today")
    except NotFoundError as e:
        print(f"Error: {e}")
        print(f"Caused by: {e.cause}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

DOCS_BASE_URL = "https://graphcr.readthedocs.io/en/latest"


class ErrorCode(Enum):
    """Standardized error codes for graphcr.

    Error codes are organized by category:
    - E0xx: Schema errors
    - E1xx: Lookup errors
    - E2xx: Configuration errors
    - E3xx: Object store errors
    - E4xx: Operation errors
    - E9xx: Unknown/internal errors
    """

    # Schema errors (E0xx)
    UNKNOWN_TYPE = "E001"
    INVALID_LINK_METADATA = "E002"
    INVALID_SCHEMA = "E003"

    # Lookup errors (E1xx)
    CHILD_NOT_FOUND = "E101"
    NODE_NOT_FOUND = "E102"
    INVALID_PATH = "E103"
    NO_WORKSPACE = "E104"
    NOT_FOUND = "E105"
    NO_SUCH_WORKSPACE = "E106"

    # Configuration errors (E2xx)
    INVALID_CONFIG = "E201"
    CONFIG_LOAD_FAILED = "E202"

    # Object store errors (E3xx)
    STORE_FAILED = "E301"
    STORE_UNAVAILABLE = "E302"

    # Operation errors (E4xx)
    UNSUPPORTED_OPERATION = "E401"

    # Unknown/internal errors (E9xx)
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if code_num < 100:
            return "schema"
        elif code_num < 200:
            return "lookup"
        elif code_num < 300:
            return "config"
        elif code_num < 400:
            return "store"
        elif code_num < 500:
            return "operation"
        else:
            return "unknown"


@dataclass
class ErrorContext:
    """Structured context for error logging and debugging.

    Attributes:
        path: Path supplied by the caller.
        identifier: Stable object identifier supplied by the caller.
        type_name: Object type involved in the failure.
        segment: Path segment that failed to resolve.
        workspace: Workspace name involved in the failure.
        extra: Additional context-specific information.
        timestamp: When the error occurred.
    """

    path: str | None = None
    identifier: str | None = None
    type_name: str | None = None
    segment: str | None = None
    workspace: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "path": self.path,
            "identifier": self.identifier,
            "type_name": self.type_name,
            "segment": self.segment,
            "workspace": self.workspace,
            "extra": self.extra,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        parts = []
        if self.workspace:
            parts.append(f"workspace={self.workspace}")
        if self.path:
            parts.append(f"path={self.path}")
        if self.segment:
            parts.append(f"segment={self.segment}")
        if self.identifier:
            parts.append(f"identifier={self.identifier}")
        if self.type_name:
            parts.append(f"type={self.type_name}")
        return " > ".join(parts) if parts else "unknown location"


class GraphCRError(Exception):
    """Base exception for all graphcr errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with lookup details
        suggestions: List of actionable steps to resolve the issue
        docs_url: Link to relevant documentation
        recoverable: Whether the caller can reasonably try something else
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []
    docs_path: str = "errors/overview"
    recoverable: bool = True

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        recoverable: bool | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        if recoverable is not None:
            self.recoverable = recoverable
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    @property
    def docs_url(self) -> str:
        """Get the documentation URL for this error type."""
        return f"{DOCS_BASE_URL}/{self.docs_path}"

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")

        return " | ".join(parts)

    def format_verbose(self) -> str:
        """Format error with full details including suggestions."""
        lines = [
            f"Error [{self.error_code.value}]: {self.message}",
            "",
        ]

        location = self.context.format_location()
        if location != "unknown location":
            lines.append(f"Location: {location}")

        if self.cause is not None:
            lines.append(f"Caused by: {self.cause}")

        if self.suggestions:
            lines.append("")
            lines.append("Suggestions:")
            for suggestion in self.suggestions:
                lines.append(f"  - {suggestion}")

        lines.append("")
        lines.append(f"Learn more: {self.docs_url}")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "docs_url": self.docs_url,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class SchemaError(GraphCRError):
    """The type schema is inconsistent.

    Schema problems are configuration errors: they are raised immediately
    and never retried.
    """

    error_code = ErrorCode.INVALID_SCHEMA
    default_message = "Invalid type schema"
    recoverable = False
    default_suggestions = [
        "Check the schema file named by 'schema_file' in graphcr.yaml",
        "Run 'graphcr types' to list the types that did load",
    ]
    docs_path = "errors/schema"


class UnknownTypeError(SchemaError):
    """A type name is not registered."""

    error_code = ErrorCode.UNKNOWN_TYPE
    default_message = "Unknown object type"
    default_suggestions = [
        "Verify the type is declared in the schema file",
        "Reserved auxiliary types (attachments, parameters) are never addressable",
    ]

    def __init__(self, type_name: str, message: str | None = None, **kwargs: Any) -> None:
        self.type_name = type_name
        kwargs.setdefault("context", ErrorContext(type_name=type_name))
        super().__init__(message=message or f"Unknown type: {type_name}", **kwargs)


class LinkMetadataError(SchemaError):
    """A link role is bound to an unusable property."""

    error_code = ErrorCode.INVALID_LINK_METADATA
    default_message = "Malformed link property metadata"
    default_suggestions = [
        "Bind 'parent' and 'up' roles only to declared link or identifier properties",
        "Make sure every link target names a declared type",
    ]


class SchemaValidationError(SchemaError):
    """The declarative schema document failed validation."""

    error_code = ErrorCode.INVALID_SCHEMA
    default_message = "Schema document failed validation"

    def __init__(
        self,
        message: str | None = None,
        errors: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        self.errors = errors or []
        super().__init__(message=message, **kwargs)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["errors"] = list(self.errors)
        return result


class LookupFailedError(GraphCRError):
    """Base class for failed lookups in the object tree."""

    error_code = ErrorCode.NOT_FOUND
    default_message = "Lookup failed"
    recoverable = True


class ChildNotFoundError(LookupFailedError):
    """No child of an object carries the requested name."""

    error_code = ErrorCode.CHILD_NOT_FOUND
    default_message = "Child not found"

    def __init__(self, parent_identifier: str, name: str, **kwargs: Any) -> None:
        self.parent_identifier = parent_identifier
        self.name = name
        kwargs.setdefault(
            "context", ErrorContext(identifier=parent_identifier, segment=name)
        )
        super().__init__(
            message=f"Object {parent_identifier} has no child named '{name}'", **kwargs
        )


class InvalidPathError(LookupFailedError):
    """A path string is malformed."""

    error_code = ErrorCode.INVALID_PATH
    default_message = "Malformed path"
    default_suggestions = [
        "Paths are '/' or '/'-joined non-empty segments, e.g. /a/b/c",
        "Segments named 'parent' or 'up' are reserved",
    ]

    def __init__(self, path: str, reason: str, **kwargs: Any) -> None:
        self.path = path
        self.reason = reason
        kwargs.setdefault("context", ErrorContext(path=path))
        super().__init__(message=f"Invalid path '{path}': {reason}", **kwargs)


class NodeNotFoundError(LookupFailedError):
    """Path resolution failed; carries the full original path."""

    error_code = ErrorCode.NODE_NOT_FOUND
    default_message = "Node not found"

    def __init__(self, path: str, **kwargs: Any) -> None:
        self.path = path
        kwargs.setdefault("context", ErrorContext(path=path))
        super().__init__(message=f"No object at {path}", **kwargs)


class NoWorkspaceError(LookupFailedError):
    """The store holds no root object."""

    error_code = ErrorCode.NO_WORKSPACE
    default_message = "No workspaces defined"
    default_suggestions = [
        "Create a root object: one of the root types with no parent/up link set",
        "Check 'root_types' in graphcr.yaml",
    ]


class NotFoundError(LookupFailedError):
    """Terminal, user-visible failure of getNode or getNodePathForIdentifier."""

    error_code = ErrorCode.NOT_FOUND
    default_message = "Item not found"
    docs_path = "errors/not-found"

    def __init__(
        self,
        message: str | None = None,
        path: str | None = None,
        identifier: str | None = None,
        **kwargs: Any,
    ) -> None:
        self.path = path
        self.identifier = identifier
        kwargs.setdefault("context", ErrorContext(path=path, identifier=identifier))
        if message is None:
            target = path if path is not None else identifier
            message = f"Not found: {target}"
        super().__init__(message=message, **kwargs)


class NoSuchWorkspaceError(GraphCRError):
    """Login against a workspace name that is not declared."""

    error_code = ErrorCode.NO_SUCH_WORKSPACE
    default_message = "Workspace not defined"
    recoverable = False
    default_suggestions = [
        "Use one of the names returned by get_accessible_workspace_names()",
        "Add the workspace to 'workspaces' in graphcr.yaml",
    ]

    def __init__(self, workspace: str, **kwargs: Any) -> None:
        self.workspace = workspace
        kwargs.setdefault("context", ErrorContext(workspace=workspace))
        super().__init__(message=f"Workspace {workspace} not defined", **kwargs)


class ConfigValidationError(GraphCRError):
    """Configuration validation failed."""

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid configuration"
    recoverable = False
    default_suggestions = [
        "Check graphcr.yaml syntax with a YAML linter",
        "Check GRAPHCR_* environment variables",
    ]
    docs_path = "configuration"

    def __init__(
        self,
        message: str | None = None,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.field = field
        self.value = value
        super().__init__(message=message, **kwargs)

    def __str__(self) -> str:
        base = super().__str__()
        if self.field:
            base = f"{base} (field: {self.field})"
        return base

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["field"] = self.field
        result["value"] = repr(self.value)
        return result


class ConfigLoadError(GraphCRError):
    """Configuration file cannot be read or parsed."""

    error_code = ErrorCode.CONFIG_LOAD_FAILED
    default_message = "Configuration could not be loaded"
    recoverable = False
    docs_path = "configuration"

    def __init__(self, message: str, details: dict[str, Any] | None = None, **kwargs: Any) -> None:
        self.details = details or {}
        super().__init__(message=message, **kwargs)


class StoreError(GraphCRError):
    """The object store failed to answer a read."""

    error_code = ErrorCode.STORE_FAILED
    default_message = "Object store failure"
    default_suggestions = [
        "Check that the object store is reachable",
        "Retries belong to the store adapter; this layer does not retry",
    ]
    docs_path = "errors/store"


class StoreUnavailableError(StoreError):
    """The object store is not reachable."""

    error_code = ErrorCode.STORE_UNAVAILABLE
    default_message = "Object store unavailable"


class UnsupportedOperationError(GraphCRError):
    """The repository is read-only; write and query operations are rejected."""

    error_code = ErrorCode.UNSUPPORTED_OPERATION
    default_message = "Not supported"
    recoverable = False

    def __init__(self, operation: str, **kwargs: Any) -> None:
        self.operation = operation
        super().__init__(message=f"Not supported: {operation}", operation=operation, **kwargs)
