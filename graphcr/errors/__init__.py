"""graphcr Error Handling Module.

- Custom exception hierarchy with error codes
- Structured context (path, identifier, type) for lookups
- Troubleshooting suggestions for common errors
"""

from graphcr.errors.base import (
    ChildNotFoundError,
    ConfigLoadError,
    ConfigValidationError,
    ErrorCode,
    ErrorContext,
    GraphCRError,
    InvalidPathError,
    LinkMetadataError,
    LookupFailedError,
    NodeNotFoundError,
    NoSuchWorkspaceError,
    NotFoundError,
    NoWorkspaceError,
    SchemaError,
    SchemaValidationError,
    StoreError,
    StoreUnavailableError,
    UnknownTypeError,
    UnsupportedOperationError,
)

__all__ = [
    # Base exceptions
    "GraphCRError",
    "ErrorCode",
    "ErrorContext",
    # Schema errors
    "SchemaError",
    "UnknownTypeError",
    "LinkMetadataError",
    "SchemaValidationError",
    # Lookup errors
    "LookupFailedError",
    "ChildNotFoundError",
    "InvalidPathError",
    "NodeNotFoundError",
    "NoWorkspaceError",
    "NotFoundError",
    "NoSuchWorkspaceError",
    # Configuration errors
    "ConfigValidationError",
    "ConfigLoadError",
    # Store errors
    "StoreError",
    "StoreUnavailableError",
    # Operation errors
    "UnsupportedOperationError",
]
