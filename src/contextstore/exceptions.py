"""Exception hierarchy for contextstore.

All store errors inherit from StoreError, which carries a stable error
code, a human-readable message and free-form details.

Usage:
    from contextstore.exceptions import PermissionDenied, InvalidPath

    try:
        store.write("settings:theme", "dark")
    except PermissionDenied as e:
        print(e.code, e.path, e.operation)
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "StoreError",
    "PermissionDenied",
    "InvalidPath",
]


class StoreError(Exception):
    """Base exception for all store operations.

    Attributes:
        code: Stable error code string (e.g. "PERMISSION_DENIED").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "STORE_ERROR"
    message: str = "A store error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class PermissionDenied(StoreError):
    """The resolved permission of a path excludes the requested operation."""

    code: str = "PERMISSION_DENIED"

    def __init__(self, path: str, operation: str) -> None:
        self.path = path
        self.operation = operation
        target = "read" if operation == "read" else "write to"
        super().__init__(
            f"Permission denied: Unable to {target} {path}",
            path=path,
            operation=operation,
        )


class InvalidPath(StoreError, ValueError):
    """A write path has no segments or an empty leaf key."""

    code: str = "INVALID_PATH"

    def __init__(self, path: str, reason: str = "Path cannot be empty") -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {path!r}: {reason}", path=path, reason=reason)
