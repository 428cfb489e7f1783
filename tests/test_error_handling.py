"""Tests for error handling and edge cases in contextstore."""

from __future__ import annotations

import pytest

from contextstore import InvalidPath, PermissionDenied, Store, StoreError


class TestExceptionHierarchy:
    """Tests for the exception types themselves."""

    def test_permission_denied_fields(self) -> None:
        """PermissionDenied carries path, operation and a stable code."""
        error = PermissionDenied("a:b", "read")
        assert isinstance(error, StoreError)
        assert error.code == "PERMISSION_DENIED"
        assert error.path == "a:b"
        assert error.operation == "read"
        assert error.details == {"path": "a:b", "operation": "read"}
        assert str(error) == "Permission denied: Unable to read a:b"

    def test_permission_denied_write_message(self) -> None:
        assert str(PermissionDenied("x", "write")) == "Permission denied: Unable to write to x"

    def test_invalid_path_fields(self) -> None:
        """InvalidPath is also a ValueError."""
        error = InvalidPath(":")
        assert isinstance(error, StoreError)
        assert isinstance(error, ValueError)
        assert error.code == "INVALID_PATH"
        assert error.path == ":"
        assert error.reason == "Path cannot be empty"

    def test_store_error_defaults(self) -> None:
        error = StoreError()
        assert error.code == "STORE_ERROR"
        assert error.message == "A store error occurred"
        assert error.details == {}

    def test_store_error_custom(self) -> None:
        error = StoreError("boom", code="CUSTOM", field="x")
        assert str(error) == "boom"
        assert error.code == "CUSTOM"
        assert error.details == {"field": "x"}


class TestInvalidPaths:
    """Tests for write paths that cannot be addressed."""

    @pytest.mark.parametrize("path", ["", ":", "a:", "a:b:"])
    def test_empty_leaf_rejected(self, path: str) -> None:
        """Paths whose last segment is empty raise InvalidPath."""
        store = Store()
        with pytest.raises(InvalidPath) as exc_info:
            store.write(path, 1)
        assert exc_info.value.path == path
        assert exc_info.value.reason == "Last key is invalid"

    def test_rejected_write_changes_nothing(self) -> None:
        """An empty-path write leaves the store empty."""
        store = Store()
        with pytest.raises(InvalidPath):
            store.write("", {"a": 1})
        assert len(store) == 0

    def test_permission_checked_before_path(self) -> None:
        """A store denying writes reports PermissionDenied even for bad paths."""
        store = Store(default_policy="r")
        with pytest.raises(PermissionDenied):
            store.write("", 1)

    def test_empty_read_path_is_none(self) -> None:
        """Reads never raise InvalidPath; empty paths read as None."""
        store = Store()
        assert store.read("") is None
        assert store.read(":") is None


class TestPermissionErrors:
    """Tests for permission failures surfacing to callers."""

    def test_read_denied(self) -> None:
        store = Store({"a": 1}, default_policy="w")
        with pytest.raises(PermissionDenied) as exc_info:
            store.read("a")
        assert exc_info.value.operation == "read"
        assert exc_info.value.path == "a"

    def test_write_denied(self) -> None:
        store = Store(default_policy="r")
        with pytest.raises(PermissionDenied) as exc_info:
            store.write("a:b", 1)
        assert exc_info.value.operation == "write"
        assert "a" not in store

    def test_denied_on_every_call(self) -> None:
        """Denials are not cached or suppressed."""
        store = Store({"a": 1}, default_policy="none")
        for _ in range(3):
            with pytest.raises(PermissionDenied):
                store.read("a")

    def test_nested_write_denied_by_leaf_tag(self) -> None:
        store = Store()
        store.write("cfg:a", 1)
        store.get_field("cfg").restrict("a", "r")
        with pytest.raises(PermissionDenied):
            store.write("cfg:a", 2)
        assert store.read("cfg:a") == 1

    def test_producer_errors_propagate(self) -> None:
        """Exceptions raised by producers reach the caller."""

        def broken() -> None:
            raise RuntimeError("producer failed")

        store = Store()
        store.write("broken", broken)
        with pytest.raises(RuntimeError, match="producer failed"):
            store.read("broken")
