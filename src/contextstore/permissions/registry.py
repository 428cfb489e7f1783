"""Side-table of per-field permission tags.

A tag belongs to a ``(owner, field)`` pair, where the owner is a node
instance. Two instances of the same class may carry different tags for
the same field name. Rows are dropped when their owner is garbage
collected.
"""

from __future__ import annotations

import weakref
from typing import Any

from .constants import Permission


class PermissionTagRegistry:
    """Stores an optional permission label keyed by (owner identity, field name).

    Example::

        registry = PermissionTagRegistry()
        registry.tag(store, "name", "r")
        registry.tag_of(store, "name")   # Permission.READ
        registry.tag_of(store, "other")  # None
    """

    def __init__(self) -> None:
        self._tags: dict[int, dict[str, Permission]] = {}

    def tag(self, owner: Any, field: str, permission: str | Permission) -> None:
        """Attach ``permission`` to ``field`` of ``owner``.

        ``owner`` must support weak references so its row can be
        released together with it.
        """
        permission = Permission.coerce(permission)
        key = id(owner)
        row = self._tags.get(key)
        if row is None:
            weakref.finalize(owner, self._tags.pop, key, None)
            row = self._tags[key] = {}
        row[field] = permission

    def tag_of(self, owner: Any, field: str) -> Permission | None:
        row = self._tags.get(id(owner))
        if row is None:
            return None
        return row.get(field)

    def untag(self, owner: Any, field: str) -> None:
        row = self._tags.get(id(owner))
        if row is not None:
            row.pop(field, None)

    def tags_of(self, owner: Any) -> dict[str, Permission]:
        return dict(self._tags.get(id(owner), {}))

    def copy_tags(self, source: Any, target: Any) -> None:
        """Copy every tag of ``source`` onto ``target``."""
        for field, permission in self.tags_of(source).items():
            self.tag(target, field, permission)

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"PermissionTagRegistry(owners={len(self._tags)})"


# Shared by every store that is not given its own registry.
default_registry = PermissionTagRegistry()


__all__ = [
    "PermissionTagRegistry",
    "default_registry",
]
