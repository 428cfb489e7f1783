"""Effective-permission resolution for store paths.

Walks a split path against the stored nodes and the tag registry,
falling back to each node's default policy. Used by ``Store`` for every
read/write check and by ``Store.entries()`` for field filtering.
"""

from __future__ import annotations

from typing import Any, Sequence

from ..interfaces import BaseNode
from ..paths import child_of, is_truthy
from ..producers import Producer
from .constants import Permission


def _tag_or_policy(current: Any, key: str, root: BaseNode) -> Permission:
    if isinstance(current, BaseNode):
        return current.registry.tag_of(current, key) or current.default_policy
    # Plain containers and producers carry no tags of their own.
    return root.registry.tag_of(current, key) or root.default_policy


def resolve_permission(node: BaseNode, segments: Sequence[str]) -> Permission:
    """Resolve the permission governing ``segments`` below ``node``.

    Rules:
    1. A single-segment path, or one whose first field holds a producer,
       uses the tag on ``(node, segments[0])``, else ``node.default_policy``.
    2. Otherwise the path is walked from the first field. At every step
       the tag of ``(current, segments[index])`` (or the current node's
       default policy) becomes the candidate, then traversal steps into
       that field. The walk stops at the first falsy value, and the
       candidate from the last step taken is returned.

    When an intermediate field is missing, the result is the permission
    of the last node actually stepped into, not of the final segment.

    Example::

        store.write("user:name", "John")
        resolve_permission(store, ["user", "name"])  # tag of (user, "name")
    """
    head = segments[0] if segments else ""
    first = node.get_field(head)
    if len(segments) < 2 or isinstance(first, Producer):
        return node.registry.tag_of(node, head) or node.default_policy

    permission = node.default_policy
    current = first
    index = 0
    while is_truthy(current):
        index += 1
        key = segments[index] if index < len(segments) else None
        if key:
            permission = _tag_or_policy(current, key, node)
        current = child_of(current, key)

    return permission


def can_read(permission: str | Permission) -> bool:
    """True for ``r`` and ``rw``."""
    return Permission.coerce(permission).readable


def can_write(permission: str | Permission) -> bool:
    """True for ``w`` and ``rw``."""
    return Permission.coerce(permission).writable


__all__ = [
    "can_read",
    "can_write",
    "resolve_permission",
]
