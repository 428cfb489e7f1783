"""Path syntax and single-step navigation.

A path is a string of field names joined by ``PATH_DELIMITER``::

    "config:database:host"  ->  ["config", "database", "host"]

Empty segments are kept; rejecting them is up to the operation.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from .interfaces import BaseNode

PATH_DELIMITER = ":"


def split_path(path: str) -> list[str]:
    return path.split(PATH_DELIMITER)


def join_path(*segments: str) -> str:
    return PATH_DELIMITER.join(segments)


def is_truthy(value: Any) -> bool:
    """Truthiness of a field value as seen by traversal.

    Only ``None``, ``False``, zero, NaN and the empty string are falsy.
    Containers are truthy even when empty, so an empty nested store is
    still stepped into.
    """
    if value is None or value is False:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (int, float, str)):
        return bool(value)
    return True


def is_plain_object(value: Any) -> bool:
    """True for JSON-like objects (mappings that are not store nodes)."""
    return isinstance(value, Mapping) and not isinstance(value, BaseNode)


def child_of(container: Any, key: str | None) -> Any:
    """Step from ``container`` into ``key``; ``None`` when there is nothing there."""
    if key is None or container is None:
        return None
    if isinstance(container, BaseNode):
        return container.get_field(key)
    if isinstance(container, Mapping):
        return container.get(key)
    if isinstance(container, Sequence) and not isinstance(container, (str, bytes)):
        if key.isdigit() and int(key) < len(container):
            return container[int(key)]
    return None


__all__ = [
    "PATH_DELIMITER",
    "child_of",
    "is_plain_object",
    "is_truthy",
    "join_path",
    "split_path",
]
