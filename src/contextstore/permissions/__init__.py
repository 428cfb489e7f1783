"""Field permissions for contextstore.

Defines:
- Permission: access levels (r / w / rw / none)
- PermissionTagRegistry: per-instance field tags, with a shared default_registry
- resolve_permission(): effective permission of a path below a node
"""

from .constants import Permission
from .registry import PermissionTagRegistry, default_registry
from .resolver import can_read, can_write, resolve_permission

__all__ = [
    "Permission",
    "PermissionTagRegistry",
    "can_read",
    "can_write",
    "default_registry",
    "resolve_permission",
]
