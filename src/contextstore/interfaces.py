from abc import ABC, abstractmethod
from typing import Any, Optional

from .permissions.constants import Permission
from .permissions.registry import PermissionTagRegistry


class BaseNode(ABC):
    """A node of the store tree: named fields plus a default policy."""

    @property
    @abstractmethod
    def default_policy(self) -> Permission:
        raise NotImplementedError

    @property
    @abstractmethod
    def registry(self) -> PermissionTagRegistry:
        raise NotImplementedError

    @abstractmethod
    def get_field(self, name: str, default: Optional[Any] = None) -> Any:
        """Return the raw value held by ``name`` without permission checks."""
        raise NotImplementedError


__all__ = ["BaseNode"]
