"""Permission levels for store fields.

Provides:
- ``Permission`` — the four access levels a field can carry (r / w / rw / none).
"""

from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    """Access level of a single store field.

    A field tag (or a node's default policy) is one of these values.
    ``READ_WRITE`` implies both ``READ`` and ``WRITE``; ``NONE`` grants nothing.
    """

    READ = "r"
    WRITE = "w"
    READ_WRITE = "rw"
    NONE = "none"

    @property
    def readable(self) -> bool:
        return self in (Permission.READ, Permission.READ_WRITE)

    @property
    def writable(self) -> bool:
        return self in (Permission.WRITE, Permission.READ_WRITE)

    @classmethod
    def coerce(cls, value: str | Permission) -> Permission:
        """Convert a permission string to a ``Permission``.

        Raises:
            ValueError: If ``value`` is not one of ``r``, ``w``, ``rw``, ``none``.
        """
        if isinstance(value, Permission):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid permission: {value!r}. Must be one of {[p.value for p in cls]}") from None


__all__ = [
    "Permission",
]
