"""Declarative field tagging for Store subclasses.

``restrict`` declares a field on a ``Store`` subclass together with its
permission tag. Tags are applied per instance when the store is built::

    class UserStore(Store):
        name = restrict("r", "John")
        secret = restrict("none", default_factory=generate_token)

    class AdminStore(Store, default_policy="none"):
        @restrict("r")
        def user(self):
            return UserStore()
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Optional

from .permissions.constants import Permission
from .producers import Producer


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class StoreField:
    """A declared field: optional permission tag plus an initial value.

    Exactly one of ``default``, ``default_factory`` or ``producer`` supplies
    the initial value. A field with none of them starts absent but still
    carries its tag.
    """

    __slots__ = ("permission", "default", "default_factory", "producer")

    def __init__(
        self,
        permission: Optional[str | Permission] = None,
        default: Any = MISSING,
        default_factory: Optional[Callable[[], Any]] = None,
        producer: Optional[Callable[..., Any]] = None,
    ) -> None:
        if sum(x is not None for x in (default_factory, producer)) + (default is not MISSING) > 1:
            raise TypeError("StoreField takes only one of default, default_factory, producer")
        self.permission = Permission.coerce(permission) if permission is not None else None
        self.default = default
        self.default_factory = default_factory
        self.producer = producer

    def __call__(self, func: Callable[..., Any]) -> StoreField:
        # Decorator form: @restrict("r") on a method declares a producer field.
        if self.default is not MISSING or self.default_factory is not None:
            raise TypeError("restrict() with a default cannot decorate a method")
        return StoreField(self.permission, producer=func)

    def initial_value(self, owner: Any) -> Any:
        """Value seeded into ``owner`` at construction, or ``MISSING``."""
        if self.producer is not None:
            return Producer(self.producer.__get__(owner, type(owner)))
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is MISSING:
            return MISSING
        return copy.deepcopy(self.default)

    def __repr__(self) -> str:
        perm = self.permission.value if self.permission is not None else None
        return f"StoreField(permission={perm!r})"


def restrict(
    permission: Optional[str | Permission] = None,
    default: Any = MISSING,
    *,
    default_factory: Optional[Callable[[], Any]] = None,
) -> StoreField:
    """Declare a store field restricted to ``permission``.

    Args:
        permission: ``r``, ``w``, ``rw`` or ``none``. ``None`` leaves the
            field untagged so the store's default policy applies.
        default: Initial value (deep-copied for every instance).
        default_factory: Zero-argument callable building the initial value.

    Returns:
        A ``StoreField``; it may also decorate a method to declare a
        producer field.
    """
    return StoreField(permission, default=default, default_factory=default_factory)


__all__ = [
    "MISSING",
    "StoreField",
    "restrict",
]
