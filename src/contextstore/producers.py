"""Producer values: computed fields and virtual namespaces.

A ``Producer`` wraps a callable stored in a field. Traversal never calls a
raw value; it dispatches through ``Producer`` instead:

- leaf read: ``producer()`` — invoked with no arguments.
- namespace read: ``producer(key)`` — invoked with the next path segment,
  unless the wrapped callable takes no positional argument, in which case
  the key is dropped.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

_NO_KEY = object()


def _accepts_key(func: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures get the key.
        return True
    for param in signature.parameters.values():
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        ):
            return True
    return False


class Producer:
    """A computed field value.

    Args:
        func: Callable taking either nothing or a single field name.
    """

    __slots__ = ("func", "accepts_key")

    def __init__(self, func: Callable[..., Any]) -> None:
        if isinstance(func, Producer):
            func = func.func
        if not callable(func):
            raise TypeError(f"Producer requires a callable, got {type(func).__name__}")
        self.func = func
        self.accepts_key = _accepts_key(func)

    def __call__(self, key: Any = _NO_KEY) -> Any:
        if key is _NO_KEY or not self.accepts_key:
            return self.func()
        return self.func(key)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", None) or repr(self.func)
        return f"Producer({name})"


def producer(func: Callable[..., Any]) -> Producer:
    """Wrap ``func`` as a producer value.

    Stores wrap plain callables automatically; this is for callers that
    want the wrapping to be explicit::

        store.write("now", producer(time.time))
    """
    return Producer(func)


def as_value(value: Any) -> Any:
    """Wrap bare callables in ``Producer``; return anything else unchanged."""
    if isinstance(value, Producer) or not callable(value):
        return value
    return Producer(value)


__all__ = [
    "Producer",
    "as_value",
    "producer",
]
