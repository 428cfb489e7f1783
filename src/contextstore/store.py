"""Path-addressed data store with per-field access control.

A ``Store`` is a node of a tree of named fields. Every public operation
takes a path (``"user:profile:name"``), authorizes it against the
resolved field permission and then reads or writes the value.

Field values are JSON-like data, nested ``Store`` nodes, or producers
(callables computed on read). Writing a plain mapping merges it into a
nested store instead of replacing it.

Example::

    store = Store()
    store.write("config", {"host": "localhost", "port": 5432})
    store.write("config", {"port": 6543})
    store.read("config:host")   # "localhost"
    store.read("config:port")   # 6543

    store.write("now", time.time)
    store.read("now")           # calls time.time()
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator, Mapping
from typing import Any, Optional

from .config import StoreConfig
from .exceptions import InvalidPath, PermissionDenied
from .fields import MISSING, StoreField
from .interfaces import BaseNode
from .logging import get_store_logger, safe_preview
from .paths import child_of, is_plain_object, is_truthy, join_path, split_path
from .permissions.constants import Permission
from .permissions.registry import PermissionTagRegistry, default_registry
from .permissions.resolver import can_read, can_write, resolve_permission
from .producers import Producer, as_value

logger = get_store_logger(__name__)


class Store(BaseNode):
    """A tree node of named fields with a default access policy.

    Args:
        initial: Fields to seed the node with. Assigned as-is, without tags.
        default_policy: Fallback permission for untagged fields. Defaults
            to the class policy (``rw`` unless a subclass sets another).
        registry: Tag registry shared with nested stores this node creates.

    Subclasses declare tagged fields with :func:`~contextstore.fields.restrict`
    and may set a class-wide policy::

        class SecretStore(Store, default_policy="none"):
            public_name = restrict("r", "vault")
    """

    _class_default_policy: Permission = Permission.READ_WRITE
    _declared_fields: dict[str, StoreField] = {}

    def __init_subclass__(cls, default_policy: Optional[str | Permission] = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        declared = dict(cls._declared_fields)
        for name, attr in list(vars(cls).items()):
            if isinstance(attr, StoreField):
                declared[name] = attr
                delattr(cls, name)
        cls._declared_fields = declared

        # `default_policy = "none"` in a class body would shadow the property.
        class_policy = vars(cls).get("default_policy")
        if class_policy is not None and not isinstance(class_policy, property):
            delattr(cls, "default_policy")
            if default_policy is None:
                default_policy = class_policy
        if default_policy is not None:
            cls._class_default_policy = Permission.coerce(default_policy)

    def __init__(
        self,
        initial: Optional[Mapping[str, Any]] = None,
        *,
        default_policy: Optional[str | Permission] = None,
        registry: Optional[PermissionTagRegistry] = None,
    ) -> None:
        self._fields: dict[str, Any] = {}
        self._owner: Optional[Store] = None
        self._registry = registry if registry is not None else default_registry
        self.default_policy = default_policy if default_policy is not None else self._class_default_policy

        for name, declared in self._declared_fields.items():
            value = declared.initial_value(self)
            if value is not MISSING:
                self._fields[name] = self._own(value)
            if declared.permission is not None:
                self._registry.tag(self, name, declared.permission)

        for name, value in (initial or {}).items():
            self._fields[name] = self._own(value)

    @classmethod
    def from_config(cls, config: StoreConfig, initial: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> Store:
        """Build a root store whose default policy comes from ``config``."""
        return cls(initial, default_policy=config.default_policy, **kwargs)

    # ── Policy & tags ───────────────────────────────────

    @property
    def default_policy(self) -> Permission:
        return self._default_policy

    @default_policy.setter
    def default_policy(self, value: str | Permission) -> None:
        self._default_policy = Permission.coerce(value)

    @property
    def registry(self) -> PermissionTagRegistry:
        return self._registry

    def restrict(self, field: str, permission: str | Permission) -> None:
        """Tag ``field`` of this instance with ``permission``."""
        self._registry.tag(self, field, permission)

    def tag_of(self, field: str) -> Optional[Permission]:
        return self._registry.tag_of(self, field)

    def permission_for(self, path: str) -> Permission:
        """Effective permission of ``path``."""
        return resolve_permission(self, split_path(path))

    def allowed_to_read(self, path: str) -> bool:
        return can_read(self.permission_for(path))

    def allowed_to_write(self, path: str) -> bool:
        return can_write(self.permission_for(path))

    # ── Public contract ─────────────────────────────────

    def read(self, path: str) -> Any:
        """Read the value at ``path``.

        A producer found at the end of the path is invoked once and its
        result returned. Missing fields read as ``None``.

        Raises:
            PermissionDenied: If the path is not readable.
        """
        if not self.allowed_to_read(path):
            logger.warning("Permission denied", path=path, operation="read")
            raise PermissionDenied(path, "read")

        value = self._get_nested_value(split_path(path))
        if isinstance(value, Producer):
            value = value()

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Read %s", safe_preview(value), path=path, operation="read")
        return value

    def write(self, path: str, value: Any) -> Any:
        """Write ``value`` at ``path``, creating intermediate stores as needed.

        Plain mappings are merged field by field into a nested store; each
        field goes through that store's own ``write`` and permission check.

        Returns:
            ``value`` as passed in.

        Raises:
            PermissionDenied: If the path (or a merged field) is not writable.
            InvalidPath: If the path has no segments or an empty leaf key.
        """
        if not self.allowed_to_write(path):
            logger.warning("Permission denied", path=path, operation="write")
            raise PermissionDenied(path, "write")

        self._set_nested_value(split_path(path), value, path)
        return value

    def write_entries(self, entries: Mapping[str, Any]) -> None:
        """Write every entry of ``entries`` in order.

        Not atomic: a failing write leaves earlier entries written.
        """
        for key, value in entries.items():
            self.write(key, value)

    def entries(self) -> dict[str, Any]:
        """Snapshot of this node's own readable fields.

        Producers are listed as the callables they wrap, not invoked.
        """
        return {
            name: value.func if isinstance(value, Producer) else value
            for name, value in self._fields.items()
            if resolve_permission(self, [name]).readable
        }

    # ── Raw introspection (no permission checks) ────────

    def get_field(self, name: str, default: Optional[Any] = None) -> Any:
        return self._fields.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(default_policy={self._default_policy.value!r}, fields={list(self._fields)!r})"

    def copy(self) -> Store:
        """Deep snapshot of this node: nested stores, tags and plain data are copied."""
        cls = type(self)
        clone = cls.__new__(cls)
        clone._fields = {}
        clone._owner = None
        clone._registry = self._registry
        clone._default_policy = self._default_policy

        for name, value in self._fields.items():
            if isinstance(value, Store):
                value = value.copy()
                value._owner = clone
            elif isinstance(value, Producer):
                # Declared producers are bound to their instance; rebind to the clone.
                if getattr(value.func, "__self__", None) is self:
                    value = Producer(value.func.__func__.__get__(clone, cls))
            else:
                value = copy.deepcopy(value)
            clone._fields[name] = value

        self._registry.copy_tags(self, clone)
        return clone

    def __copy__(self) -> Store:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> Store:
        return self.copy()

    # ── Traversal ───────────────────────────────────────

    def _get_nested_value(self, segments: list[str]) -> Any:
        acc: Any = self
        for key in segments:
            if isinstance(acc, Producer):
                acc = self._resolve_virtual(acc(key), key)
            elif is_truthy(acc):
                acc = as_value(child_of(acc, key))
            else:
                return None
        return acc

    @staticmethod
    def _resolve_virtual(result: Any, key: str) -> Any:
        if isinstance(result, Store):
            return result._get_nested_value([key])
        if is_plain_object(result):
            return as_value(result.get(key))
        if callable(result):
            return as_value(result)(key)
        return None

    def _set_nested_value(self, segments: list[str], value: Any, path: str) -> None:
        if not segments:
            raise InvalidPath(path)

        *prefix, leaf = segments
        if not leaf:
            raise InvalidPath(path, "Last key is invalid")

        current = self
        for depth, key in enumerate(prefix, 1):
            current = current._descend(key, path, join_path(*prefix[:depth]))

        if is_plain_object(value):
            target = current._merge_target(leaf)
            for key, item in value.items():
                target.write(key, item)
            return

        current._assign(leaf, value)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Wrote %s", safe_preview(value), path=path, operation="write")

    def _descend(self, key: str, path: str, reached: str) -> Store:
        child = self._fields.get(key)
        if isinstance(child, Store):
            return child
        if not is_truthy(child):
            child = Store(default_policy=self._default_policy, registry=self._registry)
        elif is_plain_object(child):
            child = Store(child, default_policy=self._default_policy, registry=self._registry)
        else:
            raise InvalidPath(path, f"Segment {reached!r} holds a {type(child).__name__}, not a store")
        return self._attach(key, child)

    def _merge_target(self, leaf: str) -> Store:
        target = self._fields.get(leaf)
        if isinstance(target, Store):
            return target
        seed = target if is_plain_object(target) else None
        return self._attach(leaf, Store(seed, default_policy=self._default_policy, registry=self._registry))

    def _attach(self, key: str, child: Store) -> Store:
        self._release(key, child)
        child._owner = self
        self._fields[key] = child
        return child

    def _assign(self, leaf: str, value: Any) -> None:
        value = self._own(value)
        self._release(leaf, value)
        self._fields[leaf] = value
        self._registry.tag(self, leaf, self._default_policy)

    def _release(self, key: str, replacement: Any) -> None:
        old = self._fields.get(key)
        if isinstance(old, Store) and old is not replacement and old._owner is self:
            old._owner = None

    def _own(self, value: Any) -> Any:
        """Prepare ``value`` for storage in this node.

        Stores are adopted when free; a store that already has an owner, or
        that would create a cycle, is copied instead. Bare callables become
        producers.
        """
        if isinstance(value, Store):
            if value._owner is not None or value is self or self._descends_from(value):
                value = value.copy()
            value._owner = self
            return value
        return as_value(value)

    def _descends_from(self, node: Store) -> bool:
        current = self._owner
        while current is not None:
            if current is node:
                return True
            current = current._owner
        return False


__all__ = ["Store"]
