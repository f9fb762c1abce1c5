"""Metadata substrate for method binding maps.

Binding maps live in an explicit registry keyed by the owning type and the
method name rather than as attributes on the handler class. A process-wide
default registry is used when callers do not pass their own. A registry
holds several metadata namespaces side by side; binding maps use
``BindingConfig.metadata_key`` (``ROUTEBIND_METADATA_KEY``).
"""

import logging
import threading
from types import MappingProxyType
from typing import Any, Dict, Hashable, List, Mapping, Optional, Protocol, Tuple

from .config import BindingConfig
from .descriptor import Descriptor, MethodBindingMap

logger = logging.getLogger(__name__)

_EMPTY: Mapping[str, Descriptor] = MappingProxyType({})


class MetadataStore(Protocol):
    """Synchronous key/object store for method binding maps."""

    def get(self, owner: Any, key: Hashable) -> Optional[MethodBindingMap]:
        """Return the stored map for ``(owner, key)`` or None if absent."""
        ...

    def set(self, owner: Any, key: Hashable, value: MethodBindingMap) -> None:
        """Store ``value`` as the map for ``(owner, key)``."""
        ...


class MetadataRegistry:
    """In-memory metadata store shared by several metadata namespaces.

    ``get``/``set`` read and write the registry's own namespace
    (``metadata_key``). Other namespaces live in the same storage and are
    reached through ``get_metadata``/``define_metadata`` or a ``namespace()``
    view, so route arguments and other per-handler metadata never collide.

    Attributes:
        metadata_key: Namespace used by ``get`` and ``set``
    """

    def __init__(self, config: Optional[BindingConfig] = None):
        self.metadata_key = (config or BindingConfig()).metadata_key
        self._slots: Dict[Tuple[str, Any, Hashable], Any] = {}
        self._lock = threading.Lock()

    def get_metadata(self, metadata_key: str, owner: Any, key: Hashable) -> Any:
        """Return the value stored under ``metadata_key`` for ``(owner, key)``."""
        with self._lock:
            return self._slots.get((metadata_key, owner, key))

    def define_metadata(
        self, metadata_key: str, owner: Any, key: Hashable, value: Any
    ) -> None:
        """Store ``value`` under ``metadata_key`` for ``(owner, key)``."""
        with self._lock:
            self._slots[(metadata_key, owner, key)] = value

    def get(self, owner: Any, key: Hashable) -> Optional[MethodBindingMap]:
        return self.get_metadata(self.metadata_key, owner, key)

    def set(self, owner: Any, key: Hashable, value: MethodBindingMap) -> None:
        self.define_metadata(self.metadata_key, owner, key, value)

    def namespace(self, metadata_key: str) -> "MetadataNamespace":
        """Return a MetadataStore view of another namespace in this registry."""
        return MetadataNamespace(self, metadata_key)

    def handlers(
        self, metadata_key: Optional[str] = None
    ) -> List[Tuple[Any, Hashable]]:
        """List every ``(owner, method)`` pair with metadata in a namespace.

        Args:
            metadata_key: Namespace to list (defaults to ``metadata_key``)
        """
        metadata_key = metadata_key or self.metadata_key
        with self._lock:
            return [
                (owner, key)
                for namespace, owner, key in self._slots
                if namespace == metadata_key
            ]

    def clear(self) -> None:
        """Drop every stored value in every namespace."""
        with self._lock:
            count = len(self._slots)
            self._slots.clear()
        logger.debug(f"Cleared {count} metadata slot(s)")

    def __len__(self) -> int:
        return len(self.handlers())


class MetadataNamespace:
    """MetadataStore view of one namespace of a MetadataRegistry."""

    def __init__(self, registry: MetadataRegistry, metadata_key: str):
        self.registry = registry
        self.metadata_key = metadata_key

    def get(self, owner: Any, key: Hashable) -> Optional[MethodBindingMap]:
        return self.registry.get_metadata(self.metadata_key, owner, key)

    def set(self, owner: Any, key: Hashable, value: MethodBindingMap) -> None:
        self.registry.define_metadata(self.metadata_key, owner, key, value)

    def handlers(self) -> List[Tuple[Any, Hashable]]:
        return self.registry.handlers(self.metadata_key)


_default_registry: Optional[MetadataRegistry] = None
_default_lock = threading.Lock()


def get_metadata_registry() -> MetadataRegistry:
    """Return the process-wide registry, creating it on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            _default_registry = MetadataRegistry(BindingConfig.from_env())
        return _default_registry


def clear_metadata_registry() -> None:
    """Reset the process-wide registry.

    This is primarily useful for testing. Maps recorded by handler classes
    that were already defined are lost.
    """
    global _default_registry
    with _default_lock:
        _default_registry = None


def get_route_arguments(
    owner: Any, key: Hashable, store: Optional[MetadataStore] = None
) -> Mapping[str, Descriptor]:
    """Read the finished binding map for a handler method.

    Args:
        owner: Type that declares the handler
        key: Handler method name
        store: Store to read from (defaults to the process-wide registry)

    Returns:
        Read-only view of the map, empty when nothing was bound
    """
    store = store if store is not None else get_metadata_registry()
    args = store.get(owner, key)
    return MappingProxyType(args) if args is not None else _EMPTY


__all__ = [
    "MetadataStore",
    "MetadataRegistry",
    "MetadataNamespace",
    "get_metadata_registry",
    "clear_metadata_registry",
    "get_route_arguments",
]
