"""Handle-based resource pools for rasterized images and meshes."""

from __future__ import annotations

import itertools
import threading
from typing import Any, Protocol


class Handle:
    """Opaque reference to a buffer held by a resource pool."""

    __slots__ = ("pool", "id")

    def __init__(self, pool: str, id: int):
        self.pool = pool
        self.id = id

    def __eq__(self, other) -> bool:
        if not isinstance(other, Handle):
            return NotImplemented
        return self.pool == other.pool and self.id == other.id

    def __hash__(self) -> int:
        return hash((self.pool, self.id))

    def __repr__(self) -> str:
        return f"Handle({self.pool!r}, {self.id})"


class ResourcePool(Protocol):
    """Protocol for renderer-side asset storage."""

    def register(self, buffer: Any) -> Handle:
        """Store a new buffer and return its handle."""
        ...

    def replace(self, handle: Handle, buffer: Any) -> Handle:
        """Supersede the buffer behind ``handle``."""
        ...

    def get(self, handle: Handle) -> Any:
        """Return the buffer behind ``handle``."""
        ...


class MemoryResourcePool:
    """In-process resource pool.

    Registration and replacement are guarded by a lock so that several
    terrains can share one pool.

    Args:
        name: Pool name, stored on every handle it issues.
    """

    def __init__(self, name: str = "resources"):
        self.name = name
        self._buffers: dict[int, Any] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def register(self, buffer: Any) -> Handle:
        with self._lock:
            handle = Handle(self.name, next(self._ids))
            self._buffers[handle.id] = buffer
        return handle

    def replace(self, handle: Handle, buffer: Any) -> Handle:
        """Supersede a buffer, registering it anew if the handle is unknown."""
        if handle is None or handle.pool != self.name:
            return self.register(buffer)
        with self._lock:
            if handle.id not in self._buffers:
                handle = Handle(self.name, next(self._ids))
            self._buffers[handle.id] = buffer
        return handle

    def get(self, handle: Handle) -> Any:
        try:
            return self._buffers[handle.id]
        except KeyError as e:
            raise KeyError(f"Unknown handle {handle!r}") from e

    def remove(self, handle: Handle) -> None:
        with self._lock:
            self._buffers.pop(handle.id, None)

    def __contains__(self, handle: Handle) -> bool:
        return handle.pool == self.name and handle.id in self._buffers

    def __len__(self) -> int:
        return len(self._buffers)

    def __repr__(self) -> str:
        return f"MemoryResourcePool(name={self.name!r}, n_buffers={len(self)})"
