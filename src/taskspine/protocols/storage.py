"""Host storage protocol.

The host owns persistence. TaskSpine only needs a raw key/value store of
bytes; typed access, appends and length probes are layered on top by
:class:`~taskspine.storage.value.StorageValue`.

Example:
    >>> from taskspine.protocols.storage import HostStorage
    >>> from taskspine.storage.memory import MemoryStorage
    >>> isinstance(MemoryStorage(), HostStorage)
    True
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class HostStorage(Protocol):
    """Raw byte storage keyed by string.

    Implementations: MemoryStorage.
    """

    def get_raw(self, key: str) -> bytes | None:
        """Return the stored bytes, or None if the key is absent."""
        ...

    def put_raw(self, key: str, value: bytes) -> None:
        """Store bytes under ``key``, replacing any previous value."""
        ...

    def delete(self, key: str) -> bool:
        """Delete ``key``. Returns True if it existed."""
        ...

    def exists(self, key: str) -> bool:
        """Check whether ``key`` holds a value."""
        ...

    def keys(self) -> Iterator[str]:
        """Iterate over stored keys."""
        ...
