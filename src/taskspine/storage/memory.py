"""In-memory host storage.

Provides a complete in-memory implementation of HostStorage, useful for
testing and for hosts that persist the whole map themselves.

Example:
    >>> from taskspine.storage.memory import MemoryStorage
    >>> storage = MemoryStorage()
    >>> storage.put_raw("executor", b"\\x00")
    >>> storage.get_raw("executor")
    b'\\x00'
    >>> storage.delete("executor")
    True
    >>> storage.get_raw("executor") is None
    True
"""

from __future__ import annotations

from collections.abc import Iterator


class MemoryStorage:
    """Dict-backed byte storage.

    Values are copied to immutable ``bytes`` on write, so callers cannot
    alter stored data through a buffer they still hold.
    """

    def __init__(self) -> None:
        self._data: dict[str, bytes] = {}

    def get_raw(self, key: str) -> bytes | None:
        return self._data.get(key)

    def put_raw(self, key: str, value: bytes) -> None:
        self._data[key] = bytes(value)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def exists(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> Iterator[str]:
        return iter(list(self._data))

    # --- Utility Methods ---

    def clear(self) -> None:
        """Drop every stored value.

        Example:
            >>> from taskspine.storage.memory import MemoryStorage
            >>> s = MemoryStorage()
            >>> s.put_raw("a", b"1")
            >>> s.clear()
            >>> len(s)
            0
        """
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)
