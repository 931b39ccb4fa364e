"""Typed access to a single stored value.

:class:`StorageValue` binds a host storage key to a stored type, handling
encoding on the way in and out. For types that declare the storage shims
(see :mod:`taskspine.storage.shim`) it also offers :meth:`StorageValue.append`
and :meth:`StorageValue.decode_len`, which work on the raw bytes without
decoding the stored items.

Example:
    >>> from taskspine.executor.single_pass import SinglePassExecutor
    >>> from taskspine.storage import MemoryStorage, StorageValue
    >>> from taskspine.testing import ReferenceTask, TaskBuilder
    >>> value = StorageValue(MemoryStorage(), "tasks", SinglePassExecutor.of(ReferenceTask))
    >>> value.append(TaskBuilder().build(10))
    >>> value.append(TaskBuilder().build(20))
    >>> value.decode_len()
    2
    >>> value.get().count()
    2
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, Protocol, Self, TypeVar

from taskspine.codec import append_encoded
from taskspine.core.exceptions import StorageError
from taskspine.protocols.storage import HostStorage
from taskspine.storage.shim import StorageAppend, StorageDecodeLength

logger = logging.getLogger(__name__)

R = TypeVar("R")


class Storable(Protocol):
    """A type that can be created empty and round-trips through bytes."""

    @classmethod
    def new(cls) -> Self: ...

    @classmethod
    def decode(cls, data: bytes) -> Self: ...

    def encode(self) -> bytes: ...


V = TypeVar("V", bound=Storable)


class StorageValue(Generic[V]):
    """A typed view over one key of a host storage.

    Args:
        storage: Host storage holding the raw bytes.
        key: Storage key.
        value_type: Stored type; must provide ``new``, ``encode`` and ``decode``.
    """

    def __init__(self, storage: HostStorage, key: str, value_type: type[V]) -> None:
        self.storage = storage
        self.key = key
        self.value_type = value_type

    def __repr__(self) -> str:
        return f"StorageValue(key={self.key!r}, value_type={self.value_type.__name__})"

    def exists(self) -> bool:
        return self.storage.exists(self.key)

    def get(self) -> V | None:
        """Load and decode the value, or None if absent.

        Raises:
            CodecError: If the stored bytes do not decode.
        """
        raw = self.storage.get_raw(self.key)
        if raw is None:
            return None
        return self.value_type.decode(raw)

    def put(self, value: V) -> None:
        self.storage.put_raw(self.key, value.encode())

    def kill(self) -> None:
        self.storage.delete(self.key)

    def take(self) -> V | None:
        """Load the value and remove it from storage."""
        value = self.get()
        self.kill()
        return value

    def mutate(self, fn: Callable[[V], R]) -> R:
        """Load the value (or a new one), apply ``fn``, and write it back.

        Returns whatever ``fn`` returns. Nothing is written if ``fn`` raises.
        """
        value = self.get()
        if value is None:
            value = self.value_type.new()
        result = fn(value)
        self.put(value)
        return result

    # --- Shim routines ---

    def append(self, item: Any) -> None:
        """Append ``item`` to the stored sequence without decoding it.

        Starts a new one-item sequence if the key is absent.

        Raises:
            StorageError: If the stored type does not declare StorageAppend.
            TypeError: If ``item`` is not of the declared item type.
            CodecError: If the stored length prefix is malformed.
        """
        if not issubclass(self.value_type, StorageAppend):
            raise StorageError(f"{self.value_type.__name__} does not support append")
        item_type = self.value_type.append_item_type()
        if not isinstance(item, item_type):
            raise TypeError(
                f"Cannot append {type(item).__name__} to {self.value_type.__name__}; "
                f"expected {item_type.__name__}"
            )
        raw = self.storage.get_raw(self.key)
        self.storage.put_raw(self.key, append_encoded(raw, item.encode()))
        logger.debug(f"Appended {item!r} to {self.key!r}")

    def decode_len(self) -> int | None:
        """Read the stored sequence's length without decoding its items.

        Returns None if the key is absent.

        Raises:
            StorageError: If the stored type does not declare StorageDecodeLength.
            CodecError: If the stored length prefix is malformed.
        """
        if not issubclass(self.value_type, StorageDecodeLength):
            raise StorageError(f"{self.value_type.__name__} does not support decode_len")
        raw = self.storage.get_raw(self.key)
        if raw is None:
            return None
        return self.value_type.decode_len(raw)
