"""Storage capability shims.

A stored type whose encoding is exactly a compact length prefix followed by
its items can be appended to and length-probed by the host without being
decoded. Types declare this by deriving from the capability classes below;
:class:`~taskspine.storage.value.StorageValue` only offers ``append`` and
``decode_len`` for types that do.

A type whose encoding is anything else (a header, a version byte, a
different item layout) must not claim these capabilities.

Example:
    >>> from taskspine.executor.single_pass import SinglePassExecutor
    >>> from taskspine.storage.shim import StorageValueShim
    >>> issubclass(SinglePassExecutor, StorageValueShim)
    True
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from taskspine.codec import decode_length


class StorageAppend(ABC):
    """Encoding is a compact-prefixed sequence of :meth:`append_item_type` items."""

    @classmethod
    @abstractmethod
    def append_item_type(cls) -> type:
        """The type of the items in the encoded sequence."""


class StorageDecodeLength(ABC):
    """Encoding starts with the compact item count."""

    @classmethod
    def decode_len(cls, encoded: bytes) -> int:
        """Read the item count from the encoded form.

        Raises:
            CodecError: If the prefix cannot be decoded.
        """
        return decode_length(encoded)


class StorageValueShim(StorageAppend, StorageDecodeLength):
    """Aggregate of :class:`StorageAppend` and :class:`StorageDecodeLength`."""
