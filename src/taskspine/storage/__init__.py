"""Host storage and the append/length shims stored executors rely on."""

from taskspine.storage.memory import MemoryStorage
from taskspine.storage.shim import StorageAppend, StorageDecodeLength, StorageValueShim
from taskspine.storage.value import StorageValue

__all__ = [
    "MemoryStorage",
    "StorageValue",
    "StorageAppend",
    "StorageDecodeLength",
    "StorageValueShim",
]
