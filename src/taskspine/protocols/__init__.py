"""Protocol definitions - all extension points."""

from taskspine.protocols.executor import StoredExecutor
from taskspine.protocols.quota import Quota
from taskspine.protocols.storage import HostStorage

__all__ = [
    "HostStorage",
    "Quota",
    "StoredExecutor",
]
