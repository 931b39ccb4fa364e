"""
TaskSpine - Weight-Budgeted Deferred Task Execution.

TaskSpine lets a deterministic, turn-based host keep units of work that are
too large or too bursty to run at once, and drain them a little per turn
under a weight quota.

Key Features:
- Task contract: advance under a cap, report exact consumption
- Single-pass executor with strict queue ordering
- Encoded form is the bare task sequence, so hosts can append and
  read the length without decoding
- Pluggable quota providers (constant, parameter, settings-backed)

Quick Start:
    >>> from taskspine import ConstantQuota, SinglePassExecutor
    >>> from taskspine.testing import ReferenceTask, TaskBuilder
    >>> executor = SinglePassExecutor.of(ReferenceTask, ConstantQuota(7)).new()
    >>> executor.add_task(TaskBuilder().build(10))
    >>> executor.execute()
    7

Architecture:
    Tasks: RuntimeTask, NoopTask
    Executors: SinglePassExecutor (single_pass driver)
    Quotas: ConstantQuota, ParameterQuota, SettingsQuota
    Storage: MemoryStorage, StorageValue
"""

from taskspine.core.config import Settings, get_settings
from taskspine.core.exceptions import (
    CodecError,
    ConfigurationError,
    StorageError,
    TaskSpineError,
)
from taskspine.core.logging import setup_logging
from taskspine.executor.host import execute_stored
from taskspine.executor.single_pass import LOG_TARGET, SinglePassExecutor, single_pass
from taskspine.models.task import NoopTask, RuntimeTask
from taskspine.models.weight import (
    MAX_WEIGHT,
    DbWeight,
    Weight,
    is_zero,
    saturating_add,
    saturating_sub,
)
from taskspine.protocols.executor import StoredExecutor
from taskspine.protocols.quota import Quota
from taskspine.protocols.storage import HostStorage
from taskspine.quota import ConstantQuota, ParameterQuota, SettingsQuota
from taskspine.storage.memory import MemoryStorage
from taskspine.storage.shim import StorageAppend, StorageDecodeLength, StorageValueShim
from taskspine.storage.value import StorageValue

__version__ = "0.1.0"

__all__ = [
    # Weight
    "Weight",
    "MAX_WEIGHT",
    "DbWeight",
    "is_zero",
    "saturating_add",
    "saturating_sub",
    # Tasks
    "RuntimeTask",
    "NoopTask",
    # Quota
    "Quota",
    "ConstantQuota",
    "ParameterQuota",
    "SettingsQuota",
    # Executors
    "StoredExecutor",
    "SinglePassExecutor",
    "single_pass",
    "execute_stored",
    "LOG_TARGET",
    # Storage
    "HostStorage",
    "MemoryStorage",
    "StorageValue",
    "StorageAppend",
    "StorageDecodeLength",
    "StorageValueShim",
    # Config & logging
    "Settings",
    "get_settings",
    "setup_logging",
    # Errors
    "TaskSpineError",
    "CodecError",
    "StorageError",
    "ConfigurationError",
    # Version
    "__version__",
]
