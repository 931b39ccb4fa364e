"""Host-side helpers for running a stored executor.

Example:
    >>> from taskspine.executor.host import execute_stored
    >>> from taskspine.executor.single_pass import SinglePassExecutor
    >>> from taskspine.models.weight import DbWeight
    >>> from taskspine.quota import ConstantQuota
    >>> from taskspine.storage import MemoryStorage, StorageValue
    >>> from taskspine.testing import ReferenceTask, TaskBuilder
    >>> Executor = SinglePassExecutor.of(ReferenceTask, ConstantQuota(7))
    >>> value = StorageValue(MemoryStorage(), "executor", Executor)
    >>> value.append(TaskBuilder().build(10))
    >>> execute_stored(value, DbWeight(read=1, write=2))
    10
"""

from __future__ import annotations

import logging

from taskspine.models.weight import DbWeight, Weight, saturating_add
from taskspine.protocols.executor import StoredExecutor
from taskspine.storage.value import StorageValue

logger = logging.getLogger(__name__)


def execute_stored(value: StorageValue[StoredExecutor], db_weight: DbWeight) -> Weight:
    """Load, execute and persist a stored executor.

    Charges one read and one write for the load/persist on top of the weight
    reported by ``execute()``.

    Args:
        value: Storage accessor for the executor.
        db_weight: Host storage cost table.

    Returns:
        Total weight of the call, saturating at MAX_WEIGHT.
    """
    consumed = value.mutate(lambda executor: executor.execute())
    total = saturating_add(consumed, db_weight.reads_writes(1, 1))
    logger.debug(f"Executed {value.key!r}: consumed {consumed}, charged {total}")
    return total
