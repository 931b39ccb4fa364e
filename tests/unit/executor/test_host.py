"""Tests for taskspine.executor.host."""

from __future__ import annotations

from taskspine.executor.host import execute_stored
from taskspine.executor.single_pass import SinglePassExecutor
from taskspine.models.weight import MAX_WEIGHT, DbWeight
from taskspine.quota import ConstantQuota
from taskspine.storage import MemoryStorage, StorageValue
from taskspine.testing import ReferenceTask, TaskBuilder, remaining_weights_of

DB_WEIGHT = DbWeight(read=1, write=2)


def stored_executor(quota: int, *weights: int) -> StorageValue:
    Executor = SinglePassExecutor.of(ReferenceTask, ConstantQuota(quota))
    value = StorageValue(MemoryStorage(), "executor", Executor)
    for weight in weights:
        value.append(TaskBuilder().build(weight))
    return value


class TestExecuteStored:
    """The load, execute, persist idiom."""

    def test_charges_one_read_and_one_write(self) -> None:
        value = stored_executor(7, 10, 10, 10)
        assert execute_stored(value, DB_WEIGHT) == 7 + 3

    def test_persists_survivors(self) -> None:
        value = stored_executor(7, 10, 10, 10)
        execute_stored(value, DB_WEIGHT)
        assert remaining_weights_of(value.get()) == [3, 10, 10]
        assert value.decode_len() == 3

    def test_drains_across_turns(self) -> None:
        value = stored_executor(12, 10, 10, 10)
        charged = [execute_stored(value, DB_WEIGHT) for _ in range(4)]
        assert charged == [15, 15, 9, 3]
        assert value.decode_len() == 0

    def test_absent_executor_is_created(self) -> None:
        value = stored_executor(5)
        assert not value.exists()
        assert execute_stored(value, DB_WEIGHT) == 3
        assert value.exists()
        assert value.decode_len() == 0

    def test_total_saturates(self) -> None:
        value = stored_executor(MAX_WEIGHT, MAX_WEIGHT)
        assert execute_stored(value, DB_WEIGHT) == MAX_WEIGHT
