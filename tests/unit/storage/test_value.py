"""Tests for StorageValue and the append/length shims.

Tests cover:
- Typed get/put/take/kill/mutate
- Append without decode and length probe on executors
- Equivalence of appended bytes with a full re-encoding
- Types that do not claim the shims
- Malformed stored data
"""

from __future__ import annotations

import random

import pytest

from taskspine.core.exceptions import CodecError, StorageError
from taskspine.executor.single_pass import SinglePassExecutor
from taskspine.models.task import NoopTask
from taskspine.quota import ConstantQuota
from taskspine.storage import MemoryStorage, StorageValue
from taskspine.testing import ReferenceTask, TaskBuilder, remaining_weights_of

Executor = SinglePassExecutor.of(ReferenceTask, ConstantQuota(10))


class VersionedQueue:
    """A container whose encoding carries a version byte, so it claims no shims."""

    def __init__(self, tasks: list[ReferenceTask] | None = None) -> None:
        self.tasks = tasks or []

    @classmethod
    def new(cls) -> VersionedQueue:
        return cls()

    def encode(self) -> bytes:
        return b"\x01" + Executor(self.tasks).encode()

    @classmethod
    def decode(cls, data: bytes) -> VersionedQueue:
        return cls(Executor.decode(data[1:]).tasks())


@pytest.fixture
def value() -> StorageValue:
    return StorageValue(MemoryStorage(), "task_executor", Executor)


# =============================================================================
# Typed Access Tests
# =============================================================================


class TestStorageValueAccess:
    """Typed reads and writes."""

    def test_get_absent(self, value: StorageValue) -> None:
        assert value.get() is None
        assert not value.exists()

    def test_put_and_get(self, value: StorageValue) -> None:
        executor = Executor([TaskBuilder().build(10)])
        value.put(executor)
        assert value.get() == executor
        assert value.storage.get_raw(value.key) == executor.encode()

    def test_take(self, value: StorageValue) -> None:
        executor = Executor([TaskBuilder().build(10)])
        value.put(executor)
        assert value.take() == executor
        assert not value.exists()

    def test_kill(self, value: StorageValue) -> None:
        value.put(Executor.new())
        value.kill()
        assert value.get() is None

    def test_mutate_returns_result_and_persists(self, value: StorageValue) -> None:
        value.put(Executor([TaskBuilder().build(10)] * 2))
        consumed = value.mutate(lambda e: e.execute())
        assert consumed == 10
        assert remaining_weights_of(value.get()) == [10]

    def test_mutate_starts_from_new(self, value: StorageValue) -> None:
        value.mutate(lambda e: e.add_task(TaskBuilder().build(5)))
        assert remaining_weights_of(value.get()) == [5]

    def test_mutate_does_not_write_on_error(self, value: StorageValue) -> None:
        value.put(Executor([TaskBuilder().build(10)]))

        def boom(executor):
            executor.clear()
            raise RuntimeError("host aborted")

        with pytest.raises(RuntimeError):
            value.mutate(boom)
        assert value.decode_len() == 1

    def test_get_raises_on_corrupt_data(self, value: StorageValue) -> None:
        value.storage.put_raw(value.key, b"\x04\x0a")
        with pytest.raises(CodecError):
            value.get()


# =============================================================================
# Shim Tests
# =============================================================================


class TestStorageValueShims:
    """Append and length probe without decoding."""

    def test_shim_works(self, value: StorageValue) -> None:
        value.append(TaskBuilder().build(10))
        value.append(TaskBuilder().build(20))

        assert value.decode_len() == 2
        value.append(TaskBuilder().build(30))
        assert value.decode_len() == 3

        # without the shim
        assert value.get().count() == 3
        assert remaining_weights_of(value.get()) == [10, 20, 30]

    def test_decode_len_absent(self, value: StorageValue) -> None:
        assert value.decode_len() is None

    def test_decode_len_does_not_decode_tasks(self, value: StorageValue) -> None:
        """Garbage after the prefix is never touched by the probe."""
        value.storage.put_raw(value.key, b"\x08\xff\xff")
        assert value.decode_len() == 2
        with pytest.raises(CodecError):
            value.get()

    def test_decode_len_malformed_prefix(self, value: StorageValue) -> None:
        value.storage.put_raw(value.key, b"\x01")
        with pytest.raises(CodecError):
            value.decode_len()

    def test_append_malformed_prefix(self, value: StorageValue) -> None:
        value.storage.put_raw(value.key, b"\x01")
        with pytest.raises(CodecError):
            value.append(TaskBuilder().build(1))
        assert value.storage.get_raw(value.key) == b"\x01"

    def test_append_rejects_wrong_item_type(self, value: StorageValue) -> None:
        with pytest.raises(TypeError):
            value.append(NoopTask())
        assert not value.exists()

    @pytest.mark.parametrize("seed", range(10))
    def test_append_equivalent_to_full_encoding(self, seed: int) -> None:
        rng = random.Random(seed)
        tasks = [
            TaskBuilder().half(rng.randint(0, 3)).greedy(rng.random() < 0.5).build(rng.randint(0, 99))
            for _ in range(rng.randint(0, 80))
        ]
        extra = TaskBuilder().build(rng.randint(0, 99))

        storage = MemoryStorage()
        value = StorageValue(storage, "q", Executor)
        value.put(Executor(tasks))
        value.append(extra)

        assert storage.get_raw("q") == Executor(tasks + [extra]).encode()
        assert value.decode_len() == len(tasks) + 1

    def test_type_without_shims_is_refused(self) -> None:
        value = StorageValue(MemoryStorage(), "versioned", VersionedQueue)
        value.put(VersionedQueue([TaskBuilder().build(10)]))

        with pytest.raises(StorageError, match="append"):
            value.append(TaskBuilder().build(20))
        with pytest.raises(StorageError, match="decode_len"):
            value.decode_len()
        assert len(value.get().tasks) == 1
