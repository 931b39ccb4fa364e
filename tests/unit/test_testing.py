"""Tests for the reference task and builder in taskspine.testing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from taskspine.testing import ReferenceTask, TaskBuilder


class TestTaskBuilder:
    def test_defaults(self) -> None:
        assert TaskBuilder().build(10) == ReferenceTask(weight=10, half=0, greedy=True)

    def test_chaining(self) -> None:
        task = TaskBuilder().half(1).greedy(False).build(30)
        assert task == ReferenceTask(weight=30, half=1, greedy=False)

    def test_default_task_differs_from_builder_default(self) -> None:
        assert ReferenceTask.default() == ReferenceTask(weight=0, half=0, greedy=False)

    @pytest.mark.parametrize("half", [-1, 256])
    def test_half_bounds(self, half: int) -> None:
        with pytest.raises(ValidationError):
            TaskBuilder().half(half).build(1)


class TestReferenceTaskArchetypes:
    """Greedy/non-greedy crossed with full/half-step targets."""

    def test_greedy_full_partial_progress(self) -> None:
        survivor, consumed = TaskBuilder().build(10).advance(7)
        assert consumed == 7
        assert survivor.leftover() == 3

    def test_greedy_full_completes(self) -> None:
        assert TaskBuilder().build(10).advance(12) == (None, 10)

    def test_greedy_half_step(self) -> None:
        survivor, consumed = TaskBuilder().half(2).build(20).advance(100)
        assert consumed == 10
        assert survivor == ReferenceTask(weight=10, half=1, greedy=True)

    def test_greedy_half_step_capped(self) -> None:
        survivor, consumed = TaskBuilder().half(1).build(20).advance(4)
        assert consumed == 4
        assert survivor == ReferenceTask(weight=16, half=0, greedy=True)

    def test_non_greedy_full_all_or_nothing(self) -> None:
        task = TaskBuilder().greedy(False).build(10)
        assert task.advance(9) == (task, 0)
        assert task.advance(10) == (None, 10)

    def test_non_greedy_half_step(self) -> None:
        task = TaskBuilder().half(1).greedy(False).build(30)
        survivor, consumed = task.advance(36)
        assert consumed == 15
        assert survivor == ReferenceTask(weight=15, half=0, greedy=False)

    def test_non_greedy_half_step_too_big_still_spends_a_half(self) -> None:
        survivor, consumed = TaskBuilder().half(1).greedy(False).build(30).advance(10)
        assert consumed == 0
        assert survivor == ReferenceTask(weight=30, half=0, greedy=False)

    def test_consumption_within_cap(self) -> None:
        for greedy in (True, False):
            for half in (0, 1, 3):
                for cap in (0, 1, 5, 50):
                    task = TaskBuilder().half(half).greedy(greedy).build(40)
                    _, consumed = task.advance(cap)
                    assert 0 <= consumed <= cap

    def test_advance_does_not_mutate(self) -> None:
        task = TaskBuilder().half(1).build(20)
        task.advance(5)
        assert task == ReferenceTask(weight=20, half=1, greedy=True)

    def test_encoding_layout(self) -> None:
        """weight (u64), half (u8), greedy (bool)."""
        task = ReferenceTask(weight=10, half=2, greedy=True)
        assert task.encode() == b"\x0a" + b"\x00" * 7 + b"\x02" + b"\x01"
        assert ReferenceTask.decode(task.encode()) == task
