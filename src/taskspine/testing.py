"""Testing utilities for executors.

This module provides a reference task whose behavior is controlled by three
knobs, covering the cases any executor should be checked against:

- ``weight``: remaining work.
- ``half``: for the first ``half`` executions, target only half of the
  remaining weight.
- ``greedy``: consume as much of the cap as possible (``True``), or consume
  the whole current target or nothing (``False``).

Example:
    >>> from taskspine.testing import TaskBuilder
    >>> task = TaskBuilder().half(1).greedy(False).build(30)
    >>> survivor, consumed = task.advance(36)
    >>> consumed, survivor.leftover(), survivor.half
    (15, 15, 0)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Self

from pydantic import Field

from taskspine.codec import BOOL, U8, U64
from taskspine.models.task import RuntimeTask
from taskspine.models.weight import MAX_WEIGHT, Weight

if TYPE_CHECKING:
    from taskspine.protocols.executor import StoredExecutor


class ReferenceTask(RuntimeTask):
    """A configurable task for exercising executors.

    Attributes:
        weight: The amount of weight this task still has to consume.
        half: If non-zero, the next execution only targets ``weight // 2``
            and decrements ``half``. Once ``half`` is zero the task targets
            the whole ``weight``.
        greedy: If ``True``, consume ``min(target, cap)``. If ``False``,
            consume the full target only when it fits the cap, else nothing.
            Combined with ``half > 0`` the all-or-nothing subject is
            ``weight // 2``.

    Example:
        >>> from taskspine.testing import ReferenceTask
        >>> ReferenceTask(weight=10, greedy=True).advance(7)
        (ReferenceTask(weight=3, half=0, greedy=True), 7)
        >>> ReferenceTask(weight=10, greedy=False).advance(7)
        (ReferenceTask(weight=10, half=0, greedy=False), 0)
        >>> ReferenceTask(weight=10, greedy=False).advance(10)
        (None, 10)
    """

    weight: Annotated[int, Field(ge=0, le=MAX_WEIGHT), U64] = 0
    half: Annotated[int, Field(ge=0, le=255), U8] = 0
    greedy: Annotated[bool, BOOL] = False

    def advance(self, max_weight: Weight) -> tuple[Self | None, Weight]:
        if self.half == 0:
            # try and consume as much as possible
            return self._consume(self.weight, max_weight)
        stepped = self.model_copy(update={"half": self.half - 1})
        return stepped._consume(self.weight // 2, max_weight)

    def _consume(self, amount: Weight, max_weight: Weight) -> tuple[Self | None, Weight]:
        if amount <= max_weight:
            consumed = amount
        elif self.greedy:
            consumed = max_weight
        else:
            consumed = 0

        task = self.model_copy(update={"weight": self.weight - consumed})
        return (task if task.weight > 0 else None), consumed

    def leftover(self) -> Weight:
        """The weight this task still expects to consume."""
        return self.weight


class TaskBuilder:
    """Fluent builder for :class:`ReferenceTask`.

    Defaults to a greedy task with no half-steps.

    Example:
        >>> from taskspine.testing import TaskBuilder
        >>> TaskBuilder().build(10)
        ReferenceTask(weight=10, half=0, greedy=True)
        >>> TaskBuilder().half(2).greedy(False).build(8)
        ReferenceTask(weight=8, half=2, greedy=False)
    """

    def __init__(self) -> None:
        self._half = 0
        self._greedy = True

    def half(self, half: int) -> Self:
        self._half = half
        return self

    def greedy(self, greedy: bool) -> Self:
        self._greedy = greedy
        return self

    def build(self, weight: Weight) -> ReferenceTask:
        return ReferenceTask(weight=weight, half=self._half, greedy=self._greedy)


def remaining_weights_of(executor: StoredExecutor) -> list[Weight]:
    """Remaining weight of each queued reference task, in queue order."""
    return [task.leftover() for task in executor.tasks()]
