"""Single-pass executor.

Each execution walks the task queue once, in order, offering every task
whatever budget is left. Budget flows to earlier tasks first: an early
all-or-nothing task that cannot fit the leftover weight does not let a later,
smaller task jump ahead of it. Strategies that re-try skipped tasks belong in
a different executor that reuses :func:`single_pass`.

Example:
    >>> from taskspine.executor.single_pass import SinglePassExecutor
    >>> from taskspine.quota import ConstantQuota
    >>> from taskspine.testing import ReferenceTask, TaskBuilder, remaining_weights_of
    >>> executor = SinglePassExecutor.of(ReferenceTask, ConstantQuota(12)).new()
    >>> for _ in range(3):
    ...     executor.add_task(TaskBuilder().build(10))
    >>> executor.execute()
    12
    >>> remaining_weights_of(executor)
    [8, 10]
"""

from __future__ import annotations

import inspect
import io
import logging
from collections.abc import Iterable, Sequence
from typing import Self, TypeVar

from taskspine.codec import decode_sequence, encode_sequence, ensure_consumed
from taskspine.models.task import RuntimeTask
from taskspine.models.weight import Weight, is_zero, saturating_sub
from taskspine.protocols.executor import StoredExecutor
from taskspine.storage.shim import StorageValueShim

LOG_TARGET = "runtime::task_executor"

logger = logging.getLogger(LOG_TARGET)

T = TypeVar("T", bound=RuntimeTask)


def single_pass(tasks: Sequence[T], max_weight: Weight) -> tuple[list[T], Weight]:
    """Make a single pass over ``tasks``, spending at most ``max_weight``.

    Each task is advanced at most once, with whatever budget is left when its
    turn comes. Once the budget hits zero the remaining tasks are carried
    over untouched. ``tasks`` itself is never modified.

    Args:
        tasks: Queue of tasks, in execution order.
        max_weight: Weight cap for this pass.

    Returns:
        The unfinished tasks in their original relative order, and the weight
        consumed (``max_weight`` minus what was left over).

    Example:
        >>> from taskspine.testing import TaskBuilder
        >>> next_tasks, consumed = single_pass([TaskBuilder().build(10)] * 3, 7)
        >>> [t.leftover() for t in next_tasks], consumed
        ([3, 10, 10], 7)
        >>> single_pass([], 7)
        ([], 0)
    """
    if not tasks or is_zero(max_weight):
        return list(tasks), 0

    leftover_weight = max_weight
    next_tasks: list[T] = []
    for task in tasks:
        if is_zero(leftover_weight):
            next_tasks.append(task)
            continue

        maybe_leftover_task, consumed = task.advance(leftover_weight)
        leftover_weight = saturating_sub(leftover_weight, consumed)
        if maybe_leftover_task is not None:
            next_tasks.append(maybe_leftover_task)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            f"executed a single pass.\nPrev tasks = {list(tasks)!r}\nNext tasks = {next_tasks!r}"
        )

    return next_tasks, saturating_sub(max_weight, leftover_weight)


class SinglePassExecutor(StoredExecutor, StorageValueShim):
    """An executor that makes a single pass over its tasks per execution.

    Suitable for homogeneous tasks. If an intermediate task in a mixed queue
    fails to consume any weight, re-trying the earlier ones would be sensible
    too, which this executor deliberately does not do.

    The encoded form is exactly the encoded task sequence: a compact length
    followed by each task's encoding. Hosts can therefore append tasks and
    read the length without decoding (see :mod:`taskspine.storage.shim`).

    Example:
        >>> from taskspine.executor.single_pass import SinglePassExecutor
        >>> from taskspine.testing import ReferenceTask, TaskBuilder
        >>> Executor = SinglePassExecutor.of(ReferenceTask)
        >>> e = Executor.new()
        >>> e.add_task(TaskBuilder().build(10))
        >>> e.count()
        1
        >>> Executor.decode(e.encode()) == e
        True
    """

    def __init__(self, tasks: Iterable[RuntimeTask] = ()) -> None:
        self._tasks: list[RuntimeTask] = []
        for task in tasks:
            self.add_task(task)

    @classmethod
    def new(cls) -> Self:
        return cls()

    def add_task(self, task: RuntimeTask) -> None:
        if not isinstance(task, self.task_type):
            raise TypeError(
                f"{type(self).__name__} holds {self.task_type.__name__}, "
                f"got {type(task).__name__}"
            )
        self._tasks.append(task)

    def clear(self) -> None:
        self._tasks.clear()

    def remove(self, task: RuntimeTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)

    def count(self) -> int:
        return len(self._tasks)

    def tasks(self) -> list[RuntimeTask]:
        return list(self._tasks)

    def execute(self) -> Weight:
        max_weight = self.quota.get()
        next_tasks, consumed = single_pass(self._tasks, max_weight)
        self._tasks = next_tasks
        return consumed

    # --- Encoding ---

    def encode(self) -> bytes:
        return encode_sequence(task.encode() for task in self._tasks)

    @classmethod
    def decode(cls, data: bytes) -> Self:
        """Decode an executor from its task sequence encoding.

        Raises:
            TypeError: If the class has no concrete task type bound.
            CodecError: If ``data`` is not a valid encoding.
        """
        if inspect.isabstract(cls.task_type):
            raise TypeError(f"Bind a concrete task type with {cls.__name__}.of() before decoding")
        stream = io.BytesIO(data)
        tasks = decode_sequence(stream, cls.task_type.decode_from)
        ensure_consumed(stream)
        return cls(tasks)

    @classmethod
    def append_item_type(cls) -> type[RuntimeTask]:
        return cls.task_type

    # --- Utility Methods ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SinglePassExecutor):
            return NotImplemented
        return type(self) is type(other) and self._tasks == other._tasks

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(tasks={self._tasks!r})"
