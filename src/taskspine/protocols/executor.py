"""Stored executor abstraction.

A stored executor is a durable container of runtime tasks. The host loads it
from storage, calls :meth:`StoredExecutor.execute`, and writes it back. The
container operations live here; the scheduling strategy that decides how a
quota is spread over the tasks lives in each implementation's ``execute``.

Task type and quota are bound statically, per class, with
:meth:`StoredExecutor.of`:

Example:
    >>> from taskspine.executor.single_pass import SinglePassExecutor
    >>> from taskspine.quota import ConstantQuota
    >>> from taskspine.testing import ReferenceTask
    >>> Executor = SinglePassExecutor.of(ReferenceTask, ConstantQuota(10))
    >>> Executor.__name__
    'SinglePassExecutor[ReferenceTask]'
    >>> Executor.quota.get()
    10
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Self

from taskspine.models.task import RuntimeTask
from taskspine.models.weight import Weight
from taskspine.protocols.quota import Quota
from taskspine.quota import ConstantQuota


class StoredExecutor(ABC):
    """Common base for an executor that is stored as a storage item.

    Attributes:
        task_type: The task type held by this executor.
        quota: Defines how much weight this executor may use per execution.
    """

    task_type: ClassVar[type[RuntimeTask]] = RuntimeTask
    quota: ClassVar[Quota] = ConstantQuota(0)

    @classmethod
    def of(cls, task_type: type[RuntimeTask], quota: Quota | None = None) -> type[Self]:
        """Return a subclass bound to ``task_type`` and ``quota``.

        Args:
            task_type: Concrete task type stored in the queue.
            quota: Quota provider; defaults to the class's current one.
        """
        namespace = {
            "task_type": task_type,
            "quota": quota if quota is not None else cls.quota,
            "__module__": cls.__module__,
            "__qualname__": f"{cls.__qualname__}[{task_type.__name__}]",
        }
        return type(cls)(f"{cls.__name__}[{task_type.__name__}]", (cls,), namespace)

    @abstractmethod
    def execute(self) -> Weight:
        """Execute tasks, consuming at most ``quota.get()``.

        Returns the weight actually consumed. This accounts for the tasks'
        own work only, not the storage reads and writes needed to load and
        persist the executor. A sensible way to use it is therefore::

            consumed = value.mutate(lambda e: e.execute())
            consumed += db_weight.reads_writes(1, 1)

        which is what :func:`taskspine.executor.host.execute_stored` does.
        """

    @classmethod
    @abstractmethod
    def new(cls) -> Self:
        """Create a new, empty executor."""

    @abstractmethod
    def add_task(self, task: RuntimeTask) -> None:
        """Add a new task to the tail of the queue."""

    @abstractmethod
    def clear(self) -> None:
        """Remove all tasks without executing any of them."""

    @abstractmethod
    def remove(self, task: RuntimeTask) -> None:
        """Remove the first task equal to ``task``; no-op if there is none."""

    @abstractmethod
    def count(self) -> int:
        """Number of queued tasks."""

    @abstractmethod
    def tasks(self) -> list[RuntimeTask]:
        """Snapshot copy of the queued tasks."""

    @abstractmethod
    def encode(self) -> bytes:
        """Encode the executor for storage."""

    @classmethod
    @abstractmethod
    def decode(cls, data: bytes) -> Self:
        """Decode an executor previously produced by :meth:`encode`."""
