#!/usr/bin/env python3
"""
TaskSpine Quickstart Example

Shows the basic flow: define a task, queue it in a stored executor, and
drain it a little per host turn.

Usage:
    python examples/01_quickstart.py
"""

from typing import Annotated, Self

from pydantic import Field

from taskspine import (
    ConstantQuota,
    DbWeight,
    MemoryStorage,
    RuntimeTask,
    SinglePassExecutor,
    StorageValue,
    execute_stored,
)
from taskspine.codec import STR, U64

# Host state the tasks clean up
STORAGE = MemoryStorage()


class PrunePrefix(RuntimeTask):
    """Delete every key under a prefix, a few keys per turn."""

    prefix: Annotated[str, STR] = ""
    cost_per_key: Annotated[int, Field(ge=1), U64] = 1

    def advance(self, max_weight: int) -> tuple[Self | None, int]:
        budget = max_weight // self.cost_per_key
        victims = [k for k in STORAGE.keys() if k.startswith(self.prefix)][:budget]
        for key in victims:
            STORAGE.delete(key)

        done = not any(k.startswith(self.prefix) for k in STORAGE.keys())
        return (None if done else self), len(victims) * self.cost_per_key


def main() -> None:
    """Drain two prune jobs under a quota of 25 per turn."""

    for i in range(30):
        STORAGE.put_raw(f"session:{i}", b"...")
    for i in range(12):
        STORAGE.put_raw(f"cache:{i}", b"...")

    Executor = SinglePassExecutor.of(PrunePrefix, ConstantQuota(25))
    executor = StorageValue(STORAGE, "task_executor", Executor)

    # Appending does not decode the queued tasks
    executor.append(PrunePrefix(prefix="session:", cost_per_key=2))
    executor.append(PrunePrefix(prefix="cache:", cost_per_key=1))
    print(f"Queued tasks: {executor.decode_len()}")

    db_weight = DbWeight(read=1, write=1)
    turn = 0
    while executor.decode_len():
        turn += 1
        charged = execute_stored(executor, db_weight)
        print(f"Turn {turn}: charged {charged}, tasks left {executor.decode_len()}")

    print(f"✓ Keys left: {sorted(STORAGE.keys())}")


if __name__ == "__main__":
    main()
