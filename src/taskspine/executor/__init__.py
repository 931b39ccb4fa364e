"""Executors and host helpers."""

from taskspine.executor.host import execute_stored
from taskspine.executor.single_pass import LOG_TARGET, SinglePassExecutor, single_pass

__all__ = [
    "LOG_TARGET",
    "SinglePassExecutor",
    "execute_stored",
    "single_pass",
]
