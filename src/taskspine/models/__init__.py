"""Pydantic models and weight arithmetic for TaskSpine."""

from taskspine.models.base import TaskSpineModel
from taskspine.models.task import NoopTask, RuntimeTask
from taskspine.models.weight import (
    MAX_WEIGHT,
    DbWeight,
    Weight,
    is_zero,
    saturating_add,
    saturating_mul,
    saturating_sub,
)

__all__ = [
    # Base
    "TaskSpineModel",
    # Tasks
    "RuntimeTask",
    "NoopTask",
    # Weight
    "Weight",
    "MAX_WEIGHT",
    "DbWeight",
    "is_zero",
    "saturating_add",
    "saturating_mul",
    "saturating_sub",
]
