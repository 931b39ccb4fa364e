"""Core configuration, logging and exceptions."""

from taskspine.core.exceptions import (
    CodecError,
    ConfigurationError,
    StorageError,
    TaskSpineError,
)

__all__ = [
    "TaskSpineError",
    "CodecError",
    "StorageError",
    "ConfigurationError",
]
