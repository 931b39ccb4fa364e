"""Custom exceptions.

TaskSpine uses a small hierarchy of exceptions so hosts can tell codec
problems apart from storage misuse:

Example:
    >>> from taskspine.core.exceptions import CodecError, TaskSpineError
    >>> isinstance(CodecError("bad prefix"), TaskSpineError)
    True
    >>> try:
    ...     raise CodecError("truncated input")
    ... except TaskSpineError as e:
    ...     print(f"Caught: {type(e).__name__}")
    Caught: CodecError
"""

from __future__ import annotations


class TaskSpineError(Exception):
    """Base exception for TaskSpine.

    Example:
        >>> from taskspine.core.exceptions import TaskSpineError
        >>> e = TaskSpineError("something went wrong")
        >>> str(e)
        'something went wrong'
    """


class CodecError(TaskSpineError):
    """Encoding or decoding of a stored value failed.

    Example:
        >>> from taskspine.core.exceptions import CodecError
        >>> raise CodecError("not enough data")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        CodecError: not enough data
    """


class StorageError(TaskSpineError):
    """Storage operation failed or is not supported by the stored type.

    Example:
        >>> from taskspine.core.exceptions import StorageError
        >>> raise StorageError("append not supported")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        StorageError: append not supported
    """


class ConfigurationError(TaskSpineError):
    """Configuration is invalid.

    Example:
        >>> from taskspine.core.exceptions import ConfigurationError
        >>> raise ConfigurationError("unknown log format")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ConfigurationError: unknown log format
    """
