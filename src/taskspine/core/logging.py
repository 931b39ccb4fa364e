"""Logging setup.

Library modules only create loggers; hosts call :func:`setup_logging` once,
early, to attach handlers according to :class:`~taskspine.core.config.Settings`.

Two formats are supported:

- ``console``: rich-rendered records for interactive use.
- ``json``: one JSON object per line, for log shippers.

Example:
    >>> import logging
    >>> from taskspine.core.config import get_settings
    >>> from taskspine.core.logging import setup_logging
    >>> setup_logging(get_settings(log_format="json", log_level="WARNING"))
    >>> logging.getLogger().level == logging.WARNING
    True
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler

from taskspine.core.exceptions import ConfigurationError

if TYPE_CHECKING:
    from taskspine.core.config import Settings

LOG_FORMATS = ("console", "json")


class JsonFormatter(logging.Formatter):
    """Render a record as a single-line JSON object.

    Example:
        >>> import json, logging
        >>> from taskspine.core.logging import JsonFormatter
        >>> record = logging.makeLogRecord({"name": "demo", "msg": "hi", "levelname": "INFO"})
        >>> json.loads(JsonFormatter().format(record))["message"]
        'hi'
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(settings: Settings) -> None:
    """Configure the root logger from settings.

    Replaces any handlers already attached to the root logger, so repeated
    calls do not duplicate output.

    Args:
        settings: Settings providing ``log_level`` and ``log_format``.

    Raises:
        ConfigurationError: If the format or level is unknown.
    """
    if settings.log_format not in LOG_FORMATS:
        raise ConfigurationError(
            f"Unknown log format {settings.log_format!r}, expected one of {LOG_FORMATS}"
        )

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level {settings.log_level!r}")

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    handler: logging.Handler
    if settings.log_format == "console":
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(JsonFormatter())

    handler.setLevel(level)
    root.addHandler(handler)
