"""Quota providers.

Example:
    >>> from taskspine.quota import ConstantQuota, ParameterQuota
    >>> ConstantQuota(10).get()
    10
    >>> q = ParameterQuota(10)
    >>> q.set(7)
    >>> q.get()
    7
"""

from __future__ import annotations

from dataclasses import dataclass

from taskspine.core.config import get_settings
from taskspine.models.weight import Weight, check_weight


@dataclass(frozen=True)
class ConstantQuota:
    """A quota fixed at construction.

    Example:
        >>> from taskspine.quota import ConstantQuota
        >>> ConstantQuota(0).get()
        0
    """

    value: Weight = 0

    def __post_init__(self) -> None:
        check_weight(self.value)

    def get(self) -> Weight:
        return self.value


class ParameterQuota:
    """A process-wide quota parameter that can be changed between executions.

    Bind one instance to an executor class and call :meth:`set` to change the
    cap every executor of that class sees on its next ``execute()``.
    """

    def __init__(self, value: Weight = 0) -> None:
        self._value = check_weight(value)

    def get(self) -> Weight:
        return self._value

    def set(self, value: Weight) -> None:
        """Change the cap.

        Raises:
            ValueError: If ``value`` is not a valid weight.
        """
        self._value = check_weight(value)

    def __repr__(self) -> str:
        return f"ParameterQuota({self._value})"


class SettingsQuota:
    """A quota read from ``TASKSPINE_DEFAULT_QUOTA`` on every call.

    Settings are re-read each time so configuration changes apply to the next
    execution without rebinding the executor.

    Example:
        >>> import os
        >>> from taskspine.quota import SettingsQuota
        >>> os.environ["TASKSPINE_DEFAULT_QUOTA"] = "36"
        >>> SettingsQuota().get()
        36
        >>> del os.environ["TASKSPINE_DEFAULT_QUOTA"]
    """

    def get(self) -> Weight:
        return get_settings().default_quota

    def __repr__(self) -> str:
        return "SettingsQuota()"
