"""Quota protocol.

A quota tells an executor how much weight it may consume in a single
``execute()`` call. Executors read it exactly once per call and make no
assumption that it stays constant between calls.

Example:
    >>> from taskspine.protocols.quota import Quota
    >>> hasattr(Quota, "get")
    True
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from taskspine.models.weight import Weight


@runtime_checkable
class Quota(Protocol):
    """Per-execution weight cap provider.

    Implementations: ConstantQuota, ParameterQuota, SettingsQuota.
    """

    def get(self) -> Weight:
        """Return the current weight cap."""
        ...
