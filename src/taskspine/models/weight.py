"""Weight arithmetic.

Weight is an abstract, non-negative amount of work. It is represented as a
plain ``int`` bounded by :data:`MAX_WEIGHT`; every helper here saturates
instead of wrapping or going negative.

Example:
    >>> from taskspine.models.weight import saturating_sub, is_zero
    >>> saturating_sub(7, 10)
    0
    >>> is_zero(saturating_sub(7, 7))
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taskspine.core.config import Settings

Weight = int

MAX_WEIGHT: Weight = 2**64 - 1


def saturating_sub(a: Weight, b: Weight) -> Weight:
    """Subtract, clamping at zero.

    Example:
        >>> saturating_sub(12, 5)
        7
        >>> saturating_sub(5, 12)
        0
    """
    return a - b if a > b else 0


def saturating_add(a: Weight, b: Weight) -> Weight:
    """Add, clamping at :data:`MAX_WEIGHT`.

    Example:
        >>> saturating_add(MAX_WEIGHT, 1) == MAX_WEIGHT
        True
    """
    return min(a + b, MAX_WEIGHT)


def saturating_mul(a: Weight, n: int) -> Weight:
    """Multiply, clamping at :data:`MAX_WEIGHT`."""
    return min(a * n, MAX_WEIGHT)


def is_zero(weight: Weight) -> bool:
    """Check whether a weight is zero."""
    return weight == 0


def check_weight(weight: Weight) -> Weight:
    """Validate that a value is a weight in ``[0, MAX_WEIGHT]``.

    Raises:
        ValueError: If the value is out of range or not an int.

    Example:
        >>> check_weight(10)
        10
        >>> check_weight(-1)
        Traceback (most recent call last):
        ...
        ValueError: weight must be in [0, 18446744073709551615], got -1
    """
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise ValueError(f"weight must be an int, got {type(weight).__name__}")
    if not 0 <= weight <= MAX_WEIGHT:
        raise ValueError(f"weight must be in [0, {MAX_WEIGHT}], got {weight}")
    return weight


@dataclass(frozen=True)
class DbWeight:
    """Weight charged by the host for storage access.

    Executors never charge for being loaded or written back; hosts add this
    on top of ``execute()``'s return value.

    Attributes:
        read: Weight of a single storage read.
        write: Weight of a single storage write.

    Example:
        >>> from taskspine.models.weight import DbWeight
        >>> db = DbWeight(read=2, write=5)
        >>> db.reads_writes(1, 1)
        7
        >>> db.reads(3)
        6
    """

    read: Weight
    write: Weight

    def reads(self, n: int) -> Weight:
        """Weight of ``n`` reads."""
        return saturating_mul(self.read, n)

    def writes(self, n: int) -> Weight:
        """Weight of ``n`` writes."""
        return saturating_mul(self.write, n)

    def reads_writes(self, r: int, w: int) -> Weight:
        """Weight of ``r`` reads and ``w`` writes."""
        return saturating_add(self.reads(r), self.writes(w))

    @classmethod
    def from_settings(cls, settings: Settings) -> DbWeight:
        """Build from the ``db_read_weight`` and ``db_write_weight`` settings.

        Example:
            >>> from taskspine.core.config import get_settings
            >>> DbWeight.from_settings(get_settings(db_read_weight=1, db_write_weight=2))
            DbWeight(read=1, write=2)
        """
        return cls(read=settings.db_read_weight, write=settings.db_write_weight)
