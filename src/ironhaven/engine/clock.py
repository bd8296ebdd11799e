"""Wall-clock access and time-based resource regeneration.

Resolution reads "now" exactly once per call through an injected ``Clock``,
so tests fix time with ``FixedClock`` instead of patching ``datetime``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current time as an aware datetime."""
        ...


class SystemClock:
    """Clock backed by the system's UTC time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock that only moves when told to.

    Example:
        >>> clock = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        >>> clock.advance(seconds=2.5)
        >>> clock.now().second
        2
    """

    def __init__(self, at: datetime) -> None:
        self._now = at

    def now(self) -> datetime:
        return self._now

    def set(self, at: datetime) -> None:
        """Jump to an absolute time."""
        self._now = at

    def advance(self, *, seconds: float) -> None:
        """Move the clock forward."""
        self._now = self._now + timedelta(seconds=seconds)


def current_value(
    last_value: float,
    last_update: datetime,
    max_value: float,
    debt: float,
    regen_rate_per_second: float,
    *,
    now: datetime,
    debt_multiplier: float = 0.5,
) -> float:
    """Regenerate a stored resource up to ``now``.

    Regeneration runs at ``regen_rate_per_second``, scaled by
    ``debt_multiplier`` while ``debt`` is positive, and the result is
    clamped to ``[0, max_value]``. Time running backwards (``now`` earlier
    than ``last_update``) counts as no time at all.

    Args:
        last_value: Value stamped at ``last_update``.
        last_update: When ``last_value`` was stamped.
        max_value: Upper bound of the resource.
        debt: Outstanding debt; any positive amount slows regeneration.
        regen_rate_per_second: Units regenerated per second.
        now: The current time.
        debt_multiplier: Regeneration multiplier applied while in debt.

    Returns:
        The up-to-date value.
    """
    elapsed = max(0.0, (now - last_update).total_seconds())
    rate = regen_rate_per_second * debt_multiplier if debt > 0 else regen_rate_per_second
    return min(max(last_value + elapsed * rate, 0.0), float(max_value))


__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "current_value",
]
