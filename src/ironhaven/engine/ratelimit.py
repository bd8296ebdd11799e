"""Minimum interval between two actions of the same character.

The resolvers assume the caller already enforced this; ``check_rate_limit``
is the helper the caller uses to do so.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime


RATE_LIMIT_MESSAGE = "Too fast. Steady yourself."


@dataclass(frozen=True)
class RateLimitResult:
    """Whether an action may proceed.

    Attributes:
        allowed: True when enough time has passed.
        wait_ms: Milliseconds left before the next action is allowed.
        message: Player-facing rejection text.
    """

    allowed: bool
    wait_ms: int | None = None
    message: str | None = None


def check_rate_limit(
    last_action_at: datetime | None,
    *,
    now: datetime,
    min_interval_ms: int,
) -> RateLimitResult:
    """Check an action against the minimum inter-action interval.

    Args:
        last_action_at: When the character last acted, or None if never.
        now: The current time.
        min_interval_ms: Minimum milliseconds between two actions.

    Returns:
        The verdict, with the remaining wait when rejected.
    """
    if last_action_at is None:
        return RateLimitResult(allowed=True)

    elapsed_ms = (now - last_action_at).total_seconds() * 1000
    if elapsed_ms < min_interval_ms:
        return RateLimitResult(
            allowed=False,
            wait_ms=math.ceil(min_interval_ms - elapsed_ms),
            message=RATE_LIMIT_MESSAGE,
        )
    return RateLimitResult(allowed=True)


__all__ = [
    "RATE_LIMIT_MESSAGE",
    "RateLimitResult",
    "check_rate_limit",
]
