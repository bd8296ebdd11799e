"""Injectable randomness for damage rolls, hostile behavior, and exploration.

Every random decision in the engine goes through a ``DiceRoller`` wrapping a
``RandomSource``. Production code uses a private ``random.Random``; tests
pass a scripted source so outcomes are fixed.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

from ironhaven.core.exceptions import GameEngineError
from ironhaven.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """The subset of ``random.Random`` the engine relies on."""

    def random(self) -> float:
        """Return a float in ``[0, 1)``."""
        ...

    def randint(self, a: int, b: int) -> int:
        """Return an integer in ``[a, b]``."""
        ...

    def choice(self, seq: Sequence[T]) -> T:
        """Return one element of a non-empty sequence."""
        ...


class DiceRoller:
    """Random decisions with logging.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> 5 <= roller.roll_range(5, 8) <= 8
        True
    """

    def __init__(
        self,
        *,
        seed: int | None = None,
        source: RandomSource | None = None,
    ) -> None:
        """Initialize the roller.

        Args:
            seed: Seed for a private ``random.Random`` when no source is given.
            source: Explicit random source; takes precedence over ``seed``.
        """
        self._source: RandomSource = source if source is not None else random.Random(seed)

    @property
    def source(self) -> RandomSource:
        """The underlying random source."""
        return self._source

    def draw(self) -> float:
        """Draw a uniform float in ``[0, 1)``."""
        value = self._source.random()
        logger.debug("Uniform draw", value=value)
        return value

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        return self.draw() < probability

    def roll_range(self, low: int, high: int) -> int:
        """Roll a uniform integer in ``[low, high]``.

        Raises:
            GameEngineError: If the range is inverted.
        """
        if low > high:
            raise GameEngineError(
                "Invalid roll range",
                details={"low": low, "high": high},
            )
        value = self._source.randint(low, high)
        logger.debug("Range rolled", low=low, high=high, value=value)
        return value

    def pick(self, options: Sequence[T]) -> T:
        """Pick one option uniformly.

        Raises:
            GameEngineError: If there is nothing to pick from.
        """
        if not options:
            raise GameEngineError("Cannot pick from an empty table")
        return self._source.choice(options)


__all__ = [
    "RandomSource",
    "DiceRoller",
]
