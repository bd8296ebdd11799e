"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Ironhaven test suite. Time and randomness are always injected:
``clock`` is frozen and ``scripted`` hands out queued draws.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, TypeVar

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from ironhaven.core.config import Settings
    from ironhaven.engine.clock import FixedClock
    from ironhaven.engine.dice import DiceRoller
    from ironhaven.engine.resolver import ActionResolver
    from ironhaven.models import ActionIntent, CharacterSnapshot, HostileActor


T = TypeVar("T")

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
ENCOUNTER_ID = "instance-1"


class ScriptedRandom:
    """Random source that replays queued values.

    When a queue runs dry, ``random`` returns 0.0, ``randint`` returns its
    lower bound and ``choice`` returns the first element.

    Attributes:
        draws: Values returned by ``random``.
        ints: Values returned by ``randint``.
        picks: Indexes used by ``choice``.
    """

    def __init__(
        self,
        draws: Iterable[float] = (),
        ints: Iterable[int] = (),
        picks: Iterable[int] = (),
    ) -> None:
        self.draws = list(draws)
        self.ints = list(ints)
        self.picks = list(picks)

    def random(self) -> float:
        return self.draws.pop(0) if self.draws else 0.0

    def randint(self, a: int, b: int) -> int:
        return self.ints.pop(0) if self.ints else a

    def choice(self, seq: Sequence[T]) -> T:
        return seq[self.picks.pop(0)] if self.picks else seq[0]


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from ironhaven.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def settings() -> Settings:
    """Provide default application settings."""
    from ironhaven.core.config import Settings

    return Settings()


# =============================================================================
# Time and Randomness Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FixedClock:
    """Provide a clock frozen at ``NOW``."""
    from ironhaven.engine.clock import FixedClock

    return FixedClock(NOW)


@pytest.fixture
def scripted() -> ScriptedRandom:
    """Provide an empty scripted random source; tests queue values on it."""
    return ScriptedRandom()


@pytest.fixture
def dice(scripted: ScriptedRandom) -> DiceRoller:
    """Provide a dice roller backed by the scripted source."""
    from ironhaven.engine.dice import DiceRoller

    return DiceRoller(source=scripted)


@pytest.fixture
def resolver(settings: Settings, clock: FixedClock, dice: DiceRoller) -> ActionResolver:
    """Provide an action resolver with frozen time and scripted dice."""
    from ironhaven.engine.resolver import ActionResolver

    return ActionResolver(settings, clock=clock, dice=dice)


# =============================================================================
# Model Factories
# =============================================================================


@pytest.fixture
def make_character() -> Callable[..., CharacterSnapshot]:
    """Build character snapshots stamped at ``NOW``.

    Returns:
        Factory accepting field overrides.
    """
    from ironhaven.models import CharacterSnapshot

    def _make(**overrides: Any) -> CharacterSnapshot:
        data: dict[str, Any] = {
            "id": "c-1",
            "name": "Rook",
            "hp": 100,
            "hp_max": 100,
            "ap_current": 3.0,
            "ap_max": 3,
            "ap_debt": 0.0,
            "ap_last_update": NOW,
        }
        data.update(overrides)
        return CharacterSnapshot(**data)

    return _make


@pytest.fixture
def make_hostile() -> Callable[..., HostileActor]:
    """Build hostile actors.

    Returns:
        Factory accepting field overrides.
    """
    from ironhaven.models import HostileActor

    def _make(**overrides: Any) -> HostileActor:
        data: dict[str, Any] = {
            "id": "scavenger_drone_1",
            "name": "Scavenger Drone",
            "hp": 20,
            "hp_max": 20,
        }
        data.update(overrides)
        return HostileActor(**data)

    return _make


@pytest.fixture
def make_intent() -> Callable[..., ActionIntent]:
    """Build action intents for character ``c-1``.

    Returns:
        Factory taking the action type and optional target.
    """
    from ironhaven.models import ActionIntent

    def _make(action: str, target_id: str | None = None) -> ActionIntent:
        return ActionIntent(
            type=action,
            actor_id="c-1",
            encounter_id=ENCOUNTER_ID,
            target_id=target_id,
        )

    return _make
