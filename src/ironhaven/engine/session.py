"""Request-level facade over the resolvers.

``TurnEngine`` is what a transport layer calls once per player request:
it enforces the action interval, resolves the action, lets the hostiles
answer when the action handed them the turn, and returns one merged
result for the caller to persist and broadcast.
"""

from __future__ import annotations

import math
from datetime import datetime

from ironhaven.core.config import Settings, get_settings
from ironhaven.core.exceptions import RateLimitError
from ironhaven.core.logging import bound_context, get_logger
from ironhaven.engine.clock import Clock, SystemClock
from ironhaven.engine.dice import DiceRoller
from ironhaven.engine.ratelimit import check_rate_limit
from ironhaven.engine.resolver import ActionResolver
from ironhaven.models import (
    ActionIntent,
    CharacterSnapshot,
    CombatPhase,
    EncounterState,
    PlayerStateView,
    ResolutionResult,
)


logger = get_logger(__name__)


class TurnEngine:
    """Resolves complete player requests.

    Attributes:
        settings: Application settings.
        clock: Time source shared with the AP economy.
        resolver: The underlying action resolver.

    Example:
        >>> engine = TurnEngine(clock=FixedClock(now), dice=DiceRoller(seed=3))
        >>> result = engine.submit(intent, character, encounter)
        >>> view = engine.player_view(result.character)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Clock | None = None,
        dice: DiceRoller | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.clock = clock or SystemClock()
        self.resolver = ActionResolver(self.settings, clock=self.clock, dice=dice)

    def submit(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
        *,
        last_action_at: datetime | None = None,
    ) -> ResolutionResult:
        """Resolve a player request end to end.

        Args:
            intent: The declared action.
            character: Freshly loaded snapshot of the acting character.
            encounter: Freshly loaded encounter state.
            last_action_at: When the character last acted, for the rate limit.

        Returns:
            The player's resolution followed by the hostile reply, if any.

        Raises:
            RateLimitError: If the character acted too recently.
        """
        verdict = check_rate_limit(
            last_action_at,
            now=self.clock.now(),
            min_interval_ms=self.settings.rate_limit.min_action_interval_ms,
        )
        if not verdict.allowed:
            raise RateLimitError(
                verdict.message or "Too fast",
                wait_ms=verdict.wait_ms,
            )

        with bound_context(
            character_id=character.id,
            encounter_id=intent.encounter_id,
        ):
            result = self.resolver.resolve(intent, character, encounter)
            if result.encounter.phase == CombatPhase.ENEMY_TURN:
                result = result.then(
                    self.resolver.resolve_enemy_turn(
                        result.character,
                        result.encounter,
                        encounter_id=intent.encounter_id,
                    )
                )
            logger.info(
                "Action resolved",
                action=intent.type,
                phase=result.encounter.phase,
                events=len(result.events),
            )
        return result

    def player_view(self, character: CharacterSnapshot) -> PlayerStateView:
        """Build the client-facing summary of a character."""
        return PlayerStateView(
            hp=character.hp,
            hp_max=character.hp_max,
            mp=character.mp,
            mp_max=character.mp_max,
            ap=math.floor(self.resolver.economy.current_ap(character)),
            ap_max=character.ap_max,
            ap_state=self.resolver.economy.state(character),
            status=character.status,
        )


__all__ = [
    "TurnEngine",
]
