"""Hostile phase resolution.

All live hostiles act in a single call, in list order, rather than one
per turn-order slot. Each one either attacks or hesitates; a killing blow
ends the encounter immediately.
"""

from __future__ import annotations

from ironhaven.core.config import CombatSettings
from ironhaven.core.logging import get_logger
from ironhaven.engine.dice import DiceRoller
from ironhaven.engine.narrative import DEATH_MESSAGE, Narrator
from ironhaven.engine.turn_manager import advance, complete, start_next_round
from ironhaven.models import (
    CharacterSnapshot,
    CombatPhase,
    EncounterState,
    EventKind,
    GameEvent,
    HostileActor,
    ResolutionResult,
)


logger = get_logger(__name__)


class EnemyTurnResolver:
    """Runs the hostile phase of an encounter."""

    def __init__(
        self,
        combat: CombatSettings,
        dice: DiceRoller,
        narrator: Narrator | None = None,
    ) -> None:
        self.combat = combat
        self._dice = dice
        self._narrator = narrator or Narrator(dice)

    def damage_range(self, hostile: HostileActor) -> tuple[int, int]:
        """Get the damage bounds for a hostile, falling back to the configured range."""
        if hostile.damage is not None:
            return hostile.damage.min, hostile.damage.max
        return self.combat.enemy_damage_min, self.combat.enemy_damage_max

    def resolve(
        self,
        character: CharacterSnapshot,
        encounter: EncounterState,
        *,
        encounter_id: str,
    ) -> ResolutionResult:
        """Let every live hostile act against the character.

        Does nothing unless the encounter is in its hostile phase and the
        character is still alive.

        Args:
            character: Snapshot of the targeted character.
            encounter: Current encounter state.
            encounter_id: Encounter the events belong to.

        Returns:
            The resolution. If the character survives, the turn returns to
            the first player in a new round; otherwise the encounter is
            complete.
        """
        if encounter.phase != CombatPhase.ENEMY_TURN or not character.is_alive:
            return ResolutionResult(character, encounter)

        if not encounter.enemies:
            return ResolutionResult(character, advance(encounter))

        events: list[GameEvent] = []
        for hostile in encounter.enemies:
            if not self._dice.chance(self.combat.enemy_attack_chance):
                events.append(
                    GameEvent(
                        encounter_id=encounter_id,
                        actor_id=hostile.id,
                        message=self._narrator.enemy_hesitates(hostile.name),
                        kind=EventKind.ENEMY_ACTION,
                    )
                )
                continue

            damage = self._dice.roll_range(*self.damage_range(hostile))
            character = character.with_hp(character.hp - damage)
            events.append(
                GameEvent(
                    encounter_id=encounter_id,
                    actor_id=hostile.id,
                    message=self._narrator.enemy_attack(hostile.name, damage, character.hp_max),
                    kind=EventKind.ENEMY_ACTION,
                )
            )
            events.append(
                GameEvent(
                    encounter_id=encounter_id,
                    actor_id=character.id,
                    message=f"You take {damage} damage.",
                    kind=EventKind.COMBAT,
                )
            )

            if not character.is_alive:
                logger.info(
                    "Character died",
                    character_id=character.id,
                    killed_by=hostile.id,
                    round=encounter.round,
                )
                events.append(
                    GameEvent(
                        encounter_id=encounter_id,
                        actor_id=character.id,
                        message=DEATH_MESSAGE,
                        kind=EventKind.SYSTEM,
                    )
                )
                return ResolutionResult(character, complete(encounter), events)

        return ResolutionResult(character, start_next_round(encounter), events)


__all__ = [
    "EnemyTurnResolver",
]
