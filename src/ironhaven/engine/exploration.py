"""Exploration outcome roller.

Outside combat, exploring spends AP and rolls one uniform draw against the
weighted outcome table. A fight outcome spawns hostiles from the current
zone's enemy table and opens a new encounter.
"""

from __future__ import annotations

from ironhaven.content import ENEMIES, EnemyDefinition, get_enemy, get_zone, zones_of_type
from ironhaven.core.config import CombatSettings, ExplorationSettings
from ironhaven.core.exceptions import GameEngineError
from ironhaven.core.logging import get_logger
from ironhaven.engine.ap import APEconomy
from ironhaven.engine.dice import DiceRoller
from ironhaven.engine.narrative import (
    AMBUSH_WARNING,
    DEATH_MESSAGE,
    EXPLORE_BLOCKED_MESSAGE,
    Narrator,
)
from ironhaven.engine.turn_manager import create_encounter
from ironhaven.models import (
    ActionIntent,
    ActionType,
    CharacterSnapshot,
    CharacterStatus,
    EncounterState,
    EventKind,
    ExploreOutcome,
    GameEvent,
    HostileActor,
    ResolutionResult,
)


logger = get_logger(__name__)


class ExplorationRoller:
    """Resolves the explore action.

    Attributes:
        combat: Cost, trap damage and spawn settings.
        exploration: Outcome weights.
    """

    def __init__(
        self,
        combat: CombatSettings,
        exploration: ExplorationSettings,
        economy: APEconomy,
        dice: DiceRoller,
        narrator: Narrator | None = None,
    ) -> None:
        self.combat = combat
        self.exploration = exploration
        self._economy = economy
        self._dice = dice
        self._narrator = narrator or Narrator(dice)

    def roll(self) -> ExploreOutcome:
        """Draw one exploration outcome from the weighted table."""
        draw = self._dice.draw()
        bands = self.exploration.thresholds()
        for outcome, upper in bands:
            if draw < upper:
                break
        else:
            outcome = bands[-1][0]
        logger.debug("Exploration rolled", draw=draw, outcome=outcome)
        return outcome

    def explore(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        """Search the area.

        Rejected with a narrated event, and nothing spent, while hostiles
        are present.

        Args:
            intent: The explore intent.
            character: Snapshot of the exploring character.
            encounter: Current encounter state.

        Returns:
            The resolution, which may hold a newly created encounter.
        """
        if encounter.has_hostiles:
            return ResolutionResult(
                character,
                encounter,
                [
                    GameEvent(
                        encounter_id=intent.encounter_id,
                        actor_id=intent.actor_id,
                        message=EXPLORE_BLOCKED_MESSAGE,
                        kind=EventKind.SYSTEM,
                    )
                ],
            )

        spent = self._economy.spend(character, self.combat.cost_of(ActionType.EXPLORE))
        events: list[GameEvent] = []
        if spent.narrative:
            events.append(
                GameEvent(
                    encounter_id=intent.encounter_id,
                    actor_id=intent.actor_id,
                    message=spent.narrative,
                    kind=EventKind.NARRATIVE,
                )
            )

        outcome = self.roll()
        if outcome == ExploreOutcome.ZONE_CHANGE:
            result = self._change_zone(intent, spent.character, encounter)
        elif outcome == ExploreOutcome.TRAP:
            result = self._spring_trap(intent, spent.character, encounter)
        elif outcome.starts_fight:
            result = self._start_fight(
                intent,
                spent.character,
                encounter,
                ambush=outcome == ExploreOutcome.AMBUSH,
            )
        else:
            result = self._narrate(intent, spent.character, encounter, outcome)

        return ResolutionResult(result.character, result.encounter, [*events, *result.events])

    # -------------------------------------------------------------------------
    # Outcomes
    # -------------------------------------------------------------------------

    def _narrate(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
        outcome: ExploreOutcome,
    ) -> ResolutionResult:
        events = [
            GameEvent(
                encounter_id=intent.encounter_id,
                actor_id=intent.actor_id,
                message=self._narrator.explore(outcome),
                kind=EventKind.NARRATIVE,
            )
        ]
        # Nothing found in a known zone adds one of its ambient lines.
        zone = get_zone(encounter.current_zone)
        if outcome == ExploreOutcome.NOTHING and zone is not None:
            events.append(
                GameEvent(
                    encounter_id=intent.encounter_id,
                    message=self._narrator.zone_ambient(zone),
                    kind=EventKind.NARRATIVE,
                )
            )
        return ResolutionResult(character, encounter, events)

    def _change_zone(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        candidates = [z for z in zones_of_type() if z.id != encounter.current_zone]
        zone = self._dice.pick(candidates)
        logger.info(
            "Zone changed",
            character_id=character.id,
            from_zone=encounter.current_zone,
            to_zone=zone.id,
        )
        return ResolutionResult(
            character,
            encounter.model_copy(update={"current_zone": zone.id}),
            [
                GameEvent(
                    encounter_id=intent.encounter_id,
                    actor_id=intent.actor_id,
                    message=self._narrator.explore(ExploreOutcome.ZONE_CHANGE),
                    kind=EventKind.NARRATIVE,
                ),
                GameEvent(
                    encounter_id=intent.encounter_id,
                    message=self._narrator.zone_welcome(zone),
                    kind=EventKind.NARRATIVE,
                ),
            ],
        )

    def _spring_trap(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        damage = self._dice.roll_range(self.combat.trap_damage_min, self.combat.trap_damage_max)
        hurt = character.with_hp(character.hp - damage)
        events = [
            GameEvent(
                encounter_id=intent.encounter_id,
                actor_id=intent.actor_id,
                message=self._narrator.explore(ExploreOutcome.TRAP),
                kind=EventKind.COMBAT,
            ),
            GameEvent(
                encounter_id=intent.encounter_id,
                actor_id=intent.actor_id,
                message=f"You take {damage} damage.",
                kind=EventKind.COMBAT,
            ),
        ]
        if not hurt.is_alive:
            logger.info("Character died", character_id=hurt.id, cause="trap")
            events.append(
                GameEvent(
                    encounter_id=intent.encounter_id,
                    actor_id=intent.actor_id,
                    message=DEATH_MESSAGE,
                    kind=EventKind.SYSTEM,
                )
            )
        return ResolutionResult(hurt, encounter, events)

    def _start_fight(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
        *,
        ambush: bool,
    ) -> ResolutionResult:
        enemies = self.spawn(encounter.current_zone)
        fight = create_encounter(
            [intent.actor_id],
            enemies,
            ambush=ambush,
            current_zone=encounter.current_zone,
        )
        outcome = ExploreOutcome.AMBUSH if ambush else ExploreOutcome.ENCOUNTER
        events = [
            GameEvent(
                encounter_id=intent.encounter_id,
                actor_id=intent.actor_id,
                message=self._narrator.explore(outcome),
                kind=EventKind.COMBAT,
            ),
        ]
        events.extend(
            GameEvent(
                encounter_id=intent.encounter_id,
                actor_id=enemy.id,
                message=f"{enemy.name} appears.",
                kind=EventKind.COMBAT,
            )
            for enemy in enemies
        )
        if ambush:
            events.append(
                GameEvent(
                    encounter_id=intent.encounter_id,
                    message=AMBUSH_WARNING,
                    kind=EventKind.SYSTEM,
                )
            )
        return ResolutionResult(
            character.model_copy(update={"status": CharacterStatus.IN_COMBAT}),
            fight,
            events,
        )

    # -------------------------------------------------------------------------
    # Spawning
    # -------------------------------------------------------------------------

    def spawn(self, zone_id: str | None) -> list[HostileActor]:
        """Spawn a group of hostiles for a zone.

        Enemy types come from the zone's enemy table, or from every known
        enemy when the zone is unknown or lists none.

        Raises:
            GameEngineError: If a zone lists an enemy type with no definition.
        """
        zone = get_zone(zone_id)
        pool = list(zone.enemy_types) if zone and zone.enemy_types else list(ENEMIES)
        count = self._dice.roll_range(self.combat.spawn_min, self.combat.spawn_max)

        enemies: list[HostileActor] = []
        for index in range(count):
            enemy_id = self._dice.pick(pool)
            definition = get_enemy(enemy_id)
            if definition is None:
                raise GameEngineError(
                    f"Unknown enemy type: {enemy_id}",
                    details={"zone": zone_id},
                )
            enemies.append(self._instantiate(definition, index))
        return enemies

    def _instantiate(self, definition: EnemyDefinition, index: int) -> HostileActor:
        return HostileActor(
            id=f"{definition.id}_{index + 1}",
            name=definition.name,
            hp=definition.hp,
            hp_max=definition.hp,
            intent=self._dice.pick(definition.intents),
            damage=definition.damage,
            definition_id=definition.id,
        )


__all__ = [
    "ExplorationRoller",
]
