"""Player action resolution.

The ``ActionResolver`` dispatches an ``ActionIntent`` to the rule for its
type. Each rule takes the intent plus the two snapshots and returns the
successor snapshots with the events it narrated. Nothing here performs
I/O; the caller persists and broadcasts the result.

Example:
    >>> resolver = ActionResolver(settings, clock=clock, dice=DiceRoller(seed=1))
    >>> result = resolver.resolve(intent, character, encounter)
    >>> [e.message for e in result.events]
"""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from ironhaven.core.config import Settings, get_settings
from ironhaven.core.exceptions import (
    CombatError,
    InvalidActionError,
    OutOfTurnError,
    TerminalStateError,
)
from ironhaven.core.logging import get_logger
from ironhaven.engine.ap import APEconomy
from ironhaven.engine.clock import Clock
from ironhaven.engine.dice import DiceRoller
from ironhaven.engine.enemy_turn import EnemyTurnResolver
from ironhaven.engine.exploration import ExplorationRoller
from ironhaven.engine.narrative import (
    AMBUSH_WARNING,
    COMBAT_BEGINS_MESSAGE,
    NO_TARGET_MESSAGE,
    QUIET_AREA_MESSAGE,
    VICTORY_MESSAGE,
    Narrator,
    acknowledgement,
    health_description,
)
from ironhaven.engine.turn_manager import (
    advance,
    create_encounter,
    in_combat,
    is_combat_complete,
    reset_to_idle,
)
from ironhaven.models import (
    ActionIntent,
    ActionType,
    CharacterSnapshot,
    CharacterStatus,
    CombatPhase,
    EncounterState,
    EventKind,
    GameEvent,
    HostileActor,
    ResolutionResult,
)


logger = get_logger(__name__)

ActionHandler = Callable[[ActionIntent, CharacterSnapshot, EncounterState], ResolutionResult]


class ActionResolver:
    """Applies game rules to player actions.

    Attributes:
        settings: Application settings the rules read their constants from.
        economy: AP economy shared by every rule.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Clock | None = None,
        dice: DiceRoller | None = None,
        narrator: Narrator | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            settings: Settings to use (defaults to ``get_settings()``).
            clock: Time source for AP regeneration (defaults to UTC system time).
            dice: Random source for every roll (defaults to an unseeded roller).
            narrator: Message picker (defaults to one sharing ``dice``).
        """
        self.settings = settings or get_settings()
        self._dice = dice or DiceRoller()
        self._narrator = narrator or Narrator(self._dice)
        self.economy = APEconomy(self.settings.ap, clock)
        self._explorer = ExplorationRoller(
            self.settings.combat,
            self.settings.exploration,
            self.economy,
            self._dice,
            self._narrator,
        )
        self._enemy_turn = EnemyTurnResolver(self.settings.combat, self._dice, self._narrator)

        self._handlers: dict[ActionType, ActionHandler] = {
            ActionType.ATTACK: self._attack,
            ActionType.DEFEND: self._defend,
            ActionType.WAIT: self._wait,
            ActionType.LOOK: self._look,
            ActionType.STATUS: self._status,
            ActionType.EXPLORE: self._explorer.explore,
            ActionType.INVENTORY: self._acknowledge,
            ActionType.USE: self._acknowledge,
            ActionType.TALK: self._acknowledge,
        }

    @property
    def explorer(self) -> ExplorationRoller:
        return self._explorer

    # =========================================================================
    # Entry points
    # =========================================================================

    def resolve(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        """Resolve one player action.

        A completed encounter is discarded first, so the action applies to
        a fresh idle state in the same zone. A dead character observes the
        completed encounter unchanged.

        Args:
            intent: The declared action.
            character: Snapshot of the acting character.
            encounter: Current encounter state.

        Returns:
            Successor snapshots and the ordered events.

        Raises:
            InvalidActionError: If no rule handles the action type.
            TerminalStateError: If a dead character attempts anything but
                look or status.
            OutOfTurnError: If a combat action arrives during the hostile phase.
        """
        handler = self._handlers.get(intent.type)
        if handler is None:
            raise InvalidActionError(
                f"No rule for action '{intent.type}'",
                action_type=str(intent.type),
            )

        if not character.is_alive and not intent.type.is_observation:
            raise TerminalStateError(
                "The dead cannot act",
                current_state=str(character.status),
                expected_states=[
                    str(s) for s in CharacterStatus if s != CharacterStatus.DEAD
                ],
            )

        if is_combat_complete(encounter) and character.is_alive:
            encounter = reset_to_idle(encounter)

        if encounter.phase == CombatPhase.ENEMY_TURN and intent.type.is_combat_action:
            raise OutOfTurnError(
                "Wait for the enemy to act",
                current_state=str(encounter.phase),
                expected_states=[str(CombatPhase.PLAYER_TURN), str(CombatPhase.IDLE)],
            )

        logger.debug(
            "Resolving action",
            action=intent.type,
            character_id=character.id,
            phase=encounter.phase,
        )
        return handler(intent, character, encounter)

    def resolve_enemy_turn(
        self,
        character: CharacterSnapshot,
        encounter: EncounterState,
        *,
        encounter_id: str,
    ) -> ResolutionResult:
        """Run the hostile phase; a no-op in any other phase."""
        return self._enemy_turn.resolve(character, encounter, encounter_id=encounter_id)

    def start_combat(
        self,
        character: CharacterSnapshot,
        encounter: EncounterState,
        enemies: Sequence[HostileActor],
        *,
        encounter_id: str,
        ambush: bool = False,
    ) -> ResolutionResult:
        """Open an encounter against the given hostiles.

        Raises:
            TerminalStateError: If the character is dead.
            CombatError: If a fight is already in progress.
        """
        if not character.is_alive:
            raise TerminalStateError(
                "The dead cannot fight",
                current_state=str(character.status),
            )
        if encounter.has_hostiles and not is_combat_complete(encounter):
            raise CombatError(
                "Combat is already in progress",
                combatant_id=character.id,
                round_number=encounter.round,
            )

        fight = create_encounter(
            [character.id],
            enemies,
            ambush=ambush,
            current_zone=encounter.current_zone,
        )
        events = [
            GameEvent(
                encounter_id=encounter_id,
                message=COMBAT_BEGINS_MESSAGE,
                kind=EventKind.SYSTEM,
            )
        ]
        events.extend(
            GameEvent(
                encounter_id=encounter_id,
                actor_id=enemy.id,
                message=f"{enemy.name} appears.",
                kind=EventKind.COMBAT,
            )
            for enemy in enemies
        )
        if ambush:
            events.append(
                GameEvent(
                    encounter_id=encounter_id,
                    message=AMBUSH_WARNING,
                    kind=EventKind.SYSTEM,
                )
            )
        return ResolutionResult(
            character.model_copy(update={"status": CharacterStatus.IN_COMBAT}),
            fight,
            events,
        )

    def calculate_damage(self, character: CharacterSnapshot, target: HostileActor) -> int:
        """Damage a character's attack deals to a hostile.

        Weapon and stat modifiers hook in here; the base rule is flat.
        """
        return self.settings.combat.attack_base_damage

    # =========================================================================
    # Rules
    # =========================================================================

    def _attack(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        spent = self.economy.spend(character, self.settings.combat.cost_of(ActionType.ATTACK))
        character = spent.character
        events: list[GameEvent] = []
        if spent.narrative:
            events.append(self._event(intent, spent.narrative, EventKind.COMBAT))

        target_id = intent.target_id or (encounter.enemies[0].id if encounter.enemies else None)
        target = encounter.find_enemy(target_id)
        if target is None:
            events.append(self._event(intent, NO_TARGET_MESSAGE, EventKind.COMBAT))
            return ResolutionResult(character, encounter, events)

        damage = self.calculate_damage(character, target)
        new_hp = max(0, target.hp - damage)
        events.append(
            self._event(intent, self._narrator.attack(damage, target.hp_max), EventKind.NARRATIVE)
        )
        events.append(
            self._event(intent, f"You strike {target.name} for {damage} damage.", EventKind.COMBAT)
        )
        if new_hp == 0:
            logger.info("Hostile defeated", hostile_id=target.id, round=encounter.round)
            events.append(
                GameEvent(
                    encounter_id=intent.encounter_id,
                    message=f"{target.name} collapses, defeated.",
                    kind=EventKind.COMBAT,
                )
            )

        survivors = [
            enemy.model_copy(update={"hp": new_hp}) if enemy.id == target.id else enemy
            for enemy in encounter.enemies
        ]
        encounter = advance(
            encounter.model_copy(update={"enemies": [e for e in survivors if e.hp > 0]})
        )

        if not encounter.enemies:
            character = character.model_copy(update={"status": CharacterStatus.ALIVE})
            events.append(
                GameEvent(
                    encounter_id=intent.encounter_id,
                    message=VICTORY_MESSAGE,
                    kind=EventKind.SYSTEM,
                )
            )

        return ResolutionResult(character, encounter, events)

    def _defend(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        spent = self.economy.spend(character, self.settings.combat.cost_of(ActionType.DEFEND))
        events: list[GameEvent] = []
        if spent.narrative:
            events.append(self._event(intent, spent.narrative, EventKind.COMBAT))
        events.append(self._event(intent, self._narrator.defend(), EventKind.COMBAT))

        if in_combat(encounter):
            encounter = advance(encounter)
        return ResolutionResult(spent.character, encounter, events)

    def _wait(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        waited = self.economy.wait(character)
        events = [
            self._event(intent, waited.narrative, EventKind.COMBAT),
            self._event(
                intent,
                self.economy.state_narrative(waited.character),
                EventKind.NARRATIVE,
            ),
        ]

        if in_combat(encounter):
            encounter = advance(encounter)
        return ResolutionResult(waited.character, encounter, events)

    def _look(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        if not encounter.enemies:
            events = [self._event(intent, QUIET_AREA_MESSAGE, EventKind.NARRATIVE)]
        else:
            events = [
                self._event(
                    intent,
                    f"{enemy.name} — {health_description(enemy.hp, enemy.hp_max)}. "
                    f"Intent: {enemy.intent}.",
                    EventKind.NARRATIVE,
                )
                for enemy in encounter.enemies
            ]
        return ResolutionResult(character, encounter, events)

    def _status(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        ap = math.floor(self.economy.current_ap(character))
        events = [
            self._event(
                intent,
                f"HP: {character.hp}/{character.hp_max} — "
                f"{health_description(character.hp, character.hp_max)}",
                EventKind.SYSTEM,
            ),
            self._event(
                intent,
                f"AP: {ap}/{character.ap_max} — {self.economy.state_narrative(character)}",
                EventKind.SYSTEM,
            ),
        ]
        if character.ap_debt > 0:
            events.append(
                self._event(
                    intent,
                    f"Strain: {character.ap_debt:.1f} — recovery slowed.",
                    EventKind.SYSTEM,
                )
            )
        return ResolutionResult(character, encounter, events)

    def _acknowledge(
        self,
        intent: ActionIntent,
        character: CharacterSnapshot,
        encounter: EncounterState,
    ) -> ResolutionResult:
        return ResolutionResult(
            character,
            encounter,
            [self._event(intent, acknowledgement(intent.type), EventKind.PLAYER_ACTION)],
        )

    @staticmethod
    def _event(intent: ActionIntent, message: str, kind: EventKind) -> GameEvent:
        return GameEvent(
            encounter_id=intent.encounter_id,
            actor_id=intent.actor_id,
            message=message,
            kind=kind,
        )


__all__ = [
    "ActionHandler",
    "ActionResolver",
]
