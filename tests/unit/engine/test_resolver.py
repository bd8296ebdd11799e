"""Tests for player action resolution."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from conftest import ENCOUNTER_ID
from ironhaven.core.config import Settings
from ironhaven.core.exceptions import (
    CombatError,
    InvalidActionError,
    OutOfTurnError,
    TerminalStateError,
)
from ironhaven.engine.clock import FixedClock
from ironhaven.engine.dice import DiceRoller
from ironhaven.engine.narrative import (
    ACKNOWLEDGEMENTS,
    AMBUSH_WARNING,
    ATTACK_MESSAGES,
    DEFEND_MESSAGES,
    NO_TARGET_MESSAGE,
    QUIET_AREA_MESSAGE,
    VICTORY_MESSAGE,
)
from ironhaven.engine.resolver import ActionResolver
from ironhaven.engine.turn_manager import complete, create_encounter, idle_encounter
from ironhaven.models import (
    ActionIntent,
    ActionType,
    CharacterSnapshot,
    CharacterStatus,
    CombatPhase,
    EncounterState,
    EventKind,
    HostileActor,
    ResolutionResult,
)


@pytest.fixture
def fight(make_hostile: Callable[..., HostileActor]) -> EncounterState:
    """Provide a one-on-one encounter on the player's turn."""
    return create_encounter(["c-1"], [make_hostile()], current_zone="ruins")


def messages(result: ResolutionResult) -> list[str]:
    return [e.message for e in result.events]


class TestAttack:
    """Tests for the attack rule."""

    def test_attack_from_full_ap(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test attack costs 2 AP and deals the base damage."""
        result = resolver.resolve(make_intent("attack"), make_character(), fight)

        assert result.character.ap_current == 1.0
        assert result.character.ap_debt == 0.0
        assert result.encounter.enemies[0].hp == 10
        assert messages(result) == [
            ATTACK_MESSAGES["critical"][0],
            "You strike Scavenger Drone for 10 damage.",
        ]
        assert result.encounter.phase == CombatPhase.ENEMY_TURN
        assert result.encounter.current_turn_index == 1

    def test_attack_from_zero_ap_overcommits(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test attacking with no AP books debt and still deals damage."""
        result = resolver.resolve(make_intent("attack"), make_character(ap_current=0.0), fight)

        assert result.character.ap_current == 0.0
        assert result.character.ap_debt == 2.0
        assert result.events[0].message == (
            "You strain yourself, feeling the cost of over-commitment."
        )
        assert result.events[0].kind == EventKind.COMBAT
        assert result.encounter.enemies[0].hp == 10

    def test_killing_blow_completes(
        self,
        resolver: ActionResolver,
        make_hostile: Callable[..., HostileActor],
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test a defeated hostile leaves the active set and ends the fight."""
        fight = create_encounter(["c-1"], [make_hostile(hp=6)])
        character = make_character(status=CharacterStatus.IN_COMBAT)

        result = resolver.resolve(make_intent("attack"), character, fight)

        assert result.encounter.enemies == []
        assert result.encounter.phase == CombatPhase.COMPLETE
        assert result.character.status == CharacterStatus.ALIVE
        assert "Scavenger Drone collapses, defeated." in messages(result)
        assert messages(result)[-1] == VICTORY_MESSAGE

    def test_explicit_target(
        self,
        resolver: ActionResolver,
        make_hostile: Callable[..., HostileActor],
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test an explicit target is struck instead of the first hostile."""
        hound = make_hostile(id="feral_hound_2", name="Feral Hound", hp=35, hp_max=35)
        fight = create_encounter(["c-1"], [make_hostile(), hound])

        result = resolver.resolve(make_intent("attack", "feral_hound_2"), make_character(), fight)

        assert result.encounter.enemies[0].hp == 20
        assert result.encounter.enemies[1].hp == 25
        assert "You strike Feral Hound for 10 damage." in messages(result)

    def test_surviving_hostile_keeps_fighting(
        self,
        resolver: ActionResolver,
        make_hostile: Callable[..., HostileActor],
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test killing one of two hostiles does not end the encounter."""
        hound = make_hostile(id="feral_hound_2", name="Feral Hound", hp=35, hp_max=35)
        fight = create_encounter(["c-1"], [make_hostile(hp=10), hound])

        result = resolver.resolve(make_intent("attack"), make_character(), fight)

        assert [e.id for e in result.encounter.enemies] == ["feral_hound_2"]
        assert result.encounter.phase == CombatPhase.PLAYER_TURN
        assert VICTORY_MESSAGE not in messages(result)

    def test_stale_target(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test a missing target is narrated, with no damage and no advance."""
        result = resolver.resolve(make_intent("attack", "ghost"), make_character(), fight)

        assert messages(result) == [NO_TARGET_MESSAGE]
        assert result.encounter == fight
        assert result.character.ap_current == 1.0

    def test_attack_with_nothing_to_hit(
        self,
        resolver: ActionResolver,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test attacking outside combat strikes at nothing."""
        result = resolver.resolve(make_intent("attack"), make_character(), idle_encounter())

        assert messages(result) == [NO_TARGET_MESSAGE]
        assert result.encounter.phase == CombatPhase.IDLE

    def test_damage_hook(
        self,
        settings: Settings,
        clock: FixedClock,
        dice: DiceRoller,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test subclasses can change damage; HP never goes below zero."""

        class HeavyHitter(ActionResolver):
            def calculate_damage(
                self, character: CharacterSnapshot, target: HostileActor
            ) -> int:
                return 25

        result = HeavyHitter(settings, clock=clock, dice=dice).resolve(
            make_intent("attack"), make_character(), fight
        )

        assert result.encounter.enemies == []
        assert "You strike Scavenger Drone for 25 damage." in messages(result)


class TestDefendAndWait:
    """Tests for the defend and wait rules."""

    def test_defend_in_combat(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test defend costs 1 AP and passes the turn."""
        result = resolver.resolve(make_intent("defend"), make_character(), fight)

        assert result.character.ap_current == 2.0
        assert messages(result) == [DEFEND_MESSAGES[0]]
        assert result.encounter.phase == CombatPhase.ENEMY_TURN

    def test_defend_outside_combat(
        self,
        resolver: ActionResolver,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test defend while idle does not start or complete anything."""
        result = resolver.resolve(make_intent("defend"), make_character(), idle_encounter("town"))

        assert result.encounter == idle_encounter("town")

    def test_wait_in_combat(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test wait recovers AP, narrates twice and passes the turn."""
        character = make_character(ap_current=1.0, ap_debt=1.0)

        result = resolver.resolve(make_intent("wait"), character, fight)

        assert result.character.ap_current == 2.0
        assert result.character.ap_debt == 0.5
        assert [e.kind for e in result.events] == [EventKind.COMBAT, EventKind.NARRATIVE]
        assert result.events[1].message == "Strength slowly returns, though the strain lingers."
        assert result.encounter.phase == CombatPhase.ENEMY_TURN

    def test_wait_outside_combat(
        self,
        resolver: ActionResolver,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test wait while idle recovers without touching the encounter."""
        result = resolver.resolve(
            make_intent("wait"), make_character(ap_current=0.0), idle_encounter()
        )

        assert result.character.ap_current == 1.0
        assert result.encounter.phase == CombatPhase.IDLE


class TestObservation:
    """Tests for the look and status rules."""

    def test_look_quiet(
        self,
        resolver: ActionResolver,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test look with no hostiles."""
        result = resolver.resolve(make_intent("look"), make_character(), idle_encounter())

        assert messages(result) == [QUIET_AREA_MESSAGE]

    def test_look_describes_hostiles(
        self,
        resolver: ActionResolver,
        make_hostile: Callable[..., HostileActor],
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test look lists each hostile's health and intent without side effects."""
        fight = create_encounter(["c-1"], [make_hostile(hp=10)])
        character = make_character(ap_current=0.5)

        result = resolver.resolve(make_intent("look"), character, fight)

        assert messages(result) == ["Scavenger Drone — bloodied. Intent: attack."]
        assert result.character == character
        assert result.encounter == fight

    def test_status(
        self,
        resolver: ActionResolver,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test status reports HP, floored AP and strain."""
        character = make_character(hp=65, ap_current=2.75, ap_debt=1.3)

        result = resolver.resolve(make_intent("status"), character, idle_encounter())

        assert messages(result) == [
            "HP: 65/100 — bloodied",
            "AP: 2/3 — Strength slowly returns, though the strain lingers.",
            "Strain: 1.3 — recovery slowed.",
        ]
        assert all(e.kind == EventKind.SYSTEM for e in result.events)
        assert result.character == character

    def test_status_without_debt(
        self,
        resolver: ActionResolver,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test no strain line when there is no debt."""
        result = resolver.resolve(make_intent("status"), make_character(), idle_encounter())

        assert len(result.events) == 2


class TestAcknowledgedActions:
    """Tests for actions handled by collaborators outside the core."""

    @pytest.mark.parametrize("action", [ActionType.INVENTORY, ActionType.USE, ActionType.TALK])
    def test_flavor_only(
        self,
        resolver: ActionResolver,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
        action: ActionType,
    ) -> None:
        """Test the action is acknowledged with no state change."""
        character = make_character()

        result = resolver.resolve(make_intent(action), character, idle_encounter())

        assert messages(result) == [ACKNOWLEDGEMENTS[action]]
        assert result.events[0].kind == EventKind.PLAYER_ACTION
        assert result.character == character


class TestGuards:
    """Tests for terminal and out-of-turn guards."""

    def test_dead_cannot_attack(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test a dead character is refused."""
        dead = make_character(hp=0, status=CharacterStatus.DEAD)

        with pytest.raises(TerminalStateError):
            resolver.resolve(make_intent("attack"), dead, fight)

    @pytest.mark.parametrize("action", ["look", "status"])
    def test_dead_can_observe(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
        action: str,
    ) -> None:
        """Test ghost checks are allowed for the dead."""
        dead = make_character(hp=0, status=CharacterStatus.DEAD)

        result = resolver.resolve(make_intent(action), dead, fight)

        assert result.character == dead
        assert result.events

    @pytest.mark.parametrize("action", ["look", "status"])
    def test_dead_observe_finished_fight_unchanged(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
        action: str,
    ) -> None:
        """Test a defeat is observed as it stands, surviving hostiles included."""
        dead = make_character(hp=0, status=CharacterStatus.DEAD)
        defeat = complete(fight)

        result = resolver.resolve(make_intent(action), dead, defeat)

        assert result.encounter == defeat
        assert result.character == dead

    def test_dead_look_reports_survivors(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test looking after a defeat describes the hostiles still standing."""
        dead = make_character(hp=0, status=CharacterStatus.DEAD)

        result = resolver.resolve(make_intent("look"), dead, complete(fight))

        assert messages(result) == ["Scavenger Drone — unscathed. Intent: attack."]

    def test_complete_encounter_is_reset(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test a finished encounter is discarded before the action applies."""
        result = resolver.resolve(make_intent("look"), make_character(), complete(fight))

        assert result.encounter == idle_encounter("ruins")
        assert messages(result) == [QUIET_AREA_MESSAGE]

    @pytest.mark.parametrize("action", ["attack", "defend", "wait"])
    def test_combat_action_out_of_turn(
        self,
        resolver: ActionResolver,
        make_hostile: Callable[..., HostileActor],
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
        action: str,
    ) -> None:
        """Test combat actions during the hostile phase are refused."""
        ambush = create_encounter(["c-1"], [make_hostile()], ambush=True)

        with pytest.raises(OutOfTurnError):
            resolver.resolve(make_intent(action), make_character(), ambush)

    def test_look_during_hostile_phase(
        self,
        resolver: ActionResolver,
        make_hostile: Callable[..., HostileActor],
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test observation is allowed while hostiles act."""
        ambush = create_encounter(["c-1"], [make_hostile()], ambush=True)

        result = resolver.resolve(make_intent("look"), make_character(), ambush)

        assert result.encounter == ambush

    def test_unhandled_action(
        self,
        resolver: ActionResolver,
        make_character: Callable[..., CharacterSnapshot],
        make_intent: Callable[..., ActionIntent],
    ) -> None:
        """Test an action type without a rule is an InvalidActionError."""
        resolver._handlers.pop(ActionType.TALK)

        with pytest.raises(InvalidActionError):
            resolver.resolve(make_intent("talk"), make_character(), idle_encounter())


class TestStartCombat:
    """Tests for opening an encounter directly."""

    def test_start_combat(
        self,
        resolver: ActionResolver,
        make_hostile: Callable[..., HostileActor],
        make_character: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test the opening narration and status bookkeeping."""
        result = resolver.start_combat(
            make_character(),
            idle_encounter("forest"),
            [make_hostile()],
            encounter_id=ENCOUNTER_ID,
        )

        assert messages(result) == ["Combat begins.", "Scavenger Drone appears."]
        assert result.character.status == CharacterStatus.IN_COMBAT
        assert result.encounter.phase == CombatPhase.PLAYER_TURN
        assert result.encounter.current_zone == "forest"

    def test_ambush_warns(
        self,
        resolver: ActionResolver,
        make_hostile: Callable[..., HostileActor],
        make_character: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test an ambush hands hostiles the turn and warns the player."""
        result = resolver.start_combat(
            make_character(),
            idle_encounter(),
            [make_hostile()],
            encounter_id=ENCOUNTER_ID,
            ambush=True,
        )

        assert messages(result) == [
            "Combat begins.",
            "Scavenger Drone appears.",
            AMBUSH_WARNING,
        ]
        assert result.events[-1].kind == EventKind.SYSTEM
        assert result.encounter.phase == CombatPhase.ENEMY_TURN

    def test_cannot_start_twice(
        self,
        resolver: ActionResolver,
        fight: EncounterState,
        make_hostile: Callable[..., HostileActor],
        make_character: Callable[..., CharacterSnapshot],
    ) -> None:
        """Test a fight in progress blocks a new one."""
        with pytest.raises(CombatError):
            resolver.start_combat(
                make_character(), fight, [make_hostile()], encounter_id=ENCOUNTER_ID
            )
