"""Enumeration types for the Ironhaven turn-resolution core.

These enums give the persisted string values a closed vocabulary; every
snapshot crossing the boundary is validated against them.
"""

from __future__ import annotations

from enum import StrEnum


class CharacterStatus(StrEnum):
    """Lifecycle status of a player character."""

    ALIVE = "alive"
    DEAD = "dead"
    RESTING = "resting"
    IN_COMBAT = "in_combat"


class CombatPhase(StrEnum):
    """Phases of the encounter state machine.

    ``RESOLVING`` is reserved for multi-step resolution and is never
    entered by the current rules.
    """

    IDLE = "IDLE"
    PLAYER_TURN = "PLAYER_TURN"
    ENEMY_TURN = "ENEMY_TURN"
    RESOLVING = "RESOLVING"
    COMPLETE = "COMPLETE"


class EnemyIntent(StrEnum):
    """A hostile actor's declared next behavior (shown by ``look``)."""

    ATTACK = "attack"
    DEFEND = "defend"
    CHARGE = "charge"
    WAIT = "wait"


class ActionType(StrEnum):
    """Actions a player may submit."""

    ATTACK = "attack"
    DEFEND = "defend"
    WAIT = "wait"
    LOOK = "look"
    STATUS = "status"
    EXPLORE = "explore"
    INVENTORY = "inventory"
    USE = "use"
    TALK = "talk"

    @property
    def is_combat_action(self) -> bool:
        """Check whether the action spends the player's combat turn.

        Returns:
            True for attack, defend and wait.
        """
        return self in (ActionType.ATTACK, ActionType.DEFEND, ActionType.WAIT)

    @property
    def is_observation(self) -> bool:
        """Check whether the action only reads state (look, status)."""
        return self in (ActionType.LOOK, ActionType.STATUS)


class EventKind(StrEnum):
    """Channel a game event is narrated on."""

    COMBAT = "combat"
    NARRATIVE = "narrative"
    SYSTEM = "system"
    PLAYER_ACTION = "player_action"
    ENEMY_ACTION = "enemy_action"


class APState(StrEnum):
    """Descriptive Action-Point states derived from the numeric values."""

    EXHAUSTED = "exhausted"
    WINDED = "winded"
    RECOVERING = "recovering"
    READY = "ready"
    OVEREXTENDED = "overextended"


class ExploreOutcome(StrEnum):
    """Outcomes of the exploration table, in band order."""

    ZONE_CHANGE = "zone_change"
    NOTHING = "nothing"
    ITEM = "item"
    TRAP = "trap"
    ENCOUNTER = "encounter"
    AMBUSH = "ambush"

    @property
    def starts_fight(self) -> bool:
        """Check whether the outcome spawns hostiles."""
        return self in (ExploreOutcome.ENCOUNTER, ExploreOutcome.AMBUSH)


class ZoneType(StrEnum):
    """Zone danger classification."""

    SAFE = "safe"
    DANGER = "danger"


__all__ = [
    "CharacterStatus",
    "CombatPhase",
    "EnemyIntent",
    "ActionType",
    "EventKind",
    "APState",
    "ExploreOutcome",
    "ZoneType",
]
