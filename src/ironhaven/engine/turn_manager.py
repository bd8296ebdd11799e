"""Turn and phase management for encounters.

The encounter state machine::

    IDLE -> PLAYER_TURN <-> ENEMY_TURN -> COMPLETE

Every function here is pure: it takes an ``EncounterState`` and returns a
new one. None of them know why a turn ended; the resolvers decide when to
call them.
"""

from __future__ import annotations

from collections.abc import Sequence

from ironhaven.core.exceptions import TurnManagementError
from ironhaven.core.logging import get_logger
from ironhaven.models import CombatPhase, EncounterState, HostileActor


logger = get_logger(__name__)


def idle_encounter(current_zone: str | None = None) -> EncounterState:
    """Build the state of an instance with no fight in progress."""
    return EncounterState(phase=CombatPhase.IDLE, current_zone=current_zone)


def create_encounter(
    actor_ids: Sequence[str],
    enemies: Sequence[HostileActor],
    *,
    ambush: bool = False,
    current_zone: str | None = None,
) -> EncounterState:
    """Start an encounter.

    The turn order is the players followed by the hostiles and stays fixed
    for the life of the encounter. Players move first unless the encounter
    is an ambush, which hands the opening turn to the hostiles.

    Args:
        actor_ids: Player character ids, in acting order.
        enemies: Hostiles taking part.
        ambush: Whether the hostiles act first.
        current_zone: Zone the encounter takes place in.

    Returns:
        The new encounter state, round 1.

    Raises:
        TurnManagementError: If there are no players or no hostiles, or an
            id appears twice.
    """
    if not actor_ids:
        raise TurnManagementError("Cannot start an encounter without players")
    if not enemies:
        raise TurnManagementError("Cannot start an encounter without hostiles")

    turn_order = [*actor_ids, *(e.id for e in enemies)]
    if len(turn_order) != len(set(turn_order)):
        raise TurnManagementError(
            "Encounter participants must have unique ids",
            details={"turn_order": turn_order},
        )

    state = EncounterState(
        phase=CombatPhase.ENEMY_TURN if ambush else CombatPhase.PLAYER_TURN,
        turn_order=turn_order,
        current_turn_index=0,
        enemies=list(enemies),
        round=1,
        current_zone=current_zone,
    )
    logger.info(
        "Encounter created",
        players=len(actor_ids),
        hostiles=len(enemies),
        ambush=ambush,
        phase=state.phase,
    )
    return state


def advance(state: EncounterState) -> EncounterState:
    """Move to the next turn.

    An encounter without hostiles is complete, whatever phase it was in.
    Otherwise the index steps forward, wrapping to the start of the turn
    order and opening a new round; the phase follows whoever holds the new
    index.

    Raises:
        TurnManagementError: If hostiles are present but there is no turn order.
    """
    if not state.enemies:
        if state.phase != CombatPhase.COMPLETE:
            logger.info("Encounter complete", round=state.round)
        return state.model_copy(update={"phase": CombatPhase.COMPLETE})

    if not state.turn_order:
        raise TurnManagementError("Cannot advance an encounter without a turn order")

    next_index = (state.current_turn_index + 1) % len(state.turn_order)
    next_round = state.round + 1 if next_index == 0 else state.round
    next_phase = (
        CombatPhase.ENEMY_TURN
        if is_hostile(state, state.turn_order[next_index])
        else CombatPhase.PLAYER_TURN
    )
    logger.debug(
        "Turn advanced",
        turn_index=next_index,
        round=next_round,
        phase=next_phase,
    )
    return state.model_copy(
        update={
            "current_turn_index": next_index,
            "round": next_round,
            "phase": next_phase,
        }
    )


def start_next_round(state: EncounterState) -> EncounterState:
    """Hand the turn back to the first player after the hostiles have acted."""
    return state.model_copy(
        update={
            "phase": CombatPhase.PLAYER_TURN,
            "current_turn_index": 0,
            "round": state.round + 1,
        }
    )


def complete(state: EncounterState) -> EncounterState:
    """Force the encounter into its terminal phase."""
    return state.model_copy(update={"phase": CombatPhase.COMPLETE})


def reset_to_idle(state: EncounterState) -> EncounterState:
    """Discard a finished encounter, keeping the zone the party is in."""
    return idle_encounter(state.current_zone)


def is_hostile(state: EncounterState, actor_id: str) -> bool:
    """Check whether an id belongs to a live hostile."""
    return actor_id in state.hostile_ids


def is_player_turn(state: EncounterState, actor_id: str) -> bool:
    """Check whether it is the given player's turn."""
    if state.phase != CombatPhase.PLAYER_TURN:
        return False
    return state.current_actor_id == actor_id


def is_combat_complete(state: EncounterState) -> bool:
    """Check whether the encounter has reached its terminal phase."""
    return state.phase == CombatPhase.COMPLETE


def in_combat(state: EncounterState) -> bool:
    """Check whether a fight is in progress."""
    return state.phase in (
        CombatPhase.PLAYER_TURN,
        CombatPhase.ENEMY_TURN,
        CombatPhase.RESOLVING,
    )


__all__ = [
    "idle_encounter",
    "create_encounter",
    "advance",
    "start_next_round",
    "complete",
    "reset_to_idle",
    "is_hostile",
    "is_player_turn",
    "is_combat_complete",
    "in_combat",
]
