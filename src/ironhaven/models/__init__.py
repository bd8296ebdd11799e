"""Pydantic V2 schemas for the Ironhaven turn-resolution core.

Submodules:
    enums: Closed vocabularies (CombatPhase, ActionType, APState, ...)
    character: Character snapshots and the client-facing view
    combat: Encounter state, hostiles, intents, events, resolution results

Example:
    >>> from ironhaven.models import EncounterState, CombatPhase
    >>> EncounterState().phase == CombatPhase.IDLE
    True
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from ironhaven.models.enums import (
    ActionType,
    APState,
    CharacterStatus,
    CombatPhase,
    EnemyIntent,
    EventKind,
    ExploreOutcome,
    ZoneType,
)

# =============================================================================
# Snapshots
# =============================================================================
from ironhaven.models.character import (
    CharacterSnapshot,
    PlayerStateView,
    load_character,
)
from ironhaven.models.combat import (
    ActionIntent,
    DamageRange,
    EncounterState,
    GameEvent,
    HostileActor,
    ResolutionResult,
    dump_encounter,
    load_encounter,
    parse_intent,
)


__all__ = [
    # Enums
    "ActionType",
    "APState",
    "CharacterStatus",
    "CombatPhase",
    "EnemyIntent",
    "EventKind",
    "ExploreOutcome",
    "ZoneType",
    # Character
    "CharacterSnapshot",
    "PlayerStateView",
    "load_character",
    # Combat
    "ActionIntent",
    "DamageRange",
    "EncounterState",
    "GameEvent",
    "HostileActor",
    "ResolutionResult",
    "dump_encounter",
    "load_encounter",
    "parse_intent",
]
