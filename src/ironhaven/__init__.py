"""Ironhaven - turn-resolution core for a text multiplayer encounter game.

Converts a player's action into a new character snapshot, a new encounter
snapshot and a narrated list of events. Persistence, transport and
broadcast belong to the caller.

- AP regenerates over wall-clock time; overspending is allowed and booked as debt
- Encounters alternate player and hostile phases until the hostiles or the player fall
- Time and randomness are always injected, so every outcome is reproducible

Example:
    >>> from ironhaven import TurnEngine, parse_intent, load_character, load_encounter
    >>>
    >>> engine = TurnEngine()
    >>> result = engine.submit(
    ...     parse_intent({"type": "explore", "actor_id": "c-1", "encounter_id": "i-1"}),
    ...     load_character(record),
    ...     load_encounter(instance.combat_state),
    ... )

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas for snapshots, intents, and events.
    content: Static enemy and zone tables.
    engine: AP economy, turn state machine, and resolvers.
"""

from __future__ import annotations

# Core
from ironhaven.core.config import Settings, get_settings
from ironhaven.core.exceptions import IronhavenError
from ironhaven.core.logging import configure_logging, get_logger

# Models
from ironhaven.models import (
    ActionIntent,
    CharacterSnapshot,
    EncounterState,
    GameEvent,
    PlayerStateView,
    ResolutionResult,
    dump_encounter,
    load_character,
    load_encounter,
    parse_intent,
)

# Engine
from ironhaven.engine import ActionResolver, TurnEngine


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "IronhavenError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "ActionIntent",
    "CharacterSnapshot",
    "EncounterState",
    "GameEvent",
    "PlayerStateView",
    "ResolutionResult",
    "load_character",
    "load_encounter",
    "dump_encounter",
    "parse_intent",
    # Engine
    "ActionResolver",
    "TurnEngine",
]
