"""Turn-resolution engine for Ironhaven.

Converts a player's declared action into successor character and
encounter snapshots plus an ordered list of narrated events. Nothing in
this package performs I/O.

Submodules:
    clock: Injectable time source and the resource regeneration clock
    dice: Injectable random source
    ap: Action-Point economy (spend, wait, state)
    turn_manager: Encounter phase and turn-order state machine
    narrative: Tiered message tables
    exploration: Weighted exploration outcomes and hostile spawning
    enemy_turn: Hostile phase resolution
    resolver: Player action dispatch
    ratelimit: Minimum interval between actions
    session: Request-level facade (rate limit, resolve, hostile reply)

Example:
    >>> from ironhaven.engine import TurnEngine, FixedClock, DiceRoller
    >>>
    >>> engine = TurnEngine(clock=FixedClock(now), dice=DiceRoller(seed=42))
    >>> result = engine.submit(intent, character, encounter)
    >>> for event in result.events:
    ...     print(event.message)
"""

from __future__ import annotations

# =============================================================================
# Time and Randomness
# =============================================================================
from ironhaven.engine.clock import (
    Clock,
    FixedClock,
    SystemClock,
    current_value,
)
from ironhaven.engine.dice import (
    DiceRoller,
    RandomSource,
)

# =============================================================================
# AP Economy
# =============================================================================
from ironhaven.engine.ap import (
    APEconomy,
    SpendResult,
    WaitResult,
)

# =============================================================================
# Turn Management
# =============================================================================
from ironhaven.engine.turn_manager import (
    advance,
    create_encounter,
    idle_encounter,
    is_combat_complete,
    is_hostile,
    is_player_turn,
    reset_to_idle,
)

# =============================================================================
# Narrative
# =============================================================================
from ironhaven.engine.narrative import (
    Narrator,
    health_description,
)

# =============================================================================
# Resolvers
# =============================================================================
from ironhaven.engine.exploration import ExplorationRoller
from ironhaven.engine.enemy_turn import EnemyTurnResolver
from ironhaven.engine.resolver import ActionResolver
from ironhaven.engine.ratelimit import RateLimitResult, check_rate_limit
from ironhaven.engine.session import TurnEngine


__all__ = [
    # Time and Randomness
    "Clock",
    "SystemClock",
    "FixedClock",
    "current_value",
    "RandomSource",
    "DiceRoller",
    # AP Economy
    "APEconomy",
    "SpendResult",
    "WaitResult",
    # Turn Management
    "idle_encounter",
    "create_encounter",
    "advance",
    "reset_to_idle",
    "is_player_turn",
    "is_combat_complete",
    "is_hostile",
    # Narrative
    "Narrator",
    "health_description",
    # Resolvers
    "ExplorationRoller",
    "EnemyTurnResolver",
    "ActionResolver",
    "RateLimitResult",
    "check_rate_limit",
    "TurnEngine",
]
