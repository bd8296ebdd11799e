"""Pydantic V2 schemas for encounters, intents, and game events.

The encounter state used to be persisted as an opaque JSON document. Here
it is a strongly typed model with an explicit phase enum, validated on
load so that a malformed document is rejected at the boundary instead of
being trusted by the rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from ironhaven.core.exceptions import InvalidActionError, ValidationError
from ironhaven.models.character import CharacterSnapshot
from ironhaven.models.enums import ActionType, CombatPhase, EnemyIntent, EventKind


class DamageRange(BaseModel):
    """Inclusive integer damage range."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min: Annotated[int, Field(ge=0)]
    max: Annotated[int, Field(ge=0)]

    @model_validator(mode="after")
    def validate_order(self) -> "DamageRange":
        """Reject inverted ranges."""
        if self.min > self.max:
            raise ValueError(f"damage min ({self.min}) exceeds max ({self.max})")
        return self


class HostileActor(BaseModel):
    """A hostile participant in an encounter.

    Hostiles are dropped from the active list the moment their HP reaches
    zero, so a live encounter never holds a corpse.

    Attributes:
        id: Unique identifier within the encounter.
        name: Display name.
        hp: Current hit points.
        hp_max: Maximum hit points.
        ap: Action points (informational; hostiles do not spend AP).
        intent: Declared next behavior, shown by ``look``.
        damage: Damage range from the enemy definition, when known.
        definition_id: Enemy table entry the hostile was spawned from.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Hostile ID")
    name: str = Field(min_length=1, max_length=64, description="Display name")
    hp: Annotated[int, Field(ge=0, description="Current HP")]
    hp_max: Annotated[int, Field(ge=1, description="Maximum HP")]
    ap: Annotated[int, Field(ge=0, description="Action points")] = 0
    intent: EnemyIntent = Field(default=EnemyIntent.ATTACK)
    damage: DamageRange | None = Field(default=None, description="Damage range")
    definition_id: str | None = Field(default=None, description="Enemy table ID")

    @model_validator(mode="after")
    def validate_hp(self) -> "HostileActor":
        """Ensure HP never exceeds its maximum."""
        if self.hp > self.hp_max:
            raise ValueError(f"hostile hp ({self.hp}) exceeds hp_max ({self.hp_max})")
        return self


class EncounterState(BaseModel):
    """State of one encounter's turn machine.

    Attributes:
        phase: Current phase.
        turn_order: Actor ids, players first then hostiles, fixed at creation.
        current_turn_index: Index into ``turn_order``.
        enemies: Live hostiles.
        round: Current round (0 while idle).
        current_zone: Zone id the party is in, if known.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    phase: CombatPhase = Field(default=CombatPhase.IDLE)
    turn_order: list[str] = Field(default_factory=list)
    current_turn_index: Annotated[int, Field(ge=0)] = 0
    enemies: list[HostileActor] = Field(default_factory=list)
    round: Annotated[int, Field(ge=0)] = 0
    current_zone: str | None = Field(default=None)

    @model_validator(mode="after")
    def validate_turn_index(self) -> "EncounterState":
        """Ensure the turn index points into the turn order and ids are unique."""
        if self.turn_order and self.current_turn_index >= len(self.turn_order):
            raise ValueError(
                f"current_turn_index ({self.current_turn_index}) is outside "
                f"turn_order of length {len(self.turn_order)}"
            )
        if not self.turn_order and self.current_turn_index != 0:
            raise ValueError("current_turn_index must be 0 without a turn order")
        ids = [e.id for e in self.enemies]
        if len(ids) != len(set(ids)):
            raise ValueError("hostile ids must be unique")
        return self

    @property
    def has_hostiles(self) -> bool:
        """Check whether any hostile is still standing."""
        return bool(self.enemies)

    @property
    def hostile_ids(self) -> set[str]:
        """Ids of the live hostiles."""
        return {e.id for e in self.enemies}

    @property
    def current_actor_id(self) -> str | None:
        """Id of the actor whose turn it is, if a turn order exists."""
        if not self.turn_order:
            return None
        return self.turn_order[self.current_turn_index]

    def find_enemy(self, enemy_id: str | None) -> HostileActor | None:
        """Look up a live hostile by id."""
        if enemy_id is None:
            return None
        return next((e for e in self.enemies if e.id == enemy_id), None)


class ActionIntent(BaseModel):
    """An action declared by a player."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: ActionType
    actor_id: str = Field(min_length=1)
    encounter_id: str = Field(min_length=1)
    target_id: str | None = None


class GameEvent(BaseModel):
    """One narrated line produced by a resolution.

    The core leaves ``id`` and ``created_at`` empty; the caller stamps them
    when persisting and broadcasting.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    encounter_id: str
    message: str
    kind: EventKind
    actor_id: str | None = None
    id: str | None = None
    created_at: datetime | None = None

    def stamped(self, event_id: str, created_at: datetime) -> "GameEvent":
        """Return a copy carrying the persisted id and timestamp."""
        return self.model_copy(update={"id": event_id, "created_at": created_at})


@dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one request.

    Attributes:
        character: The successor character snapshot.
        encounter: The successor encounter state.
        events: Ordered, unpersisted events.
    """

    character: CharacterSnapshot
    encounter: EncounterState
    events: list[GameEvent] = field(default_factory=list)

    def then(self, other: "ResolutionResult") -> "ResolutionResult":
        """Chain a follow-up resolution, concatenating events."""
        return ResolutionResult(
            character=other.character,
            encounter=other.encounter,
            events=[*self.events, *other.events],
        )


# =============================================================================
# Boundary helpers
# =============================================================================


def _as_validation_error(message: str, exc: PydanticValidationError) -> ValidationError:
    first = exc.errors()[0]
    return ValidationError(
        message,
        field_name=".".join(str(p) for p in first["loc"]) or None,
        details={"errors": exc.error_count(), "reason": first["msg"]},
    )


def load_encounter(document: dict[str, Any] | None) -> EncounterState:
    """Validate a persisted encounter document.

    Args:
        document: Raw mapping from the record store, or None when the
            instance has never held combat.

    Returns:
        The validated state; a fresh IDLE state when ``document`` is None.

    Raises:
        ValidationError: If the document is malformed.
    """
    if document is None:
        return EncounterState()
    try:
        return EncounterState.model_validate(document)
    except PydanticValidationError as exc:
        raise _as_validation_error("Malformed encounter document", exc) from exc


def dump_encounter(state: EncounterState) -> dict[str, Any]:
    """Serialize an encounter state to a JSON-compatible mapping."""
    return state.model_dump(mode="json")


def parse_intent(payload: dict[str, Any]) -> ActionIntent:
    """Validate an incoming action payload.

    Raises:
        InvalidActionError: If the action type is unknown.
        ValidationError: If any other field is malformed.
    """
    action_type = payload.get("type")
    if action_type not in {a.value for a in ActionType}:
        raise InvalidActionError(
            f"Unknown action type. Valid: {', '.join(a.value for a in ActionType)}",
            action_type=str(action_type),
        )
    try:
        return ActionIntent.model_validate(payload)
    except PydanticValidationError as exc:
        raise _as_validation_error("Malformed action intent", exc) from exc


__all__ = [
    "DamageRange",
    "HostileActor",
    "EncounterState",
    "ActionIntent",
    "GameEvent",
    "ResolutionResult",
    "load_encounter",
    "dump_encounter",
    "parse_intent",
]
