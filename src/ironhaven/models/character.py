"""Pydantic V2 schemas for player character snapshots.

A ``CharacterSnapshot`` is loaded by the caller before resolution and handed
back, updated, afterwards. Snapshots are frozen: every rule produces a new
snapshot via ``model_copy`` and never mutates the one it was given.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from ironhaven.core.exceptions import ValidationError
from ironhaven.models.enums import APState, CharacterStatus


class CharacterSnapshot(BaseModel):
    """Resource snapshot of one player character.

    Attributes:
        id: Unique character identifier.
        name: Display name.
        hp: Current hit points, within ``[0, hp_max]``.
        hp_max: Maximum hit points.
        mp: Current mana points (carried through untouched by the core).
        mp_max: Maximum mana points.
        ap_current: AP as of ``ap_last_update``, within ``[0, ap_max]``.
        ap_max: Maximum AP.
        ap_debt: Accumulated overspend; halves regeneration while positive.
        ap_last_update: When ``ap_current`` was last stamped.
        status: Lifecycle status.

    Example:
        >>> snap = CharacterSnapshot(
        ...     id="c-1", name="Rook", hp=100, hp_max=100,
        ...     ap_current=3, ap_max=3, ap_last_update=now,
        ... )
        >>> snap.is_alive
        True
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    id: str = Field(min_length=1, description="Unique character ID")
    name: str = Field(min_length=1, max_length=64, description="Display name")
    hp: Annotated[int, Field(ge=0, description="Current hit points")]
    hp_max: Annotated[int, Field(ge=1, description="Maximum hit points")]
    mp: Annotated[int, Field(ge=0, description="Current mana points")] = 0
    mp_max: Annotated[int, Field(ge=0, description="Maximum mana points")] = 0
    ap_current: Annotated[float, Field(ge=0, description="AP at last update")]
    ap_max: Annotated[int, Field(ge=1, description="Maximum AP")]
    ap_debt: Annotated[float, Field(ge=0, description="Accumulated AP debt")] = 0.0
    ap_last_update: datetime = Field(description="When AP was last stamped")
    status: CharacterStatus = Field(default=CharacterStatus.ALIVE)

    @model_validator(mode="after")
    def validate_bounds(self) -> "CharacterSnapshot":
        """Reject snapshots whose pools exceed their maxima."""
        if self.hp > self.hp_max:
            raise ValueError(f"hp ({self.hp}) exceeds hp_max ({self.hp_max})")
        if self.mp > self.mp_max:
            raise ValueError(f"mp ({self.mp}) exceeds mp_max ({self.mp_max})")
        if self.ap_current > self.ap_max:
            raise ValueError(
                f"ap_current ({self.ap_current}) exceeds ap_max ({self.ap_max})"
            )
        return self

    @property
    def is_alive(self) -> bool:
        """Check whether the character can still act."""
        return self.status != CharacterStatus.DEAD

    def with_hp(self, hp: int) -> "CharacterSnapshot":
        """Return a copy with HP clamped to ``[0, hp_max]``.

        Reaching zero marks the character dead.
        """
        clamped = max(0, min(hp, self.hp_max))
        update: dict[str, Any] = {"hp": clamped}
        if clamped == 0:
            update["status"] = CharacterStatus.DEAD
        return self.model_copy(update=update)


class PlayerStateView(BaseModel):
    """Client-facing summary of a character after a resolution.

    AP is reported as the whole points currently available, already
    regenerated to the moment the view was built.
    """

    model_config = ConfigDict(frozen=True)

    hp: int
    hp_max: int
    mp: int
    mp_max: int
    ap: int
    ap_max: int
    ap_state: APState
    status: CharacterStatus


def load_character(document: dict[str, Any]) -> CharacterSnapshot:
    """Validate a persisted character record.

    Args:
        document: Raw mapping loaded from the record store.

    Returns:
        The validated snapshot.

    Raises:
        ValidationError: If the record is malformed.
    """
    try:
        return CharacterSnapshot.model_validate(document)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        raise ValidationError(
            "Malformed character record",
            field_name=".".join(str(p) for p in first["loc"]) or None,
            details={"errors": exc.error_count(), "reason": first["msg"]},
        ) from exc


__all__ = [
    "CharacterSnapshot",
    "PlayerStateView",
    "load_character",
]
