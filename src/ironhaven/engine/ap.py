"""Action-Point economy.

AP regenerates continuously over wall-clock time. Actions are never blocked
on cost alone: overspending clamps AP at zero and books the shortfall as
debt, which halves regeneration until it is repaid by waiting or by time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ironhaven.core.config import APSettings
from ironhaven.core.logging import get_logger
from ironhaven.engine.clock import Clock, SystemClock, current_value
from ironhaven.engine.narrative import ap_state_message, overcommit_message, wait_message
from ironhaven.models import APState, CharacterSnapshot


logger = get_logger(__name__)


@dataclass(frozen=True)
class SpendResult:
    """Outcome of charging an action's AP cost.

    Attributes:
        character: Snapshot with AP charged and the update time stamped.
        debt_added: Shortfall booked as debt (0 when AP covered the cost).
        narrative: Overcommit line, or None when no debt was taken on.
    """

    character: CharacterSnapshot
    debt_added: float
    narrative: str | None

    @property
    def overcommitted(self) -> bool:
        """Check whether the spend went into debt."""
        return self.debt_added > 0


@dataclass(frozen=True)
class WaitResult:
    """Outcome of a wait action."""

    character: CharacterSnapshot
    ap_gained: float
    narrative: str


class APEconomy:
    """Applies AP costs and recovery against the resource clock."""

    def __init__(self, settings: APSettings, clock: Clock | None = None) -> None:
        self._settings = settings
        self._clock = clock or SystemClock()

    @property
    def clock(self) -> Clock:
        return self._clock

    def current_ap(self, character: CharacterSnapshot, *, now: datetime | None = None) -> float:
        """Regenerate the character's AP up to ``now``."""
        return current_value(
            character.ap_current,
            character.ap_last_update,
            character.ap_max,
            character.ap_debt,
            self._settings.regen_rate_per_second,
            now=now or self._clock.now(),
            debt_multiplier=self._settings.debt_regen_multiplier,
        )

    def spend(self, character: CharacterSnapshot, cost: float) -> SpendResult:
        """Charge an AP cost, booking any shortfall as debt.

        Args:
            character: Snapshot before the action.
            cost: AP cost of the action.

        Returns:
            The charged snapshot and the overcommit narrative, if any.
        """
        now = self._clock.now()
        remaining = self.current_ap(character, now=now) - cost

        if remaining < 0:
            debt_added = -remaining
            updated = character.model_copy(
                update={
                    "ap_current": 0.0,
                    "ap_debt": character.ap_debt + debt_added,
                    "ap_last_update": now,
                }
            )
            logger.info(
                "AP overcommitted",
                character_id=character.id,
                cost=cost,
                debt_added=debt_added,
                total_debt=updated.ap_debt,
            )
            return SpendResult(updated, debt_added, overcommit_message(debt_added))

        updated = character.model_copy(
            update={"ap_current": remaining, "ap_last_update": now}
        )
        logger.debug("AP spent", character_id=character.id, cost=cost, remaining=remaining)
        return SpendResult(updated, 0.0, None)

    def wait(self, character: CharacterSnapshot) -> WaitResult:
        """Recover AP and repay debt.

        Adds the wait bonus (capped at ``ap_max``) to the regenerated AP and
        repays a fixed amount of debt, never going below zero.
        """
        now = self._clock.now()
        current = self.current_ap(character, now=now)
        new_ap = min(current + self._settings.wait_ap_bonus, float(character.ap_max))
        new_debt = max(0.0, character.ap_debt - self._settings.debt_reduction_on_wait)
        gained = new_ap - current

        updated = character.model_copy(
            update={"ap_current": new_ap, "ap_debt": new_debt, "ap_last_update": now}
        )
        logger.debug(
            "Waited",
            character_id=character.id,
            ap_gained=gained,
            debt_before=character.ap_debt,
            debt_after=new_debt,
        )
        return WaitResult(updated, gained, wait_message(character.ap_debt, new_debt, gained))

    def state(self, character: CharacterSnapshot) -> APState:
        """Describe the character's AP situation.

        Debt-driven states take precedence over raw zero AP.
        """
        current = self.current_ap(character)
        if character.ap_debt > character.ap_max * self._settings.overextended_ratio:
            return APState.OVEREXTENDED
        if current <= 0:
            return APState.EXHAUSTED
        if character.ap_debt > 0:
            return APState.RECOVERING
        if current == 1:
            return APState.WINDED
        return APState.READY

    def state_narrative(self, character: CharacterSnapshot) -> str:
        """Describe how the character's current AP state feels."""
        return ap_state_message(self.state(character))


__all__ = [
    "APEconomy",
    "SpendResult",
    "WaitResult",
]
