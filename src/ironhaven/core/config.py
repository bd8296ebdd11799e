"""Configuration management for the Ironhaven turn-resolution core.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime overrides. Every tunable rule constant (regeneration rate, action
costs, damage ranges, exploration weights) lives here and is handed to the
resolvers at construction; nothing in the engine reads mutable module state.

Example:
    >>> from ironhaven.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.combat.action_costs["attack"]
    2.0

Environment Variables:
    IRONHAVEN_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    IRONHAVEN_AP_REGEN_RATE_PER_SECOND: AP regenerated per second
    IRONHAVEN_COMBAT_ATTACK_BASE_DAMAGE: Fixed player attack damage
    IRONHAVEN_EXPLORE_AMBUSH: Weight of the ambush exploration outcome
    IRONHAVEN_RATE_LIMIT_MIN_ACTION_INTERVAL_MS: Minimum gap between actions
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ironhaven.core.exceptions import ConfigurationError
from ironhaven.models.enums import ActionType, ExploreOutcome


def _default_action_costs() -> dict[str, float]:
    return {
        ActionType.ATTACK.value: 2.0,
        ActionType.DEFEND.value: 1.0,
        ActionType.WAIT.value: 0.0,
        ActionType.LOOK.value: 0.0,
        ActionType.STATUS.value: 0.0,
        ActionType.EXPLORE.value: 3.0,
        ActionType.INVENTORY.value: 0.0,
        ActionType.USE.value: 0.0,
        ActionType.TALK.value: 0.0,
    }


class APSettings(BaseSettings):
    """Configuration for the Action-Point economy.

    Attributes:
        regen_rate_per_second: AP regenerated per elapsed second.
        wait_ap_bonus: Flat AP granted by the wait action.
        debt_reduction_on_wait: Debt repaid by one wait action.
        debt_regen_multiplier: Regeneration multiplier while in debt.
        overextended_ratio: Debt above ``ap_max * ratio`` is overextended.
    """

    model_config = SettingsConfigDict(
        env_prefix="IRONHAVEN_AP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    regen_rate_per_second: float = Field(
        default=1.0,
        ge=0,
        description="AP regenerated per second",
    )
    wait_ap_bonus: float = Field(
        default=1.0,
        ge=0,
        description="AP granted by the wait action",
    )
    debt_reduction_on_wait: float = Field(
        default=0.5,
        ge=0,
        description="Debt repaid per wait action",
    )
    debt_regen_multiplier: float = Field(
        default=0.5,
        ge=0,
        le=1,
        description="Regeneration multiplier while in debt",
    )
    overextended_ratio: float = Field(
        default=0.5,
        gt=0,
        description="Debt/max ratio above which a character is overextended",
    )


class CombatSettings(BaseSettings):
    """Configuration for action costs and damage rolls.

    Attributes:
        action_costs: AP cost per action type.
        attack_base_damage: Fixed damage dealt by a player attack.
        enemy_damage_min: Lower bound of hostile damage when undefined per enemy.
        enemy_damage_max: Upper bound of hostile damage when undefined per enemy.
        enemy_attack_chance: Probability a hostile attacks instead of hesitating.
        trap_damage_min: Lower bound of trap damage.
        trap_damage_max: Upper bound of trap damage.
        spawn_min: Fewest hostiles spawned by an exploration fight.
        spawn_max: Most hostiles spawned by an exploration fight.
    """

    model_config = SettingsConfigDict(
        env_prefix="IRONHAVEN_COMBAT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    action_costs: dict[str, float] = Field(
        default_factory=_default_action_costs,
        description="AP cost per action type",
    )
    attack_base_damage: int = Field(default=10, ge=0, description="Player attack damage")
    enemy_damage_min: int = Field(default=5, ge=0, description="Minimum hostile damage")
    enemy_damage_max: int = Field(default=15, ge=0, description="Maximum hostile damage")
    enemy_attack_chance: float = Field(
        default=0.8,
        ge=0,
        le=1,
        description="Chance a hostile attacks rather than hesitates",
    )
    trap_damage_min: int = Field(default=5, ge=0, description="Minimum trap damage")
    trap_damage_max: int = Field(default=12, ge=0, description="Maximum trap damage")
    spawn_min: int = Field(default=1, ge=1, description="Fewest hostiles per spawn")
    spawn_max: int = Field(default=2, ge=1, description="Most hostiles per spawn")

    @model_validator(mode="after")
    def validate_ranges(self) -> "CombatSettings":
        """Ensure every range is ordered and every action has a cost.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If a range is inverted or a cost is missing.
        """
        for low, high in (
            ("enemy_damage_min", "enemy_damage_max"),
            ("trap_damage_min", "trap_damage_max"),
            ("spawn_min", "spawn_max"),
        ):
            if getattr(self, low) > getattr(self, high):
                raise ConfigurationError(
                    f"{low} ({getattr(self, low)}) must not exceed "
                    f"{high} ({getattr(self, high)})",
                    config_key=low,
                )

        missing = [a.value for a in ActionType if a.value not in self.action_costs]
        if missing:
            raise ConfigurationError(
                "Action cost table is missing entries",
                config_key="action_costs",
                details={"missing": missing},
            )
        negative = [k for k, v in self.action_costs.items() if v < 0]
        if negative:
            raise ConfigurationError(
                "Action costs must be non-negative",
                config_key="action_costs",
                details={"negative": negative},
            )
        return self

    def cost_of(self, action: ActionType | str) -> float:
        """Get the AP cost of an action type."""
        return self.action_costs[ActionType(action).value]


class ExplorationSettings(BaseSettings):
    """Weights of the exploration outcome table.

    The weights are laid end to end in declaration order over ``[0, 1)``;
    a single uniform draw selects the band it falls in.
    """

    model_config = SettingsConfigDict(
        env_prefix="IRONHAVEN_EXPLORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    zone_change: float = Field(default=0.25, ge=0, le=1)
    nothing: float = Field(default=0.20, ge=0, le=1)
    item: float = Field(default=0.15, ge=0, le=1)
    trap: float = Field(default=0.10, ge=0, le=1)
    encounter: float = Field(default=0.20, ge=0, le=1)
    ambush: float = Field(default=0.10, ge=0, le=1)

    @model_validator(mode="after")
    def validate_total(self) -> "ExplorationSettings":
        """Ensure the weights form a probability table.

        Raises:
            ConfigurationError: If the weights do not sum to 1.
        """
        total = sum(self.weights().values())
        if abs(total - 1.0) > 1e-6:
            raise ConfigurationError(
                f"Exploration weights must sum to 1 (got {total:.4f})",
                config_key="exploration",
            )
        return self

    def weights(self) -> dict[ExploreOutcome, float]:
        """Get the outcome weights in band order."""
        return {outcome: getattr(self, outcome.value) for outcome in ExploreOutcome}

    def thresholds(self) -> list[tuple[ExploreOutcome, float]]:
        """Get each outcome paired with the exclusive upper bound of its band."""
        bands: list[tuple[ExploreOutcome, float]] = []
        cumulative = 0.0
        for outcome, weight in self.weights().items():
            cumulative = round(cumulative + weight, 9)
            bands.append((outcome, cumulative))
        return bands


class RateLimitSettings(BaseSettings):
    """Minimum interval the caller enforces between two actions."""

    model_config = SettingsConfigDict(
        env_prefix="IRONHAVEN_RATE_LIMIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    min_action_interval_ms: int = Field(
        default=300,
        ge=0,
        description="Minimum milliseconds between two actions",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Emit JSON log lines instead of console output.
        ap: Action-Point economy settings.
        combat: Action cost and damage settings.
        exploration: Exploration outcome weights.
        rate_limit: Caller-side rate limit settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="IRONHAVEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Ironhaven", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(default=False, description="Emit JSON logs")

    ap: APSettings = Field(default_factory=APSettings)
    combat: CombatSettings = Field(default_factory=CombatSettings)
    exploration: ExplorationSettings = Field(default_factory=ExplorationSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "APSettings",
    "CombatSettings",
    "ExplorationSettings",
    "RateLimitSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
