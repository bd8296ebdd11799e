"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        IronhavenError: Base exception for all application errors.
        InvalidActionError: Unknown action type submitted.
        TerminalStateError: A dead character tried to act.
        ConfigurationError: Configuration-related errors.
        ValidationError: Boundary validation errors.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        bound_context: Bind context for one block.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from ironhaven.core.exceptions import (
    CombatError,
    ConfigurationError,
    GameEngineError,
    InvalidActionError,
    InvalidGameStateError,
    IronhavenError,
    OutOfTurnError,
    RateLimitError,
    TerminalStateError,
    TurnManagementError,
    ValidationError,
)
from ironhaven.core.config import (
    APSettings,
    CombatSettings,
    ExplorationSettings,
    RateLimitSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from ironhaven.core.logging import (
    bind_context,
    bound_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "IronhavenError",
    "GameEngineError",
    "InvalidActionError",
    "InvalidGameStateError",
    "TerminalStateError",
    "OutOfTurnError",
    "CombatError",
    "TurnManagementError",
    "RateLimitError",
    "ConfigurationError",
    "ValidationError",
    # Configuration
    "Settings",
    "APSettings",
    "CombatSettings",
    "ExplorationSettings",
    "RateLimitSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "bind_context",
    "bound_context",
    "clear_context",
]
