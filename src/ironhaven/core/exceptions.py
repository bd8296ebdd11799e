"""Custom exception hierarchy for the Ironhaven turn-resolution core.

This module defines the exception hierarchy used across configuration,
boundary validation, and game rules. All exceptions inherit from
IronhavenError, enabling unified error handling at the application
boundary while preserving domain-specific context.

Narrated outcomes (an attack on a vanished target, exploring while hostiles
are present) are not errors and never raise; they are reported as events.

Example:
    >>> from ironhaven.core.exceptions import InvalidActionError
    >>> raise InvalidActionError("Unknown action", action_type="dance")
"""

from __future__ import annotations

from typing import Any


class IronhavenError(Exception):
    """Base exception for all Ironhaven errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(IronhavenError):
    """Base exception for all game engine errors.

    Raised when an action cannot be resolved against the supplied
    character and encounter snapshots.
    """


class InvalidActionError(GameEngineError):
    """Raised when an action type has no resolution rule.

    The caller translates this into a user-facing rejection; no state
    mutation has occurred.
    """

    def __init__(
        self,
        message: str,
        *,
        action_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid action error with the offending type.

        Args:
            message: Human-readable error description.
            action_type: The action type that was rejected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if action_type:
            combined_details["action_type"] = action_type
        super().__init__(message, details=combined_details)


class InvalidGameStateError(GameEngineError):
    """Raised when an action is submitted against a state that forbids it."""

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current invalid state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class TerminalStateError(InvalidGameStateError):
    """Raised when a dead character tries to act.

    Only observation actions (look, status) are resolved for the dead.
    """


class OutOfTurnError(InvalidGameStateError):
    """Raised when a combat action arrives during the hostile phase."""


class CombatError(GameEngineError):
    """Raised when combat resolution encounters an error."""

    def __init__(
        self,
        message: str,
        *,
        combatant_id: str | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            combatant_id: Identifier of the combatant involved.
            round_number: Current combat round when error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if combatant_id:
            combined_details["combatant_id"] = combatant_id
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


class TurnManagementError(GameEngineError):
    """Raised when an encounter cannot be created or advanced."""


class RateLimitError(GameEngineError):
    """Raised when actions arrive faster than the minimum interval."""

    def __init__(
        self,
        message: str,
        *,
        wait_ms: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize rate limit error with retry timing.

        Args:
            message: Human-readable error description.
            wait_ms: Milliseconds the caller should wait before retrying.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if wait_ms is not None:
            combined_details["wait_ms"] = wait_ms
        self.wait_ms = wait_ms
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(IronhavenError):
    """Raised when application configuration is invalid.

    This includes missing cost entries, inverted ranges, or exploration
    weights that do not form a probability table.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(IronhavenError):
    """Raised when data crossing the boundary fails validation.

    Persisted encounter documents and character records are validated on
    load; a malformed document is rejected here rather than trusted.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    # Base exception
    "IronhavenError",
    # Game engine exceptions
    "GameEngineError",
    "InvalidActionError",
    "InvalidGameStateError",
    "TerminalStateError",
    "OutOfTurnError",
    "CombatError",
    "TurnManagementError",
    "RateLimitError",
    # Configuration exceptions
    "ConfigurationError",
    "ValidationError",
]
