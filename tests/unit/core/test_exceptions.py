"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestIronhavenError:
    """Tests for the base IronhavenError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = IronhavenError("Something broke")
        assert exc.message == "Something broke"
        assert exc.details == {}
        assert str(exc) == "Something broke"

    def test_with_details(self) -> None:
        """Test details are folded into the message."""
        exc = IronhavenError("Bad roll", details={"low": 5, "high": "x"})
        assert "low=5" in str(exc)
        assert "high='x'" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        exc = IronhavenError("Test", details={"x": 1})
        repr_str = repr(exc)
        assert "IronhavenError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestGameEngineExceptions:
    """Tests for game engine exceptions."""

    def test_invalid_action_error(self) -> None:
        """Test InvalidActionError records the action type."""
        exc = InvalidActionError("Unknown action", action_type="dance")
        assert exc.details["action_type"] == "dance"
        assert isinstance(exc, GameEngineError)

    def test_invalid_game_state_error(self) -> None:
        """Test InvalidGameStateError records both states."""
        exc = InvalidGameStateError(
            "Wrong phase",
            current_state="ENEMY_TURN",
            expected_states=["PLAYER_TURN"],
        )
        assert exc.details["current_state"] == "ENEMY_TURN"
        assert exc.details["expected_states"] == ["PLAYER_TURN"]

    @pytest.mark.parametrize("exc_type", [TerminalStateError, OutOfTurnError])
    def test_state_error_subclasses(self, exc_type: type[InvalidGameStateError]) -> None:
        """Test terminal and out-of-turn errors are game state errors."""
        exc = exc_type("Nope", current_state="dead")
        assert isinstance(exc, InvalidGameStateError)
        assert isinstance(exc, IronhavenError)

    def test_combat_error(self) -> None:
        """Test CombatError with combat context."""
        exc = CombatError("Already fighting", combatant_id="c-1", round_number=3)
        assert exc.details["combatant_id"] == "c-1"
        assert exc.details["round_number"] == 3

    def test_combat_error_round_zero(self) -> None:
        """Test round 0 is still recorded."""
        exc = CombatError("Idle", round_number=0)
        assert exc.details["round_number"] == 0

    def test_rate_limit_error_exposes_wait(self) -> None:
        """Test RateLimitError keeps the wait on the instance."""
        exc = RateLimitError("Too fast. Steady yourself.", wait_ms=120)
        assert exc.wait_ms == 120
        assert exc.details["wait_ms"] == 120

    def test_turn_management_inheritance(self) -> None:
        """Test TurnManagementError is a game engine error."""
        assert issubclass(TurnManagementError, GameEngineError)


class TestBoundaryExceptions:
    """Tests for configuration and validation exceptions."""

    def test_configuration_error(self) -> None:
        """Test ConfigurationError with config key."""
        exc = ConfigurationError("Inverted range", config_key="spawn_min")
        assert exc.details["config_key"] == "spawn_min"
        assert not isinstance(exc, GameEngineError)

    def test_validation_error(self) -> None:
        """Test ValidationError with field info."""
        exc = ValidationError("Invalid value", field_name="hp", invalid_value=-5)
        assert exc.details["field_name"] == "hp"
        assert exc.details["invalid_value"] == -5

    def test_raise_from(self) -> None:
        """Test that exceptions can be properly chained."""
        original = ValueError("Original error")

        with pytest.raises(ValidationError) as exc_info:
            try:
                raise original
            except ValueError as e:
                raise ValidationError("Wrapped error") from e

        assert exc_info.value.__cause__ is original
