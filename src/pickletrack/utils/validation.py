"""Validation utilities for Pickle Track.

This module provides reusable validation functions with consistent error handling.
"""

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from pickletrack.constants import MIN_ROUND_ROBIN_TEAMS, TEAM_SIDES
from pickletrack.exceptions import (
    InvalidScoreException,
    InvalidSettingsException,
    InvalidTeamListException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Team Validation ==========


def validate_team_name(name: Optional[str]) -> ValidationResult:
    """Validate a team name.

    Args:
        name: Team name to validate

    Returns:
        ValidationResult with the stripped name
    """
    if not isinstance(name, str) or not name.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Team name cannot be empty",
        )
    return ValidationResult(is_valid=True, sanitized_value=name.strip())


def validate_team_names_strict(names: Optional[Sequence[str]]) -> List[str]:
    """Validate a round-robin team list and return the stripped names.

    The list must hold at least two names; names must be non-blank and
    distinct, ignoring case.

    Raises:
        InvalidTeamListException: If the list is invalid
    """
    if not names or len(names) < MIN_ROUND_ROBIN_TEAMS:
        raise InvalidTeamListException(
            f"At least {MIN_ROUND_ROBIN_TEAMS} teams are required"
        )

    cleaned: List[str] = []
    seen = set()
    for name in names:
        result = validate_team_name(name)
        if not result:
            raise InvalidTeamListException(result.error_message)
        key = result.sanitized_value.casefold()
        if key in seen:
            raise InvalidTeamListException(
                f"Duplicate team name: {result.sanitized_value}"
            )
        seen.add(key)
        cleaned.append(result.sanitized_value)
    return cleaned


# ========== Score Validation ==========


def validate_points(value: Any, field_name: str = "Score") -> ValidationResult:
    """Validate a points total (non-negative integer).

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with the integer value
    """
    # bool is an int subclass; True is not a score
    if isinstance(value, bool) or not isinstance(value, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be an integer: {value!r}",
        )
    if value < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be negative: {value}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_fixture_scores_strict(score1: Any, score2: Any) -> Tuple[int, int]:
    """Validate a final fixture score pair.

    Raises:
        InvalidScoreException: If either score is invalid or the scores are level
    """
    for value, label in ((score1, "Team 1 score"), (score2, "Team 2 score")):
        result = validate_points(value, label)
        if not result:
            raise InvalidScoreException(result.error_message)
    if score1 == score2:
        raise InvalidScoreException(
            f"A fixture cannot finish level ({score1}-{score2})"
        )
    return score1, score2


def validate_team_side(value: Any, field_name: str = "Team") -> ValidationResult:
    """Validate a team side (1 or 2)."""
    if isinstance(value, bool) or value not in TEAM_SIDES:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be 1 or 2: {value!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=int(value))


def validate_team_side_strict(value: Any) -> int:
    """Validate a rally winner and return it.

    Raises:
        InvalidScoreException: If the value is not 1 or 2
    """
    result = validate_team_side(value)
    if not result:
        raise InvalidScoreException(result.error_message)
    return result.sanitized_value


# ========== Settings Validation ==========


def validate_choice(
    value: Any, choices: Iterable[Any], field_name: str = "Value"
) -> ValidationResult:
    """Validate that a value is one of the allowed choices."""
    choices = tuple(choices)
    if value not in choices:
        allowed = ", ".join(str(c) for c in choices)
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be one of {allowed}: {value!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


def validate_positive_integer(
    value: Optional[int], field_name: str = "Value"
) -> ValidationResult:
    """Validate that a value is a positive integer.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if value is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} is required",
        )

    if isinstance(value, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a number",
        )

    try:
        int_value = int(value)
    except (ValueError, TypeError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be a number",
        )
    if int_value <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be positive",
        )
    return ValidationResult(is_valid=True, sanitized_value=int_value)


def raise_for_settings(result: ValidationResult) -> Any:
    """Return the sanitized value or raise InvalidSettingsException."""
    if not result.is_valid:
        raise InvalidSettingsException(result.error_message)
    return result.sanitized_value
