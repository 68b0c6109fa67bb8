from typing import Optional

from notenrechner.grade_logic import IHK_MAX_POINTS, ScoringMode, uses_scaled_ihk


class InputValidationError(ValueError):
    """Raised when user input must be rejected before grading."""


def validate_input(mode: ScoringMode, points: Optional[int], max_points: Optional[int] = None) -> None:
    if points is None:
        if mode is ScoringMode.IHK:
            raise InputValidationError(f"Please enter points (0-{IHK_MAX_POINTS}).")
        raise InputValidationError("Please enter valid values (points and maximum points > 0).")

    if mode is ScoringMode.IHK and not uses_scaled_ihk(mode, max_points):
        if points < 0 or points > IHK_MAX_POINTS:
            raise InputValidationError(f"IHK: points must be between 0 and {IHK_MAX_POINTS}.")
        return

    if max_points is None or max_points <= 0:
        raise InputValidationError("Please enter valid values (points and maximum points > 0).")
    if points < 0 or points > max_points:
        raise InputValidationError(f"Points must be between 0 and {max_points}.")


def is_valid_input(mode: ScoringMode, points: Optional[int], max_points: Optional[int] = None) -> bool:
    try:
        validate_input(mode, points, max_points)
    except InputValidationError:
        return False
    return True
