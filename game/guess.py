from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .palette import EMPTY, active_color_ids
from .ruleset import GameOptions


class ValidationErrorKind(Enum):
    """Why a guess was rejected. Checked in declaration order."""

    LENGTH_MISMATCH = "length_mismatch"
    INVALID_COLOR = "invalid_color"
    DUPLICATE_COLOR = "duplicate_color"


@dataclass(frozen=True)
class ValidationResult:
    """
        Outcome of validate_guess.
    Attributes:
        valid (bool): Whether the guess can be scored.
        error_kind (ValidationErrorKind | None): First failed check.
        message (str): Human readable reason, empty when valid."""

    valid: bool
    error_kind: ValidationErrorKind | None = None
    message: str = ""


@dataclass(frozen=True)
class Feedback:
    """
        Peg counts for one scored guess.
    Attributes:
        blacks (int): Correct color in the correct position.
        whites (int): Correct color in a wrong position."""

    blacks: int
    whites: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.blacks, self.whites)


def empty_guess(code_length: int) -> list:
    """Return a guess row with every slot empty."""
    return [EMPTY] * code_length


def is_complete(guess) -> bool:
    """True when no slot of the guess is empty."""
    return all(slot is not EMPTY for slot in guess)


def validate_guess(guess, options: GameOptions) -> ValidationResult:
    """
    Check if the guess follows the rules (length, valid colors, duplicates).
    The first failing check wins; later checks are not run.

    Args:
        guess (Sequence): Candidate color ids, possibly with EMPTY slots.
        options (GameOptions): The rules of the running game.
    Returns:
        ValidationResult: valid=True, or the kind of the first failure.
    """

    def fail(kind: ValidationErrorKind, msg: str) -> ValidationResult:
        return ValidationResult(valid=False, error_kind=kind, message=msg)

    # Length check
    if (
        isinstance(guess, (str, bytes))
        or not isinstance(guess, Sequence)
        or len(guess) != options.code_length
    ):
        got = len(guess) if isinstance(guess, (list, tuple)) else "none"
        return fail(
            ValidationErrorKind.LENGTH_MISMATCH,
            f"Guess must have {options.code_length} slots, but got {got}.",
        )

    # Color check
    allowed = active_color_ids(options.palette_size)
    for color in guess:
        if color is EMPTY:
            return fail(
                ValidationErrorKind.INVALID_COLOR, "Fill every slot before submitting."
            )
        if color not in allowed:
            return fail(
                ValidationErrorKind.INVALID_COLOR,
                f"Invalid color '{color}'. Allowed: {', '.join(allowed)}.",
            )

    # Duplicate check
    if not options.allow_duplicates and len(set(guess)) != len(guess):
        return fail(
            ValidationErrorKind.DUPLICATE_COLOR,
            "Duplicates are not allowed in this game.",
        )

    return ValidationResult(valid=True)
