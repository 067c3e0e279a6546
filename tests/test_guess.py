"""
Tests for guess validation.
"""

import pytest

from game.guess import ValidationErrorKind, empty_guess, is_complete, validate_guess
from game.palette import EMPTY


class TestValidateGuess:
    """Checks run in order: length, color, duplicates."""

    def test_valid_guess(self, options):
        result = validate_guess(["red", "blue", "green", "yellow"], options)
        assert result.valid
        assert result.error_kind is None

    def test_valid_with_duplicates_allowed(self, options):
        assert validate_guess(["red", "red", "red", "red"], options).valid

    @pytest.mark.parametrize("guess", [[], ["red"], ["red"] * 5])
    def test_length_mismatch(self, options, guess):
        result = validate_guess(guess, options)
        assert not result.valid
        assert result.error_kind is ValidationErrorKind.LENGTH_MISMATCH
        assert result.message

    def test_non_sequence_is_length_mismatch(self, options):
        assert validate_guess(None, options).error_kind is ValidationErrorKind.LENGTH_MISMATCH
        assert validate_guess("rgby", options).error_kind is ValidationErrorKind.LENGTH_MISMATCH

    def test_color_outside_active_palette(self, options):
        """Teal is the 7th color; only 6 are active."""
        result = validate_guess(["red", "blue", "green", "teal"], options)
        assert result.error_kind is ValidationErrorKind.INVALID_COLOR

    def test_unknown_color(self, options):
        result = validate_guess(["red", "blue", "green", "black"], options)
        assert result.error_kind is ValidationErrorKind.INVALID_COLOR

    def test_empty_slot_is_invalid_color(self, options):
        result = validate_guess(["red", EMPTY, "green", "blue"], options)
        assert result.error_kind is ValidationErrorKind.INVALID_COLOR

    def test_duplicate_color(self, distinct_options):
        result = validate_guess(["red", "blue", "red", "green"], distinct_options)
        assert result.error_kind is ValidationErrorKind.DUPLICATE_COLOR

    def test_priority_length_before_color(self, distinct_options):
        result = validate_guess(["black", "black"], distinct_options)
        assert result.error_kind is ValidationErrorKind.LENGTH_MISMATCH

    def test_priority_color_before_duplicate(self, distinct_options):
        result = validate_guess(["red", "red", "teal", "blue"], distinct_options)
        assert result.error_kind is ValidationErrorKind.INVALID_COLOR

    def test_guess_not_mutated(self, distinct_options):
        guess = ["red", "red", "green", "blue"]
        validate_guess(guess, distinct_options)
        assert guess == ["red", "red", "green", "blue"]


class TestGuessHelpers:
    def test_empty_guess(self):
        guess = empty_guess(5)
        assert guess == [EMPTY] * 5
        assert not is_complete(guess)

    def test_is_complete(self):
        assert is_complete(["red", "blue", "green"])
        assert not is_complete(["red", EMPTY, "green"])
