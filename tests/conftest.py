"""
Pytest fixtures for Mastermind tests.
"""

import random

import pytest

from game.board import GameState, create_initial_state
from game.ruleset import GameOptions
from state.persistence import JsonStore


@pytest.fixture
def options() -> GameOptions:
    """Classic rules: 4 pegs, 6 colors, duplicates allowed, 10 rows."""
    return GameOptions(code_length=4, palette_size=6, allow_duplicates=True, max_rows=10)


@pytest.fixture
def distinct_options() -> GameOptions:
    """4 pegs, 6 colors, duplicates not allowed, 6 rows."""
    return GameOptions(code_length=4, palette_size=6, allow_duplicates=False, max_rows=6)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def game(options) -> GameState:
    """A playing game with a fixed secret."""
    state = create_initial_state(options)
    state.secret = ["red", "red", "green", "blue"]
    return state


@pytest.fixture
def store(tmp_path) -> JsonStore:
    return JsonStore(tmp_path / "saves")
