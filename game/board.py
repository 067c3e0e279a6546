import logging
from dataclasses import dataclass, field
from enum import Enum

from .guess import (
    Feedback,
    ValidationErrorKind,
    empty_guess,
    validate_guess,
)
from .palette import EMPTY, active_color_ids, symbol_for
from .ruleset import GameOptions
from .secret_code import generate_secret, score_guess

logger = logging.getLogger(__name__)


class Status(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class PlaceOutcome(Enum):
    """Result of tapping a palette color while filling the current row."""

    PLACED = "placed"
    DUPLICATE = "duplicate"
    ROW_FULL = "row_full"
    INVALID_COLOR = "invalid_color"
    FINISHED = "finished"


@dataclass
class Row:
    """One turn: the guess and, once submitted, its feedback."""

    guess: list
    feedback: Feedback | None = None


@dataclass
class GameState:
    """
        The authoritative record of one game.
    Attributes:
        options (GameOptions): Rules, fixed for the game.
        secret (list[str]): The hidden code; empty until assigned.
        rows (list[Row]): Exactly options.max_rows rows.
        current_row (int): Index of the row being filled.
        status (Status): playing, won or lost.
        edit_index (int | None): Slot of the current row picked for overwrite.
        timer_remaining (int | None): Seconds left when the timer is on.
    """

    options: GameOptions
    secret: list = field(default_factory=list)
    rows: list = field(default_factory=list)
    current_row: int = 0
    status: Status = Status.PLAYING
    edit_index: int | None = None
    timer_remaining: int | None = None

    @property
    def is_over(self) -> bool:
        return self.status is not Status.PLAYING

    @property
    def current_guess(self) -> list:
        return self.rows[self.current_row].guess


@dataclass(frozen=True)
class SubmitResult:
    """
        What submit_guess did.
    Attributes:
        accepted (bool): The guess was scored and recorded.
        status (Status): Game status after the call.
        error_kind (ValidationErrorKind | None): Why the guess was rejected.
        feedback (Feedback | None): Pegs for an accepted guess.
        already_finished (bool): The game was over before the call.
        secret (list[str] | None): Revealed once the game is over.
    """

    accepted: bool
    status: Status
    error_kind: ValidationErrorKind | None = None
    feedback: Feedback | None = None
    already_finished: bool = False
    secret: list | None = None


def _empty_rows(options: GameOptions) -> list:
    return [Row(guess=empty_guess(options.code_length)) for _ in range(options.max_rows)]


def create_initial_state(options: GameOptions) -> GameState:
    """Return a fresh playing record with empty rows and no secret yet."""
    return GameState(options=options, rows=_empty_rows(options))


def new_game(options: GameOptions, rng=None, timer_seconds=None) -> GameState:
    """
    Set up a new game: generate a secret code, then the initial record.

    Args:
        options (GameOptions): Rules of the game.
        rng (random.Random, optional): Source of randomness for the secret.
        timer_seconds (int, optional): Countdown budget, None for no timer.
    Returns:
        GameState: A playing record holding the new secret.
    Raises:
        ConfigurationError: No secret exists under the options. No state is
        created in that case.
    """
    secret = generate_secret(options, rng=rng)
    state = create_initial_state(options)
    state.secret = secret
    state.timer_remaining = timer_seconds
    logger.debug("New game started with options %s", options)
    return state


def reset_guesses(state: GameState):
    """
    Clear every row and return to the first row in the playing status.
    The secret is left alone; callers assign a new one when they want it.
    """
    state.rows = _empty_rows(state.options)
    state.current_row = 0
    state.edit_index = None
    state.status = Status.PLAYING


def submit_guess(state: GameState, guess=None) -> SubmitResult:
    """
    Validate, score and record a guess on the current row, then decide the
    next status.

    Args:
        state (GameState): The live record; mutated only on acceptance.
        guess (Sequence[str], optional): The guess to submit. Defaults to
        the guess being filled on the current row.
    Returns:
        SubmitResult: Acceptance, error kind, feedback and the new status.
    """

    if state.is_over:
        return SubmitResult(
            accepted=False,
            status=state.status,
            already_finished=True,
            secret=list(state.secret),
        )

    row = state.rows[state.current_row]
    candidate = row.guess if guess is None else guess

    validation = validate_guess(candidate, state.options)
    if not validation.valid:
        return SubmitResult(
            accepted=False, status=state.status, error_kind=validation.error_kind
        )

    # Calculate feedback and save it on the row
    feedback = score_guess(state.secret, candidate)
    row.guess = list(candidate)
    row.feedback = feedback
    state.edit_index = None

    # Validate win/lose
    if feedback.blacks == state.options.code_length:
        state.status = Status.WON
    elif state.current_row == state.options.max_rows - 1:
        state.status = Status.LOST
    else:
        state.current_row += 1

    if state.is_over:
        logger.debug(
            "Game %s after %d turns", state.status.value, state.current_row + 1
        )
        return SubmitResult(
            accepted=True,
            status=state.status,
            feedback=feedback,
            secret=list(state.secret),
        )
    return SubmitResult(accepted=True, status=state.status, feedback=feedback)


def forfeit(state: GameState) -> bool:
    """
    End a playing game as lost (player gave up or the timer ran out).
    Returns:
        bool: True if the status changed, False if the game was already over.
    """
    if state.is_over:
        return False
    state.status = Status.LOST
    state.edit_index = None
    logger.debug("Game forfeited on row %d", state.current_row + 1)
    return True


def next_fill_index(state: GameState) -> int | None:
    """Return the first empty slot of the current row, or None if full."""
    for index, slot in enumerate(state.current_guess):
        if slot is EMPTY:
            return index
    return None


def set_slot(state: GameState, index: int, value) -> bool:
    """
    Write a color id (or EMPTY) into a slot of the current row.
    Returns:
        bool: False if the game is over or the index is out of range.
    """
    if state.is_over or not 0 <= index < state.options.code_length:
        return False
    state.current_guess[index] = value
    return True


def erase_slot(state: GameState, index: int | None = None) -> bool:
    """
    Empty a slot of the current row. Without an index, the picked slot is
    erased, or else the last filled one (backspace).
    """
    if state.is_over:
        return False
    if index is None:
        if state.edit_index is not None:
            index = state.edit_index
        else:
            fill = next_fill_index(state)
            index = state.options.code_length if fill is None else fill
            index = max(0, index - 1)
    state.edit_index = None
    return set_slot(state, index, EMPTY)


def clear_row(state: GameState):
    """Empty the current row without touching earlier rows."""
    if state.is_over:
        return
    state.rows[state.current_row].guess = empty_guess(state.options.code_length)
    state.edit_index = None


def select_slot(state: GameState, index: int):
    """Pick a slot of the current row for overwrite; picking it again unpicks."""
    if state.is_over or not 0 <= index < state.options.code_length:
        return
    state.edit_index = None if state.edit_index == index else index


def place_color(state: GameState, color_id: str) -> PlaceOutcome:
    """
    Put a color on the current row: into the picked slot if there is one,
    otherwise into the first empty slot.

    Args:
        state (GameState): The live record.
        color_id (str): An active palette color.
    Returns:
        PlaceOutcome: PLACED, or why nothing was written.
    """
    if state.is_over:
        return PlaceOutcome.FINISHED
    if color_id not in active_color_ids(state.options.palette_size):
        return PlaceOutcome.INVALID_COLOR

    guess = state.current_guess
    if not state.options.allow_duplicates and color_id in guess:
        overwriting_same = (
            state.edit_index is not None and guess[state.edit_index] == color_id
        )
        if not overwriting_same:
            return PlaceOutcome.DUPLICATE

    if state.edit_index is not None:
        target = state.edit_index
        state.edit_index = None
    else:
        target = next_fill_index(state)
        if target is None:
            return PlaceOutcome.ROW_FULL

    set_slot(state, target, color_id)
    return PlaceOutcome.PLACED


def render_board(state: GameState, reveal: bool = False) -> str:
    """
    Render a text-based representation of the board (for CLI).
    Black pegs are drawn as 'B', white pegs as 'W'.
    """

    length = state.options.code_length
    guess_width = 2 * length + 1
    peg_width = length + 2
    line = "+" + "-" * guess_width + "+" + "-" * peg_width + "+"

    lines = [line]
    for index, row in enumerate(state.rows):
        cells = " ".join(symbol_for(slot) for slot in row.guess)
        if row.feedback is not None:
            pegs = "B" * row.feedback.blacks + "W" * row.feedback.whites
        else:
            pegs = ""
        marker = ">" if index == state.current_row and not state.is_over else " "
        lines.append(f"|{marker}{cells} | {pegs.ljust(length)} |")
    lines.append(line)

    if reveal or state.is_over:
        code = " ".join(symbol_for(color) for color in state.secret)
        lines.append(f"| {code.ljust(guess_width - 1)}|{'code'.center(peg_width)}|")
        lines.append(line)
    return "\n".join(lines)
