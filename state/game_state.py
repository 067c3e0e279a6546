# state/game_state.py
import math

from game.board import GameState, Row, Status
from game.guess import Feedback
from game.palette import EMPTY, active_color_ids
from game.ruleset import GameOptions


def serialize_state(state: GameState) -> dict:
    """
    Return the game record as a plain dictionary, i.e. for json.
    Nothing in the result is shared with the live record.
    Args:
        state (GameState): The record to snapshot.
    Returns:
        dict: options, secret, rows, current_row, edit_index, status and
        timer_remaining. Empty slots become None.
    """
    return {
        "options": state.options.to_dict(),
        "secret": list(state.secret),
        "rows": [
            {
                "guess": [None if slot is EMPTY else slot for slot in row.guess],
                "feedback": (
                    {"blacks": row.feedback.blacks, "whites": row.feedback.whites}
                    if row.feedback is not None
                    else None
                ),
            }
            for row in state.rows
        ],
        "current_row": state.current_row,
        "edit_index": state.edit_index,
        "status": state.status.value,
        "timer_remaining": state.timer_remaining,
    }


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_index(value, high: int, default=0) -> int:
    # Accepts ints, floats and numeric strings; result lies in [0, high]
    if isinstance(value, bool):
        return default
    if _is_int(value):
        return min(max(value, 0), high)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(number):
        return default
    return int(min(max(number, 0), high))


def _merge_options(stored, fallback: GameOptions) -> GameOptions:
    merged = fallback.to_dict()
    if isinstance(stored, dict):
        for key, default in merged.items():
            value = stored.get(key)
            if isinstance(default, bool):
                if isinstance(value, bool):
                    merged[key] = value
            elif _is_int(value):
                merged[key] = value
    return GameOptions(**merged).clamped()


def _hydrate_feedback(raw, code_length: int) -> Feedback | None:
    if not isinstance(raw, dict):
        return None
    blacks, whites = raw.get("blacks"), raw.get("whites")
    if not (_is_int(blacks) and _is_int(whites)):
        return None
    if blacks < 0 or whites < 0 or blacks + whites > code_length:
        return None
    return Feedback(blacks=blacks, whites=whites)


def _hydrate_row(raw, options: GameOptions, allowed) -> Row:
    guess = raw.get("guess") if isinstance(raw, dict) else None
    if not isinstance(guess, list):
        guess = []
    slots = [
        slot if isinstance(slot, str) and slot in allowed else EMPTY
        for slot in guess[: options.code_length]
    ]
    slots += [EMPTY] * (options.code_length - len(slots))
    feedback = raw.get("feedback") if isinstance(raw, dict) else None
    return Row(guess=slots, feedback=_hydrate_feedback(feedback, options.code_length))


def hydrate_state(snapshot, fallback_options: GameOptions) -> GameState | None:
    """
    Rebuild a playing record from a stored snapshot.

    Anything the snapshot gets wrong is repaired: options fall back field by
    field, rows are padded or truncated to the board size, malformed feedback
    is dropped and indexes are clamped. Snapshots that cannot be resumed give
    None: not a dict, a finished game, or a secret that does not fit the
    options.

    Args:
        snapshot: Decoded storage value, any JSON-shaped data.
        fallback_options (GameOptions): Options used for missing fields.
    Returns:
        GameState | None: A valid playing record, or None.
    """
    if not isinstance(snapshot, dict):
        return None
    if snapshot.get("status") != Status.PLAYING.value:
        return None

    options = _merge_options(snapshot.get("options"), fallback_options)
    allowed = set(active_color_ids(options.palette_size))

    secret = snapshot.get("secret")
    if (
        not isinstance(secret, list)
        or len(secret) != options.code_length
        or not all(isinstance(color, str) and color in allowed for color in secret)
    ):
        return None
    # A repeated color under no-duplicates rules can never be guessed
    if not options.allow_duplicates and len(set(secret)) != len(secret):
        return None

    current_row = _parse_index(snapshot.get("current_row"), options.max_rows - 1)

    raw_rows = snapshot.get("rows")
    if not isinstance(raw_rows, list):
        raw_rows = []
    rows = [_hydrate_row(raw, options, allowed) for raw in raw_rows[: options.max_rows]]
    rows += [
        _hydrate_row(None, options, allowed) for _ in range(options.max_rows - len(rows))
    ]
    # Rows from the current one on have not been scored yet
    for row in rows[current_row:]:
        row.feedback = None

    edit_index = snapshot.get("edit_index")
    if not (_is_int(edit_index) and 0 <= edit_index < options.code_length):
        edit_index = None

    timer_remaining = snapshot.get("timer_remaining")
    if isinstance(timer_remaining, float) and math.isfinite(timer_remaining):
        timer_remaining = int(timer_remaining)
    if not (_is_int(timer_remaining) and timer_remaining >= 0):
        timer_remaining = None

    return GameState(
        options=options,
        secret=list(secret),
        rows=rows,
        current_row=current_row,
        status=Status.PLAYING,
        edit_index=edit_index,
        timer_remaining=timer_remaining,
    )
