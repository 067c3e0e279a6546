# Command-line interface (text-based play)
import logging

from game.board import (
    PlaceOutcome,
    Status,
    clear_row,
    erase_slot,
    forfeit,
    new_game,
    place_color,
    render_board,
    reset_guesses,
    select_slot,
    submit_guess,
)
from game.guess import ValidationErrorKind, is_complete
from game.palette import active_colors, color_for_symbol, symbol_for
from game.secret_code import generate_secret
from state.persistence import (
    JsonStore,
    load_settings,
    load_state,
    load_stats,
    save_settings,
    save_state,
    save_stats,
)

from .timer import CountdownTimer, format_timer

logger = logging.getLogger(__name__)

HELP = """Commands:
  RGBY      place colors by symbol (or palette number) into the current row;
            a full row is submitted
  <         erase the last color (or the picked slot)
  edit N    pick slot N; the next color replaces it
  clear     empty the current row
  new       abandon this game and start another
  giveup    give up and reveal the code
  stats     show statistics
  exit      save and quit"""

ERROR_MESSAGES = {
    ValidationErrorKind.LENGTH_MISMATCH: "The row is not complete.",
    ValidationErrorKind.INVALID_COLOR: "Guess contains an invalid color.",
    ValidationErrorKind.DUPLICATE_COLOR: "Duplicates are not allowed.",
}

PLACE_MESSAGES = {
    PlaceOutcome.DUPLICATE: "That color is already used.",
    PlaceOutcome.ROW_FULL: "Row is full. Use 'edit N' to replace a slot.",
    PlaceOutcome.INVALID_COLOR: "That color is not in play.",
}


class Session:
    """
        Everything the front end keeps between commands: storage, settings,
    statistics, the live game and its timer.
    Attributes:
        store (JsonStore): Key-value storage for game, settings and stats.
        settings (Settings): Options for new games plus timer settings.
        stats (Stats): Results of finished games.
        state (GameState | None): The live game.
        timer (CountdownTimer): Countdown for timed games.
    """

    def __init__(self, store: JsonStore, settings=None, rng=None, timer=None, output=print):
        self.store = store
        self.settings = settings or load_settings(store)
        self.stats = load_stats(store)
        self.rng = rng
        self.timer = timer or CountdownTimer()
        self.output = output
        self.state = None

    def start_new_game(self):
        """Start a game with the current settings and save it."""
        options = self.settings.options
        timer_seconds = (
            self.settings.timer_seconds if self.settings.timer_enabled else None
        )
        if self.state is not None and self.state.options == options:
            # Same board size: reuse the record with fresh rows
            secret = generate_secret(options, rng=self.rng)
            reset_guesses(self.state)
            self.state.secret = secret
            self.state.timer_remaining = timer_seconds
        else:
            self.state = new_game(options, rng=self.rng, timer_seconds=timer_seconds)
        self._start_timer()
        self.save()

    def resume_or_start(self) -> bool:
        """
        Resume the saved game if there is one, otherwise start a new one.
        Returns:
            bool: True if a saved game was resumed.
        """
        self.state = load_state(self.store, self.settings.options)
        if self.state is None:
            self.start_new_game()
            return False
        self._start_timer()
        return True

    def _start_timer(self):
        if self.state.timer_remaining is None:
            self.timer.stop()
        else:
            self.timer.start()

    def save(self):
        save_state(self.store, self.state)

    def save_settings(self):
        save_settings(self.store, self.settings)

    def end_game(self, message: str):
        """Record a finished game, reveal the code and save."""
        self.timer.stop()
        turns = self.state.current_row + 1
        logger.info("Game %s after %d turns", self.state.status.value, turns)
        self.stats.record_result(self.state.status, turns)
        save_stats(self.store, self.stats)
        self.save()
        code = " ".join(symbol_for(color) for color in self.state.secret)
        self.output(f"\n{message} The code was: {code}")

    def check_timer(self) -> bool:
        """Charge elapsed time; returns True if the game just timed out."""
        if self.timer.check(self.state):
            self.end_game("Time's up.")
            return True
        return False

    def place_symbols(self, text: str):
        """Place each symbol of text on the current row, submitting a full row."""
        for symbol in text.replace(" ", "").replace(",", ""):
            color_id = color_for_symbol(symbol, self.state.options.palette_size)
            if color_id is None:
                self.output(f"Unknown color '{symbol}'.")
                return
            outcome = place_color(self.state, color_id)
            if outcome is not PlaceOutcome.PLACED:
                self.output(PLACE_MESSAGES[outcome])
                return
        if is_complete(self.state.current_guess):
            self.submit()

    def submit(self):
        result = submit_guess(self.state)
        if not result.accepted:
            if result.error_kind is not None:
                self.output(ERROR_MESSAGES[result.error_kind])
            return
        if result.status is Status.WON:
            self.end_game("Congratulations, you cracked the code!")
        elif result.status is Status.LOST:
            self.end_game("No more turns.")

    def handle(self, command: str) -> bool:
        """
        Run one command.
        Returns:
            bool: False when the player wants to quit.
        """
        command = command.strip()
        lowered = command.lower()
        if lowered in ("exit", "quit"):
            self.save()
            return False
        if lowered == "help":
            self.output(HELP)
        elif lowered == "stats":
            self.output(self.stats.summary())
        elif lowered == "new":
            self.start_new_game()
        elif self.state.is_over:
            self.output("The game is over. Type 'new' to play again.")
        elif lowered == "giveup":
            if forfeit(self.state):
                self.end_game("You gave up.")
        elif lowered == "clear":
            clear_row(self.state)
        elif lowered == "<":
            erase_slot(self.state)
        elif lowered.startswith("edit"):
            index = lowered[4:].strip()
            if index.isdigit():
                select_slot(self.state, int(index) - 1)
            else:
                self.output("Usage: edit N")
        elif command:
            self.place_symbols(command)
        self.save()
        return True

    def render(self) -> str:
        state = self.state
        colors = ", ".join(
            f"{i}:{c.symbol}={c.name}"
            for i, c in enumerate(active_colors(state.options.palette_size), 1)
        )
        lines = [render_board(state), f"Colors: {colors}"]
        status = f"Row {state.current_row + 1} / {state.options.max_rows}"
        if state.timer_remaining is not None:
            status += f"   Time: {format_timer(state.timer_remaining)}"
        if state.edit_index is not None:
            status += f"   Editing slot {state.edit_index + 1}"
        lines.append(status)
        return "\n".join(lines)


def gameloop(session: Session, input_fn=None, new=False):
    """
    Play until the player quits or input runs out.
    Args:
        session (Session): Storage, settings and stats to play with.
        input_fn (Callable[[str], str]): Reads one command line.
        new (bool): Start a new game even if a saved one exists.
    """
    input_fn = input_fn or input
    out = session.output
    out("=== Mastermind CLI ===")
    out("Type colors as letters (e.g. RGBY). Type 'help' for commands.\n")

    if new:
        session.start_new_game()
    elif session.resume_or_start():
        out("Resumed your saved game.")

    while True:
        out("\n" + session.render())
        try:
            user_input = input_fn("Enter your guess: ")
        except EOFError:
            session.save()
            break

        # Time spent typing counts against the clock
        if not session.state.is_over and session.check_timer():
            out("\n" + session.render())
            continue

        if not session.handle(user_input):
            out("Game saved. Bye.")
            break

    out("\n=== Game Over ===")
