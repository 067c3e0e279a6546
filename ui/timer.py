# Countdown timer: a client of the game record, not part of it
import time

from game.board import GameState, forfeit


class CountdownTimer:
    """
        Counts a game's remaining seconds down and forfeits on expiry.

    The text front end blocks on input, so instead of ticking every second
    the timer charges the wall time that passed since the last check. Whole
    seconds go to the game, the fraction is carried to the next check.

    Attributes:
        clock (Callable[[], float]): Monotonic time source, injectable for tests.
    """

    def __init__(self, clock=time.monotonic):
        self.clock = clock
        self._last = None
        self._carry = 0.0

    def start(self):
        self._last = self.clock()
        self._carry = 0.0

    def stop(self):
        self._last = None

    @property
    def running(self) -> bool:
        return self._last is not None

    def check(self, state: GameState) -> bool:
        """
        Charge the time since the last check to the game.
        Returns:
            bool: True if this check ran the clock out and lost the game.
        """
        if not self.running:
            return False
        now = self.clock()
        elapsed = now - self._last + self._carry
        self._last = now
        seconds = int(elapsed)
        self._carry = elapsed - seconds
        return tick(state, seconds)


def tick(state: GameState, seconds: int = 1) -> bool:
    """
    Take seconds off the game's clock; at zero the game is lost.
    Args:
        state (GameState): The live record. Ignored without a timer.
        seconds (int): Whole seconds to take off.
    Returns:
        bool: True if the clock ran out and the game was forfeited.
    """
    if state.timer_remaining is None or state.is_over:
        return False
    state.timer_remaining = max(0, state.timer_remaining - seconds)
    if state.timer_remaining <= 0:
        return forfeit(state)
    return False


def format_timer(seconds: int | None) -> str:
    """Render remaining seconds as M:SS, or 'Off' without a timer."""
    if seconds is None:
        return "Off"
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}:{secs:02d}"
