# Configuration: code length, palette size, duplicates, rows, timer.
import math
from dataclasses import asdict, dataclass, field, replace

# Bounds enforced by the settings layer
CODE_LENGTH_RANGE = (3, 6)
PALETTE_SIZE_RANGE = (4, 8)
MAX_ROWS_RANGE = (6, 14)
TIMER_SECONDS_RANGE = (60, 1800)


class ConfigurationError(ValueError):
    """Raised before a game starts when no secret can satisfy the options."""


@dataclass(frozen=True)
class GameOptions:
    """
        Rules of one game. Fixed for the lifetime of the game.
    Attributes:
        code_length (int): Number of pegs in the code.
        palette_size (int): How many palette colors are in play.
        allow_duplicates (bool): Can the code contain repeated colors?
        max_rows (int): Number of guesses per game.
    """

    code_length: int = 4
    palette_size: int = 6
    allow_duplicates: bool = True
    max_rows: int = 10

    def check_solvable(self):
        """
        Raise ConfigurationError if no secret exists under these options.
        """
        if not self.allow_duplicates and self.code_length > self.palette_size:
            raise ConfigurationError(
                "No distinct sequence of the requested length exists in the "
                f"palette (code length {self.code_length}, "
                f"palette size {self.palette_size})."
            )

    def clamped(self) -> "GameOptions":
        """Return a copy with every number pulled into its bounds."""
        return Settings.from_dict({"options": self.to_dict()}).options

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_OPTIONS = GameOptions()


def clamp_number(value, low, high, fallback):
    """
    Coerce a stored or typed value into [low, high].
    Args:
        value: Anything; numbers and numeric strings are accepted.
        low (int): Lower bound.
        high (int): Upper bound.
        fallback: Returned when the value is not a finite number.
    Returns:
        The clamped number, or the fallback.
    """
    if isinstance(value, bool):
        return fallback
    # Ints of any size clamp exactly; float() would overflow on huge ones
    if isinstance(value, int):
        return min(max(value, low), high)
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return fallback
    if not math.isfinite(number):
        return fallback
    number = min(max(number, low), high)
    return int(number) if number.is_integer() else number


@dataclass(frozen=True)
class Settings:
    """Everything the settings layer stores: game options plus the timer."""

    options: GameOptions = field(default_factory=GameOptions)
    timer_enabled: bool = False
    timer_seconds: int = 300

    @classmethod
    def from_dict(cls, data) -> "Settings":
        """
        Merge stored settings over the defaults. Unknown keys are ignored,
        bad values fall back to the default for that field.
        """
        if not isinstance(data, dict):
            return cls()
        defaults = DEFAULT_OPTIONS
        # Accept both the nested layout and a flat options dict
        stored = data.get("options", data)
        if not isinstance(stored, dict):
            stored = {}

        allow_duplicates = stored.get("allow_duplicates", defaults.allow_duplicates)
        if not isinstance(allow_duplicates, bool):
            allow_duplicates = defaults.allow_duplicates

        options = GameOptions(
            code_length=int(
                clamp_number(
                    stored.get("code_length"), *CODE_LENGTH_RANGE, defaults.code_length
                )
            ),
            palette_size=int(
                clamp_number(
                    stored.get("palette_size"),
                    *PALETTE_SIZE_RANGE,
                    defaults.palette_size,
                )
            ),
            allow_duplicates=allow_duplicates,
            max_rows=int(
                clamp_number(stored.get("max_rows"), *MAX_ROWS_RANGE, defaults.max_rows)
            ),
        )

        timer_enabled = data.get("timer_enabled", False)
        return cls(
            options=options,
            timer_enabled=timer_enabled if isinstance(timer_enabled, bool) else False,
            timer_seconds=int(
                clamp_number(data.get("timer_seconds"), *TIMER_SECONDS_RANGE, 300)
            ),
        )

    def to_dict(self) -> dict:
        return {
            "options": self.options.to_dict(),
            "timer_enabled": self.timer_enabled,
            "timer_seconds": self.timer_seconds,
        }

    def with_overrides(self, **changes) -> "Settings":
        """
        Return new settings with option fields and/or timer fields replaced.
        None values are ignored so argparse defaults can be passed straight in.
        """
        changes = {k: v for k, v in changes.items() if v is not None}
        option_fields = {k: changes.pop(k) for k in list(changes) if hasattr(self.options, k)}
        options = replace(self.options, **option_fields)
        merged = replace(self, options=options, **changes)
        return Settings.from_dict(merged.to_dict())
