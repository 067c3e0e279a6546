# Color catalog and the empty-slot marker
from dataclasses import dataclass
from enum import Enum


class Slot(Enum):
    """Marker for a guess position that holds no color yet."""

    EMPTY = "empty"

    def __repr__(self):
        return "EMPTY"


EMPTY = Slot.EMPTY


@dataclass(frozen=True)
class PaletteColor:
    """
        One entry of the color catalog.
    Attributes:
        id (str): Identity used in secrets, guesses and snapshots.
        name (str): Display name.
        hex (str): Display color.
        symbol (str): Single character used by the text front end."""

    id: str
    name: str
    hex: str
    symbol: str


PALETTE = (
    PaletteColor("red", "Red", "#ef4444", "R"),
    PaletteColor("blue", "Blue", "#3b82f6", "B"),
    PaletteColor("green", "Green", "#22c55e", "G"),
    PaletteColor("yellow", "Yellow", "#facc15", "Y"),
    PaletteColor("purple", "Purple", "#a855f7", "P"),
    PaletteColor("orange", "Orange", "#f97316", "O"),
    PaletteColor("teal", "Teal", "#14b8a6", "T"),
    PaletteColor("pink", "Pink", "#ec4899", "K"),
)

PALETTE_BY_ID = {color.id: color for color in PALETTE}


def active_colors(palette_size: int) -> tuple:
    """Return the first `palette_size` catalog entries."""
    return PALETTE[:palette_size]


def active_color_ids(palette_size: int) -> list[str]:
    """
    Return the ids usable in a game with the given palette size.
    Args:
        palette_size (int): How many catalog entries are active.
    Returns:
        list[str]: Color ids in catalog order.
    """
    return [color.id for color in active_colors(palette_size)]


def color_for_symbol(symbol: str, palette_size: int) -> str | None:
    """
    Look up the active color id for an input symbol (case-insensitive).
    Also accepts the 1-based palette position as a digit.
    Returns:
        str | None: The color id, or None if nothing active matches.
    """
    symbol = symbol.strip().upper()
    colors = active_colors(palette_size)
    if symbol.isdigit():
        index = int(symbol) - 1
        return colors[index].id if 0 <= index < len(colors) else None
    for color in colors:
        if color.symbol == symbol:
            return color.id
    return None


def symbol_for(value) -> str:
    """Return the display symbol of a color id, '.' for an empty slot."""
    if value is EMPTY:
        return "."
    color = PALETTE_BY_ID.get(value)
    return color.symbol if color else "?"
