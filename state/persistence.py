# state/persistence.py
import json
import logging
from pathlib import Path

from game.board import GameState
from game.ruleset import GameOptions, Settings

from .game_state import hydrate_state, serialize_state
from .serializer import from_json, to_json
from .stats import Stats

logger = logging.getLogger(__name__)

STATE_KEY = "mastermind-state"
SETTINGS_KEY = "mastermind-settings"
STATS_KEY = "mastermind-stats"


class JsonStore:
    """
    Key-value storage backed by one JSON file per key in a directory.
    Attributes:
        directory (Path): Where the files live. Created on first write.
    """

    def __init__(self, directory="."):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        """Return the raw text stored under key, or None if there is none."""
        path = self.path_for(key)
        if not path.is_file():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set(self, key: str, value: str):
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self.path_for(key), "w", encoding="utf-8") as f:
            f.write(value)

    def remove(self, key: str):
        self.path_for(key).unlink(missing_ok=True)


def _load_json(store: JsonStore, key: str):
    # Missing or undecodable entries both read as None
    text = store.get(key)
    if text is None:
        return None
    try:
        return from_json(text)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring unreadable %s: %s", store.path_for(key), e)
        return None


def save_state(store: JsonStore, game_state: GameState):
    """
    Save the game record under the state key.
    Args:
        store (JsonStore): Where to save.
        game_state (GameState): The record to save.
    """
    store.set(STATE_KEY, to_json(serialize_state(game_state)))


def load_state(store: JsonStore, fallback_options: GameOptions) -> GameState | None:
    """
    Load a resumable game from storage.
    Args:
        store (JsonStore): Where to load from.
        fallback_options (GameOptions): Options for fields the save lacks.
    Returns:
        GameState | None: The hydrated record, or None when there is nothing
        to resume (no save, unreadable save, finished game)."""
    snapshot = _load_json(store, STATE_KEY)
    if snapshot is None:
        return None
    state = hydrate_state(snapshot, fallback_options)
    if state is None:
        logger.debug("Saved game is not resumable, discarding it")
    return state


def save_settings(store: JsonStore, settings: Settings):
    store.set(SETTINGS_KEY, to_json(settings))


def load_settings(store: JsonStore) -> Settings:
    """Load stored settings merged over the defaults."""
    return Settings.from_dict(_load_json(store, SETTINGS_KEY))


def save_stats(store: JsonStore, stats: Stats):
    store.set(STATS_KEY, to_json(stats))


def load_stats(store: JsonStore) -> Stats:
    """Load the statistics record, empty if missing or unreadable."""
    return Stats.from_dict(_load_json(store, STATS_KEY))
