"""
Tests for JSON storage of games, settings and statistics.
"""

import json

import pytest

from game.board import Status, forfeit, submit_guess
from game.ruleset import GameOptions, Settings
from state.persistence import (
    SETTINGS_KEY,
    STATE_KEY,
    STATS_KEY,
    JsonStore,
    load_settings,
    load_state,
    load_stats,
    save_settings,
    save_state,
    save_stats,
)
from state.serializer import from_json, to_json
from state.stats import Stats


class TestJsonStore:
    def test_get_missing(self, store):
        assert store.get("nothing") is None

    def test_set_get_remove(self, store):
        store.set("key", "value")
        assert store.path_for("key").name == "key.json"
        assert store.get("key") == "value"
        store.remove("key")
        assert store.get("key") is None
        store.remove("key")


class TestSerializer:
    def test_enums_and_dataclasses(self):
        text = to_json({"status": Status.WON, "options": GameOptions()}, indent=None)
        assert from_json(text) == {
            "status": "won",
            "options": {"code_length": 4, "palette_size": 6, "allow_duplicates": True, "max_rows": 10},
        }

    def test_unknown_type(self):
        with pytest.raises(TypeError):
            to_json({"x": object()})

    def test_invalid_json(self):
        with pytest.raises(json.JSONDecodeError):
            from_json("{nope")


class TestGameStorage:
    def test_save_and_load(self, store, game, options):
        submit_guess(game, ["red", "green", "red", "yellow"])
        save_state(store, game)
        assert load_state(store, options) == game

    def test_nothing_saved(self, store, options):
        assert load_state(store, options) is None

    def test_invalid_json_is_no_game(self, store, options):
        store.set(STATE_KEY, "{not json")
        assert load_state(store, options) is None

    def test_finished_game_not_resumed(self, store, game, options):
        forfeit(game)
        save_state(store, game)
        assert json.loads(store.get(STATE_KEY))["status"] == "lost"
        assert load_state(store, options) is None


class TestSettingsStorage:
    def test_defaults_when_missing(self, store):
        assert load_settings(store) == Settings()

    def test_round_trip(self, store):
        settings = Settings(options=GameOptions(5, 8, False, 12), timer_enabled=True, timer_seconds=600)
        save_settings(store, settings)
        assert load_settings(store) == settings

    def test_corrupt_file(self, store):
        store.set(SETTINGS_KEY, "]]")
        assert load_settings(store) == Settings()

    def test_huge_number_in_file(self, store):
        store.set(SETTINGS_KEY, '{"options": {"palette_size": 9' + "9" * 400 + "}}")
        assert load_settings(store).options.palette_size == 8


class TestStatsStorage:
    def test_round_trip(self, store):
        stats = Stats()
        stats.record_result(Status.WON, 4)
        stats.record_result(Status.LOST, 10)
        save_stats(store, stats)
        assert load_stats(store) == stats

    def test_corrupt_file(self, store):
        store.set(STATS_KEY, "not json")
        assert load_stats(store) == Stats()
