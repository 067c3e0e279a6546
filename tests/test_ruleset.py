"""
Tests for options, settings and clamping.
"""

import pytest

from game.palette import EMPTY, PALETTE, active_color_ids, color_for_symbol, symbol_for
from game.ruleset import ConfigurationError, GameOptions, Settings, clamp_number


class TestClampNumber:
    @pytest.mark.parametrize(
        "value,expected",
        [(5, 5), (1, 3), (99, 6), ("4", 4), ("x", 4), (None, 4), (True, 4), (float("inf"), 4), (4.5, 4.5), (10**400, 6), (-(10**400), 3)],
    )
    def test_clamp(self, value, expected):
        assert clamp_number(value, 3, 6, 4) == expected


class TestGameOptions:
    def test_defaults(self):
        assert GameOptions() == GameOptions(code_length=4, palette_size=6, allow_duplicates=True, max_rows=10)

    def test_check_solvable(self):
        GameOptions(code_length=6, palette_size=6, allow_duplicates=False).check_solvable()
        with pytest.raises(ConfigurationError):
            GameOptions(code_length=6, palette_size=5, allow_duplicates=False).check_solvable()

    def test_clamped(self):
        assert GameOptions(code_length=9, palette_size=2, max_rows=3).clamped() == GameOptions(
            code_length=6, palette_size=4, max_rows=6
        )


class TestSettings:
    def test_from_dict_clamps(self):
        settings = Settings.from_dict(
            {
                "options": {"code_length": 10, "palette_size": "5", "allow_duplicates": False, "max_rows": 2},
                "timer_enabled": True,
                "timer_seconds": 5,
            }
        )
        assert settings.options == GameOptions(6, 5, False, 6)
        assert settings.timer_enabled is True
        assert settings.timer_seconds == 60

    def test_from_flat_dict(self):
        settings = Settings.from_dict({"code_length": 5, "timer_enabled": "yes"})
        assert settings.options.code_length == 5
        assert settings.timer_enabled is False

    def test_from_dict_huge_numbers(self):
        settings = Settings.from_dict({"code_length": 10**400, "max_rows": -(10**400), "timer_seconds": 10**400})
        assert settings.options.code_length == 6
        assert settings.options.max_rows == 6
        assert settings.timer_seconds == 1800

    @pytest.mark.parametrize("data", [None, [], "x", 3])
    def test_from_garbage(self, data):
        assert Settings.from_dict(data) == Settings()

    def test_with_overrides(self):
        settings = Settings().with_overrides(code_length=5, allow_duplicates=None, timer_enabled=True, timer_seconds=9999)
        assert settings.options.code_length == 5
        assert settings.options.allow_duplicates is True
        assert settings.timer_enabled is True
        assert settings.timer_seconds == 1800


class TestPalette:
    def test_catalog(self):
        assert len(PALETTE) == 8
        assert len({c.symbol for c in PALETTE}) == 8
        assert active_color_ids(4) == ["red", "blue", "green", "yellow"]

    def test_color_for_symbol(self):
        assert color_for_symbol("r", 6) == "red"
        assert color_for_symbol("2", 6) == "blue"
        assert color_for_symbol("T", 6) is None
        assert color_for_symbol("T", 7) == "teal"
        assert color_for_symbol("9", 8) is None

    def test_symbol_for(self):
        assert symbol_for("pink") == "K"
        assert symbol_for(EMPTY) == "."
        assert EMPTY not in active_color_ids(8)
