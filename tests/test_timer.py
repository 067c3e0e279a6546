"""
Tests for the countdown timer.
"""

from game.board import Status, submit_guess
from ui.timer import CountdownTimer, format_timer, tick


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


class TestTick:
    def test_no_timer_is_ignored(self, game):
        assert not tick(game, 500)
        assert game.timer_remaining is None
        assert game.status is Status.PLAYING

    def test_counts_down(self, game):
        game.timer_remaining = 10
        assert not tick(game, 3)
        assert game.timer_remaining == 7

    def test_expiry_forfeits_once(self, game):
        game.timer_remaining = 2
        assert tick(game, 5)
        assert game.timer_remaining == 0
        assert game.status is Status.LOST
        assert not tick(game, 1)

    def test_finished_game_not_charged(self, game):
        game.timer_remaining = 30
        submit_guess(game, ["red", "red", "green", "blue"])
        assert not tick(game, 60)
        assert game.timer_remaining == 30
        assert game.status is Status.WON


class TestCountdownTimer:
    def test_charges_elapsed_time(self, game):
        clock = FakeClock()
        timer = CountdownTimer(clock=clock)
        game.timer_remaining = 60
        timer.start()
        clock.now += 12.5
        assert not timer.check(game)
        assert game.timer_remaining == 48

    def test_fractions_carry_over(self, game):
        clock = FakeClock()
        timer = CountdownTimer(clock=clock)
        game.timer_remaining = 60
        timer.start()
        for _ in range(4):
            clock.now += 0.5
            timer.check(game)
        assert game.timer_remaining == 58

    def test_stopped_timer_does_nothing(self, game):
        clock = FakeClock()
        timer = CountdownTimer(clock=clock)
        game.timer_remaining = 5
        clock.now += 100
        assert not timer.running
        assert not timer.check(game)
        assert game.timer_remaining == 5

    def test_runs_out(self, game):
        clock = FakeClock()
        timer = CountdownTimer(clock=clock)
        game.timer_remaining = 5
        timer.start()
        clock.now += 6
        assert timer.check(game)
        assert game.status is Status.LOST


def test_format_timer():
    assert format_timer(None) == "Off"
    assert format_timer(300) == "5:00"
    assert format_timer(61) == "1:01"
    assert format_timer(-4) == "0:00"
