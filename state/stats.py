# state/stats.py
from dataclasses import dataclass, field

from game.board import Status


@dataclass
class Stats:
    """
        Results of every finished game.
    Attributes:
        games (int): Finished games.
        wins (int): Games won.
        losses (int): Games lost, including timeouts and forfeits.
        current_streak (int): Wins in a row up to the last game.
        best_streak (int): Longest streak so far.
        best_turns (int | None): Fewest turns in a won game.
        average_turns (float | None): Running mean of turns over all games.
        history (list[dict]): One {"won", "turns"} entry per game, for plots.
    """

    games: int = 0
    wins: int = 0
    losses: int = 0
    current_streak: int = 0
    best_streak: int = 0
    best_turns: int | None = None
    average_turns: float | None = None
    history: list = field(default_factory=list)

    @property
    def win_rate(self) -> int:
        """Percentage of games won, rounded."""
        return round(self.wins / self.games * 100) if self.games else 0

    def record_result(self, status: Status, turns: int):
        """
        Add one finished game.
        Args:
            status (Status): won or lost.
            turns (int): Rows used, counting the row the game ended on.
        """
        self.games += 1
        if status == Status.WON:
            self.wins += 1
            self.current_streak += 1
            self.best_streak = max(self.best_streak, self.current_streak)
            if self.best_turns is None or turns < self.best_turns:
                self.best_turns = turns
        else:
            self.losses += 1
            self.current_streak = 0

        if self.average_turns is None:
            self.average_turns = float(turns)
        else:
            self.average_turns = (
                self.average_turns * (self.games - 1) + turns
            ) / self.games
        self.history.append({"won": status == Status.WON, "turns": turns})

    @classmethod
    def from_dict(cls, data) -> "Stats":
        # Unreadable or partial records start from zero for the bad fields
        if not isinstance(data, dict):
            return cls()
        stats = cls()
        for name in ("games", "wins", "losses", "current_streak", "best_streak"):
            value = data.get(name)
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                setattr(stats, name, value)
        best_turns = data.get("best_turns")
        if isinstance(best_turns, int) and not isinstance(best_turns, bool):
            stats.best_turns = best_turns
        average = data.get("average_turns")
        if isinstance(average, (int, float)) and not isinstance(average, bool):
            stats.average_turns = float(average)
        history = data.get("history")
        if isinstance(history, list):
            stats.history = [
                {"won": entry["won"], "turns": entry["turns"]}
                for entry in history
                if isinstance(entry, dict)
                and isinstance(entry.get("won"), bool)
                and isinstance(entry.get("turns"), int)
            ]
        return stats

    def summary(self) -> str:
        """Multi-line text summary for the CLI."""
        best = (
            "-"
            if self.best_turns is None
            else f"{self.best_turns} turn{'' if self.best_turns == 1 else 's'}"
        )
        average = "-" if self.average_turns is None else f"{self.average_turns:.1f}"
        return "\n".join(
            [
                f"Games played:   {self.games}",
                f"Wins / losses:  {self.wins} / {self.losses} ({self.win_rate}%)",
                f"Current streak: {self.current_streak}",
                f"Best streak:    {self.best_streak}",
                f"Best game:      {best}",
                f"Average turns:  {average}",
            ]
        )
