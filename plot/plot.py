import argparse
import json
from pathlib import Path

import matplotlib

# Non-interactive backend, plots only go to files
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from state.stats import Stats


def _annotate_points(ax, xs, ys, *, fmt="{:.2f}", dx=0, dy=6, fontsize=8):
    """
    Annotate points (x, y) on ax with formatted y values.

    Args:
        ax: matplotlib Axes
        xs: list of x coordinates
        ys: list of y coordinates
        fmt: format string for y values
        dx: x offset in points
        dy: y offset in points
        fontsize: font size for annotations
    """
    for x, y in zip(xs, ys):
        if y is None or (isinstance(y, float) and np.isnan(y)):
            continue
        ax.annotate(
            fmt.format(y),
            (x, y),
            textcoords="offset points",
            xytext=(dx, dy),
            ha="center",
            va="center",
            fontsize=fontsize,
        )


def compute_history_stats(history: list, window: int = 10) -> dict:
    """
    Aggregate a game history.

    Args:
        history: list of {"won": bool, "turns": int}, oldest first
        window: games per rolling win-rate window

    Returns:
      n_games (int)
      n_won (int)
      win_rate (float, np.nan if no games)
      avg_turns / min_turns / max_turns (float, np.nan if no won games), won games only
      turn_counts (dict[int, int]) won games per number of turns
      rolling_win_rate (list[float]) win rate over the last `window` games, per game
    """
    won = np.array([bool(entry["won"]) for entry in history], dtype=bool)
    turns = np.array([int(entry["turns"]) for entry in history], dtype=np.int32)

    n = int(won.size)
    won_turns = turns[won]
    n_won = int(won_turns.size)

    win_rate = float(np.mean(won)) if n > 0 else np.nan
    avg_turns = float(np.mean(won_turns)) if n_won > 0 else np.nan
    min_turns = float(np.min(won_turns)) if n_won > 0 else np.nan
    max_turns = float(np.max(won_turns)) if n_won > 0 else np.nan

    values, counts = np.unique(won_turns, return_counts=True)
    turn_counts = {int(v): int(c) for v, c in zip(values, counts)}

    # win rate over a trailing window, shorter at the start
    cumulative = np.concatenate([[0], np.cumsum(won.astype(np.int32))])
    rolling = []
    for i in range(n):
        start = max(0, i + 1 - window)
        rolling.append(float(cumulative[i + 1] - cumulative[start]) / (i + 1 - start))

    return {
        "n_games": n,
        "n_won": n_won,
        "win_rate": win_rate,
        "avg_turns": avg_turns,
        "min_turns": min_turns,
        "max_turns": max_turns,
        "turn_counts": turn_counts,
        "rolling_win_rate": rolling,
    }


def plot_stats(stats: Stats, outdir, window: int = 10) -> list:
    """
    Draw the turn distribution and the rolling win rate as PNG files.

    Args:
        stats: the statistics record
        outdir: directory for the PNGs, created if missing
        window: games per rolling win-rate window

    Returns:
        list[Path]: written files (empty if there is no history)
    """
    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    summary = compute_history_stats(stats.history, window=window)
    if summary["n_games"] == 0:
        return []

    plt.rcParams["lines.solid_capstyle"] = "round"
    plt.rcParams["lines.solid_joinstyle"] = "round"
    plt.rcParams["lines.linewidth"] = 1.0
    written = []

    # Plot 1: won games per number of turns
    plt.figure(figsize=(10, 6))
    turn_counts = summary["turn_counts"]
    if turn_counts:
        xs = sorted(turn_counts)
        ys = [turn_counts[x] for x in xs]
        plt.bar(xs, ys)
        _annotate_points(plt.gca(), xs, ys, fmt="{:d}", dy=6)
        plt.xticks(xs)
        if not np.isnan(summary["avg_turns"]):
            plt.axvline(summary["avg_turns"], linestyle="--", label=f"Average {summary['avg_turns']:.2f}")
            plt.legend()
    plt.title(f"Turns per Won Game\n Games won: {summary['n_won']} of {summary['n_games']}")
    plt.xlabel("Turns")
    plt.ylabel("Games")
    plt.grid(True, axis="y")
    out1 = outdir / "turns_per_won_game.png"
    plt.savefig(out1, dpi=200, bbox_inches="tight")
    plt.close()
    written.append(out1)

    # Plot 2: rolling win rate
    plt.figure(figsize=(10, 6))
    x = np.arange(1, summary["n_games"] + 1)
    plt.plot(x, np.array(summary["rolling_win_rate"]) * 100, marker="o", markersize=3,
             label=f"Win rate (last {window} games)")
    plt.axhline(summary["win_rate"] * 100, linestyle="--", label=f"Overall {summary['win_rate'] * 100:.0f}%")
    plt.title("Win Rate over Time")
    plt.xlabel("Game")
    plt.ylabel("Win rate (%)")
    plt.ylim(0, 105)
    plt.grid(True)
    plt.legend()
    out2 = outdir / "win_rate.png"
    plt.savefig(out2, dpi=200, bbox_inches="tight")
    plt.close()
    written.append(out2)

    return written


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--file", default="saves/mastermind-stats.json", help="Path to the stats JSON")
    ap.add_argument("--outdir", default="./results", help="Output directory for PNGs")
    ap.add_argument("--window", type=int, default=10, help="Games per rolling win-rate window")
    args = ap.parse_args(argv)

    path = Path(args.file)
    with path.open("r", encoding="utf-8") as f:
        stats = Stats.from_dict(json.load(f))

    print(stats.summary())
    written = plot_stats(stats, args.outdir, window=args.window)
    if not written:
        print("[info] No finished games to plot.")
    for out in written:
        print(f"[saved] {out}")


if __name__ == "__main__":
    main()
