from __future__ import annotations

import argparse
import logging
import random
import sys

from game.ruleset import ConfigurationError
from state.persistence import JsonStore
from ui.cli import Session, gameloop

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Play Mastermind in the terminal.")
    ap.add_argument("--data-dir", default="saves", help="Where games, settings and stats are stored")
    ap.add_argument("--code-length", type=int, default=None, help="Pegs per code (3-6)")
    ap.add_argument("--palette-size", type=int, default=None, help="Colors in play (4-8)")
    ap.add_argument("--max-rows", type=int, default=None, help="Guesses per game (6-14)")
    dup = ap.add_mutually_exclusive_group()
    dup.add_argument("--duplicates", dest="allow_duplicates", action="store_true", default=None,
                     help="Allow repeated colors in the code")
    dup.add_argument("--no-duplicates", dest="allow_duplicates", action="store_false",
                     help="Every color in the code is different")
    ap.add_argument("--timer", type=int, default=None, metavar="SECONDS",
                    help="Enable a countdown (60-1800 seconds); 0 turns it off")
    ap.add_argument("--new", action="store_true", help="Start a new game instead of resuming")
    ap.add_argument("--seed", type=int, default=None, help="Seed for the secret code")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    store = JsonStore(args.data_dir)
    session = Session(store, rng=random.Random(args.seed) if args.seed is not None else None)

    # Command line flags override stored settings and are remembered
    overrides = dict(
        code_length=args.code_length,
        palette_size=args.palette_size,
        max_rows=args.max_rows,
        allow_duplicates=args.allow_duplicates,
    )
    if args.timer is not None:
        overrides["timer_enabled"] = args.timer > 0
        if args.timer > 0:
            overrides["timer_seconds"] = args.timer
    if any(value is not None for value in overrides.values()):
        session.settings = session.settings.with_overrides(**overrides)
        session.save_settings()

    # A changed board size cannot resume the old save
    new = args.new or any(
        overrides[key] is not None
        for key in ("code_length", "palette_size", "max_rows", "allow_duplicates")
    )
    try:
        gameloop(session, new=new)
    except ConfigurationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        if session.state is not None:
            session.save()
        print("\nGame saved.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
