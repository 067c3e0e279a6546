import random
from collections import Counter

from .guess import Feedback
from .palette import active_color_ids
from .ruleset import GameOptions


def generate_secret(options: GameOptions, rng=None) -> list[str]:
    """
    Generate a random secret code according to the options.

    Colors are drawn one at a time, uniformly from the active palette. When
    duplicates are not allowed a draw that is already in the code is thrown
    away and drawn again, which keeps every distinct permutation equally
    likely.

    Args:
        options (GameOptions): Code length, palette size and duplicates rule.
        rng (random.Random, optional): Source of randomness. Defaults to the
        module-level generator.

    Returns:
        list[str]: The secret as color ids.

    Raises:
        ConfigurationError: Duplicates are disallowed and the code is longer
        than the palette.
    """

    options.check_solvable()
    rng = rng or random
    colors = active_color_ids(options.palette_size)

    sequence = []
    while len(sequence) < options.code_length:
        choice = rng.choice(colors)
        if not options.allow_duplicates and choice in sequence:
            continue
        sequence.append(choice)

    return sequence


def score_guess(secret, guess) -> Feedback:
    """
    Compare the secret code with a complete guess and compute
    Mastermind-style feedback.

    Args:
        secret (Sequence[str]): The hidden code.
        guess (Sequence[str]): A guess of the same length without empty slots.

    Returns:
        Feedback: blacks, the pegs with correct color in the correct position,
        and whites, the pegs with correct color in a wrong position.

    Notes:
        Positions counted as black are excluded from white-counting, and each
        color adds at most min(secret leftovers, guess leftovers) whites, so
        no peg is used twice on either side.
    """

    if len(secret) != len(guess):
        raise ValueError(
            f"Secret and guess differ in length ({len(secret)} != {len(guess)})."
        )

    blacks = 0
    remaining_code = Counter()
    remaining_guess = Counter()

    # Count color and position, keep the leftovers
    for code_color, guess_color in zip(secret, guess):
        if code_color == guess_color:
            blacks += 1
        else:
            remaining_code[code_color] += 1
            remaining_guess[guess_color] += 1

    # Count color only
    whites = sum(
        min(count, remaining_code[color]) for color, count in remaining_guess.items()
    )

    return Feedback(blacks=blacks, whites=whites)
