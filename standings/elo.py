"""ELO rating math with rating-dependent k brackets."""

import math
from collections.abc import Iterable

from .models import KBracket


def get_expected_probabilities(rating_a: float, rating_b: float) -> tuple[float, float]:
    """Get expected scores for player A and player B against each other.

    Args:
        rating_a: Rating of player A
        rating_b: Rating of player B

    Returns:
        Tuple of expected scores (0-1) for A and B, summing to 1
    """
    # 1 / (1 + 10 ** (d / 400)) written with tanh so large gaps cannot overflow
    x = (rating_b - rating_a) * math.log(10) / 800
    p_a = 0.5 * (1 - math.tanh(x))
    p_b = 0.5 * (1 + math.tanh(x))
    return p_a, p_b


def scaling_for_rating(rating: float, k_brackets: Iterable[KBracket]) -> float | None:
    """Find the k-factor for a rating.

    The bracket with the highest start that the rating still reaches wins.
    Brackets sharing a start keep their input order, so the later one wins.

    Args:
        rating: Rating to resolve
        k_brackets: Brackets to resolve against, in any order

    Returns:
        k-factor, or None if every bracket starts above the rating
    """
    k = None
    for bracket in sorted(k_brackets, key=lambda bracket: bracket.start):
        if rating < bracket.start:
            break
        k = bracket.k
    return k


def combine_ratings(rating_a: float, rating_b: float) -> float:
    """Combine two ratings into the value used for bracket lookup."""
    return (rating_a + rating_b) / 2


def scaling_for_rating_difference(
    rating_a: float,
    rating_b: float,
    k_brackets: Iterable[KBracket],
) -> float | None:
    """Find the k-factor for a match between two ratings."""
    return scaling_for_rating(combine_ratings(rating_a, rating_b), k_brackets)


def adjust_ratings(
    rating_a: float,
    rating_b: float,
    k: float,
    actual_a: float,
    actual_b: float,
) -> tuple[float, float]:
    """Update both ratings based on a match result.

    Args:
        rating_a: Current rating of player A
        rating_b: Current rating of player B
        k: k-factor for the match
        actual_a: Actual score of player A
        actual_b: Actual score of player B

    Returns:
        Tuple of new ratings for A and B
    """
    expected_a, expected_b = get_expected_probabilities(rating_a, rating_b)
    return (
        rating_a + k * (actual_a - expected_a),
        rating_b + k * (actual_b - expected_b),
    )
