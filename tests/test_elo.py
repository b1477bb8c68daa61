"""Tests for the ELO rating math."""

import pytest

from standings.elo import (
    adjust_ratings,
    combine_ratings,
    get_expected_probabilities,
    scaling_for_rating,
    scaling_for_rating_difference,
)
from standings.models import KBracket


@pytest.fixture
def k_brackets() -> list[KBracket]:
    return [KBracket(start=0, k=10), KBracket(start=1500, k=5)]


class TestGetExpectedProbabilities:
    """Tests for get_expected_probabilities function."""

    def test_equal_ratings(self) -> None:
        """Test that equal ratings give even odds."""
        assert get_expected_probabilities(1200, 1200) == pytest.approx((0.5, 0.5))

    @pytest.mark.parametrize(
        "rating_a,rating_b",
        [
            (1000, 1400),
            (1850.5, 1200.25),
            (-300, 2400),
            (0, 0),
            (0.0, 200000.0),
            (1e300, -1e300),
        ],
    )
    def test_probabilities_sum_to_one(self, rating_a: float, rating_b: float) -> None:
        """Test that both expected scores sum to one."""
        p_a, p_b = get_expected_probabilities(rating_a, rating_b)
        assert p_a + p_b == pytest.approx(1.0)

    def test_higher_rating_is_favoured(self) -> None:
        """Test that a 400 point gap gives ten to one odds."""
        p_a, p_b = get_expected_probabilities(1400, 1000)
        assert p_a == pytest.approx(10 / 11)
        assert p_b == pytest.approx(1 / 11)

    def test_huge_rating_gap(self) -> None:
        """Test that a huge rating gap saturates instead of overflowing."""
        p_a, p_b = get_expected_probabilities(0.0, 200000.0)
        assert p_a == pytest.approx(0.0)
        assert p_b == pytest.approx(1.0)


class TestScalingForRating:
    """Tests for scaling_for_rating function."""

    def test_rating_in_lowest_bracket(self, k_brackets: list[KBracket]) -> None:
        """Test that a rating below the second threshold uses the first bracket."""
        assert scaling_for_rating(1200, k_brackets) == 10

    def test_rating_in_highest_bracket(self, k_brackets: list[KBracket]) -> None:
        """Test that the highest reached threshold wins."""
        assert scaling_for_rating(1600, k_brackets) == 5

    def test_rating_on_threshold(self, k_brackets: list[KBracket]) -> None:
        """Test that a threshold is inclusive."""
        assert scaling_for_rating(1500, k_brackets) == 5

    def test_rating_below_all_brackets(self, k_brackets: list[KBracket]) -> None:
        """Test that no bracket is found below the lowest threshold."""
        assert scaling_for_rating(-5, k_brackets) is None

    def test_unsorted_brackets(self) -> None:
        """Test that bracket order in the input does not matter."""
        brackets = [
            KBracket(start=2000, k=16),
            KBracket(start=0, k=32),
            KBracket(start=1600, k=24),
        ]
        assert scaling_for_rating(100, brackets) == 32
        assert scaling_for_rating(1700, brackets) == 24
        assert scaling_for_rating(2500, brackets) == 16

    def test_no_brackets(self) -> None:
        """Test that an empty bracket list never resolves."""
        assert scaling_for_rating(1000, []) is None

    def test_shared_start_uses_later_bracket(self) -> None:
        """Test that the later of two brackets with the same start wins."""
        brackets = [KBracket(start=0, k=10), KBracket(start=0, k=20)]
        assert scaling_for_rating(100, brackets) == 20


class TestScalingForRatingDifference:
    """Tests for scaling_for_rating_difference function."""

    def test_combine_ratings_is_mean(self) -> None:
        """Test that ratings combine to their mean."""
        assert combine_ratings(1400, 1700) == 1550

    def test_uses_combined_rating(self, k_brackets: list[KBracket]) -> None:
        """Test that the mean rating picks the bracket, not either rating."""
        assert scaling_for_rating_difference(1400, 1700, k_brackets) == 5
        assert scaling_for_rating_difference(1300, 1600, k_brackets) == 10

    def test_combined_rating_below_all_brackets(self) -> None:
        """Test that no bracket is found when the mean is too low."""
        brackets = [KBracket(start=1500, k=5)]
        assert scaling_for_rating_difference(1000, 1000, brackets) is None


class TestAdjustRatings:
    """Tests for adjust_ratings function."""

    def test_even_match(self) -> None:
        """Test a plain win between equal ratings."""
        assert adjust_ratings(1000, 1000, 20, 1, 0) == pytest.approx((1010, 990))

    def test_weighted_win_is_not_zero_sum(self) -> None:
        """Test that a weighted win adds more to the winner than the loser drops."""
        winner, loser = adjust_ratings(1000, 1000, 20, 1.5, 0)
        assert winner == pytest.approx(1020)
        assert loser == pytest.approx(990)

    def test_upset_moves_more_points(self) -> None:
        """Test that beating a stronger opponent gains more than beating a weaker one."""
        upset_winner, _ = adjust_ratings(1000, 1400, 32, 1, 0)
        expected_winner, _ = adjust_ratings(1400, 1000, 32, 1, 0)
        assert upset_winner - 1000 == pytest.approx(32 * 10 / 11)
        assert expected_winner - 1400 == pytest.approx(32 / 11)
