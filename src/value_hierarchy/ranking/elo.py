"""Probability-weighted Elo policy for value comparisons."""

from __future__ import annotations


def calculate_expected_win_chance(rating_a: float, rating_b: float) -> float:
    """Chance that a value rated ``rating_a`` is preferred over one rated ``rating_b``.

    A 400 point gap makes the higher value ten times as likely to be chosen;
    equal ratings give 0.5.
    """
    return 1.0 / (1.0 + 10 ** ((rating_b - rating_a) / 400))


def update_elo(
    winner_rating: float,
    loser_rating: float,
    k_factor: float = 20.0,
) -> tuple[float, float]:
    """Update Elo ratings after one value was preferred over another.

    Args:
        winner_rating: Current rating of the preferred value.
        loser_rating: Current rating of the other value.
        k_factor: K-factor for updates.

    Returns:
        Tuple of (new_winner_rating, new_loser_rating).
    """
    expected_winner = calculate_expected_win_chance(winner_rating, loser_rating)
    delta = k_factor * (1.0 - expected_winner)
    # Zero-sum: whatever the winner gains the loser gives up.
    return winner_rating + delta, loser_rating - delta


class EloPolicy:
    """Elo rating policy implementing the RatingPolicy protocol.

    An upset (low-rated value preferred over a high-rated one) moves ratings
    further than an expected result. With two equal ratings each side moves by
    ``k_factor / 2``.

    Attributes:
        k_factor: K-factor for rating adjustments.
    """

    name = "elo"

    def __init__(self, k_factor: float = 20.0) -> None:
        """Initialize Elo policy.

        Args:
            k_factor: K-factor for rating adjustments.
        """
        if k_factor <= 0:
            msg = f"k_factor must be positive, got {k_factor}"
            raise ValueError(msg)
        self.k_factor = k_factor

    def adjust(self, winner_rating: float, loser_rating: float) -> tuple[float, float]:
        """Compute ratings after a single outcome.

        Args:
            winner_rating: Current rating of the preferred value.
            loser_rating: Current rating of the other value.

        Returns:
            Tuple of (new_winner_rating, new_loser_rating).
        """
        return update_elo(winner_rating, loser_rating, k_factor=self.k_factor)
