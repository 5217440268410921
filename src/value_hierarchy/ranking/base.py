"""Base protocol for rating policies."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RatingPolicy(Protocol):
    """Protocol for the rule that moves ratings after one comparison.

    Implementations are pure: they receive the current ratings and return the
    new ones without touching any record.
    """

    name: str

    def adjust(self, winner_rating: float, loser_rating: float) -> tuple[float, float]:
        """Compute ratings after a single outcome.

        Args:
            winner_rating: Current rating of the preferred value.
            loser_rating: Current rating of the other value.

        Returns:
            Tuple of (new_winner_rating, new_loser_rating).
        """
        ...


class FixedDeltaPolicy:
    """Move every outcome by the same amount, regardless of the rating gap.

    This is the default policy: a win is worth ``+delta`` and a loss ``-delta``,
    so equal numbers of wins and losses always cancel out.
    """

    name = "fixed"

    def __init__(self, delta: float = 10.0) -> None:
        if delta <= 0:
            msg = f"delta must be positive, got {delta}"
            raise ValueError(msg)
        self.delta = delta

    def adjust(self, winner_rating: float, loser_rating: float) -> tuple[float, float]:
        return winner_rating + self.delta, loser_rating - self.delta
