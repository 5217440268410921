"""Ranking module for the value hierarchy.

Provides comparison pair selection, outcome parsing, and pluggable rating
policies (fixed delta, Elo).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from value_hierarchy.ranking.base import FixedDeltaPolicy, RatingPolicy
from value_hierarchy.ranking.elo import (
    EloPolicy,
    calculate_expected_win_chance,
    update_elo,
)
from value_hierarchy.ranking.selection import candidate_pool, select_pairs
from value_hierarchy.ranking.update import (
    Outcome,
    apply_outcomes,
    parse_outcome,
    parse_outcomes,
    resolve_title,
)

if TYPE_CHECKING:
    from value_hierarchy.core.config import HierarchyConfig


def create_rating_policy(config: HierarchyConfig) -> RatingPolicy:
    """Create rating policy based on config.

    Args:
        config: Tool configuration.

    Returns:
        Configured rating policy.
    """
    if config.ranking.policy == "elo":
        return EloPolicy(k_factor=config.ranking.k_factor)
    # Default to fixed delta
    return FixedDeltaPolicy(delta=config.ranking.delta)


__all__ = [
    "EloPolicy",
    "FixedDeltaPolicy",
    "Outcome",
    "RatingPolicy",
    "apply_outcomes",
    "calculate_expected_win_chance",
    "candidate_pool",
    "create_rating_policy",
    "parse_outcome",
    "parse_outcomes",
    "resolve_title",
    "select_pairs",
    "update_elo",
]
