"""Comparison pair selection biased toward least-compared values."""

from __future__ import annotations

import random
from collections.abc import Sequence

import structlog

from value_hierarchy.core.errors import InsufficientRecordsError
from value_hierarchy.models import ValueRecord

logger = structlog.get_logger()

DEFAULT_COVERAGE_THRESHOLD = 3


def candidate_pool(
    records: Sequence[ValueRecord],
    n: int,
    coverage_threshold: int = DEFAULT_COVERAGE_THRESHOLD,
) -> list[ValueRecord]:
    """Choose which values are eligible for the next comparison pairs.

    While some values have fewer than ``coverage_threshold`` comparisons, the
    pool is the cohort sharing the minimum comparison count. When that cohort
    is too small to fill ``n`` pairs it is widened to the ``2 * n`` least
    compared values overall (stable order on ties). Once every value has
    reached the threshold, the whole hierarchy is eligible.

    Args:
        records: All values in the hierarchy.
        n: Number of pairs the caller wants.
        coverage_threshold: Comparison count at which selection stops
            favouring under-compared values.

    Returns:
        New list with the eligible values, in input order.
    """
    if not records:
        return []

    min_count = min(r.comparison_count for r in records)
    if min_count >= coverage_threshold:
        return list(records)

    cohort = [r for r in records if r.comparison_count == min_count]
    if len(cohort) >= 2 * n:
        return cohort

    by_count = sorted(records, key=lambda r: r.comparison_count)
    return by_count[: 2 * n]


def select_pairs(
    records: Sequence[ValueRecord],
    n: int,
    rng: random.Random,
    coverage_threshold: int = DEFAULT_COVERAGE_THRESHOLD,
) -> list[tuple[ValueRecord, ValueRecord]]:
    """Select up to ``n`` disjoint pairs of values to compare.

    The candidate pool (see :func:`candidate_pool`) is shuffled with ``rng``
    and consumed two at a time. No value appears in more than one pair, so the
    result holds ``min(n, len(pool) // 2)`` pairs. Neither the order of pairs
    nor the order inside a pair carries ranking meaning.

    Args:
        records: All values in the hierarchy. Not mutated or reordered.
        n: Maximum number of pairs to return.
        rng: Random source used for the shuffle.
        coverage_threshold: See :func:`candidate_pool`.

    Returns:
        List of (value, value) pairs.

    Raises:
        InsufficientRecordsError: If fewer than two values are available.
        ValueError: If ``n`` is less than 1.
    """
    min_pair_size = 2
    if len(records) < min_pair_size:
        raise InsufficientRecordsError(len(records), min_pair_size)
    if n < 1:
        msg = f"Number of pairs must be at least 1, got {n}"
        raise ValueError(msg)

    pool = candidate_pool(records, n, coverage_threshold)
    rng.shuffle(pool)

    pairs: list[tuple[ValueRecord, ValueRecord]] = []
    for i in range(0, len(pool) - 1, 2):
        if len(pairs) == n:
            break
        pairs.append((pool[i], pool[i + 1]))

    logger.debug(
        "pairs_selected",
        requested=n,
        pool_size=len(pool),
        count=len(pairs),
    )
    return pairs
