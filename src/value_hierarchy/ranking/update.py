"""Rating updates from pairwise comparison outcomes."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

import structlog

from value_hierarchy.core.errors import (
    AmbiguousValueError,
    MalformedOutcomeError,
    UnknownValueError,
)
from value_hierarchy.models import ValueRecord
from value_hierarchy.ranking.base import FixedDeltaPolicy, RatingPolicy

logger = structlog.get_logger()

OUTCOME_SEPARATOR = ","
WINNER_SEPARATOR = ">"


@dataclass(frozen=True)
class Outcome:
    """One human judgment: ``winner`` was preferred over ``loser`` (by title)."""

    winner: str
    loser: str

    def __str__(self) -> str:
        return f"{self.winner}{WINNER_SEPARATOR}{self.loser}"


def parse_outcome(raw: str) -> Outcome:
    """Parse a single ``"Winner>Loser"`` response.

    Raises:
        MalformedOutcomeError: If the text does not hold exactly two non-empty titles.
    """
    parts = raw.split(WINNER_SEPARATOR)
    if len(parts) != 2:
        raise MalformedOutcomeError(raw)
    winner, loser = (part.strip() for part in parts)
    if not winner or not loser:
        raise MalformedOutcomeError(raw)
    return Outcome(winner=winner, loser=loser)


def parse_outcomes(raw: str) -> list[Outcome]:
    """Parse a comma-separated batch like ``"Life>Health,Reason>Purpose"``.

    Raises:
        MalformedOutcomeError: If the batch is empty or any entry is malformed.
    """
    if not raw or not raw.strip():
        raise MalformedOutcomeError(raw, "Provide at least one 'Winner>Loser' response.")
    return [parse_outcome(entry) for entry in raw.split(OUTCOME_SEPARATOR)]


def resolve_title(records: Sequence[ValueRecord], title: str) -> ValueRecord:
    """Find the single record whose title matches exactly (after trimming).

    Raises:
        UnknownValueError: If no record has the title.
        AmbiguousValueError: If several records share the title.
    """
    wanted = title.strip()
    matches = [r for r in records if r.title.strip() == wanted]
    if not matches:
        raise UnknownValueError(wanted)
    if len(matches) > 1:
        raise AmbiguousValueError(wanted, len(matches))
    return matches[0]


def apply_outcomes(
    records: Sequence[ValueRecord],
    outcomes: Sequence[Outcome],
    now: datetime,
    policy: RatingPolicy | None = None,
) -> int:
    """Apply a batch of comparison outcomes to the records in place.

    Outcomes are applied in order, so with a non-fixed policy later outcomes
    see the ratings produced by earlier ones. The batch is all-or-nothing:
    every outcome is resolved and computed on scratch state first, and the
    records are only mutated once the whole batch is known to be valid.

    Args:
        records: The hierarchy to update.
        outcomes: Winner/loser title pairs.
        now: Timestamp written to ``updated_at`` of every touched record.
        policy: Rating policy; defaults to a fixed +/-10 adjustment.

    Returns:
        Number of outcomes applied.

    Raises:
        UnknownValueError: If a title does not resolve to exactly one record.
        MalformedOutcomeError: If an outcome compares a value with itself.
    """
    policy = policy or FixedDeltaPolicy()

    # Scratch state keyed by object identity; record ids are not guaranteed unique.
    pending: dict[int, tuple[ValueRecord, float, int]] = {}

    def _current(record: ValueRecord) -> tuple[float, int]:
        entry = pending.get(id(record))
        if entry is None:
            return record.rating, record.comparison_count
        return entry[1], entry[2]

    for outcome in outcomes:
        winner = resolve_title(records, outcome.winner)
        loser = resolve_title(records, outcome.loser)
        if winner is loser:
            raise MalformedOutcomeError(
                str(outcome), "A value cannot be compared with itself."
            )

        winner_rating, winner_count = _current(winner)
        loser_rating, loser_count = _current(loser)
        new_winner, new_loser = policy.adjust(winner_rating, loser_rating)
        pending[id(winner)] = (winner, new_winner, winner_count + 1)
        pending[id(loser)] = (loser, new_loser, loser_count + 1)

    for record, rating, count in pending.values():
        record.rating = rating
        record.comparison_count = count
        record.touch(now)

    logger.info(
        "outcomes_applied",
        count=len(outcomes),
        values_touched=len(pending),
        policy=policy.name,
    )
    return len(outcomes)
