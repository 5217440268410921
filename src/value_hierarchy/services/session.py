"""Comparison session orchestration: load, select or update, persist."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime

import structlog

from value_hierarchy.core.config import HierarchyConfig
from value_hierarchy.models import ValueRecord
from value_hierarchy.prompts import DEFAULT_PERSONALITY, build_interview_protocol
from value_hierarchy.ranking import (
    RatingPolicy,
    apply_outcomes,
    create_rating_policy,
    parse_outcomes,
    select_pairs,
)
from value_hierarchy.services.storage import ValueStore

logger = structlog.get_logger()


@dataclass
class InterviewPlan:
    """Pairs chosen for one interview together with the rendered protocol."""

    pairs: list[tuple[ValueRecord, ValueRecord]]
    protocol: str


class ComparisonSession:
    """Runs the interview/update cycle against one value store.

    Coordinates the store, the pair selector, and the rating updater. The
    store is read before and written after each operation, never during.
    """

    def __init__(
        self,
        config: HierarchyConfig,
        store: ValueStore,
        rng: random.Random | None = None,
        policy: RatingPolicy | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            config: Tool configuration.
            store: Store holding the hierarchy.
            rng: Random source for pairing. Defaults to one seeded from config.
            policy: Rating policy. Defaults to the one named in config.
        """
        self.config = config
        self.store = store
        self.rng = rng or random.Random(config.seed)  # noqa: S311
        self.policy = policy or create_rating_policy(config)

    def prepare_interview(
        self,
        now: datetime,
        num_pairs: int | None = None,
        personality: str = DEFAULT_PERSONALITY,
    ) -> InterviewPlan:
        """Select comparison pairs and render the interview protocol.

        Read-only: the store is not modified.
        """
        records = self.store.load()
        n = num_pairs if num_pairs is not None else self.config.selection.default_pairs
        pairs = select_pairs(
            records,
            n,
            self.rng,
            coverage_threshold=self.config.selection.coverage_threshold,
        )
        logger.info("interview_prepared", path=str(self.store.path), pairs=len(pairs))
        protocol = build_interview_protocol(self.store.path, pairs, now, personality)
        return InterviewPlan(pairs=pairs, protocol=protocol)

    def record_responses(self, responses: str, now: datetime) -> int:
        """Apply ``"A>B,C>D"`` responses and persist the updated hierarchy.

        Nothing is written unless every response parses and resolves.

        Returns:
            Number of outcomes applied.
        """
        outcomes = parse_outcomes(responses)
        records = self.store.load()
        applied = apply_outcomes(records, outcomes, now, self.policy)
        self.store.save(records)
        logger.info("responses_recorded", path=str(self.store.path), count=applied)
        return applied
