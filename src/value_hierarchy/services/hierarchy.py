"""Record management and reporting over a loaded value hierarchy."""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from value_hierarchy.core.errors import RecordNotFoundError
from value_hierarchy.core.slug import SlugGenerator
from value_hierarchy.models import ValueRecord, parse_tags

# Titles shorter than this many words are flagged as too broad.
MIN_SPECIFIC_WORDS = 3
UNTAGGED = "(untagged)"


def word_count(title: str) -> int:
    return len(title.split())


def is_broad_title(title: str) -> bool:
    """Return True when a title is probably too vague to compare usefully."""
    return word_count(title) < MIN_SPECIFIC_WORDS


def create_value(
    title: str,
    now: datetime,
    tags: str | None = None,
    rationale: str | None = None,
    initial_rating: float = 1500.0,
    slugs: SlugGenerator | None = None,
) -> ValueRecord:
    """Build a new, never-compared value record."""
    title = title.strip()
    if not title:
        msg = "Value title cannot be empty"
        raise ValueError(msg)
    slugs = slugs or SlugGenerator()
    return ValueRecord(
        id=slugs.record_id(title, now),
        title=title,
        rating=initial_rating,
        comparison_count=0,
        tags=parse_tags(tags),
        rationale=rationale or "",
        created_at=now,
        updated_at=now,
    )


def find_by_id(records: Sequence[ValueRecord], value_id: str) -> ValueRecord:
    """Return the first record with ``value_id``.

    Raises:
        RecordNotFoundError: If no record has the id.
    """
    for record in records:
        if record.id == value_id:
            return record
    raise RecordNotFoundError(value_id)


def edit_value(
    records: Sequence[ValueRecord],
    value_id: str,
    now: datetime,
    title: str | None = None,
    tags: str | None = None,
    rationale: str | None = None,
) -> ValueRecord:
    """Edit title, tags, or rationale of a record in place.

    ``tags=""`` clears the tags; ``None`` leaves a field unchanged. A blank
    title is rejected with ValueError.
    """
    record = find_by_id(records, value_id)
    if title is not None:
        if not title.strip():
            msg = "Value title cannot be empty"
            raise ValueError(msg)
        record.title = title.strip()
    if tags is not None:
        record.tags = parse_tags(tags)
    if rationale is not None:
        record.rationale = rationale
    record.touch(now)
    return record


def remove_value(records: list[ValueRecord], value_id: str) -> ValueRecord:
    """Remove and return the record with ``value_id``."""
    record = find_by_id(records, value_id)
    records.remove(record)
    return record


def rank_values(
    records: Sequence[ValueRecord],
    tag: str | None = None,
    limit: int | None = None,
) -> list[ValueRecord]:
    """Sort records by rating (highest first), optionally filtered by tag."""
    selected = [r for r in records if tag is None or r.has_tag(tag)]
    ranked = sorted(selected, key=lambda r: r.rating, reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


def group_by_tag(records: Sequence[ValueRecord]) -> dict[str, list[ValueRecord]]:
    """Group ranked records into tag clusters.

    A record with several tags appears in each of its clusters; records with
    no tags land under ``(untagged)``. Clusters are ordered by size, then name.
    """
    groups: dict[str, list[ValueRecord]] = defaultdict(list)
    for record in rank_values(records):
        for tag in record.tags or [UNTAGGED]:
            groups[tag].append(record)
    ordered = sorted(groups.items(), key=lambda item: (-len(item[1]), item[0]))
    return dict(ordered)


def validate_values(records: Sequence[ValueRecord]) -> list[str]:
    """Check a hierarchy for duplicate titles and overly broad values.

    Returns:
        Human-readable issues; empty when the hierarchy looks healthy.
    """
    issues: list[str] = []
    seen: set[str] = set()
    for record in records:
        title = record.title.strip()
        if title in seen:
            issues.append(f"Duplicate title: {title}")
        seen.add(title)
        if is_broad_title(record.title):
            issues.append(f'Value "{record.title}" may be too broad; consider more detail.')
    return issues


@dataclass
class HierarchyStats:
    """Summary of a hierarchy for sharing with the human."""

    total_values: int
    total_comparisons: int
    least_compared: list[str] = field(default_factory=list)
    strongest_tags: list[tuple[str, int]] = field(default_factory=list)
    specificity_score: float = 0.0

    @property
    def insight(self) -> str:
        focus = self.strongest_tags[0][0] if self.strongest_tags else "core values"
        return (
            f"Your hierarchy shows a strong focus on {focus}, with "
            f"{self.total_comparisons} comparisons refining your priorities."
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "totalValues": self.total_values,
            "totalComparisons": self.total_comparisons,
            "leastComparedValues": self.least_compared,
            "strongestTagClusters": [
                {"tag": tag, "count": count} for tag, count in self.strongest_tags
            ],
            "valueSpecificityScore": self.specificity_score,
            "insight": self.insight,
        }


def compute_stats(records: Sequence[ValueRecord], top_tags: int = 5) -> HierarchyStats:
    """Compute totals, coverage, and tag clusters for a hierarchy.

    ``total_comparisons`` is the sum of per-value counts, so each applied
    outcome contributes two.
    """
    if not records:
        return HierarchyStats(total_values=0, total_comparisons=0)

    min_count = min(r.comparison_count for r in records)
    tag_counts = Counter(tag for r in records for tag in r.tags)
    # Counter.most_common keeps first-seen order on ties.
    strongest = tag_counts.most_common(top_tags)
    avg_words = sum(word_count(r.title) for r in records) / len(records)

    return HierarchyStats(
        total_values=len(records),
        total_comparisons=sum(r.comparison_count for r in records),
        least_compared=[r.title for r in records if r.comparison_count == min_count],
        strongest_tags=strongest,
        specificity_score=round(avg_words, 1),
    )
