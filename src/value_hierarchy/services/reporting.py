"""Rendering of rankings, tag clusters, and stats for the CLI."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import datetime
from typing import Any, Literal

import yaml
from tabulate import tabulate

from value_hierarchy.models import ValueRecord
from value_hierarchy.services.hierarchy import HierarchyStats

OutputFormat = Literal["table", "json", "yaml"]


def ranked_rows(records: Sequence[ValueRecord]) -> list[dict[str, Any]]:
    """Convert ranked records into plain dicts with a 1-based rank."""
    return [
        {
            "rank": idx,
            "title": r.title,
            "score": r.rating,
            "comparisonCount": r.comparison_count,
            "tags": r.tag_string,
            "rationale": r.rationale,
            "id": r.id,
            "createdAt": r.created_at.isoformat(),
            "updatedAt": r.updated_at.isoformat(),
        }
        for idx, r in enumerate(records, start=1)
    ]


def _dump(data: Mapping[str, Any], fmt: OutputFormat) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    return yaml.safe_dump(dict(data), sort_keys=False, allow_unicode=True)


def _values_table(records: Sequence[ValueRecord]) -> str:
    rows = [
        [row["rank"], row["title"], f"{row['score']:.1f}", row["comparisonCount"], row["tags"]]
        for row in ranked_rows(records)
    ]
    return tabulate(rows, headers=["#", "Value", "Score", "Comparisons", "Tags"], tablefmt="github")


def render_values(
    kind: str,
    file: str,
    records: Sequence[ValueRecord],
    now: datetime,
    fmt: OutputFormat = "table",
    **meta: Any,
) -> str:
    """Render a ranked list of values.

    Args:
        kind: Document type, e.g. "top-values" or "value-list".
        file: Hierarchy file the values came from.
        records: Records, already ranked.
        now: Render timestamp.
        fmt: "table", "json", or "yaml".
        **meta: Extra header fields (filter, limit, ...).
    """
    if fmt == "table":
        if not records:
            return "No values found."
        return _values_table(records)
    data = {
        "type": kind,
        "file": file,
        **meta,
        "timestamp": now.isoformat(),
        "values": ranked_rows(records),
    }
    return _dump(data, fmt)


def render_hierarchy(
    file: str,
    groups: Mapping[str, Sequence[ValueRecord]],
    ranked: Sequence[ValueRecord],
    now: datetime,
    fmt: OutputFormat = "table",
) -> str:
    """Render the overall ranking followed by tag clusters."""
    if fmt == "table":
        if not ranked:
            return "No values found."
        sections = ["OVERALL RANKING", _values_table(ranked)]
        overall_rank = {id(r): idx for idx, r in enumerate(ranked, start=1)}
        for tag, members in groups.items():
            rows = [[overall_rank[id(r)], r.title, f"{r.rating:.1f}"] for r in members]
            sections.append("")
            sections.append(f"[{tag}] ({len(members)})")
            sections.append(tabulate(rows, headers=["#", "Value", "Score"], tablefmt="github"))
        return "\n".join(sections)

    data = {
        "type": "hierarchy",
        "file": file,
        "timestamp": now.isoformat(),
        "values": ranked_rows(ranked),
        "clusters": {tag: [r.title for r in members] for tag, members in groups.items()},
    }
    return _dump(data, fmt)


def render_stats(
    file: str,
    stats: HierarchyStats,
    now: datetime,
    fmt: OutputFormat = "table",
) -> str:
    """Render hierarchy statistics."""
    if fmt == "table":
        summary = [
            ["Total values", stats.total_values],
            ["Total comparisons", stats.total_comparisons],
            ["Least compared", ", ".join(stats.least_compared) or "-"],
            ["Value specificity score", stats.specificity_score],
        ]
        lines = [tabulate(summary, tablefmt="plain")]
        if stats.strongest_tags:
            lines.append("")
            lines.append(
                tabulate(stats.strongest_tags, headers=["Tag", "Values"], tablefmt="github")
            )
        lines.append("")
        lines.append(stats.insight)
        return "\n".join(lines)

    data = {"type": "stats", "file": file, "timestamp": now.isoformat(), **stats.to_dict()}
    return _dump(data, fmt)


def render_tags(tags: Sequence[str], source: str, now: datetime, fmt: OutputFormat = "table") -> str:
    """Render the master tag list."""
    if fmt == "table":
        return "\n".join([f"Source: {source}", *tags])
    data = {"type": "master-tags", "source": source, "timestamp": now.isoformat(), "tags": list(tags)}
    return _dump(data, fmt)
