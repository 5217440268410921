"""Interview protocol text for the value hierarchy tool.

Loads templates from 'prompts.yaml' in the parent directory.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import yaml

from value_hierarchy.models import ValueRecord

# Using parent.parent because this is in prompts/__init__.py
PROMPTS_PATH = Path(__file__).parent.parent / "prompts.yaml"

DEFAULT_PERSONALITY = "default"


def _load_prompts() -> dict[str, Any]:
    if not PROMPTS_PATH.exists():
        raise FileNotFoundError(f"Missing prompts file: {PROMPTS_PATH}")

    with open(PROMPTS_PATH, encoding="utf-8") as f:
        data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise TypeError(f"Invalid prompts file: {PROMPTS_PATH} (must be dict)")
        return data


# Load on import
_PROMPTS = _load_prompts()


def personalities() -> list[str]:
    """Names of the available interviewer personalities."""
    return list(_PROMPTS["personalities"])


def guide_lines() -> list[str]:
    """Value specificity guidelines."""
    return list(_PROMPTS["guide"])


def build_interview_protocol(
    file: str | Path,
    pairs: Sequence[tuple[ValueRecord, ValueRecord]],
    now: datetime,
    personality: str = DEFAULT_PERSONALITY,
) -> str:
    """Render the interview session text handed to the interviewing agent.

    Unknown personalities fall back to the default one.

    Args:
        file: Hierarchy file the session refers to.
        pairs: Comparison pairs chosen for this session.
        now: Time the session was prepared.
        personality: Interviewer personality name.

    Returns:
        Multi-line protocol text ending with the numbered comparison pairs.
    """
    styles = _PROMPTS["personalities"]
    style = styles.get(personality, styles[DEFAULT_PERSONALITY])

    lines = [
        style["header"],
        f"Session File: {file}",
        f"Prepared At: {now.isoformat()}",
        "",
        "STEP-BY-STEP INTERVIEWING PROTOCOL:",
        style["intro"],
        *_PROMPTS["protocol_steps"],
        style["remind"],
        style["update"].format(file=file),
        "",
        "NATURAL-LANGUAGE PHRASE TEMPLATES:",
        *(f"• {template}" for template in _PROMPTS["phrase_templates"]),
        "",
        "OBJECTIVIST-GROUNDED PROBING QUESTIONS:",
        *(f"• {question}" for question in _PROMPTS["probing_questions"]),
        "",
        "COMPARISON PAIRS FOR THIS SESSION:",
    ]
    lines.extend(f"{idx}. {a.title} vs {b.title}" for idx, (a, b) in enumerate(pairs, start=1))
    return "\n".join(lines)
