"""Tests for interview protocol rendering."""

from datetime import UTC, datetime

from value_hierarchy.models import ValueRecord
from value_hierarchy.prompts import build_interview_protocol, guide_lines, personalities

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def pair(a: str, b: str) -> tuple[ValueRecord, ValueRecord]:
    return ValueRecord(id=a, title=a), ValueRecord(id=b, title=b)


class TestInterviewProtocol:
    def test_default_protocol(self):
        """Test the protocol carries header, file, timestamp, and numbered pairs."""
        text = build_interview_protocol(
            "personal.values.csv",
            [pair("Life", "Health"), pair("Reason", "Purpose")],
            NOW,
        )
        lines = text.splitlines()

        assert lines[0] == "=== VALUE-HIERARCHY INTERVIEW SESSION PREPARED FOR AI AGENT ==="
        assert "Session File: personal.values.csv" in lines
        assert f"Prepared At: {NOW.isoformat()}" in lines
        assert lines[-2:] == ["1. Life vs Health", "2. Reason vs Purpose"]
        assert "update-scores personal.values.csv" in text

    def test_friendly_british(self):
        text = build_interview_protocol("x.values.csv", [], NOW, personality="friendly-british")
        assert text.startswith("=== CHEERS TO YOUR VALUE HIERARCHY SESSION, MATE! ===")

    def test_unknown_personality_falls_back(self):
        text = build_interview_protocol("x.values.csv", [], NOW, personality="pirate")
        assert text.startswith("=== VALUE-HIERARCHY INTERVIEW SESSION")

    def test_sections_present(self):
        text = build_interview_protocol("x.values.csv", [], NOW)
        for heading in (
            "STEP-BY-STEP INTERVIEWING PROTOCOL:",
            "NATURAL-LANGUAGE PHRASE TEMPLATES:",
            "OBJECTIVIST-GROUNDED PROBING QUESTIONS:",
            "COMPARISON PAIRS FOR THIS SESSION:",
        ):
            assert heading in text


def test_personalities_and_guide():
    assert {"default", "friendly-british"} <= set(personalities())
    assert len(guide_lines()) == 4
