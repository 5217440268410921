from datetime import UTC, datetime

from pydantic import BaseModel, Field, field_validator

TAG_SEPARATOR = "|"


def parse_tags(raw: str | None) -> list[str]:
    """Split a pipe-delimited tag string, dropping blanks and duplicates."""
    if not raw:
        return []
    tags: list[str] = []
    for part in raw.split(TAG_SEPARATOR):
        tag = part.strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


class ValueRecord(BaseModel):
    """A single ranked value in a personal hierarchy."""

    id: str
    title: str
    rating: float = 1500.0
    comparison_count: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)
    rationale: str = ""
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("tags", mode="before")
    @classmethod
    def split_tag_string(cls, v: object) -> object:
        if isinstance(v, str):
            return parse_tags(v)
        return v

    @property
    def tag_string(self) -> str:
        """Tags in their stored pipe-delimited form."""
        return TAG_SEPARATOR.join(self.tags)

    def has_tag(self, tag: str) -> bool:
        return tag.strip() in self.tags

    def touch(self, now: datetime) -> None:
        self.updated_at = now
