"""Slug and id generation for value records."""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime


class SlugGenerator:
    """Generate lowercase strict slugs and timestamped record ids.

    Ids look like ``20260101093000-daily-walking`` and are derived from the
    UTC creation time plus the slugified title.
    """

    def __init__(self, max_length: int | None = None) -> None:
        """Initialize slug generator.

        Args:
            max_length: Maximum length for generated slugs. Use None to disable truncation.
        """
        self.max_length = max_length

    def slugify(self, value: str) -> str:
        """Generate a URL-safe slug from free text."""
        return self.truncate(self._slugify(value))

    def record_id(self, title: str, now: datetime) -> str:
        """Build a record id from a creation timestamp and a title."""
        return f"{now.strftime('%Y%m%d%H%M%S')}-{self.slugify(title)}"

    def truncate(self, value: str) -> str:
        """Truncate a value to the configured max length."""
        if self.max_length is None:
            return value
        return value[: self.max_length].rstrip("-")

    @staticmethod
    def _slugify(value: str) -> str:
        # Fold accents before stripping so "Café" becomes "cafe" rather than "caf".
        folded = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode()
        return re.sub(r"[^a-z0-9]+", "-", folded.lower()).strip("-")
