"""Master tag list loading."""

from __future__ import annotations

from pathlib import Path

import structlog

from value_hierarchy.core.errors import ConfigurationError

logger = structlog.get_logger()

FALLBACK_TAGS = [
    "life",
    "reason",
    "purpose",
    "self-esteem",
    "productive-achievement",
    "ethics",
    "politics",
    "epistemology",
    "metaphysics",
    "productivity",
    "goals",
    "career",
    "health",
    "relationships",
    "creativity",
    "habits",
    "learning",
    "philosophy",
    "principles",
    "rationality",
    "happiness",
]


def load_tags(tags_file: Path | None) -> tuple[list[str], str]:
    """Load the master tag list.

    Args:
        tags_file: Text file with one tag per line. Missing or unset files
            fall back to the built-in list.

    Returns:
        Tuple of (tags, source) where source is the file path or "fallback".

    Raises:
        ConfigurationError: If the tag file exists but cannot be read as UTF-8 text.
    """
    if tags_file is not None and tags_file.is_file():
        try:
            lines = tags_file.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Cannot read tag file {tags_file}: {e}",
                "Save the tag file as UTF-8 text with one tag per line.",
            ) from e
        tags = [line.strip() for line in lines if line.strip()]
        logger.debug("tags_loaded", path=str(tags_file), count=len(tags))
        return tags, str(tags_file)

    logger.debug("tags_fallback", path=str(tags_file) if tags_file else None)
    return list(FALLBACK_TAGS), "fallback"
