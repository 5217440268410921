"""Configuration schemas and loading for the value hierarchy tool."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import pydantic
import yaml
from pydantic import BaseModel, Field

from value_hierarchy.core.errors import ValidationError

DEFAULT_TAGS_FILE = Path("~/objectivist-lattice/tags.txt")


class RankingConfig(BaseModel):
    """Rating update configuration.

    Attributes:
        initial_rating: Rating assigned to newly added values.
        policy: How a single outcome moves ratings:
            - "fixed": winner gains ``delta``, loser loses ``delta``.
            - "elo": expected-score update scaled by ``k_factor``.
        delta: Fixed adjustment per outcome.
        k_factor: Elo K-factor. The default of 20 moves an even match by 10.
    """

    initial_rating: float = 1500.0
    policy: Literal["fixed", "elo"] = "fixed"
    delta: float = Field(default=10.0, gt=0)
    k_factor: float = Field(default=20.0, gt=0)


class SelectionConfig(BaseModel):
    """Pair selection configuration.

    Attributes:
        coverage_threshold: Once every value has at least this many comparisons,
            pairs are drawn from the whole hierarchy instead of the
            least-compared cohort.
        default_pairs: Number of pairs an interview asks for by default.
    """

    coverage_threshold: int = Field(default=3, ge=0)
    default_pairs: int = Field(default=5, ge=1)


class HierarchyConfig(BaseModel):
    """Complete tool configuration."""

    ranking: RankingConfig = Field(default_factory=RankingConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    tags_file: Path | None = DEFAULT_TAGS_FILE
    seed: int | None = None
    top_k: int = Field(default=10, ge=1)

    def resolved_tags_file(self) -> Path | None:
        """Return the tag file path with ``~`` expanded."""
        if self.tags_file is None:
            return None
        return self.tags_file.expanduser()


def load_config(path: str | Path | None = None) -> HierarchyConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to YAML configuration file. ``None`` returns defaults.

    Returns:
        Validated HierarchyConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config is invalid.
    """
    if path is None:
        return HierarchyConfig()

    config_path = Path(path)
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with config_path.open() as f:
        data = yaml.safe_load(f)

    if data is None:
        return HierarchyConfig()
    if not isinstance(data, dict):
        raise ValidationError(str(config_path), "Top level of the config must be a mapping.")

    try:
        return HierarchyConfig.model_validate(data)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or str(config_path)
        raise ValidationError(field, first["msg"]) from e
