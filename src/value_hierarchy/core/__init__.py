"""Core configuration and utilities for the value hierarchy tool."""

from value_hierarchy.core.config import (
    DEFAULT_TAGS_FILE,
    HierarchyConfig,
    RankingConfig,
    SelectionConfig,
    load_config,
)
from value_hierarchy.core.errors import (
    AmbiguousValueError,
    ConfigurationError,
    InsufficientRecordsError,
    InvalidStorePathError,
    MalformedOutcomeError,
    RecordNotFoundError,
    StoreReadError,
    StoreWriteError,
    UnknownValueError,
    ValidationError,
    ValueHierarchyError,
)
from value_hierarchy.core.slug import SlugGenerator

__all__ = [
    "DEFAULT_TAGS_FILE",
    "HierarchyConfig",
    "RankingConfig",
    "SelectionConfig",
    "SlugGenerator",
    "load_config",
    "AmbiguousValueError",
    "ConfigurationError",
    "InsufficientRecordsError",
    "InvalidStorePathError",
    "MalformedOutcomeError",
    "RecordNotFoundError",
    "StoreReadError",
    "StoreWriteError",
    "UnknownValueError",
    "ValidationError",
    "ValueHierarchyError",
]
