"""Custom exceptions for value hierarchy operations and configuration."""

from __future__ import annotations

from pathlib import Path


class ValueHierarchyError(Exception):
    """Base exception for hierarchy errors with optional suggestions."""

    label = "Error"

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[{self.label}] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class InsufficientRecordsError(ValueHierarchyError):
    """Error when there are too few values to build comparison pairs."""

    def __init__(self, available: int, required: int = 2) -> None:
        self.available = available
        self.required = required
        super().__init__(
            f"Need at least {required} values for comparison, found {available}",
            "Add more values first with 'value-hierarchy add'.",
        )


class UnknownValueError(ValueHierarchyError):
    """Error when an outcome names a value that cannot be resolved."""

    def __init__(
        self,
        title: str,
        message: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.title = title
        super().__init__(
            message or f"Value not found: '{title}'",
            suggestion or "Titles must match exactly; check 'value-hierarchy list'.",
        )


class AmbiguousValueError(UnknownValueError):
    """Error when an outcome title matches more than one value."""

    def __init__(self, title: str, matches: int) -> None:
        self.matches = matches
        super().__init__(
            title,
            f"Ambiguous value title: '{title}'",
            f"{matches} values share this title; rename duplicates "
            "(see 'value-hierarchy validate').",
        )


class MalformedOutcomeError(ValueHierarchyError):
    """Error when an outcome cannot be read as a winner/loser pair."""

    def __init__(self, outcome: str, reason: str = "Expected 'Winner>Loser'") -> None:
        self.outcome = outcome
        super().__init__(f"Invalid response format: '{outcome}'", reason)


class RecordNotFoundError(ValueHierarchyError):
    """Error when an id does not match any stored value."""

    def __init__(self, value_id: str) -> None:
        self.value_id = value_id
        super().__init__(
            f"Value with id '{value_id}' not found",
            "Use 'value-hierarchy list' to look up ids.",
        )


class InvalidStorePathError(ValueHierarchyError):
    """Error when a store path does not use the .values.csv suffix."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"File must end with .values.csv, got: {path}",
            "Name hierarchies like 'personal.values.csv'.",
        )


class StoreReadError(ValueHierarchyError):
    """Error when a value store cannot be read or parsed."""

    label = "Store Error"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot read {path}: {reason}")


class StoreWriteError(ValueHierarchyError):
    """Error when a value store cannot be written."""

    label = "Store Error"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot write {path}: {reason}")


class ConfigurationError(ValueHierarchyError):
    """Base exception for configuration errors."""

    label = "Configuration Error"


class ValidationError(ConfigurationError):
    """Error when configuration validation fails."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid value for '{field}'",
            f"{reason}",
        )
