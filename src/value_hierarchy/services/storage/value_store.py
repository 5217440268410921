"""CSV-backed persistence for a value hierarchy."""

from __future__ import annotations

import csv
import os
import tempfile
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import pydantic
import structlog

from value_hierarchy.core.errors import (
    InvalidStorePathError,
    StoreReadError,
    StoreWriteError,
)
from value_hierarchy.models import ValueRecord

logger = structlog.get_logger()

STORE_SUFFIX = ".values.csv"

# Column order of the on-disk format.
FIELDNAMES = [
    "id",
    "title",
    "score",
    "comparisonCount",
    "tags",
    "createdAt",
    "updatedAt",
    "rationale",
]


def validate_store_path(path: str | Path) -> Path:
    """Return ``path`` as a Path, rejecting names without the .values.csv suffix."""
    store_path = Path(path)
    if not store_path.name.endswith(STORE_SUFFIX):
        raise InvalidStorePathError(store_path)
    return store_path


def _format_timestamp(value: datetime) -> str:
    return value.isoformat()


def record_to_row(record: ValueRecord) -> dict[str, str]:
    """Serialize a record into a CSV row."""
    return {
        "id": record.id,
        "title": record.title,
        "score": repr(record.rating),
        "comparisonCount": str(record.comparison_count),
        "tags": record.tag_string,
        "createdAt": _format_timestamp(record.created_at),
        "updatedAt": _format_timestamp(record.updated_at),
        "rationale": record.rationale,
    }


def row_to_record(row: dict[str, str]) -> ValueRecord:
    """Parse a CSV row into a record.

    Raises:
        ValueError: If a numeric or timestamp column cannot be parsed.
    """
    return ValueRecord(
        id=row["id"],
        title=row["title"],
        rating=float(row["score"]),
        comparison_count=int(row["comparisonCount"]),
        tags=row.get("tags") or "",
        rationale=row.get("rationale") or "",
        created_at=datetime.fromisoformat(row["createdAt"]),
        updated_at=datetime.fromisoformat(row["updatedAt"]),
    )


class ValueStore:
    """Load and save the records of one ``<name>.values.csv`` file.

    Saves go to a temporary file next to the target that then replaces it,
    so readers never observe a half-written hierarchy.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the hierarchy file.

        Raises:
            InvalidStorePathError: If the file name does not end in .values.csv.
        """
        self.path = validate_store_path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def init(self, overwrite: bool = False) -> None:
        """Create an empty hierarchy file (and any missing parent directories).

        Raises:
            StoreWriteError: If the file exists and ``overwrite`` is False.
        """
        if self.exists() and not overwrite:
            raise StoreWriteError(self.path, "file already exists (use --force to replace it)")
        self.save([])
        logger.info("store_init", path=str(self.path))

    def load(self) -> list[ValueRecord]:
        """Load all records; a missing file yields an empty hierarchy.

        Raises:
            StoreReadError: If the file cannot be read, is not UTF-8, or holds invalid rows.
        """
        if not self.exists():
            logger.debug("store_missing", path=str(self.path))
            return []

        records: list[ValueRecord] = []
        try:
            with self.path.open(newline="", encoding="utf-8") as f:
                reader = csv.DictReader(f)
                missing = [name for name in FIELDNAMES if name not in (reader.fieldnames or [])]
                if reader.fieldnames is not None and missing:
                    raise StoreReadError(self.path, f"missing columns: {', '.join(missing)}")
                for line_num, row in enumerate(reader, start=2):
                    try:
                        records.append(row_to_record(row))
                    except (ValueError, TypeError, pydantic.ValidationError) as e:
                        raise StoreReadError(self.path, f"line {line_num}: {e}") from e
        except OSError as e:
            raise StoreReadError(self.path, str(e)) from e
        except UnicodeDecodeError as e:
            raise StoreReadError(self.path, f"not valid UTF-8: {e}") from e
        except csv.Error as e:
            raise StoreReadError(self.path, f"malformed CSV: {e}") from e

        logger.debug("store_loaded", path=str(self.path), count=len(records))
        return records

    def save(self, records: Sequence[ValueRecord]) -> None:
        """Overwrite the file with ``records``.

        Raises:
            StoreWriteError: If the file cannot be written.
        """
        tmp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                newline="",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
                writer.writeheader()
                writer.writerows(record_to_row(r) for r in records)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StoreWriteError(self.path, str(e)) from e

        logger.debug("store_saved", path=str(self.path), count=len(records))
