from .value_store import (
    FIELDNAMES,
    STORE_SUFFIX,
    ValueStore,
    record_to_row,
    row_to_record,
    validate_store_path,
)

__all__ = [
    "FIELDNAMES",
    "STORE_SUFFIX",
    "ValueStore",
    "record_to_row",
    "row_to_record",
    "validate_store_path",
]
