from .value import TAG_SEPARATOR, ValueRecord, parse_tags

__all__ = ["TAG_SEPARATOR", "ValueRecord", "parse_tags"]
