"""Header resolution, validation, normalization and grouping of upload rows."""

from .grouping import group_instructor_rows
from .headers import MissingColumnsError, normalize_key, resolve_columns
from .normalize import generate_password, normalize_semester
from .timeparse import duration_minutes, normalize_time, parse_weekdays

__all__ = [
    "MissingColumnsError",
    "normalize_key",
    "resolve_columns",
    "generate_password",
    "normalize_semester",
    "normalize_time",
    "parse_weekdays",
    "duration_minutes",
    "group_instructor_rows",
]
