from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from typing import Any

import pandas as pd

from .cells import cell_text, is_blank, is_number

"""Time-of-day, weekday and date parsing for schedule columns.

All normalized times are 24-hour ``HH:MM`` strings. Three input shapes are
accepted by ``normalize_time``:

1. 12-hour clock with AM/PM, optional seconds: ``7:00 AM``, ``7:00:00 PM``
2. 24-hour clock, optional seconds: ``07:00``, ``19:00``, ``7:05:30``
3. Workbook fractional-day numbers: ``0.5`` -> ``12:00``

Weekday strings may use commas, semicolons, slashes or whitespace as
separators and mix full names with three-letter abbreviations.
"""

__all__ = [
    "WEEKDAY_ORDER",
    "parse_weekdays",
    "unrecognized_weekday_tokens",
    "format_weekdays",
    "fraction_to_hhmm",
    "normalize_time",
    "time_to_minutes",
    "duration_minutes",
    "format_time_12h",
    "parse_date",
]

WEEKDAY_ORDER: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

_WEEKDAY_LOOKUP: dict[str, str] = {
    **{day.lower(): day for day in WEEKDAY_ORDER},
    **{day[:3].lower(): day for day in WEEKDAY_ORDER},
}

_WEEKDAY_SPLIT = re.compile(r"[,;\s/]+")

_TIME_12H = re.compile(r"^(0?[1-9]|1[0-2]):([0-5][0-9])(?::([0-5][0-9]))?\s*(AM|PM)$")
_TIME_24H = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])(?::([0-5][0-9]))?$")

SECONDS_PER_DAY = 24 * 60 * 60


# --- weekdays -------------------------------------------------------------

def _weekday_tokens(value: Any) -> list[str]:
    text = cell_text(value)
    if not text:
        return []
    return [part.rstrip("/.") for part in _WEEKDAY_SPLIT.split(text) if part.rstrip("/.")]


def parse_weekdays(value: Any) -> list[str]:
    """Parse a free-text weekday field into canonical day names.

    Unknown tokens are skipped, duplicates collapse, and the result is always
    in Monday -> Sunday order regardless of the input order.

    >>> parse_weekdays("Fri, mon/Wed wednesday")
    ['Monday', 'Wednesday', 'Friday']
    """
    found = {
        _WEEKDAY_LOOKUP[token.lower()]
        for token in _weekday_tokens(value)
        if token.lower() in _WEEKDAY_LOOKUP
    }
    return [day for day in WEEKDAY_ORDER if day in found]


def unrecognized_weekday_tokens(value: Any) -> list[str]:
    """Tokens that ``parse_weekdays`` drops, in input order (as written)."""
    return [token for token in _weekday_tokens(value) if token.lower() not in _WEEKDAY_LOOKUP]


def format_weekdays(days: Any) -> str:
    wanted = set(days)
    return ", ".join(day for day in WEEKDAY_ORDER if day in wanted)


# --- time of day ----------------------------------------------------------

def fraction_to_hhmm(value: Any) -> str | None:
    """Convert a fractional day (``0 <= value < 1``) to ``HH:MM``.

    Seconds are rounded to the nearest whole second before splitting into
    hours and minutes; a value that rounds up to 24:00 is rejected.
    """
    if not is_number(value):
        return None
    fraction = float(value)
    if math.isnan(fraction) or fraction < 0 or fraction >= 1:
        return None
    total_seconds = int(fraction * SECONDS_PER_DAY + 0.5)
    hours, remainder = divmod(total_seconds, 3600)
    if hours >= 24:
        return None
    return f"{hours:02d}:{remainder // 60:02d}"


def _parse_numeric_text(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def normalize_time(value: Any) -> str | None:
    """Normalize a time-of-day cell to 24-hour ``HH:MM`` or return None."""
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return f"{value.hour:02d}:{value.minute:02d}"
    if isinstance(value, time):
        return f"{value.hour:02d}:{value.minute:02d}"
    if is_number(value):
        return fraction_to_hhmm(value)

    cleaned = re.sub(r"\s+", " ", str(value)).strip().upper()

    match = _TIME_12H.match(cleaned)
    if match:
        hours = int(match.group(1))
        period = match.group(4)
        if period == "PM" and hours != 12:
            hours += 12
        elif period == "AM" and hours == 12:
            hours = 0
        return f"{hours:02d}:{match.group(2)}"

    match = _TIME_24H.match(cleaned)
    if match:
        return f"{int(match.group(1)):02d}:{match.group(2)}"

    # text cells holding the raw fraction, e.g. "0.2916666667" from a CSV export
    numeric = _parse_numeric_text(cleaned)
    if numeric is not None:
        return fraction_to_hhmm(numeric)
    return None


def time_to_minutes(value: Any) -> int | None:
    normalized = normalize_time(value)
    if normalized is None:
        return None
    hours, minutes = normalized.split(":")
    return int(hours) * 60 + int(minutes)


def duration_minutes(start: Any, end: Any) -> int | None:
    """Minutes between two times; None when either side is invalid or end <= start."""
    start_minutes = time_to_minutes(start)
    end_minutes = time_to_minutes(end)
    if start_minutes is None or end_minutes is None:
        return None
    duration = end_minutes - start_minutes
    return duration if duration > 0 else None


def format_time_12h(value: Any) -> str | None:
    normalized = normalize_time(value)
    if normalized is None:
        return None
    hours, minutes = (int(part) for part in normalized.split(":"))
    period = "PM" if hours >= 12 else "AM"
    display_hour = hours % 12 or 12
    return f"{display_hour}:{minutes:02d} {period}"


# --- dates ----------------------------------------------------------------

def parse_date(value: Any) -> date | None:
    """Parse a calendar date from a workbook datetime or free text.

    Text is handed to ``pandas.to_datetime`` so ISO dates, ``MM/DD/YYYY`` and
    month-name forms (``March 5, 2004``) are all accepted. Text without a digit
    is rejected so relative words such as ``now`` or ``today`` never resolve
    to the date of the run.
    """
    if is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = cell_text(value)
    if not any(ch.isdigit() for ch in text):
        return None
    try:
        parsed = pd.to_datetime(text)
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return parsed.date()
