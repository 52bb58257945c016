from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from .cells import cell_text, digits_only, is_blank
from .headers import INSTRUCTOR_REQUIRED_FIELDS, STUDENT_REQUIRED_FIELDS
from .timeparse import normalize_time, parse_date, parse_weekdays, time_to_minutes, unrecognized_weekday_tokens

"""Per-row validation.

Validators take a canonical row (see ``headers.project_row``) and return the
ordered list of problems found. They never raise: a row with errors is
reported and skipped while the rest of the file continues.

Phone length rules differ on purpose: students must have exactly 11 digits,
instructors 10 to 12 (country code variants).
"""

__all__ = [
    "validate_student_row",
    "validate_instructor_row",
    "STUDENT_PHONE_DIGITS",
    "INSTRUCTOR_PHONE_DIGITS",
]

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

STUDENT_PHONE_DIGITS = (11, 11)
INSTRUCTOR_PHONE_DIGITS = (10, 12)

TIME_FORMAT_HINT = 'Use formats like "7:00 AM", "7:00 PM", "07:00", or "19:00"'


def _missing_required(row: Mapping[str, Any], required: Sequence[str]) -> list[str]:
    return [f"Missing required field: {key}" for key in required if is_blank(row.get(key))]


def _check_email(row: Mapping[str, Any]) -> list[str]:
    email = cell_text(row.get("emailaddress"))
    if email and not EMAIL_PATTERN.match(email):
        return ["Invalid email format"]
    return []


def _check_phone(row: Mapping[str, Any], bounds: tuple[int, int]) -> list[str]:
    digits = digits_only(row.get("phonenumber"))
    low, high = bounds
    if digits and not low <= len(digits) <= high:
        if low == high:
            return [f"Phone number must be exactly {low} digits"]
        return [f"Phone number must be {low}-{high} digits"]
    return []


def validate_student_row(row: Mapping[str, Any]) -> list[str]:
    errors = _missing_required(row, STUDENT_REQUIRED_FIELDS)
    errors += _check_email(row)
    errors += _check_phone(row, STUDENT_PHONE_DIGITS)

    dob = row.get("dateofbirth")
    if not is_blank(dob) and parse_date(dob) is None:
        errors.append("Invalid date of birth format")
    return errors


def _check_time(label: str, raw: Any) -> list[str]:
    if is_blank(raw):
        return [f"{label.capitalize()} time is required"]
    if normalize_time(raw) is None:
        return [f'Invalid {label} time format: "{cell_text(raw)}". {TIME_FORMAT_HINT}']
    return []


def validate_instructor_row(row: Mapping[str, Any]) -> list[str]:
    errors = _missing_required(row, INSTRUCTOR_REQUIRED_FIELDS)
    errors += _check_email(row)
    errors += _check_phone(row, INSTRUCTOR_PHONE_DIGITS)

    weekdays_raw = row.get("weeklydays")
    if not parse_weekdays(weekdays_raw):
        message = "At least one weekday must be specified"
        rejected = unrecognized_weekday_tokens(weekdays_raw)
        if rejected:
            message += f" (unrecognized: {', '.join(rejected)})"
        errors.append(message)

    start_raw = row.get("starttime")
    end_raw = row.get("endtime")
    errors += _check_time("start", start_raw)
    errors += _check_time("end", end_raw)

    start_minutes = time_to_minutes(start_raw)
    end_minutes = time_to_minutes(end_raw)
    if start_minutes is not None and end_minutes is not None and end_minutes <= start_minutes:
        errors.append("End time must be later than start time")
    return errors
