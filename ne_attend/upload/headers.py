from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import MissingColumnsError

"""Header normalization and column resolution.

Spreadsheet headers are free text ("User ID", "user_id", "USERID"). They are
folded with ``normalize_key`` and matched once per file against a synonym
table (canonical key -> accepted header spellings). The result is a
``ColumnResolution`` used to project every raw row onto canonical keys.
"""

__all__ = [
    "MissingColumnsError",
    "ColumnResolution",
    "normalize_key",
    "build_header_map",
    "resolve_columns",
    "project_row",
    "STUDENT_FIELD_SYNONYMS",
    "STUDENT_REQUIRED_FIELDS",
    "INSTRUCTOR_FIELD_SYNONYMS",
    "INSTRUCTOR_REQUIRED_FIELDS",
]

_KEY_SEPARATORS = re.compile(r"[\s_-]+")


def normalize_key(header: Any) -> str:
    """Fold a header: trim, lowercase, drop whitespace / underscores / hyphens."""
    if header is None:
        return ""
    return _KEY_SEPARATORS.sub("", str(header).strip().lower())


_COMMON_SYNONYMS: dict[str, tuple[str, ...]] = {
    "firstname": ("firstname", "first name", "given name"),
    "lastname": ("lastname", "last name", "surname", "family name"),
    "emailaddress": ("emailaddress", "email address", "email", "e-mail"),
    "userid": ("userid", "user id", "id number"),
    "phonenumber": ("phonenumber", "phone number", "phone", "contact number", "mobile"),
    "schoolyear": ("schoolyear", "school year", "academic year"),
    "semester": ("semester", "term"),
    "department": ("department", "dept"),
    "course": ("course", "program"),
    "section": ("section",),
}

STUDENT_FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    **_COMMON_SYNONYMS,
    "userid": _COMMON_SYNONYMS["userid"] + ("student id", "studentid", "student number"),
    "yearlevel": ("yearlevel", "year level", "year"),
    "dateofbirth": ("dateofbirth", "date of birth", "birthdate", "birthday", "dob"),
    "address": ("address", "home address"),
    "guardianname": ("guardianname", "guardian name", "guardian"),
    "guardianphone": ("guardianphone", "guardian phone", "guardian contact"),
    "guardianrelation": ("guardianrelation", "guardian relation", "relationship"),
    "emergencycontactname": (
        "emergencycontactname",
        "emergency contact name",
        "emergency contact",
    ),
    "emergencycontactphone": ("emergencycontactphone", "emergency contact phone", "emergency phone"),
}

STUDENT_REQUIRED_FIELDS: tuple[str, ...] = (
    "firstname",
    "lastname",
    "emailaddress",
    "userid",
    "phonenumber",
    "schoolyear",
    "semester",
    "department",
    "course",
    "section",
    "yearlevel",
    "dateofbirth",
)

INSTRUCTOR_FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    **_COMMON_SYNONYMS,
    "userid": _COMMON_SYNONYMS["userid"] + ("employee id", "instructor id"),
    "subjectname": ("subjectname", "subject name", "subject"),
    "subjectcode": ("subjectcode", "subject code", "code"),
    "weeklydays": ("weeklydays", "weekdays", "weekday", "weekly days", "weeklyday", "days"),
    "starttime": ("starttime", "start time", "time start"),
    "endtime": ("endtime", "end time", "time end"),
    "room": ("room", "room number"),
    "meetinglink": ("meetinglink", "meeting link", "meet link"),
    "credits": ("credits", "credit", "units"),
    "description": ("description", "desc"),
    "experience": ("experience", "exp"),
    "specialization": ("specialization", "specialisation", "specialty"),
    "password": ("password", "pass", "pwd"),
}

INSTRUCTOR_REQUIRED_FIELDS: tuple[str, ...] = (
    "firstname",
    "lastname",
    "emailaddress",
    "userid",
    "phonenumber",
    "schoolyear",
    "semester",
    "department",
    "course",
    "subjectname",
    "subjectcode",
    "section",
    "weeklydays",
    "starttime",
    "endtime",
)


def build_header_map(columns: Iterable[Any]) -> dict[str, int]:
    """Map normalized header -> column position. First occurrence wins."""
    header_map: dict[str, int] = {}
    for idx, column in enumerate(columns):
        key = normalize_key(column)
        if key and key not in header_map:
            header_map[key] = idx
    return header_map


@dataclass(frozen=True)
class ColumnResolution:
    """Canonical key -> original column name, for every key found in the file."""

    columns: dict[str, str]

    def __contains__(self, key: object) -> bool:
        return key in self.columns

    def column_for(self, key: str) -> str | None:
        return self.columns.get(key)


def resolve_columns(
    columns: Sequence[Any],
    synonyms: Mapping[str, Sequence[str]],
    required: Sequence[str],
) -> ColumnResolution:
    """Resolve file headers against a synonym table.

    Args:
        columns: header strings in file order
        synonyms: canonical key -> accepted spellings
        required: canonical keys that must be present

    Returns:
        ColumnResolution covering every canonical key with a matching header

    Raises:
        MissingColumnsError: naming every required key without a header
    """
    header_map = build_header_map(columns)
    resolved: dict[str, str] = {}
    for key, spellings in synonyms.items():
        # the canonical key itself always counts as a spelling
        for spelling in (key, *spellings):
            idx = header_map.get(normalize_key(spelling))
            if idx is not None:
                resolved[key] = str(columns[idx])
                break

    missing = [key for key in required if key not in resolved]
    if missing:
        raise MissingColumnsError(missing)
    return ColumnResolution(columns=resolved)


def project_row(raw_row: Mapping[str, Any], resolution: ColumnResolution) -> dict[str, Any]:
    """Re-key a raw row by canonical key. Unresolved keys are simply absent."""
    return {key: raw_row.get(column) for key, column in resolution.columns.items()}
