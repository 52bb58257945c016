from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models.records import InstructorRecord, InstructorRow, ScheduleRecord, StudentRecord, SubjectRecord
from .cells import cell_text, digits_only
from .timeparse import normalize_time, parse_date, parse_weekdays

"""Row -> record normalization.

Only rows that passed validation reach these functions, so required fields
are known to be present and times / weekdays are known to parse.
"""

__all__ = [
    "generate_password",
    "normalize_semester",
    "normalize_student_row",
    "normalize_instructor_row",
]

DEFAULT_IDENTIFIER = "0000000000"


def generate_password(first_name: Any, identifier: Any, fallback_first: str = "Student") -> str:
    """Initial account password: ``<Firstname>@<identifier>``.

    >>> generate_password("john", "12345")
    'John@12345'
    """
    first = cell_text(first_name) or fallback_first
    ident = cell_text(identifier) or DEFAULT_IDENTIFIER
    return f"{first[:1].upper()}{first[1:].lower()}@{ident}"


def normalize_semester(value: Any) -> str | None:
    """Map free text onto ``1st Semester`` / ``2nd Semester`` / ``Summer``.

    Unmatched text is returned trimmed, unchanged; the backend rejects it.
    """
    text = cell_text(value)
    if not text:
        return None
    lowered = text.lower()
    if "1st" in lowered or "first" in lowered or lowered == "1":
        return "1st Semester"
    if "2nd" in lowered or "second" in lowered or lowered == "2":
        return "2nd Semester"
    if "summer" in lowered or lowered == "3":
        return "Summer"
    return text


def _optional(row: Mapping[str, Any], key: str) -> str | None:
    return cell_text(row.get(key)) or None


def _parse_credits(value: Any) -> int | float | None:
    text = cell_text(value)
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else number


def normalize_student_row(row: Mapping[str, Any]) -> StudentRecord:
    first_name = cell_text(row.get("firstname"))
    student_id = cell_text(row.get("userid"))
    return StudentRecord(
        first_name=first_name,
        last_name=cell_text(row.get("lastname")),
        email=cell_text(row.get("emailaddress")),
        student_id=student_id,
        phone=digits_only(row.get("phonenumber")),
        school_year=cell_text(row.get("schoolyear")),
        semester=normalize_semester(row.get("semester")) or "",
        department=cell_text(row.get("department")),
        course=cell_text(row.get("course")),
        section=cell_text(row.get("section")),
        year_level=cell_text(row.get("yearlevel")),
        date_of_birth=parse_date(row.get("dateofbirth")),
        password=generate_password(first_name, student_id),
        address=_optional(row, "address"),
        guardian_name=_optional(row, "guardianname"),
        guardian_phone=_optional(row, "guardianphone"),
        guardian_relation=_optional(row, "guardianrelation"),
        emergency_contact=_optional(row, "emergencycontactname"),
        emergency_phone=_optional(row, "emergencycontactphone"),
    )


def _build_schedule(row: Mapping[str, Any]) -> ScheduleRecord | None:
    weekdays = parse_weekdays(row.get("weeklydays"))
    start_time = normalize_time(row.get("starttime"))
    end_time = normalize_time(row.get("endtime"))
    if not weekdays or not start_time or not end_time:
        return None
    return ScheduleRecord(weekdays=tuple(weekdays), start_time=start_time, end_time=end_time)


def normalize_instructor_row(row: Mapping[str, Any], row_index: int = 0) -> InstructorRow:
    first_name = cell_text(row.get("firstname"))
    user_id = cell_text(row.get("userid"))
    school_year = cell_text(row.get("schoolyear"))
    semester = normalize_semester(row.get("semester"))
    department = cell_text(row.get("department"))
    section = cell_text(row.get("section"))

    instructor = InstructorRecord(
        first_name=first_name,
        last_name=cell_text(row.get("lastname")),
        email=cell_text(row.get("emailaddress")),
        user_id=user_id,
        phone=digits_only(row.get("phonenumber")),
        password=cell_text(row.get("password")) or generate_password(first_name, user_id, "Instructor"),
        school_year=school_year,
        semester=semester,
        department=department,
        course=cell_text(row.get("course")),
        experience=_optional(row, "experience"),
        specialization=_optional(row, "specialization"),
    )
    subject = SubjectRecord(
        subject_name=cell_text(row.get("subjectname")),
        subject_code=cell_text(row.get("subjectcode")),
        sections=(section,) if section else (),
        department=department or None,
        school_year=school_year or None,
        semester=semester,
        room=_optional(row, "room"),
        meeting_link=_optional(row, "meetinglink"),
        description=_optional(row, "description"),
        credits=_parse_credits(row.get("credits")),
        schedule=_build_schedule(row),
    )
    return InstructorRow(row_index=row_index, instructor=instructor, subject=subject)
