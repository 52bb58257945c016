from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

"""Normalized upload records.

These are the outputs of the upload pipelines. Each record is immutable and
knows how to render itself as the camelCase JSON payload accepted by the
NE-ATTEND ``users/bulk-*`` endpoints. Optional fields left as ``None`` are
omitted from the payload.
"""

__all__ = [
    "ScheduleRecord",
    "SubjectRecord",
    "StudentRecord",
    "InstructorRecord",
    "InstructorRow",
]


def _compact(payload: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in payload.items() if v is not None}


def _hhmm_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


@dataclass(frozen=True)
class ScheduleRecord:
    """One recurring weekly meeting window.

    Invariants: at least one weekday; ``end_time`` strictly after ``start_time``
    (both 24-hour ``HH:MM``).
    """
    weekdays: tuple[str, ...]
    start_time: str
    end_time: str

    def __post_init__(self) -> None:
        if not self.weekdays:
            raise ValueError("schedule requires at least one weekday")
        if _hhmm_minutes(self.end_time) <= _hhmm_minutes(self.start_time):
            raise ValueError(
                f"schedule end time {self.end_time} must be later than start time {self.start_time}"
            )

    @property
    def duration_minutes(self) -> int:
        return _hhmm_minutes(self.end_time) - _hhmm_minutes(self.start_time)

    def to_payload(self) -> dict[str, Any]:
        return {
            "weekdays": list(self.weekdays),
            "startTime": self.start_time,
            "endTime": self.end_time,
        }


@dataclass(frozen=True)
class SubjectRecord:
    subject_name: str
    subject_code: str
    sections: tuple[str, ...] = ()
    department: str | None = None
    school_year: str | None = None
    semester: str | None = None
    room: str | None = None
    meeting_link: str | None = None
    description: str | None = None
    credits: int | float | None = None
    schedule: ScheduleRecord | None = None

    def to_payload(self) -> dict[str, Any]:
        return _compact(
            {
                "subjectName": self.subject_name,
                "subjectCode": self.subject_code,
                "sections": list(self.sections),
                "department": self.department,
                "schoolYear": self.school_year,
                "semester": self.semester,
                "room": self.room,
                "meetingLink": self.meeting_link,
                "description": self.description,
                "credits": self.credits,
                "schedule": self.schedule.to_payload() if self.schedule else None,
            }
        )


@dataclass(frozen=True)
class StudentRecord:
    first_name: str
    last_name: str
    email: str
    student_id: str
    phone: str  # digits only, exactly 11
    school_year: str
    semester: str
    department: str
    course: str
    section: str
    year_level: str
    date_of_birth: date | None
    password: str
    address: str | None = None
    guardian_name: str | None = None
    guardian_phone: str | None = None
    guardian_relation: str | None = None
    emergency_contact: str | None = None
    emergency_phone: str | None = None
    role: str = "student"

    def to_payload(self) -> dict[str, Any]:
        return _compact(
            {
                "firstName": self.first_name,
                "lastName": self.last_name,
                "email": self.email,
                "role": self.role,
                "studentId": self.student_id,
                "phone": self.phone,
                "schoolYear": self.school_year,
                "semester": self.semester,
                "department": self.department,
                "course": self.course,
                "section": self.section,
                "yearLevel": self.year_level,
                "dateOfBirth": self.date_of_birth.isoformat() if self.date_of_birth else None,
                "address": self.address,
                "guardianName": self.guardian_name,
                "guardianPhone": self.guardian_phone,
                "guardianRelation": self.guardian_relation,
                "emergencyContact": self.emergency_contact,
                "emergencyPhone": self.emergency_phone,
                "password": self.password,
            }
        )


@dataclass(frozen=True)
class InstructorRecord:
    first_name: str
    last_name: str
    email: str
    user_id: str
    phone: str  # digits only, 10-12
    password: str
    school_year: str
    semester: str | None
    department: str
    course: str
    experience: str | None = None
    specialization: str | None = None
    subjects: tuple[SubjectRecord, ...] = field(default_factory=tuple)
    source_rows: tuple[int, ...] = ()  # data rows merged into this record, not sent

    @property
    def grouping_key(self) -> str:
        return (self.email or self.user_id or "").lower()

    def to_payload(self) -> dict[str, Any]:
        return _compact(
            {
                "firstName": self.first_name,
                "lastName": self.last_name,
                "email": self.email,
                "userId": self.user_id,
                "phone": self.phone,
                "password": self.password,
                "schoolYear": self.school_year,
                "semester": self.semester,
                "department": self.department,
                "course": self.course,
                "experience": self.experience,
                "specialization": self.specialization,
                "subjects": [subject.to_payload() for subject in self.subjects],
            }
        )


@dataclass(frozen=True)
class InstructorRow:
    """A single validated instructor spreadsheet row before grouping.

    ``row_index`` becomes part of the grouped record's ``source_rows``.
    """
    row_index: int
    instructor: InstructorRecord  # subjects left empty
    subject: SubjectRecord
