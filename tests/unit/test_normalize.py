from __future__ import annotations

from datetime import date

import pytest

from ne_attend.upload.normalize import (
    generate_password,
    normalize_instructor_row,
    normalize_semester,
    normalize_student_row,
)


def test_generate_password_is_deterministic():
    assert generate_password("jOHN", "2021-0001") == "John@2021-0001"
    assert generate_password("jOHN", "2021-0001") == generate_password("John", "2021-0001")


def test_generate_password_fallbacks():
    assert generate_password("", "") == "Student@0000000000"
    assert generate_password(None, "EMP-9", fallback_first="Instructor") == "Instructor@EMP-9"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1st", "1st Semester"),
        ("First Sem", "1st Semester"),
        ("2nd semester", "2nd Semester"),
        ("SECOND", "2nd Semester"),
        ("summer term", "Summer"),
        (1, "1st Semester"),
        ("Trimester", "Trimester"),
        ("", None),
    ],
)
def test_normalize_semester(raw, expected):
    assert normalize_semester(raw) == expected


def test_normalize_student_row():
    record = normalize_student_row(
        {
            "firstname": "juan",
            "lastname": "Dela Cruz",
            "emailaddress": " juan@example.com ",
            "userid": "2021-0001",
            "phonenumber": "0917-123-4567",
            "schoolyear": "2024-2025",
            "semester": "first",
            "department": "CCS",
            "course": "BSIT",
            "section": "A",
            "yearlevel": 1,
            "dateofbirth": "2004-03-05",
            "guardianname": "Rosa Dela Cruz",
            "address": "",
        }
    )
    assert record.email == "juan@example.com"
    assert record.phone == "09171234567"
    assert record.semester == "1st Semester"
    assert record.year_level == "1"
    assert record.date_of_birth == date(2004, 3, 5)
    assert record.password == "Juan@2021-0001"
    assert record.guardian_name == "Rosa Dela Cruz"
    assert record.address is None
    assert record.role == "student"


def _instructor_row(**overrides):
    row = {
        "firstname": "maria",
        "lastname": "Santos",
        "emailaddress": "Maria@Example.com",
        "userid": "EMP-001",
        "phonenumber": "0917 123 456",
        "schoolyear": "2024-2025",
        "semester": "2nd",
        "department": "CCS",
        "course": "BSIT",
        "subjectname": "Programming 1",
        "subjectcode": "IT101",
        "section": "A",
        "weeklydays": "Wed, Mon",
        "starttime": "1:00 PM",
        "endtime": "2:30 PM",
    }
    row.update(overrides)
    return row


def test_normalize_instructor_row_builds_subject_and_schedule():
    result = normalize_instructor_row(_instructor_row(room="301", credits="3"), row_index=4)
    assert result.row_index == 4
    assert result.instructor.phone == "0917123456"
    assert result.instructor.semester == "2nd Semester"
    assert result.instructor.password == "Maria@EMP-001"
    assert result.instructor.subjects == ()

    subject = result.subject
    assert subject.subject_code == "IT101"
    assert subject.sections == ("A",)
    assert subject.room == "301"
    assert subject.credits == 3
    assert subject.schedule is not None
    assert subject.schedule.weekdays == ("Monday", "Wednesday")
    assert subject.schedule.start_time == "13:00"
    assert subject.schedule.end_time == "14:30"
    assert subject.schedule.duration_minutes == 90


def test_normalize_instructor_row_keeps_supplied_password():
    result = normalize_instructor_row(_instructor_row(password="S3cret!"))
    assert result.instructor.password == "S3cret!"


def test_normalize_instructor_row_fractional_credits_and_bad_credits():
    assert normalize_instructor_row(_instructor_row(credits="1.5")).subject.credits == 1.5
    assert normalize_instructor_row(_instructor_row(credits="three")).subject.credits is None
