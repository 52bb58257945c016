from __future__ import annotations

from ne_attend.upload.grouping import group_instructor_rows
from ne_attend.upload.normalize import normalize_instructor_row


def _row(email, code, index, **extra):
    row = {
        "firstname": "Maria",
        "lastname": "Santos",
        "emailaddress": email,
        "userid": "EMP-001",
        "phonenumber": "0917123456",
        "schoolyear": "2024-2025",
        "semester": "1st",
        "department": "CCS",
        "course": "BSIT",
        "subjectname": f"Subject {code}",
        "subjectcode": code,
        "section": "A",
        "weeklydays": "Mon",
        "starttime": "07:00",
        "endtime": "08:00",
    }
    row.update(extra)
    return normalize_instructor_row(row, row_index=index)


def test_rows_with_same_email_collapse_into_one_instructor():
    rows = [_row("maria@example.com", "IT101", 0), _row("MARIA@example.com", "IT102", 1)]
    instructors = group_instructor_rows(rows)
    assert len(instructors) == 1
    assert [s.subject_code for s in instructors[0].subjects] == ["IT101", "IT102"]
    # first row supplies the instructor fields
    assert instructors[0].email == "maria@example.com"


def test_distinct_instructors_keep_first_appearance_order():
    rows = [
        _row("b@example.com", "IT101", 0),
        _row("a@example.com", "IT201", 1),
        _row("b@example.com", "IT102", 2),
    ]
    instructors = group_instructor_rows(rows)
    assert [i.email for i in instructors] == ["b@example.com", "a@example.com"]
    assert [len(i.subjects) for i in instructors] == [2, 1]


def test_identical_subject_rows_are_not_deduplicated():
    rows = [_row("maria@example.com", "IT101", 0), _row("maria@example.com", "IT101", 1)]
    assert len(group_instructor_rows(rows)[0].subjects) == 2


def test_empty_input():
    assert group_instructor_rows([]) == []


def test_grouped_record_keeps_source_rows():
    rows = [
        _row("b@example.com", "IT101", 0),
        _row("a@example.com", "IT201", 2),
        _row("b@example.com", "IT102", 5),
    ]
    instructors = group_instructor_rows(rows)
    assert [i.source_rows for i in instructors] == [(0, 5), (2,)]
    assert "sourceRows" not in instructors[0].to_payload()
