from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from ..models.records import InstructorRecord, InstructorRow, SubjectRecord

"""Collapse per-subject instructor rows into one record per instructor.

The spreadsheet repeats the instructor columns on every row, one row per
subject / section. Rows are grouped by lowercased email (falling back to the
lowercased user id); the first row of a group supplies the instructor fields
and every row contributes its subject and its row index (``source_rows``).
Identical subject rows are kept as separate entries.
"""

__all__ = [
    "group_instructor_rows",
]


def group_instructor_rows(rows: Iterable[InstructorRow]) -> list[InstructorRecord]:
    firsts: dict[str, InstructorRecord] = {}
    subjects: dict[str, list[SubjectRecord]] = {}
    source_rows: dict[str, list[int]] = {}
    for row in rows:
        key = row.instructor.grouping_key
        if key not in firsts:
            firsts[key] = row.instructor
            subjects[key] = []
            source_rows[key] = []
        subjects[key].append(row.subject)
        source_rows[key].append(row.row_index)

    # dict preserves first-appearance order
    return [
        dataclasses.replace(
            instructor, subjects=tuple(subjects[key]), source_rows=tuple(source_rows[key])
        )
        for key, instructor in firsts.items()
    ]
