from __future__ import annotations

import logging
from pathlib import Path

from ..excel.reader import UploadSheet, convert_fractional_times, read_upload_file
from ..models.records import InstructorRecord, InstructorRow, StudentRecord
from ..models.upload_result import RowError, UploadKind, UploadResult
from ..upload.grouping import group_instructor_rows
from ..upload.headers import (
    INSTRUCTOR_FIELD_SYNONYMS,
    INSTRUCTOR_REQUIRED_FIELDS,
    STUDENT_FIELD_SYNONYMS,
    STUDENT_REQUIRED_FIELDS,
    project_row,
    resolve_columns,
)
from ..upload.normalize import normalize_instructor_row, normalize_student_row
from ..upload.validation import validate_instructor_row, validate_student_row

"""Student and instructor upload pipelines.

read file -> resolve headers -> validate each row -> normalize -> (group)

File-level problems (unsupported extension, unreadable file, missing
required columns) raise before any row is looked at. Row-level problems are
collected as ``RowError`` values and never stop the remaining rows.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "parse_student_upload",
    "parse_student_sheet",
    "parse_instructor_upload",
    "parse_instructor_sheet",
    "parse_upload",
]


def parse_student_upload(path: Path) -> UploadResult[StudentRecord]:
    sheet = read_upload_file(path)
    return parse_student_sheet(sheet)


def parse_student_sheet(sheet: UploadSheet) -> UploadResult[StudentRecord]:
    if not sheet.rows:
        logger.debug("file=%s has no data rows", sheet.source_name)
        return UploadResult()

    resolution = resolve_columns(sheet.columns, STUDENT_FIELD_SYNONYMS, STUDENT_REQUIRED_FIELDS)
    valid: list[StudentRecord] = []
    row_errors: list[RowError] = []
    for index, raw in enumerate(sheet.rows):
        row = project_row(raw, resolution)
        errors = validate_student_row(row)
        if errors:
            row_errors.append(RowError(row_index=index, errors=tuple(errors)))
            continue
        valid.append(normalize_student_row(row))

    logger.debug(
        "file=%s students valid=%d rejected=%d", sheet.source_name, len(valid), len(row_errors)
    )
    return UploadResult(valid_records=valid, row_errors=row_errors)


def parse_instructor_upload(path: Path) -> UploadResult[InstructorRecord]:
    sheet = read_upload_file(path)
    if Path(path).suffix.lower() == ".xlsx":
        sheet = UploadSheet(
            source_name=sheet.source_name,
            columns=sheet.columns,
            rows=convert_fractional_times(sheet.rows),
        )
    return parse_instructor_sheet(sheet)


def parse_instructor_sheet(sheet: UploadSheet) -> UploadResult[InstructorRecord]:
    if not sheet.rows:
        logger.debug("file=%s has no data rows", sheet.source_name)
        return UploadResult()

    resolution = resolve_columns(sheet.columns, INSTRUCTOR_FIELD_SYNONYMS, INSTRUCTOR_REQUIRED_FIELDS)
    normalized: list[InstructorRow] = []
    row_errors: list[RowError] = []
    for index, raw in enumerate(sheet.rows):
        row = project_row(raw, resolution)
        errors = validate_instructor_row(row)
        if errors:
            row_errors.append(RowError(row_index=index, errors=tuple(errors)))
            continue
        normalized.append(normalize_instructor_row(row, row_index=index))

    instructors = group_instructor_rows(normalized)
    logger.debug(
        "file=%s instructor rows valid=%d rejected=%d instructors=%d",
        sheet.source_name,
        len(normalized),
        len(row_errors),
        len(instructors),
    )
    return UploadResult(valid_records=instructors, row_errors=row_errors)


def parse_upload(path: Path, kind: UploadKind) -> UploadResult:
    if kind is UploadKind.STUDENTS:
        return parse_student_upload(path)
    return parse_instructor_upload(path)
