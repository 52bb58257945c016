from __future__ import annotations

from typing import Any

from ..models.file_report import BatchReport
from ..models.upload_result import Failure, RowError, SubjectFailure, UploadResult, UploadSummary

"""Upload summaries and the SUMMARY line.

``merge_summary`` combines the backend's per-record failures with the
pipeline's own row errors so the caller can show a single
created / failed / reasons view.
"""

__all__ = [
    "local_summary",
    "merge_summary",
    "render_summary_line",
]


def _row_failures(row_errors: list[RowError]) -> list[Failure]:
    return [
        Failure(row_index=err.row_index, reason="; ".join(err.errors), source="file")
        for err in row_errors
    ]


def local_summary(result: UploadResult, message: str | None = None) -> UploadSummary:
    """Summary for a file that was not (or could not be) submitted."""
    return UploadSummary(
        created_count=0,
        failed_count=len(result.row_errors),
        failures=_row_failures(result.row_errors),
        message=message,
        submitted=False,
    )


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _record_source_rows(result: UploadResult, index: int) -> tuple[int, ...]:
    if 0 <= index < len(result.valid_records):
        return tuple(getattr(result.valid_records[index], "source_rows", ()))
    return ()


def _subject_failures(result: UploadResult, data: dict[str, Any]) -> list[SubjectFailure]:
    entries = data.get("instructorsWithSubjectFailures")
    if not entries:
        details = (data.get("subjectsSummary") or {}).get("details") or []
        entries = [d for d in details if isinstance(d, dict) and _as_int(d.get("subjectsFailed"), 0) > 0]

    rows_by_email = {
        record.email.lower(): tuple(record.source_rows)
        for record in result.valid_records
        if getattr(record, "email", None) and hasattr(record, "source_rows")
    }
    failures: list[SubjectFailure] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        email = str(entry.get("email") or "")
        instructor_id = entry.get("instructorId")
        failures.append(
            SubjectFailure(
                email=email,
                errors=tuple(str(e) for e in entry.get("errors") or []),
                instructor_id=str(instructor_id) if instructor_id is not None else None,
                source_rows=rows_by_email.get(email.lower(), ()),
            )
        )
    return failures


def merge_summary(result: UploadResult, response_body: dict[str, Any]) -> UploadSummary:
    """Merge a ``users/bulk-*`` response with the pipeline's row errors.

    Server failures come first as ``source="server"`` entries; their
    ``rowIndex`` refers to the position in the submitted record list. A
    missing or non-numeric ``rowIndex`` becomes -1.

    Instructor responses also carry ``subjectsSummary`` (subjects assigned /
    rejected across all created instructors) and
    ``instructorsWithSubjectFailures``; both end up on the summary.
    """
    data = response_body.get("data") or {}
    server_failures: list[Failure] = []
    for entry in data.get("failures") or []:
        if not isinstance(entry, dict):
            continue
        row_index = _as_int(entry.get("rowIndex"), -1)
        server_failures.append(
            Failure(
                row_index=row_index,
                reason=str(entry.get("reason") or entry.get("error") or "Unknown error"),
                source="server",
                source_rows=_record_source_rows(result, row_index),
            )
        )
    server_failed = _as_int(data.get("failedCount", len(server_failures)), len(server_failures))
    subjects = data.get("subjectsSummary") or {}
    if not isinstance(subjects, dict):
        subjects = {}
    return UploadSummary(
        created_count=_as_int(data.get("createdCount"), 0),
        failed_count=server_failed + len(result.row_errors),
        failures=server_failures + _row_failures(result.row_errors),
        message=response_body.get("message"),
        submitted=True,
        subjects_created=_as_int(subjects.get("totalCreated"), 0),
        subjects_failed=_as_int(subjects.get("totalFailed"), 0),
        subject_failures=_subject_failures(result, data),
    )


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small values
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_summary_line(report: BatchReport) -> str:
    """Render the one-line run summary.

    >>> from datetime import datetime, timezone
    >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
    >>> render_summary_line(BatchReport(start_time=t, end_time=t, elapsed_seconds=0.0))
    'SUMMARY files=0 records=0 row_errors=0 created=0 failed=0 file_errors=0 elapsed_sec=0'
    """
    return (
        f"SUMMARY files={len(report.files)} "
        f"records={report.total_records} "
        f"row_errors={report.total_row_errors} "
        f"created={report.created_count} "
        f"failed={report.failed_count} "
        f"file_errors={report.failed_files} "
        f"elapsed_sec={_format_seconds(report.elapsed_seconds)}"
    )
