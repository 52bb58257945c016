from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..api.client import BackendError, BulkUploadClient
from ..errors import FileReadError, MissingColumnsError, UnsupportedFileTypeError, UploadFileError
from ..logging.error_log import ErrorLogBuffer
from ..models.file_report import BatchReport, FileReport, FileStatus
from ..models.upload_result import UploadKind, UploadResult, UploadSummary
from .notify import LoggingNotifier, Notifier
from .pipeline import parse_upload
from .progress import ProgressTracker
from .summary import local_summary, merge_summary

"""Run orchestration: parse (and optionally submit) a batch of upload files.

Each file is handled independently and in order:
1. run the student / instructor pipeline
2. record row errors (and file-level failures) in the error log
3. submit the valid records when a client is given
4. report the outcome through the notifier

A file-level failure or a backend error fails that file only; the run always
continues with the next file.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "process_uploads",
    "process_single_file",
]

NO_VALID_ROWS_MESSAGE = "No valid rows found in file. Please fix the highlighted issues and try again."


def _file_error_type(error: UploadFileError) -> str:
    if isinstance(error, MissingColumnsError):
        return "MISSING_COLUMNS"
    if isinstance(error, UnsupportedFileTypeError):
        return "UNSUPPORTED_FILE_TYPE"
    if isinstance(error, FileReadError):
        return "FILE_READ_ERROR"
    return "FILE_ERROR"


def _status_for(summary: UploadSummary) -> FileStatus:
    return FileStatus.PARTIAL if summary.has_failures else FileStatus.SUCCESS


def _rows_label(source_rows: tuple[int, ...]) -> str:
    if not source_rows:
        return ""
    return " (rows " + ", ".join(str(r) for r in source_rows) + ")"


def process_single_file(
    path: Path,
    kind: UploadKind,
    error_log: ErrorLogBuffer,
    client: BulkUploadClient | None = None,
    notifier: Notifier | None = None,
) -> FileReport:
    notifier = notifier or LoggingNotifier()
    started = datetime.now(UTC)

    def _elapsed() -> float:
        return (datetime.now(UTC) - started).total_seconds()

    try:
        result: UploadResult = parse_upload(path, kind)
    except UploadFileError as e:
        error_log.add_file_error(path.name, _file_error_type(e), str(e))
        notifier.error(f"{path.name}: {e}")
        return FileReport(
            file_name=path.name,
            kind=kind,
            status=FileStatus.FAILED,
            error=str(e),
            elapsed_seconds=_elapsed(),
        )

    error_log.add_row_errors(path.name, result.row_errors)
    for err in result.row_errors:
        logger.debug("file=%s row=%d errors=%s", path.name, err.row_index, list(err.errors))

    valid_count = len(result.valid_records)
    if not result.valid_records:
        if result.row_errors:
            notifier.error(f"{path.name}: {NO_VALID_ROWS_MESSAGE}")
        summary = local_summary(result)
    elif client is None:
        summary = local_summary(result)
    else:
        try:
            body = client.submit(kind, result)
        except BackendError as e:
            error_log.add_file_error(path.name, "BACKEND_ERROR", str(e))
            notifier.error(f"{path.name}: {e}")
            return FileReport(
                file_name=path.name,
                kind=kind,
                status=FileStatus.FAILED,
                valid_records=valid_count,
                row_errors=len(result.row_errors),
                summary=local_summary(result, message=str(e)),
                error=str(e),
                elapsed_seconds=_elapsed(),
            )
        summary = merge_summary(result, body)
        for failure in summary.failures:
            if failure.source == "server":
                error_log.add_file_error(
                    path.name,
                    "SERVER_REJECTED",
                    f"record {failure.row_index}{_rows_label(failure.source_rows)}: {failure.reason}",
                )
        for subject_failure in summary.subject_failures:
            label = subject_failure.email or subject_failure.instructor_id or "instructor"
            for reason in subject_failure.errors or ("Subject assignment failed",):
                error_log.add_file_error(
                    path.name,
                    "SUBJECT_REJECTED",
                    f"{label}{_rows_label(subject_failure.source_rows)}: {reason}",
                )
        if summary.subjects_failed:
            logger.warning(
                "file=%s subjects created=%d failed=%d",
                path.name,
                summary.subjects_created,
                summary.subjects_failed,
            )
        if body.get("success", True):
            notifier.success(f"{path.name}: {summary.message or f'Bulk {kind.value} upload completed.'}")
        else:
            notifier.error(f"{path.name}: {summary.message or 'Bulk upload completed with errors.'}")

    return FileReport(
        file_name=path.name,
        kind=kind,
        status=_status_for(summary),
        valid_records=valid_count,
        row_errors=len(result.row_errors),
        summary=summary,
        elapsed_seconds=_elapsed(),
    )


def process_uploads(
    paths: list[Path],
    kind: UploadKind,
    *,
    client: BulkUploadClient | None = None,
    notifier: Notifier | None = None,
    logs_dir: Path | None = None,
) -> BatchReport:
    """Process every upload file and return the aggregated report.

    Args:
        paths: upload files, processed in the given order
        kind: which pipeline to run
        client: backend client; None means parse / validate only
        notifier: outcome sink (defaults to the application logger)
        logs_dir: directory for the JSON Lines error log

    Returns:
        BatchReport with one FileReport per path
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(logs_dir)
    notifier = notifier or LoggingNotifier()
    reports: list[FileReport] = []

    with ProgressTracker(len(paths), description=f"Uploading {kind.value}") as progress:
        for path in paths:
            progress.start_file(path)
            report = process_single_file(path, kind, error_log, client=client, notifier=notifier)
            reports.append(report)
            progress.finish_file(records=report.valid_records, errors=report.row_errors)

    log_path = error_log.flush()
    if log_path is not None:
        logger.info("error log written: %s", log_path)

    end_time = datetime.now(UTC)
    return BatchReport(
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        files=reports,
    )
