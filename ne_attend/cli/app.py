from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..api.client import BulkUploadClient
from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..errors import UploadFileError
from ..excel.reader import convert_fractional_times, read_upload_file
from ..logging.init import enable_debug, log_summary, setup_logging
from ..models.upload_result import UploadKind
from ..services.orchestrator import process_uploads
from ..services.summary import render_summary_line
from ..upload.headers import (
    INSTRUCTOR_FIELD_SYNONYMS,
    INSTRUCTOR_REQUIRED_FIELDS,
    STUDENT_FIELD_SYNONYMS,
    STUDENT_REQUIRED_FIELDS,
    project_row,
    resolve_columns,
)
from ..upload.timeparse import format_time_12h, format_weekdays, parse_weekdays

"""CLI entrypoint.

    python -m ne_attend.cli {students,instructors} FILE [FILE ...]

Flow:
- Load ``.env`` (API token) and ``config/upload.yml``
- Parse and validate every file, optionally submitting valid records
- Print one SUMMARY line

Exit codes: 0 every file succeeded, 2 at least one file failed or had
rejected rows, 1 fatal (bad config, missing input file).
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

_SUMMARY_PREFIX = "SUMMARY "


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so the API token / URL overrides reach the config layer."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="NE-ATTEND bulk student / instructor uploader")
    p.add_argument("kind", choices=[k.value for k in UploadKind], help="Which roster the files hold")
    p.add_argument("files", nargs="+", type=Path, help="CSV or XLSX upload files")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to upload.yml")
    p.add_argument("--submit", action="store_true", help="POST valid records to the backend")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print resolved columns & first rows then exit",
    )
    return p.parse_args(argv)


def _describe_schedule(row: dict) -> str:
    days = format_weekdays(parse_weekdays(row.get("weeklydays"))) or "?"
    start = format_time_12h(row.get("starttime")) or "?"
    end = format_time_12h(row.get("endtime")) or "?"
    return f"{days} {start}-{end}"


def _inspect_data(paths: list[Path], kind: UploadKind) -> int:
    if kind is UploadKind.STUDENTS:
        synonyms, required = STUDENT_FIELD_SYNONYMS, STUDENT_REQUIRED_FIELDS
    else:
        synonyms, required = INSTRUCTOR_FIELD_SYNONYMS, INSTRUCTOR_REQUIRED_FIELDS

    for path in paths:
        print(f"FILE: {path.name}")
        try:
            sheet = read_upload_file(path)
            resolution = resolve_columns(sheet.columns, synonyms, required)
        except UploadFileError as e:
            print(f"  error: {e}")
            continue
        rows = sheet.rows[:3]
        if kind is UploadKind.INSTRUCTORS and path.suffix.lower() == ".xlsx":
            rows = convert_fractional_times(rows)
        print(f"  columns={resolution.columns}")
        for raw in rows:
            row = project_row(raw, resolution)
            print("    row=", {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in row.items()})
            if kind is UploadKind.INSTRUCTORS:
                print(f"    schedule= {_describe_schedule(row)}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] from tests must not pick up pytest's argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    missing = [p for p in args.files if not p.exists()]
    if missing:
        for p in missing:
            logger.error(f"file not found: {p}")
        return EXIT_FATAL

    if args.debug:
        enable_debug(logger)

    kind = UploadKind(args.kind)
    if args.inspect_data:
        return _inspect_data(args.files, kind)

    client = None
    if args.submit:
        client = BulkUploadClient(
            cfg.api.base_url,
            token=cfg.api.token,
            timeout=cfg.api.timeout_seconds,
        )
        logger.info(f"submitting to {client.endpoint_url(kind)}")
    else:
        logger.info("validate-only run (use --submit to upload)")

    logger.info(f"Processing {len(args.files)} {kind.value} file(s)")
    report = process_uploads(
        args.files,
        kind,
        client=client,
        logs_dir=Path(cfg.error_log_directory),
    )

    summary_line = render_summary_line(report)
    log_summary(summary_line[len(_SUMMARY_PREFIX):])

    if report.all_succeeded:
        return EXIT_SUCCESS_ALL
    return EXIT_PARTIAL_FAILURE
