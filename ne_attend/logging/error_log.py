from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import FILE_LEVEL_ROW, ErrorRecord
from ..models.upload_result import RowError

"""Upload error log (JSON Lines).

Row and file errors of a run are buffered in memory and written once at the
end of the run to ``<log dir>/upload-errors-YYYYMMDD-HHMMSS.log`` (UTC).
Nothing is written for a run without errors.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer of ErrorRecords; ``flush`` appends them as JSON Lines.

    Single-threaded use only (one buffer per run).
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self.logs_dir = Path(logs_dir) if logs_dir is not None else DEFAULT_LOGS_DIR
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.logs_dir / f"upload-errors-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def add_row_errors(self, file_name: str, row_errors: list[RowError]) -> None:
        for err in row_errors:
            self.append(
                ErrorRecord.create(
                    file=file_name,
                    row=err.row_index,
                    error_type="ROW_VALIDATION_ERROR",
                    message="; ".join(err.errors),
                )
            )

    def add_file_error(self, file_name: str, error_type: str, message: str) -> None:
        self.append(
            ErrorRecord.create(file=file_name, row=FILE_LEVEL_ROW, error_type=error_type, message=message)
        )

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; return the log path, or None if nothing was written."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
