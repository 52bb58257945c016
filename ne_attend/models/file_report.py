from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .upload_result import UploadKind, UploadSummary

"""Per-file and per-run reports produced by ``process_uploads``.

State transitions for a file: processing -> (success | partial | failed)

- SUCCESS: every data row valid (and accepted by the backend when submitted)
- PARTIAL: file read, but some rows were rejected locally or by the backend,
  or the backend rejected some instructor subject assignments
- FAILED: file-level error, nothing from this file was submitted
"""

__all__ = [
    "FileStatus",
    "FileReport",
    "BatchReport",
]


class FileStatus(Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class FileReport:
    file_name: str
    kind: UploadKind
    status: FileStatus
    valid_records: int = 0
    row_errors: int = 0
    summary: UploadSummary | None = None  # None when the file failed to parse
    error: str | None = None  # file-level failure reason
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class BatchReport:
    """Aggregated outcome of one CLI / ``process_uploads`` run."""
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    files: list[FileReport] = field(default_factory=list)

    @property
    def total_records(self) -> int:
        return sum(f.valid_records for f in self.files)

    @property
    def total_row_errors(self) -> int:
        return sum(f.row_errors for f in self.files)

    @property
    def created_count(self) -> int:
        return sum(f.summary.created_count for f in self.files if f.summary is not None)

    @property
    def failed_count(self) -> int:
        return sum(f.summary.failed_count for f in self.files if f.summary is not None)

    @property
    def failed_files(self) -> int:
        return sum(1 for f in self.files if f.status is FileStatus.FAILED)

    @property
    def all_succeeded(self) -> bool:
        return all(f.status is FileStatus.SUCCESS for f in self.files)
