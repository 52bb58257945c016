from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

"""Upload outcome models.

``UploadResult`` is what a pipeline returns for one file: the valid records
plus one ``RowError`` per rejected row. An empty ``valid_records`` with row
errors is a normal outcome, not a failure.

``UploadSummary`` is the caller-side view after (optional) submission to the
backend, merging server failures with the pipeline's own row errors.
"""

__all__ = [
    "UploadKind",
    "RowError",
    "UploadResult",
    "Failure",
    "SubjectFailure",
    "UploadSummary",
]

RecordT = TypeVar("RecordT")


class UploadKind(Enum):
    """Which onboarding pipeline a file belongs to."""
    STUDENTS = "students"
    INSTRUCTORS = "instructors"


@dataclass(frozen=True)
class RowError:
    """Validation failures for one input row.

    ``row_index`` is zero-based over the data rows of the file (the header
    row and fully blank rows are not counted).
    """
    row_index: int
    errors: tuple[str, ...]

    def to_payload(self) -> dict[str, Any]:
        return {"rowIndex": self.row_index, "errors": list(self.errors)}


@dataclass(frozen=True)
class UploadResult(Generic[RecordT]):
    valid_records: list[RecordT] = field(default_factory=list)
    row_errors: list[RowError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.row_errors)


@dataclass(frozen=True)
class Failure:
    """One failed row in a combined summary.

    source: ``file`` for pipeline validation errors, ``server`` for records
    the backend rejected (``row_index`` then refers to the submitted list and
    ``source_rows`` to the data rows behind that record, when known).
    """
    row_index: int
    reason: str
    source: str = "file"
    source_rows: tuple[int, ...] = ()

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"rowIndex": self.row_index, "reason": self.reason, "source": self.source}
        if self.source_rows:
            payload["sourceRows"] = list(self.source_rows)
        return payload


@dataclass(frozen=True)
class SubjectFailure:
    """An instructor that was created but had subject assignments rejected."""
    email: str
    errors: tuple[str, ...]
    instructor_id: str | None = None
    source_rows: tuple[int, ...] = ()


@dataclass(frozen=True)
class UploadSummary:
    created_count: int
    failed_count: int
    failures: list[Failure] = field(default_factory=list)
    message: str | None = None
    submitted: bool = False
    subjects_created: int = 0
    subjects_failed: int = 0
    subject_failures: list[SubjectFailure] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return self.failed_count > 0 or self.subjects_failed > 0
