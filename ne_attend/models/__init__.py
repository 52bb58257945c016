"""Domain models for the NE-ATTEND bulk upload toolkit."""

from .error_record import ErrorRecord
from .file_report import BatchReport, FileReport, FileStatus
from .records import InstructorRecord, InstructorRow, ScheduleRecord, StudentRecord, SubjectRecord
from .upload_result import Failure, RowError, SubjectFailure, UploadKind, UploadResult, UploadSummary

__all__ = [
    # Normalized records
    "ScheduleRecord",
    "SubjectRecord",
    "StudentRecord",
    "InstructorRecord",
    "InstructorRow",
    # Pipeline outcome
    "RowError",
    "UploadKind",
    "UploadResult",
    "Failure",
    "SubjectFailure",
    "UploadSummary",
    # Run reporting
    "ErrorRecord",
    "FileStatus",
    "FileReport",
    "BatchReport",
]
