from __future__ import annotations

from collections.abc import Sequence

"""File-level upload errors.

Any of these aborts processing of one upload file before a single row is
looked at. Row-level problems are never exceptions (see ``RowError``).
"""

__all__ = [
    "UploadFileError",
    "UnsupportedFileTypeError",
    "FileReadError",
    "MissingColumnsError",
]


class UploadFileError(Exception):
    """Base class for errors that abort a whole upload file."""


class UnsupportedFileTypeError(UploadFileError):
    """Raised when the file extension is neither .csv nor .xlsx."""


class FileReadError(UploadFileError):
    """Raised when the file cannot be read or parsed as its claimed format."""


class MissingColumnsError(UploadFileError):
    """Raised when required columns are absent from the header row."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Missing required columns: {', '.join(self.missing)}. "
            "Please update your file and try again."
        )
