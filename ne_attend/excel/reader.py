from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import time
from pathlib import Path
from typing import Any

import pandas as pd

from ..errors import FileReadError, UnsupportedFileTypeError, UploadFileError
from ..upload.cells import is_number
from ..upload.headers import normalize_key
from ..upload.timeparse import fraction_to_hhmm

"""Upload file reader.

The parser is chosen by filename extension, never by content:
- ``.csv``: first line is the header, every cell is read as text
- ``.xlsx``: first sheet only, first row is the header, raw cell values kept

Blank cells become ``""`` and fully blank rows are dropped, so the row index
used in error reports counts data rows only.
"""

__all__ = [
    "UploadFileError",
    "UnsupportedFileTypeError",
    "FileReadError",
    "UploadSheet",
    "read_upload_file",
    "convert_fractional_times",
    "SUPPORTED_SUFFIXES",
]

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


@dataclass
class UploadSheet:
    source_name: str
    columns: list[str]
    rows: list[dict[str, Any]]  # raw header -> cell value


def _clean_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        # workbook integers come back as floats once a column holds a blank
        if value.is_integer() and abs(value) >= 1:
            return int(value)
        return value
    if isinstance(value, time):
        return f"{value.hour:02d}:{value.minute:02d}"
    if isinstance(value, str):
        return value.strip()
    if value is pd.NaT:
        return ""
    return value


def _frame_to_sheet(df: pd.DataFrame, source_name: str) -> UploadSheet:
    columns = [str(c).strip() for c in df.columns.tolist()]
    rows: list[dict[str, Any]] = []
    for raw in df.itertuples(index=False, name=None):
        row = {col: _clean_cell(val) for col, val in zip(columns, raw, strict=False)}
        if all(v == "" for v in row.values()):
            continue
        rows.append(row)
    return UploadSheet(source_name=source_name, columns=columns, rows=rows)


def _read_csv(path: Path) -> pd.DataFrame:
    try:
        return pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise FileReadError(f"CSV parse error in {path.name}: {e}") from e


def _read_xlsx(path: Path) -> pd.DataFrame:
    try:
        # sheet_name=0 -> first worksheet only
        return pd.read_excel(path, sheet_name=0, header=0, dtype=object, engine="openpyxl")
    except Exception as e:  # openpyxl raises a variety of types for corrupt archives
        raise FileReadError(f"Failed to read workbook {path.name}: {e}") from e


def read_upload_file(path: Path) -> UploadSheet:
    """Read a CSV / XLSX upload into raw rows.

    Raises
    ------
    UnsupportedFileTypeError: extension not .csv / .xlsx
    FileReadError: file missing or unparseable
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFileTypeError("Please upload a CSV or XLSX file.")
    if not path.is_file():
        raise FileReadError(f"file not found: {path}")

    df = _read_csv(path) if suffix == ".csv" else _read_xlsx(path)
    return _frame_to_sheet(df, path.name)


def _looks_like_time_column(column: str) -> bool:
    return "time" in normalize_key(column)


def convert_fractional_times(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Rewrite workbook fractional-day cells as ``HH:MM`` strings.

    Time-named columns: numbers (or numeric text) in ``[0, 1)`` are converted.
    Any other column: a number strictly between 0 and 1 is converted as well,
    since the workbook engine may hand back the raw fraction for a time cell
    whose header does not say "time".
    """
    converted: list[dict[str, Any]] = []
    for row in rows:
        out = dict(row)
        for column, value in row.items():
            if _looks_like_time_column(column):
                candidate = value
                if isinstance(value, str) and value:
                    try:
                        candidate = float(value)
                    except ValueError:
                        continue
                hhmm = fraction_to_hhmm(candidate)
                if hhmm is not None:
                    out[column] = hhmm
            elif is_number(value) and 0 < float(value) < 1:
                hhmm = fraction_to_hhmm(value)
                if hhmm is not None:
                    out[column] = hhmm
        converted.append(out)
    return converted
