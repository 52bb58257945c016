from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from numbers import Real
from typing import Any

"""Cell value helpers shared by the validator and the normalizer.

Spreadsheet cells arrive loosely typed: CSV cells are always text, workbook
cells may be int / float / datetime / time or NaN for blanks. Every field
access in the upload pipeline goes through ``cell_text`` so the rest of the
code only ever deals with trimmed strings.
"""

__all__ = [
    "is_blank",
    "cell_text",
    "digits_only",
    "is_number",
]

_NON_DIGITS = re.compile(r"\D")


def is_number(value: Any) -> bool:
    """True for real numbers (int/float/Decimal/numpy scalars), never for bool."""
    return isinstance(value, Real) and not isinstance(value, bool)


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def cell_text(value: Any) -> str:
    """Render a cell as a trimmed string.

    Integral floats lose their ``.0`` suffix so that phone numbers and IDs
    read from numeric workbook cells keep their digits intact.
    """
    if is_blank(value):
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat() if value.time() == time(0, 0) else value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return f"{value.hour:02d}:{value.minute:02d}"
    if is_number(value):
        as_float = float(value)
        if math.isfinite(as_float) and as_float.is_integer():
            return str(int(as_float))
        return str(value)
    return str(value).strip()


def digits_only(value: Any) -> str:
    return _NON_DIGITS.sub("", cell_text(value))
