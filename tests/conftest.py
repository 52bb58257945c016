# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from ne_attend.logging.init import reset_logging

STUDENT_HEADERS = [
    "First Name",
    "Last Name",
    "Email Address",
    "User ID",
    "Phone Number",
    "School Year",
    "Semester",
    "Department",
    "Course",
    "Section",
    "Year Level",
    "Date of Birth",
]

INSTRUCTOR_HEADERS = [
    "First Name",
    "Last Name",
    "Email",
    "User ID",
    "Phone",
    "School Year",
    "Semester",
    "Department",
    "Course",
    "Subject Name",
    "Subject Code",
    "Section",
    "Weekdays",
    "Start Time",
    "End Time",
]


def _student_row(overrides: dict[str, object] | None = None) -> list[object]:
    values = {
        "First Name": "Juan",
        "Last Name": "Dela Cruz",
        "Email Address": "juan@example.com",
        "User ID": "2021-0001",
        "Phone Number": "09171234567",
        "School Year": "2024-2025",
        "Semester": "1st",
        "Department": "CCS",
        "Course": "BSIT",
        "Section": "A",
        "Year Level": "1",
        "Date of Birth": "2004-03-05",
    }
    values.update(overrides or {})
    return [values[h] for h in STUDENT_HEADERS]


def _instructor_row(overrides: dict[str, object] | None = None) -> list[object]:
    values = {
        "First Name": "Maria",
        "Last Name": "Santos",
        "Email": "maria@example.com",
        "User ID": "EMP-001",
        "Phone": "0917123456",
        "School Year": "2024-2025",
        "Semester": "First Semester",
        "Department": "CCS",
        "Course": "BSIT",
        "Subject Name": "Programming 1",
        "Subject Code": "IT101",
        "Section": "A",
        "Weekdays": "Mon, Wed",
        "Start Time": "7:00 AM",
        "End Time": "8:30 AM",
    }
    values.update(overrides or {})
    return [values[h] for h in INSTRUCTOR_HEADERS]


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("NE_ATTEND_API_URL", raising=False)
        monkeypatch.delenv("NE_ATTEND_API_TOKEN", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """api:
  base_url: http://localhost:5000/api
  timeout_seconds: 10
  token_env: NE_ATTEND_API_TOKEN
error_log_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "upload.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_upload(temp_workdir: Path) -> Callable[..., Path]:
    """Write an upload file under data/ (.csv or .xlsx chosen by name)."""

    def _make(name: str, headers: list[str], rows: list[list[object]]) -> Path:
        path = temp_workdir / "data" / name
        df = pd.DataFrame(rows, columns=headers)
        if path.suffix == ".xlsx":
            df.to_excel(path, index=False, engine="openpyxl")
        else:
            df.to_csv(path, index=False)
        return path

    return _make


@pytest.fixture()
def student_row() -> Callable[..., list[object]]:
    """Valid student row in STUDENT_HEADERS order; overrides keyed by header."""
    return _student_row


@pytest.fixture()
def instructor_row() -> Callable[..., list[object]]:
    """Valid instructor row in INSTRUCTOR_HEADERS order; overrides keyed by header."""
    return _instructor_row


@pytest.fixture()
def student_headers() -> list[str]:
    return list(STUDENT_HEADERS)


@pytest.fixture()
def instructor_headers() -> list[str]:
    return list(INSTRUCTOR_HEADERS)
