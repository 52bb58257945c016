from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from ne_attend.errors import FileReadError, UnsupportedFileTypeError
from ne_attend.excel.reader import convert_fractional_times, read_upload_file


def test_read_csv_keeps_text_and_leading_zeros(make_upload, student_headers, student_row):
    path = make_upload("students.csv", student_headers, [student_row()])
    sheet = read_upload_file(path)
    assert sheet.source_name == "students.csv"
    assert sheet.columns == student_headers
    assert sheet.rows[0]["Phone Number"] == "09171234567"
    assert sheet.rows[0]["Year Level"] == "1"


def test_read_csv_drops_blank_rows(temp_workdir: Path):
    path = temp_workdir / "data" / "blank_rows.csv"
    path.write_text("Name,Email\nA,a@example.com\n,\n\nB,b@example.com\n", encoding="utf-8")
    sheet = read_upload_file(path)
    assert [r["Name"] for r in sheet.rows] == ["A", "B"]


def test_read_csv_strips_bom_and_whitespace(temp_workdir: Path):
    path = temp_workdir / "data" / "bom.csv"
    path.write_text("\ufeffFirst Name , Email\n  Ana  ,ana@example.com\n", encoding="utf-8")
    sheet = read_upload_file(path)
    assert sheet.columns == ["First Name", "Email"]
    assert sheet.rows == [{"First Name": "Ana", "Email": "ana@example.com"}]


def test_read_empty_csv_returns_no_rows(temp_workdir: Path):
    path = temp_workdir / "data" / "empty.csv"
    path.write_text("", encoding="utf-8")
    sheet = read_upload_file(path)
    assert sheet.rows == []


def test_read_xlsx_first_sheet_only(temp_workdir: Path):
    path = temp_workdir / "data" / "two_sheets.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame([["Ana", 2021001]], columns=["Name", "ID"]).to_excel(writer, sheet_name="Roster", index=False)
        pd.DataFrame([["ignored"]], columns=["Other"]).to_excel(writer, sheet_name="Notes", index=False)
    sheet = read_upload_file(path)
    assert sheet.columns == ["Name", "ID"]
    assert sheet.rows == [{"Name": "Ana", "ID": 2021001}]


def test_read_xlsx_blank_cells_become_empty_strings(temp_workdir: Path):
    path = temp_workdir / "data" / "gaps.xlsx"
    pd.DataFrame([["Ana", None], [None, None], ["Ben", 5.0]], columns=["Name", "Units"]).to_excel(
        path, index=False, engine="openpyxl"
    )
    sheet = read_upload_file(path)
    assert sheet.rows == [{"Name": "Ana", "Units": ""}, {"Name": "Ben", "Units": 5}]


def test_unsupported_extension(temp_workdir: Path):
    path = temp_workdir / "data" / "roster.txt"
    path.write_text("x", encoding="utf-8")
    with pytest.raises(UnsupportedFileTypeError, match="Please upload a CSV or XLSX file."):
        read_upload_file(path)


def test_missing_file(temp_workdir: Path):
    with pytest.raises(FileReadError):
        read_upload_file(temp_workdir / "data" / "nope.csv")


def test_corrupt_workbook(temp_workdir: Path):
    path = temp_workdir / "data" / "broken.xlsx"
    path.write_bytes(b"not a zip archive")
    with pytest.raises(FileReadError):
        read_upload_file(path)


def test_convert_fractional_times():
    rows = [
        {"Start Time": 0.5, "End Time": "0.75", "Room": "101", "Extra": 0.25, "Units": 3},
        {"Start Time": "7:00 AM", "End Time": "", "Room": "102", "Extra": "", "Units": 0},
    ]
    converted = convert_fractional_times(rows)
    assert converted[0] == {
        "Start Time": "12:00",
        "End Time": "18:00",
        "Room": "101",
        "Extra": "06:00",
        "Units": 3,
    }
    assert converted[1] == rows[1]
    # input rows untouched
    assert rows[0]["Start Time"] == 0.5
