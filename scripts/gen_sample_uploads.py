#!/usr/bin/env python3
"""Sample upload generator.

Writes synthetic student or instructor rosters (CSV or XLSX, chosen by the
output extension) in the column layout the bulk upload accepts. A share of
rows can be deliberately broken so the validation report has something to
show.

Instructor workbooks store start / end times as fractional-day numbers, the
way spreadsheet applications hand them back.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

FIRST_NAMES = ["Juan", "Maria", "Jose", "Ana", "Pedro", "Rosa", "Carlo", "Liza", "Mark", "Grace"]
LAST_NAMES = ["Dela Cruz", "Santos", "Reyes", "Garcia", "Mendoza", "Bautista", "Ramos", "Torres"]
DEPARTMENTS = {"CCS": ["BSIT", "BSCS"], "CBA": ["BSBA", "BSA"], "COE": ["BSCE", "BSEE"]}
SEMESTERS = ["1st", "2nd", "First Semester", "Summer"]
WEEKDAY_PATTERNS = ["Mon, Wed", "Tue/Thu", "Monday Wednesday Friday", "Sat", "Fri"]
SUBJECTS = [
    ("Programming 1", "IT101"),
    ("Data Structures", "IT201"),
    ("Database Systems", "IT301"),
    ("Accounting Basics", "BA101"),
    ("Statics", "CE201"),
]


def _person(rng: np.random.Generator, index: int) -> dict[str, Any]:
    first = str(rng.choice(FIRST_NAMES))
    last = str(rng.choice(LAST_NAMES))
    department = str(rng.choice(list(DEPARTMENTS)))
    return {
        "first": first,
        "last": last,
        "email": f"{first.lower()}.{last.lower().replace(' ', '')}{index}@example.com",
        "department": department,
        "course": str(rng.choice(DEPARTMENTS[department])),
    }


def generate_students(rows: int, invalid_ratio: float = 0.0, seed: int = 42) -> pd.DataFrame:
    """Student roster with ``rows`` data rows; about ``invalid_ratio`` of them broken."""
    rng = np.random.default_rng(seed)
    broken = rng.random(rows) < invalid_ratio
    birthdays = pd.date_range("2000-01-01", "2007-12-31", periods=365)

    records: list[dict[str, Any]] = []
    for i in range(rows):
        p = _person(rng, i)
        phone = "09" + "".join(str(d) for d in rng.integers(0, 10, 9))
        record = {
            "First Name": p["first"],
            "Last Name": p["last"],
            "Email Address": p["email"],
            "User ID": f"2024-{i + 1:05d}",
            "Phone Number": phone,
            "School Year": "2024-2025",
            "Semester": str(rng.choice(SEMESTERS)),
            "Department": p["department"],
            "Course": p["course"],
            "Section": str(rng.choice(list("ABCD"))),
            "Year Level": str(int(rng.integers(1, 5))),
            "Date of Birth": pd.Timestamp(rng.choice(birthdays)).date().isoformat(),
        }
        if broken[i]:
            # alternate between the common mistakes
            if i % 2:
                record["Email Address"] = record["Email Address"].replace("@", " at ")
            else:
                record["Phone Number"] = phone[:-2]
        records.append(record)
    return pd.DataFrame(records)


def generate_instructors(
    instructors: int, subjects_per_instructor: int = 2, invalid_ratio: float = 0.0, seed: int = 42
) -> pd.DataFrame:
    """Instructor roster: one row per subject, instructor columns repeated."""
    rng = np.random.default_rng(seed)
    records: list[dict[str, Any]] = []
    for i in range(instructors):
        p = _person(rng, i)
        phone = "09" + "".join(str(d) for d in rng.integers(0, 10, 8))
        for j in range(subjects_per_instructor):
            name, code = SUBJECTS[(i + j) % len(SUBJECTS)]
            start_hour = int(rng.integers(7, 17))
            record = {
                "First Name": p["first"],
                "Last Name": p["last"],
                "Email": p["email"],
                "User ID": f"EMP-{i + 1:04d}",
                "Phone": phone,
                "School Year": "2024-2025",
                "Semester": str(rng.choice(SEMESTERS)),
                "Department": p["department"],
                "Course": p["course"],
                "Subject Name": name,
                "Subject Code": code,
                "Section": str(rng.choice(list("ABCD"))),
                "Weekdays": str(rng.choice(WEEKDAY_PATTERNS)),
                "Start Time": start_hour / 24,
                "End Time": (start_hour + 1.5) / 24,
            }
            if rng.random() < invalid_ratio:
                record["End Time"], record["Start Time"] = record["Start Time"], record["End Time"]
            records.append(record)
    return pd.DataFrame(records)


def write_upload(df: pd.DataFrame, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".xlsx":
        df.to_excel(output_path, index=False, engine="openpyxl")
    else:
        df.to_csv(output_path, index=False)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate sample NE-ATTEND bulk upload files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 200 students, 10%% of rows broken
  %(prog)s students data/students.csv --rows 200 --invalid-ratio 0.1

  # 25 instructors with 3 subjects each
  %(prog)s instructors data/instructors.xlsx --rows 25 --subjects 3
        """,
    )
    parser.add_argument("kind", choices=["students", "instructors"])
    parser.add_argument("output", type=Path, help="Output .csv or .xlsx path")
    parser.add_argument("--rows", type=int, default=100, help="Students, or instructors (default: 100)")
    parser.add_argument("--subjects", type=int, default=2, help="Subjects per instructor (default: 2)")
    parser.add_argument("--invalid-ratio", type=float, default=0.0, help="Share of broken rows (default: 0)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args(argv)

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.invalid_ratio <= 1:
        print("Error: --invalid-ratio must be between 0 and 1", file=sys.stderr)
        return 1
    if args.output.suffix.lower() not in (".csv", ".xlsx"):
        print("Error: output must end in .csv or .xlsx", file=sys.stderr)
        return 1

    if args.kind == "students":
        df = generate_students(args.rows, args.invalid_ratio, args.seed)
    else:
        df = generate_instructors(args.rows, args.subjects, args.invalid_ratio, args.seed)
    write_upload(df, args.output)
    print(f"Created {args.kind} file: {args.output} ({len(df):,} rows)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
