from __future__ import annotations

from datetime import date, datetime, time

import pytest

from ne_attend.upload.timeparse import (
    WEEKDAY_ORDER,
    duration_minutes,
    format_time_12h,
    format_weekdays,
    fraction_to_hhmm,
    normalize_time,
    parse_date,
    parse_weekdays,
    time_to_minutes,
    unrecognized_weekday_tokens,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("7:00 AM", "07:00"),
        ("7:00 PM", "19:00"),
        ("07:00 pm", "19:00"),
        ("12:00 AM", "00:00"),
        ("12:30 PM", "12:30"),
        ("12:00 PM", "12:00"),
        ("1:30 PM", "13:30"),
        ("11:59 PM", "23:59"),
        ("11:59:59 PM", "23:59"),
        ("7:00AM", "07:00"),
        ("07:00", "07:00"),
        ("7:05", "07:05"),
        ("19:00", "19:00"),
        ("19:00:30", "19:00"),
        ("  8:15   am ", "08:15"),
    ],
)
def test_normalize_time_text_forms(raw, expected):
    assert normalize_time(raw) == expected


@pytest.mark.parametrize("raw", ["13:00 PM", "0:00 AM", "25:00", "7:60", "noon", "7", "", None])
def test_normalize_time_rejects(raw):
    assert normalize_time(raw) is None


def test_normalize_time_fractions():
    assert normalize_time(0.5) == "12:00"
    assert normalize_time(7 / 24) == "07:00"
    assert normalize_time(0) == "00:00"
    assert normalize_time("0.2916666667") == "07:00"
    assert normalize_time(1.0) is None
    assert normalize_time(-0.1) is None


def test_normalize_time_native_values():
    assert normalize_time(time(9, 45)) == "09:45"
    assert normalize_time(datetime(1899, 12, 30, 14, 5)) == "14:05"


def test_fraction_rounding_up_to_midnight_is_rejected():
    assert fraction_to_hhmm(0.999999) is None
    assert fraction_to_hhmm(True) is None


def test_every_minute_round_trips():
    for h in range(24):
        for m in range(60):
            hhmm = f"{h:02d}:{m:02d}"
            assert normalize_time(hhmm) == hhmm
            assert fraction_to_hhmm((h * 60 + m) / 1440) == hhmm


def test_minutes_and_duration():
    assert time_to_minutes("1:30 PM") == 13 * 60 + 30
    assert duration_minutes("7:00 AM", "8:30 AM") == 90
    assert duration_minutes("09:00", "08:00") is None
    assert duration_minutes("09:00", "09:00") is None
    assert duration_minutes("bad", "09:00") is None


def test_format_time_12h():
    assert format_time_12h("00:05") == "12:05 AM"
    assert format_time_12h("13:00") == "1:00 PM"
    assert format_time_12h("12:00") == "12:00 PM"
    assert format_time_12h("nope") is None


def test_parse_weekdays_separators_and_order():
    assert parse_weekdays("Mon/Wed/Fri") == ["Monday", "Wednesday", "Friday"]
    assert parse_weekdays("friday; MONDAY , tue") == ["Monday", "Tuesday", "Friday"]
    assert parse_weekdays("Monday. Thursday") == ["Monday", "Thursday"]
    assert parse_weekdays("sun sat") == ["Saturday", "Sunday"]


def test_parse_weekdays_set_equality_across_spellings():
    a = parse_weekdays("Monday, Wednesday")
    b = parse_weekdays("wed mon mon")
    assert set(a) == set(b) == {"Monday", "Wednesday"}


@pytest.mark.parametrize("raw", ["Mon, Wed, Fri", "Monday/Wednesday/Friday", "monday wednesday friday"])
def test_weekday_separator_styles_give_same_set(raw):
    assert set(parse_weekdays(raw)) == {"Monday", "Wednesday", "Friday"}


def test_parse_weekdays_unknown_tokens_dropped():
    assert parse_weekdays("M W F") == []
    assert unrecognized_weekday_tokens("Mon, Funday, Tues") == ["Funday", "Tues"]
    assert parse_weekdays(None) == []


def test_format_weekdays_uses_canonical_order():
    assert format_weekdays({"Friday", "Monday"}) == "Monday, Friday"
    assert len(WEEKDAY_ORDER) == 7


def test_parse_date_forms():
    assert parse_date("2004-03-05") == date(2004, 3, 5)
    assert parse_date("March 5, 2004") == date(2004, 3, 5)
    assert parse_date(datetime(2004, 3, 5, 10, 0)) == date(2004, 3, 5)
    assert parse_date(date(2004, 3, 5)) == date(2004, 3, 5)
    assert parse_date("not a date") is None
    assert parse_date("") is None


@pytest.mark.parametrize("relative", ["now", "today", "tomorrow", "yesterday", " Now "])
def test_parse_date_rejects_relative_words(relative):
    assert parse_date(relative) is None
