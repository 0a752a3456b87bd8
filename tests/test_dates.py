from datetime import date

import pytest

from heritage_health.dates import (
    age_from_birth_date,
    birth_date_from_age,
    parse_date_string,
    reconcile_age,
)

TODAY = date(2025, 6, 1)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1954-11-25", date(1954, 11, 25)),
        ("25 NOV 1954", date(1954, 11, 25)),
        ("11 Aug. 1968", date(1968, 8, 11)),
        ("NOV 1954", date(1954, 11, 1)),
        ("May, 1837", date(1837, 5, 1)),
        ("1954", date(1954, 1, 1)),
        ("11/25/1954", date(1954, 11, 25)),
        ("April 17, 1850", date(1850, 4, 17)),
        ("SEPT. 17,1910", date(1910, 9, 17)),
    ],
)
def test_parse_date_string(text, expected):
    assert parse_date_string(text) == expected


@pytest.mark.parametrize("text", [None, "", "   ", "someday", "1954-02-30", "13/45/2000"])
def test_parse_date_string_rejects(text):
    assert parse_date_string(text) is None


def test_age_and_birth_date_round_trip_by_year():
    assert age_from_birth_date(date(1980, 12, 31), TODAY) == 45
    assert birth_date_from_age(45, TODAY) == date(1980, 1, 1)


def test_future_birth_date_gives_zero_age():
    assert age_from_birth_date(date(2030, 1, 1), TODAY) == 0


def test_reconcile_prefers_birth_date():
    assert reconcile_age(10, date(2000, 5, 5), TODAY) == (25, date(2000, 5, 5))
    assert reconcile_age(30, None, TODAY) == (30, date(1995, 1, 1))
    assert reconcile_age(None, None, TODAY) == (0, None)
    assert reconcile_age(0, None, TODAY) == (0, None)
