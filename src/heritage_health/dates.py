"""Date parsing and age/birth date conversion."""

from datetime import date
import re


# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}


def _make_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_date_string(date_str: str | None) -> date | None:
    """
    Parse a user-entered date into a `date`.
    Returns None if the date cannot be parsed.

    Handles formats like:
    - "1954-11-25"
    - "25 NOV 1954" / "25 November 1954" / "11 Aug. 1968"
    - "NOV 1954" / "May, 1837"
    - "1954"
    - "11/25/1954" / "11-25-1954" (month first)
    - "April 17, 1850" / "SEPT. 17,1910"
    """
    if not date_str:
        return None

    s = date_str.strip()
    if not s:
        return None

    # ISO format "1954-11-25"
    match = re.match(r"^(\d{4})-(\d{1,2})-(\d{1,2})$", s)
    if match:
        return _make_date(int(match.group(1)), int(match.group(2)), int(match.group(3)))

    # "25 NOV 1954" or "11 Aug. 1968" (day month year)
    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(2).upper())
        if month:
            return _make_date(int(match.group(3)), month, int(match.group(1)))

    # "NOV 1954" or "May, 1837" (month year)
    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _make_date(int(match.group(2)), month, 1)

    # "1954" (year only)
    match = re.match(r"^(\d{4})$", s)
    if match:
        return _make_date(int(match.group(1)), 1, 1)

    # "11/25/1954" or "11-25-1954" (MM/DD/YYYY)
    match = re.match(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$", s)
    if match:
        return _make_date(int(match.group(3)), int(match.group(1)), int(match.group(2)))

    # "April 17, 1850" or "SEPT. 17,1910" (month day, year)
    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _make_date(int(match.group(3)), month, int(match.group(2)))

    return None


def age_from_birth_date(birth_date: date, today: date | None = None) -> int:
    """Whole calendar years between the birth year and this year, never negative."""
    today = today or date.today()
    return max(today.year - birth_date.year, 0)


def birth_date_from_age(age: int, today: date | None = None) -> date:
    """January 1st of the year someone of `age` was born in."""
    today = today or date.today()
    return date(today.year - max(age, 0), 1, 1)


def reconcile_age(
    age: int | None, birth_date: date | None, today: date | None = None
) -> tuple[int, date | None]:
    """Return a consistent (age, birth_date) pair; the birth date wins when both are set."""
    if birth_date is not None:
        return age_from_birth_date(birth_date, today), birth_date
    if age is not None and age > 0:
        return age, birth_date_from_age(age, today)
    return 0, None
