"""Calendar date and weekday normalization for day-summary rows."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, weekday

from report_builder.model import DayRecord

# First matching format wins; 03/04/2024 is read as March 4.
DATE_FORMATS: tuple[str, ...] = ("%Y-%m-%d", "%m/%d/%Y", "%d/%m/%Y")

# Indexed by date.weekday().
WEEKDAYS: tuple[weekday, ...] = (MO, TU, WE, TH, FR, SA, SU)

_WEEKDAY_NAMES: dict[str, weekday] = {
    "mon": MO,
    "monday": MO,
    "tue": TU,
    "tues": TU,
    "tuesday": TU,
    "wed": WE,
    "wednesday": WE,
    "thu": TH,
    "thur": TH,
    "thurs": TH,
    "thursday": TH,
    "fri": FR,
    "friday": FR,
    "sat": SA,
    "saturday": SA,
    "sun": SU,
    "sunday": SU,
}

_DISPLAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def parse_calendar_date(value: str) -> date | None:
    """Parse ``value`` with the first matching entry of DATE_FORMATS."""
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def parse_weekday_name(value: str) -> weekday | None:
    """Normalize a free-text weekday name ("Mon", " thursday ") or None."""
    return _WEEKDAY_NAMES.get(value.strip().lower())


def determine_weekday(record: DayRecord) -> weekday | None:
    """Weekday of a record: the parsed date wins over the weekday label."""
    parsed = parse_calendar_date(record.calendar_date)
    if parsed is not None:
        return WEEKDAYS[parsed.weekday()]
    return parse_weekday_name(record.weekday_label)


def weekday_display_name(day: weekday) -> str:
    return _DISPLAY_NAMES[day.weekday]


def _date_sort_key(record: DayRecord) -> tuple[int, date, str]:
    parsed = parse_calendar_date(record.calendar_date)
    if parsed is not None:
        # Equal dates keep their encounter order.
        return (0, parsed, "")
    return (1, date.min, record.calendar_date)


def sort_records_by_date(records: Iterable[DayRecord]) -> list[DayRecord]:
    """Return a new list ordered by date.

    Parseable dates come first in ascending order; unparseable dates follow,
    ordered by their raw text.
    """
    return sorted(records, key=_date_sort_key)
