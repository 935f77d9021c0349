"""Resolution of the required day-summary columns from a CSV header."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

ID_COLUMN = "ID"
DATE_COLUMN = "calendar_date"
WEEKDAY_COLUMN = "weekday"
SLEEP_COLUMN = "dur_spt_min"
DURATION_VARIANTS: tuple[str, ...] = ("IN", "LIG", "MOD", "VIG")
DURATION_COLUMNS: tuple[str, ...] = tuple(
    f"dur_day_total_{variant}_min" for variant in DURATION_VARIANTS
)


class MissingColumnsError(ValueError):
    """Raised when a header lacks one or more required columns."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = sorted(set(missing))
        super().__init__(
            f"missing required column(s): {', '.join(self.missing)}"
        )


@dataclass(frozen=True)
class ColumnLookup:
    """Positions of the required columns within a row."""

    id: int
    calendar_date: int
    weekday: int
    total_durations: tuple[int, int, int, int]
    sleep_minutes: int


def locate_required_columns(headers: Sequence[str]) -> ColumnLookup:
    """Map every required column name to its position in ``headers``.

    Matching is exact and case-sensitive; the first occurrence wins.

    Args:
        headers: Header names in file order.

    Returns:
        Column positions for the required fields.

    Raises:
        MissingColumnsError: With every absent name, reported once each.
    """
    missing: list[str] = []

    def find(name: str) -> int:
        for index, header in enumerate(headers):
            if header == name:
                return index
        missing.append(name)
        return -1

    id_index = find(ID_COLUMN)
    date_index = find(DATE_COLUMN)
    weekday_index = find(WEEKDAY_COLUMN)
    sleep_index = find(SLEEP_COLUMN)
    in_index, lig_index, mod_index, vig_index = (
        find(name) for name in DURATION_COLUMNS
    )

    if missing:
        raise MissingColumnsError(missing)
    return ColumnLookup(
        id=id_index,
        calendar_date=date_index,
        weekday=weekday_index,
        total_durations=(in_index, lig_index, mod_index, vig_index),
        sleep_minutes=sleep_index,
    )
