from __future__ import annotations

import pytest

from report_builder.columns import (
    ColumnLookup,
    MissingColumnsError,
    locate_required_columns,
)

HEADERS = [
    "ID",
    "filename",
    "calendar_date",
    "weekday",
    "dur_spt_min",
    "dur_day_total_IN_min",
    "dur_day_total_LIG_min",
    "dur_day_total_MOD_min",
    "dur_day_total_VIG_min",
]


def test_locates_columns_in_any_order() -> None:
    headers = list(reversed(HEADERS))
    lookup = locate_required_columns(headers)
    assert lookup == ColumnLookup(
        id=8,
        calendar_date=6,
        weekday=5,
        total_durations=(3, 2, 1, 0),
        sleep_minutes=4,
    )


def test_first_duplicate_header_wins() -> None:
    lookup = locate_required_columns([*HEADERS, "ID"])
    assert lookup.id == 0


def test_reports_every_missing_column() -> None:
    headers = ["ID", "weekday", "dur_day_total_IN_min"]
    with pytest.raises(MissingColumnsError) as excinfo:
        locate_required_columns(headers)
    assert excinfo.value.missing == [
        "calendar_date",
        "dur_day_total_LIG_min",
        "dur_day_total_MOD_min",
        "dur_day_total_VIG_min",
        "dur_spt_min",
    ]
    assert "calendar_date" in str(excinfo.value)


def test_matching_is_case_sensitive() -> None:
    headers = [h if h != "ID" else "id" for h in HEADERS]
    with pytest.raises(MissingColumnsError) as excinfo:
        locate_required_columns(headers)
    assert excinfo.value.missing == ["ID"]


def test_missing_names_are_deduplicated() -> None:
    err = MissingColumnsError(["weekday", "ID", "weekday"])
    assert err.missing == ["ID", "weekday"]
