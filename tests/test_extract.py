"""Tests for day-record extraction from GGIR day-summary CSVs."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from report_builder.columns import locate_required_columns
from report_builder.extract import (
    collect_activity_metrics,
    extract_day_record,
    iter_day_records,
    read_day_summary,
)

HEADER = (
    "ID,calendar_date,weekday,dur_spt_min,dur_day_total_IN_min,"
    "dur_day_total_LIG_min,dur_day_total_MOD_min,dur_day_total_VIG_min"
)
COLUMNS = locate_required_columns(HEADER.split(","))


def _write_csv(path: Path, *rows: str, header: str = HEADER) -> Path:
    path.write_text("\n".join([header, *rows]) + "\n", encoding="utf-8")
    return path


def test_extract_day_record_trims_and_parses() -> None:
    row = (" 7001 ", "2024-03-04", " Monday", "480", "600.5", "120", "30", " 10 ")
    record = extract_day_record(Path("a.csv"), row, COLUMNS)
    assert record is not None
    assert record.participant_id == "7001"
    assert record.weekday_label == "Monday"
    assert record.sleep_minutes == 480.0
    assert record.inactive_minutes == 600.5
    assert record.vigorous_minutes == 10.0


def test_extract_day_record_accepts_negative_durations() -> None:
    row = ("7001", "2024-03-04", "Mon", "-5", "600", "120", "30", "10")
    record = extract_day_record(Path("a.csv"), row, COLUMNS)
    assert record is not None
    assert record.sleep_minutes == -5.0


def test_extract_day_record_skips_blank_text_field(
    caplog: pytest.LogCaptureFixture,
) -> None:
    row = ("7001", "   ", "Mon", "480", "600", "120", "30", "10")
    with caplog.at_level(logging.WARNING):
        assert extract_day_record(Path("a.csv"), row, COLUMNS) is None
    assert "missing value for calendar_date" in caplog.text
    assert "a.csv" in caplog.text


def test_extract_day_record_skips_unparseable_number(
    caplog: pytest.LogCaptureFixture,
) -> None:
    row = ("7001", "2024-03-04", "Mon", "480", "600", "lots", "30", "10")
    with caplog.at_level(logging.WARNING):
        assert extract_day_record(Path("a.csv"), row, COLUMNS) is None
    assert "parse error in dur_day_total_LIG_min" in caplog.text


def test_extract_day_record_skips_short_row(
    caplog: pytest.LogCaptureFixture,
) -> None:
    row = ("7001", "2024-03-04", "Mon", "480")
    with caplog.at_level(logging.WARNING):
        assert extract_day_record(Path("a.csv"), row, COLUMNS) is None
    assert "missing value for dur_day_total_IN_min" in caplog.text


def test_extract_day_record_treats_nan_as_missing() -> None:
    row = ("7001", "2024-03-04", "Mon", float("nan"), "600", "120", "30", "10")
    assert extract_day_record(Path("a.csv"), row, COLUMNS) is None


def test_iter_day_records_filters_lazily() -> None:
    rows = [
        ("7001", "2024-03-04", "Mon", "480", "600", "120", "30", "10"),
        ("", "2024-03-05", "Tue", "480", "600", "120", "30", "10"),
        ("7001", "2024-03-06", "Wed", "480", "600", "120", "30", "10"),
    ]
    it = iter_day_records(Path("a.csv"), rows, COLUMNS)
    assert next(it).calendar_date == "2024-03-04"
    assert [r.calendar_date for r in it] == ["2024-03-06"]


def test_read_day_summary_keeps_text_and_trims_headers(tmp_path: Path) -> None:
    p = _write_csv(
        tmp_path / "day.csv",
        "7001,2024-03-04,Mon,NA,600,120,30,10",
        header=" " + HEADER.replace(",weekday,", ", weekday ,"),
    )
    df = read_day_summary(p)
    assert list(df.columns) == HEADER.split(",")
    assert df.iloc[0]["dur_spt_min"] == "NA"
    assert df.iloc[0]["ID"] == "7001"


def test_read_day_summary_drops_rows_with_extra_fields(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    p = _write_csv(
        tmp_path / "day.csv",
        "7001,2024-03-04,Mon,480,600,120,30,10",
        "7001,2024-03-05,Tue,480,600,120,30,10,extra,fields",
        "7001,2024-03-06,Wed,480,600,120,30,10",
    )
    with caplog.at_level(logging.WARNING):
        df = read_day_summary(p)
    assert list(df["calendar_date"]) == ["2024-03-04", "2024-03-06"]
    assert "read error" in caplog.text


def test_collect_groups_by_participant_in_encounter_order(tmp_path: Path) -> None:
    first = _write_csv(
        tmp_path / "a.csv",
        "7001,2024-03-05,Tue,480,600,120,30,10",
        "7002,2024-03-04,Mon,420,500,100,20,5",
        "7001,2024-03-04,Mon,450,610,110,25,15",
    )
    second = _write_csv(
        tmp_path / "b.csv",
        "7002,2024-03-05,Tue,400,520,90,15,0",
    )
    data = collect_activity_metrics([first, second])
    assert list(data) == ["7001", "7002"]
    assert [r.calendar_date for r in data["7001"]] == ["2024-03-05", "2024-03-04"]
    assert [r.sleep_minutes for r in data["7002"]] == [420.0, 400.0]


def test_collect_skips_bad_rows_and_files(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    good = _write_csv(
        tmp_path / "good.csv",
        "7001,2024-03-04,Mon,480,600,120,30,10",
        "7001,2024-03-05,Tue,,600,120,30,10",
    )
    missing_cols = _write_csv(
        tmp_path / "cols.csv",
        "7002,2024-03-04,480",
        header="ID,calendar_date,dur_spt_min",
    )
    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    absent = tmp_path / "absent.csv"

    with caplog.at_level(logging.WARNING):
        data = collect_activity_metrics([missing_cols, empty, absent, good])

    assert list(data) == ["7001"]
    assert len(data["7001"]) == 1
    assert "missing required column(s): dur_day_total_IN_min" in caplog.text
    assert "missing value for dur_spt_min" in caplog.text
    assert str(empty) in caplog.text
    assert str(absent) in caplog.text


def test_collect_no_files() -> None:
    assert collect_activity_metrics([]) == {}


def test_read_day_summary_drops_long_first_row(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    p = _write_csv(
        tmp_path / "day.csv",
        "7001,2024-03-04,Mon,480,600,120,30,10,99",
        "7001,2024-03-05,Tue,480,600,120,30,10",
        "7001,2024-03-06,Wed,480,600,120,30,10",
    )
    with caplog.at_level(logging.WARNING):
        data = collect_activity_metrics([p])
    assert list(data) == ["7001"]
    assert [r.calendar_date for r in data["7001"]] == ["2024-03-05", "2024-03-06"]
    assert "read error" in caplog.text
    assert "missing value" not in caplog.text


def test_read_day_summary_header_only(tmp_path: Path) -> None:
    df = read_day_summary(_write_csv(tmp_path / "day.csv"))
    assert df.empty
    assert list(df.columns) == HEADER.split(",")


def test_extract_day_record_rejects_digit_separators(
    caplog: pytest.LogCaptureFixture,
) -> None:
    row = ("7001", "2024-03-04", "Mon", "480", "1_000", "120", "30", "10")
    with caplog.at_level(logging.WARNING):
        assert extract_day_record(Path("a.csv"), row, COLUMNS) is None
    assert "parse error in dur_day_total_IN_min" in caplog.text
