"""Extraction of validated day records from GGIR day-summary CSV files."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

import pandas as pd

from report_builder.columns import (
    DATE_COLUMN,
    DURATION_COLUMNS,
    ID_COLUMN,
    SLEEP_COLUMN,
    WEEKDAY_COLUMN,
    ColumnLookup,
    MissingColumnsError,
    locate_required_columns,
)
from report_builder.model import DayRecord

logger = logging.getLogger(__name__)


def read_day_summary(path: Path) -> pd.DataFrame:
    """Read a day-summary CSV as text, with trimmed header names.

    Rows with more fields than the header are logged and dropped.

    Raises:
        OSError: If the file cannot be opened.
        ValueError: If the file is empty, not decodable or not parseable.
    """

    def _skip_bad_line(line: list[str]) -> None:
        logger.warning(
            "Skipping row in %s due to read error: expected at most "
            "header width, got %d fields",
            path,
            len(line),
        )

    # Header is row 0; any row wider than it goes to _skip_bad_line.
    raw = pd.read_csv(
        path,
        header=None,
        dtype=str,
        keep_default_na=False,
        engine="python",
        on_bad_lines=_skip_bad_line,
    )
    df = raw.iloc[1:].reset_index(drop=True)
    df.columns = [str(c).strip() for c in raw.iloc[0]]
    return df


def _field(row: Sequence[object], index: int) -> str | None:
    """Trimmed text at ``index``; None when absent, NaN or blank."""
    if index >= len(row):
        return None
    value = row[index]
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _required_text(
    path: Path, row: Sequence[object], index: int, column: str
) -> str | None:
    value = _field(row, index)
    if value is None:
        logger.warning(
            "Skipping row in %s due to missing value for %s.", path, column
        )
    return value


def _required_float(
    path: Path, row: Sequence[object], index: int, column: str
) -> float | None:
    raw = _required_text(path, row, index, column)
    if raw is None:
        return None
    try:
        if "_" in raw:
            raise ValueError(f"could not convert string to float: {raw!r}")
        return float(raw)
    except ValueError as exc:
        logger.warning(
            "Skipping row in %s due to parse error in %s: %s", path, column, exc
        )
        return None


def extract_day_record(
    path: Path, row: Sequence[object], columns: ColumnLookup
) -> DayRecord | None:
    """Build a DayRecord from one row, or None if any field is unusable.

    Extraction is all-or-nothing: the first missing or unparseable field
    skips the whole row and logs which column was at fault. Durations are
    not range-checked.
    """
    participant_id = _required_text(path, row, columns.id, ID_COLUMN)
    if participant_id is None:
        return None
    calendar_date = _required_text(path, row, columns.calendar_date, DATE_COLUMN)
    if calendar_date is None:
        return None
    weekday_label = _required_text(path, row, columns.weekday, WEEKDAY_COLUMN)
    if weekday_label is None:
        return None

    totals: list[float] = []
    for index, column in zip(columns.total_durations, DURATION_COLUMNS):
        value = _required_float(path, row, index, column)
        if value is None:
            return None
        totals.append(value)

    sleep_minutes = _required_float(path, row, columns.sleep_minutes, SLEEP_COLUMN)
    if sleep_minutes is None:
        return None

    return DayRecord(
        participant_id=participant_id,
        calendar_date=calendar_date,
        weekday_label=weekday_label,
        inactive_minutes=totals[0],
        light_minutes=totals[1],
        moderate_minutes=totals[2],
        vigorous_minutes=totals[3],
        sleep_minutes=sleep_minutes,
    )


def iter_day_records(
    path: Path, rows: Iterable[Sequence[object]], columns: ColumnLookup
) -> Iterator[DayRecord]:
    """Yield the valid day records of ``rows``; skipped rows are logged."""
    for row in rows:
        record = extract_day_record(path, row, columns)
        if record is not None:
            yield record


def collect_activity_metrics(files: Iterable[Path]) -> dict[str, list[DayRecord]]:
    """Group the day records of every file by participant ID.

    Files are read one after the other. A file that cannot be read, or whose
    header lacks a required column, is logged and skipped as a whole.

    Args:
        files: Day-summary CSV paths.

    Returns:
        Participant ID -> records in file/row encounter order.
    """
    data: dict[str, list[DayRecord]] = {}
    for path in files:
        try:
            frame = read_day_summary(path)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping %s: failed to read file: %s", path, exc)
            continue
        try:
            columns = locate_required_columns(list(frame.columns))
        except MissingColumnsError as exc:
            logger.warning(
                "Skipping %s: file is missing required column(s): %s",
                path,
                ", ".join(exc.missing),
            )
            continue

        rows = frame.itertuples(index=False, name=None)
        kept = 0
        for record in iter_day_records(path, rows, columns):
            data.setdefault(record.participant_id, []).append(record)
            kept += 1
        logger.debug("Read %d of %d row(s) from %s", kept, len(frame), path)
    return data
