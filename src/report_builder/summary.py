"""Weekly and daily activity averages across participants."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import cast

from dateutil.relativedelta import weekday

from report_builder.dates import (
    WEEKDAYS,
    determine_weekday,
    sort_records_by_date,
    weekday_display_name,
)
from report_builder.model import (
    ACTIVITY_LABELS,
    INACTIVE,
    SLEEP,
    DayRecord,
    WeeklySummary,
)

MAX_DAYS = 7

_Hours = tuple[float, float, float, float, float]

INSUFFICIENT_DATA_MESSAGE = (
    "Unable to compute weekly or daily averages due to insufficient "
    "overlapping data."
)


def compute_weekly_summary(
    data: Mapping[str, Sequence[DayRecord]],
) -> WeeklySummary | None:
    """Average activity and sleep over a common window of days.

    Every participant contributes the same number of days: the smallest
    day count among participants with data, capped at 7. Each participant's
    records are sorted by date and the earliest ``days_to_use`` are kept.
    Per-participant hour totals are averaged across participants and scaled
    by ``7 / days_to_use`` to a nominal week.

    Args:
        data: Participant ID -> day records. Not modified.

    Returns:
        The summary, or None when no participant has any records.
    """
    groups = [records for records in data.values() if records]
    if not groups:
        return None

    days_to_use = min(MAX_DAYS, min(len(records) for records in groups))
    if days_to_use == 0:
        return None

    per_participant: list[tuple[list[float], float]] = []
    weekday_sleep: dict[weekday, list[float]] = {}

    for records in groups:
        totals = [0.0] * len(ACTIVITY_LABELS)
        mvpa_minutes = 0.0
        for day in sort_records_by_date(records)[:days_to_use]:
            sleep_hours = day.sleep_minutes / 60.0
            totals[0] += sleep_hours
            totals[1] += day.inactive_minutes / 60.0
            totals[2] += day.light_minutes / 60.0
            totals[3] += day.moderate_minutes / 60.0
            totals[4] += day.vigorous_minutes / 60.0
            mvpa_minutes += day.moderate_minutes + day.vigorous_minutes

            day_of_week = determine_weekday(day)
            if day_of_week is not None:
                entry = weekday_sleep.setdefault(day_of_week, [0.0, 0])
                entry[0] += sleep_hours
                entry[1] += 1
        per_participant.append((totals, mvpa_minutes))

    weekly = [0.0] * len(ACTIVITY_LABELS)
    weekly_mvpa = 0.0
    for totals, mvpa_minutes in per_participant:
        for i, value in enumerate(totals):
            weekly[i] += value
        weekly_mvpa += mvpa_minutes

    participant_count = len(per_participant)
    scale = MAX_DAYS / days_to_use
    weekly = [value / participant_count * scale for value in weekly]
    weekly_mvpa = weekly_mvpa / participant_count * scale

    daily = [value / 7.0 for value in weekly]
    # Inactivity includes sleep; what remains is sedentary waking time.
    daily_sedentary = max(0.0, daily[INACTIVE] - daily[SLEEP])

    sleep_by_weekday = tuple(
        (day, weekday_sleep[day][0] / weekday_sleep[day][1])
        for day in WEEKDAYS
        if day in weekday_sleep and weekday_sleep[day][1] > 0
    )

    return WeeklySummary(
        weekly_hours=cast(_Hours, tuple(weekly)),
        weekly_mvpa_minutes=weekly_mvpa,
        daily_hours=cast(_Hours, tuple(daily)),
        daily_mvpa_minutes=weekly_mvpa / 7.0,
        daily_sedentary_hours=daily_sedentary,
        average_sleep_by_weekday=sleep_by_weekday,
        days_used=days_to_use,
        participant_count=participant_count,
    )


def format_summary(summary: WeeklySummary | None) -> list[str]:
    """Render the summary as report lines with two decimals."""
    if summary is None:
        return [INSUFFICIENT_DATA_MESSAGE]

    lines = [
        f"Averaged {summary.days_used} day(s) across "
        f"{summary.participant_count} participant(s).",
        "weekly_average (hours per 7-day week):",
    ]
    lines.extend(
        f"  {label:<5}: {value:.2f}"
        for label, value in zip(ACTIVITY_LABELS, summary.weekly_hours)
    )
    lines.append(
        "weekly_mvpa (minutes per 7-day week): "
        f"{summary.weekly_mvpa_minutes:.2f}"
    )
    lines.append("daily_average (hours per day):")
    lines.extend(
        f"  {label:<5}: {value:.2f}"
        for label, value in zip(ACTIVITY_LABELS, summary.daily_hours)
    )
    lines.append(f"daily_mvpa (minutes per day): {summary.daily_mvpa_minutes:.2f}")
    lines.append(
        "daily_sedentary (hours per day, excluding sleep): "
        f"{summary.daily_sedentary_hours:.2f}"
    )
    if summary.average_sleep_by_weekday:
        lines.append("average_sleep_by_weekday (hours):")
        lines.extend(
            f"  {weekday_display_name(day):<9}: {hours:.2f}"
            for day, hours in summary.average_sleep_by_weekday
        )
    return lines


def participant_overview(
    data: Mapping[str, Sequence[DayRecord]], limit: int = 5
) -> list[str]:
    """One "<id> -> N day(s) of data" line per participant, up to ``limit``."""
    lines = [
        f"  {participant_id} -> {len(records)} day(s) of data"
        for participant_id, records in list(data.items())[:limit]
    ]
    if len(data) > limit:
        lines.append("  ...")
    return lines
