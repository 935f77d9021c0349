"""Typed models for day-level activity records and the weekly summary."""

from __future__ import annotations

from dataclasses import dataclass

from dateutil.relativedelta import weekday

# Order of the five hour slots in WeeklySummary.
ACTIVITY_LABELS: tuple[str, ...] = ("Sleep", "IN", "LIG", "MOD", "VIG")

SLEEP = 0
INACTIVE = 1


@dataclass(frozen=True)
class DayRecord:
    """One participant-day observation from a day-summary row."""

    participant_id: str
    calendar_date: str
    weekday_label: str
    inactive_minutes: float
    light_minutes: float
    moderate_minutes: float
    vigorous_minutes: float
    sleep_minutes: float


@dataclass(frozen=True)
class WeeklySummary:
    """Weekly and daily averages across participants.

    Hour tuples follow ACTIVITY_LABELS: sleep, inactive, light, moderate,
    vigorous.
    """

    weekly_hours: tuple[float, float, float, float, float]
    weekly_mvpa_minutes: float
    daily_hours: tuple[float, float, float, float, float]
    daily_mvpa_minutes: float
    daily_sedentary_hours: float
    average_sleep_by_weekday: tuple[tuple[weekday, float], ...]
    days_used: int
    participant_count: int
