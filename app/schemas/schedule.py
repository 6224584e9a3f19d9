"""
Scheduling schemas.

POST /schedule/day       → ScheduleDayRequest      → ScheduleDayResponse
POST /schedule/range     → ScheduleRangeRequest    → ScheduleRangeResponse
POST /schedule/week      → SnapshotRequest         → WeeklyProgressResponse
POST /schedule/calendar  → CalendarMonthRequest    → CalendarMonthResponse
POST /habits/stats       → HabitStatsRequest       → list[HabitWithStatsResponse]
"""
from __future__ import annotations

import datetime as dt
from datetime import date
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.habit import HabitIn, HabitOut, SnapshotRequest


class ScheduleDayRequest(SnapshotRequest):
    day: Optional[date] = Field(
        default=None,
        alias="date",
        description="Day to project. Defaults to `today`.",
        examples=["2026-02-21"],
    )


class DailyProgressResponse(CamelModel):
    date: dt.date
    total_habits: int
    completed_habits: int
    percentage: int = Field(description="Completed share of the habits due that day, 0–100.")


class ScheduleDayResponse(CamelModel):
    date: dt.date
    habits: list[HabitOut] = Field(description="Habits due that day, in input order.")
    progress: DailyProgressResponse


class ScheduleRangeRequest(CamelModel):
    habits: list[HabitIn] = Field(default_factory=list)
    start_date: str = Field(examples=["2026-02-01"])
    end_date: str = Field(examples=["2026-02-28"])


class ScheduledDay(CamelModel):
    date: dt.date
    habit_ids: list[str]


class ScheduleRangeResponse(CamelModel):
    start_date: date
    end_date: date
    days: list[ScheduledDay] = Field(description="One item per day, even when nothing is due.")


class ProgressDayResponse(CamelModel):
    date: dt.date
    day_name: str
    completed: int
    total: int


class WeeklyProgressResponse(CamelModel):
    days: list[ProgressDayResponse] = Field(description="The 7 days ending on `today`, oldest first.")


class CalendarMonthRequest(SnapshotRequest):
    year: int = Field(ge=1, le=9998)
    month: int = Field(ge=1, le=12)
    selected: Optional[date] = None


class CalendarDayResponse(CamelModel):
    date: dt.date
    day_of_month: int
    is_current_month: bool
    is_today: bool
    is_selected: bool
    habit_ids: list[str]
    completed_count: int
    total_count: int


class CalendarMonthResponse(CamelModel):
    year: int
    month: int
    days: list[CalendarDayResponse] = Field(
        description="Sunday before the 1st through Saturday after the last day."
    )


class HabitStatsRequest(SnapshotRequest):
    day: Optional[date] = Field(
        default=None,
        alias="date",
        description="Day for `completedToday`. Defaults to `today`.",
    )
    grace_days: Optional[int] = Field(default=None, ge=0)


class HabitWithStatsResponse(HabitOut):
    completed_today: bool
    current_streak: int
    longest_streak: int
    total_completions: int
    completions_last_7_days: int
    completions_last_30_days: int
    last_completed_date: Optional[date] = None
