"""
Reports and streak schemas.

POST /reports/full   → ReportsRequest      → FullReportResponse
POST /streaks        → StreakRequest       → StreakResponse
POST /streaks/top    → TopStreaksRequest   → list[StreakInfoResponse]
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.habit import HabitLogIn, SnapshotRequest


class ReportsRequest(SnapshotRequest):
    start_date: str = Field(examples=["2026-02-01"])
    end_date: str = Field(examples=["2026-02-28"])
    grace_days: Optional[int] = Field(default=None, ge=0)
    top_limit: Optional[int] = Field(default=None, ge=1, le=50)


class HabitAnalyticsResponse(CamelModel):
    habit_id: str
    habit_title: str
    icon: str
    completion_rate: int = Field(description="Completions / days in window, 0–100.")
    consistency_score: int = Field(description="Completion rate minus the gap penalty, floored at 0.")
    total_completions: int
    best_day_of_week: str = Field(examples=["mon"])
    best_time_of_day: str = Field(examples=["morning"])


class WeekWindowResponse(CamelModel):
    completions: int
    rate: int
    start_date: dt.date
    end_date: dt.date


class WeekComparisonResponse(CamelModel):
    current_week: WeekWindowResponse
    last_week: WeekWindowResponse
    change: int = Field(description="Percent change in completions; 100 when last week had none.")


class BehavioralInsightsResponse(CamelModel):
    best_day_of_week: str
    best_time_of_day: str
    average_consistency_score: int
    total_active_habits: int


class HeatmapDayResponse(CamelModel):
    date: dt.date
    completion_rate: int
    completed_count: int
    total_scheduled: int


class StreakInfoResponse(CamelModel):
    habit_id: str
    habit_title: str
    icon: str
    current_streak: int
    longest_streak: int
    rank: int


class FullReportResponse(CamelModel):
    habit_analytics: list[HabitAnalyticsResponse]
    week_comparison: Optional[WeekComparisonResponse] = None
    display_insights: Optional[BehavioralInsightsResponse] = None
    heatmap_data: list[HeatmapDayResponse]
    top_streaks: list[StreakInfoResponse]


class StreakRequest(CamelModel):
    logs: list[HabitLogIn] = Field(default_factory=list, description="Logs of a single habit.")
    today: Optional[dt.date] = None
    grace_days: Optional[int] = Field(default=None, ge=0)


class StreakResponse(CamelModel):
    current: int
    longest: int


class TopStreaksRequest(SnapshotRequest):
    limit: Optional[int] = Field(default=None, ge=1, le=50)
    grace_days: Optional[int] = Field(default=None, ge=0)
