"""
Schedule router — which habits are due, and how the days went.

POST /schedule/day        — habits due on one day + daily progress
POST /schedule/range      — habit ids due on each day of a window
POST /schedule/week       — 7-day progress ending today
POST /schedule/calendar   — month grid for the calendar view
POST /habits/stats        — habits with streaks and rolling completion counts
"""
from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings
from app.schemas.common import ErrorResponse
from app.schemas.habit import HabitOut, SnapshotRequest
from app.schemas.schedule import (
    CalendarDayResponse,
    CalendarMonthRequest,
    CalendarMonthResponse,
    DailyProgressResponse,
    HabitStatsRequest,
    HabitWithStatsResponse,
    ProgressDayResponse,
    ScheduleDayRequest,
    ScheduleDayResponse,
    ScheduledDay,
    ScheduleRangeRequest,
    ScheduleRangeResponse,
    WeeklyProgressResponse,
)
from app.services.analytics import HabitWithStats, habits_with_stats
from app.services.calendar_utils import as_date, current_date, ensure_range
from app.services.completion_index import build_index
from app.services.schedule import (
    CalendarDay,
    calendar_month,
    daily_progress,
    habits_on_date,
    schedule_for_range,
    weekly_progress,
)

router = APIRouter(tags=["schedule"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _calendar_day_to_response(d: CalendarDay) -> CalendarDayResponse:
    return CalendarDayResponse(
        date=d.date,
        day_of_month=d.day_of_month,
        is_current_month=d.is_current_month,
        is_today=d.is_today,
        is_selected=d.is_selected,
        habit_ids=[h.id for h in d.scheduled],
        completed_count=d.completed_count,
        total_count=d.total_count,
    )


def _stats_to_response(s: HabitWithStats) -> HabitWithStatsResponse:
    return HabitWithStatsResponse(
        **HabitOut.model_validate(s.habit).model_dump(),
        completed_today=s.completed_today,
        current_streak=s.current_streak,
        longest_streak=s.longest_streak,
        total_completions=s.total_completions,
        completions_last_7_days=s.completions_last_7_days,
        completions_last_30_days=s.completions_last_30_days,
        last_completed_date=s.last_completed_date,
    )


# ---------------------------------------------------------------------------
# POST /schedule/day
# ---------------------------------------------------------------------------

@router.post(
    "/schedule/day",
    response_model=ScheduleDayResponse,
    summary="Habits due on a single day",
)
def schedule_day(body: ScheduleDayRequest):
    """
    Filter the habits by their recurrence rule and validity window.
    `progress` counts completions among the habits due that day only.
    """
    day = body.day or body.today or current_date(settings.tz)
    habits = body.domain_habits()
    index = build_index(body.domain_logs())
    return ScheduleDayResponse(
        date=day,
        habits=[HabitOut.model_validate(h) for h in habits_on_date(habits, day)],
        progress=DailyProgressResponse.model_validate(daily_progress(habits, index, day)),
    )


# ---------------------------------------------------------------------------
# POST /schedule/range
# ---------------------------------------------------------------------------

@router.post(
    "/schedule/range",
    response_model=ScheduleRangeResponse,
    summary="Habits due on each day of a window",
    responses={
        422: {"model": ErrorResponse, "description": "startDate is after endDate."},
    },
)
def schedule_range(body: ScheduleRangeRequest):
    start = as_date(body.start_date, field="start_date")
    end = as_date(body.end_date, field="end_date")
    ensure_range(start, end)
    schedule = schedule_for_range([h.to_domain() for h in body.habits], start, end)
    return ScheduleRangeResponse(
        start_date=start,
        end_date=end,
        days=[
            ScheduledDay(date=day, habit_ids=[h.id for h in due])
            for day, due in schedule.items()
        ],
    )


# ---------------------------------------------------------------------------
# POST /schedule/week
# ---------------------------------------------------------------------------

@router.post(
    "/schedule/week",
    response_model=WeeklyProgressResponse,
    summary="Completed vs due habits for the last 7 days",
)
def schedule_week(body: SnapshotRequest):
    today = body.today or current_date(settings.tz)
    progress = weekly_progress(body.domain_habits(), build_index(body.domain_logs()), today)
    return WeeklyProgressResponse(
        days=[ProgressDayResponse.model_validate(d) for d in progress.days],
    )


# ---------------------------------------------------------------------------
# POST /schedule/calendar
# ---------------------------------------------------------------------------

@router.post(
    "/schedule/calendar",
    response_model=CalendarMonthResponse,
    summary="Month grid with due and completed counts",
)
def schedule_calendar(body: CalendarMonthRequest):
    today = body.today or current_date(settings.tz)
    grid = calendar_month(
        body.domain_habits(),
        build_index(body.domain_logs()),
        body.year,
        body.month,
        today=today,
        selected=body.selected,
    )
    return CalendarMonthResponse(
        year=body.year,
        month=body.month,
        days=[_calendar_day_to_response(d) for d in grid],
    )


# ---------------------------------------------------------------------------
# POST /habits/stats
# ---------------------------------------------------------------------------

@router.post(
    "/habits/stats",
    response_model=list[HabitWithStatsResponse],
    summary="Habits with completion status, streaks and rolling counts",
)
def habit_stats(body: HabitStatsRequest):
    today = body.today or current_date(settings.tz)
    grace = body.grace_days if body.grace_days is not None else settings.STREAK_GRACE_DAYS
    stats = habits_with_stats(
        body.domain_habits(),
        body.domain_logs(),
        day=body.day or today,
        today=today,
        grace_days=grace,
    )
    return [_stats_to_response(s) for s in stats]
