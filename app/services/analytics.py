"""
Analytics engine — per-habit statistics and the aggregate reports payload.

Definitions
-----------
completion_rate    round(completions in window / days in window * 100).
                   The denominator is the whole window, not the days the
                   habit was actually due.
consistency_score  max(0, round(base - penalty)), base = completion rate
                   before rounding, penalty = 2 per missed day beyond the
                   first in every gap between two consecutive completions.
best_day_of_week   weekday token with most completions (ties -> earliest, mon first).
best_time_of_day   morning 5-11, afternoon 12-16, evening 17-21, night 22-4,
                   from `completed_at` (ties -> earliest bucket).
week comparison    last 7 days vs the 7 days before them.
heatmap            per day completions / number of active habits.

Public API
----------
habit_analytics(habit, index, start, end)     -> HabitAnalytics
week_comparison(habits, index, today)         -> WeekComparison
heatmap(habits, index, start, end)            -> list[HeatmapDay]
behavioral_insights(analytics)                -> BehavioralInsights
top_streaks(habits, index, today)             -> list[StreakInfo]
habits_with_stats(habits, logs, day, today)   -> list[HabitWithStats]
get_full_reports_data(habits, logs, start, end, today) -> FullReport
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Sequence

from app.models.habit import Habit, HabitLog, WEEKDAY_TOKENS
from app.services.calendar_utils import (
    DateLike,
    as_date,
    current_date,
    day_count,
    day_of_week,
    enumerate_days,
    ensure_range,
)
from app.services.completion_index import CompletionIndex, build_index
from app.services.rounding import percentage, round_half_up
from app.services.streaks import streak_from_dates

logger = logging.getLogger(__name__)

DEFAULT_ICON = "🎯"
TIME_OF_DAY_BUCKETS = ("morning", "afternoon", "evening", "night")
GAP_PENALTY_WEIGHT = 2
DEFAULT_TOP_STREAKS = 3


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class HabitAnalytics:
    habit_id: str
    habit_title: str
    icon: str
    completion_rate: int
    consistency_score: int
    total_completions: int
    best_day_of_week: str
    best_time_of_day: str


@dataclass
class WeekWindow:
    completions: int
    rate: int
    start_date: date
    end_date: date


@dataclass
class WeekComparison:
    current_week: WeekWindow
    last_week: WeekWindow
    change: int


@dataclass
class HeatmapDay:
    date: date
    completion_rate: int
    completed_count: int
    total_scheduled: int


@dataclass
class BehavioralInsights:
    best_day_of_week: str
    best_time_of_day: str
    average_consistency_score: int
    total_active_habits: int


@dataclass
class StreakInfo:
    habit_id: str
    habit_title: str
    icon: str
    current_streak: int
    longest_streak: int
    rank: int = 0


@dataclass
class HabitWithStats:
    habit: Habit
    completed_today: bool
    current_streak: int
    longest_streak: int
    total_completions: int
    completions_last_7_days: int
    completions_last_30_days: int
    last_completed_date: Optional[date]


@dataclass
class FullReport:
    habit_analytics: list[HabitAnalytics]
    week_comparison: Optional[WeekComparison]
    display_insights: Optional[BehavioralInsights]
    heatmap_data: list[HeatmapDay]
    top_streaks: list[StreakInfo]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _first_max(keys: Sequence[str], counts: Counter) -> str:
    """Key with the highest count; the earliest key in `keys` wins ties."""
    return max(keys, key=lambda k: counts.get(k, 0))


def _time_bucket(hour: int) -> str:
    if 5 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 22:
        return "evening"
    return "night"


def _local_hour(ts: datetime, tz: Optional[tzinfo]) -> int:
    if tz is not None and ts.tzinfo is not None:
        ts = ts.astimezone(tz)
    return ts.hour


def active_habits(habits: Iterable[Habit]) -> list[Habit]:
    return [h for h in habits if not h.archived]


# ---------------------------------------------------------------------------
# Per-habit metrics
# ---------------------------------------------------------------------------

def completion_rate(completions: int, start: date, end: date) -> int:
    return percentage(completions, max(1, day_count(start, end)))


def consistency_score(days: Sequence[date], start: date, end: date) -> int:
    """`days` are the completed days inside [start, end], ascending."""
    if not days:
        return 0
    base = len(days) / max(1, day_count(start, end)) * 100

    penalty = 0
    for earlier, later in zip(days, days[1:]):
        missing = (later - earlier).days - 1
        if missing > 1:
            penalty += (missing - 1) * GAP_PENALTY_WEIGHT

    return max(0, round_half_up(base - penalty))


def best_day_of_week(logs: Iterable[HabitLog]) -> str:
    counts = Counter(day_of_week(log.log_date) for log in logs)
    return _first_max(WEEKDAY_TOKENS, counts)


def best_time_of_day(logs: Iterable[HabitLog], tz: Optional[tzinfo] = None) -> str:
    counts = Counter(
        _time_bucket(_local_hour(log.completed_at, tz))
        for log in logs
        if log.completed_at is not None
    )
    return _first_max(TIME_OF_DAY_BUCKETS, counts)


def habit_analytics(
    habit: Habit,
    index: CompletionIndex,
    start: date,
    end: date,
    tz: Optional[tzinfo] = None,
) -> HabitAnalytics:
    logs = index.completed_logs(habit.id, start, end)
    days = [log.log_date for log in logs]
    return HabitAnalytics(
        habit_id=habit.id,
        habit_title=habit.title,
        icon=habit.icon or DEFAULT_ICON,
        completion_rate=completion_rate(len(logs), start, end),
        consistency_score=consistency_score(days, start, end),
        total_completions=len(logs),
        best_day_of_week=best_day_of_week(logs),
        best_time_of_day=best_time_of_day(logs, tz),
    )


# ---------------------------------------------------------------------------
# Cross-habit aggregates
# ---------------------------------------------------------------------------

def _completions_between(habit_ids: Iterable[str], index: CompletionIndex, start: date, end: date) -> int:
    return sum(index.count_completions(hid, start, end) for hid in habit_ids)


def week_change(current: int, previous: int) -> int:
    if previous == 0:
        return 100 if current > 0 else 0
    return round_half_up((current - previous) / previous * 100)


def week_comparison(habits: Sequence[Habit], index: CompletionIndex, today: date) -> WeekComparison:
    habit_ids = [h.id for h in habits]
    slots = 7 * max(1, len(habits))

    def window(end: date) -> WeekWindow:
        start = end - timedelta(days=6)
        completions = _completions_between(habit_ids, index, start, end)
        return WeekWindow(
            completions=completions,
            rate=percentage(completions, slots),
            start_date=start,
            end_date=end,
        )

    current = window(today)
    previous = window(today - timedelta(days=7))
    return WeekComparison(
        current_week=current,
        last_week=previous,
        change=week_change(current.completions, previous.completions),
    )


def heatmap(habits: Sequence[Habit], index: CompletionIndex, start: date, end: date) -> list[HeatmapDay]:
    total = len(habits)
    days = []
    for day in enumerate_days(start, end):
        completed = sum(1 for h in habits if index.is_completed(h.id, day))
        days.append(HeatmapDay(
            date=day,
            completion_rate=percentage(completed, total),
            completed_count=completed,
            total_scheduled=total,
        ))
    return days


def behavioral_insights(analytics: Sequence[HabitAnalytics]) -> BehavioralInsights:
    if not analytics:
        return BehavioralInsights(
            best_day_of_week=WEEKDAY_TOKENS[0],
            best_time_of_day=TIME_OF_DAY_BUCKETS[0],
            average_consistency_score=0,
            total_active_habits=0,
        )
    day_votes = Counter(a.best_day_of_week for a in analytics)
    time_votes = Counter(a.best_time_of_day for a in analytics)
    mean = sum(a.consistency_score for a in analytics) / len(analytics)
    return BehavioralInsights(
        best_day_of_week=_first_max(WEEKDAY_TOKENS, day_votes),
        best_time_of_day=_first_max(TIME_OF_DAY_BUCKETS, time_votes),
        average_consistency_score=round_half_up(mean),
        total_active_habits=len(analytics),
    )


def top_streaks(
    habits: Sequence[Habit],
    index: CompletionIndex,
    today: date,
    limit: int = DEFAULT_TOP_STREAKS,
    grace_days: int = 0,
) -> list[StreakInfo]:
    infos = []
    for habit in habits:
        streak = streak_from_dates(index.completed_dates(habit.id), today, grace_days)
        infos.append(StreakInfo(
            habit_id=habit.id,
            habit_title=habit.title,
            icon=habit.icon or DEFAULT_ICON,
            current_streak=streak.current,
            longest_streak=streak.longest,
        ))
    # sorted() is stable: equal streaks keep input order.
    ranked = sorted(infos, key=lambda s: s.current_streak, reverse=True)[:max(0, limit)]
    for rank, info in enumerate(ranked, start=1):
        info.rank = rank
    return ranked


def habits_with_stats(
    habits: Sequence[Habit],
    logs: Iterable[HabitLog],
    day: Optional[date] = None,
    today: Optional[date] = None,
    grace_days: int = 0,
) -> list[HabitWithStats]:
    today = today or current_date()
    day = day or today
    index = build_index(logs)
    result = []
    for habit in active_habits(habits):
        days = index.completed_dates(habit.id)
        streak = streak_from_dates(days, today, grace_days)
        result.append(HabitWithStats(
            habit=habit,
            completed_today=index.is_completed(habit.id, day),
            current_streak=streak.current,
            longest_streak=streak.longest,
            total_completions=len(days),
            completions_last_7_days=index.count_completions(habit.id, today - timedelta(days=6), today),
            completions_last_30_days=index.count_completions(habit.id, today - timedelta(days=29), today),
            last_completed_date=max((d for d in days if d <= today), default=None),
        ))
    return result


# ---------------------------------------------------------------------------
# Public: one-shot reports payload
# ---------------------------------------------------------------------------

def get_full_reports_data(
    habits: Iterable[Habit],
    logs: Iterable[HabitLog],
    start: DateLike,
    end: DateLike,
    today: Optional[date] = None,
    grace_days: int = 0,
    top_limit: int = DEFAULT_TOP_STREAKS,
    tz: Optional[tzinfo] = None,
) -> FullReport:
    """
    Everything the reports screen needs in one call.

    `logs` should cover the full history needed for streaks and the week
    comparison; only the [start, end] slice feeds the per-habit analytics
    and the heatmap. Logs of habits not in `habits` are ignored.
    """
    start = as_date(start, field="start_date")
    end = as_date(end, field="end_date")
    ensure_range(start, end)
    today = today or current_date(tz)

    active = active_habits(habits)
    if not active:
        return FullReport(
            habit_analytics=[],
            week_comparison=None,
            display_insights=None,
            heatmap_data=[],
            top_streaks=[],
        )

    index = build_index(logs)
    analytics = [habit_analytics(h, index, start, end, tz) for h in active]
    report = FullReport(
        habit_analytics=analytics,
        week_comparison=week_comparison(active, index, today),
        display_insights=behavioral_insights(analytics),
        heatmap_data=heatmap(active, index, start, end),
        top_streaks=top_streaks(active, index, today, top_limit, grace_days),
    )
    logger.info(
        "Built reports for %d habits over %s..%s",
        len(active), start, end,
        extra={"duplicate_logs": len(index.conflicts)},
    )
    return report
