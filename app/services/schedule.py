"""
Schedule projector — which habits are due on which days.

Public API
----------
habits_on_date(habits, day)                       -> list[Habit]
schedule_for_range(habits, start, end)            -> dict[date, list[Habit]]
daily_progress(habits, index, day)                -> DailyProgress
weekly_progress(habits, index, today)             -> WeeklyProgress
calendar_month(habits, index, year, month, today) -> list[CalendarDay]

Input habit order (sort_order, then newest first, as the data layer returns
them) is preserved everywhere; nothing here re-sorts habits.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Sequence

from app.core.errors import InvalidInput
from app.models.habit import Habit
from app.services.calendar_utils import enumerate_days, weekday_label
from app.services.completion_index import CompletionIndex
from app.services.recurrence import is_scheduled
from app.services.rounding import percentage


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class DailyProgress:
    date: date
    total_habits: int
    completed_habits: int
    percentage: int


@dataclass
class ProgressDay:
    date: date
    day_name: str     # "Mon", "Tue", ...
    completed: int
    total: int


@dataclass
class WeeklyProgress:
    days: list[ProgressDay]


@dataclass
class CalendarDay:
    date: date
    day_of_month: int
    is_current_month: bool
    is_today: bool
    is_selected: bool
    scheduled: list[Habit] = field(default_factory=list)
    completed_count: int = 0

    @property
    def total_count(self) -> int:
        return len(self.scheduled)


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------

def habits_on_date(habits: Sequence[Habit], day: date) -> list[Habit]:
    return [h for h in habits if is_scheduled(h, day)]


def schedule_for_range(habits: Sequence[Habit], start: date, end: date) -> dict[date, list[Habit]]:
    """One entry per day in [start, end], even when nothing is due."""
    return {day: habits_on_date(habits, day) for day in enumerate_days(start, end)}


def _completed_count(scheduled: Sequence[Habit], index: CompletionIndex, day: date) -> int:
    return sum(1 for h in scheduled if index.is_completed(h.id, day))


# ---------------------------------------------------------------------------
# Progress views
# ---------------------------------------------------------------------------

def daily_progress(habits: Sequence[Habit], index: CompletionIndex, day: date) -> DailyProgress:
    scheduled = habits_on_date(habits, day)
    completed = _completed_count(scheduled, index, day)
    return DailyProgress(
        date=day,
        total_habits=len(scheduled),
        completed_habits=completed,
        percentage=percentage(completed, len(scheduled)),
    )


def weekly_progress(habits: Sequence[Habit], index: CompletionIndex, today: date) -> WeeklyProgress:
    """The 7 days ending on `today`, oldest first."""
    days = []
    for day in enumerate_days(today - timedelta(days=6), today):
        scheduled = habits_on_date(habits, day)
        days.append(ProgressDay(
            date=day,
            day_name=weekday_label(day),
            completed=_completed_count(scheduled, index, day),
            total=len(scheduled),
        ))
    return WeeklyProgress(days=days)


def month_grid_bounds(year: int, month: int) -> tuple[date, date]:
    """Sunday on/before the 1st through Saturday on/after the last day."""
    if not 1 <= month <= 12:
        raise InvalidInput("Month must be between 1 and 12.", value=month)
    first = date(year, month, 1)
    last = (date(year + (month == 12), month % 12 + 1, 1)) - timedelta(days=1)
    # date.weekday(): Monday=0 ... Sunday=6
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    end = last + timedelta(days=(5 - last.weekday()) % 7)
    return start, end


def calendar_month(
    habits: Sequence[Habit],
    index: CompletionIndex,
    year: int,
    month: int,
    today: date,
    selected: Optional[date] = None,
) -> list[CalendarDay]:
    start, end = month_grid_bounds(year, month)
    grid = []
    for day, scheduled in schedule_for_range(habits, start, end).items():
        grid.append(CalendarDay(
            date=day,
            day_of_month=day.day,
            is_current_month=day.month == month,
            is_today=day == today,
            is_selected=selected is not None and day == selected,
            scheduled=scheduled,
            completed_count=_completed_count(scheduled, index, day),
        ))
    return grid
