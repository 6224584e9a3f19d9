"""
Streak calculator.

A streak is a run of completed days where no gap between two consecutive
completions is longer than `grace_days` missing days (0 by default, so any
missed day ends the run).

Current streak
--------------
Anchored at today: the run is alive when the most recent completion is today,
or when only "today" itself is still open (most recent completion yesterday,
plus up to `grace_days` further missed days). From the anchor it walks back
one completion at a time until the first breaking gap. Completions dated
after today are ignored for the current streak.

Longest streak
--------------
One ascending scan over the whole history; it always includes the current
run, so longest >= current.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from app.models.habit import HabitLog
from app.services.calendar_utils import current_date
from app.services.completion_index import build_index


@dataclass
class StreakResult:
    current: int
    longest: int


def _missing_between(earlier: date, later: date) -> int:
    return (later - earlier).days - 1


def current_streak(days: Sequence[date], today: date, grace_days: int = 0) -> int:
    """`days` must be ascending and de-duplicated."""
    past = [d for d in days if d <= today]
    if not past:
        return 0
    if _missing_between(past[-1], today) > grace_days:
        return 0

    streak = 1
    for i in range(len(past) - 2, -1, -1):
        if _missing_between(past[i], past[i + 1]) > grace_days:
            break
        streak += 1
    return streak


def longest_streak(days: Sequence[date], grace_days: int = 0) -> int:
    """`days` must be ascending and de-duplicated."""
    longest = 0
    run = 0
    previous: Optional[date] = None
    for day in days:
        if previous is not None and _missing_between(previous, day) <= grace_days:
            run += 1
        else:
            run = 1
        longest = max(longest, run)
        previous = day
    return longest


def streak_from_dates(days: Sequence[date], today: date, grace_days: int = 0) -> StreakResult:
    grace_days = max(0, grace_days)
    return StreakResult(
        current=current_streak(days, today, grace_days),
        longest=longest_streak(days, grace_days),
    )


def completed_days(logs: Iterable[HabitLog]) -> list[date]:
    """Distinct completed days, ascending, after duplicate-log resolution."""
    index = build_index(logs)
    days: set[date] = set()
    for habit_id in index.habit_ids():
        days.update(index.completed_dates(habit_id))
    return sorted(days)


def compute_streak(
    logs: Iterable[HabitLog],
    today: Optional[date] = None,
    grace_days: int = 0,
) -> StreakResult:
    """Current and longest streak for one habit's logs."""
    return streak_from_dates(completed_days(logs), today or current_date(), grace_days)
