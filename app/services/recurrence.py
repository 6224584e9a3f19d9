"""
Recurrence evaluator: is a habit due on a given calendar day?

Rules, in order
---------------
  0. Archived habits are never due.
  1. Outside the [start_date, end_date] validity window -> not due.
  2. By frequency:
       daily    -> every day
       weekly   -> custom_days holds weekday tokens; empty means every day
       monthly  -> custom_days holds 1..31 and/or "last"; empty means every day
       custom   -> every day (no custom rule language exists yet)
       unknown  -> every day
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Union

from app.models.habit import LAST_DAY_TOKEN, Frequency, Habit
from app.services.calendar_utils import as_date, day_of_week, is_last_day_of_month


def _matches_weekly(habit: Habit, day: date) -> bool:
    if not habit.custom_days:
        return True
    return day_of_week(day) in habit.custom_days


def _matches_monthly(habit: Habit, day: date) -> bool:
    if not habit.custom_days:
        return True
    if day.day in habit.custom_days:
        return True
    return LAST_DAY_TOKEN in habit.custom_days and is_last_day_of_month(day)


def is_scheduled(habit: Habit, day: Union[date, datetime]) -> bool:
    if habit.archived:
        return False
    day = as_date(day)
    if habit.start_date is not None and day < habit.start_date:
        return False
    if habit.end_date is not None and day > habit.end_date:
        return False

    if habit.frequency == Frequency.weekly.value:
        return _matches_weekly(habit, day)
    if habit.frequency == Frequency.monthly.value:
        return _matches_monthly(habit, day)
    return True
