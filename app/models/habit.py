"""
Habit and HabitLog domain records.

Plain dataclasses: the engine receives fully materialised snapshots of these
from the persistence layer and never writes them back. Construction
normalises loosely-typed input (ISO strings, numeric month-day strings) and
raises DataError for anything it cannot interpret.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

from app.core.errors import DataError
from app.services.calendar_utils import WEEKDAY_TOKENS, as_date, parse_timestamp

LAST_DAY_TOKEN = "last"

CustomDay = Union[str, int]


class Frequency(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    custom = "custom"


class HabitCategory(str, enum.Enum):
    health = "health"
    fitness = "fitness"
    nutrition = "nutrition"
    mindfulness = "mindfulness"
    learning = "learning"
    productivity = "productivity"
    creative = "creative"
    social = "social"
    finance = "finance"
    sleep = "sleep"
    hydration = "hydration"
    personal = "personal"


def _normalize_custom_day(token) -> CustomDay:
    if isinstance(token, bool):
        raise DataError("Invalid custom day token.", field="custom_days", value=token)
    if isinstance(token, int):
        if 1 <= token <= 31:
            return token
        raise DataError("Month day must be between 1 and 31.", field="custom_days", value=token)
    if isinstance(token, str):
        t = token.strip().lower()
        if t in WEEKDAY_TOKENS or t == LAST_DAY_TOKEN:
            return t
        if t.isdigit():
            return _normalize_custom_day(int(t))
    raise DataError("Invalid custom day token.", field="custom_days", value=token)


def _optional_date(value, name: str) -> Optional[date]:
    return None if value in (None, "") else as_date(value, field=name)


def _optional_timestamp(value, name: str) -> Optional[datetime]:
    return None if value in (None, "") else parse_timestamp(value, field=name)


@dataclass
class Habit:
    id: str
    title: str
    frequency: str = Frequency.daily.value
    user_id: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    category: Optional[str] = None
    # Weekday tokens for weekly habits; 1..31 and "last" for monthly ones.
    custom_days: tuple[CustomDay, ...] = ()
    time_of_day: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    streak_enabled: bool = True
    streak_reset_after_missing_days: Optional[int] = None
    sort_order: int = 0
    archived: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.id in (None, ""):
            raise DataError("Habit is missing its id.", field="id")
        if isinstance(self.frequency, Frequency):
            self.frequency = self.frequency.value
        if isinstance(self.category, HabitCategory):
            self.category = self.category.value
        self.custom_days = tuple(_normalize_custom_day(t) for t in (self.custom_days or ()))
        self.start_date = _optional_date(self.start_date, "start_date")
        self.end_date = _optional_date(self.end_date, "end_date")
        self.created_at = _optional_timestamp(self.created_at, "created_at")
        self.updated_at = _optional_timestamp(self.updated_at, "updated_at")


@dataclass
class HabitLog:
    habit_id: str
    log_date: date
    # False is an explicit "not done" override, distinct from having no log.
    completed: bool = True
    id: Optional[str] = None
    user_id: Optional[str] = None
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.habit_id in (None, ""):
            raise DataError("Habit log is missing habit_id.", field="habit_id")
        if self.log_date in (None, ""):
            raise DataError("Habit log is missing log_date.", field="log_date")
        self.log_date = as_date(self.log_date, field="log_date")
        self.completed_at = _optional_timestamp(self.completed_at, "completed_at")
        self.created_at = _optional_timestamp(self.created_at, "created_at")
        self.updated_at = _optional_timestamp(self.updated_at, "updated_at")


__all__ = [
    "Frequency",
    "HabitCategory",
    "Habit",
    "HabitLog",
    "LAST_DAY_TOKEN",
    "WEEKDAY_TOKENS",
]
