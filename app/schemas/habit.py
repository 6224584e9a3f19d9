"""
Habit / HabitLog payloads and the snapshot envelope shared by every endpoint.

Clients send the habits and logs they already hold; nothing is persisted.
Dates are ISO `YYYY-MM-DD` strings and are parsed by the domain layer, so a
malformed `logDate` comes back as a DATA_ERROR rather than a VALIDATION_ERROR.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from pydantic import Field

from app.models.habit import Habit, HabitCategory, HabitLog
from app.schemas.common import CamelModel


class HabitIn(CamelModel):
    id: str = Field(min_length=1)
    title: str = Field(min_length=1, max_length=256)
    frequency: str = Field(
        default="daily",
        description='"daily" | "weekly" | "monthly" | "custom". Unknown values are treated as daily.',
    )
    user_id: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    category: Optional[HabitCategory] = None
    custom_days: list[Union[int, str]] = Field(
        default_factory=list,
        description='["mon", "wed"] for weekly habits, [1, 15, "last"] for monthly ones.',
        examples=[["mon", "wed", "fri"], [1, 15, "last"]],
    )
    time_of_day: Optional[str] = None
    start_date: Optional[str] = Field(default=None, examples=["2026-01-01"])
    end_date: Optional[str] = Field(default=None, examples=["2026-12-31"])
    streak_enabled: bool = True
    streak_reset_after_missing_days: Optional[int] = Field(default=None, ge=0)
    sort_order: int = 0
    archived: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_domain(self) -> Habit:
        return Habit(
            id=self.id,
            title=self.title,
            frequency=self.frequency,
            user_id=self.user_id,
            description=self.description,
            icon=self.icon,
            color=self.color,
            category=self.category.value if self.category else None,
            custom_days=tuple(self.custom_days),
            time_of_day=self.time_of_day,
            start_date=self.start_date,
            end_date=self.end_date,
            streak_enabled=self.streak_enabled,
            streak_reset_after_missing_days=self.streak_reset_after_missing_days,
            sort_order=self.sort_order,
            archived=self.archived,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class HabitLogIn(CamelModel):
    id: Optional[str] = None
    habit_id: str = Field(min_length=1)
    user_id: Optional[str] = None
    log_date: str = Field(examples=["2026-02-21"])
    completed: bool = True
    notes: Optional[str] = None
    completed_at: Optional[str] = Field(default=None, examples=["2026-02-21T07:45:00+00:00"])
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_domain(self) -> HabitLog:
        return HabitLog(
            id=self.id,
            habit_id=self.habit_id,
            user_id=self.user_id,
            log_date=self.log_date,
            completed=self.completed,
            notes=self.notes,
            completed_at=self.completed_at,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class HabitOut(CamelModel):
    id: str
    title: str
    frequency: str
    user_id: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    category: Optional[str] = None
    custom_days: list[Union[int, str]] = Field(default_factory=list)
    time_of_day: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    streak_enabled: bool = True
    streak_reset_after_missing_days: Optional[int] = None
    sort_order: int = 0
    archived: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Snapshot envelope
# ---------------------------------------------------------------------------

class SnapshotRequest(CamelModel):
    """Habits and logs as returned by the data layer, plus an optional "today"."""
    habits: list[HabitIn] = Field(
        default_factory=list,
        description="Active habits, in display order (sort_order, newest first).",
    )
    logs: list[HabitLogIn] = Field(default_factory=list)
    today: Optional[date] = Field(
        default=None,
        description="Reference day for streaks and rolling windows. Defaults to today in TIMEZONE.",
    )

    def domain_habits(self) -> list[Habit]:
        return [h.to_domain() for h in self.habits]

    def domain_logs(self) -> list[HabitLog]:
        return [log.to_domain() for log in self.logs]
