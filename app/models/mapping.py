"""
Row adapter between the hosted database tables and the domain records.

Table rows use snake_case column names and store `custom_days` as JSON text.
This module is the only place that knows about that layout; the engine only
ever sees `Habit` / `HabitLog`.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

from app.core.errors import DataError
from app.models.habit import Frequency, Habit, HabitCategory, HabitLog
from app.services.calendar_utils import format_iso_date

DEFAULT_ICON = "🎯"
DEFAULT_COLOR = "#10b981"
DEFAULT_STREAK_RESET_AFTER_MISSING_DAYS = 1


def _require(row: Mapping[str, Any], key: str) -> Any:
    if row.get(key) in (None, ""):
        raise DataError(f"Row is missing required column '{key}'.", field=key)
    return row[key]


def _custom_days(raw: Any) -> list:
    if raw in (None, ""):
        return []
    if isinstance(raw, (list, tuple)):
        return list(raw)
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        raise DataError("custom_days is not valid JSON.", field="custom_days", value=raw)
    if not isinstance(parsed, list):
        raise DataError("custom_days must be a JSON array.", field="custom_days", value=raw)
    return parsed


def habit_from_row(row: Mapping[str, Any]) -> Habit:
    return Habit(
        id=_require(row, "id"),
        title=_require(row, "title"),
        frequency=row.get("frequency") or Frequency.daily.value,
        user_id=row.get("user_id"),
        description=row.get("description"),
        icon=row.get("icon"),
        color=row.get("color"),
        category=row.get("category"),
        custom_days=_custom_days(row.get("custom_days")),
        time_of_day=row.get("time_of_day"),
        start_date=row.get("start_date"),
        end_date=row.get("end_date"),
        streak_enabled=bool(row.get("streak_enabled", True)),
        streak_reset_after_missing_days=row.get("streak_reset_after_missing_days"),
        sort_order=row.get("sort_order") or 0,
        archived=bool(row.get("archived", False)),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def log_from_row(row: Mapping[str, Any]) -> HabitLog:
    return HabitLog(
        id=row.get("id"),
        habit_id=_require(row, "habit_id"),
        user_id=row.get("user_id"),
        log_date=_require(row, "log_date"),
        completed=bool(row.get("completed", True)),
        notes=row.get("notes"),
        completed_at=row.get("completed_at"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def habit_to_row(habit: Habit) -> dict[str, Any]:
    """Insert payload for a new habit, filling the table defaults."""
    return {
        "user_id": habit.user_id,
        "title": habit.title,
        "description": habit.description or None,
        "icon": habit.icon or DEFAULT_ICON,
        "color": habit.color or DEFAULT_COLOR,
        "category": habit.category or HabitCategory.personal.value,
        "frequency": habit.frequency,
        "custom_days": json.dumps(list(habit.custom_days)) if habit.custom_days else None,
        "time_of_day": habit.time_of_day or None,
        "start_date": format_iso_date(habit.start_date) if habit.start_date else None,
        "end_date": format_iso_date(habit.end_date) if habit.end_date else None,
        "streak_enabled": habit.streak_enabled,
        "streak_reset_after_missing_days": (
            habit.streak_reset_after_missing_days or DEFAULT_STREAK_RESET_AFTER_MISSING_DAYS
        ),
        "sort_order": habit.sort_order or 0,
        "archived": habit.archived,
    }
