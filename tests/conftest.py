"""
Shared pytest fixtures and record builders.

Every test pins "today" explicitly so results never depend on the wall clock.
"""
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.models.habit import Habit, HabitLog

TODAY = date(2024, 3, 15)  # a Friday


def make_habit(habit_id: str = "h1", **kwargs) -> Habit:
    kwargs.setdefault("title", f"Habit {habit_id}")
    return Habit(id=habit_id, **kwargs)


def make_log(habit_id: str, day, completed: bool = True, **kwargs) -> HabitLog:
    return HabitLog(habit_id=habit_id, log_date=day, completed=completed, **kwargs)


def run_of_logs(habit_id: str, end: date, length: int) -> list[HabitLog]:
    """`length` consecutive completed days ending on `end`."""
    return [make_log(habit_id, end - timedelta(days=i)) for i in range(length)]


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c
