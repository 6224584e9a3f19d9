"""
Streaks router.

POST /streaks       — current / longest streak for one habit's logs
POST /streaks/top   — habits ranked by current streak
"""
from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings
from app.schemas.reports import (
    StreakInfoResponse,
    StreakRequest,
    StreakResponse,
    TopStreaksRequest,
)
from app.services.analytics import active_habits, top_streaks
from app.services.calendar_utils import current_date
from app.services.completion_index import build_index
from app.services.streaks import compute_streak

router = APIRouter(prefix="/streaks", tags=["streaks"])


def _grace(value: int | None) -> int:
    return value if value is not None else settings.STREAK_GRACE_DAYS


@router.post("", response_model=StreakResponse, summary="Streak for a single habit")
def streak(body: StreakRequest):
    """
    A streak is alive while the latest completion is today or yesterday
    (plus `graceDays` extra missed days). `longest` scans the whole history.
    """
    result = compute_streak(
        [log.to_domain() for log in body.logs],
        today=body.today or current_date(settings.tz),
        grace_days=_grace(body.grace_days),
    )
    return StreakResponse(current=result.current, longest=result.longest)


@router.post(
    "/top",
    response_model=list[StreakInfoResponse],
    summary="Habits ranked by current streak",
)
def streaks_top(body: TopStreaksRequest):
    """Sorted by current streak, descending; ties keep the input order."""
    ranked = top_streaks(
        active_habits(body.domain_habits()),
        build_index(body.domain_logs()),
        today=body.today or current_date(settings.tz),
        limit=body.limit or settings.TOP_STREAKS_LIMIT,
        grace_days=_grace(body.grace_days),
    )
    return [StreakInfoResponse.model_validate(s) for s in ranked]
