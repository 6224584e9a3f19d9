"""
Reports router — the aggregate analytics payload for the reports screen.

POST /reports/full   — per-habit analytics, week comparison, insights,
                       heatmap and top streaks in one response
"""
from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings
from app.schemas.common import ErrorResponse
from app.schemas.reports import FullReportResponse, ReportsRequest
from app.services.analytics import FullReport, get_full_reports_data

router = APIRouter(prefix="/reports", tags=["reports"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _report_to_response(report: FullReport) -> FullReportResponse:
    return FullReportResponse.model_validate(report)


# ---------------------------------------------------------------------------
# POST /reports/full
# ---------------------------------------------------------------------------

@router.post(
    "/full",
    response_model=FullReportResponse,
    summary="Full reports payload for a date window",
    responses={
        200: {"description": "Analytics for every active habit over [startDate, endDate]."},
        422: {"model": ErrorResponse, "description": "Malformed record or reversed range."},
    },
)
def full_report(body: ReportsRequest):
    """
    Compute everything the reports screen shows in a single call.

    ### Windows
    * **habitAnalytics** and **heatmapData** cover `[startDate, endDate]`.
    * **weekComparison** compares `today-6 … today` with the 7 days before.
    * **topStreaks** uses the whole log history sent in the request.

    Archived habits are ignored. With no active habits every list is empty
    and `weekComparison` / `displayInsights` are `null`.
    """
    grace = body.grace_days if body.grace_days is not None else settings.STREAK_GRACE_DAYS
    report = get_full_reports_data(
        habits=body.domain_habits(),
        logs=body.domain_logs(),
        start=body.start_date,
        end=body.end_date,
        today=body.today,
        grace_days=grace,
        top_limit=body.top_limit or settings.TOP_STREAKS_LIMIT,
        tz=settings.tz,
    )
    return _report_to_response(report)
