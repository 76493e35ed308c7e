"""
Weekly Insight API Routes

GET  /insights?weekStart=YYYY-MM-DD   stored insight for the week (404 if none)
POST /insights/generate               generate, or return the cached insight
POST /insights/invalidate             mark the week's insight stale

The caller is identified by the X-User-ID header set by the API gateway.
Pipeline failures are raised as InsightError subclasses and rendered by the
exception handler registered in main.py.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, Request

from app.api.dependencies import get_insight_service
from app.api.models import AcknowledgedResponse, InsightResponse, WeekRequest
from app.features.insights import InsightService
from app.shared.errors import get_correlation_id, not_found_error, unauthorized_error

router = APIRouter(prefix="/insights", tags=["Insights"])
logger = logging.getLogger("Insights.API")


@router.get("", response_model=InsightResponse)
async def get_insight(
    request: Request,
    week_start: str = Query(..., alias="weekStart"),
    user_id: Optional[str] = Header(default=None, alias="X-User-ID"),
    service: InsightService = Depends(get_insight_service),
):
    """Get the stored insight for a week without generating one."""
    if not user_id:
        return unauthorized_error(correlation_id=get_correlation_id(request))

    insight = await service.get_insight(user_id, week_start)
    if insight is None:
        return not_found_error(
            "No insight found for this week",
            resource_type="insight",
            resource_id=week_start,
            correlation_id=get_correlation_id(request),
        )

    return InsightResponse(data=insight)


@router.post("/generate", response_model=InsightResponse)
async def generate_insight(
    request: Request,
    body: WeekRequest,
    user_id: Optional[str] = Header(default=None, alias="X-User-ID"),
    service: InsightService = Depends(get_insight_service),
):
    """Generate a new insight, or return the cached one for the current logic version."""
    if not user_id:
        return unauthorized_error(correlation_id=get_correlation_id(request))

    insight = await service.generate_insight(user_id, body.week_start)
    return InsightResponse(data=insight)


@router.post("/invalidate", response_model=AcknowledgedResponse, status_code=202)
async def invalidate_insight(
    request: Request,
    body: WeekRequest,
    user_id: Optional[str] = Header(default=None, alias="X-User-ID"),
    service: InsightService = Depends(get_insight_service),
):
    """Mark the week's insight stale, e.g. after its journals or goals changed."""
    if not user_id:
        return unauthorized_error(correlation_id=get_correlation_id(request))

    await service.invalidate_insight(user_id, body.week_start)
    return AcknowledgedResponse(message="Insight will be regenerated on next request")
