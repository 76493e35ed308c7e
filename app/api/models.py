from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from app.features.insights import WeeklyInsight


class WeekRequest(BaseModel):
    """Body of the generate and invalidate endpoints."""
    model_config = ConfigDict(populate_by_name=True)

    week_start: str = Field(alias="weekStart", description="Monday of the week, YYYY-MM-DD")


class InsightResponse(BaseModel):
    success: bool = True
    data: WeeklyInsight


class AcknowledgedResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
