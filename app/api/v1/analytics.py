"""분석 라우터 — Analytics Router."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.analytics import AnalyticsSummaryResponse, ProductivityResponse
from app.schemas.common import Envelope, envelope
from app.services.analytics_service import analytics_service

router: APIRouter = APIRouter()


@router.get("/summary", response_model=Envelope[AnalyticsSummaryResponse])
async def analytics_summary(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """분석 요약 — Overview counts, distributions and 30-day completion trend."""
    return envelope(await analytics_service.get_analytics_summary(db, current_user.id))


@router.get("/productivity", response_model=Envelope[ProductivityResponse])
async def productivity_metrics(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """생산성 지표 — Recent completions, average completion time and streaks."""
    return envelope(await analytics_service.get_productivity_metrics(db, current_user.id))
