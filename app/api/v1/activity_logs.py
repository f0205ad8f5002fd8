"""활동 로그 라우터 — Activity Log Router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.activity_log import ActivityLogCreate, ActivityLogQuery, ActivityLogResponse
from app.schemas.common import Envelope, envelope
from app.services.activity_log_service import activity_log_service

router: APIRouter = APIRouter()


@router.get("", response_model=Envelope[list[ActivityLogResponse]])
async def list_activity_logs(
    params: Annotated[ActivityLogQuery, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """활동 로그를 최신순으로 조회합니다.

    List activity logs newest first, filtered by todo, type and date range.

    Args:
        params: 필터 및 페이지 파라미터 (Filters and pagination)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)

    Returns:
        dict: 로그 목록 봉투 (Envelope with pagination meta)
    """
    logs, meta = await activity_log_service.get_activity_logs(db, current_user.id, params)
    return envelope(logs, **meta)


@router.post("", response_model=Envelope[ActivityLogResponse], status_code=201)
async def create_activity_log(
    data: ActivityLogCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일에 활동 로그를 추가합니다 — 404 unless the caller owns the todo."""
    result: ActivityLogResponse = await activity_log_service.log_for_user(db, current_user.id, data)
    await db.commit()
    return envelope(result)
