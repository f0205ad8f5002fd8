"""환경설정 라우터 — 사용자 설정, 보기 설정, 할일 기본값, 근무 시간.

Preferences Router — User preferences, per-view preferences, todo
defaults and working hours.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.preferences import (
    VIEW_TYPE_PATTERN,
    PreferencesResponse,
    PreferencesUpdate,
    TodoDefaultsResponse,
    ViewPreferenceResponse,
    ViewPreferenceUpdate,
    WorkingHoursResponse,
)
from app.services.user_preferences_service import user_preferences_service

router: APIRouter = APIRouter()

# 보기 유형 경로 파라미터 — View type path parameter (LIST | BOARD | CALENDAR | TIMELINE)
ViewType = Annotated[str, Path(pattern=VIEW_TYPE_PATTERN)]


@router.get("", response_model=Envelope[PreferencesResponse])
async def get_preferences(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """환경설정 조회 — 기본값에 저장된 설정을 덮어쓴 결과.

    Get effective preferences (defaults overlaid with stored settings).
    """
    return envelope(await user_preferences_service.get_user_preferences(db, current_user))


@router.patch("", response_model=Envelope[PreferencesResponse])
async def update_preferences(
    data: PreferencesUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """환경설정을 수정합니다 — Merge provided preference keys."""
    result: PreferencesResponse = await user_preferences_service.update_user_preferences(
        db, current_user, data
    )
    await db.commit()
    return envelope(result)


@router.get("/todo-defaults", response_model=Envelope[TodoDefaultsResponse])
async def get_todo_defaults(
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """새 할일 기본값 조회 — Defaults applied to new todos."""
    return envelope(user_preferences_service.get_default_todo_values(current_user))


@router.get("/working-hours", response_model=Envelope[WorkingHoursResponse])
async def get_working_hours(
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """근무 시간 조회 — Working hours and whether the user is working now."""
    return envelope(user_preferences_service.get_working_hours(current_user))


@router.get("/views/{view_type}", response_model=Envelope[ViewPreferenceResponse])
async def get_view_preferences(
    view_type: ViewType,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """보기 설정 조회 — Stored or default preference for a view type."""
    return envelope(
        await user_preferences_service.get_view_preferences(db, current_user, view_type)
    )


@router.put("/views/{view_type}", response_model=Envelope[ViewPreferenceResponse])
async def update_view_preferences(
    view_type: ViewType,
    data: ViewPreferenceUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """보기 설정 저장 — Upsert filters and sorting for a view type."""
    result: ViewPreferenceResponse = await user_preferences_service.update_view_preferences(
        db, current_user, view_type, data
    )
    await db.commit()
    return envelope(result)
