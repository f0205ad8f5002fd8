"""사용자 라우터 — 내 프로필 조회/수정.

User Router — Read and update the current user's profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.user import UserProfileUpdate, UserResponse
from app.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("/profile", response_model=Envelope[UserResponse])
async def get_my_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """내 프로필을 조회합니다.

    Get the current user's profile.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)

    Returns:
        dict: 프로필 봉투 (Profile envelope)
    """
    return envelope(await user_service.get_user_profile(db, current_user.id))


@router.patch("/profile", response_model=Envelope[UserResponse])
async def update_my_profile(
    data: UserProfileUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """내 프로필을 수정합니다 (전달된 필드만).

    Update the current user's profile; only provided fields change.
    """
    result: UserResponse = await user_service.update_user_profile(db, current_user.id, data)
    await db.commit()
    return envelope(result)
