"""태그 라우터 — 태그 CRUD.

Tag Router — Tag CRUD endpoints.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.label import TagCreate, TagResponse, TagUpdate
from app.services.tag_service import tag_service

router: APIRouter = APIRouter()


@router.get("", response_model=Envelope[list[TagResponse]])
async def list_tags(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """태그 목록을 조회합니다.

    List the current user's tags ordered by name.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)

    Returns:
        dict: 태그 목록 봉투 — meta.total 포함 (Envelope with meta.total)
    """
    tags: list[TagResponse] = await tag_service.list_tags(db, current_user.id)
    return envelope(tags, total=len(tags))


@router.post("", response_model=Envelope[TagResponse], status_code=201)
async def create_tag(
    data: TagCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """새 태그를 생성합니다 — Create a tag (409 on duplicate name)."""
    result: TagResponse = await tag_service.create_tag(db, current_user.id, data)
    await db.commit()
    return envelope(result)


@router.get("/{tag_id}", response_model=Envelope[TagResponse])
async def get_tag(
    tag_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    return envelope(await tag_service.get_tag(db, tag_id, current_user.id))


@router.patch("/{tag_id}", response_model=Envelope[TagResponse])
async def update_tag(
    tag_id: UUID,
    data: TagUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """태그를 수정합니다 (부분 업데이트) — Partial update."""
    result: TagResponse = await tag_service.update_tag(db, tag_id, current_user.id, data)
    await db.commit()
    return envelope(result)


@router.delete("/{tag_id}", status_code=204)
async def delete_tag(
    tag_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    await tag_service.delete_tag(db, tag_id, current_user.id)
    await db.commit()
