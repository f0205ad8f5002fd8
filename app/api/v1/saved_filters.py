"""저장된 필터 라우터 — Saved Filter Router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.saved_filter import SavedFilterCreate, SavedFilterResponse, SavedFilterUpdate
from app.services.saved_filter_service import saved_filter_service

router: APIRouter = APIRouter()


@router.get("", response_model=Envelope[list[SavedFilterResponse]])
async def list_filters(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    filters: list[SavedFilterResponse] = await saved_filter_service.list_filters(db, current_user.id)
    return envelope(filters, total=len(filters))


@router.post("", response_model=Envelope[SavedFilterResponse], status_code=201)
async def create_filter(
    data: SavedFilterCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """필터를 저장합니다 — ``is_default`` clears the flag on other filters."""
    result: SavedFilterResponse = await saved_filter_service.create_filter(db, current_user.id, data)
    await db.commit()
    return envelope(result)


@router.get("/{filter_id}", response_model=Envelope[SavedFilterResponse])
async def get_filter(
    filter_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    return envelope(await saved_filter_service.get_filter(db, filter_id, current_user.id))


@router.patch("/{filter_id}", response_model=Envelope[SavedFilterResponse])
async def update_filter(
    filter_id: UUID,
    data: SavedFilterUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    result: SavedFilterResponse = await saved_filter_service.update_filter(
        db, filter_id, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.delete("/{filter_id}", status_code=204)
async def delete_filter(
    filter_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    await saved_filter_service.delete_filter(db, filter_id, current_user.id)
    await db.commit()
