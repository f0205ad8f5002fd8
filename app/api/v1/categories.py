"""카테고리 라우터 — 카테고리 CRUD 및 재정렬.

Category Router — Category CRUD and reordering.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.label import (
    CategoryCreate,
    CategoryReorderRequest,
    CategoryResponse,
    CategoryUpdate,
)
from app.services.category_service import category_service

router: APIRouter = APIRouter()


@router.get("", response_model=Envelope[list[CategoryResponse]])
async def list_categories(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """카테고리 목록을 정렬 순서대로 조회합니다.

    List categories in display order, each with its todo count.
    """
    categories: list[CategoryResponse] = await category_service.list_categories(db, current_user.id)
    return envelope(categories, total=len(categories))


@router.post("", response_model=Envelope[CategoryResponse], status_code=201)
async def create_category(
    data: CategoryCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """새 카테고리를 생성합니다 — Create a category (409 on duplicate name)."""
    result: CategoryResponse = await category_service.create_category(db, current_user.id, data)
    await db.commit()
    return envelope(result)


@router.post("/reorder", response_model=Envelope[list[CategoryResponse]])
async def reorder_categories(
    data: CategoryReorderRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """카테고리 순서를 변경합니다.

    Apply new ordering values. Every id must belong to the caller.
    """
    categories: list[CategoryResponse] = await category_service.reorder_categories(
        db, current_user.id, data
    )
    await db.commit()
    return envelope(categories, total=len(categories))


@router.get("/{category_id}", response_model=Envelope[CategoryResponse])
async def get_category(
    category_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    return envelope(await category_service.get_category(db, category_id, current_user.id))


@router.patch("/{category_id}", response_model=Envelope[CategoryResponse])
async def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """카테고리를 수정합니다 (부분 업데이트) — Partial update."""
    result: CategoryResponse = await category_service.update_category(
        db, category_id, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.delete("/{category_id}", status_code=204)
async def delete_category(
    category_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    """카테고리를 삭제합니다 — Todos in it become uncategorized."""
    await category_service.delete_category(db, category_id, current_user.id)
    await db.commit()
