"""검색 라우터 — 할일 전문 검색, 태그/카테고리 이름 검색.

Search Router — Ranked todo search and tag/category name search.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.search import LabelSearchQuery, LabelSearchResult, TodoSearchQuery, TodoSearchResult
from app.services.search_service import search_service

router: APIRouter = APIRouter()


@router.get("/todos", response_model=Envelope[list[TodoSearchResult]])
async def search_todos(
    params: Annotated[TodoSearchQuery, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일을 검색합니다.

    Search todos by title and description. Title matches rank above
    description matches; ties break by priority, due date and recency.
    """
    results, meta = await search_service.search_todos(db, current_user.id, params)
    return envelope(results, **meta)


@router.get("/tags", response_model=Envelope[list[LabelSearchResult]])
async def search_tags(
    params: Annotated[LabelSearchQuery, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    results: list[LabelSearchResult] = await search_service.search_tags(db, current_user.id, params.q)
    return envelope(results, total=len(results))


@router.get("/categories", response_model=Envelope[list[LabelSearchResult]])
async def search_categories(
    params: Annotated[LabelSearchQuery, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    results: list[LabelSearchResult] = await search_service.search_categories(
        db, current_user.id, params.q
    )
    return envelope(results, total=len(results))
