"""일괄 작업 라우터 — 여러 할일에 대한 상태/우선순위/마감일/카테고리/태그 변경 및 삭제.

Bulk Operations Router — Apply one change to many todos at once. Ids the
caller does not own are returned in ``failed``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.bulk import (
    BulkCategoryMove,
    BulkDeleteResult,
    BulkDueDateUpdate,
    BulkFieldUpdate,
    BulkPriorityUpdate,
    BulkStatusUpdate,
    BulkTagUpdate,
    BulkTodoIds,
    BulkUpdateResult,
)
from app.schemas.common import Envelope, envelope
from app.services.bulk_operations_service import bulk_operations_service

router: APIRouter = APIRouter()


@router.put("/todos/status", response_model=Envelope[BulkUpdateResult])
async def bulk_status(
    data: BulkStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """상태 일괄 변경 — Bulk status change."""
    result: BulkUpdateResult = await bulk_operations_service.bulk_update_status(
        db, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.put("/todos/priority", response_model=Envelope[BulkUpdateResult])
async def bulk_priority(
    data: BulkPriorityUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    result: BulkUpdateResult = await bulk_operations_service.bulk_update_priority(
        db, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.put("/todos/due-date", response_model=Envelope[BulkUpdateResult])
async def bulk_due_date(
    data: BulkDueDateUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    result: BulkUpdateResult = await bulk_operations_service.bulk_update_due_date(
        db, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.put("/todos/category", response_model=Envelope[BulkUpdateResult])
async def bulk_category(
    data: BulkCategoryMove,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """카테고리 일괄 이동 — 404 when the target category is not the caller's."""
    result: BulkUpdateResult = await bulk_operations_service.bulk_move_to_category(
        db, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.put("/todos/tags", response_model=Envelope[BulkUpdateResult])
async def bulk_tags(
    data: BulkTagUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """태그 일괄 추가/제거/교체 — Bulk add, remove or replace tags."""
    result: BulkUpdateResult = await bulk_operations_service.bulk_update_tags(
        db, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.put("/todos/update", response_model=Envelope[BulkUpdateResult])
async def bulk_update(
    data: BulkFieldUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    result: BulkUpdateResult = await bulk_operations_service.bulk_update(db, current_user.id, data)
    await db.commit()
    return envelope(result)


@router.post("/todos/delete", response_model=Envelope[BulkDeleteResult])
async def bulk_delete(
    data: BulkTodoIds,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일 일괄 삭제 — Bulk delete."""
    result: BulkDeleteResult = await bulk_operations_service.bulk_delete(db, current_user.id, data)
    await db.commit()
    return envelope(result)
