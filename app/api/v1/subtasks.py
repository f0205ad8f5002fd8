"""하위 작업 라우터 — /todos/{todo_id}/subtasks 하위 엔드포인트.

Subtask Router — Endpoints nested under /todos/{todo_id}/subtasks.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.subtask import (
    SubtaskCreate,
    SubtaskReorderRequest,
    SubtaskResponse,
    SubtaskToggle,
    SubtaskUpdate,
)
from app.services.subtask_service import subtask_service

router: APIRouter = APIRouter()


@router.get("", response_model=Envelope[list[SubtaskResponse]])
async def list_subtasks(
    todo_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일의 하위 작업 목록 — Subtasks of a todo in order."""
    subtasks: list[SubtaskResponse] = await subtask_service.list_subtasks(db, todo_id, current_user.id)
    return envelope(subtasks, total=len(subtasks))


@router.post("", response_model=Envelope[SubtaskResponse], status_code=201)
async def create_subtask(
    todo_id: UUID,
    data: SubtaskCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """하위 작업을 추가합니다 — Append a subtask."""
    result: SubtaskResponse = await subtask_service.create_subtask(db, todo_id, current_user.id, data)
    await db.commit()
    return envelope(result)


@router.post("/reorder", response_model=Envelope[list[SubtaskResponse]])
async def reorder_subtasks(
    todo_id: UUID,
    data: SubtaskReorderRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """하위 작업 순서를 변경합니다.

    Reorder subtasks; list position becomes the new ordering.
    """
    subtasks: list[SubtaskResponse] = await subtask_service.reorder_subtasks(
        db, todo_id, current_user.id, data
    )
    await db.commit()
    return envelope(subtasks, total=len(subtasks))


@router.get("/{subtask_id}", response_model=Envelope[SubtaskResponse])
async def get_subtask(
    todo_id: UUID,
    subtask_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    return envelope(await subtask_service.get_subtask(db, todo_id, subtask_id, current_user.id))


@router.patch("/{subtask_id}", response_model=Envelope[SubtaskResponse])
async def update_subtask(
    todo_id: UUID,
    subtask_id: UUID,
    data: SubtaskUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    result: SubtaskResponse = await subtask_service.update_subtask(
        db, todo_id, subtask_id, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.patch("/{subtask_id}/toggle", response_model=Envelope[SubtaskResponse])
async def toggle_subtask(
    todo_id: UUID,
    subtask_id: UUID,
    data: SubtaskToggle,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """하위 작업 완료 상태 설정 — Set the completed flag."""
    result: SubtaskResponse = await subtask_service.toggle_subtask(
        db, todo_id, subtask_id, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.delete("/{subtask_id}", status_code=204)
async def delete_subtask(
    todo_id: UUID,
    subtask_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    await subtask_service.delete_subtask(db, todo_id, subtask_id, current_user.id)
    await db.commit()
