"""할일 라우터 — 할일 CRUD, 완료 처리, 복제, 태그 연결.

Todo Router — Todo CRUD, completion, duplication and tag links.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.todo import (
    DuplicateTodoRequest,
    TodoCreate,
    TodoDetailResponse,
    TodoListQuery,
    TodoResponse,
    TodoUpdate,
)
from app.services.todo_service import todo_service

router: APIRouter = APIRouter()


@router.get("", response_model=Envelope[list[TodoResponse]])
async def list_todos(
    params: Annotated[TodoListQuery, Query()],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일 목록을 조회합니다.

    List todos with filters, sorting and pagination.

    Args:
        params: 필터/정렬/페이지 파라미터 (Filter, sort and page parameters)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)

    Returns:
        dict: 할일 목록 봉투 — meta에 total/page/limit/pages (Envelope with pagination meta)
    """
    todos, meta = await todo_service.list_todos(db, current_user.id, params)
    return envelope(todos, **meta)


@router.post("", response_model=Envelope[TodoDetailResponse], status_code=201)
async def create_todo(
    data: TodoCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """새 할일을 생성합니다 — Create a todo."""
    result: TodoDetailResponse = await todo_service.create_todo(db, current_user, data)
    await db.commit()
    return envelope(result)


@router.get("/{todo_id}", response_model=Envelope[TodoDetailResponse])
async def get_todo(
    todo_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일 상세를 조회합니다.

    Get a todo with category, tags, subtasks, attachments, reminders and
    recurrence rule.
    """
    return envelope(await todo_service.get_todo(db, todo_id, current_user.id))


@router.patch("/{todo_id}", response_model=Envelope[TodoDetailResponse])
async def update_todo(
    todo_id: UUID,
    data: TodoUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일을 수정합니다 (부분 업데이트) — Partial update."""
    result: TodoDetailResponse = await todo_service.update_todo(db, todo_id, current_user.id, data)
    await db.commit()
    return envelope(result)


@router.delete("/{todo_id}", status_code=204)
async def delete_todo(
    todo_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    """할일을 삭제합니다 — Delete a todo and its child records."""
    await todo_service.delete_todo(db, todo_id, current_user.id)
    await db.commit()


@router.post("/{todo_id}/complete", response_model=Envelope[TodoDetailResponse])
async def complete_todo(
    todo_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일 완료 처리 — Mark a todo as DONE."""
    result: TodoDetailResponse = await todo_service.mark_complete(db, todo_id, current_user.id)
    await db.commit()
    return envelope(result)


@router.post("/{todo_id}/incomplete", response_model=Envelope[TodoDetailResponse])
async def incomplete_todo(
    todo_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일 미완료 처리 — Reset a todo to TODO."""
    result: TodoDetailResponse = await todo_service.mark_incomplete(db, todo_id, current_user.id)
    await db.commit()
    return envelope(result)


@router.post("/{todo_id}/duplicate", response_model=Envelope[TodoDetailResponse], status_code=201)
async def duplicate_todo(
    todo_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    options: Annotated[DuplicateTodoRequest | None, Body()] = None,
) -> dict:
    """할일을 복제합니다.

    Duplicate a todo. The body is optional; tags and subtasks are copied
    unless disabled.
    """
    result: TodoDetailResponse = await todo_service.duplicate_todo(
        db, todo_id, current_user.id, options or DuplicateTodoRequest()
    )
    await db.commit()
    return envelope(result)


@router.post("/{todo_id}/tags/{tag_id}", response_model=Envelope[TodoDetailResponse])
async def add_tag(
    todo_id: UUID,
    tag_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일에 태그 추가 — Attach a tag (idempotent)."""
    result: TodoDetailResponse = await todo_service.add_tag(db, todo_id, tag_id, current_user.id)
    await db.commit()
    return envelope(result)


@router.delete("/{todo_id}/tags/{tag_id}", response_model=Envelope[TodoDetailResponse])
async def remove_tag(
    todo_id: UUID,
    tag_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """할일에서 태그 제거 — Detach a tag."""
    result: TodoDetailResponse = await todo_service.remove_tag(db, todo_id, tag_id, current_user.id)
    await db.commit()
    return envelope(result)
