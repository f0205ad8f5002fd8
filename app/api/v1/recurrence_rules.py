"""반복 규칙 라우터 — 규칙 CRUD, 발생 일시 계산, 다음 인스턴스 생성.

Recurrence Rule Router — Rule CRUD, occurrence preview and applying a rule
to create the next todo instance.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.recurrence import (
    OccurrencesResponse,
    RecurrenceRuleCreate,
    RecurrenceRuleResponse,
    RecurrenceRuleUpdate,
)
from app.schemas.todo import TodoDetailResponse
from app.services.recurrence_service import recurrence_service

router: APIRouter = APIRouter()


@router.get("", response_model=Envelope[list[RecurrenceRuleResponse]])
async def list_rules(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    rules: list[RecurrenceRuleResponse] = await recurrence_service.list_rules(db, current_user.id)
    return envelope(rules, total=len(rules))


@router.post("", response_model=Envelope[RecurrenceRuleResponse], status_code=201)
async def create_rule(
    data: RecurrenceRuleCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """반복 규칙을 생성합니다 — Create a recurrence rule."""
    result: RecurrenceRuleResponse = await recurrence_service.create_rule(db, current_user.id, data)
    await db.commit()
    return envelope(result)


@router.post("/apply/{todo_id}", response_model=Envelope[TodoDetailResponse | None])
async def apply_rule(
    todo_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """반복 할일의 다음 인스턴스를 생성합니다.

    Create the next instance of a recurring todo. ``data`` is null when the
    todo has no rule or the rule has no further occurrence.

    Args:
        todo_id: 원본 할일 UUID (Source todo UUID)
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)

    Returns:
        dict: 새 할일 상세 또는 null (New todo detail, or null)
    """
    result: TodoDetailResponse | None = await recurrence_service.apply_recurrence_to_todo(
        db, todo_id, current_user.id
    )
    await db.commit()
    return envelope(result)


@router.get("/{rule_id}", response_model=Envelope[RecurrenceRuleResponse])
async def get_rule(
    rule_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    return envelope(await recurrence_service.get_rule(db, rule_id, current_user.id))


@router.get("/{rule_id}/occurrences", response_model=Envelope[OccurrencesResponse])
async def get_occurrences(
    rule_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    from_date: datetime | None = None,
    count: Annotated[int, Query(ge=1, le=100)] = 10,
) -> dict:
    """규칙의 다음 발생 일시 — Next occurrences after ``from_date`` (default now)."""
    return envelope(
        await recurrence_service.get_occurrences(db, rule_id, current_user.id, from_date, count)
    )


@router.patch("/{rule_id}", response_model=Envelope[RecurrenceRuleResponse])
async def update_rule(
    rule_id: UUID,
    data: RecurrenceRuleUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    result: RecurrenceRuleResponse = await recurrence_service.update_rule(
        db, rule_id, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.delete("/{rule_id}", status_code=204)
async def delete_rule(
    rule_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    """반복 규칙을 삭제합니다 — 409 while any todo still uses the rule."""
    await recurrence_service.delete_rule(db, rule_id, current_user.id)
    await db.commit()
