"""리마인더 라우터 — 리마인더 CRUD 및 예정 목록.

Reminder Router — Reminder CRUD and upcoming reminders.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.common import Envelope, envelope
from app.schemas.reminder import (
    ReminderCreate,
    ReminderResponse,
    ReminderUpdate,
    UpcomingReminderResponse,
)
from app.services.reminder_service import reminder_service

router: APIRouter = APIRouter()


@router.post("", response_model=Envelope[ReminderResponse], status_code=201)
async def create_reminder(
    data: ReminderCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """리마인더를 생성합니다 — Create a reminder for an owned todo."""
    result: ReminderResponse = await reminder_service.create_reminder(db, current_user.id, data)
    await db.commit()
    return envelope(result)


@router.get("/upcoming", response_model=Envelope[list[UpcomingReminderResponse]])
async def upcoming_reminders(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
    hours: Annotated[int, Query(ge=1, le=168)] = 24,
) -> dict:
    """예정된 리마인더를 조회합니다.

    Unsent reminders due within the next ``hours`` hours.

    Args:
        db: 비동기 데이터베이스 세션 (Async database session)
        current_user: 인증된 사용자 (Authenticated user)
        hours: 조회 범위 시간, 1~168 (Look-ahead window in hours)

    Returns:
        dict: 할일 제목이 포함된 리마인더 목록 (Reminders with todo titles)
    """
    reminders: list[UpcomingReminderResponse] = await reminder_service.get_upcoming_reminders(
        db, current_user.id, hours
    )
    return envelope(reminders, total=len(reminders))


@router.get("/todo/{todo_id}", response_model=Envelope[list[ReminderResponse]])
async def reminders_by_todo(
    todo_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    reminders: list[ReminderResponse] = await reminder_service.get_reminders_by_todo(
        db, todo_id, current_user.id
    )
    return envelope(reminders, total=len(reminders))


@router.get("/{reminder_id}", response_model=Envelope[ReminderResponse])
async def get_reminder(
    reminder_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    return envelope(await reminder_service.get_reminder(db, reminder_id, current_user.id))


@router.patch("/{reminder_id}", response_model=Envelope[ReminderResponse])
async def update_reminder(
    reminder_id: UUID,
    data: ReminderUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> dict:
    """리마인더 예약 일시/채널 변경 — Reschedule or change channel."""
    result: ReminderResponse = await reminder_service.update_reminder(
        db, reminder_id, current_user.id, data
    )
    await db.commit()
    return envelope(result)


@router.delete("/{reminder_id}", status_code=204)
async def delete_reminder(
    reminder_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    await reminder_service.delete_reminder(db, reminder_id, current_user.id)
    await db.commit()
