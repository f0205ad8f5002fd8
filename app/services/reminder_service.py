"""리마인더 서비스 — 할일 리마인더 CRUD 및 다가오는 리마인더 조회.

Reminder Service — CRUD for todo reminders and the upcoming-reminders
window. Reminders are only stored here; delivery happens elsewhere.
"""

from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.schedule import Reminder
from app.models.todo import Todo
from app.repositories.schedule_repository import reminder_repository
from app.repositories.todo_repository import todo_repository
from app.schemas.reminder import (
    ReminderCreate,
    ReminderResponse,
    ReminderUpdate,
    UpcomingReminderResponse,
)
from app.utils.dates import utcnow
from app.utils.exceptions import NotFoundError


class ReminderService:
    """리마인더 관련 비즈니스 로직을 처리하는 서비스.

    Service handling reminder business logic. Lookups are scoped to the
    caller, so another user's reminder reads as not found.
    """

    def to_response(self, reminder: Reminder) -> ReminderResponse:
        return ReminderResponse(
            id=str(reminder.id),
            todo_id=str(reminder.todo_id),
            scheduled_at=reminder.scheduled_at,
            channel=reminder.channel,
            sent=reminder.sent,
            sent_at=reminder.sent_at,
            created_at=reminder.created_at,
        )

    async def _get_reminder(
        self,
        db: AsyncSession,
        reminder_id: UUID,
        user_id: UUID,
    ) -> Reminder:
        reminder: Reminder | None = await reminder_repository.get_by_id(db, reminder_id, user_id)
        if reminder is None:
            raise NotFoundError("리마인더를 찾을 수 없습니다 (Reminder not found)")
        return reminder

    async def _get_todo(self, db: AsyncSession, todo_id: UUID, user_id: UUID) -> Todo:
        todo: Todo | None = await todo_repository.get_by_id(db, todo_id, user_id)
        if todo is None:
            raise NotFoundError("할일을 찾을 수 없습니다 (Todo not found)")
        return todo

    async def create_reminder(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: ReminderCreate,
    ) -> ReminderResponse:
        """리마인더를 생성합니다.

        Create a reminder for a todo the caller owns.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 요청 사용자 UUID (Caller UUID)
            data: 리마인더 생성 데이터 (Todo, scheduled time, channel)

        Returns:
            ReminderResponse: 생성된 리마인더 (Created reminder)

        Raises:
            NotFoundError: 할일이 없거나 다른 사용자의 것일 때 (Todo missing or not owned)
        """
        todo: Todo = await self._get_todo(db, data.todo_id, user_id)
        reminder: Reminder = await reminder_repository.create(
            db,
            {
                "todo_id": todo.id,
                "user_id": user_id,
                "scheduled_at": data.scheduled_at,
                "channel": data.channel,
                "sent": False,
            },
        )
        return self.to_response(reminder)

    async def get_reminder(
        self,
        db: AsyncSession,
        reminder_id: UUID,
        user_id: UUID,
    ) -> ReminderResponse:
        reminder: Reminder = await self._get_reminder(db, reminder_id, user_id)
        return self.to_response(reminder)

    async def get_reminders_by_todo(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> list[ReminderResponse]:
        """할일의 리마인더 목록을 예약 일시순으로 조회합니다 — Reminders of a todo."""
        todo: Todo = await self._get_todo(db, todo_id, user_id)
        reminders: list[Reminder] = await reminder_repository.get_by_todo(db, todo.id, user_id)
        return [self.to_response(r) for r in reminders]

    async def get_upcoming_reminders(
        self,
        db: AsyncSession,
        user_id: UUID,
        hours: int = 24,
    ) -> list[UpcomingReminderResponse]:
        """앞으로 ``hours`` 시간 안에 예정된 미발송 리마인더를 조회합니다.

        Unsent reminders scheduled between now and ``hours`` from now.
        """
        now: datetime = utcnow()
        reminders: list[Reminder] = await reminder_repository.get_upcoming(
            db, user_id, now, now + timedelta(hours=hours)
        )
        return [
            UpcomingReminderResponse(
                **self.to_response(r).model_dump(),
                todo_title=r.todo.title,
            )
            for r in reminders
        ]

    async def update_reminder(
        self,
        db: AsyncSession,
        reminder_id: UUID,
        user_id: UUID,
        data: ReminderUpdate,
    ) -> ReminderResponse:
        """리마인더를 수정합니다 — Change the scheduled time or channel."""
        reminder: Reminder = await self._get_reminder(db, reminder_id, user_id)
        update_data: dict = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None
        }
        reminder = await reminder_repository.update(db, reminder, update_data)
        return self.to_response(reminder)

    async def delete_reminder(
        self,
        db: AsyncSession,
        reminder_id: UUID,
        user_id: UUID,
    ) -> None:
        reminder: Reminder = await self._get_reminder(db, reminder_id, user_id)
        await reminder_repository.delete(db, reminder)


# 싱글턴 인스턴스 — Singleton instance
reminder_service: ReminderService = ReminderService()
