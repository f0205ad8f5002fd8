"""일정 레포지토리 — 리마인더와 반복 규칙 쿼리.

Schedule Repository — Queries for reminders and recurrence rules.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.schedule import RecurrenceRule, Reminder
from app.repositories.base import BaseRepository


class ReminderRepository(BaseRepository[Reminder]):
    """리마인더 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the reminders table.
    """

    def __init__(self) -> None:
        super().__init__(Reminder)

    async def get_by_todo(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> list[Reminder]:
        """할일의 리마인더를 예약 일시순으로 조회합니다.

        Retrieve a todo's reminders ordered by scheduled time.
        """
        query: Select = (
            select(Reminder)
            .where(Reminder.todo_id == todo_id, Reminder.user_id == user_id)
            .order_by(Reminder.scheduled_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_upcoming(
        self,
        db: AsyncSession,
        user_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[Reminder]:
        """기간 내 미발송 리마인더를 조회합니다.

        Retrieve unsent reminders scheduled within ``[start, end]``,
        with their todo loaded for the title.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 소유 사용자 ID (Owner UUID)
            start: 시작 일시 (Window start)
            end: 종료 일시 (Window end)

        Returns:
            list[Reminder]: 리마인더 목록 (Reminders, earliest first)
        """
        query: Select = (
            select(Reminder)
            .options(selectinload(Reminder.todo))
            .where(
                Reminder.user_id == user_id,
                Reminder.sent.is_(False),
                Reminder.scheduled_at >= start,
                Reminder.scheduled_at <= end,
            )
            .order_by(Reminder.scheduled_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


class RecurrenceRuleRepository(BaseRepository[RecurrenceRule]):
    """반복 규칙 레포지토리 — Recurrence rule repository."""

    def __init__(self) -> None:
        super().__init__(RecurrenceRule)

    async def get_by_user(self, db: AsyncSession, user_id: UUID) -> list[RecurrenceRule]:
        """사용자의 반복 규칙 목록 — A user's rules, newest first."""
        query: Select = (
            select(RecurrenceRule)
            .where(RecurrenceRule.user_id == user_id)
            .order_by(RecurrenceRule.created_at.desc())
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
reminder_repository: ReminderRepository = ReminderRepository()
recurrence_rule_repository: RecurrenceRuleRepository = RecurrenceRuleRepository()
