"""일정 관련 SQLAlchemy ORM 모델 정의 — 리마인더와 반복 규칙.

Scheduling-related ORM models — reminders and recurrence rules.
Reminders are stored only; delivery is handled outside this service.

Tables:
    - reminders: 할일 리마인더 (Todo reminders per channel)
    - recurrence_rules: 반복 규칙 (RRULE-style recurrence definitions)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base, JSONType


class Reminder(Base):
    """리마인더 모델 — 할일에 대한 예약 알림.

    Reminder model — A scheduled notification for a todo.

    Attributes:
        todo_id: 대상 할일 FK (Target todo)
        user_id: 소유 사용자 FK (Owner)
        scheduled_at: 예약 일시 (When the reminder is due)
        channel: 전달 채널 (IN_APP | EMAIL | PUSH)
        sent: 발송 여부 (Whether it was delivered)
        sent_at: 발송 일시 (Delivery timestamp)
    """

    __tablename__ = "reminders"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    todo_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("todos.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    scheduled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    channel: Mapped[str] = mapped_column(String(20), default="IN_APP", nullable=False)
    sent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        # 다가오는 미발송 리마인더 조회용 — Upcoming unsent reminder lookups
        Index("ix_reminders_user_sent_scheduled", "user_id", "sent", "scheduled_at"),
    )

    todo = relationship("Todo", back_populates="reminders")


class RecurrenceRule(Base):
    """반복 규칙 모델 — 할일의 반복 주기 정의.

    Recurrence rule model — Defines how a recurring todo repeats.

    Attributes:
        frequency: 반복 주기 (DAILY | WEEKLY | MONTHLY | YEARLY)
        interval: 반복 간격 (Every N periods, >= 1)
        by_weekday: 요일 목록 (Weekday codes, e.g. ["MO", "WE"])
        by_month_day: 월 중 일자 목록 (Days of month; negative counts from month end)
        end_date: 종료 일시 (Last possible occurrence, inclusive)
    """

    __tablename__ = "recurrence_rules"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    interval: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    by_weekday: Mapped[list[str] | None] = mapped_column(JSONType, nullable=True)
    by_month_day: Mapped[list[int] | None] = mapped_column(JSONType, nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
