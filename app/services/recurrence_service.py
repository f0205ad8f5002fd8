"""반복 규칙 서비스 — 반복 규칙 CRUD, 다음 발생 일시 계산, 반복 할일 생성.

Recurrence Service — Recurrence rule CRUD, next-occurrence generation and
creation of the next instance of a recurring todo. Occurrences are computed
with ``dateutil.rrule`` so weekday lists, month-day lists (negative values
count back from the month end), intervals and end dates combine correctly.
"""

from datetime import datetime
from uuid import UUID

from dateutil import rrule
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.constants import STATUS_TODO
from app.models.schedule import RecurrenceRule
from app.models.todo import Todo
from app.repositories.schedule_repository import recurrence_rule_repository
from app.repositories.todo_repository import todo_repository
from app.schemas.recurrence import (
    OccurrencesResponse,
    RecurrenceRuleCreate,
    RecurrenceRuleResponse,
    RecurrenceRuleUpdate,
)
from app.schemas.todo import TodoDetailResponse
from app.services.activity_log_service import activity_log_service
from app.services.todo_service import todo_service
from app.utils.dates import ensure_utc, utcnow
from app.utils.exceptions import DuplicateError, NotFoundError

# 반복 주기 매핑 — Frequency name → rrule constant
_FREQUENCIES: dict[str, int] = {
    "DAILY": rrule.DAILY,
    "WEEKLY": rrule.WEEKLY,
    "MONTHLY": rrule.MONTHLY,
    "YEARLY": rrule.YEARLY,
}

# 요일 코드 매핑 — Weekday code → rrule weekday
_WEEKDAYS: dict[str, rrule.weekday] = {
    "MO": rrule.MO,
    "TU": rrule.TU,
    "WE": rrule.WE,
    "TH": rrule.TH,
    "FR": rrule.FR,
    "SA": rrule.SA,
    "SU": rrule.SU,
}


class RecurrenceService:
    """반복 규칙 관련 비즈니스 로직을 처리하는 서비스.

    Service handling recurrence rule business logic. Rules are looked up
    scoped to the caller.
    """

    def to_response(self, rule: RecurrenceRule) -> RecurrenceRuleResponse:
        return RecurrenceRuleResponse(
            id=str(rule.id),
            frequency=rule.frequency,
            interval=rule.interval,
            by_weekday=rule.by_weekday,
            by_month_day=rule.by_month_day,
            end_date=rule.end_date,
            created_at=rule.created_at,
            updated_at=rule.updated_at,
        )

    async def _get_rule(
        self,
        db: AsyncSession,
        rule_id: UUID,
        user_id: UUID,
    ) -> RecurrenceRule:
        rule: RecurrenceRule | None = await recurrence_rule_repository.get_by_id(db, rule_id, user_id)
        if rule is None:
            raise NotFoundError("반복 규칙을 찾을 수 없습니다 (Recurrence rule not found)")
        return rule

    async def list_rules(self, db: AsyncSession, user_id: UUID) -> list[RecurrenceRuleResponse]:
        rules: list[RecurrenceRule] = await recurrence_rule_repository.get_by_user(db, user_id)
        return [self.to_response(r) for r in rules]

    async def get_rule(
        self,
        db: AsyncSession,
        rule_id: UUID,
        user_id: UUID,
    ) -> RecurrenceRuleResponse:
        rule: RecurrenceRule = await self._get_rule(db, rule_id, user_id)
        return self.to_response(rule)

    async def create_rule(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: RecurrenceRuleCreate,
    ) -> RecurrenceRuleResponse:
        """반복 규칙을 생성합니다 — Create a recurrence rule."""
        rule: RecurrenceRule = await recurrence_rule_repository.create(
            db,
            {
                "user_id": user_id,
                "frequency": data.frequency,
                "interval": data.interval,
                "by_weekday": data.by_weekday or None,
                "by_month_day": data.by_month_day or None,
                "end_date": data.end_date,
            },
        )
        return self.to_response(rule)

    async def update_rule(
        self,
        db: AsyncSession,
        rule_id: UUID,
        user_id: UUID,
        data: RecurrenceRuleUpdate,
    ) -> RecurrenceRuleResponse:
        """반복 규칙을 수정합니다 (부분 업데이트).

        Update a rule. ``by_weekday``, ``by_month_day`` and ``end_date``
        may be cleared with null; frequency and interval may not.
        """
        rule: RecurrenceRule = await self._get_rule(db, rule_id, user_id)
        update_data: dict = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if not (k in ("frequency", "interval") and v is None)
        }
        for key in ("by_weekday", "by_month_day"):
            if key in update_data and not update_data[key]:
                update_data[key] = None

        rule = await recurrence_rule_repository.update(db, rule, update_data)
        return self.to_response(rule)

    async def delete_rule(
        self,
        db: AsyncSession,
        rule_id: UUID,
        user_id: UUID,
    ) -> None:
        """반복 규칙을 삭제합니다.

        Delete a rule that no todo references.

        Raises:
            NotFoundError: 규칙이 없을 때 (Rule not found)
            DuplicateError: 사용 중인 규칙일 때 (Rule still referenced by a todo)
        """
        rule: RecurrenceRule = await self._get_rule(db, rule_id, user_id)
        if await todo_repository.count_using_rule(db, rule.id) > 0:
            raise DuplicateError(
                "사용 중인 반복 규칙은 삭제할 수 없습니다 (Cannot delete recurrence rule that is in use)"
            )
        await recurrence_rule_repository.delete(db, rule)

    def generate_next_occurrences(
        self,
        rule: RecurrenceRule,
        from_date: datetime,
        count: int = 10,
    ) -> list[datetime]:
        """``from_date`` 이후의 다음 발생 일시를 계산합니다.

        Compute up to ``count`` occurrences strictly after ``from_date``,
        never past the rule's ``end_date``. ``from_date`` anchors the series,
        so its time of day carries over to every occurrence.

        Args:
            rule: 반복 규칙 (Recurrence rule)
            from_date: 기준 일시 (Exclusive lower bound and series anchor)
            count: 최대 개수 (Maximum number of occurrences)

        Returns:
            list[datetime]: 오름차순 발생 일시 (Occurrences, strictly increasing)
        """
        start: datetime = ensure_utc(from_date)
        series = rrule.rrule(
            _FREQUENCIES[rule.frequency],
            dtstart=start,
            interval=rule.interval,
            byweekday=[_WEEKDAYS[code] for code in rule.by_weekday] if rule.by_weekday else None,
            bymonthday=list(rule.by_month_day) if rule.by_month_day else None,
            until=ensure_utc(rule.end_date),
        )
        return list(series.xafter(start, count=count, inc=False))

    async def get_occurrences(
        self,
        db: AsyncSession,
        rule_id: UUID,
        user_id: UUID,
        from_date: datetime | None = None,
        count: int = 10,
    ) -> OccurrencesResponse:
        """규칙의 다음 발생 일시 목록 — Next occurrences of a rule (default from now)."""
        rule: RecurrenceRule = await self._get_rule(db, rule_id, user_id)
        occurrences: list[datetime] = self.generate_next_occurrences(
            rule, from_date or utcnow(), count
        )
        return OccurrencesResponse(rule_id=str(rule.id), occurrences=occurrences)

    async def apply_recurrence_to_todo(
        self,
        db: AsyncSession,
        todo_id: UUID,
        user_id: UUID,
    ) -> TodoDetailResponse | None:
        """반복 할일의 다음 인스턴스를 생성합니다.

        Create the next instance of a recurring todo: same title, description,
        category, priority, tags and rule, due at the first occurrence after
        the todo's due date (or its creation time when it has none).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            todo_id: 원본 할일 UUID (Recurring todo UUID)
            user_id: 요청 사용자 UUID (Caller UUID)

        Returns:
            TodoDetailResponse | None: 새 할일, 규칙이 없거나 종료되었으면 None
                (The new todo, or None when there is no rule or it is exhausted)

        Raises:
            NotFoundError: 할일이 없을 때 (Todo not found)
            ForbiddenError: 다른 사용자의 할일일 때 (Todo not owned)
        """
        todo: Todo = await todo_service.get_owned_todo(db, todo_id, user_id)
        rule: RecurrenceRule | None = todo.recurrence_rule
        if rule is None:
            return None

        anchor: datetime = todo.due_date or todo.created_at
        next_dates: list[datetime] = self.generate_next_occurrences(rule, anchor, 1)
        if not next_dates:
            return None

        instance: Todo = await todo_repository.create(
            db,
            {
                "user_id": user_id,
                "category_id": todo.category_id,
                "recurrence_rule_id": rule.id,
                "title": todo.title,
                "description": todo.description,
                "status": STATUS_TODO,
                "priority": todo.priority,
                "due_date": next_dates[0],
                "reminder_lead_time": todo.reminder_lead_time,
                "tags": list(todo.tags),
            },
        )
        await activity_log_service.create_activity_log(
            db,
            user_id,
            instance.id,
            "CREATED",
            {"title": instance.title, "recurrence_of": str(todo.id)},
        )
        return await todo_service.get_todo(db, instance.id, user_id)


# 싱글턴 인스턴스 — Singleton instance
recurrence_service: RecurrenceService = RecurrenceService()
