"""할일 레포지토리 — 할일 목록 필터링/정렬 및 관련 쿼리.

Todo Repository — Filtering, sorting and pagination of todos, plus the
child-record repositories (subtasks, attachments).
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import ColumnElement, Select, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.constants import PRIORITY_RANK
from app.models.todo import Attachment, Subtask, Todo, todo_tags
from app.repositories.base import LIKE_ESCAPE, BaseRepository, contains_pattern
from app.schemas.todo import TodoListQuery

# 우선순위 정렬 키 — Priority rank expression (LOW=1 .. URGENT=4)
priority_rank: ColumnElement[int] = case(
    *[(Todo.priority == name, rank) for name, rank in PRIORITY_RANK.items()],
    else_=0,
)

# 정렬 가능한 필드 — Sortable fields for the list endpoint
_SORT_COLUMNS: dict[str, Any] = {
    "created_at": Todo.created_at,
    "due_date": Todo.due_date,
    "priority": priority_rank,
    "title": Todo.title,
}


class TodoRepository(BaseRepository[Todo]):
    """할일 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the todos table.
    Relationships needed by responses are eager-loaded by the model mapping.
    """

    def __init__(self) -> None:
        super().__init__(Todo)

    def _list_query(self, user_id: UUID, params: TodoListQuery) -> Select:
        query: Select = (
            select(Todo)
            .where(Todo.user_id == user_id)
            .execution_options(populate_existing=True)
        )

        if params.status is not None:
            query = query.where(Todo.status == params.status)
        if params.priority is not None:
            query = query.where(Todo.priority == params.priority)
        if params.category_id is not None:
            query = query.where(Todo.category_id == params.category_id)
        if params.tag_id is not None:
            query = query.where(
                Todo.id.in_(select(todo_tags.c.todo_id).where(todo_tags.c.tag_id == params.tag_id))
            )
        if params.due_date_from is not None:
            query = query.where(Todo.due_date >= params.due_date_from)
        if params.due_date_to is not None:
            query = query.where(Todo.due_date <= params.due_date_to)
        if params.search:
            pattern: str = contains_pattern(params.search)
            query = query.where(
                or_(
                    Todo.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Todo.description.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        sort_column = _SORT_COLUMNS[params.sort_by]
        ordered = sort_column.asc() if params.sort_order == "asc" else sort_column.desc()
        ordered = ordered.nulls_last()
        # 동일 값일 때 안정적인 순서 — Stable tiebreak on id
        return query.order_by(ordered, Todo.id)

    async def list_todos(
        self,
        db: AsyncSession,
        user_id: UUID,
        params: TodoListQuery,
    ) -> tuple[Sequence[Todo], int]:
        """필터/정렬/페이지네이션이 적용된 할일 목록을 조회합니다.

        Retrieve a filtered, sorted and paginated page of a user's todos.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 소유 사용자 ID (Owner UUID)
            params: 목록 쿼리 파라미터 (List query parameters)

        Returns:
            tuple[Sequence[Todo], int]: (할일 목록, 전체 개수) (Todos, total count)
        """
        return await self.get_paginated(
            db, self._list_query(user_id, params), params.page, params.limit
        )

    async def get_detail(
        self,
        db: AsyncSession,
        todo_id: UUID,
    ) -> Todo | None:
        """할일을 최신 상태로 다시 조회합니다.

        Retrieve a todo with every relationship reloaded from the database.
        """
        query: Select = (
            select(Todo)
            .where(Todo.id == todo_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def count_using_rule(self, db: AsyncSession, rule_id: UUID) -> int:
        """반복 규칙을 사용하는 할일 수 — Todos referencing a recurrence rule."""
        return await self.count(db, {"recurrence_rule_id": rule_id})

    async def get_completed_since(
        self,
        db: AsyncSession,
        user_id: UUID,
        since: datetime | None = None,
    ) -> list[tuple[datetime, datetime]]:
        """완료된 할일의 (생성, 완료) 일시 목록 — (created_at, completed_at) pairs."""
        query = select(Todo.created_at, Todo.completed_at).where(
            Todo.user_id == user_id,
            Todo.status == "DONE",
            Todo.completed_at.is_not(None),
        )
        if since is not None:
            query = query.where(Todo.completed_at >= since)
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]


class SubtaskRepository(BaseRepository[Subtask]):
    """하위 작업 레포지토리 — Subtask repository."""

    def __init__(self) -> None:
        super().__init__(Subtask)

    async def get_by_todo(self, db: AsyncSession, todo_id: UUID) -> list[Subtask]:
        """할일의 하위 작업을 순서대로 조회합니다 — Subtasks of a todo in order."""
        query: Select = (
            select(Subtask)
            .where(Subtask.todo_id == todo_id)
            .order_by(Subtask.ordering, Subtask.created_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_max_ordering(self, db: AsyncSession, todo_id: UUID) -> int:
        """최대 정렬 값 — Highest ordering under a todo, -1 if none."""
        query = select(func.max(Subtask.ordering)).where(Subtask.todo_id == todo_id)
        value: int | None = (await db.execute(query)).scalar()
        return -1 if value is None else value


class AttachmentRepository(BaseRepository[Attachment]):
    """첨부파일 레포지토리 — Attachment repository."""

    def __init__(self) -> None:
        super().__init__(Attachment)

    async def get_by_todo(self, db: AsyncSession, todo_id: UUID) -> list[Attachment]:
        """할일의 첨부파일 목록 — Attachments of a todo, oldest first."""
        query: Select = (
            select(Attachment)
            .where(Attachment.todo_id == todo_id)
            .order_by(Attachment.created_at)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
todo_repository: TodoRepository = TodoRepository()
subtask_repository: SubtaskRepository = SubtaskRepository()
attachment_repository: AttachmentRepository = AttachmentRepository()
