"""검색 레포지토리 — 관련도 점수 기반 할일 검색.

Search Repository — Relevance-ranked todo search.
Scores: exact title match +20, title contains +10, description contains +5
(an exact title match therefore scores 30).
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import Select, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.todo import Todo, todo_tags
from app.repositories.base import LIKE_ESCAPE, contains_pattern
from app.repositories.todo_repository import priority_rank
from app.schemas.search import TodoSearchQuery


class SearchRepository:
    """할일 검색 쿼리를 담당하는 레포지토리.

    Repository handling relevance-ranked todo search queries.
    """

    def _search_query(self, user_id: UUID, params: TodoSearchQuery) -> Select:
        term: str = params.q.strip()
        pattern: str = contains_pattern(term)

        # 관련도 점수 — Relevance score expression
        relevance = (
            case((func.lower(Todo.title) == term.lower(), 20), else_=0)
            + case((Todo.title.ilike(pattern, escape=LIKE_ESCAPE), 10), else_=0)
            + case((Todo.description.ilike(pattern, escape=LIKE_ESCAPE), 5), else_=0)
        ).label("relevance_score")

        query: Select = (
            select(Todo, relevance)
            .where(
                Todo.user_id == user_id,
                or_(
                    Todo.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Todo.description.ilike(pattern, escape=LIKE_ESCAPE),
                ),
            )
            .execution_options(populate_existing=True)
        )

        if params.status is not None:
            query = query.where(Todo.status == params.status)
        if params.priority is not None:
            query = query.where(Todo.priority == params.priority)
        if params.category_id is not None:
            query = query.where(Todo.category_id == params.category_id)
        if params.tag_ids:
            query = query.where(
                Todo.id.in_(select(todo_tags.c.todo_id).where(todo_tags.c.tag_id.in_(params.tag_ids)))
            )
        if params.date_from is not None:
            query = query.where(Todo.due_date >= params.date_from)
        if params.date_to is not None:
            query = query.where(Todo.due_date <= params.date_to)

        return query.order_by(
            relevance.desc(),
            priority_rank.desc(),
            Todo.due_date.asc().nulls_last(),
            Todo.created_at.desc(),
            Todo.id,
        )

    async def search_todos(
        self,
        db: AsyncSession,
        user_id: UUID,
        params: TodoSearchQuery,
    ) -> tuple[list[tuple[Todo, int]], int]:
        """검색어로 할일을 검색하고 관련도순으로 정렬합니다.

        Search a user's todos and rank them by relevance.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID (User UUID)
            params: 검색 조건 (Search term, filters, pagination)

        Returns:
            tuple[list[tuple[Todo, int]], int]: ((할일, 점수) 목록, 전체 개수)
                (List of (todo, score) pairs, total count)
        """
        query: Select = self._search_query(user_id, params)

        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total: int = (await db.execute(count_query)).scalar() or 0

        offset: int = (params.page - 1) * params.limit
        result = await db.execute(query.offset(offset).limit(params.limit))
        rows: list[tuple[Todo, int]] = [(row[0], int(row[1])) for row in result.all()]
        return rows, total


class AnalyticsRepository:
    """분석 집계 쿼리를 담당하는 레포지토리.

    Repository handling aggregate queries for analytics.
    """

    async def count_todos(
        self,
        db: AsyncSession,
        user_id: UUID,
        *conditions: Any,
    ) -> int:
        """조건에 맞는 사용자 할일 수 — Count a user's todos matching conditions."""
        query = select(func.count(Todo.id)).where(Todo.user_id == user_id, *conditions)
        return (await db.execute(query)).scalar() or 0

    async def count_overdue(self, db: AsyncSession, user_id: UUID, now: datetime) -> int:
        """마감일이 지난 미완료 할일 수 — Overdue todos (not done or cancelled)."""
        return await self.count_todos(
            db,
            user_id,
            Todo.due_date < now,
            Todo.status.not_in(("DONE", "CANCELLED")),
        )

    async def group_counts(
        self,
        db: AsyncSession,
        user_id: UUID,
        column: Any,
    ) -> list[tuple[Any, int]]:
        """컬럼별 할일 수 — Todo counts grouped by a column."""
        query = (
            select(column, func.count(Todo.id))
            .where(Todo.user_id == user_id)
            .group_by(column)
        )
        result = await db.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def get_completion_times(
        self,
        db: AsyncSession,
        user_id: UUID,
        since: datetime,
    ) -> list[datetime]:
        """기간 내 완료 일시 목록 — Completion timestamps since ``since``."""
        query = select(Todo.completed_at).where(
            Todo.user_id == user_id,
            Todo.status == "DONE",
            Todo.completed_at >= since,
        )
        result = await db.execute(query)
        return [row[0] for row in result.all()]


# 싱글턴 인스턴스 — Singleton instance
search_repository: SearchRepository = SearchRepository()
analytics_repository: AnalyticsRepository = AnalyticsRepository()
