"""활동 로그 레포지토리.

Activity Log Repository — Filtered, newest-first activity history.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity import ActivityLog
from app.repositories.base import BaseRepository
from app.schemas.activity_log import ActivityLogQuery


class ActivityLogRepository(BaseRepository[ActivityLog]):
    """활동 로그 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the activity_logs table.
    """

    def __init__(self) -> None:
        super().__init__(ActivityLog)

    async def list_logs(
        self,
        db: AsyncSession,
        user_id: UUID,
        params: ActivityLogQuery,
    ) -> tuple[Sequence[ActivityLog], int]:
        """필터가 적용된 활동 로그를 최신순으로 조회합니다.

        Retrieve a page of the user's activity logs, newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID (User UUID)
            params: 조회 조건 (Filters and pagination)

        Returns:
            tuple[Sequence[ActivityLog], int]: (로그 목록, 전체 개수) (Logs, total count)
        """
        query: Select = select(ActivityLog).where(ActivityLog.user_id == user_id)
        if params.todo_id is not None:
            query = query.where(ActivityLog.todo_id == params.todo_id)
        if params.type is not None:
            query = query.where(ActivityLog.type == params.type)
        if params.date_from is not None:
            query = query.where(ActivityLog.created_at >= params.date_from)
        if params.date_to is not None:
            query = query.where(ActivityLog.created_at <= params.date_to)
        query = query.order_by(ActivityLog.created_at.desc(), ActivityLog.id)
        return await self.get_paginated(db, query, params.page, params.limit)


# 싱글턴 인스턴스 — Singleton instance
activity_log_repository: ActivityLogRepository = ActivityLogRepository()
