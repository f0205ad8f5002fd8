"""활동 로그 서비스 — 할일 변경 감사 기록 생성 및 조회.

Activity Log Service — Records and lists the audit trail of todo mutations.
Other services call ``create_activity_log`` inside their own transaction so
the log entry commits or rolls back together with the change it describes.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.activity import ActivityLog
from app.models.todo import Todo
from app.repositories.activity_log_repository import activity_log_repository
from app.repositories.todo_repository import todo_repository
from app.schemas.activity_log import (
    ActivityLogCreate,
    ActivityLogQuery,
    ActivityLogResponse,
    ActivityTodoSummary,
)
from app.utils.exceptions import NotFoundError
from app.utils.pagination import page_meta


class ActivityLogService:
    """활동 로그 관련 비즈니스 로직을 처리하는 서비스.

    Service handling activity log business logic.
    """

    def _to_response(self, log: ActivityLog) -> ActivityLogResponse:
        todo: Todo | None = log.todo
        return ActivityLogResponse(
            id=str(log.id),
            todo_id=str(log.todo_id) if log.todo_id else None,
            type=log.type,
            changes=log.changes or {},
            created_at=log.created_at,
            todo=ActivityTodoSummary(
                id=str(todo.id),
                title=todo.title,
                status=todo.status,
                priority=todo.priority,
            ) if todo is not None else None,
        )

    async def create_activity_log(
        self,
        db: AsyncSession,
        user_id: UUID,
        todo_id: UUID | None,
        activity_type: str,
        changes: dict[str, Any] | None = None,
    ) -> ActivityLog:
        """활동 로그를 기록합니다.

        Record an activity log entry.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 작업 수행 사용자 ID (Acting user UUID)
            todo_id: 대상 할일 ID (Target todo UUID)
            activity_type: 활동 유형 (CREATED, UPDATED, ...)
            changes: 변경 내용 (JSON-serializable change details)

        Returns:
            ActivityLog: 생성된 로그 (Created log entry)
        """
        return await activity_log_repository.create(
            db,
            {
                "user_id": user_id,
                "todo_id": todo_id,
                "type": activity_type,
                "changes": changes or {},
            },
        )

    async def log_for_user(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: ActivityLogCreate,
    ) -> ActivityLogResponse:
        """사용자가 소유한 할일에 활동 로그를 추가합니다.

        Add a manual activity entry to a todo the user owns.

        Raises:
            NotFoundError: 할일이 없거나 다른 사용자의 것일 때 (Todo missing or not owned)
        """
        todo: Todo | None = await todo_repository.get_by_id(db, data.todo_id, user_id)
        if todo is None:
            raise NotFoundError("할일을 찾을 수 없습니다 (Todo not found)")

        log: ActivityLog = await self.create_activity_log(
            db, user_id, todo.id, data.type, data.changes
        )
        return self._to_response(log)

    async def get_activity_logs(
        self,
        db: AsyncSession,
        user_id: UUID,
        params: ActivityLogQuery,
    ) -> tuple[list[ActivityLogResponse], dict[str, int]]:
        """활동 로그를 최신순으로 조회합니다.

        List the user's activity logs newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID (User UUID)
            params: 조회 조건 (Filters and pagination)

        Returns:
            tuple[list[ActivityLogResponse], dict[str, int]]: (로그 목록, 페이지 메타)
                (Log responses and pagination meta)
        """
        logs, total = await activity_log_repository.list_logs(db, user_id, params)
        return (
            [self._to_response(log) for log in logs],
            page_meta(total, params.page, params.limit),
        )


# 싱글턴 인스턴스 — Singleton instance
activity_log_service: ActivityLogService = ActivityLogService()
