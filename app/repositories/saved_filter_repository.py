"""저장된 필터 레포지토리.

Saved Filter Repository — Listing and default-flag maintenance.
"""

from uuid import UUID

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.filter import SavedFilter
from app.repositories.base import BaseRepository


class SavedFilterRepository(BaseRepository[SavedFilter]):
    """저장된 필터 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the saved_filters table.
    """

    def __init__(self) -> None:
        super().__init__(SavedFilter)

    async def get_by_user(self, db: AsyncSession, user_id: UUID) -> list[SavedFilter]:
        """사용자의 필터 목록 — Default filter first, then by name."""
        query: Select = (
            select(SavedFilter)
            .where(SavedFilter.user_id == user_id)
            .order_by(SavedFilter.is_default.desc(), SavedFilter.name)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def clear_default(
        self,
        db: AsyncSession,
        user_id: UUID,
        except_id: UUID | None = None,
    ) -> None:
        """사용자의 기본 필터 표시를 해제합니다.

        Clear ``is_default`` on every filter of the user except ``except_id``.
        """
        stmt = (
            update(SavedFilter)
            .where(SavedFilter.user_id == user_id, SavedFilter.is_default.is_(True))
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        if except_id is not None:
            stmt = stmt.where(SavedFilter.id != except_id)
        await db.execute(stmt)
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
saved_filter_repository: SavedFilterRepository = SavedFilterRepository()
