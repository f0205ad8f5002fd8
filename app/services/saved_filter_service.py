"""저장된 필터 서비스 — 사용자 필터 CRUD 및 기본 필터 관리.

Saved Filter Service — CRUD for saved filters. A user has at most one
default filter: marking one as default clears the flag on the others.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.filter import SavedFilter
from app.repositories.saved_filter_repository import saved_filter_repository
from app.schemas.saved_filter import SavedFilterCreate, SavedFilterResponse, SavedFilterUpdate
from app.utils.exceptions import NotFoundError


class SavedFilterService:
    """저장된 필터 관련 비즈니스 로직을 처리하는 서비스.

    Service handling saved filter business logic.
    """

    def _to_response(self, saved: SavedFilter) -> SavedFilterResponse:
        return SavedFilterResponse(
            id=str(saved.id),
            name=saved.name,
            filters=saved.filters or {},
            is_default=saved.is_default,
            created_at=saved.created_at,
            updated_at=saved.updated_at,
        )

    async def _get_filter(
        self,
        db: AsyncSession,
        filter_id: UUID,
        user_id: UUID,
    ) -> SavedFilter:
        saved: SavedFilter | None = await saved_filter_repository.get_by_id(db, filter_id, user_id)
        if saved is None:
            raise NotFoundError("저장된 필터를 찾을 수 없습니다 (Saved filter not found)")
        return saved

    async def list_filters(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> list[SavedFilterResponse]:
        """저장된 필터 목록 — Default filter first, then by name."""
        filters: list[SavedFilter] = await saved_filter_repository.get_by_user(db, user_id)
        return [self._to_response(f) for f in filters]

    async def get_filter(
        self,
        db: AsyncSession,
        filter_id: UUID,
        user_id: UUID,
    ) -> SavedFilterResponse:
        saved: SavedFilter = await self._get_filter(db, filter_id, user_id)
        return self._to_response(saved)

    async def create_filter(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: SavedFilterCreate,
    ) -> SavedFilterResponse:
        """필터를 저장합니다.

        Save a filter. When ``is_default`` is set the user's previous
        default loses the flag.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 소유 사용자 UUID (Owner UUID)
            data: 필터 생성 데이터 (Name, filter criteria, default flag)

        Returns:
            SavedFilterResponse: 저장된 필터 (Created filter)
        """
        if data.is_default:
            await saved_filter_repository.clear_default(db, user_id)

        saved: SavedFilter = await saved_filter_repository.create(
            db,
            {
                "user_id": user_id,
                "name": data.name,
                "filters": data.filters,
                "is_default": data.is_default,
            },
        )
        return self._to_response(saved)

    async def update_filter(
        self,
        db: AsyncSession,
        filter_id: UUID,
        user_id: UUID,
        data: SavedFilterUpdate,
    ) -> SavedFilterResponse:
        """저장된 필터를 수정합니다 (부분 업데이트) — Partial update."""
        saved: SavedFilter = await self._get_filter(db, filter_id, user_id)
        update_data: dict = {
            k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None
        }
        if update_data.get("is_default"):
            await saved_filter_repository.clear_default(db, user_id, except_id=saved.id)

        saved = await saved_filter_repository.update(db, saved, update_data)
        return self._to_response(saved)

    async def delete_filter(
        self,
        db: AsyncSession,
        filter_id: UUID,
        user_id: UUID,
    ) -> None:
        saved: SavedFilter = await self._get_filter(db, filter_id, user_id)
        await saved_filter_repository.delete(db, saved)


# 싱글턴 인스턴스 — Singleton instance
saved_filter_service: SavedFilterService = SavedFilterService()
