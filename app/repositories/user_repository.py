"""사용자 레포지토리 — 사용자 CRUD 및 관련 쿼리.

User Repository — CRUD and related queries for users and their
per-view preferences.
"""

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, ViewPreference
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> User | None:
        """이메일로 사용자를 조회합니다 (대소문자 무시).

        Retrieve a user by email, case-insensitively.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 조회할 이메일 (Email to look up)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        query: Select = select(User).where(func.lower(User.email) == email.lower())
        result = await db.execute(query)
        return result.scalar_one_or_none()


class ViewPreferenceRepository(BaseRepository[ViewPreference]):
    """보기 설정 레포지토리 — View preference repository."""

    def __init__(self) -> None:
        super().__init__(ViewPreference)

    async def get_for_view(
        self,
        db: AsyncSession,
        user_id: UUID,
        view_type: str,
    ) -> ViewPreference | None:
        """사용자와 보기 유형으로 설정을 조회합니다.

        Retrieve the stored preference for a user and view type.
        """
        query: Select = select(ViewPreference).where(
            ViewPreference.user_id == user_id,
            ViewPreference.view_type == view_type,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
view_preference_repository: ViewPreferenceRepository = ViewPreferenceRepository()
