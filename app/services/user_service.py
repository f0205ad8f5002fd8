"""사용자 서비스 — 사용자 생성 및 프로필 관리.

User Service — User creation and profile management.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.user import UserProfileUpdate, UserResponse
from app.utils.exceptions import DuplicateError, NotFoundError


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic.
    """

    def to_response(self, user: User) -> UserResponse:
        """사용자 모델을 응답 스키마로 변환합니다.

        Convert a User model instance to a UserResponse schema.
        """
        return UserResponse(
            id=str(user.id),
            email=user.email,
            display_name=user.display_name,
            timezone=user.timezone,
            settings=user.settings or {},
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    async def create_user(
        self,
        db: AsyncSession,
        email: str,
        display_name: str,
        password_hash: str | None = None,
        timezone: str = "UTC",
    ) -> User:
        """새 사용자를 생성합니다.

        Create a new user account.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 이메일 (Email, globally unique)
            display_name: 표시 이름 (Display name)
            password_hash: bcrypt 해시 (Password hash, None for password-less accounts)
            timezone: 시간대 (IANA timezone, default UTC)

        Returns:
            User: 생성된 사용자 (Created user)

        Raises:
            DuplicateError: 같은 이메일이 이미 존재할 때 (Email already registered)
        """
        existing: User | None = await user_repository.get_by_email(db, email)
        if existing is not None:
            raise DuplicateError("이미 등록된 이메일입니다 (Email already registered)")

        return await user_repository.create(
            db,
            {
                "email": email.lower(),
                "display_name": display_name,
                "password_hash": password_hash,
                "timezone": timezone,
                "settings": {},
            },
        )

    async def get_user_profile(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> UserResponse:
        """사용자 프로필을 조회합니다.

        Retrieve a user's profile.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("사용자를 찾을 수 없습니다 (User not found)")
        return self.to_response(user)

    async def update_user_profile(
        self,
        db: AsyncSession,
        user_id: UUID,
        data: UserProfileUpdate,
    ) -> UserResponse:
        """사용자 프로필을 수정합니다 (전달된 필드만 변경).

        Update a user's profile; only provided fields change.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("사용자를 찾을 수 없습니다 (User not found)")

        # null 값은 무시 — Explicit nulls are ignored for these non-nullable fields
        update_data: dict[str, Any] = {
            k: v
            for k, v in data.model_dump(exclude_unset=True, exclude={"settings"}).items()
            if v is not None
        }
        if data.settings is not None:
            # 설정은 환경설정 스키마로 검증된 값만 저장 — Only validated preference keys are stored
            settings: dict[str, Any] = data.settings.model_dump(exclude_none=True, mode="json")
            settings_timezone: str | None = settings.pop("timezone", None)
            if settings_timezone is not None and "timezone" not in update_data:
                update_data["timezone"] = settings_timezone
            update_data["settings"] = settings

        user = await user_repository.update(db, user, update_data)
        return self.to_response(user)


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
