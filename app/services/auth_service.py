"""인증 서비스 — 회원가입, 로그인, 토큰 갱신 비즈니스 로직.

Auth Service — Business logic for registration, login, token refresh
and logout. Refresh tokens are persisted and rotated on every refresh.
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.user import User
from app.repositories.auth_repository import auth_repository
from app.repositories.user_repository import user_repository
from app.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from app.schemas.user import UserResponse
from app.services.user_service import user_service
from app.utils.dates import ensure_utc
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import create_access_token, create_refresh_token, decode_token
from app.utils.password import hash_password, verify_password


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    """

    def _build_jwt_payload(self, user: User) -> dict[str, str]:
        """JWT 토큰 페이로드를 생성합니다 — Build the JWT payload for a user."""
        return {"sub": str(user.id), "email": user.email}

    async def _generate_tokens(
        self,
        db: AsyncSession,
        user: User,
    ) -> TokenResponse:
        """액세스 토큰과 리프레시 토큰을 생성합니다.

        Generate an access/refresh token pair and persist the refresh token.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 사용자 모델 (User model instance)

        Returns:
            TokenResponse: 토큰 응답 (Token response with access and refresh tokens)
        """
        payload: dict[str, str] = self._build_jwt_payload(user)
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        # 리프레시 토큰을 DB에 저장 — Persist refresh token to database
        expires_at: datetime = datetime.now(timezone.utc) + timedelta(
            days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS
        )
        await auth_repository.create_refresh_token(
            db, user_id=user.id, token=refresh_token, expires_at=expires_at
        )

        return TokenResponse(access_token=access_token, refresh_token=refresh_token)

    async def register(
        self,
        db: AsyncSession,
        data: RegisterRequest,
    ) -> UserResponse:
        """회원가입을 처리합니다.

        Register a new account with a bcrypt-hashed password.

        Raises:
            DuplicateError: 같은 이메일이 이미 존재할 때 (Email already registered)
        """
        user: User = await user_service.create_user(
            db,
            email=data.email,
            display_name=data.display_name,
            password_hash=hash_password(data.password),
            timezone=data.timezone,
        )
        return user_service.to_response(user)

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> TokenResponse:
        """로그인을 처리합니다.

        Process login with email and password.

        Raises:
            UnauthorizedError: 잘못된 인증 정보일 때 (Invalid credentials)
        """
        user: User | None = await user_repository.get_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("이메일 또는 비밀번호가 올바르지 않습니다 (Invalid email or password)")

        return await self._generate_tokens(db, user)

    async def refresh_tokens(
        self,
        db: AsyncSession,
        data: RefreshRequest,
    ) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Issue a new token pair using a refresh token. The used token is revoked.

        Raises:
            UnauthorizedError: 유효하지 않거나 만료된 리프레시 토큰일 때
                               (Invalid, expired or already used refresh token)
        """
        try:
            payload: dict = decode_token(data.refresh_token)
        except jwt.InvalidTokenError:
            raise UnauthorizedError("유효하지 않은 리프레시 토큰입니다 (Invalid refresh token)")

        if payload.get("type") != "refresh":
            raise UnauthorizedError("잘못된 토큰 유형입니다 (Invalid token type)")

        # DB에서 리프레시 토큰 확인 — Verify refresh token in database
        db_token = await auth_repository.get_refresh_token(db, data.refresh_token)
        if db_token is None:
            raise UnauthorizedError("유효하지 않은 리프레시 토큰입니다 (Invalid refresh token)")

        # 만료 확인 — Check expiration
        if ensure_utc(db_token.expires_at) < datetime.now(timezone.utc):
            await auth_repository.delete_refresh_token(db, data.refresh_token)
            raise UnauthorizedError("리프레시 토큰이 만료되었습니다 (Refresh token has expired)")

        user: User | None = await user_repository.get_by_id(db, UUID(payload["sub"]))
        if user is None:
            raise UnauthorizedError("사용자를 찾을 수 없습니다 (User not found)")

        # 기존 리프레시 토큰 삭제 후 새 토큰 발급 — Delete old token and issue new pair
        await auth_repository.delete_refresh_token(db, data.refresh_token)
        return await self._generate_tokens(db, user)

    async def logout(
        self,
        db: AsyncSession,
        refresh_token: str,
    ) -> None:
        """로그아웃 처리 — 리프레시 토큰을 삭제합니다.

        Process logout by deleting the refresh token.
        """
        await auth_repository.delete_refresh_token(db, refresh_token)


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
