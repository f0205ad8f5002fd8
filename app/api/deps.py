"""FastAPI 의존성 주입 모듈 — 인증.

FastAPI dependency injection module — Authentication.
Provides the dependency that extracts the current user from the JWT
bearer token. Every resource is owned by a user, so ownership checks
happen in the services rather than here.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출 (HTTPBearer extracts the token)
    3. decode_token()이 JWT를 검증하고 페이로드를 반환
       (decode_token verifies JWT and returns payload)
    4. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using payload "sub" field)
"""

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.repositories.user_repository import user_repository
from app.utils.exceptions import UnauthorizedError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — 헤더가 없으면 None (401은 직접 발생)
# Extracts the bearer token; a missing header yields None so we raise 401 ourselves
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode JWT from the Authorization header and return the authenticated user.

    Args:
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)
        db: 비동기 DB 세션 (Async database session)

    Returns:
        User: 인증된 사용자 ORM 인스턴스 (Authenticated user ORM instance)

    Raises:
        UnauthorizedError: 토큰이 없거나 유효하지 않거나 만료됨 (Missing, invalid or expired token)
        UnauthorizedError: 사용자를 찾을 수 없음 (User not found)
    """
    if credentials is None:
        raise UnauthorizedError("인증 토큰이 필요합니다 (Authentication required)")

    try:
        payload: dict = decode_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise UnauthorizedError("유효하지 않거나 만료된 토큰입니다 (Invalid or expired token)")

    # 토큰 타입 검증 — Reject refresh tokens used as access tokens
    if payload.get("type") != "access":
        raise UnauthorizedError("잘못된 토큰 유형입니다 (Invalid token type)")

    try:
        user_id: UUID = UUID(str(payload.get("sub")))
    except ValueError:
        raise UnauthorizedError("유효하지 않은 토큰입니다 (Invalid token)")

    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("사용자를 찾을 수 없습니다 (User not found)")

    return user

