"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers registration, login, and token issuance/refresh.
"""

from pydantic import BaseModel, Field

from app.schemas.common import TimezoneName

# 이메일 형식 — Minimal email shape check
_EMAIL_PATTERN: str = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    """회원가입 요청 스키마.

    Self-registration request schema.

    Attributes:
        email: 이메일 (Login email, globally unique)
        password: 비밀번호 (Plain text, will be bcrypt-hashed on server)
        display_name: 표시 이름 (Display name)
        timezone: 시간대 (IANA timezone, default UTC)
    """

    email: str = Field(..., max_length=255, pattern=_EMAIL_PATTERN)  # 로그인 이메일 (Login email)
    password: str = Field(..., min_length=8, max_length=128)  # 비밀번호 — 평문, 서버에서 bcrypt 해싱 (Plain text)
    display_name: str = Field(..., min_length=1, max_length=255)  # 표시 이름 (Display name)
    timezone: TimezoneName = "UTC"  # 시간대 (IANA timezone)


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Login request schema.

    Attributes:
        email: 로그인 이메일 (Login email)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
    """

    email: str  # 로그인 이메일 (Login email)
    password: str  # 비밀번호 — 평문, 서버에서 bcrypt 해시와 비교 (Plain text, compared to bcrypt hash)


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    JWT token issuance response schema.
    Returned after successful login or token refresh.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer" for Authorization header)
    """

    access_token: str  # JWT 액세스 토큰 — 만료: 30분 기본 (Access token, default TTL: 30min)
    refresh_token: str  # JWT 리프레시 토큰 — 만료: 7일 기본 (Refresh token, default TTL: 7 days)
    token_type: str = "bearer"  # 토큰 유형 — 항상 "bearer" (Token type for Authorization header)


class RefreshRequest(BaseModel):
    """토큰 갱신 요청 스키마.

    Token refresh request schema.
    Exchanges a valid refresh token for a new access/refresh token pair.

    Attributes:
        refresh_token: 기존 리프레시 토큰 (Existing refresh token to exchange)
    """

    refresh_token: str  # 기존 리프레시 토큰 (Current refresh token)
