"""인증 라우터 — 회원가입, 로그인, 토큰 갱신, 로그아웃.

Auth Router — Registration, login, token refresh and logout.
These endpoints do not require a bearer token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.auth import LoginRequest, RefreshRequest, RegisterRequest, TokenResponse
from app.schemas.common import Envelope, envelope
from app.schemas.user import UserResponse
from app.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/register", response_model=Envelope[UserResponse], status_code=201)
async def register(
    data: RegisterRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """회원가입 — 새 계정을 생성합니다.

    Register a new account. Duplicate email returns 409.
    """
    result: UserResponse = await auth_service.register(db, data)
    await db.commit()
    return envelope(result)


@router.post("/login", response_model=Envelope[TokenResponse])
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """로그인 — 이메일/비밀번호로 토큰 쌍을 발급합니다.

    Log in with email and password and receive a token pair.
    """
    result: TokenResponse = await auth_service.login(db, data)
    await db.commit()
    return envelope(result)


@router.post("/refresh", response_model=Envelope[TokenResponse])
async def refresh_token(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> dict:
    """토큰 갱신 — 리프레시 토큰으로 새 토큰 쌍 발급.

    Refresh token endpoint. Issues a new token pair using a refresh token.
    """
    result: TokenResponse = await auth_service.refresh_tokens(db, data)
    await db.commit()
    return envelope(result)


@router.post("/logout", status_code=204)
async def logout(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """로그아웃 — 리프레시 토큰 폐기.

    Logout endpoint. Revokes the given refresh token.
    """
    await auth_service.logout(db, data.refresh_token)
    await db.commit()
