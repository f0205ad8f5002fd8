"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Every test gets a fresh database: the engine is created per test with a
StaticPool so all sessions share one in-memory connection, and the schema is
built from the ORM metadata.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.models.user import User
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "password123!"


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite 외래키 강제 — ON DELETE 동작을 위해 필요."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 스키마를 새로 생성합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(eng.sync_engine, "connect", _enable_foreign_keys)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """픽스처 데이터 생성용 세션. 요청은 별도 세션을 사용합니다."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — 요청마다 새 DB 세션을 주입합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 사용자와 토큰
# ---------------------------------------------------------------------------
async def make_user(db: AsyncSession, email: str, display_name: str) -> User:
    """테스트 사용자를 생성하고 커밋합니다."""
    user = User(
        email=email,
        display_name=display_name,
        password_hash=hash_password(TEST_PASSWORD),
        timezone="UTC",
        settings={},
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def user(db: AsyncSession) -> User:
    return await make_user(db, "alice@example.com", "Alice")


@pytest_asyncio.fixture
async def other_user(db: AsyncSession) -> User:
    return await make_user(db, "bob@example.com", "Bob")


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user.id), "email": user.email})


@pytest.fixture
def token(user: User) -> str:
    return make_token(user)


@pytest.fixture
def other_token(other_user: User) -> str:
    return make_token(other_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers(token: str) -> dict[str, str]:
    return auth_header(token)


@pytest.fixture
def other_headers(other_token: str) -> dict[str, str]:
    return auth_header(other_token)


# ---------------------------------------------------------------------------
# API 헬퍼 — 요청 본문에서 data 추출
# ---------------------------------------------------------------------------
async def create_todo(client: AsyncClient, headers: dict[str, str], **fields) -> dict:
    """API로 할일을 생성하고 응답 data를 반환합니다."""
    payload = {"title": "Write report", **fields}
    res = await client.post("/api/v1/todos", json=payload, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


async def create_category(client: AsyncClient, headers: dict[str, str], name: str = "Work", **fields) -> dict:
    res = await client.post("/api/v1/categories", json={"name": name, **fields}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]


async def create_tag(client: AsyncClient, headers: dict[str, str], name: str = "urgent", **fields) -> dict:
    res = await client.post("/api/v1/tags", json={"name": name, **fields}, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]
