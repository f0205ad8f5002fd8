"""인증 API 테스트 — 회원가입, 로그인, 토큰 갱신, 로그아웃, 토큰 검증.

Auth API tests — Registration, login, token refresh, logout and bearer
token checks.
"""

from httpx import AsyncClient

from app.utils.jwt import create_refresh_token
from tests.conftest import TEST_PASSWORD, auth_header

AUTH = "/api/v1/auth"


class TestRegister:
    """회원가입 테스트."""

    async def test_register_success(self, client: AsyncClient):
        """회원가입 성공 — 비밀번호 해시는 노출되지 않음."""
        res = await client.post(f"{AUTH}/register", json={
            "email": "New.User@Example.com",
            "password": "supersecret",
            "display_name": "New User",
        })
        assert res.status_code == 201
        data = res.json()["data"]
        assert data["email"] == "new.user@example.com"
        assert data["display_name"] == "New User"
        assert data["timezone"] == "UTC"
        assert "password" not in data
        assert "password_hash" not in data

    async def test_register_duplicate_email(self, client: AsyncClient, user):
        """중복 이메일은 409."""
        res = await client.post(f"{AUTH}/register", json={
            "email": user.email,
            "password": "supersecret",
            "display_name": "Again",
        })
        assert res.status_code == 409
        body = res.json()
        assert body["status"] == "error"
        assert body["kind"] == "conflict"

    async def test_register_short_password(self, client: AsyncClient):
        """짧은 비밀번호는 400 validation_error."""
        res = await client.post(f"{AUTH}/register", json={
            "email": "short@example.com",
            "password": "123",
            "display_name": "Short",
        })
        assert res.status_code == 400
        assert res.json()["kind"] == "validation_error"

    async def test_register_invalid_timezone(self, client: AsyncClient):
        """알 수 없는 시간대는 400."""
        res = await client.post(f"{AUTH}/register", json={
            "email": "tz@example.com",
            "password": "supersecret",
            "display_name": "TZ",
            "timezone": "Mars/Olympus",
        })
        assert res.status_code == 400


class TestLogin:
    """로그인 테스트."""

    async def test_login_success(self, client: AsyncClient, user):
        """로그인 성공 — 토큰 쌍 발급."""
        res = await client.post(f"{AUTH}/login", json={
            "email": user.email,
            "password": TEST_PASSWORD,
        })
        assert res.status_code == 200
        data = res.json()["data"]
        assert data["access_token"]
        assert data["refresh_token"]
        assert data["token_type"] == "bearer"

    async def test_login_email_case_insensitive(self, client: AsyncClient, user):
        """이메일 대소문자 무시."""
        res = await client.post(f"{AUTH}/login", json={
            "email": user.email.upper(),
            "password": TEST_PASSWORD,
        })
        assert res.status_code == 200

    async def test_login_wrong_password(self, client: AsyncClient, user):
        """잘못된 비밀번호는 401."""
        res = await client.post(f"{AUTH}/login", json={
            "email": user.email,
            "password": "wrong-password",
        })
        assert res.status_code == 401
        assert res.json()["kind"] == "unauthorized"

    async def test_login_unknown_email(self, client: AsyncClient):
        """존재하지 않는 이메일은 401."""
        res = await client.post(f"{AUTH}/login", json={
            "email": "ghost@example.com",
            "password": "whatever",
        })
        assert res.status_code == 401


class TestRefresh:
    """토큰 갱신 테스트."""

    async def _login(self, client: AsyncClient, user) -> dict:
        res = await client.post(f"{AUTH}/login", json={
            "email": user.email,
            "password": TEST_PASSWORD,
        })
        return res.json()["data"]

    async def test_refresh_rotates_token(self, client: AsyncClient, user):
        """갱신 성공 — 이전 리프레시 토큰은 재사용 불가."""
        tokens = await self._login(client, user)
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 200
        new_tokens = res.json()["data"]
        assert new_tokens["refresh_token"] != tokens["refresh_token"]

        reuse = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert reuse.status_code == 401

    async def test_refresh_with_access_token_rejected(self, client: AsyncClient, user):
        """액세스 토큰으로 갱신 시도는 401."""
        tokens = await self._login(client, user)
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["access_token"]})
        assert res.status_code == 401

    async def test_refresh_unknown_token(self, client: AsyncClient, user):
        """저장되지 않은 리프레시 토큰은 401."""
        forged = create_refresh_token({"sub": str(user.id)})
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": forged})
        assert res.status_code == 401

    async def test_refresh_garbage(self, client: AsyncClient):
        """형식이 잘못된 토큰은 401."""
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": "not-a-jwt"})
        assert res.status_code == 401


class TestLogout:
    """로그아웃 테스트."""

    async def test_logout_revokes_refresh_token(self, client: AsyncClient, user):
        """로그아웃 후 리프레시 토큰 사용 불가."""
        login = await client.post(f"{AUTH}/login", json={
            "email": user.email,
            "password": TEST_PASSWORD,
        })
        tokens = login.json()["data"]

        res = await client.post(f"{AUTH}/logout", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 204

        again = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert again.status_code == 401


class TestBearerToken:
    """인증 헤더 검증 테스트."""

    async def test_missing_token(self, client: AsyncClient):
        """토큰 없이 보호된 엔드포인트 호출 시 401."""
        res = await client.get("/api/v1/todos")
        assert res.status_code == 401
        assert res.json()["kind"] == "unauthorized"

    async def test_invalid_token(self, client: AsyncClient):
        """위조된 토큰은 401."""
        res = await client.get("/api/v1/todos", headers=auth_header("abc.def.ghi"))
        assert res.status_code == 401

    async def test_refresh_token_as_bearer_rejected(self, client: AsyncClient, user):
        """리프레시 토큰을 Bearer로 사용하면 401."""
        refresh = create_refresh_token({"sub": str(user.id)})
        res = await client.get("/api/v1/todos", headers=auth_header(refresh))
        assert res.status_code == 401
