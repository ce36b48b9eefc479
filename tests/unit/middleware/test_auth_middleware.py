"""Unit tests for middleware auth (src/notekeep/middleware/auth.py)."""

from typing import Optional

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from notekeep.middleware.auth import JWTBearer


def build_app() -> FastAPI:
    app = FastAPI()

    @app.get("/protected")
    async def protected(token: str = Depends(JWTBearer())):
        return {"token": token}

    return app


def _make_bearer(token: Optional[str]) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"} if token is not None else {}


def test_jwtbearer_returns_raw_token():
    client = TestClient(build_app())
    resp = client.get("/protected", headers=_make_bearer("abc.def.ghi"))
    assert resp.status_code == 200
    assert resp.json() == {"token": "abc.def.ghi"}


def test_jwtbearer_rejects_missing_header():
    client = TestClient(build_app())
    resp = client.get("/protected")
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Authorization header missing"}
    assert resp.headers["www-authenticate"] == "Bearer"


def test_jwtbearer_rejects_other_scheme():
    client = TestClient(build_app())
    resp = client.get("/protected", headers={"Authorization": "Basic YWxpY2U6cHc="})
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid or expired token"}


def test_jwtbearer_rejects_empty_bearer():
    client = TestClient(build_app())
    resp = client.get("/protected", headers={"Authorization": "Bearer"})
    assert resp.status_code == 401
    assert resp.json() == {"detail": "Invalid or expired token"}


class TestCurrentUserDependency:
    """get_current_user through the real app."""

    async def test_valid_token(self, async_client, auth_headers, test_user):
        resp = await async_client.get("/api/auth/me", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["id"] == test_user.id

    async def test_bad_signature(self, async_client):
        resp = await async_client.get("/api/auth/me", headers=_make_bearer("x.y.z"))
        assert resp.status_code == 401
        assert resp.json() == {"detail": "Invalid or expired token"}

    async def test_user_gone(self, async_client):
        from notekeep.security.jwt import create_access_token

        resp = await async_client.get(
            "/api/auth/me", headers=_make_bearer(create_access_token({"sub": "4242"}))
        )
        assert resp.status_code == 401
        assert resp.json() == {"detail": "User not found"}
