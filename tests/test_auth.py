"""Tests for credentials, tokens and the bearer dependency."""

from httpx import AsyncClient
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.auth import hash_password, issue_token, verify_password, verify_token
from linkup.models import User


class TestPasswords:
    """Tests for password hashing."""

    def test_hash_and_verify(self) -> None:
        hashed = hash_password("s3cret-password")
        assert hashed != "s3cret-password"
        assert verify_password("s3cret-password", hashed) is True
        assert verify_password("wrong-password", hashed) is False


class TestTokens:
    """Tests for bearer token issuing and verification."""

    def test_round_trip(self) -> None:
        assert verify_token(issue_token(42)) == 42

    def test_tampered_token_is_rejected(self) -> None:
        token = issue_token(42)
        assert verify_token(token[:-2] + "xx") is None

    def test_garbage_is_rejected(self) -> None:
        assert verify_token("not-a-token") is None

    def test_expired_token_is_rejected(self) -> None:
        assert verify_token(issue_token(42), max_age=-1) is None


class TestBearerDependency:
    """Tests for authentication on protected routes."""

    async def test_missing_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/users")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "authentication_error"

    async def test_invalid_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/users", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "authentication_error"

    async def test_non_bearer_scheme(self, client: AsyncClient, test_user: User) -> None:
        response = await client.get(
            "/api/users", headers={"Authorization": f"Basic {issue_token(test_user.id)}"}
        )
        assert response.status_code == 401

    async def test_token_for_deleted_user(
        self, client: AsyncClient, db_session: AsyncSession, test_user: User
    ) -> None:
        headers = {"Authorization": f"Bearer {issue_token(test_user.id)}"}
        await db_session.execute(delete(User).where(User.id == test_user.id))
        await db_session.commit()

        response = await client.get("/api/users", headers=headers)
        assert response.status_code == 401

    async def test_path_user_must_match_token(
        self, client: AsyncClient, auth_headers: dict[str, str], follower_user: User
    ) -> None:
        """Self-scoped routes reject other users' ids."""
        response = await client.get(
            f"/api/users/{follower_user.id}/creators", headers=auth_headers
        )
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "authorization_error"
