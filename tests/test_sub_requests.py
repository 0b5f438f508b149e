"""Tests for follow request routes."""

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import bearer
from linkup.models import Creator, Subscriber, SubRequest, User


def requests_url(user: User, creator: Creator) -> str:
    return f"/api/users/{user.id}/creators/{creator.id}/subRequests"


async def follow(client: AsyncClient, user: User, creator: Creator):
    return await client.post(requests_url(user, creator), headers=bearer(user))


class TestFollow:
    """Tests for RequestFollow over HTTP."""

    async def test_private_creator_creates_pending_request(
        self, client: AsyncClient, follower_user: User, private_creator: Creator
    ) -> None:
        response = await follow(client, follower_user, private_creator)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "pending"
        assert data["subscriber"] is None
        assert data["sub_request"]["requester_user_id"] == follower_user.id

    async def test_duplicate_pending_request_conflicts(
        self, client: AsyncClient, follower_user: User, private_creator: Creator
    ) -> None:
        await follow(client, follower_user, private_creator)
        response = await follow(client, follower_user, private_creator)

        assert response.status_code == 409

    async def test_public_creator_subscribes_immediately(
        self, client: AsyncClient, follower_user: User, public_creator: Creator
    ) -> None:
        response = await follow(client, follower_user, public_creator)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "subscribed"
        assert data["sub_request"] is None
        assert data["subscriber"]["has_access"] is True

    async def test_repeat_public_follow_is_idempotent(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        follower_user: User,
        public_creator: Creator,
    ) -> None:
        await follow(client, follower_user, public_creator)
        response = await follow(client, follower_user, public_creator)

        assert response.status_code == 200
        assert response.json()["status"] == "subscribed"
        result = await db_session.execute(select(func.count()).select_from(Subscriber))
        assert result.scalar_one() == 1

    async def test_self_follow_rejected(
        self, client: AsyncClient, test_user: User, private_creator: Creator
    ) -> None:
        response = await follow(client, test_user, private_creator)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation_error"

    async def test_missing_creator(self, client: AsyncClient, follower_user: User) -> None:
        response = await client.post(
            f"/api/users/{follower_user.id}/creators/99999/subRequests",
            headers=bearer(follower_user),
        )
        assert response.status_code == 404


class TestOwnerViews:
    """Tests for the creator owner's request inbox."""

    async def test_list_and_read_requests(
        self,
        client: AsyncClient,
        test_user: User,
        follower_user: User,
        outsider_user: User,
        private_creator: Creator,
    ) -> None:
        first = (await follow(client, follower_user, private_creator)).json()["sub_request"]
        await follow(client, outsider_user, private_creator)

        listing = await client.get(requests_url(test_user, private_creator), headers=bearer(test_user))
        assert listing.status_code == 200
        assert [r["requester_name"] for r in listing.json()] == ["Bob", "Carol"]

        single = await client.get(
            f"{requests_url(test_user, private_creator)}/{first['id']}",
            headers=bearer(test_user),
        )
        assert single.status_code == 200
        assert single.json()["requester_email"] == "bob@example.com"

    async def test_requester_cannot_list(
        self, client: AsyncClient, follower_user: User, private_creator: Creator
    ) -> None:
        await follow(client, follower_user, private_creator)

        response = await client.get(
            requests_url(follower_user, private_creator), headers=bearer(follower_user)
        )
        assert response.status_code == 403


class TestResolve:
    """Tests for accepting and rejecting requests."""

    async def test_accept_grants_access(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        test_user: User,
        follower_user: User,
        private_creator: Creator,
    ) -> None:
        request = (await follow(client, follower_user, private_creator)).json()["sub_request"]

        response = await client.put(
            f"{requests_url(test_user, private_creator)}/{request['id']}",
            json={"accepted": True},
            headers=bearer(test_user),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["accepted"] is True
        assert data["subscriber"]["subscriber_user_id"] == follower_user.id

        result = await db_session.execute(select(func.count()).select_from(SubRequest))
        assert result.scalar_one() == 0

        posts = await client.get(
            f"/api/users/{follower_user.id}/creators/{private_creator.id}/posts",
            headers=bearer(follower_user),
        )
        assert posts.status_code == 200

    async def test_reject_leaves_no_access(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        test_user: User,
        follower_user: User,
        private_creator: Creator,
    ) -> None:
        request = (await follow(client, follower_user, private_creator)).json()["sub_request"]

        response = await client.put(
            f"{requests_url(test_user, private_creator)}/{request['id']}",
            json={"accepted": False},
            headers=bearer(test_user),
        )
        assert response.status_code == 200
        assert response.json() == {"accepted": False, "subscriber": None}

        result = await db_session.execute(select(func.count()).select_from(Subscriber))
        assert result.scalar_one() == 0

        again = await follow(client, follower_user, private_creator)
        assert again.status_code == 201

    async def test_requester_cannot_accept_own_request(
        self, client: AsyncClient, follower_user: User, private_creator: Creator
    ) -> None:
        request = (await follow(client, follower_user, private_creator)).json()["sub_request"]

        response = await client.put(
            f"{requests_url(follower_user, private_creator)}/{request['id']}",
            json={"accepted": True},
            headers=bearer(follower_user),
        )
        assert response.status_code == 403

    async def test_resolve_missing_request(
        self, client: AsyncClient, test_user: User, private_creator: Creator
    ) -> None:
        response = await client.put(
            f"{requests_url(test_user, private_creator)}/99999",
            json={"accepted": True},
            headers=bearer(test_user),
        )
        assert response.status_code == 404

    async def test_accepted_must_be_boolean(
        self, client: AsyncClient, test_user: User, private_creator: Creator
    ) -> None:
        response = await client.put(
            f"{requests_url(test_user, private_creator)}/1",
            json={"accepted": "perhaps"},
            headers=bearer(test_user),
        )
        assert response.status_code == 400


class TestDeleteRequest:
    """Tests for DELETE on a request: owner rejects, requester withdraws."""

    async def test_owner_rejects(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        test_user: User,
        follower_user: User,
        private_creator: Creator,
    ) -> None:
        request = (await follow(client, follower_user, private_creator)).json()["sub_request"]

        response = await client.delete(
            f"{requests_url(test_user, private_creator)}/{request['id']}",
            headers=bearer(test_user),
        )
        assert response.status_code == 204
        result = await db_session.execute(select(func.count()).select_from(SubRequest))
        assert result.scalar_one() == 0

    async def test_requester_withdraws(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        follower_user: User,
        private_creator: Creator,
    ) -> None:
        request = (await follow(client, follower_user, private_creator)).json()["sub_request"]

        response = await client.delete(
            f"{requests_url(follower_user, private_creator)}/{request['id']}",
            headers=bearer(follower_user),
        )
        assert response.status_code == 204
        result = await db_session.execute(select(func.count()).select_from(SubRequest))
        assert result.scalar_one() == 0

    async def test_stranger_cannot_withdraw(
        self,
        client: AsyncClient,
        follower_user: User,
        outsider_user: User,
        private_creator: Creator,
    ) -> None:
        request = (await follow(client, follower_user, private_creator)).json()["sub_request"]

        response = await client.delete(
            f"{requests_url(outsider_user, private_creator)}/{request['id']}",
            headers=bearer(outsider_user),
        )
        assert response.status_code == 404
