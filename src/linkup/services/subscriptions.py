"""Follow requests and subscriber access."""

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from linkup.database import atomic
from linkup.errors import (
    ConflictError,
    NotFoundError,
    SelfFollowError,
    StoreError,
)
from linkup.models import Subscriber, SubRequest
from linkup.services.access import AccessGate

logger = logging.getLogger(__name__)


class FollowStatus(str, Enum):
    """Outcome of a follow attempt."""

    SUBSCRIBED = "subscribed"
    PENDING = "pending"


@dataclass
class FollowResult:
    """Result of RequestFollow: either a subscriber row or a pending request."""

    status: FollowStatus
    created: bool
    subscriber: Subscriber | None = None
    sub_request: SubRequest | None = None


class SubscriptionService:
    """
    Moves a (user, creator) pair between no relationship, a pending
    SubRequest, and a resolved Subscriber row.
    """

    def __init__(self, db: AsyncSession, gate: AccessGate | None = None) -> None:
        """
        Initialize the subscription service.

        Args:
            db: Database session
            gate: Access checks (created on the same session if not provided)
        """
        self.db = db
        self.gate = gate or AccessGate(db)

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert
        if dialect == "sqlite":
            return sqlite.insert
        raise StoreError(f"Upsert not supported on {dialect}")

    async def _upsert_subscriber(self, user_id: int, creator_id: int) -> None:
        """Grant access, creating the subscriber row or flipping an existing one."""
        insert = self._insert()
        stmt = insert(Subscriber).values(
            subscriber_user_id=user_id, creator_id=creator_id, has_access=True
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Subscriber.subscriber_user_id, Subscriber.creator_id],
            set_={"has_access": True, "updated_at": func.now()},
        )
        await self.db.execute(stmt)

    async def find_subscriber(self, user_id: int, creator_id: int) -> Subscriber | None:
        result = await self.db.execute(
            select(Subscriber)
            .where(
                Subscriber.subscriber_user_id == user_id,
                Subscriber.creator_id == creator_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def find_request(self, user_id: int, creator_id: int) -> SubRequest | None:
        result = await self.db.execute(
            select(SubRequest).where(
                SubRequest.requester_user_id == user_id,
                SubRequest.creator_id == creator_id,
            )
        )
        return result.scalar_one_or_none()

    async def request_follow(self, requester_id: int, creator_id: int) -> FollowResult:
        """
        Follow a creator.

        Public creators grant access immediately. Private creators get a
        pending SubRequest, unless the user already has access, in which
        case the call is an idempotent success.

        Raises:
            NotFoundError: If the creator does not exist
            SelfFollowError: If the requester owns the creator
            ConflictError: If a request for this pair is already pending
        """
        creator = await self.gate.get_creator(creator_id)
        if creator.owner_user_id == requester_id:
            raise SelfFollowError()

        existing = await self.find_subscriber(requester_id, creator_id)
        already_subscribed = existing is not None and existing.has_access

        if creator.is_public:
            async with atomic(self.db):
                await self._upsert_subscriber(requester_id, creator_id)
            subscriber = await self.find_subscriber(requester_id, creator_id)
            logger.info("User %s subscribed to public creator %s", requester_id, creator_id)
            return FollowResult(
                status=FollowStatus.SUBSCRIBED,
                created=not already_subscribed,
                subscriber=subscriber,
            )

        if already_subscribed:
            return FollowResult(
                status=FollowStatus.SUBSCRIBED, created=False, subscriber=existing
            )

        if await self.find_request(requester_id, creator_id) is not None:
            raise ConflictError("A subscription request is already pending for this creator")

        sub_request = SubRequest(requester_user_id=requester_id, creator_id=creator_id)
        try:
            async with atomic(self.db):
                self.db.add(sub_request)
        except IntegrityError as e:
            # Lost a race against a concurrent request for the same pair
            raise ConflictError(
                "A subscription request is already pending for this creator"
            ) from e

        await self.db.refresh(sub_request)
        logger.info(
            "User %s requested to follow private creator %s (request %s)",
            requester_id,
            creator_id,
            sub_request.id,
        )
        return FollowResult(status=FollowStatus.PENDING, created=True, sub_request=sub_request)

    async def list_requests(self, owner_id: int, creator_id: int) -> list[SubRequest]:
        """List pending requests for a creator the caller owns."""
        await self.gate.ensure_owner(owner_id, creator_id)
        result = await self.db.execute(
            select(SubRequest)
            .options(selectinload(SubRequest.requester))
            .where(SubRequest.creator_id == creator_id)
            .order_by(SubRequest.created_at, SubRequest.id)
        )
        return list(result.scalars().all())

    async def _get_request(self, request_id: int, creator_id: int) -> SubRequest:
        result = await self.db.execute(
            select(SubRequest)
            .options(selectinload(SubRequest.requester))
            .where(SubRequest.id == request_id, SubRequest.creator_id == creator_id)
        )
        sub_request = result.scalar_one_or_none()
        if sub_request is None:
            raise NotFoundError("Subscription request not found")
        return sub_request

    async def get_request(self, owner_id: int, creator_id: int, request_id: int) -> SubRequest:
        await self.gate.ensure_owner(owner_id, creator_id)
        return await self._get_request(request_id, creator_id)

    async def resolve_request(
        self, owner_id: int, creator_id: int, request_id: int, accepted: bool
    ) -> Subscriber | None:
        """
        Accept or reject a pending request.

        Accepting upserts a subscriber row with access and deletes the
        request in the same transaction. Rejecting only deletes the request.

        Returns:
            The subscriber row when accepted, None when rejected

        Raises:
            AuthorizationError: If the caller does not own the creator
            NotFoundError: If the request does not exist for this creator
        """
        await self.gate.ensure_owner(owner_id, creator_id)
        sub_request = await self._get_request(request_id, creator_id)
        requester_id = sub_request.requester_user_id

        async with atomic(self.db):
            if accepted:
                await self._upsert_subscriber(requester_id, creator_id)
            await self.db.execute(delete(SubRequest).where(SubRequest.id == sub_request.id))

        logger.info(
            "Creator %s %s request %s from user %s",
            creator_id,
            "accepted" if accepted else "rejected",
            request_id,
            requester_id,
        )
        if not accepted:
            return None
        return await self.find_subscriber(requester_id, creator_id)

    async def withdraw_request(self, requester_id: int, creator_id: int, request_id: int) -> None:
        """Cancel a request the caller made themselves."""
        sub_request = await self._get_request(request_id, creator_id)
        if sub_request.requester_user_id != requester_id:
            raise NotFoundError("Subscription request not found")

        async with atomic(self.db):
            await self.db.execute(delete(SubRequest).where(SubRequest.id == sub_request.id))
        logger.info("User %s withdrew request %s", requester_id, request_id)

    async def remove_request(self, user_id: int, creator_id: int, request_id: int) -> None:
        """Owner rejects, or requester withdraws, depending on who is asking."""
        creator = await self.gate.get_creator(creator_id)
        if creator.owner_user_id == user_id:
            await self.resolve_request(user_id, creator_id, request_id, accepted=False)
        else:
            await self.withdraw_request(user_id, creator_id, request_id)

    async def list_subscribers(self, viewer_id: int, creator_id: int) -> list[Subscriber]:
        """List a creator's subscribers. Visible to the owner and to subscribers."""
        await self.gate.ensure_member(viewer_id, creator_id)
        result = await self.db.execute(
            select(Subscriber)
            .options(selectinload(Subscriber.subscriber))
            .where(Subscriber.creator_id == creator_id)
            .order_by(Subscriber.id)
        )
        return list(result.scalars().all())

    async def get_subscriber(
        self, viewer_id: int, creator_id: int, subscriber_id: int
    ) -> Subscriber:
        await self.gate.ensure_member(viewer_id, creator_id)
        result = await self.db.execute(
            select(Subscriber)
            .options(selectinload(Subscriber.subscriber))
            .where(Subscriber.id == subscriber_id, Subscriber.creator_id == creator_id)
        )
        subscriber = result.scalar_one_or_none()
        if subscriber is None:
            raise NotFoundError("Subscriber not found")
        return subscriber

    async def revoke_access(self, actor_id: int, creator_id: int, subscriber_id: int) -> None:
        """
        Delete a subscriber row.

        The creator's owner can remove any subscriber; a subscriber can remove
        themself. Anyone else gets NotFound so the row's existence is not
        revealed. Revocation does not create a new request.

        Raises:
            NotFoundError: If the creator or subscriber row is absent, or hidden from the actor
        """
        creator = await self.gate.get_creator(creator_id)
        result = await self.db.execute(
            select(Subscriber).where(
                Subscriber.id == subscriber_id, Subscriber.creator_id == creator_id
            )
        )
        subscriber = result.scalar_one_or_none()
        if subscriber is None or actor_id not in (
            creator.owner_user_id,
            subscriber.subscriber_user_id,
        ):
            raise NotFoundError("Subscriber not found")

        async with atomic(self.db):
            await self.db.execute(delete(Subscriber).where(Subscriber.id == subscriber.id))
        logger.info("User %s removed subscriber %s from creator %s", actor_id, subscriber_id, creator_id)

    async def forget_user(self, user_id: int) -> None:
        """Drop every request and subscription held by a user. Caller commits."""
        await self.db.execute(delete(SubRequest).where(SubRequest.requester_user_id == user_id))
        await self.db.execute(delete(Subscriber).where(Subscriber.subscriber_user_id == user_id))

    async def forget_creator(self, creator_id: int) -> None:
        """Drop every request and subscriber of a creator. Caller commits."""
        await self.db.execute(delete(SubRequest).where(SubRequest.creator_id == creator_id))
        await self.db.execute(delete(Subscriber).where(Subscriber.creator_id == creator_id))
