"""Read access checks for creator content."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.errors import AuthorizationError, NotFoundError
from linkup.models import Creator, Subscriber

logger = logging.getLogger(__name__)


class AccessGate:
    """Decides whether a user may read a creator's posts and subscriber list."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_creator(self, creator_id: int) -> Creator:
        creator = await self.db.get(Creator, creator_id)
        if creator is None:
            raise NotFoundError("Creator not found")
        return creator

    async def has_access(self, user_id: int, creator_id: int) -> bool:
        """Check for a subscriber row with access granted."""
        result = await self.db.execute(
            select(Subscriber.id).where(
                Subscriber.subscriber_user_id == user_id,
                Subscriber.creator_id == creator_id,
                Subscriber.has_access == True,  # noqa: E712
            )
        )
        return result.scalar_one_or_none() is not None

    async def can_read(self, requester_id: int, creator_id: int) -> bool:
        """
        Decide whether a user may read a creator's posts.

        Public creators are readable by everyone, the owner can always read
        their own content, and anyone else needs a subscriber row with access.

        Raises:
            NotFoundError: If the creator does not exist
        """
        creator = await self.get_creator(creator_id)
        return await self._can_read(creator, requester_id)

    async def _can_read(self, creator: Creator, requester_id: int) -> bool:
        if creator.is_public:
            return True
        if creator.owner_user_id == requester_id:
            return True
        return await self.has_access(requester_id, creator.id)

    async def ensure_can_read(self, requester_id: int, creator_id: int) -> Creator:
        """Like can_read, but raise AuthorizationError instead of returning False."""
        creator = await self.get_creator(creator_id)
        if not await self._can_read(creator, requester_id):
            logger.info("User %s denied read access to creator %s", requester_id, creator_id)
            raise AuthorizationError("You do not have access to this creator's content")
        return creator

    async def ensure_member(self, user_id: int, creator_id: int) -> Creator:
        """Require the owner or a subscriber with access, regardless of visibility."""
        creator = await self.get_creator(creator_id)
        if creator.owner_user_id == user_id:
            return creator
        if not await self.has_access(user_id, creator_id):
            raise AuthorizationError("Only the creator and its subscribers can do this")
        return creator

    async def ensure_owner(self, user_id: int, creator_id: int) -> Creator:
        """Require that the user owns the creator."""
        creator = await self.get_creator(creator_id)
        if creator.owner_user_id != user_id:
            raise AuthorizationError("You do not own this creator")
        return creator
