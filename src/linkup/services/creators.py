"""Creator profiles."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.database import atomic
from linkup.errors import ConflictError
from linkup.models import Creator
from linkup.services.access import AccessGate
from linkup.services.media import MediaManager
from linkup.services.posts import PostService
from linkup.services.subscriptions import SubscriptionService

logger = logging.getLogger(__name__)


class CreatorService:
    """Creates and manages the single creator profile a user may own."""

    def __init__(self, db: AsyncSession, media: MediaManager) -> None:
        self.db = db
        self.gate = AccessGate(db)
        self.posts = PostService(db, media, self.gate)
        self.subscriptions = SubscriptionService(db, self.gate)

    async def find_by_owner(self, user_id: int) -> Creator | None:
        result = await self.db.execute(select(Creator).where(Creator.owner_user_id == user_id))
        return result.scalar_one_or_none()

    async def create_creator(self, owner_id: int, is_public: bool) -> Creator:
        """
        Turn a user into a creator.

        Raises:
            ConflictError: If the user already has a creator profile
        """
        if await self.find_by_owner(owner_id) is not None:
            raise ConflictError("This user already has a creator profile")

        creator = Creator(owner_user_id=owner_id, is_public=is_public)
        try:
            async with atomic(self.db):
                self.db.add(creator)
        except IntegrityError as e:
            raise ConflictError("This user already has a creator profile") from e

        await self.db.refresh(creator)
        logger.info(
            "User %s became %s creator %s",
            owner_id,
            "public" if is_public else "private",
            creator.id,
        )
        return creator

    async def list_creators(self, owner_id: int) -> list[Creator]:
        result = await self.db.execute(
            select(Creator).where(Creator.owner_user_id == owner_id).order_by(Creator.id)
        )
        return list(result.scalars().all())

    async def get_creator(self, creator_id: int) -> Creator:
        return await self.gate.get_creator(creator_id)

    async def update_creator(self, owner_id: int, creator_id: int, is_public: bool) -> Creator:
        """Change visibility. Pending requests stay pending either way."""
        creator = await self.gate.ensure_owner(owner_id, creator_id)
        async with atomic(self.db):
            creator.is_public = is_public
        await self.db.refresh(creator)
        logger.info("Creator %s is now %s", creator_id, "public" if is_public else "private")
        return creator

    async def delete_creator(self, owner_id: int, creator_id: int) -> None:
        """Delete a creator along with its posts, media, requests and subscribers."""
        creator = await self.gate.ensure_owner(owner_id, creator_id)
        async with atomic(self.db):
            await self.purge(creator)
        logger.info("Deleted creator %s", creator_id)

    async def purge(self, creator: Creator) -> None:
        """Remove a creator and everything hanging off it. Caller commits."""
        await self.posts.purge_creator_posts(creator)
        await self.subscriptions.forget_creator(creator.id)
        await self.db.execute(delete(Creator).where(Creator.id == creator.id))
