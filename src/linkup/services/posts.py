"""Post publishing and reads."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.database import atomic
from linkup.errors import NotFoundError, ValidationError
from linkup.models import Creator, Post, PostType
from linkup.services.access import AccessGate
from linkup.services.media import MediaManager, MediaUpload

logger = logging.getLogger(__name__)


def _check_upload(post_type: PostType, upload: MediaUpload) -> None:
    if upload.content_type and not upload.content_type.startswith(f"{post_type.value}/"):
        raise ValidationError(
            f"File of type '{upload.content_type}' cannot be used for a {post_type.value} post"
        )


class PostService:
    """Creates, reads, updates and deletes posts, keeping media objects in sync."""

    def __init__(
        self,
        db: AsyncSession,
        media: MediaManager,
        gate: AccessGate | None = None,
    ) -> None:
        """
        Initialize the post service.

        Args:
            db: Database session
            media: Media manager used for uploads and deletions
            gate: Access checks (created on the same session if not provided)
        """
        self.db = db
        self.media = media
        self.gate = gate or AccessGate(db)

    async def create_post(
        self,
        owner_id: int,
        creator_id: int,
        post_type: PostType,
        content: str | None = None,
        upload: MediaUpload | None = None,
    ) -> Post:
        """
        Publish a post.

        Text posts need content and no file. Image and video posts need a
        file, which is stored before the row is written.

        Raises:
            AuthorizationError: If the caller does not own the creator
            ValidationError: If the content/file combination does not fit the type
        """
        creator = await self.gate.ensure_owner(owner_id, creator_id)
        content = content.strip() if content else None

        if post_type.has_media:
            if upload is None:
                raise ValidationError(f"A media file is required for {post_type.value} posts")
            _check_upload(post_type, upload)
        else:
            if upload is not None:
                raise ValidationError("A media file is not allowed for text posts")
            if not content:
                raise ValidationError("Content is required for text posts")

        media_url = await self.media.store_upload(upload) if upload is not None else None

        post = Post(
            creator_id=creator.id,
            type=post_type.value,
            content=content,
            media_url=media_url,
        )
        try:
            async with atomic(self.db):
                self.db.add(post)
        except Exception:
            if media_url:
                self.media.report_orphan(media_url)
            raise

        await self.db.refresh(post)
        logger.info("Creator %s published %s post %s", creator.id, post_type.value, post.id)
        return post

    async def _get_post(self, creator_id: int, post_id: int) -> Post:
        result = await self.db.execute(
            select(Post).where(Post.id == post_id, Post.creator_id == creator_id)
        )
        post = result.scalar_one_or_none()
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def list_posts(self, requester_id: int, creator_id: int) -> list[Post]:
        """List a creator's posts, newest first, after the read check passes."""
        await self.gate.ensure_can_read(requester_id, creator_id)
        result = await self.db.execute(
            select(Post)
            .where(Post.creator_id == creator_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return list(result.scalars().all())

    async def get_post(self, requester_id: int, creator_id: int, post_id: int) -> Post:
        await self.gate.ensure_can_read(requester_id, creator_id)
        return await self._get_post(creator_id, post_id)

    async def update_post(
        self,
        owner_id: int,
        creator_id: int,
        post_id: int,
        post_type: PostType | None = None,
        content: str | None = None,
        upload: MediaUpload | None = None,
    ) -> Post:
        """
        Update a post's type, content or media.

        A replacement file is stored first; the previous object is deleted
        before the row is updated. Switching to text drops the media.

        Raises:
            AuthorizationError: If the caller does not own the creator
            NotFoundError: If the post does not belong to the creator
            ValidationError: If the resulting post would be invalid
        """
        await self.gate.ensure_owner(owner_id, creator_id)
        post = await self._get_post(creator_id, post_id)

        new_type = post_type or PostType(post.type)
        new_content = content.strip() if content is not None else post.content
        new_content = new_content or None

        if new_type.has_media:
            if upload is None and (post.media_url is None or new_type.value != post.type):
                raise ValidationError(f"A media file is required for {new_type.value} posts")
            if upload is not None:
                _check_upload(new_type, upload)
        else:
            if upload is not None:
                raise ValidationError("A media file is not allowed for text posts")
            if not new_content:
                raise ValidationError("Content is required for text posts")

        post_id = post.id
        old_media_url = post.media_url
        new_media_url = old_media_url if new_type.has_media else None
        if upload is not None:
            new_media_url = await self.media.store_upload(upload)

        try:
            if old_media_url and old_media_url != new_media_url:
                await self.media.discard(old_media_url)
            async with atomic(self.db):
                post.type = new_type.value
                post.content = new_content
                post.media_url = new_media_url
        except Exception:
            # The rollback expires post, so only post_id is safe to read here
            if upload is not None and new_media_url:
                self.media.report_orphan(new_media_url, post_id)
            raise

        await self.db.refresh(post)
        logger.info("Creator %s updated post %s", creator_id, post.id)
        return post

    async def delete_post(self, owner_id: int, creator_id: int, post_id: int) -> None:
        """Delete a post's media object, then the post."""
        await self.gate.ensure_owner(owner_id, creator_id)
        post = await self._get_post(creator_id, post_id)

        await self.media.discard(post.media_url)
        async with atomic(self.db):
            await self.db.execute(delete(Post).where(Post.id == post.id))
        logger.info("Creator %s deleted post %s", creator_id, post_id)

    async def delete_all_posts(self, owner_id: int, creator_id: int) -> int:
        """Delete every post of a creator the caller owns. Returns the number deleted."""
        creator = await self.gate.ensure_owner(owner_id, creator_id)
        async with atomic(self.db):
            count = await self.purge_creator_posts(creator)
        logger.info("Creator %s deleted all %d posts", creator_id, count)
        return count

    async def purge_creator_posts(self, creator: Creator) -> int:
        """Delete each media object, then the rows in one statement. Caller commits."""
        result = await self.db.execute(select(Post).where(Post.creator_id == creator.id))
        posts = list(result.scalars().all())
        for post in posts:
            await self.media.discard(post.media_url)
        await self.db.execute(delete(Post).where(Post.creator_id == creator.id))
        return len(posts)
