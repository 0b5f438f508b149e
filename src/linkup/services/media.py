"""Binding uploaded media objects to posts."""

import logging
import os
import uuid
from dataclasses import dataclass

from linkup.storage.base import ObjectStore

logger = logging.getLogger(__name__)


@dataclass
class MediaUpload:
    """An uploaded file waiting to be stored."""

    filename: str
    content_type: str
    data: bytes


class MediaManager:
    """Stores post media under fresh keys and deletes objects posts no longer reference."""

    def __init__(self, store: ObjectStore) -> None:
        self.store = store

    @staticmethod
    def new_key(filename: str) -> str:
        """Generate a unique storage key, keeping the original file extension."""
        extension = os.path.splitext(filename)[1].lower()
        return f"{uuid.uuid4().hex}{extension}"

    async def store_upload(self, upload: MediaUpload) -> str:
        """Store an upload and return its public URL."""
        key = self.new_key(upload.filename)
        return await self.store.put_object(key, upload.data, upload.content_type)

    async def discard(self, media_url: str | None) -> None:
        """Delete the object behind a media URL, if there is one."""
        if not media_url:
            return
        await self.store.delete_object(self.store.key_for_url(media_url))

    def report_orphan(self, media_url: str, post_id: int | None = None) -> None:
        """Log an object that was stored but never (or no longer) referenced by a row."""
        logger.error(
            "Media object %s is orphaned after a failed write for post %s; "
            "it must be removed by a storage reconciliation pass",
            self.store.key_for_url(media_url),
            post_id if post_id is not None else "<new>",
        )
