"""S3-backed object store."""

import asyncio
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from linkup.config import Settings, settings
from linkup.errors import StoreError

logger = logging.getLogger(__name__)


class S3ObjectStore:
    """Stores media objects in an S3 bucket.

    boto3 is blocking, so every call runs in a worker thread.
    """

    def __init__(self, config: Settings | None = None, client=None) -> None:
        """
        Initialize the store.

        Args:
            config: Settings to read credentials and bucket from
            client: Pre-built boto3 S3 client (created if not provided)
        """
        self.config = config or settings
        self.bucket = self.config.media_bucket
        self.client = client or boto3.client(
            "s3",
            aws_access_key_id=self.config.aws_access_key_id or None,
            aws_secret_access_key=self.config.aws_secret_access_key or None,
            region_name=self.config.aws_region,
        )
        base_url = self.config.media_public_base_url or (
            f"https://{self.bucket}.s3.{self.config.aws_region}.amazonaws.com"
        )
        self.base_url = base_url.rstrip("/")

    def url_for_key(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def key_for_url(self, url: str) -> str:
        prefix = f"{self.base_url}/"
        if url.startswith(prefix):
            return url[len(prefix):]
        # Fall back to the last path segment for URLs minted under an older base
        return url.rsplit("/", 1)[-1]

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type or "application/octet-stream",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to upload object %s to bucket %s: %s", key, self.bucket, e)
            raise StoreError("Failed to store media file") from e

        logger.info("Uploaded object %s (%d bytes)", key, len(data))
        return self.url_for_key(key)

    async def delete_object(self, key: str) -> None:
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error("Failed to delete object %s from bucket %s: %s", key, self.bucket, e)
            raise StoreError("Failed to delete media file") from e

        logger.info("Deleted object %s", key)
