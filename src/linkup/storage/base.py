"""Object store interface."""

from typing import Protocol


class ObjectStore(Protocol):
    """Blob storage used for post media."""

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        """Store bytes under key and return the object's public URL."""
        ...

    async def delete_object(self, key: str) -> None:
        """Delete the object stored under key. Missing keys are not an error."""
        ...

    def key_for_url(self, url: str) -> str:
        """Return the storage key a public URL points at."""
        ...
