"""Database models."""

from linkup.models.base import Base, TimestampMixin
from linkup.models.creator import Creator
from linkup.models.post import Post, PostType
from linkup.models.subscription import Subscriber, SubRequest
from linkup.models.user import User

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "Creator",
    "Post",
    "PostType",
    "SubRequest",
    "Subscriber",
]
