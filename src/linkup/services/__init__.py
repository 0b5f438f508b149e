"""Domain services operating on a database session."""

from linkup.services.access import AccessGate
from linkup.services.creators import CreatorService
from linkup.services.media import MediaManager, MediaUpload
from linkup.services.posts import PostService
from linkup.services.subscriptions import FollowResult, FollowStatus, SubscriptionService
from linkup.services.users import UserService

__all__ = [
    "AccessGate",
    "CreatorService",
    "FollowResult",
    "FollowStatus",
    "MediaManager",
    "MediaUpload",
    "PostService",
    "SubscriptionService",
    "UserService",
]
