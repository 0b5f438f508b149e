"""API dependencies."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Path
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.auth import verify_token
from linkup.database import get_db
from linkup.errors import AuthenticationError, AuthorizationError
from linkup.models import User
from linkup.services import (
    AccessGate,
    CreatorService,
    MediaManager,
    PostService,
    SubscriptionService,
    UserService,
)
from linkup.storage import ObjectStore, S3ObjectStore

DbSession = Annotated[AsyncSession, Depends(get_db)]

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_object_store() -> ObjectStore:
    """Shared object store client."""
    return S3ObjectStore()


Store = Annotated[ObjectStore, Depends(get_object_store)]


async def get_current_user(
    db: DbSession,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> User:
    """Resolve the bearer token to a user."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    user_id = verify_token(credentials.credentials)
    if user_id is None:
        raise AuthenticationError("Invalid or expired token")

    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")

    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_path_user(
    current_user: CurrentUser,
    user_id: Annotated[int, Path()],
) -> User:
    """Require that the user in the path is the authenticated user."""
    if current_user.id != user_id:
        raise AuthorizationError()
    return current_user


PathUser = Annotated[User, Depends(get_path_user)]


def get_media_manager(store: Store) -> MediaManager:
    return MediaManager(store)


Media = Annotated[MediaManager, Depends(get_media_manager)]


def get_user_service(db: DbSession, media: Media) -> UserService:
    return UserService(db, media)


def get_creator_service(db: DbSession, media: Media) -> CreatorService:
    return CreatorService(db, media)


def get_post_service(db: DbSession, media: Media) -> PostService:
    return PostService(db, media, AccessGate(db))


def get_subscription_service(db: DbSession) -> SubscriptionService:
    return SubscriptionService(db)


Users = Annotated[UserService, Depends(get_user_service)]
Creators = Annotated[CreatorService, Depends(get_creator_service)]
Posts = Annotated[PostService, Depends(get_post_service)]
Subscriptions = Annotated[SubscriptionService, Depends(get_subscription_service)]
