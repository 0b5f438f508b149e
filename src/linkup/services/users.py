"""User accounts and credentials."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from linkup.auth import hash_password, issue_token, verify_password
from linkup.database import atomic
from linkup.errors import AuthenticationError, ConflictError, NotFoundError
from linkup.models import User
from linkup.services.creators import CreatorService
from linkup.services.media import MediaManager

logger = logging.getLogger(__name__)


class UserService:
    """Registration, login and account management."""

    def __init__(self, db: AsyncSession, media: MediaManager | None = None) -> None:
        """
        Initialize the user service.

        Args:
            db: Database session
            media: Media manager, needed only to delete accounts that own a creator
        """
        self.db = db
        self.media = media

    async def find_user_by_id(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def find_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def get_user(self, user_id: int) -> User:
        user = await self.find_user_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(self) -> list[User]:
        result = await self.db.execute(select(User).order_by(User.id))
        return list(result.scalars().all())

    async def create_user(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert a user with an already hashed password.

        Raises:
            ConflictError: If the email is already registered
        """
        email = email.lower()
        if await self.find_user_by_email(email) is not None:
            raise ConflictError("Email already registered")

        user = User(name=name, email=email, password_hash=password_hash)
        try:
            async with atomic(self.db):
                self.db.add(user)
        except IntegrityError as e:
            raise ConflictError("Email already registered") from e

        await self.db.refresh(user)
        logger.info("Registered user %s", user.id)
        return user

    async def register(self, name: str, email: str, password: str) -> User:
        return await self.create_user(name, email, hash_password(password))

    async def login(self, email: str, password: str) -> tuple[User, str]:
        """
        Check credentials and issue a bearer token.

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        user = await self.find_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt for %s", email)
            raise AuthenticationError("Invalid email or password")
        return user, issue_token(user.id)

    async def update_user(
        self,
        user: User,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
    ) -> User:
        """
        Update profile fields that were provided.

        Raises:
            ConflictError: If the new email belongs to another user
        """
        if email is not None:
            email = email.lower()
            other = await self.find_user_by_email(email)
            if other is not None and other.id != user.id:
                raise ConflictError("Email already used by another user")

        try:
            async with atomic(self.db):
                if name is not None:
                    user.name = name
                if email is not None:
                    user.email = email
                if password is not None:
                    user.password_hash = hash_password(password)
        except IntegrityError as e:
            raise ConflictError("Email already used by another user") from e

        await self.db.refresh(user)
        logger.info("Updated user %s", user.id)
        return user

    async def delete_user(self, user: User) -> None:
        """Delete an account, its creator profile and all its subscriptions."""
        if self.media is None:
            raise RuntimeError("UserService needs a MediaManager to delete accounts")

        creators = CreatorService(self.db, self.media)
        creator = await creators.find_by_owner(user.id)
        async with atomic(self.db):
            if creator is not None:
                await creators.purge(creator)
            await creators.subscriptions.forget_user(user.id)
            await self.db.execute(delete(User).where(User.id == user.id))
        logger.info("Deleted user %s", user.id)
