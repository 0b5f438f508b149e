"""Creator profile model."""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkup.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from linkup.models.post import Post
    from linkup.models.subscription import Subscriber, SubRequest
    from linkup.models.user import User


class Creator(Base, TimestampMixin):
    """A user's publishing profile. Private creators gate follows behind requests."""

    __tablename__ = "creators"

    id: Mapped[int] = mapped_column(primary_key=True)
    owner_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), unique=True, nullable=False
    )
    is_public: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="creator")
    posts: Mapped[list["Post"]] = relationship(back_populates="creator")
    sub_requests: Mapped[list["SubRequest"]] = relationship(back_populates="creator")
    subscribers: Mapped[list["Subscriber"]] = relationship(back_populates="creator")
