"""Post model."""

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkup.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from linkup.models.creator import Creator


class PostType(str, Enum):
    """Kind of content a post carries."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"

    @property
    def has_media(self) -> bool:
        return self is not PostType.TEXT


class Post(Base, TimestampMixin):
    """A piece of content published by a creator."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    creator_id: Mapped[int] = mapped_column(ForeignKey("creators.id"), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # Relationships
    creator: Mapped["Creator"] = relationship(back_populates="posts")
