"""Subscription request and subscriber models."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from linkup.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from linkup.models.creator import Creator
    from linkup.models.user import User


class SubRequest(Base):
    """A pending follow request against a private creator."""

    __tablename__ = "sub_requests"
    __table_args__ = (
        UniqueConstraint("requester_user_id", "creator_id", name="uq_sub_requests_requester_creator"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    requester_user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    creator_id: Mapped[int] = mapped_column(ForeignKey("creators.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    requester: Mapped["User"] = relationship()
    creator: Mapped["Creator"] = relationship(back_populates="sub_requests")


class Subscriber(Base, TimestampMixin):
    """A resolved access relationship between a user and a creator."""

    __tablename__ = "subscribers"
    __table_args__ = (
        UniqueConstraint(
            "subscriber_user_id", "creator_id", name="uq_subscribers_subscriber_creator"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    subscriber_user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    creator_id: Mapped[int] = mapped_column(ForeignKey("creators.id"), nullable=False)
    has_access: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    subscriber: Mapped["User"] = relationship()
    creator: Mapped["Creator"] = relationship(back_populates="subscribers")
