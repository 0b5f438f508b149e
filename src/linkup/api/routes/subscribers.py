"""Subscriber routes."""

from fastapi import APIRouter, Response, status

from linkup.api.deps import PathUser, Subscriptions
from linkup.api.schemas import SubscriberDetail
from linkup.models import Subscriber

router = APIRouter(
    prefix="/users/{user_id}/creators/{creator_id}/subscribers", tags=["subscribers"]
)


def _detail(subscriber: Subscriber) -> SubscriberDetail:
    return SubscriberDetail(
        id=subscriber.id,
        subscriber_user_id=subscriber.subscriber_user_id,
        creator_id=subscriber.creator_id,
        has_access=subscriber.has_access,
        subscriber_name=subscriber.subscriber.name,
        subscriber_email=subscriber.subscriber.email,
    )


@router.get("", response_model=list[SubscriberDetail])
async def list_subscribers(
    creator_id: int, user: PathUser, subscriptions: Subscriptions
) -> list[SubscriberDetail]:
    """List a creator's subscribers (owner and subscribers only)."""
    return [_detail(s) for s in await subscriptions.list_subscribers(user.id, creator_id)]


@router.get("/{subscriber_id}", response_model=SubscriberDetail)
async def read_subscriber(
    creator_id: int, subscriber_id: int, user: PathUser, subscriptions: Subscriptions
) -> SubscriberDetail:
    """Get one subscriber of a creator."""
    return _detail(await subscriptions.get_subscriber(user.id, creator_id, subscriber_id))


@router.delete("/{subscriber_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_subscriber(
    creator_id: int, subscriber_id: int, user: PathUser, subscriptions: Subscriptions
) -> Response:
    """Revoke a subscriber's access (owner) or unsubscribe (the subscriber)."""
    await subscriptions.revoke_access(user.id, creator_id, subscriber_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
