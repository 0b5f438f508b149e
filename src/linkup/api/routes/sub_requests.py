"""Subscription request routes.

POST is made by the requesting user; listing and resolving are for the
creator's owner.
"""

from fastapi import APIRouter, Response, status

from linkup.api.deps import PathUser, Subscriptions
from linkup.api.schemas import (
    FollowResponse,
    ResolveResponse,
    SubRequestDetail,
    SubRequestRead,
    SubRequestResolve,
    SubscriberRead,
)
from linkup.models import SubRequest

router = APIRouter(
    prefix="/users/{user_id}/creators/{creator_id}/subRequests", tags=["subscription requests"]
)


def _detail(sub_request: SubRequest) -> SubRequestDetail:
    return SubRequestDetail(
        id=sub_request.id,
        requester_user_id=sub_request.requester_user_id,
        creator_id=sub_request.creator_id,
        created_at=sub_request.created_at,
        requester_name=sub_request.requester.name,
        requester_email=sub_request.requester.email,
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=FollowResponse)
async def request_follow(
    creator_id: int, user: PathUser, subscriptions: Subscriptions, response: Response
) -> FollowResponse:
    """Follow a creator: immediate for public creators, a pending request otherwise."""
    result = await subscriptions.request_follow(user.id, creator_id)
    if not result.created:
        response.status_code = status.HTTP_200_OK
    return FollowResponse(
        status=result.status,
        subscriber=SubscriberRead.model_validate(result.subscriber) if result.subscriber else None,
        sub_request=SubRequestRead.model_validate(result.sub_request)
        if result.sub_request
        else None,
    )


@router.get("", response_model=list[SubRequestDetail])
async def list_requests(
    creator_id: int, user: PathUser, subscriptions: Subscriptions
) -> list[SubRequestDetail]:
    """List pending requests for the user's creator."""
    return [_detail(r) for r in await subscriptions.list_requests(user.id, creator_id)]


@router.get("/{request_id}", response_model=SubRequestDetail)
async def read_request(
    creator_id: int, request_id: int, user: PathUser, subscriptions: Subscriptions
) -> SubRequestDetail:
    """Get one pending request for the user's creator."""
    return _detail(await subscriptions.get_request(user.id, creator_id, request_id))


@router.put("/{request_id}", response_model=ResolveResponse)
async def resolve_request(
    creator_id: int,
    request_id: int,
    body: SubRequestResolve,
    user: PathUser,
    subscriptions: Subscriptions,
) -> ResolveResponse:
    """Accept or reject a pending request."""
    subscriber = await subscriptions.resolve_request(
        user.id, creator_id, request_id, body.accepted
    )
    return ResolveResponse(
        accepted=body.accepted,
        subscriber=SubscriberRead.model_validate(subscriber) if subscriber else None,
    )


@router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    creator_id: int, request_id: int, user: PathUser, subscriptions: Subscriptions
) -> Response:
    """Reject a request (creator owner) or withdraw it (requester)."""
    await subscriptions.remove_request(user.id, creator_id, request_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
