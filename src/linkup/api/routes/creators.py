"""Creator profile routes."""

from fastapi import APIRouter, Response, status

from linkup.api.deps import Creators, PathUser
from linkup.api.schemas import CreatorCreate, CreatorRead, CreatorUpdate

router = APIRouter(prefix="/users/{user_id}/creators", tags=["creators"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreatorRead)
async def create_creator(body: CreatorCreate, user: PathUser, creators: Creators) -> CreatorRead:
    """Create the user's creator profile."""
    creator = await creators.create_creator(user.id, body.is_public)
    return CreatorRead.model_validate(creator)


@router.get("", response_model=list[CreatorRead])
async def list_creators(user: PathUser, creators: Creators) -> list[CreatorRead]:
    """List the user's creator profiles."""
    return [CreatorRead.model_validate(c) for c in await creators.list_creators(user.id)]


@router.get("/{creator_id}", response_model=CreatorRead)
async def read_creator(creator_id: int, user: PathUser, creators: Creators) -> CreatorRead:
    """Get a creator profile. Visibility is public information."""
    return CreatorRead.model_validate(await creators.get_creator(creator_id))


@router.put("/{creator_id}", response_model=CreatorRead)
async def update_creator(
    creator_id: int, body: CreatorUpdate, user: PathUser, creators: Creators
) -> CreatorRead:
    """Change a creator's visibility."""
    creator = await creators.update_creator(user.id, creator_id, body.is_public)
    return CreatorRead.model_validate(creator)


@router.delete("/{creator_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_creator(creator_id: int, user: PathUser, creators: Creators) -> Response:
    """Delete a creator with its posts, media, requests and subscribers."""
    await creators.delete_creator(user.id, creator_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
