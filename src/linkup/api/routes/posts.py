"""Post routes."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Response, UploadFile, status

from linkup.api.deps import PathUser, Posts
from linkup.api.schemas import PostRead, PostsDeleted
from linkup.models import PostType
from linkup.services import MediaUpload

router = APIRouter(prefix="/users/{user_id}/creators/{creator_id}/posts", tags=["posts"])


async def _read_upload(media: UploadFile | None) -> MediaUpload | None:
    if media is None or not media.filename:
        return None
    return MediaUpload(
        filename=media.filename,
        content_type=media.content_type or "application/octet-stream",
        data=await media.read(),
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PostRead)
async def create_post(
    creator_id: int,
    user: PathUser,
    posts: Posts,
    type: Annotated[PostType, Form()],
    content: Annotated[str | None, Form()] = None,
    media: Annotated[UploadFile | None, File()] = None,
) -> PostRead:
    """Publish a post. Image and video posts carry a `media` file."""
    post = await posts.create_post(
        user.id, creator_id, type, content=content, upload=await _read_upload(media)
    )
    return PostRead.model_validate(post)


@router.get("", response_model=list[PostRead])
async def list_posts(creator_id: int, user: PathUser, posts: Posts) -> list[PostRead]:
    """List a creator's posts if the user may read them."""
    return [PostRead.model_validate(p) for p in await posts.list_posts(user.id, creator_id)]


@router.get("/{post_id}", response_model=PostRead)
async def read_post(creator_id: int, post_id: int, user: PathUser, posts: Posts) -> PostRead:
    """Get one post if the user may read the creator's content."""
    return PostRead.model_validate(await posts.get_post(user.id, creator_id, post_id))


@router.put("/{post_id}", response_model=PostRead)
async def update_post(
    creator_id: int,
    post_id: int,
    user: PathUser,
    posts: Posts,
    type: Annotated[PostType | None, Form()] = None,
    content: Annotated[str | None, Form()] = None,
    media: Annotated[UploadFile | None, File()] = None,
) -> PostRead:
    """Update a post's type, content or media file."""
    post = await posts.update_post(
        user.id,
        creator_id,
        post_id,
        post_type=type,
        content=content,
        upload=await _read_upload(media),
    )
    return PostRead.model_validate(post)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(creator_id: int, post_id: int, user: PathUser, posts: Posts) -> Response:
    """Delete a post and its media."""
    await posts.delete_post(user.id, creator_id, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", response_model=PostsDeleted)
async def delete_all_posts(creator_id: int, user: PathUser, posts: Posts) -> PostsDeleted:
    """Delete every post of the creator."""
    return PostsDeleted(deleted=await posts.delete_all_posts(user.id, creator_id))
