"""User account routes."""

from fastapi import APIRouter, Response, status

from linkup.api.deps import CurrentUser, PathUser, Users
from linkup.api.schemas import LoginRequest, TokenResponse, UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserRead)
async def register(body: UserCreate, users: Users) -> UserRead:
    """Register a new user."""
    user = await users.register(body.name, body.email, body.password)
    return UserRead.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, users: Users) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    user, token = await users.login(body.email, body.password)
    return TokenResponse(token=token, user_id=user.id)


@router.get("", response_model=list[UserRead])
async def list_users(current_user: CurrentUser, users: Users) -> list[UserRead]:
    """List all users."""
    return [UserRead.model_validate(user) for user in await users.list_users()]


@router.get("/{user_id}", response_model=UserRead)
async def read_user(user_id: int, current_user: CurrentUser, users: Users) -> UserRead:
    """Get one user."""
    return UserRead.model_validate(await users.get_user(user_id))


@router.put("/{user_id}", response_model=UserRead)
async def update_user(body: UserUpdate, user: PathUser, users: Users) -> UserRead:
    """Update the authenticated user's profile."""
    updated = await users.update_user(
        user, name=body.name, email=body.email, password=body.password
    )
    return UserRead.model_validate(updated)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user: PathUser, users: Users) -> Response:
    """Delete the authenticated user's account."""
    await users.delete_user(user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
