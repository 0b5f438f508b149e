"""Request and response bodies."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from linkup.models import PostType
from linkup.services import FollowStatus


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user_id: int


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime


class CreatorCreate(BaseModel):
    is_public: bool


class CreatorUpdate(BaseModel):
    is_public: bool


class CreatorRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_user_id: int
    is_public: bool
    created_at: datetime
    updated_at: datetime


class PostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    creator_id: int
    type: PostType
    content: str | None
    media_url: str | None
    created_at: datetime
    updated_at: datetime


class PostsDeleted(BaseModel):
    deleted: int


class SubRequestRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    requester_user_id: int
    creator_id: int
    created_at: datetime


class SubRequestDetail(SubRequestRead):
    requester_name: str
    requester_email: str


class SubRequestResolve(BaseModel):
    accepted: bool


class SubscriberRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subscriber_user_id: int
    creator_id: int
    has_access: bool


class SubscriberDetail(SubscriberRead):
    subscriber_name: str
    subscriber_email: str


class FollowResponse(BaseModel):
    status: FollowStatus
    subscriber: SubscriberRead | None = None
    sub_request: SubRequestRead | None = None


class ResolveResponse(BaseModel):
    accepted: bool
    subscriber: SubscriberRead | None = None


class ErrorBody(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorBody
