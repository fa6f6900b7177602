# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Pydantic schemas for API request/response.

JSON uses camelCase field names; snake_case is accepted on input too.
User and admin responses are built through ``user_view``/``admin_view`` and
have no credential field.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from whispering_server.categories import CATEGORY_NAMES
from whispering_server.models import Admin, Message, Reply, User

# Largest id a BIGINT / SQLite INTEGER column can hold
MAX_ID = 2**63 - 1


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Auth
class UserCreate(RequestModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=6, max_length=256)


class LoginRequest(RequestModel):
    username: str
    password: str


class UserResponse(ResponseModel):
    id: int
    username: str
    is_active: bool
    created_at: datetime


# Admin
class AdminCreate(RequestModel):
    username: str = Field(min_length=3, max_length=64)
    password: str | None = Field(default=None, min_length=6, max_length=256)
    display_name: str = Field(min_length=1, max_length=100)
    role: str = Field(default="admin", min_length=1, max_length=32)

    @field_validator("password", mode="before")
    @classmethod
    def blank_password_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class AdminStatusUpdate(RequestModel):
    is_active: bool


class AdminResponse(ResponseModel):
    id: int
    username: str
    display_name: str
    role: str
    is_active: bool
    created_at: datetime


# Messages
class MessageCreate(RequestModel):
    content: str = Field(min_length=1, max_length=2000)
    category: str
    recipient: str | None = Field(default=None, max_length=100)
    spotify_link: str | None = Field(default=None, max_length=500)
    is_public: bool = False

    @field_validator("category")
    @classmethod
    def category_known(cls, v: str) -> str:
        if v not in CATEGORY_NAMES:
            raise ValueError(f"Unknown category '{v}'")
        return v

    @field_validator("recipient", "spotify_link", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("spotify_link")
    @classmethod
    def spotify_link_is_url(cls, v: str | None) -> str | None:
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("Must be an http(s) URL")
        return v


class MessageVisibilityUpdate(RequestModel):
    is_public: bool


class ReplyResponse(ResponseModel):
    id: int
    message_id: int
    content: str
    nickname: str
    created_at: datetime


class MessageResponse(ResponseModel):
    id: int
    content: str
    category: str
    recipient: str | None = None
    spotify_link: str | None = None
    is_public: bool
    created_at: datetime


class MessageDetailResponse(MessageResponse):
    replies: list[ReplyResponse] = []


class CategoryResponse(BaseModel):
    name: str
    color: str


# Replies
class ReplyCreate(RequestModel):
    message_id: int = Field(ge=1, le=MAX_ID)
    content: str = Field(min_length=1, max_length=1000)
    nickname: str = Field(default="Anonymous", min_length=1, max_length=50)


class WarningCreate(RequestModel):
    reply_id: int = Field(ge=1, le=MAX_ID)
    reason: str = Field(min_length=1, max_length=500)


class StatusMessage(BaseModel):
    message: str


# Projections from ORM rows to response views

def user_view(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        is_active=user.is_active,
        created_at=user.created_at,
    )


def admin_view(admin: Admin) -> AdminResponse:
    return AdminResponse(
        id=admin.id,
        username=admin.username,
        display_name=admin.display_name,
        role=admin.role,
        is_active=admin.is_active,
        created_at=admin.created_at,
    )


def reply_view(reply: Reply) -> ReplyResponse:
    return ReplyResponse(
        id=reply.id,
        message_id=reply.message_id,
        content=reply.content,
        nickname=reply.nickname,
        created_at=reply.created_at,
    )


def message_view(message: Message) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        content=message.content,
        category=message.category,
        recipient=message.recipient,
        spotify_link=message.spotify_link,
        is_public=message.is_public,
        created_at=message.created_at,
    )


def message_detail_view(message: Message) -> MessageDetailResponse:
    """Message with replies; the replies relationship must already be loaded."""
    return MessageDetailResponse(
        **message_view(message).model_dump(),
        replies=[reply_view(r) for r in message.replies],
    )
