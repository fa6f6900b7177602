# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Message API routes - listing, posting, visibility."""

import logging

from fastapi import APIRouter, Depends, Path, status

from whispering_server.categories import MESSAGE_CATEGORIES
from whispering_server.exceptions import NotFoundError
from whispering_server.storage import Storage, get_storage
from whispering_server.api.schemas import (
    MAX_ID,
    CategoryResponse,
    MessageCreate,
    MessageDetailResponse,
    MessageResponse,
    MessageVisibilityUpdate,
    message_detail_view,
    message_view,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["messages"])


# Fixed paths are registered before /messages/{message_id}.

@router.get("/messages/public", response_model=list[MessageResponse])
async def list_public_messages(
    storage: Storage = Depends(get_storage),
) -> list[MessageResponse]:
    """Public messages, newest first."""
    return [message_view(m) for m in await storage.list_public_messages()]


@router.get("/messages/private", response_model=list[MessageResponse])
async def list_private_messages(
    storage: Storage = Depends(get_storage),
) -> list[MessageResponse]:
    """Messages awaiting publication (admin dashboard), newest first."""
    return [message_view(m) for m in await storage.list_private_messages()]


@router.get("/messages/category/{category}", response_model=list[MessageResponse])
async def list_messages_by_category(
    category: str,
    storage: Storage = Depends(get_storage),
) -> list[MessageResponse]:
    return [message_view(m) for m in await storage.list_messages_by_category(category)]


@router.get("/messages/recipient/{recipient}", response_model=list[MessageResponse])
async def list_messages_by_recipient(
    recipient: str,
    storage: Storage = Depends(get_storage),
) -> list[MessageResponse]:
    return [message_view(m) for m in await storage.list_messages_by_recipient(recipient)]


@router.get("/messages/{message_id}", response_model=MessageDetailResponse)
async def get_message(
    message_id: int = Path(ge=1, le=MAX_ID),
    storage: Storage = Depends(get_storage),
) -> MessageDetailResponse:
    """Message with its replies."""
    message = await storage.get_message(message_id)
    if not message:
        raise NotFoundError("Message not found")
    return message_detail_view(message)


@router.post("/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_message(
    data: MessageCreate,
    storage: Storage = Depends(get_storage),
) -> MessageResponse:
    """Post an anonymous message. Private unless isPublic is set."""
    message = await storage.create_message(
        content=data.content,
        category=data.category,
        recipient=data.recipient,
        spotify_link=data.spotify_link,
        is_public=data.is_public,
    )
    logger.info("Created message %s (category=%s, public=%s)", message.id, message.category, message.is_public)
    return message_view(message)


@router.patch("/messages/{message_id}", response_model=MessageResponse)
async def update_message_visibility(
    data: MessageVisibilityUpdate,
    message_id: int = Path(ge=1, le=MAX_ID),
    storage: Storage = Depends(get_storage),
) -> MessageResponse:
    """Publish or unpublish a message. Setting the current value again is a no-op."""
    message = await storage.update_message_visibility(message_id, data.is_public)
    if not message:
        raise NotFoundError("Message not found")
    return message_view(message)


@router.get("/recipients", response_model=list[str])
async def list_recipients(
    storage: Storage = Depends(get_storage),
) -> list[str]:
    """Distinct recipients named on public messages."""
    return await storage.list_recipients()


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [CategoryResponse(**c) for c in MESSAGE_CATEGORIES]
