# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Reply API routes and moderation warnings."""

import logging

from fastapi import APIRouter, Depends, Path, status

from whispering_server.exceptions import NotFoundError
from whispering_server.storage import Storage, get_storage
from whispering_server.api.schemas import (
    MAX_ID,
    ReplyCreate,
    ReplyResponse,
    StatusMessage,
    WarningCreate,
    reply_view,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["replies"])


@router.post("/replies", response_model=ReplyResponse, status_code=status.HTTP_201_CREATED)
async def create_reply(
    data: ReplyCreate,
    storage: Storage = Depends(get_storage),
) -> ReplyResponse:
    """Reply to an existing message."""
    if not await storage.message_exists(data.message_id):
        raise NotFoundError("Message not found")
    reply = await storage.create_reply(data.message_id, data.content, data.nickname)
    return reply_view(reply)


@router.delete("/replies/{reply_id}", response_model=StatusMessage)
async def delete_reply(
    reply_id: int = Path(ge=1, le=MAX_ID),
    storage: Storage = Depends(get_storage),
) -> StatusMessage:
    """Delete a reply (moderation). The client follows up with POST /warnings."""
    if not await storage.delete_reply(reply_id):
        raise NotFoundError("Reply not found")
    logger.info("Deleted reply %s", reply_id)
    return StatusMessage(message="Reply deleted successfully")


@router.post("/warnings", response_model=StatusMessage)
async def send_warning(data: WarningCreate) -> StatusMessage:
    """Record a moderation warning. Logged only; there is no delivery channel."""
    logger.warning("Warning sent for reply %s: %s", data.reply_id, data.reason)
    return StatusMessage(message="Warning sent successfully")
