# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Admin account management API.

Each operation is reachable under two paths: ``/admin/...`` as used by the web
dashboard, and the collection-style ``/admins`` paths.
"""

import logging

from fastapi import APIRouter, Depends, Path, status

from whispering_server.auth import hash_password_async
from whispering_server.exceptions import NotFoundError
from whispering_server.storage import Storage, get_storage
from whispering_server.api.schemas import (
    MAX_ID,
    AdminCreate,
    AdminResponse,
    AdminStatusUpdate,
    admin_view,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])


@router.post("/admin/create", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
@router.post("/admins", response_model=AdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    data: AdminCreate,
    storage: Storage = Depends(get_storage),
) -> AdminResponse:
    """Create an admin. Without a password the account exists but cannot log in."""
    admin = await storage.create_admin(
        username=data.username,
        password_hash=await hash_password_async(data.password) if data.password else None,
        display_name=data.display_name,
        role=data.role,
    )
    logger.info("Created admin %s (role=%s)", admin.username, admin.role)
    return admin_view(admin)


@router.get("/admin/list", response_model=list[AdminResponse])
@router.get("/admins", response_model=list[AdminResponse])
async def list_admins(
    storage: Storage = Depends(get_storage),
) -> list[AdminResponse]:
    """List all admins."""
    return [admin_view(a) for a in await storage.list_admins()]


@router.patch("/admin/{admin_id}/status", response_model=AdminResponse)
@router.patch("/admins/{admin_id}", response_model=AdminResponse)
async def update_admin_status(
    data: AdminStatusUpdate,
    admin_id: int = Path(ge=1, le=MAX_ID),
    storage: Storage = Depends(get_storage),
) -> AdminResponse:
    """Enable or disable an admin account."""
    admin = await storage.update_admin_status(admin_id, data.is_active)
    if not admin:
        raise NotFoundError("Admin not found")
    logger.info("Admin %s is_active=%s", admin.id, admin.is_active)
    return admin_view(admin)
