# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Authentication API routes."""

import logging

from fastapi import APIRouter, Depends, status

from whispering_server.auth import authenticate_admin, authenticate_user, hash_password_async
from whispering_server.storage import Storage, get_storage
from whispering_server.api.schemas import (
    AdminResponse,
    LoginRequest,
    UserCreate,
    UserResponse,
    admin_view,
    user_view,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: UserCreate,
    storage: Storage = Depends(get_storage),
) -> UserResponse:
    """Create a user account. Duplicate usernames are rejected by the users table."""
    user = await storage.create_user(data.username, await hash_password_async(data.password))
    logger.info("Registered user %s", user.id)
    return user_view(user)


@router.post("/login", response_model=UserResponse)
async def login(
    data: LoginRequest,
    storage: Storage = Depends(get_storage),
) -> UserResponse:
    """Check user credentials and return the account."""
    user = await authenticate_user(storage, data.username, data.password)
    return user_view(user)


@router.post("/admin-login", response_model=AdminResponse)
async def admin_login(
    data: LoginRequest,
    storage: Storage = Depends(get_storage),
) -> AdminResponse:
    """Check admin credentials and return the admin account."""
    admin = await authenticate_admin(storage, data.username, data.password)
    return admin_view(admin)
