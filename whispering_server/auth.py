# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Authentication: password hashing and credential checks.

Stored hashes are ``<hexKey>.<hexSalt>``: a 64-byte scrypt key (N=16384, r=8,
p=1) derived with the hex salt text as salt. No session or token is issued;
callers present credentials per request.
"""

import hashlib
import hmac
import logging
import secrets

from starlette.concurrency import run_in_threadpool

from whispering_server.exceptions import AuthError
from whispering_server.models import Admin, User
from whispering_server.storage import Storage

logger = logging.getLogger(__name__)

SALT_BYTES = 16
KEY_LENGTH = 64
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1

# Well-formed hash that matches no password. Checked when an account is missing or
# has no password so that response time does not reveal which usernames exist.
_NO_MATCH_HASH = "00" * KEY_LENGTH + "." + "00" * SALT_BYTES


def _derive(password: str, salt: str) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt.encode("utf-8"),
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    salt = secrets.token_hex(SALT_BYTES)
    return f"{_derive(password, salt).hex()}.{salt}"


def verify_password(plain: str, hashed: str | None) -> bool:
    """Verify a password against its stored hash. Malformed hashes never verify."""
    if not hashed or "." not in hashed:
        return False
    key_hex, _, salt = hashed.partition(".")
    if not key_hex or not salt:
        return False
    try:
        expected = bytes.fromhex(key_hex)
    except ValueError:
        return False
    return hmac.compare_digest(expected, _derive(plain, salt))


async def hash_password_async(password: str) -> str:
    """hash_password off the event loop."""
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(plain: str, hashed: str | None) -> bool:
    """verify_password off the event loop. A missing hash is checked against a no-match hash."""
    return await run_in_threadpool(verify_password, plain, hashed or _NO_MATCH_HASH)


async def authenticate_user(storage: Storage, username: str, password: str) -> User:
    """Return the user for valid credentials. Raises AuthError otherwise."""
    user = await storage.get_user_by_username(username)
    stored = user.password_hash if user else None
    if not await verify_password_async(password, stored) or user is None:
        raise AuthError("Invalid credentials")
    if not user.is_active:
        raise AuthError("Account is disabled")
    return user


async def authenticate_admin(storage: Storage, username: str, password: str) -> Admin:
    """Return the admin for valid credentials. Admins without a password hash cannot log in."""
    admin = await storage.get_admin_by_username(username)
    stored = admin.password_hash if admin else None
    if not await verify_password_async(password, stored) or admin is None:
        raise AuthError("Invalid credentials")
    if not admin.is_active:
        raise AuthError("Account is disabled")
    return admin


async def ensure_bootstrap_admin(
    storage: Storage,
    username: str,
    password: str,
    display_name: str = "Administrator",
) -> Admin:
    """Create the seed admin, or give an existing password-less one a hash. Idempotent."""
    admin = await storage.get_admin_by_username(username)
    if admin is None:
        admin = await storage.create_admin(
            username=username,
            password_hash=await hash_password_async(password),
            display_name=display_name,
            role="admin",
        )
        logger.info("Created bootstrap admin %s", username)
    elif not admin.password_hash:
        admin = await storage.set_admin_password(admin.id, await hash_password_async(password))
        logger.info("Set password for bootstrap admin %s", username)
    return admin
