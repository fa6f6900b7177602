#!/usr/bin/env python3
# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Create admin account. Run: python -m whispering_server.scripts.create_admin"""

import asyncio
import getpass
import sys

from whispering_server.auth import hash_password
from whispering_server.database import async_session_maker, close_db, init_db
from whispering_server.exceptions import ConflictError
from whispering_server.models import Admin
from whispering_server.storage import Storage


async def create_admin(username: str, password: str, display_name: str, role: str = "admin") -> Admin:
    """Create an admin with a hashed password. Raises ConflictError if the username is taken."""
    async with async_session_maker() as session:
        return await Storage(session).create_admin(
            username=username,
            password_hash=hash_password(password),
            display_name=display_name,
            role=role,
        )


async def main():
    await init_db()
    username = input("Admin username: ").strip()
    display_name = input("Display name: ").strip() or username
    password = getpass.getpass("Password: ")
    if not username or not password:
        print("Username and password required")
        sys.exit(1)
    try:
        await create_admin(username, password, display_name)
    except ConflictError:
        print("Admin already exists")
        sys.exit(1)
    finally:
        await close_db()
    print("Admin created.")


if __name__ == "__main__":
    asyncio.run(main())
