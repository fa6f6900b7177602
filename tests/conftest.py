# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Pytest fixtures. Tests run against a throwaway SQLite database (aiosqlite)."""

import os
import tempfile

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='whispering-')}/test.db"
os.environ.pop("BOOTSTRAP_ADMIN_USERNAME", None)
os.environ.pop("BOOTSTRAP_ADMIN_PASSWORD", None)

import pytest
from httpx import ASGITransport, AsyncClient

from whispering_server.database import async_session_maker, engine, init_db
from whispering_server.main import app
from whispering_server.models import Base
from whispering_server.storage import Storage


@pytest.fixture(autouse=True)
async def fresh_db():
    """Create tables before each test and drop them after."""
    await init_db()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def storage():
    async with async_session_maker() as session:
        yield Storage(session)
