# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Storage accessor tests (direct, no HTTP)."""

import pytest
from httpx import AsyncClient

from whispering_server.exceptions import ConflictError
from whispering_server.main import app
from whispering_server.storage import Storage, get_storage


async def test_absent_reads_return_none(storage: Storage):
    assert await storage.get_message(1) is None
    assert await storage.get_user_by_username("ghost") is None
    assert await storage.get_admin_by_username("ghost") is None
    assert await storage.update_message_visibility(1, True) is None
    assert await storage.update_admin_status(1, False) is None
    assert await storage.set_user_active(1, False) is None
    assert await storage.delete_reply(1) is False


async def test_unique_username_enforced_by_table(storage: Storage):
    await storage.create_user("unique", "k.s")
    with pytest.raises(ConflictError):
        await storage.create_user("unique", "k.s")
    # Session is usable again after the conflict
    other = await storage.create_user("unique2", "k.s")
    assert other.id is not None


async def test_user_and_admin_namespaces_are_separate(storage: Storage):
    await storage.create_user("shared", "k.s")
    admin = await storage.create_admin("shared", None, "Shared")
    assert admin.role == "admin"


async def test_writes_return_ids_and_timestamps(storage: Storage):
    message = await storage.create_message("body", "gratitude", recipient="Kim")
    assert message.id is not None
    assert message.created_at is not None
    assert message.is_public is False

    reply = await storage.create_reply(message.id, "thanks", "anon")
    assert reply.id is not None
    assert reply.created_at is not None


async def test_delete_reply(storage: Storage):
    message = await storage.create_message("body", "support")
    reply = await storage.create_reply(message.id, "r", "n")
    assert await storage.delete_reply(reply.id) is True
    assert await storage.delete_reply(reply.id) is False


class _FakeStorage:
    """Stands in for Storage; only what the route under test calls."""

    async def list_recipients(self) -> list[str]:
        return ["From Fake"]


async def test_storage_dependency_can_be_overridden(client: AsyncClient):
    app.dependency_overrides[get_storage] = lambda: _FakeStorage()
    try:
        r = await client.get("/api/recipients")
    finally:
        app.dependency_overrides.pop(get_storage, None)
    assert r.json() == ["From Fake"]
