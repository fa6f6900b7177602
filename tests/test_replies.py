# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Reply and moderation endpoint tests."""

import logging

from httpx import AsyncClient


async def test_message_reply_delete_flow(client: AsyncClient):
    """Post a message, reply to it, delete the reply, and see the thread update each time."""
    r = await client.post("/api/messages", json={"content": "hello", "category": "support"})
    assert r.status_code == 201
    message = r.json()
    assert message["id"] and message["createdAt"]

    thread = (await client.get(f"/api/messages/{message['id']}")).json()
    assert thread["replies"] == []

    r = await client.post(
        "/api/replies",
        json={"messageId": message["id"], "content": "hi", "nickname": "anon"},
    )
    assert r.status_code == 201
    reply = r.json()
    assert reply["messageId"] == message["id"]
    assert reply["nickname"] == "anon"

    thread = (await client.get(f"/api/messages/{message['id']}")).json()
    assert [x["id"] for x in thread["replies"]] == [reply["id"]]
    assert thread["replies"][0]["content"] == "hi"

    r = await client.delete(f"/api/replies/{reply['id']}")
    assert r.status_code == 200
    assert r.json() == {"message": "Reply deleted successfully"}

    thread = (await client.get(f"/api/messages/{message['id']}")).json()
    assert thread["replies"] == []


async def test_replies_listed_oldest_first(client: AsyncClient):
    message = (await client.post("/api/messages", json={"content": "m", "category": "love"})).json()
    ids = []
    for text in ("first", "second", "third"):
        r = await client.post("/api/replies", json={"messageId": message["id"], "content": text})
        ids.append(r.json()["id"])
    thread = (await client.get(f"/api/messages/{message['id']}")).json()
    assert [x["id"] for x in thread["replies"]] == ids
    assert {x["nickname"] for x in thread["replies"]} == {"Anonymous"}


async def test_reply_to_missing_message(client: AsyncClient):
    r = await client.post("/api/replies", json={"messageId": 9999, "content": "hi", "nickname": "anon"})
    assert r.status_code == 404


async def test_reply_validation(client: AsyncClient):
    r = await client.post("/api/replies", json={"messageId": 1, "content": "", "nickname": "anon"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request data"
    assert r.json()["errors"][0]["field"] == "content"


async def test_delete_missing_reply(client: AsyncClient):
    r = await client.delete("/api/replies/31337")
    assert r.status_code == 404


async def test_warning_is_logged(client: AsyncClient, caplog):
    with caplog.at_level(logging.WARNING, logger="whispering_server.routers.replies"):
        r = await client.post("/api/warnings", json={"replyId": 7, "reason": "be kind"})
    assert r.status_code == 200
    assert r.json() == {"message": "Warning sent successfully"}
    assert "Warning sent for reply 7: be kind" in caplog.text


async def test_warning_requires_reason(client: AsyncClient):
    r = await client.post("/api/warnings", json={"replyId": 7})
    assert r.status_code == 400


async def test_out_of_range_reply_ids(client: AsyncClient):
    huge = 99999999999999999999
    r = await client.delete(f"/api/replies/{huge}")
    assert r.status_code == 404

    r = await client.post("/api/replies", json={"messageId": huge, "content": "hi"})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "messageId"

    r = await client.post("/api/warnings", json={"replyId": huge, "reason": "x"})
    assert r.status_code == 400
