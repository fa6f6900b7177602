# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Error response tests."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from httpx import ASGITransport, AsyncClient

from whispering_server.exceptions import register_exception_handlers


def _failing_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.add_middleware(CORSMiddleware, allow_origins=["http://board.test"], allow_methods=["*"])

    @app.get("/boom")
    async def boom():
        raise RuntimeError("storage exploded")

    return app


async def test_unhandled_error_is_generic_500_with_cors(caplog):
    transport = ASGITransport(app=_failing_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        with caplog.at_level(logging.ERROR, logger="whispering_server.exceptions"):
            r = await ac.get("/boom", headers={"Origin": "http://board.test"})
    assert r.status_code == 500
    assert r.json() == {"message": "Internal server error"}
    assert "storage exploded" not in r.text
    assert r.headers["access-control-allow-origin"] == "http://board.test"
    records = [rec for rec in caplog.records if rec.name == "whispering_server.exceptions"]
    assert len(records) == 1
    assert records[0].exc_info is not None
