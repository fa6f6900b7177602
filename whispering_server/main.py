# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Whispering Network Server - Main FastAPI application."""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from whispering_server import __version__
from whispering_server.auth import ensure_bootstrap_admin
from whispering_server.config import settings
from whispering_server.database import async_session_maker, close_db, init_db
from whispering_server.exceptions import register_exception_handlers
from whispering_server.logging_config import setup_logging
from whispering_server.routers import admin, auth, messages, replies
from whispering_server.storage import Storage

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    raw = (settings.cors_origins or "*").strip()
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


async def seed_bootstrap_admin() -> None:
    """Create the configured seed admin, if any."""
    if not (settings.bootstrap_admin_username and settings.bootstrap_admin_password):
        return
    async with async_session_maker() as session:
        await ensure_bootstrap_admin(
            Storage(session),
            settings.bootstrap_admin_username,
            settings.bootstrap_admin_password,
            settings.bootstrap_admin_display_name,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    setup_logging(settings.log_level)
    await init_db()
    await seed_bootstrap_admin()
    logger.info("Whispering Network Server %s started", __version__)
    yield
    await close_db()


app = FastAPI(
    title="Whispering Network Server",
    description="Anonymous message board API",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

# Error handling sits inside CORS so error responses carry CORS headers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status, and duration for each request (no body)."""
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info("%s %s %s %.1fms", request.method, request.url.path, response.status_code, duration_ms)
    return response


app.include_router(auth.router, prefix="/api")
app.include_router(admin.router, prefix="/api")
app.include_router(messages.router, prefix="/api")
app.include_router(replies.router, prefix="/api")


@app.get("/api/health")
async def health():
    """Health check for load balancers."""
    return {"status": "ok"}
