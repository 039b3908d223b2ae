"""Application factory and top-level wiring for the device tracker.

This module brings together configuration, the database lifecycle, the API
routers and error handling. ``create_app`` is the single place where those
pieces meet, so reading it top to bottom shows *what* exists and *when* it is
initialised.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.errors import register_exception_handlers
from .db.lifecycle import open_database
from .middlewares import RequestIdMiddleware
from .settings import AppSettings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: AppSettings | None = None) -> FastAPI:
    settings = settings or get_settings()

    # ---------- Storage lifecycle ----------
    # The database is opened when the server starts and disposed once it has
    # stopped accepting requests. Handlers reach it through ``get_db``.
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = open_database(settings)
        app.state.database = database
        try:
            yield
        finally:
            database.dispose()
            logger.info("app.stopped")

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings

    # ---------- Middleware ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    # ---------- Exception handling ----------
    # Storage faults, HTTP errors and validation failures all leave the API as
    # ``{"error": message}``.
    register_exception_handlers(app)

    # ---------- Routers ----------
    from .routers import api_devices as api_devices_router
    from .routers import api_staff as api_staff_router
    from .routers import api_wards as api_wards_router

    app.include_router(api_devices_router.router)
    app.include_router(api_staff_router.router)
    app.include_router(api_wards_router.router)

    @app.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    return app


__all__ = ["create_app"]
