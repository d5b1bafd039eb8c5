#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------

"""
PyStoryWeave — FastAPI Application
==================================
Entry point.  Start with:
    uvicorn storyweave.main:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storyweave.core.config import get_settings
from storyweave.core.logging import configure_logging
from storyweave.routes import render
from storyweave.services.macros import register_all_builtins


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level)
    register_all_builtins()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Macro-driven story markup renderer",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────
    API = "/api/v1"
    app.include_router(render.router, prefix=API)

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/api/docs",
        }

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
