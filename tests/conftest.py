#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Test fixtures
=============
Shared helpers for the macro tests plus an httpx client bound to the
FastAPI app through ASGITransport.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
from typing import AsyncGenerator

import pytest_asyncio

from httpx import ASGITransport, AsyncClient

# ── Env vars must be set before importing app modules ────────────────────────
os.environ.setdefault("ENVIRONMENT", "testing")

from storyweave.main import create_app
from storyweave.services.macros import (
    MacroContext,
    MacroEngine,
    OutputBuffer,
    macro_registry,
    register_all_builtins,
)

register_all_builtins()
_engine = MacroEngine(registry=macro_registry)


# ── Helpers ──────────────────────────────────────────────────────────────────

def make_ctx(**kwargs) -> MacroContext:
    return MacroContext(**kwargs)


def render(markup: str, ctx: MacroContext | None = None) -> OutputBuffer:
    """Render *markup* as a fresh pass; return the buffer."""
    return _engine.render_pass(markup, OutputBuffer(), ctx or make_ctx())


# ── HTTP client ──────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


# -----------------------------------------------------------------------------
