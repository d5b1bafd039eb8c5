#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render router
=============
POST /api/v1/render   — expand story markup against supplied state
GET  /api/v1/macros   — list registered macros

Rendering problems are reported in the ``errors`` list (and as inline
markers in ``html``); they never turn into HTTP errors.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder

from storyweave.core.config import get_settings
from storyweave.schemas import MacroInfo, RenderError, RenderRequest, RenderResponse
from storyweave.services.macros import MacroContext, MacroEngine, OutputBuffer, macro_registry
from storyweave.services.state import StoryState

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------

router = APIRouter(tags=["Render"])

_engine = MacroEngine(registry=macro_registry)


# -----------------------------------------------------------------------------

@router.post("/render", response_model=RenderResponse)
def render(body: RenderRequest) -> RenderResponse:
    """Render *markup* once; the response carries the mutated variables."""
    state = StoryState(variables=dict(body.variables), history=list(body.history))
    ctx = MacroContext.from_settings(
        get_settings(),
        state=state,
        passages=body.passages,
        passage=body.passage,
    )

    output = _engine.render_pass(body.markup, OutputBuffer(), ctx)
    errors = output.errors
    if errors:
        logger.info("Render produced %d error(s)", len(errors))

    return RenderResponse(
        html=output.getvalue(),
        variables=_encode_variables(state.variables),
        errors=[
            RenderError(macro=e.macro, message=e.message, kind=e.kind.value, source=e.source)
            for e in errors
        ],
    )


def _encode_variables(variables: dict) -> dict:
    """JSON-encode each variable; values with no JSON form come back as repr()."""
    encoded = {}
    for name, value in variables.items():
        try:
            encoded[name] = jsonable_encoder(value)
        except (TypeError, ValueError):
            logger.debug("Variable %s is not JSON-encodable; returning repr", name)
            encoded[name] = repr(value)
    return encoded


# -----------------------------------------------------------------------------

@router.get("/macros", response_model=list[MacroInfo])
def list_macros() -> list[MacroInfo]:
    return [
        MacroInfo(
            name=d.name,
            container=d.is_container,
            tags=list(d.tags) if d.tags is not None else None,
        )
        for d in macro_registry.definitions()
    ]


# -----------------------------------------------------------------------------
