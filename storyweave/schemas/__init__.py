"""
Pydantic v2 schemas for request validation and response serialisation.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Rendering
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RenderRequest(BaseModel):
    markup: str = Field(..., max_length=1_000_000)
    variables: dict[str, Any] = Field(default_factory=dict)
    passages: dict[str, str] = Field(default_factory=dict)
    history: list[str] = Field(default_factory=list)
    passage: str = ""


# -----------------------------------------------------------------------------

class RenderError(BaseModel):
    macro: str
    message: str
    kind: str
    source: str


# -----------------------------------------------------------------------------

class RenderResponse(BaseModel):
    html: str
    variables: dict[str, Any]
    errors: list[RenderError]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Macros
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class MacroInfo(BaseModel):
    name: str
    container: bool
    tags: Optional[list[str]] = None
