"""
Error signals
-------------
Handlers never raise across the render boundary; every failure becomes an
ErrorSignal returned to the renderer, which records it in the output sink
at the invocation's position.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ErrorKind(str, enum.Enum):
    STRUCTURAL = "structural"   # malformed clause arrangement or markup
    EVALUATION = "evaluation"   # story script raised
    AGGREGATED = "aggregated"   # nested errors found in a discarded render
    LIMIT = "limit"             # iteration budget or depth guard exhausted
    INTERNAL = "internal"       # handler crashed


@dataclass(frozen=True)
class ErrorSignal:
    message: str
    macro: str
    source: str = ""
    kind: ErrorKind = ErrorKind.STRUCTURAL

    def __str__(self) -> str:
        return f"<<{self.macro}>>: {self.message}"


class ClauseSyntaxError(Exception):
    """Malformed container body; converted to a STRUCTURAL signal."""


class ArgumentError(Exception):
    """Macro argument text could not be tokenized or evaluated."""
