"""
INCLUDE macro
-------------
Renders another passage in place.

<<include "Cave">>
<<include $nextRoom>>

Passages come from ``ctx.passages``.  A passage that includes itself is
stopped by the render context's iteration budget and depth guard.
"""

from __future__ import annotations

import logging

from .registry import MacroRegistry

logger = logging.getLogger(__name__)


def register(registry: MacroRegistry) -> None:

    @registry.register("include")
    def include_macro(invocation, output, ctx):
        if len(invocation.args) == 0:
            return invocation.error("no passage specified")

        name = str(invocation.args[0])
        content = ctx.passages.get(name)
        if content is None:
            return invocation.error(f'passage "{name}" does not exist')

        logger.debug("Including passage %s", name)
        ctx.render(content, output, caller=invocation)
        return None
