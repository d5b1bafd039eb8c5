"""
SILENT macro
------------
<<silent>> ... <</silent>>

Renders its contents into a scratch buffer and throws the text away.
State changes made by the contents stay.  Errors raised inside are not
lost: they are gathered and reported once, at the <<silent>> itself.
"""

from __future__ import annotations

from .errors import ErrorKind
from .output import OutputBuffer
from .registry import MacroRegistry


def register(registry: MacroRegistry) -> None:

    @registry.register("silent", tags=(), skip_args=True)
    def silent_macro(invocation, output, ctx):
        scratch = OutputBuffer()
        ctx.render(invocation.clauses[0].contents, scratch, caller=invocation)

        errors = [str(e) for e in scratch.errors]
        if errors:
            plural = "" if len(errors) == 1 else "s"
            return invocation.error(
                f"{len(errors)} error{plural} within contents ({'; '.join(errors)})",
                ErrorKind.AGGREGATED,
            )
        return None
