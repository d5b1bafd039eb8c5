"""
SET / PRINT macros
------------------
<<set $gold += 5>>      — run a statement against the story state
<<print $gold * 2>>     — render the value of an expression

A None result prints nothing.  Printed text containing macro tags is
rendered as markup, so a variable holding ``<<print 1>>`` expands; plain
text is written straight out.
"""

from __future__ import annotations

from ..scripting import EvaluationError
from .errors import ErrorKind
from .registry import MacroRegistry


def register(registry: MacroRegistry) -> None:

    @registry.register("set", skip_args=True)
    def set_macro(invocation, output, ctx):
        if not invocation.args.full:
            return invocation.error("no expression specified")
        try:
            ctx.evaluate(invocation.args.full)
        except EvaluationError as exc:
            return invocation.error(f"bad evaluation: {exc.message}", ErrorKind.EVALUATION)
        return None

    @registry.register("print", skip_args=True)
    def print_macro(invocation, output, ctx):
        if not invocation.args.full:
            return invocation.error("no expression specified")
        try:
            value = ctx.evaluate(invocation.args.full)
        except EvaluationError as exc:
            return invocation.error(f"bad evaluation: {exc.message}", ErrorKind.EVALUATION)
        text = "" if value is None else str(value)
        if "<<" in text:
            ctx.render(text, output, caller=invocation)
        else:
            output.write(text)
        return None
