"""
SWITCH macro
------------
Multi-way dispatch on the value of one expression.

<<switch $weapon>>
<<case "sword" "axe">>  You swing.
<<case "bow">>          You shoot.
<<default>>             You flail.
<</switch>>

The expression is evaluated once.  The first ``case`` holding a value
strictly equal to the result renders (or ``default``, which must come
last); nothing falls through.  No match renders nothing.
"""

from __future__ import annotations

from typing import Any

from ..scripting import EvaluationError
from .errors import ErrorKind
from .registry import MacroRegistry


def strict_equals(left: Any, right: Any) -> bool:
    """Equality without coercion: ``1 != True``, ``1 != "1"``, ``1 == 1.0``."""
    if _primitive_kind(left) is None or _primitive_kind(right) is None:
        return left is right
    return _primitive_kind(left) == _primitive_kind(right) and left == right


def _primitive_kind(value: Any) -> str | None:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return None


def register(registry: MacroRegistry) -> None:

    @registry.register("switch", tags=("case", "default"), skip_args=("switch",))
    def switch_macro(invocation, output, ctx):
        if not invocation.args.full:
            return invocation.error("no expression specified")

        clauses = invocation.clauses
        if len(clauses) == 1:
            return invocation.error("no cases specified")

        for index, clause in enumerate(clauses[1:], start=1):
            if clause.name == "default":
                if len(clause.args) > 0:
                    return invocation.error(f"<<default>> does not accept values, invalid: {clause.args.raw}")
                if index + 1 != len(clauses):
                    return invocation.error("<<default>> must be the final case")
            elif len(clause.args) == 0:
                return invocation.error(f"no value(s) specified for <<{clause.name}>> (#{index})")

        try:
            result = ctx.evaluate(invocation.args.full)
        except EvaluationError as exc:
            return invocation.error(f"bad evaluation: {exc.message}", ErrorKind.EVALUATION)

        for clause in clauses[1:]:
            if clause.name == "default" or any(strict_equals(v, result) for v in clause.args):
                ctx.render(clause.contents, output, caller=invocation)
                break
        return None
