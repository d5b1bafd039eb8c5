"""
IF macro
--------
<<if $gold > 10>> ... <<elseif $gold > 0>> ... <<else>> ... <</if>>

Conditions are tested in order and the first truthy clause renders.
``else`` takes no condition and must be the final clause.
"""

from __future__ import annotations

from ..scripting import EvaluationError
from .errors import ErrorKind
from .registry import MacroRegistry


def register(registry: MacroRegistry) -> None:

    @registry.register("if", tags=("elseif", "else"), skip_args=True)
    def if_macro(invocation, output, ctx):
        clauses = invocation.clauses
        if not invocation.args.full:
            return invocation.error("no conditional expression specified")

        for index, clause in enumerate(clauses[1:], start=1):
            if clause.name == "else":
                if clause.args.raw:
                    return invocation.error(
                        "<<else>> does not accept a conditional expression "
                        f"(perhaps you meant to use <<elseif>>), invalid: {clause.args.raw}"
                    )
                if index + 1 != len(clauses):
                    return invocation.error("<<else>> must be the final clause")
            elif not clause.args.full:
                return invocation.error(f"no conditional expression specified for <<elseif>> (#{index})")

        for index, clause in enumerate(clauses):
            if clause.name != "else":
                try:
                    passed = bool(ctx.evaluate(clause.args.full))
                except EvaluationError as exc:
                    where = f"<<{clause.name}>> clause" + (f" (#{index})" if index else "")
                    return invocation.error(f"bad conditional expression in {where}: {exc.message}", ErrorKind.EVALUATION)
                if not passed:
                    continue
            ctx.render(clause.contents, output, caller=invocation)
            break
        return None
