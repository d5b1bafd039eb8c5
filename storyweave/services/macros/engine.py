"""
MacroEngine
===========
The renderer.  Walks story markup, copies plain text into the output and
expands every ``<<macro>>`` it meets:

  leaf macro        <<set $gold += 5>>
  container macro   <<silent>> ... <</silent>>     (also <<endsilent>>)

Container bodies are split into clauses before the handler runs.  Any
failure (unknown macro, unclosed container, bad clause, handler error) is
recorded as an ErrorSignal at that position and rendering carries on.

Rendering is re-entrant: handlers render clause contents through
``ctx.render()``, which comes back here.  Every render is charged against
the context's iteration budget and depth guard.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from .args import Arguments, parse_arguments
from .clauses import Invocation, find_closing, split_clauses
from .context import MacroContext
from .errors import ArgumentError, ClauseSyntaxError, ErrorKind, ErrorSignal
from .lexer import Tag, scan_tags
from .output import OutputBuffer
from .registry import MacroDefinition, macro_registry
from ..scripting import EvaluationError

logger = logging.getLogger(__name__)


class MacroEngine:
    """
    Expand all macros embedded in a piece of story markup.

    Usage::

        engine = MacroEngine()
        html = engine.expand(raw_text, ctx)
    """

    def __init__(self, registry=None) -> None:
        self._registry = registry or macro_registry

    # ----------------------------------------------------------------- public

    def expand(self, markup: str, ctx: MacroContext) -> str:
        """Render *markup* as a fresh pass and return the output text."""
        output = OutputBuffer()
        self.render_pass(markup, output, ctx)
        return output.getvalue()

    def render_pass(self, markup: str, output: OutputBuffer, ctx: MacroContext) -> OutputBuffer:
        """
        Render *markup* into *output* with a fresh iteration budget.

        A named ``ctx.passage`` is recorded in the story history first, so
        ``visited()`` counts the visit being rendered.
        """
        ctx._render_fn = self.render
        ctx.reset_budget()
        if ctx.passage:
            ctx.state.history.append(ctx.passage)
        self.render(markup, output, ctx)
        return output

    def render(self, markup: str, output: OutputBuffer, ctx: MacroContext, caller: Invocation | None = None) -> None:
        """Render *markup* into *output*; safe to call from inside a handler."""
        if ctx._render_fn is None:
            ctx._render_fn = self.render

        limit = self._check_budget(ctx, caller)
        if limit is not None:
            output.error(limit)
            return

        ctx._iterations += 1
        ctx._depth += 1
        try:
            self._render_markup(markup, output, ctx)
        finally:
            ctx._depth -= 1

    # ----------------------------------------------------------------- private

    def _check_budget(self, ctx: MacroContext, caller: Invocation | None) -> ErrorSignal | None:
        name = caller.name if caller else "render"
        source = caller.source if caller else ""
        if ctx._iterations >= ctx.max_iterations:
            logger.warning("Macro iteration budget (%d) exhausted in <<%s>>", ctx.max_iterations, name)
            return ErrorSignal(
                f"exceeded the maximum number of macro iterations ({ctx.max_iterations})",
                name, source, ErrorKind.LIMIT,
            )
        if ctx._depth >= ctx.max_depth:
            logger.warning("Macro nesting depth (%d) exceeded in <<%s>>", ctx.max_depth, name)
            return ErrorSignal(
                f"exceeded the maximum macro nesting depth ({ctx.max_depth})",
                name, source, ErrorKind.LIMIT,
            )
        return None

    def _render_markup(self, markup: str, output: OutputBuffer, ctx: MacroContext) -> None:
        pos = 0
        while True:
            tag = next(scan_tags(markup, pos), None)
            if tag is None:
                break
            output.write(markup[pos:tag.start])
            pos = self._process(markup, tag, output, ctx)
        output.write(markup[pos:])

    def _process(self, markup: str, tag: Tag, output: OutputBuffer, ctx: MacroContext) -> int:
        """Expand the macro at *tag*; return the index rendering resumes from."""
        if tag.closing or (tag.name.startswith("end") and self._registry.is_container(tag.name[3:])):
            closed = tag.name if tag.closing else tag.name[3:]
            output.error(ErrorSignal(f"unexpected closing tag for macro <<{closed}>>", closed, tag.text))
            return tag.end

        definition = self._registry.get(tag.name)
        if definition is None:
            output.error(self._unknown(tag))
            return tag.end

        end, invocation, signal = self._build(markup, tag, definition, ctx)
        if signal is None:
            signal = self._registry.call(definition, invocation, output, ctx)
        if signal is not None:
            output.error(signal)
        return end

    def _unknown(self, tag: Tag) -> ErrorSignal:
        parents = self._registry.parents_of(tag.name)
        if parents:
            within = " or ".join(f"<<{p}>>" for p in parents)
            return ErrorSignal(f"must only be used within {within}", tag.name, tag.text)
        return ErrorSignal(f"macro <<{tag.name}>> does not exist", tag.name, tag.text)

    def _build(
        self, markup: str, tag: Tag, definition: MacroDefinition, ctx: MacroContext,
    ) -> tuple[int, Invocation, ErrorSignal | None]:
        """Parse the invocation at *tag*: (resume index, invocation, parse error)."""
        end = tag.end
        source = tag.text
        raw_clauses = []

        if definition.is_container:
            closing = find_closing(markup, tag)
            if closing is None:
                invocation = Invocation(tag.name, Arguments((), tag.raw_args), (), source)
                return end, invocation, invocation.error(f"cannot find a closing tag for macro <<{tag.name}>>")
            end = closing.end
            source = markup[tag.start:closing.end]
            try:
                raw_clauses = split_clauses(
                    tag.name,
                    tag.raw_args,
                    markup[tag.end:closing.start],
                    definition.tags,
                    is_container=self._registry.is_container,
                    clause_names=self._registry.clause_names,
                )
            except ClauseSyntaxError as exc:
                invocation = Invocation(tag.name, Arguments((), tag.raw_args), (), source)
                return end, invocation, invocation.error(str(exc))

        invocation = Invocation(tag.name, Arguments((), tag.raw_args), (), source)
        try:
            args = parse_arguments(tag.raw_args, ctx, skip=definition.skips(tag.name))
            clauses = tuple(
                replace(c, args=args if i == 0 else parse_arguments(c.args.raw, ctx, skip=definition.skips(c.name)))
                for i, c in enumerate(raw_clauses)
            )
        except ArgumentError as exc:
            return end, invocation, invocation.error(str(exc))
        except EvaluationError as exc:
            return end, invocation, invocation.error(f"bad evaluation: {exc.message}", ErrorKind.EVALUATION)

        return end, replace(invocation, args=args, clauses=clauses), None
