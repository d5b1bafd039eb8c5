"""
Per-pass render context handed to every macro handler.

The story state is shared and long-lived; the counters are per pass and
guard against runaway recursive expansion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ...core.config import Settings, get_settings
from ..scripting import ScriptEvaluator
from ..state import StoryState


@dataclass
class MacroContext:
    state: StoryState = field(default_factory=StoryState)
    passages: dict[str, str] = field(default_factory=dict)
    evaluator: ScriptEvaluator = field(default_factory=ScriptEvaluator)
    passage: str = ""                # name of the passage being rendered
    max_iterations: int = 1000
    max_depth: int = 64

    # set by MacroEngine.render()
    _render_fn: Optional[Callable[..., None]] = field(default=None, repr=False)
    _iterations: int = field(default=0, init=False, repr=False)
    _depth: int = field(default=0, init=False, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "MacroContext":
        settings = settings or get_settings()
        kwargs.setdefault("max_iterations", settings.macros_max_loop_iterations)
        kwargs.setdefault("max_depth", settings.macros_max_render_depth)
        return cls(**kwargs)

    # ----------------------------------------------------------------- helpers

    def evaluate(self, source: str) -> Any:
        return self.evaluator.evaluate(source, self.state)

    def render(self, markup: str, output, caller=None) -> None:
        """Recursively render *markup* into *output* on behalf of *caller*."""
        if self._render_fn is None:
            raise RuntimeError("MacroContext is not bound to a MacroEngine")
        self._render_fn(markup, output, self, caller)

    def reset_budget(self) -> None:
        self._iterations = 0
        self._depth = 0
