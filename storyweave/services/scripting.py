"""
ScriptEvaluator
===============
Runs a snippet of story script against a StoryState.

Story script is Python with a few conveniences:

  $gold + 5              — ``$name`` is the story variable ``name``
  $gold += 5             — statements are allowed; assignments land in
                           ``state.variables``
  visited("Cave")        — history helpers
  either("a", "b")       — random pick

Only a small table of builtins is exposed, and dunder names or attributes
starting with an underscore are rejected before compiling.  Any compile
or runtime fault is raised as EvaluationError with a human-readable message.
"""

from __future__ import annotations

import ast
import logging
import random as _random
import re
from typing import Any

from .state import StoryState

logger = logging.getLogger(__name__)

# A quoted string literal (left alone) or a $sigil variable reference.
_SIGIL_RE = re.compile(
    r'("(?:\\.|[^"\\])*"|\'(?:\\.|[^\'\\])*\')|\$([A-Za-z_]\w*)'
)

_SAFE_BUILTINS = {
    "abs": abs,
    "all": all,
    "any": any,
    "bool": bool,
    "dict": dict,
    "enumerate": enumerate,
    "float": float,
    "int": int,
    "isinstance": isinstance,
    "len": len,
    "list": list,
    "max": max,
    "min": min,
    "range": range,
    "round": round,
    "set": set,
    "sorted": sorted,
    "str": str,
    "sum": sum,
    "tuple": tuple,
    "zip": zip,
    "True": True,
    "False": False,
    "None": None,
}


class EvaluationError(Exception):
    """A story expression failed to compile or raised while running."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def desugar(source: str) -> str:
    """Strip ``$`` sigils outside string literals."""
    return _SIGIL_RE.sub(lambda m: m.group(1) or m.group(2), source)


def error_message(exc: BaseException) -> str:
    message = str(exc)
    return f"{type(exc).__name__}: {message}" if message else type(exc).__name__


class ScriptEvaluator:
    """
    Evaluate story script against shared state.

    Usage::

        evaluator = ScriptEvaluator()
        evaluator.evaluate("$gold += 5", state)
        evaluator.evaluate("$gold", state)     # → 5
    """

    def __init__(self, rng: _random.Random | None = None) -> None:
        self._rng = rng or _random.Random()

    # ----------------------------------------------------------------- public

    def evaluate(self, source: str, state: StoryState) -> Any:
        """Return the value of *source*, or None when it is a statement."""
        text = desugar(source).strip()
        code, is_expression = self._compile(text)

        # One namespace, so comprehensions and lambdas see story variables.
        helpers = self._helpers(state)
        scope = {**helpers, **state.variables, "__builtins__": _SAFE_BUILTINS}
        try:
            if is_expression:
                return eval(code, scope)
            exec(code, scope)
            return None
        except Exception as exc:
            logger.debug("Evaluation of %r failed: %s", source, exc)
            raise EvaluationError(error_message(exc)) from exc
        finally:
            self._write_back(scope, helpers, state)

    # ----------------------------------------------------------------- private

    @staticmethod
    def _compile(text: str):
        try:
            tree, is_expression = ast.parse(text, "<story>", mode="eval"), True
        except SyntaxError:
            try:
                tree, is_expression = ast.parse(text, "<story>", mode="exec"), False
            except SyntaxError as exc:
                raise EvaluationError(f"SyntaxError: {exc.msg}") from exc

        for node in ast.walk(tree):
            if isinstance(node, ast.Attribute) and node.attr.startswith("_"):
                raise EvaluationError(f"access to private attribute {node.attr!r} is not allowed")
            if isinstance(node, ast.Name) and node.id.startswith("__"):
                raise EvaluationError(f"access to name {node.id!r} is not allowed")

        return compile(tree, "<story>", "eval" if is_expression else "exec"), is_expression

    @staticmethod
    def _write_back(scope: dict[str, Any], helpers: dict[str, Any], state: StoryState) -> None:
        variables = state.variables
        for name in [n for n in variables if n not in scope]:
            del variables[name]
        for name, value in scope.items():
            if name == "__builtins__":
                continue
            if name in helpers and name not in variables and value is helpers[name]:
                continue
            variables[name] = value

    def _helpers(self, state: StoryState) -> dict[str, Any]:
        rng = self._rng
        return {
            "visited": state.visited,
            "random": lambda lo, hi=None: rng.randint(0, lo) if hi is None else rng.randint(lo, hi),
            "either": lambda *items: rng.choice(items) if items else None,
        }
