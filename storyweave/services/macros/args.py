"""
Macro argument tokenizer
========================
Turns the text after a tag name into a tuple of values.

Supported tokens
----------------
  "text" / 'text'       → str (backslash escapes honoured)
  42 / -1.5 / 1e3       → int / float
  true / false          → bool
  null / undefined      → None
  `expression`          → value of the story expression
  $name                 → current value of story variable ``name``
  anything else         → the bare word as a str

  <<case 1 "one" $lucky>>  →  (1, "one", <value of lucky>)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterator

from ..scripting import desugar
from .errors import ArgumentError

_DOUBLE   = re.compile(r'"((?:\\.|[^"\\])*)"')
_SINGLE   = re.compile(r"'((?:\\.|[^'\\])*)'")
_BACKTICK = re.compile(r"`([^`]*)`")
_BARE     = re.compile(r"[^\s\"'`]+")
_INT      = re.compile(r"[+-]?\d+$")
_FLOAT    = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")
_VARIABLE = re.compile(r"\$([A-Za-z_]\w*)$")
_ESCAPE   = re.compile(r"\\(.)")

_LITERALS = {"true": True, "false": False, "null": None, "undefined": None}


@dataclass(frozen=True)
class Arguments:
    """Tokenized values plus the untouched argument text."""

    values: tuple[Any, ...] = ()
    raw: str = ""

    @property
    def full(self) -> str:
        """The argument text as a story expression (sigils removed)."""
        return desugar(self.raw).strip()

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __getitem__(self, index: int) -> Any:
        return self.values[index]


def parse_arguments(raw: str, ctx, *, skip: bool = False) -> Arguments:
    """
    Tokenize *raw* into an Arguments value.

    With ``skip=True`` no tokenizing happens; handlers that take a whole
    expression read ``raw`` / ``full`` instead.  Backtick expressions are
    evaluated through *ctx*, so EvaluationError may propagate.
    """
    raw = raw.strip()
    if skip or not raw:
        return Arguments((), raw)
    return Arguments(tuple(_tokens(raw, ctx)), raw)


def _tokens(raw: str, ctx) -> Iterator[Any]:
    pos = 0
    while pos < len(raw):
        ch = raw[pos]
        if ch.isspace():
            pos += 1
            continue

        if ch in "\"'":
            m = (_DOUBLE if ch == '"' else _SINGLE).match(raw, pos)
            if not m:
                raise ArgumentError(f"unterminated quoted string in argument: {raw[pos:]}")
            yield _ESCAPE.sub(r"\1", m.group(1))
        elif ch == "`":
            m = _BACKTICK.match(raw, pos)
            if not m:
                raise ArgumentError(f"unterminated backquote expression in argument: {raw[pos:]}")
            yield ctx.evaluate(m.group(1))
        else:
            m = _BARE.match(raw, pos)
            yield _bare_value(m.group(0), ctx)

        pos = m.end()


def _bare_value(word: str, ctx) -> Any:
    if word in _LITERALS:
        return _LITERALS[word]
    if _INT.match(word):
        return int(word)
    if _FLOAT.match(word):
        return float(word)
    m = _VARIABLE.match(word)
    if m:
        return ctx.state.get(m.group(1))
    return word
