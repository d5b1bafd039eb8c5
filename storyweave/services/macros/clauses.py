"""
Clause parser
=============
A container macro owns everything between its opening and closing tags.
That body is split into clauses at the sibling tags the macro declares:

    <<switch $mood>>            ← primary clause (index 0, name "switch")
      Hmm.
    <<case "happy" "glad">>     ← clause 1
      Hooray!
    <<default>>                 ← clause 2
      Oh.
    <</switch>>

Sibling tags inside a nested container belong to that container and are
not split.  Joining ``opening + raw`` of every clause gives back the body
exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Collection

from .args import Arguments
from .errors import ClauseSyntaxError, ErrorKind, ErrorSignal
from .lexer import Tag, scan_tags


@dataclass(frozen=True)
class Clause:
    name: str
    args: Arguments
    raw: str = ""         # body text exactly as written
    opening: str = ""     # the sibling tag text; empty for the primary clause

    @property
    def contents(self) -> str:
        return self.raw.strip()


@dataclass(frozen=True)
class Invocation:
    """One parsed macro call, handed to its handler."""

    name: str
    args: Arguments
    clauses: tuple[Clause, ...] = field(default=())
    source: str = ""

    def error(self, message: str, kind: ErrorKind = ErrorKind.STRUCTURAL) -> ErrorSignal:
        return ErrorSignal(message, self.name, self.source, kind)


# -----------------------------------------------------------------------------

def find_closing(markup: str, opening: Tag) -> Tag | None:
    """Return the tag closing *opening*, counting same-name nesting."""
    depth = 0
    for tag in scan_tags(markup, opening.end):
        if tag.closes(opening.name):
            if depth == 0:
                return tag
            depth -= 1
        elif not tag.closing and tag.name == opening.name:
            depth += 1
    return None


def split_clauses(
    name: str,
    raw_args: str,
    body: str,
    tags: Collection[str],
    *,
    is_container: Callable[[str], bool],
    clause_names: Collection[str] = (),
) -> list[Clause]:
    """
    Split a container *body* into clauses.

    ``tags`` are the sibling names this macro accepts; ``clause_names`` are
    every sibling name known to the registry.  A top-level tag from the
    latter that is not in the former raises ClauseSyntaxError.  Clause args
    are left unparsed (``Arguments((), raw)``).
    """
    clauses: list[Clause] = []
    nested: list[str] = []

    cur_name, cur_args, cur_opening, seg_start = name, raw_args, "", 0

    for tag in scan_tags(body):
        if nested:
            if tag.closes(nested[-1]):
                nested.pop()
            elif not tag.closing and is_container(tag.name):
                nested.append(tag.name)
            continue

        if tag.closing:
            continue

        if tag.name in tags:
            clauses.append(Clause(cur_name, Arguments((), cur_args), body[seg_start:tag.start], cur_opening))
            cur_name, cur_args, cur_opening, seg_start = tag.name, tag.raw_args, tag.text, tag.end
        elif tag.name in clause_names:
            raise ClauseSyntaxError(f"<<{tag.name}>> is not a valid clause of <<{name}>>")
        elif is_container(tag.name):
            nested.append(tag.name)

    clauses.append(Clause(cur_name, Arguments((), cur_args), body[seg_start:], cur_opening))
    return clauses


def serialize_clauses(clauses: list[Clause] | tuple[Clause, ...]) -> str:
    """Rebuild the container body from its clauses."""
    return "".join(c.opening + c.raw for c in clauses)
