"""
Tag scanner
-----------
Finds ``<<name args>>`` and ``<</name>>`` tags in story markup.  Quoted
strings inside a tag may contain ``>>``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

_OPEN = "<<"
_CLOSE = ">>"
_NAME_RE = re.compile(r"(/?)([A-Za-z][\w-]*)")


@dataclass(frozen=True)
class Tag:
    name: str
    raw_args: str
    closing: bool
    start: int
    end: int          # index just past the closing ">>"
    text: str         # the full tag source

    def closes(self, name: str) -> bool:
        """True for ``<</name>>`` and its alias ``<<endname>>``."""
        if self.closing:
            return self.name == name
        return self.name == f"end{name}" and not self.raw_args


def scan_tags(markup: str, pos: int = 0) -> Iterator[Tag]:
    """Yield every well-formed tag at or after *pos*, in order."""
    while True:
        start = markup.find(_OPEN, pos)
        if start == -1:
            return
        tag = _read_tag(markup, start)
        if tag is None:
            pos = start + len(_OPEN)
            continue
        yield tag
        pos = tag.end


def _read_tag(markup: str, start: int) -> Tag | None:
    m = _NAME_RE.match(markup, start + len(_OPEN))
    if not m:
        return None
    end = _find_tag_end(markup, m.end())
    if end == -1:
        return None

    closing = bool(m.group(1))
    raw_args = markup[m.end():end].strip()
    if closing and raw_args:
        return None

    stop = end + len(_CLOSE)
    return Tag(m.group(2), raw_args, closing, start, stop, markup[start:stop])


def _find_tag_end(markup: str, pos: int) -> int:
    quote = ""
    i = pos
    while i < len(markup):
        ch = markup[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = ""
        elif ch in "\"'`":
            quote = ch
        elif markup.startswith(_CLOSE, i):
            return i
        i += 1
    return -1
