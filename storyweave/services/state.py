"""
The shared narrative state read and written by story expressions.

One instance lives for the whole session and is passed by reference into
every evaluation and render call.  Nothing here is rolled back: a write
made while rendering discarded output is as real as any other.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class StoryState:
    variables: dict[str, Any] = field(default_factory=dict)
    history: list[str] = field(default_factory=list)   # passage names, oldest first

    def get(self, name: str, default: Any = None) -> Any:
        return self.variables.get(name, default)

    def visited(self, passage: str) -> int:
        """Number of times *passage* appears in the history."""
        return self.history.count(passage)
