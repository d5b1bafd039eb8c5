"""
OutputBuffer — the sink every render writes into.

Text and ErrorSignals are kept in document order.  Signals stay structured
until the buffer is turned into a string, so a caller can inspect
``errors`` directly instead of scraping rendered markup.
"""

from __future__ import annotations

import html

from .errors import ErrorSignal


class OutputBuffer:
    def __init__(self) -> None:
        self._parts: list[str | ErrorSignal] = []

    def write(self, text: str) -> None:
        if text:
            self._parts.append(text)

    def error(self, signal: ErrorSignal) -> None:
        self._parts.append(signal)

    @property
    def errors(self) -> list[ErrorSignal]:
        return [p for p in self._parts if isinstance(p, ErrorSignal)]

    @property
    def text(self) -> str:
        """Rendered text with error markers left out."""
        return "".join(p for p in self._parts if isinstance(p, str))

    def getvalue(self) -> str:
        return "".join(
            p if isinstance(p, str) else render_error_marker(p) for p in self._parts
        )

    def __str__(self) -> str:
        return self.getvalue()


def render_error_marker(signal: ErrorSignal) -> str:
    return (
        f'<span class="macro-error" data-kind="{signal.kind.value}"'
        f' title="{html.escape(signal.source)}">'
        f"Error: {html.escape(str(signal))}</span>"
    )
