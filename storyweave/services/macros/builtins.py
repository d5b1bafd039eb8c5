"""
Built-in macro registrations.
Call register_all_builtins() once at application startup.
"""

from __future__ import annotations

from .registry import MacroRegistry, macro_registry
from . import (
    macro_if,
    macro_include,
    macro_set,
    macro_silent,
    macro_switch,
)


def register_all_builtins(registry: MacroRegistry | None = None) -> None:
    """Register every built-in macro with *registry* (the shared one by default)."""
    registry = registry or macro_registry
    macro_set.register(registry)
    macro_include.register(registry)
    macro_if.register(registry)
    macro_switch.register(registry)
    macro_silent.register(registry)
