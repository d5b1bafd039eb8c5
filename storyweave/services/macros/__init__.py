"""
Macro subsystem — public API.
"""

from .registry import MacroDefinition, MacroRegistry, macro_registry
from .engine import MacroEngine
from .context import MacroContext
from .clauses import Clause, Invocation, split_clauses, serialize_clauses
from .errors import ErrorKind, ErrorSignal
from .output import OutputBuffer
from .builtins import register_all_builtins

__all__ = [
    "MacroDefinition",
    "MacroRegistry",
    "macro_registry",
    "MacroEngine",
    "MacroContext",
    "Clause",
    "Invocation",
    "split_clauses",
    "serialize_clauses",
    "ErrorKind",
    "ErrorSignal",
    "OutputBuffer",
    "register_all_builtins",
]
