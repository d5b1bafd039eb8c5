"""
MacroRegistry — central store of all registered macro handlers.

Every handler has the same shape:

    def handler(invocation: Invocation, output: OutputBuffer, ctx: MacroContext) -> ErrorSignal | None

Leaf macros get an empty ``invocation.clauses``.  Container macros declare
their sibling clause names with ``tags`` (an empty tuple for a container
with no siblings) and get the parsed clause list, primary clause first.

Register with the decorator:
    @macro_registry.register("switch", tags=("case", "default"), skip_args=("switch",))
    def switch_macro(invocation, output, ctx):
        ...
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .errors import ErrorKind, ErrorSignal

logger = logging.getLogger(__name__)


MacroHandler = Callable[..., Optional[ErrorSignal]]


@dataclass(frozen=True)
class MacroDefinition:
    name: str
    handler: MacroHandler
    tags: Optional[tuple[str, ...]] = None      # None → leaf macro
    skip_args: bool | tuple[str, ...] = False   # True → every tag; tuple → listed tags

    @property
    def is_container(self) -> bool:
        return self.tags is not None

    def skips(self, tag_name: str) -> bool:
        """Whether *tag_name*'s argument text is passed raw."""
        if isinstance(self.skip_args, bool):
            return self.skip_args
        return tag_name in self.skip_args


class MacroRegistry:
    def __init__(self) -> None:
        self._definitions: dict[str, MacroDefinition] = {}
        self._parents: dict[str, list[str]] = {}    # clause tag → container names

    # ---------------------------------------------------------------- register

    def register(
        self,
        name: str,
        *,
        tags: Optional[tuple[str, ...]] = None,
        skip_args: bool | tuple[str, ...] = False,
    ):
        """
        Decorator that registers a function as a macro handler.

        Usage::

            @macro_registry.register("silent", tags=(), skip_args=True)
            def silent_macro(invocation, output, ctx):
                ...
        """
        def decorator(fn: MacroHandler) -> MacroHandler:
            if name in self._definitions:
                logger.debug("Macro <<%s>> re-registered; previous handler replaced", name)
                self._forget_tags(name)
            definition = MacroDefinition(name, fn, tuple(tags) if tags is not None else None, skip_args)
            self._definitions[name] = definition
            for tag in definition.tags or ():
                self._parents.setdefault(tag, []).append(name)
            logger.debug("Registered macro: %s (tags=%s)", name, definition.tags)
            return fn
        return decorator

    def _forget_tags(self, name: str) -> None:
        for tag in self._definitions[name].tags or ():
            parents = self._parents.get(tag, [])
            if name in parents:
                parents.remove(name)
            if not parents:
                self._parents.pop(tag, None)

    # ------------------------------------------------------------------ lookup

    def has(self, name: str) -> bool:
        return name in self._definitions

    def get(self, name: str) -> Optional[MacroDefinition]:
        return self._definitions.get(name)

    def is_container(self, name: str) -> bool:
        definition = self._definitions.get(name)
        return definition is not None and definition.is_container

    @property
    def clause_names(self) -> set[str]:
        return set(self._parents)

    def parents_of(self, tag: str) -> list[str]:
        return list(self._parents.get(tag, ()))

    def call(self, definition: MacroDefinition, invocation, output, ctx) -> Optional[ErrorSignal]:
        """Invoke a handler; a crash becomes an INTERNAL ErrorSignal."""
        try:
            return definition.handler(invocation, output, ctx)
        except Exception as exc:
            logger.exception("Macro <<%s>> raised an error", definition.name)
            return invocation.error(f"cannot execute macro <<{definition.name}>>: {exc}", ErrorKind.INTERNAL)

    # ---------------------------------------------------------- introspection

    def registered_names(self) -> list[str]:
        return sorted(self._definitions.keys())

    def definitions(self) -> list[MacroDefinition]:
        return [self._definitions[n] for n in self.registered_names()]


# Singleton shared across the application
macro_registry = MacroRegistry()
