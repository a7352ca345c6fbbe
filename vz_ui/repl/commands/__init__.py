"""Built-in command table."""

from __future__ import annotations

from vz_ui.repl.command import CommandRegistry
from vz_ui.repl.commands import core, listing, memory, nav, store


def build_registry() -> CommandRegistry:
    registry = CommandRegistry()
    for module in (core, nav, store, listing, memory):
        registry.register(*module.COMMANDS)
    return registry


__all__ = ["build_registry"]
