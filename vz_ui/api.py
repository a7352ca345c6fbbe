"""Stable UI API surface."""

from __future__ import annotations

from vz_ui.cli import app, ctx_store, main
from vz_ui.repl.command import ArgSpec, Command, CommandContext, CommandRegistry, SubCommand
from vz_ui.repl.commands import build_registry
from vz_ui.repl.dispatcher import Dispatcher, tokenize
from vz_ui.repl.loop import SessionLoop
from vz_ui.tui.system.headless import HeadlessUI
from vz_ui.tui.system.models import TableModel
from vz_ui.wiring.dependencies import build_dispatcher

__all__ = [
    "app",
    "main",
    "ctx_store",
    "ArgSpec",
    "Command",
    "CommandContext",
    "CommandRegistry",
    "Dispatcher",
    "HeadlessUI",
    "SessionLoop",
    "SubCommand",
    "TableModel",
    "build_dispatcher",
    "build_registry",
    "tokenize",
]
