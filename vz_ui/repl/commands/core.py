"""help and exit."""

from __future__ import annotations

from typing import Sequence

from vz_common.errors import ResolutionError
from vz_ui.presenters.help import build_help_table, command_usage
from vz_ui.repl.command import Command, CommandContext, optional


def help_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    if not args:
        ctx.ui.tables.show(build_help_table(ctx.registry))
        return True
    command = ctx.registry.find(args[0])
    if command is None:
        raise ResolutionError(f"Unknown command: {args[0]}", context={"command": args[0]})
    ctx.ui.present.panel(command_usage(command), title=command.name)
    return True


def exit_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    ctx.ui.present.warning("Exiting...")
    return False


COMMANDS = (
    Command(
        "help",
        "Show this help message",
        handler=help_command,
        args=(optional("command", "Command to show help for"),),
        aliases=("h",),
    ),
    Command("exit", "Exit the session", handler=exit_command, aliases=("quit", "q")),
)
