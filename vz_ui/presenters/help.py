"""Help listings built from the command registry."""

from __future__ import annotations

from vz_ui.repl.command import Command, CommandRegistry
from vz_ui.tui.system.models import TableModel


def _aliases(aliases: tuple[str, ...]) -> str:
    return ", ".join(aliases)


def build_help_table(registry: CommandRegistry) -> TableModel:
    rows: list[list[str]] = []
    for command in registry:
        rows.append([command.usage, command.description, _aliases(command.aliases)])
        for sub in command.subcommands:
            rows.append([f"  {sub.usage}", sub.description, _aliases(sub.aliases)])
    return TableModel(
        title="Commands (type 'help <command>' for more information)",
        columns=["Command", "Description", "Aliases"],
        rows=rows,
    )


def command_usage(command: Command) -> str:
    lines = [f"Usage: {command.usage}", f"Description: {command.description}"]
    if command.args:
        lines.append("")
        lines.append("Arguments:")
        for arg in command.args:
            suffix = " (required)" if arg.required else ""
            lines.append(f"  {arg.name + ':':<15} {arg.description}{suffix}")
    if command.aliases:
        lines.append("")
        lines.append(f"Aliases: {_aliases(command.aliases)}")
    if command.subcommands:
        lines.append("")
        lines.append("Subcommands:")
        for sub in command.subcommands:
            aliases = f" ({_aliases(sub.aliases)})" if sub.aliases else ""
            lines.append(f"  {sub.usage:<24} {sub.description}{aliases}")
    return "\n".join(lines)
