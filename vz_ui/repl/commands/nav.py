"""Focus commands: select, deselect and address arithmetic."""

from __future__ import annotations

from typing import Sequence

from vz_common.errors import ResolutionError
from vz_core.values import parse_number
from vz_ui.presenters.items import describe
from vz_ui.repl.command import Command, CommandContext, required


def select_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    items = ctx.state.resolve(args[0])
    if len(items) != 1:
        raise ResolutionError(
            f"Multiple data found for selector: {args[0]} ({len(items)} items)",
            context={"selector": args[0], "count": len(items)},
        )
    ctx.state.navigator.select(items[0])
    ctx.ui.present.success(f"Selected {describe(items[0])}")
    return True


def deselect_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    ctx.state.navigator.deselect()
    return True


def _offset(ctx: CommandContext, text: str, sign: int) -> bool:
    delta = parse_number(text)
    pointer = ctx.state.navigator.offset(delta, sign)
    ctx.ui.present.info(describe(pointer))
    return True


def add_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    return _offset(ctx, args[0], 1)


def sub_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    return _offset(ctx, args[0], -1)


def goto_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    pointer = ctx.state.navigator.goto(parse_number(args[0]))
    ctx.ui.present.info(describe(pointer))
    return True


COMMANDS = (
    Command(
        "select",
        "Select data",
        handler=select_command,
        args=(required("selector", "Selector, e.g. 3, lib:0 or field:2"),),
        aliases=("sel", "sl"),
    ),
    Command("deselect", "Deselect data", handler=deselect_command, aliases=("desel", "dsl")),
    Command(
        "add",
        "Add offset to selected data",
        handler=add_command,
        args=(required("offset", "Offset (hex or decimal)"),),
        aliases=("+",),
    ),
    Command(
        "sub",
        "Subtract offset from selected data",
        handler=sub_command,
        args=(required("offset", "Offset (hex or decimal)"),),
        aliases=("-",),
    ),
    Command(
        "goto",
        "Go to address",
        handler=goto_command,
        args=(required("address", "Address (hex or decimal)"),),
        aliases=("go", ":"),
    ),
)
