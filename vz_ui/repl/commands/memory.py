"""read, write and view: memory access at a resolved address."""

from __future__ import annotations

import logging
from typing import Sequence

from vz_common.errors import ParseError, ResolutionError, VzError
from vz_core.items import address_of
from vz_core.values import ValueType, parse_count, parse_number, parse_value_type, parse_write_value
from vz_ui.presenters.memory import build_hexdump, read_line, write_line
from vz_ui.repl.command import Command, CommandContext, optional, required

logger = logging.getLogger(__name__)

DEFAULT_TYPE = ValueType.BYTE


def resolve_address(ctx: CommandContext, target: str | None) -> int:
    """Address of a selector, a literal number, or the focus when ``target`` is None."""
    if target is None:
        focus = ctx.state.navigator.focus
        if focus is None:
            raise ResolutionError("No address given and nothing is selected")
        address = address_of(focus)
    else:
        try:
            items = ctx.state.resolve(target)
        except VzError as exc:
            logger.debug("'%s' is not a selector (%s), trying a literal address", target, exc)
            try:
                address = parse_number(target)
            except ParseError:
                raise ParseError(f"Invalid address: {target}", context={"target": target}) from exc
        else:
            address = address_of(items[0])
    if address == 0:
        raise ResolutionError("Address cannot be zero")
    return address


def read_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    address = resolve_address(ctx, args[0] if args else None)
    value_type = parse_value_type(args[1]) if len(args) > 1 else DEFAULT_TYPE
    length = parse_count(args[2], "length") if len(args) > 2 else ctx.settings.read_length
    if value_type is ValueType.VOID:
        raise ParseError("Cannot read void type")
    read_length = length if value_type is ValueType.BYTES else None
    value = ctx.backend.read(address, value_type, read_length)
    ctx.ui.present.success(read_line(address, value_type, value, read_length))
    return True


def write_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    address = resolve_address(ctx, args[0])
    value_type = parse_value_type(args[2]) if len(args) > 2 else DEFAULT_TYPE
    value = parse_write_value(args[1], value_type)
    ctx.backend.write(address, value_type, value)
    ctx.ui.present.success(write_line(address, value_type, args[1]))
    return True


def view_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    address = resolve_address(ctx, args[0] if args else None)
    size = parse_count(args[1], "size") if len(args) > 1 else ctx.settings.view_size
    if size == 0:
        raise ParseError("Size must be at least 1")
    data = ctx.backend.read(address, ValueType.BYTES, size)
    ctx.ui.tables.show(build_hexdump(address, bytes(data)))
    return True


_TYPES_HELP = "Data type (byte, short, int, long, float, double, bool, string, bytes, pointer)"
_TARGET_HELP = "Address (0x100), store selector (field:5, lib:3), or selected data"

COMMANDS = (
    Command(
        "read",
        "Read data from memory",
        handler=read_command,
        args=(
            optional("address", _TARGET_HELP),
            optional("type", _TYPES_HELP),
            optional("length", "Length for bytes type"),
        ),
        aliases=("r",),
    ),
    Command(
        "write",
        "Write data to memory",
        handler=write_command,
        args=(
            required("address", _TARGET_HELP),
            required("value", "Value to write"),
            optional("type", _TYPES_HELP),
        ),
        aliases=("w",),
    ),
    Command(
        "view",
        "Hex dump memory",
        handler=view_command,
        args=(
            optional("address", _TARGET_HELP),
            optional("size", "Number of bytes (default: 256)"),
        ),
        aliases=("v",),
    ),
)
