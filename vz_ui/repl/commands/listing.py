"""list group: enumerate the target and repopulate Field."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from vz_common.errors import ResolutionError, VzError
from vz_core import filters
from vz_core.items import Item, JavaClass, Module, ObjCClass
from vz_backend.protocol import RecordKind
from vz_backend.records import decode_records
from vz_ui.repl.command import Command, CommandContext, SubCommand, optional, required
from vz_ui.repl.commands.store import show_store

logger = logging.getLogger(__name__)

ANDROID = "Android"


def _filter_spec(text: str | None) -> list[Any]:
    return filters.to_backend(filters.parse(text))


def _populate(ctx: CommandContext, kind: RecordKind, items: list[Item]) -> bool:
    ctx.state.field.replace(items)
    logger.info("Listed %d %s records", len(items), kind.value)
    show_store(ctx, ctx.state.field, 1)
    return True


def _enumerate(ctx: CommandContext, kind: RecordKind, filter_text: str | None, **kwargs: Any) -> bool:
    spec = _filter_spec(filter_text)
    records = ctx.backend.enumerate(kind, spec, **kwargs)
    return _populate(ctx, kind, decode_records(kind, records))


def _module_and_filter(ctx: CommandContext, args: Sequence[str]) -> tuple[Module, str | None]:
    """Resolve ``[module] [filter]``, falling back to the focused module.

    When the first token does not resolve, the focus must be a Module and
    that token becomes the filter.
    """
    try:
        items = ctx.state.resolve(args[0]) if args else None
    except VzError as exc:
        items = None
        reason = str(exc)
    else:
        reason = "no module selector given"
    if items:
        if not isinstance(items[0], Module):
            raise ResolutionError("Selected data is not a module")
        return items[0], args[1] if len(args) > 1 else None
    focus = ctx.state.navigator.focus
    if focus is None:
        raise ResolutionError(f"Selector error: {reason}. Navigator has no data.")
    if not isinstance(focus, Module):
        raise ResolutionError(f"Selector error: {reason}. Navigator data is not a module.")
    return focus, args[0] if args else None


def modules_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    return _enumerate(ctx, RecordKind.MODULE, args[0] if args else None)


def ranges_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    protection = args[0] if args else "---"
    return _enumerate(
        ctx, RecordKind.RANGE, args[1] if len(args) > 1 else None, protection=protection
    )


def functions_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    module, filter_text = _module_and_filter(ctx, args)
    return _enumerate(ctx, RecordKind.FUNCTION, filter_text, module_address=module.address)


def variables_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    module, filter_text = _module_and_filter(ctx, args)
    return _enumerate(ctx, RecordKind.VARIABLE, filter_text, module_address=module.address)


def _is_android(ctx: CommandContext) -> bool:
    platform, _arch = ctx.backend.environment()
    return platform == ANDROID


def classes_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    kind = RecordKind.JAVA_CLASS if _is_android(ctx) else RecordKind.OBJC_CLASS
    return _enumerate(ctx, kind, args[0] if args else None)


def _class_name(ctx: CommandContext, text: str) -> str:
    try:
        items = ctx.state.resolve(text)
    except VzError:
        return text
    if len(items) == 1 and isinstance(items[0], (JavaClass, ObjCClass)):
        return items[0].name
    return text


def methods_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    kind = RecordKind.JAVA_METHOD if _is_android(ctx) else RecordKind.OBJC_METHOD
    class_name = _class_name(ctx, args[0])
    return _enumerate(ctx, kind, args[1] if len(args) > 1 else None, class_name=class_name)


def threads_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    return _enumerate(ctx, RecordKind.THREAD, args[0] if args else None)


COMMANDS = (
    Command(
        "list",
        "List data from the target into Field",
        aliases=("ls",),
        subcommands=(
            SubCommand(
                "modules",
                "List all modules",
                modules_command,
                args=(optional("filter", "Filter modules"),),
                aliases=("mods", "md", "m"),
            ),
            SubCommand(
                "ranges",
                "List memory ranges",
                ranges_command,
                args=(
                    optional("protect", "Minimum protection (default: ---)"),
                    optional("filter", "Filter ranges"),
                ),
                aliases=("rngs", "rng", "r"),
            ),
            SubCommand(
                "functions",
                "List exported functions of a module",
                functions_command,
                args=(
                    optional("module", "Module selector (default: selected module)"),
                    optional("filter", "Filter functions"),
                ),
                aliases=("funcs", "fns", "fn", "f"),
            ),
            SubCommand(
                "variables",
                "List exported variables of a module",
                variables_command,
                args=(
                    optional("module", "Module selector (default: selected module)"),
                    optional("filter", "Filter variables"),
                ),
                aliases=("vars", "vrs", "vr", "v"),
            ),
            SubCommand(
                "classes",
                "List loaded Java or ObjC classes",
                classes_command,
                args=(optional("filter", "Filter classes"),),
                aliases=("cls", "c"),
            ),
            SubCommand(
                "methods",
                "List methods of a class",
                methods_command,
                args=(
                    required("class", "Class name or selector"),
                    optional("filter", "Filter methods"),
                ),
                aliases=("mth",),
            ),
            SubCommand(
                "threads",
                "List threads",
                threads_command,
                args=(optional("filter", "Filter threads"),),
                aliases=("th",),
            ),
        ),
    ),
)
