"""field and lib command groups.

Both groups share their subcommands; lib additionally has ``save``, which
copies Field items (or the focused item) into Lib.
"""

from __future__ import annotations

from typing import Sequence

from vz_common.errors import ParseError, ResolutionError
from vz_core import filters
from vz_core.items import mark_saved
from vz_core.store import Store
from vz_core.values import parse_count
from vz_ui.presenters.store import build_store_table
from vz_ui.repl.command import Command, CommandContext, Handler, SubCommand, optional, required


def show_store(ctx: CommandContext, store: Store, page: int | None = None) -> None:
    ctx.ui.tables.show(build_store_table(store, page))


def _pages(args: Sequence[str]) -> int:
    if not args:
        return 1
    return max(parse_count(args[0], "page count"), 1)


def _list(name: str) -> Handler:
    def handler(ctx: CommandContext, args: Sequence[str]) -> bool:
        store = ctx.state.store(name)
        page = parse_count(args[0], "page number") if args else None
        show_store(ctx, store, page)
        return True

    return handler


def _next(name: str) -> Handler:
    def handler(ctx: CommandContext, args: Sequence[str]) -> bool:
        store = ctx.state.store(name)
        store.next(_pages(args))
        show_store(ctx, store)
        return True

    return handler


def _prev(name: str) -> Handler:
    def handler(ctx: CommandContext, args: Sequence[str]) -> bool:
        store = ctx.state.store(name)
        store.prev(_pages(args))
        show_store(ctx, store)
        return True

    return handler


def _sort(name: str) -> Handler:
    def handler(ctx: CommandContext, args: Sequence[str]) -> bool:
        store = ctx.state.store(name)
        store.sort(args[0] if args else None)
        show_store(ctx, store)
        return True

    return handler


def _move(name: str) -> Handler:
    def handler(ctx: CommandContext, args: Sequence[str]) -> bool:
        store = ctx.state.store(name)
        source = parse_count(args[0], "from index")
        target = parse_count(args[1], "to index")
        if not store.move(source, target):
            raise ResolutionError(
                f"{store.name} move error: index {source} out of bounds",
                context={"store": store.name, "index": source},
            )
        show_store(ctx, store)
        return True

    return handler


def _remove(name: str) -> Handler:
    def handler(ctx: CommandContext, args: Sequence[str]) -> bool:
        store = ctx.state.store(name)
        index = parse_count(args[0], "index")
        count = parse_count(args[1], "count") if len(args) > 1 else 1
        if count == 0:
            raise ParseError("Count must be at least 1")
        if store.remove(index, count) == 0:
            raise ResolutionError(
                f"{store.name} remove error: index {index} out of bounds",
                context={"store": store.name, "index": index},
            )
        show_store(ctx, store)
        return True

    return handler


def _clear(name: str) -> Handler:
    def handler(ctx: CommandContext, args: Sequence[str]) -> bool:
        store = ctx.state.store(name)
        store.clear()
        show_store(ctx, store)
        return True

    return handler


def _filter(name: str) -> Handler:
    def handler(ctx: CommandContext, args: Sequence[str]) -> bool:
        store = ctx.state.store(name)
        segments = filters.parse(" ".join(args))
        removed = store.filter(segments)
        if segments:
            ctx.ui.present.info(f"Filtered out {removed} of {len(store) + removed} items")
        show_store(ctx, store)
        return True

    return handler


def save_command(ctx: CommandContext, args: Sequence[str]) -> bool:
    if args:
        items = ctx.state.field.resolve_selection(args[0])
    else:
        focus = ctx.state.navigator.focus
        if focus is None:
            raise ResolutionError("No selector provided and navigator is empty")
        items = [focus]
    if not items:
        raise ResolutionError("No data selected")
    ctx.state.lib.append(mark_saved(item) for item in items)
    show_store(ctx, ctx.state.lib)
    return True


def _group_subcommands(name: str, label: str) -> list[SubCommand]:
    return [
        SubCommand(
            "list",
            f"List {label} with optional page number",
            _list(name),
            args=(optional("page", "Page number"),),
            aliases=("ls", "l"),
        ),
        SubCommand(
            "next",
            f"Go to next page of {label}",
            _next(name),
            args=(optional("pages", "Pages to advance (default: 1)"),),
            aliases=("n",),
        ),
        SubCommand(
            "prev",
            f"Go to previous page of {label}",
            _prev(name),
            args=(optional("pages", "Pages to go back (default: 1)"),),
            aliases=("p",),
        ),
        SubCommand(
            "sort",
            f"Sort {label} by name",
            _sort(name),
            args=(optional("key", "Sort key [name|addr]"),),
            aliases=("s",),
        ),
        SubCommand(
            "move",
            f"Move an item within {label}",
            _move(name),
            args=(required("from", "Index of data"), required("to", "Index of data")),
            aliases=("mv",),
        ),
        SubCommand(
            "remove",
            f"Remove data from {label}",
            _remove(name),
            args=(
                required("index", "Index of data"),
                optional("count", "Count of data to remove (default: 1)"),
            ),
            aliases=("rm", "del", "delete"),
        ),
        SubCommand(
            "clear",
            f"Clear all {label}",
            _clear(name),
            aliases=("cls", "clr", "cl", "c"),
        ),
        SubCommand(
            "filter",
            f"Filter {label}, e.g. name:libc & size>0x1000",
            _filter(name),
            args=(required("expr", "Filter expression"),),
            aliases=("f",),
        ),
    ]


COMMANDS = (
    Command(
        "field",
        "Field manipulation commands.",
        handler=_list("field"),
        args=(optional("page", "Page number"),),
        aliases=("fld", "f"),
        subcommands=tuple(_group_subcommands("field", "fields")),
    ),
    Command(
        "lib",
        "Library manipulation commands.",
        handler=_list("lib"),
        args=(optional("page", "Page number"),),
        aliases=("lb", "l"),
        subcommands=(
            *_group_subcommands("lib", "libraries"),
            SubCommand(
                "save",
                "Save field data (or the selected data) to the library",
                save_command,
                args=(optional("selector", "Field selector, e.g. 0-3,7 or all"),),
                aliases=("sv",),
            ),
        ),
    ),
)
