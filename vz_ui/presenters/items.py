"""One-line renderings of items for listings and the prompt."""

from __future__ import annotations

from vz_core.items import (
    AddressedItem,
    Function,
    Item,
    JavaMethod,
    Module,
    Pointer,
    Range,
    Thread,
    Variable,
)
from vz_core.values import format_address
from vz_ui.tui.core import theme

ITEM_COLUMNS = ["#", "Kind", "Name", "Address", "Details"]


def item_name(item: Item) -> str:
    if isinstance(item, (Pointer, Range)):
        return ""
    return item.label


def item_address(item: Item) -> str:
    if isinstance(item, AddressedItem):
        return format_address(item.address)
    return ""


def item_details(item: Item) -> str:
    if isinstance(item, Pointer):
        return f"[{item.value_type}] size={item.size}"
    if isinstance(item, Module):
        return f"size={item.size:#x}"
    if isinstance(item, Range):
        return f"{item.protection} size={item.size:#x}"
    if isinstance(item, (Function, Variable)):
        return item.module
    if isinstance(item, JavaMethod):
        return f"({', '.join(item.args)}) -> {item.return_type}"
    if isinstance(item, Thread):
        return item.state
    return ""


def item_row(index: int, item: Item, width: int = 1) -> list[str]:
    marker = f" {theme.SAVED_MARK}" if item.saved else ""
    return [
        f"{index:>{width}}{marker}",
        str(item.kind),
        item_name(item),
        item_address(item),
        item_details(item),
    ]


def describe(item: Item) -> str:
    """Single line used in success messages, e.g. ``module libc.so @0x7f00``."""
    parts = [str(item.kind)]
    name = item_name(item)
    if name:
        parts.append(name)
    if isinstance(item, AddressedItem):
        parts.append(f"@{format_address(item.address)}")
    return " ".join(parts)
