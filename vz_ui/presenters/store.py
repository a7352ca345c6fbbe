"""Paged store listings."""

from __future__ import annotations

from vz_core.store import Store
from vz_ui.presenters.items import ITEM_COLUMNS, item_row
from vz_ui.tui.system.models import TableModel


def store_header(store: Store, page: int | None = None) -> str:
    """``Name start-end [count] (current/total)``; start is 0 for an empty store."""
    number = store.current_page if page is None else store.clamp_page(page)
    start, end = store.page_bounds(number)
    first = start + 1 if len(store) else 0
    return f"{store.name} {first}-{end} [{len(store)}] ({number}/{store.total_pages})"


def build_store_table(store: Store, page: int | None = None) -> TableModel:
    start, end = store.page_bounds(page)
    width = len(str(max(len(store) - 1, 0)))
    rows = [item_row(index, store.items[index], width) for index in range(start, end)]
    return TableModel(title=store_header(store, page), columns=list(ITEM_COLUMNS), rows=rows)
