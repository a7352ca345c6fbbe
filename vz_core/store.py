"""Ordered, paginated collections of inspection items."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from vz_common.errors import ParseError, ResolutionError
from vz_core import filters
from vz_core.items import AddressedItem, Item, Thread, name_of

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50

SORT_KEYS = {
    "name": "name",
    "addr": "addr",
    "address": "addr",
}


def parse_selection(selector: str) -> list[int] | None:
    """Parse ``all`` (returns None) or comma separated indices and ranges.

    The result is sorted and de-duplicated.
    """
    text = selector.strip()
    if text == "all":
        return None
    indices: set[int] = set()
    for part in (piece.strip() for piece in text.split(",")):
        if not part:
            continue
        if part.isdigit() and part.isascii():
            indices.add(int(part))
            continue
        bounds = [bound.strip() for bound in part.split("-")]
        if len(bounds) != 2 or not all(b.isdigit() and b.isascii() for b in bounds):
            raise ParseError(f"Invalid selection: {part}", context={"selector": selector})
        start, end = int(bounds[0]), int(bounds[1])
        if start > end:
            raise ParseError(f"Invalid range: {part}", context={"selector": selector})
        indices.update(range(start, end + 1))
    return sorted(indices)


def _name_key(item: Item) -> tuple:
    name = name_of(item)
    if name is not None:
        return (0, name, 0)
    if isinstance(item, AddressedItem):
        return (1, "", item.address)
    if isinstance(item, Thread):
        return (2, "", item.id)
    return (3, item.label, 0)


def _address_key(item: Item) -> tuple:
    if isinstance(item, AddressedItem):
        return (0, item.address, "")
    name = name_of(item)
    if name is not None:
        return (1, 0, name)
    if isinstance(item, Thread):
        return (2, item.id, "")
    return (3, 0, item.label)


@dataclass
class Store:
    """A named item sequence with a page cursor.

    ``cursor`` is the index of the first item on the current page; it is
    always ``0`` or a multiple of ``page_size`` below ``len(items)``.
    """

    name: str
    page_size: int = DEFAULT_PAGE_SIZE
    items: list[Item] = field(default_factory=list)
    cursor: int = 0

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be positive")

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    # --- pagination -------------------------------------------------------

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(len(self.items) / self.page_size))

    @property
    def current_page(self) -> int:
        return self.cursor // self.page_size + 1

    def page_info(self) -> tuple[int, int]:
        """Return ``(current, total)``; an empty store reports ``(1, 1)``."""
        return self.current_page, self.total_pages

    def clamp_page(self, page: int) -> int:
        return min(max(page, 1), self.total_pages)

    def _snap_cursor(self) -> None:
        last_page_start = (self.total_pages - 1) * self.page_size
        self.cursor = (min(self.cursor, last_page_start) // self.page_size) * self.page_size

    def page_bounds(self, page: int | None = None) -> tuple[int, int]:
        """Return the ``[start, end)`` index range of a 1-based page."""
        number = self.current_page if page is None else self.clamp_page(page)
        start = (number - 1) * self.page_size
        return start, min(start + self.page_size, len(self.items))

    def page(self, page: int | None = None) -> list[Item]:
        start, end = self.page_bounds(page)
        return self.items[start:end]

    def next(self, count: int = 1) -> None:
        target = self.clamp_page(self.current_page + max(count, 0))
        self.cursor = (target - 1) * self.page_size

    def prev(self, count: int = 1) -> None:
        target = self.clamp_page(self.current_page - max(count, 0))
        self.cursor = (target - 1) * self.page_size

    # --- mutation ---------------------------------------------------------

    def append(self, items: Iterable[Item]) -> None:
        self.items.extend(items)

    def replace(self, items: Iterable[Item]) -> None:
        """Clear and bulk-append, as backend listings do."""
        self.clear()
        self.append(items)
        logger.info("Store %s repopulated with %d items", self.name, len(self.items))

    def remove(self, index: int, count: int = 1) -> int:
        """Delete up to ``count`` items from ``index``; returns how many went."""
        if index < 0 or index >= len(self.items) or count <= 0:
            return 0
        end = min(index + count, len(self.items))
        del self.items[index:end]
        self._snap_cursor()
        return end - index

    def move(self, source: int, target: int) -> bool:
        if source < 0 or source >= len(self.items):
            return False
        item = self.items.pop(source)
        self.items.insert(min(max(target, 0), len(self.items)), item)
        return True

    def clear(self) -> None:
        self.items.clear()
        self.cursor = 0

    def sort(self, key: str | None = None) -> None:
        """Stable sort by name (default) or by address (``addr``)."""
        mode = SORT_KEYS.get((key or "name").lower())
        if mode is None:
            raise ParseError(f"Unknown sort key: {key}", context={"key": key})
        self.items.sort(key=_address_key if mode == "addr" else _name_key)
        self._snap_cursor()

    def filter(self, segments: Sequence[filters.Segment]) -> int:
        """Keep only matching items; returns the number removed."""
        if not segments:
            return 0
        before = len(self.items)
        self.items = filters.apply(self.items, segments)
        self._snap_cursor()
        return before - len(self.items)

    # --- selection --------------------------------------------------------

    def get(self, index: int) -> Item:
        if 0 <= index < len(self.items):
            return self.items[index]
        raise ResolutionError(f"Index {index} out of bounds", context={"store": self.name})

    def resolve_selection(self, selector: str) -> list[Item]:
        """Resolve ``all`` or indices/ranges; any out-of-range index fails the lot."""
        if not self.items:
            raise ResolutionError(f"{self.name} is empty", context={"store": self.name})
        indices = parse_selection(selector)
        if indices is None:
            return list(self.items)
        return [self.get(index) for index in indices]
