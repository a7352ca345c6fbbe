"""The single focused item and its address arithmetic."""

from __future__ import annotations

import logging
from dataclasses import replace

from vz_common.errors import ResolutionError
from vz_core.items import (
    AddressedItem,
    Item,
    Pointer,
    has_address,
    to_pointer,
)
from vz_core.values import U64_MAX, format_address

logger = logging.getLogger(__name__)


class Navigator:
    """Holds zero or one focused item.

    Items are immutable, so holding one never couples the navigator to the
    store it was selected from.
    """

    def __init__(self) -> None:
        self._focus: Item | None = None

    @property
    def focus(self) -> Item | None:
        return self._focus

    def select(self, item: Item) -> None:
        self._focus = item

    def deselect(self) -> None:
        self._focus = None

    def goto(self, address: int) -> Pointer:
        if not 0 <= address <= U64_MAX:
            raise ResolutionError(f"Address out of range: {address:#x}")
        self._focus = Pointer(address=address)
        return self._focus

    def offset(self, delta: int, sign: int = 1) -> Pointer:
        """Shift the focus by ``sign * delta`` bytes.

        A non-pointer focus is first turned into a Pointer at its address; its
        name and other typed identity are dropped.
        """
        if self._focus is None:
            raise ResolutionError("Nothing is selected")
        if not has_address(self._focus):
            raise ResolutionError(
                f"Selected {self._focus.kind} '{self._focus.label}' has no address"
            )
        pointer = to_pointer(self._focus)
        target = pointer.address + (delta if sign >= 0 else -delta)
        if not 0 <= target <= U64_MAX:
            raise ResolutionError(
                f"Offset moves {format_address(pointer.address)} outside the address space"
            )
        self._focus = replace(pointer, address=target)
        logger.debug("Navigator moved to %s", format_address(target))
        return self._focus

    def add(self, delta: int) -> Pointer:
        return self.offset(delta, 1)

    def sub(self, delta: int) -> Pointer:
        return self.offset(delta, -1)

    def describe(self) -> str | None:
        """Prompt-style description of the focus, None when empty."""
        item = self._focus
        if item is None:
            return None
        if isinstance(item, Pointer):
            return f"{item.kind}:{format_address(item.address)}"
        if isinstance(item, AddressedItem) and item.label != format_address(item.address):
            return f"{item.kind}:{item.label} @{format_address(item.address)}"
        return f"{item.kind}:{item.label}"
