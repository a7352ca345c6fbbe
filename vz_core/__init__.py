"""Navigation and query core: items, stores, filters, selectors, navigator."""

from vz_core.api import (
    Item,
    ItemKind,
    Navigator,
    SessionState,
    Store,
    ValueType,
)

__all__ = ["Item", "ItemKind", "Navigator", "SessionState", "Store", "ValueType"]
