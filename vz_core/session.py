"""Mutable state shared by every command of one inspection session."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dataclass_field

from vz_core import selector
from vz_core.items import Item
from vz_core.navigator import Navigator
from vz_core.store import DEFAULT_PAGE_SIZE, Store

FIELD_STORE = "Field"
LIB_STORE = "Lib"


@dataclass
class SessionState:
    """The two stores plus the navigator, owned by the session loop."""

    field: Store = dataclass_field(default_factory=lambda: Store(FIELD_STORE))
    lib: Store = dataclass_field(default_factory=lambda: Store(LIB_STORE))
    navigator: Navigator = dataclass_field(default_factory=Navigator)

    @classmethod
    def create(cls, page_size: int = DEFAULT_PAGE_SIZE) -> "SessionState":
        return cls(
            field=Store(FIELD_STORE, page_size=page_size),
            lib=Store(LIB_STORE, page_size=page_size),
        )

    def store(self, name: str) -> Store:
        """Look up a store by any of its selector prefixes."""
        lowered = name.lower()
        if lowered in selector.LIB_NAMES:
            return self.lib
        if lowered in selector.FIELD_NAMES:
            return self.field
        raise KeyError(name)

    def resolve(self, text: str) -> list[Item]:
        return selector.resolve(text, lib=self.lib, field=self.field)
