"""Inspection result records collected into stores and focused by the navigator.

Every record is an immutable dataclass so a store, the navigator and the
renderers can share instances freely; "mutation" always builds a new record
through `dataclasses.replace`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar

from vz_common.errors import ResolutionError
from vz_core.values import ValueType, format_address

POINTER_WIDTH = 8


class ItemKind(str, Enum):
    POINTER = "pointer"
    MODULE = "module"
    RANGE = "range"
    FUNCTION = "function"
    VARIABLE = "variable"
    JAVA_CLASS = "java_class"
    JAVA_METHOD = "java_method"
    OBJC_CLASS = "objc_class"
    OBJC_METHOD = "objc_method"
    THREAD = "thread"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, kw_only=True)
class Item:
    """Common base: a kind tag (per class) and the saved flag."""

    kind: ClassVar[ItemKind]
    saved: bool = False

    @property
    def label(self) -> str:
        """Short human label used in listings and the prompt."""
        return str(self.kind)


@dataclass(frozen=True, kw_only=True)
class AddressedItem(Item):
    """Items that point somewhere in the target's address space."""

    address: int

    @property
    def label(self) -> str:
        return format_address(self.address)


@dataclass(frozen=True, kw_only=True)
class Pointer(AddressedItem):
    kind: ClassVar[ItemKind] = ItemKind.POINTER

    size: int = POINTER_WIDTH
    value_type: ValueType = ValueType.POINTER


@dataclass(frozen=True, kw_only=True)
class Module(AddressedItem):
    kind: ClassVar[ItemKind] = ItemKind.MODULE

    name: str
    size: int

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True, kw_only=True)
class Range(AddressedItem):
    kind: ClassVar[ItemKind] = ItemKind.RANGE

    size: int
    protection: str


@dataclass(frozen=True, kw_only=True)
class Function(AddressedItem):
    kind: ClassVar[ItemKind] = ItemKind.FUNCTION

    name: str
    module: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True, kw_only=True)
class Variable(AddressedItem):
    kind: ClassVar[ItemKind] = ItemKind.VARIABLE

    name: str
    module: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True, kw_only=True)
class JavaClass(Item):
    kind: ClassVar[ItemKind] = ItemKind.JAVA_CLASS

    name: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True, kw_only=True)
class JavaMethod(Item):
    kind: ClassVar[ItemKind] = ItemKind.JAVA_METHOD

    class_name: str
    name: str
    args: tuple[str, ...] = field(default_factory=tuple)
    return_type: str = "void"

    @property
    def label(self) -> str:
        return f"{self.class_name}.{self.name}"


@dataclass(frozen=True, kw_only=True)
class ObjCClass(Item):
    kind: ClassVar[ItemKind] = ItemKind.OBJC_CLASS

    name: str

    @property
    def label(self) -> str:
        return self.name


@dataclass(frozen=True, kw_only=True)
class ObjCMethod(Item):
    kind: ClassVar[ItemKind] = ItemKind.OBJC_METHOD

    class_name: str
    name: str

    @property
    def label(self) -> str:
        return f"{self.class_name} {self.name}"


@dataclass(frozen=True, kw_only=True)
class Thread(Item):
    kind: ClassVar[ItemKind] = ItemKind.THREAD

    id: int
    state: str = ""

    @property
    def label(self) -> str:
        return str(self.id)


def has_address(item: Item) -> bool:
    return isinstance(item, AddressedItem)


def address_of(item: Item) -> int:
    """Return the item's address or raise when the kind has none."""
    if isinstance(item, AddressedItem):
        return item.address
    raise ResolutionError(
        f"{item.kind} '{item.label}' has no address", context={"kind": item.kind.value}
    )


def to_pointer(item: Item) -> Pointer:
    """Coerce an addressed item into a pointer-width Pointer at its address.

    The result keeps the address and the saved flag; name, module and other
    typed identity are dropped.
    """
    if isinstance(item, Pointer):
        return item
    address = address_of(item)
    return Pointer(address=address, saved=item.saved)


def mark_saved(item: Item) -> Item:
    return replace(item, saved=True)


def name_of(item: Item) -> str | None:
    return getattr(item, "name", None)
