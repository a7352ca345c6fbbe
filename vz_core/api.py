"""Public API surface for vz_core."""

from vz_core import filters, selector
from vz_core.items import (
    AddressedItem,
    Function,
    Item,
    ItemKind,
    JavaClass,
    JavaMethod,
    Module,
    ObjCClass,
    ObjCMethod,
    Pointer,
    Range,
    Thread,
    Variable,
    address_of,
    has_address,
    mark_saved,
    to_pointer,
)
from vz_core.navigator import Navigator
from vz_core.session import SessionState
from vz_core.store import Store
from vz_core.values import ValueType, format_address, parse_number, parse_value_type

__all__ = [
    "AddressedItem",
    "Function",
    "Item",
    "ItemKind",
    "JavaClass",
    "JavaMethod",
    "Module",
    "Navigator",
    "ObjCClass",
    "ObjCMethod",
    "Pointer",
    "Range",
    "SessionState",
    "Store",
    "Thread",
    "ValueType",
    "Variable",
    "address_of",
    "filters",
    "format_address",
    "has_address",
    "mark_saved",
    "parse_number",
    "parse_value_type",
    "selector",
    "to_pointer",
]
