"""Value types understood by the backend, plus number and value literals."""

from __future__ import annotations

import struct
from enum import Enum
from typing import Any

from vz_common.errors import ParseError

U64_MAX = (1 << 64) - 1


class ValueType(str, Enum):
    """Closed set of memory value types; the value is the canonical name."""

    BYTE = "byte"
    UBYTE = "ubyte"
    SHORT = "short"
    USHORT = "ushort"
    INT = "int"
    UINT = "uint"
    LONG = "long"
    ULONG = "ulong"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"
    STRING = "string"
    BYTES = "bytes"
    POINTER = "pointer"
    VOID = "void"

    def __str__(self) -> str:
        return self.value

    @property
    def aliases(self) -> tuple[str, ...]:
        return _ALIASES[self]

    @property
    def width(self) -> int | None:
        """Byte width of fixed-size types, None for variable-size ones."""
        return _WIDTHS.get(self)


_ALIASES: dict[ValueType, tuple[str, ...]] = {
    ValueType.BYTE: ("b", "int8", "i8"),
    ValueType.UBYTE: ("ub", "uint8", "u8"),
    ValueType.SHORT: ("s", "int16", "i16"),
    ValueType.USHORT: ("us", "uint16", "u16"),
    ValueType.INT: ("i", "int32", "i32"),
    ValueType.UINT: ("ui", "uint32", "u32"),
    ValueType.LONG: ("l", "int64", "i64"),
    ValueType.ULONG: ("ul", "uint64", "u64"),
    ValueType.FLOAT: ("f", "float32", "f32"),
    ValueType.DOUBLE: ("d", "float64", "f64"),
    ValueType.BOOL: ("boolean",),
    ValueType.STRING: ("str", "utf8"),
    ValueType.BYTES: ("array", "arr"),
    ValueType.POINTER: ("ptr", "p"),
    ValueType.VOID: (),
}

_WIDTHS: dict[ValueType, int] = {
    ValueType.BYTE: 1,
    ValueType.UBYTE: 1,
    ValueType.SHORT: 2,
    ValueType.USHORT: 2,
    ValueType.INT: 4,
    ValueType.UINT: 4,
    ValueType.LONG: 8,
    ValueType.ULONG: 8,
    ValueType.FLOAT: 4,
    ValueType.DOUBLE: 8,
    ValueType.BOOL: 1,
    ValueType.POINTER: 8,
}

_LOOKUP: dict[str, ValueType] = {}
for _vt in ValueType:
    _LOOKUP[_vt.value] = _vt
    for _alias in _ALIASES[_vt]:
        _LOOKUP[_alias] = _vt

# (signed, bits) for the integer types
_INT_RANGES: dict[ValueType, tuple[bool, int]] = {
    ValueType.BYTE: (True, 8),
    ValueType.UBYTE: (False, 8),
    ValueType.SHORT: (True, 16),
    ValueType.USHORT: (False, 16),
    ValueType.INT: (True, 32),
    ValueType.UINT: (False, 32),
    ValueType.LONG: (True, 64),
    ValueType.ULONG: (False, 64),
    ValueType.POINTER: (False, 64),
}


def parse_value_type(name: str) -> ValueType:
    """Resolve a short or long type name, case-insensitively."""
    try:
        return _LOOKUP[name.strip().lower()]
    except KeyError:
        raise ParseError(
            f"Unknown value type: {name}", context={"value_type": name}
        ) from None


def parse_number(text: str) -> int:
    """Parse an unsigned 64-bit number written in hex (``0x``) or decimal."""
    raw = text.strip()
    try:
        if raw[:2].lower() == "0x":
            if not raw[2:]:
                raise ValueError(raw)
            value = int(raw[2:], 16)
        elif raw.isdigit() and raw.isascii():
            value = int(raw, 10)
        else:
            raise ValueError(raw)
    except ValueError:
        raise ParseError(f"Invalid number: {text}", context={"text": text}) from None
    if value > U64_MAX:
        raise ParseError(f"Number out of range: {text}", context={"text": text})
    return value


def parse_count(text: str, what: str = "number") -> int:
    """Parse a non-negative decimal count such as an index or page number."""
    raw = text.strip()
    if not (raw.isdigit() and raw.isascii()):
        raise ParseError(f"Invalid {what}: {text}", context={"text": text})
    return int(raw)


def format_address(address: int) -> str:
    """Render an address zero-padded to 16, 32 or 64 bits."""
    if address <= 0xFFFF:
        return f"{address:#06x}"
    if address <= 0xFFFFFFFF:
        return f"{address:#010x}"
    return f"{address:#018x}"


def _parse_int_literal(text: str) -> int:
    raw = text.strip()
    negative = raw.startswith("-")
    digits = raw[1:] if negative or raw.startswith("+") else raw
    try:
        if digits[:2].lower() == "0x":
            value = int(digits[2:], 16)
        else:
            value = int(digits, 10)
    except ValueError:
        raise ParseError(f"Invalid integer value: {text}") from None
    return -value if negative else value


def parse_write_value(text: str, value_type: ValueType) -> Any:
    """Convert operator text into a value the backend can write."""
    if value_type in _INT_RANGES:
        signed, bits = _INT_RANGES[value_type]
        value = _parse_int_literal(text)
        low = -(1 << (bits - 1)) if signed else 0
        high = (1 << (bits - 1)) - 1 if signed else (1 << bits) - 1
        if not low <= value <= high:
            raise ParseError(
                f"Invalid {value_type} value: {text} (expected {low}..{high})",
                context={"value": text, "value_type": value_type.value},
            )
        return value
    if value_type in (ValueType.FLOAT, ValueType.DOUBLE):
        try:
            return float(text)
        except ValueError:
            raise ParseError(f"Invalid {value_type} value: {text}") from None
    if value_type is ValueType.BOOL:
        lowered = text.strip().lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
        raise ParseError("Invalid boolean value, use true/false or 1/0")
    if value_type is ValueType.STRING:
        if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
            return text[1:-1]
        return text
    if value_type is ValueType.BYTES:
        inner = text.strip()
        if inner.startswith("[") and inner.endswith("]"):
            inner = inner[1:-1]
        try:
            data = bytes(int(tok, 16) for tok in inner.split())
        except ValueError:
            raise ParseError(f"Invalid hex byte in: {text}") from None
        if not data:
            raise ParseError("No bytes to write")
        return data
    raise ParseError(f"Cannot write {value_type} type")


def format_read_value(value: Any, value_type: ValueType, length: int | None = None) -> str:
    """Render a value returned by the backend for display."""
    if value_type in (ValueType.BYTE, ValueType.UBYTE):
        return f"{value} ({int(value) & 0xFF:#04x})"
    if value_type in (ValueType.SHORT, ValueType.USHORT):
        return f"{value} ({int(value) & 0xFFFF:#06x})"
    if value_type in (ValueType.INT, ValueType.UINT):
        return f"{value} ({int(value) & 0xFFFFFFFF:#010x})"
    if value_type in (ValueType.LONG, ValueType.ULONG):
        return f"{value} ({int(value) & U64_MAX:#018x})"
    if value_type is ValueType.FLOAT:
        # Round-trip through float32 so the display matches the stored width.
        return repr(struct.unpack("<f", struct.pack("<f", float(value)))[0])
    if value_type is ValueType.DOUBLE:
        return repr(float(value))
    if value_type is ValueType.BOOL:
        return "true" if int(value) != 0 else "false"
    if value_type is ValueType.STRING:
        return f'"{value}"'
    if value_type is ValueType.BYTES:
        data = bytes(value)
        size = len(data) if length is None else length
        return f"[{data.hex(' ')}] ({size})"
    if value_type is ValueType.POINTER:
        return f"{int(value) & U64_MAX:#018x}"
    raise ParseError(f"Cannot read {value_type} type")
