"""Read/write result lines and hex dumps."""

from __future__ import annotations

from typing import Any

from vz_core.values import ValueType, format_address, format_read_value
from vz_ui.tui.system.models import TableModel

DUMP_WIDTH = 16


def read_line(address: int, value_type: ValueType, value: Any, length: int | None = None) -> str:
    return f"[READ] {address:#x} [{value_type}] = {format_read_value(value, value_type, length)}"


def write_line(address: int, value_type: ValueType, text: str) -> str:
    return f"[WRITE] {address:#x} [{value_type}] = {text}"


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte < 0x7F else "."


def build_hexdump(address: int, data: bytes) -> TableModel:
    rows: list[list[str]] = []
    for offset in range(0, len(data), DUMP_WIDTH):
        chunk = data[offset : offset + DUMP_WIDTH]
        rows.append(
            [
                format_address(address + offset),
                chunk.hex(" "),
                "".join(_printable(b) for b in chunk),
            ]
        )
    return TableModel(
        title=f"{format_address(address)} [{len(data)} bytes]",
        columns=["Address", "Hex", "ASCII"],
        rows=rows,
    )
