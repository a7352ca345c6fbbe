from __future__ import annotations

from typing import Any

import pytest

from vz_backend.protocol import RecordKind
from vz_common.settings import ShellSettings
from vz_core.values import ValueType
from vz_ui.tui.system.headless import HeadlessUI
from vz_ui.wiring.dependencies import build_dispatcher


class FakeBackend:
    """In-memory stand-in for an attached target."""

    def __init__(self) -> None:
        self.platform = ("Linux", "x64")
        self.detached = False
        self.records: dict[RecordKind, list[dict[str, Any]]] = {
            RecordKind.MODULE: [
                {"name": "libc.so", "address": "0x7f0000001000", "size": 0x2000},
                {"name": "app", "address": "0x400000", "size": 0x1000},
            ],
            RecordKind.FUNCTION: [
                {"name": "open", "address": "0x7f0000001100", "module": "libc.so"},
            ],
            RecordKind.THREAD: [{"id": 1, "state": "running"}],
            RecordKind.OBJC_CLASS: [{"name": "NSObject"}],
            RecordKind.JAVA_CLASS: [{"name": "java.lang.Object"}],
        }
        self.memory: dict[int, Any] = {}
        self.enumerate_calls: list[tuple[RecordKind, list[Any], dict[str, Any]]] = []
        self.reads: list[tuple[int, ValueType, int | None]] = []
        self.writes: list[tuple[int, ValueType, Any]] = []

    def environment(self) -> tuple[str, str]:
        return self.platform

    def is_detached(self) -> bool:
        return self.detached

    def enumerate(self, kind, filter_spec=(), *, module_address=None, protection=None, class_name=None):
        options = {
            key: value
            for key, value in (
                ("module_address", module_address),
                ("protection", protection),
                ("class_name", class_name),
            )
            if value is not None
        }
        self.enumerate_calls.append((kind, list(filter_spec), options))
        return list(self.records.get(kind, []))

    def read(self, address, value_type, length=None):
        self.reads.append((address, value_type, length))
        if value_type is ValueType.BYTES:
            return bytes(range(length or 0))
        return self.memory.get(address, 0)

    def write(self, address, value_type, value) -> None:
        self.writes.append((address, value_type, value))
        self.memory[address] = value


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def ui() -> HeadlessUI:
    return HeadlessUI()


@pytest.fixture
def settings() -> ShellSettings:
    return ShellSettings(page_size=3, read_length=4, view_size=32)


@pytest.fixture
def dispatcher(backend, ui, settings):
    return build_dispatcher(backend, ui, settings)


@pytest.fixture
def state(dispatcher):
    return dispatcher.context.state
