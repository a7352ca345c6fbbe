"""Tests for ScriptBackend over a fake RPC exports object."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from vz_backend.protocol import RecordKind
from vz_backend.script import ScriptBackend
from vz_common.errors import BackendError
from vz_core.values import ValueType


pytestmark = pytest.mark.unit_backend


@pytest.fixture
def exports() -> MagicMock:
    mock = MagicMock()
    mock.get_env.return_value = ["Android", "arm64"]
    mock.list_modules.return_value = [{"name": "libc.so", "address": "0x1000", "size": 1}]
    return mock


@pytest.fixture
def backend(exports) -> ScriptBackend:
    return ScriptBackend(exports)


class TestEnvironment:
    def test_is_cached(self, backend, exports) -> None:
        assert backend.environment() == ("Android", "arm64")
        assert backend.environment() == ("Android", "arm64")
        exports.get_env.assert_called_once_with()

    def test_malformed_reply(self, backend, exports) -> None:
        exports.get_env.return_value = "Android"
        with pytest.raises(BackendError, match="Malformed environment"):
            backend.environment()

    def test_detached_callback(self, exports) -> None:
        assert ScriptBackend(exports).is_detached() is False
        assert ScriptBackend(exports, is_detached=lambda: True).is_detached() is True


class TestEnumerate:
    def test_modules_forward_filter(self, backend, exports) -> None:
        reply = backend.enumerate(RecordKind.MODULE, [["name", ":", "lib"]])
        assert reply == exports.list_modules.return_value
        exports.list_modules.assert_called_once_with([["name", ":", "lib"]])

    def test_ranges_default_protection(self, backend, exports) -> None:
        exports.list_ranges.return_value = []
        backend.enumerate(RecordKind.RANGE)
        exports.list_ranges.assert_called_once_with("---", [])

    def test_functions_send_hex_module_address(self, backend, exports) -> None:
        exports.list_functions.return_value = []
        backend.enumerate(RecordKind.FUNCTION, module_address=0x7F00)
        exports.list_functions.assert_called_once_with("0x7f00", [])

    def test_functions_need_module(self, backend) -> None:
        with pytest.raises(BackendError, match="module address"):
            backend.enumerate(RecordKind.VARIABLE)

    def test_methods_need_class(self, backend) -> None:
        with pytest.raises(BackendError, match="class name"):
            backend.enumerate(RecordKind.OBJC_METHOD)

    def test_java_methods(self, backend, exports) -> None:
        exports.list_java_methods.return_value = []
        backend.enumerate(RecordKind.JAVA_METHOD, class_name="a.B")
        exports.list_java_methods.assert_called_once_with("a.B", [])

    def test_threads(self, backend, exports) -> None:
        exports.list_threads.return_value = [{"id": 1}]
        assert backend.enumerate(RecordKind.THREAD) == [{"id": 1}]

    def test_non_list_reply(self, backend, exports) -> None:
        exports.list_modules.return_value = None
        with pytest.raises(BackendError, match="No module records"):
            backend.enumerate(RecordKind.MODULE)

    def test_rpc_failure_is_wrapped(self, backend, exports) -> None:
        cause = RuntimeError("script destroyed")
        exports.list_modules.side_effect = cause
        with pytest.raises(BackendError, match="list_modules failed") as info:
            backend.enumerate(RecordKind.MODULE)
        assert info.value.__cause__ is cause
        assert info.value.context == {"method": "list_modules"}


class TestReadWrite:
    def test_read_bytes(self, backend, exports) -> None:
        exports.read.return_value = [0x41, 0x42]
        assert backend.read(0x1000, ValueType.BYTES, 2) == b"AB"
        exports.read.assert_called_once_with("0x1000", "bytes", 2)

    def test_read_unreadable_bytes(self, backend, exports) -> None:
        exports.read.return_value = None
        with pytest.raises(BackendError, match="Nothing readable"):
            backend.read(0x1000, ValueType.BYTES, 2)

    def test_read_wide_values_parse_strings(self, backend, exports) -> None:
        exports.read.return_value = "18446744073709551615"
        assert backend.read(0x10, ValueType.ULONG) == 2**64 - 1
        exports.read.return_value = "0xdeadbeef"
        assert backend.read(0x10, ValueType.POINTER) == 0xDEADBEEF

    def test_read_narrow_value_passes_through(self, backend, exports) -> None:
        exports.read.return_value = -3
        assert backend.read(0x10, ValueType.INT) == -3
        exports.read.assert_called_once_with("0x10", "int", None)

    def test_read_malformed_wide_value(self, backend, exports) -> None:
        exports.read.return_value = "nan"
        with pytest.raises(BackendError, match="Malformed long reply: nan") as info:
            backend.read(0x10, ValueType.LONG)
        assert info.value.context == {"reply": "nan"}
        assert isinstance(info.value.__cause__, ValueError)

    def test_write_payloads(self, backend, exports) -> None:
        backend.write(0x10, ValueType.BYTES, b"\x01\x02")
        backend.write(0x10, ValueType.ULONG, 2**64 - 1)
        backend.write(0x10, ValueType.POINTER, 0xBEEF)
        backend.write(0x10, ValueType.INT, 5)

        assert [c.args for c in exports.write.call_args_list] == [
            ("0x10", "bytes", [1, 2]),
            ("0x10", "ulong", "18446744073709551615"),
            ("0x10", "pointer", "0xbeef"),
            ("0x10", "int", 5),
        ]
