"""Tests for decoding raw agent records into items."""

from __future__ import annotations

import pytest

from vz_backend.protocol import RecordKind
from vz_backend.records import decode_records
from vz_common.errors import BackendError
from vz_core.items import (
    Function,
    JavaClass,
    JavaMethod,
    Module,
    ObjCMethod,
    Range,
    Thread,
)


pytestmark = pytest.mark.unit_backend


def test_modules_accept_hex_and_int_addresses() -> None:
    items = decode_records(
        RecordKind.MODULE,
        [
            {"name": "libc.so", "address": "0x7f001000", "size": 4096},
            {"name": "app", "address": 0x400000, "size": "0x2000"},
        ],
    )
    assert items == [
        Module(name="libc.so", address=0x7F001000, size=4096),
        Module(name="app", address=0x400000, size=0x2000),
    ]


def test_range_and_function() -> None:
    assert decode_records(
        RecordKind.RANGE, [{"address": "0x1000", "size": 16, "protection": "r-x"}]
    ) == [Range(address=0x1000, size=16, protection="r-x")]
    assert decode_records(
        RecordKind.FUNCTION, [{"name": "open", "address": "0x10", "module": "libc.so"}]
    ) == [Function(name="open", address=0x10, module="libc.so")]


def test_java_method_defaults() -> None:
    (method,) = decode_records(
        RecordKind.JAVA_METHOD, [{"class": "a.B", "name": "run", "args": ["int", "java.lang.String"]}]
    )
    assert method == JavaMethod(
        class_name="a.B", name="run", args=("int", "java.lang.String"), return_type="void"
    )


def test_class_and_thread_records() -> None:
    assert decode_records(RecordKind.JAVA_CLASS, [{"name": "a.B"}]) == [JavaClass(name="a.B")]
    assert decode_records(RecordKind.OBJC_METHOD, [{"class": "NSObject", "name": "- init"}]) == [
        ObjCMethod(class_name="NSObject", name="- init")
    ]
    assert decode_records(RecordKind.THREAD, [{"id": 42, "state": "waiting"}]) == [
        Thread(id=42, state="waiting")
    ]


def test_empty_batch() -> None:
    assert decode_records(RecordKind.MODULE, []) == []


@pytest.mark.parametrize(
    "record",
    [
        {"address": "0x1000", "size": 1},
        {"name": "m", "address": "zzz", "size": 1},
        {"name": "m", "address": "-0x1", "size": 1},
        {"name": "m", "address": "0x10000000000000000", "size": 1},
        {"name": 7, "address": "0x1", "size": 1},
        {"name": "m", "address": True, "size": 1},
        "not a record",
    ],
)
def test_malformed_record_fails_whole_batch(record) -> None:
    good = {"name": "ok", "address": "0x1", "size": 1}
    with pytest.raises(BackendError):
        decode_records(RecordKind.MODULE, [good, record])


def test_missing_reply() -> None:
    with pytest.raises(BackendError, match="No module records"):
        decode_records(RecordKind.MODULE, None)


def test_bad_java_args() -> None:
    with pytest.raises(BackendError, match="args"):
        decode_records(RecordKind.JAVA_METHOD, [{"class": "a.B", "name": "m", "args": [1]}])
