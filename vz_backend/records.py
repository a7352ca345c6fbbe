"""Turn raw enumerate records into items."""

from __future__ import annotations

from typing import Any, Callable, Iterable

from vz_common.errors import BackendError
from vz_core.items import (
    Function,
    Item,
    JavaClass,
    JavaMethod,
    Module,
    ObjCClass,
    ObjCMethod,
    Range,
    Thread,
    Variable,
)
from vz_core.values import U64_MAX
from vz_backend.protocol import RawRecord, RecordKind


def _field(record: RawRecord, key: str, kind: RecordKind) -> Any:
    if not isinstance(record, dict) and not hasattr(record, "get"):
        raise BackendError(f"Expected object of {kind.value}", context={"record": record})
    value = record.get(key)
    if value is None:
        raise BackendError(f"Expected {key} of {kind.value}", context={"record": record})
    return value


def _text(record: RawRecord, key: str, kind: RecordKind) -> str:
    value = _field(record, key, kind)
    if not isinstance(value, str):
        raise BackendError(f"Expected string {key} of {kind.value}", context={"record": record})
    return value


def _integer(record: RawRecord, key: str, kind: RecordKind) -> int:
    value = _field(record, key, kind)
    if isinstance(value, bool):
        raise BackendError(f"Expected integer {key} of {kind.value}", context={"record": record})
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 0)
        except ValueError:
            pass
    raise BackendError(f"Expected integer {key} of {kind.value}", context={"record": record})


def _address(record: RawRecord, kind: RecordKind) -> int:
    address = _integer(record, "address", kind)
    if not 0 <= address <= U64_MAX:
        raise BackendError(f"{kind.value} address parse error", context={"record": record})
    return address


def _module(record: RawRecord) -> Item:
    kind = RecordKind.MODULE
    return Module(
        name=_text(record, "name", kind),
        address=_address(record, kind),
        size=_integer(record, "size", kind),
    )


def _range(record: RawRecord) -> Item:
    kind = RecordKind.RANGE
    return Range(
        address=_address(record, kind),
        size=_integer(record, "size", kind),
        protection=_text(record, "protection", kind),
    )


def _function(record: RawRecord) -> Item:
    kind = RecordKind.FUNCTION
    return Function(
        name=_text(record, "name", kind),
        address=_address(record, kind),
        module=_text(record, "module", kind),
    )


def _variable(record: RawRecord) -> Item:
    kind = RecordKind.VARIABLE
    return Variable(
        name=_text(record, "name", kind),
        address=_address(record, kind),
        module=_text(record, "module", kind),
    )


def _java_method(record: RawRecord) -> Item:
    kind = RecordKind.JAVA_METHOD
    args = record.get("args") or []
    if not isinstance(args, (list, tuple)) or not all(isinstance(a, str) for a in args):
        raise BackendError("Expected string list args of java_method", context={"record": record})
    return JavaMethod(
        class_name=_text(record, "class", kind),
        name=_text(record, "name", kind),
        args=tuple(args),
        return_type=str(record.get("return_type") or "void"),
    )


def _objc_method(record: RawRecord) -> Item:
    kind = RecordKind.OBJC_METHOD
    return ObjCMethod(class_name=_text(record, "class", kind), name=_text(record, "name", kind))


def _thread(record: RawRecord) -> Item:
    kind = RecordKind.THREAD
    return Thread(id=_integer(record, "id", kind), state=str(record.get("state") or ""))


_DECODERS: dict[RecordKind, Callable[[RawRecord], Item]] = {
    RecordKind.MODULE: _module,
    RecordKind.RANGE: _range,
    RecordKind.FUNCTION: _function,
    RecordKind.VARIABLE: _variable,
    RecordKind.JAVA_CLASS: lambda r: JavaClass(name=_text(r, "name", RecordKind.JAVA_CLASS)),
    RecordKind.JAVA_METHOD: _java_method,
    RecordKind.OBJC_CLASS: lambda r: ObjCClass(name=_text(r, "name", RecordKind.OBJC_CLASS)),
    RecordKind.OBJC_METHOD: _objc_method,
    RecordKind.THREAD: _thread,
}


def decode_records(kind: RecordKind, records: Iterable[RawRecord]) -> list[Item]:
    """Decode every record or fail the whole batch."""
    if records is None or isinstance(records, (str, bytes)):
        raise BackendError(f"No {kind.value} records returned")
    decoder = _DECODERS[kind]
    return [decoder(record) for record in records]
