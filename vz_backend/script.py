"""Backend speaking to the injected agent through its RPC exports."""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

from vz_common.errors import BackendError, wrap_error
from vz_core.values import ValueType
from vz_backend.protocol import RawRecord, RecordKind

logger = logging.getLogger(__name__)

_WIDE_TYPES = {ValueType.LONG, ValueType.ULONG, ValueType.POINTER}


def _hex(address: int) -> str:
    return hex(address)


class ScriptBackend:
    """`InspectionBackend` over an RPC exports object.

    ``exports`` is anything exposing the agent functions as attributes, such
    as frida's ``script.exports_sync``. ``is_detached`` is consulted by the
    session loop so a dead target ends the session.
    """

    def __init__(
        self,
        exports: Any,
        *,
        is_detached: Callable[[], bool] | None = None,
    ) -> None:
        self._exports = exports
        self._is_detached = is_detached or (lambda: False)
        self._environment: tuple[str, str] | None = None

    def _call(self, method: str, *args: Any) -> Any:
        logger.debug("rpc %s%r", method, args)
        try:
            return getattr(self._exports, method)(*args)
        except BackendError:
            raise
        except Exception as exc:
            logger.warning("rpc %s failed: %s", method, exc)
            raise wrap_error(
                BackendError, f"{method} failed: {exc}", context={"method": method}, cause=exc
            ) from exc

    def environment(self) -> tuple[str, str]:
        if self._environment is None:
            value = self._call("get_env")
            if not isinstance(value, (list, tuple)) or len(value) < 2:
                raise BackendError("Malformed environment reply", context={"reply": value})
            self._environment = (str(value[0]), str(value[1]))
        return self._environment

    def is_detached(self) -> bool:
        return self._is_detached()

    def enumerate(
        self,
        kind: RecordKind,
        filter_spec: Sequence[Any] = (),
        *,
        module_address: int | None = None,
        protection: str | None = None,
        class_name: str | None = None,
    ) -> list[RawRecord]:
        spec = list(filter_spec)
        if kind is RecordKind.MODULE:
            reply = self._call("list_modules", spec)
        elif kind is RecordKind.RANGE:
            reply = self._call("list_ranges", protection or "---", spec)
        elif kind in (RecordKind.FUNCTION, RecordKind.VARIABLE):
            if module_address is None:
                raise BackendError(f"Listing {kind.value}s needs a module address")
            method = "list_functions" if kind is RecordKind.FUNCTION else "list_variables"
            reply = self._call(method, _hex(module_address), spec)
        elif kind is RecordKind.JAVA_CLASS:
            reply = self._call("list_java_classes", spec)
        elif kind is RecordKind.OBJC_CLASS:
            reply = self._call("list_objc_classes", spec)
        elif kind in (RecordKind.JAVA_METHOD, RecordKind.OBJC_METHOD):
            if not class_name:
                raise BackendError(f"Listing {kind.value}s needs a class name")
            method = "list_java_methods" if kind is RecordKind.JAVA_METHOD else "list_objc_methods"
            reply = self._call(method, class_name, spec)
        else:
            reply = self._call("list_threads", spec)
        if not isinstance(reply, list):
            raise BackendError(f"No {kind.value} records returned", context={"reply": reply})
        return reply

    def read(self, address: int, value_type: ValueType, length: int | None = None) -> Any:
        if value_type is ValueType.BYTES:
            value = self._call("read", _hex(address), value_type.value, length)
            if value is None:
                raise BackendError(f"Nothing readable at {_hex(address)}")
            return bytes(value)
        value = self._call("read", _hex(address), value_type.value, None)
        if value_type in _WIDE_TYPES and isinstance(value, str):
            try:
                return int(value, 0)
            except ValueError as exc:
                raise wrap_error(
                    BackendError,
                    f"Malformed {value_type} reply: {value}",
                    context={"reply": value},
                    cause=exc,
                ) from exc
        return value

    def write(self, address: int, value_type: ValueType, value: Any) -> None:
        if isinstance(value, bytes):
            payload: Any = list(value)
        elif value_type in _WIDE_TYPES:
            # 64-bit values travel as strings so JS numbers do not round them.
            payload = str(value) if value_type is not ValueType.POINTER else _hex(value)
        else:
            payload = value
        self._call("write", _hex(address), value_type.value, payload)
