"""Interface between the session core and the process inspection engine."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Protocol, Sequence

from vz_core.values import ValueType


class RecordKind(str, Enum):
    MODULE = "module"
    RANGE = "range"
    FUNCTION = "function"
    VARIABLE = "variable"
    JAVA_CLASS = "java_class"
    JAVA_METHOD = "java_method"
    OBJC_CLASS = "objc_class"
    OBJC_METHOD = "objc_method"
    THREAD = "thread"


RawRecord = Mapping[str, Any]


class InspectionBackend(Protocol):
    """Capabilities the core needs from an attached process.

    ``filter_spec`` is the serialized form produced by
    `vz_core.filters.to_backend`. Every method raises
    `vz_common.errors.BackendError` on failure.
    """

    def environment(self) -> tuple[str, str]:
        """Return ``(platform, arch)``, e.g. ``("Android", "arm64")``."""
        ...

    def is_detached(self) -> bool: ...

    def enumerate(
        self,
        kind: RecordKind,
        filter_spec: Sequence[Any] = (),
        *,
        module_address: int | None = None,
        protection: str | None = None,
        class_name: str | None = None,
    ) -> list[RawRecord]: ...

    def read(self, address: int, value_type: ValueType, length: int | None = None) -> Any: ...

    def write(self, address: int, value_type: ValueType, value: Any) -> None: ...
