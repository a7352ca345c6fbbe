"""Shared error taxonomy for vzshell."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple)):
        return [_normalize_context_value(item) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class VzError(Exception):
    """Base error type for operator-facing failures."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ParseError(VzError):
    """Malformed filter, selector, number or value literal."""


class ResolutionError(VzError):
    """A reference resolved to nothing usable."""


class BackendError(VzError):
    """Failure reported by the inspection backend."""


class ArityError(VzError):
    """A command was invoked with too few arguments."""


class ConfigurationError(VzError):
    """Failure due to invalid configuration."""


T = TypeVar("T", bound=VzError)


def wrap_error(
    error_cls: type[T],
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
    cause: Exception | None = None,
) -> T:
    """Create a typed VzError with optional context and cause."""
    return error_cls(message, context=context, cause=cause)


def error_to_payload(error: VzError) -> dict[str, Any]:
    """Convert a VzError to a flat log payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
