"""Public API surface for vz_common."""

from vz_common.errors import (
    ArityError,
    BackendError,
    ConfigurationError,
    ParseError,
    ResolutionError,
    VzError,
)
from vz_common.logging import configure_logging
from vz_common.settings import ShellSettings
from vz_common.stop_token import StopToken

__all__ = [
    "ArityError",
    "BackendError",
    "ConfigurationError",
    "ParseError",
    "ResolutionError",
    "ShellSettings",
    "StopToken",
    "VzError",
    "configure_logging",
]
