"""Shared helpers for vzshell."""

from vz_common.api import ShellSettings, StopToken, VzError, configure_logging

__all__ = ["configure_logging", "ShellSettings", "StopToken", "VzError"]
