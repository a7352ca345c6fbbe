"""Attach to a target process with frida and expose it as a backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from importlib import resources
from typing import Any

from vz_common.errors import BackendError, ConfigurationError, wrap_error
from vz_backend.script import ScriptBackend

logger = logging.getLogger(__name__)

AGENT_RESOURCE = "agent.js"


def _load_frida() -> Any:
    try:
        import frida
    except ImportError as exc:
        raise ConfigurationError(
            "frida is not installed; install the 'frida' extra to attach to processes",
            cause=exc,
        ) from exc
    return frida


def agent_source() -> str:
    return resources.files("vz_backend").joinpath(AGENT_RESOURCE).read_text(encoding="utf-8")


@dataclass
class AttachedTarget:
    """A live frida session with the agent loaded."""

    pid: int
    session: Any
    script: Any
    backend: ScriptBackend

    def detach(self) -> None:
        if self.session.is_detached:
            return
        try:
            self.script.unload()
        except Exception as exc:  # frida raises InvalidOperationError and friends
            logger.warning("Failed to unload agent from %s: %s", self.pid, exc)
        finally:
            try:
                self.session.detach()
            except Exception as exc:
                logger.warning("Failed to detach from %s: %s", self.pid, exc)
            else:
                logger.info("Detached from %s", self.pid)

    def __enter__(self) -> "AttachedTarget":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.detach()


def _device(frida: Any, device: str | None) -> Any:
    if device is None or device == "local":
        return frida.get_local_device()
    if device == "usb":
        return frida.get_usb_device()
    return frida.get_device(device)


def _find_pid(device: Any, name: str) -> int:
    lowered = name.lower()
    for process in device.enumerate_processes():
        if process.name.lower() == lowered:
            return process.pid
    raise BackendError(f"Process not found: {name}", context={"name": name})


def attach_backend(
    *,
    pid: int | None = None,
    name: str | None = None,
    spawn: str | None = None,
    device: str | None = None,
) -> AttachedTarget:
    """Attach by pid, process name, or by spawning a program, then load the agent."""
    frida = _load_frida()
    try:
        dev = _device(frida, device)
        if pid is not None:
            target_pid = pid
        elif spawn is not None:
            target_pid = dev.spawn([spawn])
        elif name is not None:
            target_pid = _find_pid(dev, name)
        else:
            raise ConfigurationError("No target specified")
        session = dev.attach(target_pid)
        script = session.create_script(agent_source())
        script.on("message", lambda message, data: logger.debug("agent: %s", message))
        script.load()
        if spawn is not None:
            dev.resume(target_pid)
    except (BackendError, ConfigurationError):
        raise
    except Exception as exc:
        raise wrap_error(BackendError, f"Failed to attach: {exc}", cause=exc) from exc

    logger.info("Attached to %s", target_pid)
    backend = ScriptBackend(script.exports_sync, is_detached=lambda: session.is_detached)
    return AttachedTarget(pid=target_pid, session=session, script=script, backend=backend)
