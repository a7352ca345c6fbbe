"""Tests for attaching through frida, with frida faked out."""

from __future__ import annotations

import sys
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from vz_backend.host import agent_source, attach_backend
from vz_backend.protocol import RecordKind
from vz_common.errors import BackendError, ConfigurationError


pytestmark = pytest.mark.unit_backend


@pytest.fixture
def fake_frida(monkeypatch) -> MagicMock:
    frida = MagicMock()
    device = frida.get_local_device.return_value
    device.enumerate_processes.return_value = [
        SimpleNamespace(name="Launcher", pid=11),
        SimpleNamespace(name="Target", pid=42),
    ]
    device.spawn.return_value = 99
    session = device.attach.return_value
    session.is_detached = False
    monkeypatch.setitem(sys.modules, "frida", frida)
    return frida


def test_agent_source_is_packaged() -> None:
    source = agent_source()
    assert "rpc.exports" in source
    assert "listModules" in source


@pytest.mark.parametrize("kind", list(RecordKind))
def test_agent_records_answer_type_and_saved(kind: RecordKind) -> None:
    source = agent_source()
    assert "if (key === 'type') return kind;" in source
    assert "if (key === 'saved') return false;" in source
    assert f"filter, '{kind.value}')" in source


def test_missing_frida(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "frida", None)
    with pytest.raises(ConfigurationError, match="frida is not installed"):
        attach_backend(pid=1)


def test_attach_by_pid_loads_agent(fake_frida) -> None:
    target = attach_backend(pid=42)

    device = fake_frida.get_local_device.return_value
    device.attach.assert_called_once_with(42)
    session = device.attach.return_value
    script = session.create_script.return_value
    session.create_script.assert_called_once_with(agent_source())
    script.load.assert_called_once_with()
    assert target.pid == 42
    assert target.backend.is_detached() is False

    session.is_detached = True
    assert target.backend.is_detached() is True


def test_attach_by_name_is_case_insensitive(fake_frida) -> None:
    assert attach_backend(name="target").pid == 42


def test_attach_by_unknown_name(fake_frida) -> None:
    with pytest.raises(BackendError, match="Process not found: ghost"):
        attach_backend(name="ghost")


def test_spawn_resumes_after_load(fake_frida) -> None:
    target = attach_backend(spawn="/bin/app", device="usb")

    device = fake_frida.get_usb_device.return_value
    device.spawn.assert_called_once_with(["/bin/app"])
    device.resume.assert_called_once_with(device.spawn.return_value)
    assert target.pid == device.spawn.return_value


def test_attach_failure_is_wrapped(fake_frida) -> None:
    fake_frida.get_local_device.return_value.attach.side_effect = RuntimeError("denied")
    with pytest.raises(BackendError, match="Failed to attach: denied") as info:
        attach_backend(pid=1)
    assert isinstance(info.value.__cause__, RuntimeError)


def test_no_target(fake_frida) -> None:
    with pytest.raises(ConfigurationError):
        attach_backend()


def test_detach_once(fake_frida) -> None:
    with attach_backend(pid=42) as target:
        pass
    target.session.detach.assert_called_once_with()
    target.script.unload.assert_called_once_with()

    target.session.is_detached = True
    target.detach()
    target.session.detach.assert_called_once_with()


def test_detach_survives_unload_failure(fake_frida) -> None:
    target = attach_backend(pid=42)
    target.script.unload.side_effect = RuntimeError("script is destroyed")

    target.detach()

    target.script.unload.assert_called_once_with()
    target.session.detach.assert_called_once_with()
