"""CLI unit tests for the Typer app."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from typing import Any

import pytest
import structlog
from typer.testing import CliRunner

from vz_common.errors import BackendError
from vz_common.settings import ShellSettings
from vz_ui.tui.system.headless import HeadlessUI

pytestmark = [pytest.mark.unit_ui]

cli = importlib.import_module("vz_ui.cli.main")
runner = CliRunner()


@dataclass
class FakeTarget:
    pid: int
    backend: Any
    detached: bool = False

    def __enter__(self) -> "FakeTarget":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.detached = True


@pytest.fixture
def headless(monkeypatch) -> HeadlessUI:
    ui = HeadlessUI()
    monkeypatch.setattr(cli.ctx_store, "_ui", ui)
    monkeypatch.setattr(cli.ctx_store, "_settings", ShellSettings(page_size=5))
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)
    return ui


def test_types_lists_value_types(headless) -> None:
    result = runner.invoke(cli.app, ["types"])

    assert result.exit_code == 0
    table = headless.last_table
    assert table.title == "Value types"
    assert ["ulong", "ul, uint64, u64", "8"] in table.rows
    assert ["bytes", "array, arr", "-"] in table.rows


def test_attach_requires_target(headless) -> None:
    result = runner.invoke(cli.app, ["attach"])

    assert result.exit_code == 1
    assert headless.messages("error") == [
        "No target specified: use --pid, --name or --spawn"
    ]


def test_attach_failure_exits(headless, monkeypatch) -> None:
    def refuse(**kwargs):
        raise BackendError("Failed to attach: denied")

    monkeypatch.setattr(cli, "attach_backend", refuse)

    result = runner.invoke(cli.app, ["attach", "--pid", "1"])

    assert result.exit_code == 1
    assert headless.messages("error") == ["Failed to attach: denied"]


def test_attach_runs_exec_lines_in_batch(headless, monkeypatch, backend) -> None:
    targets: list[FakeTarget] = []

    def fake_attach(**kwargs):
        assert kwargs == {"pid": None, "name": "app", "spawn": None, "device": None}
        targets.append(FakeTarget(pid=42, backend=backend))
        return targets[-1]

    monkeypatch.setattr(cli, "attach_backend", fake_attach)

    result = runner.invoke(
        cli.app,
        ["attach", "--name", "app", "--page-size", "1", "-e", "list modules", "-e", "field next", "--batch"],
    )

    assert result.exit_code == 0
    assert headless.messages("info") == ["Attached on: [42] Linux x64"]
    assert headless.last_table.title == "Field 2-2 [2] (2/2)"
    assert targets[0].detached


def test_attach_exec_exit_skips_prompt(headless, monkeypatch, backend) -> None:
    monkeypatch.setattr(cli, "attach_backend", lambda **kwargs: FakeTarget(pid=1, backend=backend))
    monkeypatch.setattr(cli, "prompt_reader", pytest.fail)

    result = runner.invoke(cli.app, ["attach", "-p", "1", "-e", "exit"])

    assert result.exit_code == 0
    assert headless.messages("warning") == ["Exiting..."]


def test_ui_context_builds_lazily(monkeypatch) -> None:
    from vz_ui.tui.system.facade import TUI
    from vz_ui.wiring.dependencies import UIContext

    monkeypatch.setenv("VZ_PAGE_SIZE", "9")
    assert isinstance(UIContext(headless=True).ui, HeadlessUI)
    assert isinstance(UIContext().ui, TUI)
    assert UIContext().settings.page_size == 9


@pytest.fixture
def real_logging(monkeypatch):
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    monkeypatch.setattr(cli.ctx_store, "_ui", HeadlessUI())
    monkeypatch.setattr(cli.ctx_store, "headless", cli.ctx_store.headless)
    monkeypatch.delenv("VZ_LOG_FILE", raising=False)
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


def test_log_level_from_environment(real_logging, monkeypatch) -> None:
    monkeypatch.setenv("VZ_LOG_LEVEL", "DEBUG")

    result = runner.invoke(cli.app, ["--headless", "types"])

    assert result.exit_code == 0
    assert real_logging.level == logging.DEBUG


def test_log_level_defaults_to_warning(real_logging, monkeypatch) -> None:
    monkeypatch.delenv("VZ_LOG_LEVEL", raising=False)

    result = runner.invoke(cli.app, ["--headless", "types"])

    assert result.exit_code == 0
    assert real_logging.level == logging.WARNING
