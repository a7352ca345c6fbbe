from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from vz_backend.protocol import InspectionBackend
from vz_common.api import ShellSettings, configure_logging
from vz_core.session import SessionState
from vz_ui.repl.command import CommandContext, CommandRegistry
from vz_ui.repl.commands import build_registry
from vz_ui.repl.dispatcher import Dispatcher
from vz_ui.tui.system.facade import TUI
from vz_ui.tui.system.protocols import UI


@dataclass
class UIContext:
    """Container for UI services and state, initialized lazily."""

    headless: bool = False

    _ui: Optional[UI] = None
    _settings: Optional[ShellSettings] = None

    @property
    def ui(self) -> UI:
        if self._ui is None:
            if self.headless:
                from vz_ui.tui.system.headless import HeadlessUI

                self._ui = HeadlessUI()
            else:
                self._ui = TUI()
        return self._ui

    @ui.setter
    def ui(self, value: UI):
        self._ui = value

    @property
    def settings(self) -> ShellSettings:
        if self._settings is None:
            self._settings = ShellSettings.from_env()
        return self._settings

    @settings.setter
    def settings(self, value: ShellSettings):
        self._settings = value


def build_dispatcher(
    backend: InspectionBackend,
    ui: UI,
    settings: ShellSettings,
    *,
    registry: CommandRegistry | None = None,
    state: SessionState | None = None,
) -> Dispatcher:
    """Assemble a fresh session: two empty stores, an empty navigator."""
    context = CommandContext(
        state=state or SessionState.create(page_size=settings.page_size),
        backend=backend,
        ui=ui,
        settings=settings,
        registry=registry or build_registry(),
    )
    return Dispatcher(context)


__all__ = [
    "UIContext",
    "build_dispatcher",
    "configure_logging",
]
