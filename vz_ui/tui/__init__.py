"""
UI adapter package providing Rich-based and headless renderers.
"""

from vz_ui.tui.system.facade import TUI
from vz_ui.tui.system.headless import HeadlessUI
from vz_ui.tui.system.models import TableModel
from vz_ui.tui.system.protocols import UI, Presenter, TablePresenter

__all__ = [
    "UI",
    "TUI",
    "HeadlessUI",
    "Presenter",
    "TableModel",
    "TablePresenter",
]
