from dataclasses import dataclass, field

from vz_ui.tui.system.models import TableModel
from vz_ui.tui.system.protocols import UI, Presenter, PresenterSink, TablePresenter


@dataclass
class RecordedTable:
    model: TableModel


@dataclass
class HeadlessUI(UI):
    """Records everything it is asked to show; used in tests and for scripted input."""

    recorded_tables: list[RecordedTable] = field(default_factory=list)
    recorded_messages: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.tables = _HeadlessTablePresenter(self)
        self.present = _HeadlessPresenter(self)

    @property
    def last_table(self) -> TableModel | None:
        if not self.recorded_tables:
            return None
        return self.recorded_tables[-1].model

    def messages(self, level: str) -> list[str]:
        prefix = f"{level.upper()}: "
        return [m[len(prefix):] for m in self.recorded_messages if m.startswith(prefix)]


class _HeadlessTablePresenter(TablePresenter):
    def __init__(self, ui: HeadlessUI):
        self._ui = ui

    def show(self, table: TableModel) -> None:
        self._ui.recorded_tables.append(RecordedTable(table))


class _HeadlessPresenterSink(PresenterSink):
    def __init__(self, ui: HeadlessUI) -> None:
        self._ui = ui

    def emit(self, level: str, message: str) -> None:
        self._ui.recorded_messages.append(f"{level.upper()}: {message}")

    def emit_panel(
        self,
        message: str,
        title: str | None,
        border_style: str | None,
    ) -> None:
        self._ui.recorded_messages.append(f"PANEL: {title} - {message}")


class _HeadlessPresenter(Presenter):
    def __init__(self, ui: HeadlessUI) -> None:
        super().__init__(_HeadlessPresenterSink(ui))
