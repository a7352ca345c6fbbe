from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from vz_ui.tui.core import theme
from vz_ui.tui.system.protocols import Presenter, PresenterSink


class _RichPresenterSink(PresenterSink):
    def __init__(self, console: Console) -> None:
        self._console = console

    def emit(self, level: str, message: str) -> None:
        # Operator text such as "[de ad]" must not be read as markup.
        self._console.print(theme.presenter_message(level, escape(message)))

    def emit_panel(
        self,
        message: str,
        title: str | None,
        border_style: str | None,
    ) -> None:
        self._console.print(
            Panel(
                escape(message),
                title=theme.panel_title(escape(title)) if title else None,
                border_style=border_style or theme.RICH_BORDER_STYLE,
            )
        )


class RichPresenter(Presenter):
    def __init__(self, console: Console) -> None:
        super().__init__(_RichPresenterSink(console))
