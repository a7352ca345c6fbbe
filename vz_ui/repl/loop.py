"""The read-eval loop driving one inspection session."""

from __future__ import annotations

import logging
from typing import Callable

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.styles import Style

from vz_common.settings import ShellSettings
from vz_common.stop_token import StopToken
from vz_core.navigator import Navigator
from vz_ui.repl.dispatcher import Dispatcher
from vz_ui.tui.core import theme

logger = logging.getLogger(__name__)

LineReader = Callable[[Navigator], str]


def prompt_fragments(navigator: Navigator, label: str) -> FormattedText:
    """``module:libc.so @0x1000>`` when focused, ``label>`` otherwise."""
    described = navigator.describe()
    if described is None:
        return FormattedText([("class:idle", label), ("class:arrow", "> ")])
    kind, _, rest = described.partition(":")
    return FormattedText(
        [("class:kind", f"{kind}:"), ("class:label", rest), ("class:arrow", "> ")]
    )


def prompt_reader(settings: ShellSettings) -> LineReader:
    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory() if settings.history else None,
        style=Style.from_dict(dict(theme.prompt_toolkit_style())),
    )

    def read(navigator: Navigator) -> str:
        return session.prompt(prompt_fragments(navigator, settings.prompt_label))

    return read


class SessionLoop:
    """Reads a line, runs it to completion, repeats.

    The stop token is checked before each read; Ctrl-C at the prompt trips it
    and Ctrl-D ends the loop. A detached target also ends the session.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        read_line: LineReader,
        stop_token: StopToken,
    ) -> None:
        self.dispatcher = dispatcher
        self.read_line = read_line
        self.stop_token = stop_token

    def run(self) -> None:
        ctx = self.dispatcher.context
        present = ctx.ui.present
        while True:
            if self.stop_token.should_stop():
                present.warning("Ctrl + C detected. Exiting...")
                break
            try:
                line = self.read_line(ctx.state.navigator)
            except KeyboardInterrupt:
                self.stop_token.request_stop()
                continue
            except EOFError:
                present.warning("Ctrl + D detected. Exiting...")
                break
            if ctx.backend.is_detached():
                present.error("Session detached. Exiting...")
                break
            if not line.strip():
                continue
            if not self.dispatcher.dispatch(line):
                break
        logger.info("Session loop finished")
