"""
Command-line interface for vzshell.

Attaches to a process and opens the interactive inspection session.
"""

from __future__ import annotations

import os
from typing import List, Optional

import typer

from vz_backend.host import attach_backend
from vz_common.api import ConfigurationError, StopToken, VzError
from vz_core.values import ValueType
from vz_ui.repl.loop import SessionLoop, prompt_reader
from vz_ui.tui.system.models import TableModel
from vz_ui.wiring.dependencies import UIContext, build_dispatcher, configure_logging

ctx_store = UIContext()

app = typer.Typer(
    help="Interactive process inspection shell: list, page, filter and read memory.",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def entry(
    headless: bool = typer.Option(
        False,
        "--headless",
        help="Record output instead of rendering it (useful for scripting).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs here."),
    json_logs: Optional[bool] = typer.Option(
        None, "--json-logs/--console-logs", help="Log format (default: VZ_LOG_JSON)."
    ),
) -> None:
    """Global options shared by every command."""
    configure_logging(
        level=os.environ.get("VZ_LOG_LEVEL", "WARNING"),
        debug=debug,
        log_file=log_file,
        json=json_logs,
        force=True,
    )
    ctx_store.headless = headless


@app.command("attach")
def attach(
    pid: Optional[int] = typer.Option(None, "--pid", "-p", help="Attach to a process id."),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Attach to a process by name."),
    spawn: Optional[str] = typer.Option(None, "--spawn", "-f", help="Spawn a program and attach."),
    device: Optional[str] = typer.Option(
        None, "--device", "-D", help="Device: local (default), usb, or a device id."
    ),
    page_size: Optional[int] = typer.Option(None, "--page-size", help="Items per store page."),
    commands: Optional[List[str]] = typer.Option(
        None, "--exec", "-e", help="Run a command before the prompt (repeatable)."
    ),
    batch: bool = typer.Option(False, "--batch", help="Exit after --exec commands."),
) -> None:
    """Attach to a target and start the session."""
    ui = ctx_store.ui
    try:
        settings = ctx_store.settings.with_overrides(page_size=page_size)
        if pid is None and name is None and spawn is None:
            raise ConfigurationError("No target specified: use --pid, --name or --spawn")
        target = attach_backend(pid=pid, name=name, spawn=spawn, device=device)
    except VzError as exc:
        ui.present.error(str(exc))
        raise typer.Exit(1)

    with target, StopToken(enable_signals=True) as stop_token:
        dispatcher = build_dispatcher(target.backend, ui, settings)
        try:
            platform, arch = target.backend.environment()
        except VzError as exc:
            ui.present.warning(f"Unknown environment: {exc}")
        else:
            ui.present.info(f"Attached on: [{target.pid}] {platform} {arch}")
        for line in commands or []:
            if not dispatcher.dispatch(line):
                return
        if batch:
            return
        ui.present.info("Type 'help' for more information about available commands.")
        SessionLoop(dispatcher, prompt_reader(settings), stop_token).run()


@app.command("types")
def list_types() -> None:
    """Show the value types accepted by read and write."""
    rows = [[vt.value, ", ".join(vt.aliases), str(vt.width or "-")] for vt in ValueType]
    ctx_store.ui.tables.show(
        TableModel(title="Value types", columns=["Type", "Aliases", "Width"], rows=rows)
    )


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
