from __future__ import annotations

from typing import Mapping

from vz_core.items import ItemKind

RICH_ACCENT = "blue"
RICH_ACCENT_BOLD = f"bold {RICH_ACCENT}"
RICH_BORDER_STYLE = RICH_ACCENT

RICH_KIND_COLORS: dict[str, str] = {
    ItemKind.POINTER.value: "yellow",
    ItemKind.MODULE.value: "cyan",
    ItemKind.RANGE.value: "magenta",
    ItemKind.FUNCTION.value: "green",
    ItemKind.VARIABLE.value: "green",
    ItemKind.THREAD.value: "dim",
}

PRESENTER_TEMPLATES: dict[str, str] = {
    "info": "[blue]ℹ[/blue] {message}",
    "warning": "[yellow]⚠ {message}[/yellow]",
    "error": "[red]✖ {message}[/red]",
    "success": "[green]✔ {message}[/green]",
}

SAVED_MARK = "★"


def panel_title(text: str) -> str:
    return f"[{RICH_ACCENT_BOLD}]{text}[/{RICH_ACCENT_BOLD}]"


def kind_style(kind: str) -> str:
    return RICH_KIND_COLORS.get(kind, "")


def presenter_message(level: str, message: str) -> str:
    template = PRESENTER_TEMPLATES.get(level, "{message}")
    return template.format(message=message)


def prompt_toolkit_style() -> Mapping[str, str]:
    return {
        "kind": "fg:ansiblue",
        "label": "fg:ansiyellow",
        "idle": "fg:ansigreen bold",
        "arrow": "bold",
    }
