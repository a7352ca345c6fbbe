"""Command table: names, aliases, argument descriptors and handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterator, Sequence

if TYPE_CHECKING:
    from vz_backend.protocol import InspectionBackend
    from vz_common.settings import ShellSettings
    from vz_core.session import SessionState
    from vz_ui.tui.system.protocols import UI

Handler = Callable[["CommandContext", Sequence[str]], bool]


@dataclass(frozen=True)
class ArgSpec:
    name: str
    description: str
    required: bool = False

    def __str__(self) -> str:
        return f"<{self.name}>" if self.required else f"[{self.name}]"


def required(name: str, description: str) -> ArgSpec:
    return ArgSpec(name, description, True)


def optional(name: str, description: str) -> ArgSpec:
    return ArgSpec(name, description, False)


@dataclass(frozen=True)
class SubCommand:
    name: str
    description: str
    handler: Handler
    args: tuple[ArgSpec, ...] = ()
    aliases: tuple[str, ...] = ()

    def matches(self, token: str) -> bool:
        return token == self.name or token in self.aliases

    @property
    def required_count(self) -> int:
        return sum(1 for arg in self.args if arg.required)

    @property
    def usage(self) -> str:
        return " ".join([self.name, *(str(arg) for arg in self.args)])


@dataclass(frozen=True)
class Command:
    """A top-level command.

    A command either runs ``handler`` directly or owns ``subcommands``; in the
    latter case ``handler`` is the default used when no subcommand matches.
    """

    name: str
    description: str
    handler: Handler | None = None
    args: tuple[ArgSpec, ...] = ()
    aliases: tuple[str, ...] = ()
    subcommands: tuple[SubCommand, ...] = ()

    def matches(self, token: str) -> bool:
        return token == self.name or token in self.aliases

    def find_subcommand(self, token: str) -> SubCommand | None:
        for sub in self.subcommands:
            if sub.matches(token):
                return sub
        return None

    @property
    def required_count(self) -> int:
        return sum(1 for arg in self.args if arg.required)

    @property
    def usage(self) -> str:
        return " ".join([self.name, *(str(arg) for arg in self.args)])


@dataclass
class CommandRegistry:
    """Ordered commands, looked up by exact name or alias."""

    commands: list[Command] = field(default_factory=list)

    def register(self, *commands: Command) -> None:
        for command in commands:
            for token in (command.name, *command.aliases):
                clash = self.find(token)
                if clash is not None:
                    raise ValueError(f"'{token}' already used by command '{clash.name}'")
            self.commands.append(command)

    def find(self, token: str) -> Command | None:
        for command in self.commands:
            if command.matches(token):
                return command
        return None

    def __iter__(self) -> Iterator[Command]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)


@dataclass
class CommandContext:
    """Everything a handler may touch while it runs."""

    state: "SessionState"
    backend: "InspectionBackend"
    ui: "UI"
    settings: "ShellSettings"
    registry: CommandRegistry
