"""Tokenize an input line and run the matching command handler."""

from __future__ import annotations

import logging
from typing import Sequence

from vz_common.errors import ArityError, ParseError, VzError, error_to_payload
from vz_ui.repl.command import Command, CommandContext, Handler

logger = logging.getLogger(__name__)


def tokenize(line: str) -> list[str]:
    """Split on whitespace outside quotes.

    A token that is a single quoted span loses its quotes; quotes inside a
    larger token (``name:"lib c"``) are kept for the filter parser.
    """
    tokens: list[str] = []
    current: list[str] = []
    quote: str | None = None
    in_token = False
    for char in line:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char.isspace():
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
            continue
        in_token = True
        if char in ("'", '"'):
            quote = char
        current.append(char)
    if quote:
        raise ParseError(f"Unterminated quote in: {line}", context={"line": line})
    if in_token:
        tokens.append("".join(current))
    return [_unquote(token) for token in tokens]


def _unquote(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in ("'", '"'):
        inner = token[1:-1]
        if token[0] not in inner:
            return inner
    return token


def _check_arity(name: str, needed: int, args: Sequence[str]) -> None:
    if len(args) < needed:
        raise ArityError(
            f"Expected at least {needed} arguments, got {len(args)}. Use 'help {name}'.",
            context={"command": name, "expected": needed, "got": len(args)},
        )


class Dispatcher:
    """Matches tokens against the registry and runs one handler to completion."""

    def __init__(self, context: CommandContext) -> None:
        self.context = context

    def dispatch(self, line: str) -> bool:
        """Run one input line; returns False only when the session should end."""
        try:
            tokens = tokenize(line)
        except ParseError as exc:
            self.context.ui.present.error(str(exc))
            return True
        if not tokens:
            return True
        return self.execute(tokens[0], tokens[1:])

    def execute(self, name: str, args: Sequence[str]) -> bool:
        command = self.context.registry.find(name)
        if command is None:
            self.context.ui.present.error(f"Unknown command: {name}")
            return True
        try:
            handler, handler_args = self._resolve(command, list(args))
        except ArityError as exc:
            self.context.ui.present.error(str(exc))
            return True
        if handler is None:
            problem = f"Unknown subcommand: {args[0]}" if args else "No subcommand specified"
            self.context.ui.present.error(
                f"{problem}. Use 'help {command.name}' for more information."
            )
            return True
        logger.debug("dispatch %s %s", command.name, handler_args)
        return self._run(handler, handler_args)

    def _resolve(self, command: Command, args: list[str]) -> tuple[Handler | None, list[str]]:
        if not command.subcommands:
            _check_arity(command.name, command.required_count, args)
            return command.handler, args
        if args:
            sub = command.find_subcommand(args[0])
            if sub is not None:
                _check_arity(f"{command.name} {sub.name}", sub.required_count, args[1:])
                return sub.handler, args[1:]
        return command.handler, args

    def _run(self, handler: Handler, args: list[str]) -> bool:
        try:
            return bool(handler(self.context, args))
        except VzError as exc:
            logger.debug("command failed", extra=error_to_payload(exc))
            self.context.ui.present.error(str(exc))
        except Exception as exc:
            logger.exception("Unhandled error in command handler")
            self.context.ui.present.error(f"Internal error: {exc}")
        return True
