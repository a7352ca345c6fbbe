"""Tokenizing, command lookup, arity checks and error reporting."""

from __future__ import annotations

import pytest

from vz_common.errors import ParseError, ResolutionError
from vz_core.items import Pointer
from vz_ui.repl.command import Command, CommandRegistry, SubCommand, required
from vz_ui.repl.commands import build_registry
from vz_ui.repl.dispatcher import tokenize
from vz_ui.wiring.dependencies import build_dispatcher

pytestmark = pytest.mark.unit_ui


class TestTokenize:
    @pytest.mark.parametrize(
        ("line", "tokens"),
        [
            ("", []),
            ("   ", []),
            ("field  list\t2", ["field", "list", "2"]),
            ('write 0x10 "hello world" string', ["write", "0x10", "hello world", "string"]),
            ("write 0x10 'a b'", ["write", "0x10", "a b"]),
            ('field filter name:"lib c"', ["field", "filter", 'name:"lib c"']),
            ("field filter name:'x' & size>1", ["field", "filter", "name:'x'", "&", "size>1"]),
        ],
    )
    def test_splits_outside_quotes(self, line, tokens) -> None:
        assert tokenize(line) == tokens

    def test_unterminated_quote(self) -> None:
        with pytest.raises(ParseError, match="Unterminated quote"):
            tokenize('write 0x10 "oops')


class TestRegistry:
    def test_builtin_tokens_are_unique(self) -> None:
        registry = build_registry()
        tokens = [t for command in registry for t in (command.name, *command.aliases)]
        assert len(tokens) == len(set(tokens))

    def test_register_rejects_clash(self) -> None:
        registry = CommandRegistry()
        registry.register(Command("alpha", "a", handler=lambda ctx, args: True, aliases=("a",)))
        with pytest.raises(ValueError, match="'a' already used by command 'alpha'"):
            registry.register(Command("apple", "b", handler=lambda ctx, args: True, aliases=("a",)))

    def test_find_by_alias(self) -> None:
        registry = build_registry()
        assert registry.find("q").name == "exit"
        assert registry.find("fld").name == "field"
        assert registry.find("missing") is None


class TestDispatch:
    def test_blank_line_is_ignored(self, dispatcher, ui) -> None:
        assert dispatcher.dispatch("   ") is True
        assert ui.recorded_messages == []

    def test_unknown_command(self, dispatcher, ui) -> None:
        assert dispatcher.dispatch("frobnicate 1") is True
        assert ui.messages("error") == ["Unknown command: frobnicate"]

    def test_tokenize_error_is_reported(self, dispatcher, ui) -> None:
        assert dispatcher.dispatch('write 0x10 "x') is True
        assert ui.messages("error")[0].startswith("Unterminated quote")

    def test_group_without_default_needs_subcommand(self, dispatcher, ui) -> None:
        assert dispatcher.dispatch("list") is True
        assert ui.messages("error") == [
            "No subcommand specified. Use 'help list' for more information."
        ]

    def test_group_names_unknown_subcommand(self, dispatcher, ui) -> None:
        assert dispatcher.dispatch("list bogus") is True
        assert ui.messages("error") == [
            "Unknown subcommand: bogus. Use 'help list' for more information."
        ]

    def test_group_default_handler(self, dispatcher, ui, state) -> None:
        state.field.append(Pointer(address=0x10 + i) for i in range(5))
        dispatcher.dispatch("field 2")
        assert ui.last_table.title == "Field 4-5 [5] (2/2)"
        assert state.field.cursor == 0

    def test_subcommand_arity_leaves_state_untouched(self, dispatcher, ui, state) -> None:
        state.field.append(Pointer(address=0x10 + i) for i in range(3))
        before = list(state.field)

        dispatcher.dispatch("field move 1")

        assert ui.messages("error") == [
            "Expected at least 2 arguments, got 1. Use 'help field move'."
        ]
        assert list(state.field) == before
        assert ui.recorded_tables == []

    def test_direct_command_arity(self, dispatcher, ui) -> None:
        dispatcher.dispatch("select")
        assert ui.messages("error") == [
            "Expected at least 1 arguments, got 0. Use 'help select'."
        ]

    @pytest.mark.parametrize("line", ["exit", "quit", "q"])
    def test_exit_ends_session(self, dispatcher, ui, line) -> None:
        assert dispatcher.dispatch(line) is False
        assert ui.messages("warning") == ["Exiting..."]

    def test_handler_errors_keep_session_alive(self, backend, ui, settings) -> None:
        def broken(ctx, args):
            raise RuntimeError("kaboom")

        def refuses(ctx, args):
            raise ResolutionError("nothing there")

        registry = CommandRegistry()
        registry.register(
            Command("broken", "raises", handler=broken),
            Command(
                "group",
                "has subcommands",
                subcommands=(
                    SubCommand("refuse", "raises", refuses, args=(required("x", "x"),)),
                ),
            ),
        )
        dispatcher = build_dispatcher(backend, ui, settings, registry=registry)

        assert dispatcher.dispatch("broken") is True
        assert dispatcher.dispatch("group refuse 1") is True

        assert ui.messages("error") == ["Internal error: kaboom", "nothing there"]

    def test_execute_skips_tokenizing(self, dispatcher, ui) -> None:
        assert dispatcher.execute("goto", ["0x10"]) is True
        assert ui.messages("info") == ["pointer @0x0010"]
