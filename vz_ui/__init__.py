"""Operator-facing side of vzshell: REPL, renderers and the CLI."""
