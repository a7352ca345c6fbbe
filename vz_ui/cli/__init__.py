"""Typer application and its console entry point."""

from vz_ui.cli.main import app, ctx_store, main

__all__ = ["app", "ctx_store", "main"]
