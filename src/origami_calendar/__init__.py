"""Origami calendar package."""

from __future__ import annotations

from .cli import main as cli_main


def main() -> None:
    raise SystemExit(cli_main())
