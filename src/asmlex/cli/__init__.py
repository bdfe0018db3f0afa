"""asmlex command-line interface package."""

from __future__ import annotations

import argparse
from typing import Iterable

from . import lex


def build_parser() -> argparse.ArgumentParser:
    """Build the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="asmlex",
        description="Rule-table syntax highlighting for assembly listings.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # Register lexer commands (tokens, highlight, rules, langs)
    lex.register_parsers(subparsers)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if not getattr(args, "command", None):
        parser.print_help()
        return 1

    return args.func(args)


__all__ = ["build_parser", "main"]
