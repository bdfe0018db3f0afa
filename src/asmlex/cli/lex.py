"""Lexer CLI commands: tokens, highlight, rules, langs."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from pathlib import Path

from ..config import load_config_model
from ..logging_config import get_logger, setup_logging
from ..registry import LanguageRegistry, create_default_registry
from ..schema import AsmlexConfig

logger = get_logger("cli")


# Bad config or source files are reported, not raised.
INPUT_ERRORS = (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError)


def _load_config(args: argparse.Namespace) -> AsmlexConfig | None:
    config_path = Path(args.config) if getattr(args, "config", None) else None
    try:
        config = load_config_model(config_path=config_path)
    except INPUT_ERRORS as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None
    level = config.logging.level_number
    if getattr(args, "verbose", False):
        level = logging.DEBUG
    setup_logging(
        level=level,
        log_dir=config.logging.log_dir,
        enable_json=config.logging.json,
    )
    return config


def _build_registry(config: AsmlexConfig) -> LanguageRegistry:
    from ..plugins import load_enabled_plugins

    plugins = load_enabled_plugins(config)
    registry = create_default_registry(plugins=plugins.values())
    logger.debug("Loaded %d plugins, %d aliases", len(plugins), len(registry))
    return registry


def _read_source(args: argparse.Namespace) -> str | None:
    if args.text is not None:
        return args.text
    if not args.file:
        print("Error: --text or --file required", file=sys.stderr)
        return None
    try:
        return Path(args.file).read_text(encoding="utf-8")
    except INPUT_ERRORS as exc:
        print(f"Error: cannot read {args.file}: {exc}", file=sys.stderr)
        return None


def tokens_command(args: argparse.Namespace) -> int:
    """Print the tokens of a source text."""
    config = _load_config(args)
    if config is None:
        return 1
    registry = _build_registry(config)
    alias = args.lang or config.highlight.default_alias

    try:
        handler = registry.get(alias)
    except KeyError as exc:
        print(f"Error: {exc.args[0]}", file=sys.stderr)
        return 1

    source = _read_source(args)
    if source is None:
        return 1

    tokens = handler.tokenize(source)
    if args.json:
        print(json.dumps([token.to_dict() for token in tokens], indent=2))
        return 0

    for token in tokens:
        print(f"{token.start:>6}  {token.category.name:<12} {token.text!r}")
    return 0


def highlight_command(args: argparse.Namespace) -> int:
    """Render a source text through a Pygments formatter."""
    from pygments.util import ClassNotFound

    from ..highlight import highlight

    config = _load_config(args)
    if config is None:
        return 1
    registry = _build_registry(config)

    source = _read_source(args)
    if source is None:
        return 1

    try:
        output = highlight(
            source,
            args.lang or config.highlight.default_alias,
            registry,
            formatter=args.format or config.highlight.formatter,
            strict=args.strict,
            style=args.style or config.highlight.style,
        )
    except (KeyError, ClassNotFound) as exc:
        message = exc.args[0] if exc.args else str(exc)
        print(f"Error: {message}", file=sys.stderr)
        return 1

    sys.stdout.write(output)
    return 0


def rules_command(args: argparse.Namespace) -> int:
    """Show the rule table registered for a language."""
    config = _load_config(args)
    if config is None:
        return 1
    registry = _build_registry(config)
    alias = args.lang or config.highlight.default_alias

    try:
        handler = registry.get(alias)
    except KeyError as exc:
        print(f"Error: {exc.args[0]}", file=sys.stderr)
        return 1

    groups = {
        "shortcut": [rule.describe() for rule in handler.shortcut_rules],
        "fallthrough": [rule.describe() for rule in handler.fallthrough_rules],
    }
    if args.json:
        print(json.dumps(groups, indent=2))
        return 0

    print(f"Language: {alias}")
    for group, rules in groups.items():
        print(f"\n{group.title()} rules:")
        if not rules:
            print("  (none)")
        for index, rule in enumerate(rules, 1):
            line = f"  {index}. {rule['category']:<12} {rule['pattern']}"
            if rule["shortcut_chars"]:
                line += f"  shortcuts={rule['shortcut_chars']!r}"
            print(line)
    return 0


def langs_command(args: argparse.Namespace) -> int:
    """List registered language aliases."""
    config = _load_config(args)
    if config is None:
        return 1
    registry = _build_registry(config)

    handlers: dict[int, list[str]] = {}
    lexers = {}
    for alias, handler in registry.items():
        handlers.setdefault(id(handler), []).append(alias)
        lexers[id(handler)] = handler

    for key, aliases in handlers.items():
        print(f"{', '.join(aliases)}: {lexers[key]!r}")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to an asmlex TOML config file.")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lang", help="Language alias (default from config).")
    parser.add_argument("--text", help="Source text to process.")
    parser.add_argument("--file", help="Source file to process.")


def register_parsers(subparsers: argparse._SubParsersAction) -> None:
    """Register lexer command parsers."""
    tokens_parser = subparsers.add_parser("tokens", help="Print tokens of a source text.")
    _add_source_arguments(tokens_parser)
    tokens_parser.add_argument("--json", action="store_true", help="Output JSON.")
    _add_common_arguments(tokens_parser)
    tokens_parser.set_defaults(func=tokens_command)

    hl_parser = subparsers.add_parser(
        "highlight", help="Render a source text with a Pygments formatter."
    )
    _add_source_arguments(hl_parser)
    hl_parser.add_argument("--format", help="Pygments formatter name (terminal, html, ...).")
    hl_parser.add_argument("--style", help="Pygments style name.")
    hl_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unknown languages instead of using the default handler.",
    )
    _add_common_arguments(hl_parser)
    hl_parser.set_defaults(func=highlight_command)

    rules_parser = subparsers.add_parser("rules", help="Show a language's rule table.")
    rules_parser.add_argument("--lang", help="Language alias (default from config).")
    rules_parser.add_argument("--json", action="store_true", help="Output JSON.")
    _add_common_arguments(rules_parser)
    rules_parser.set_defaults(func=rules_command)

    langs_parser = subparsers.add_parser("langs", help="List registered languages.")
    _add_common_arguments(langs_parser)
    langs_parser.set_defaults(func=langs_command)
