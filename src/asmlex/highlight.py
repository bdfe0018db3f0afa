"""Pygments integration.

Rule-table lexers are exposed to Pygments through ``RuleTableLexer`` so any
Pygments formatter (terminal, HTML, ...) can render them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import pygments
from pygments.filter import apply_filters
from pygments.formatters import get_formatter_by_name
from pygments.lexer import Lexer
from pygments.token import (
    Comment,
    Keyword,
    Literal,
    Punctuation,
    String,
    Text,
    _TokenType,
)

from .languages import asm
from .lexer import SimpleLexer
from .registry import LanguageRegistry
from .tokens import TokenCategory

logger = logging.getLogger(__name__)

CATEGORY_TOKEN_TYPES: dict[TokenCategory, _TokenType] = {
    TokenCategory.PLAIN: Text,
    TokenCategory.STRING: String,
    TokenCategory.COMMENT: Comment,
    TokenCategory.LITERAL: Literal,
    TokenCategory.KEYWORD: Keyword,
    TokenCategory.PUNCTUATION: Punctuation,
}


class RuleTableLexer(Lexer):
    """Pygments lexer that delegates scanning to a ``SimpleLexer``."""

    name = "Rule table"
    aliases: list[str] = []
    filenames: list[str] = []

    def __init__(self, handler: SimpleLexer, **options: Any):
        super().__init__(**options)
        self.handler = handler

    def get_tokens(
        self, text: str | bytes, unfiltered: bool = False
    ) -> Iterator[tuple[_TokenType, str]]:
        """Stream ``(tokentype, value)`` pairs for ``text`` exactly as given.

        Unlike the base class, no newline conversion, stripping or trailing
        newline is applied, so token values concatenate back to ``text``.
        """
        if isinstance(text, bytes):
            encoding = self.encoding if self.encoding not in ("guess", "chardet") else "utf-8"
            text = text.decode(encoding)

        stream = ((ttype, value) for _, ttype, value in self.get_tokens_unprocessed(text))
        if not unfiltered:
            stream = apply_filters(stream, self.filters, self)
        return stream

    def get_tokens_unprocessed(self, text: str) -> Iterator[tuple[int, _TokenType, str]]:
        for token in self.handler.iter_tokens(text):
            yield token.start, CATEGORY_TOKEN_TYPES[token.category], token.text


class AsmAttLexer(RuleTableLexer):
    """
    Lexer for AT&T-style assembly listings (``%reg``, ``$imm``, ``#`` comments).
    """

    name = "AT&T Assembly (asmlex)"
    aliases = ["att", "asmlex"]
    filenames = ["*.s"]
    mimetypes = ["text/x-att-asm"]

    def __init__(self, **options: Any):
        super().__init__(asm.create_lexer(), **options)


def highlight(
    source: str,
    alias: str | None,
    registry: LanguageRegistry,
    formatter: str = "terminal",
    strict: bool = False,
    **options: Any,
) -> str:
    """Render ``source`` with the handler registered for ``alias``.

    Args:
        source: Text to highlight.
        alias: Language alias; unknown aliases use the default handler unless
            ``strict`` is set.
        registry: Registry holding the language handlers.
        formatter: Pygments formatter name (``terminal``, ``html``, ...).
        strict: Raise KeyError for an unknown alias.
        **options: Formatter options (``style``, ``full``, ...).

    Raises:
        KeyError: Unknown alias in strict mode, or no default handler.
        pygments.util.ClassNotFound: Unknown formatter name.
    """
    if strict:
        handler = registry.get(alias or "")
    else:
        if alias and alias not in registry:
            logger.info("No handler for %r, using default handler", alias)
        handler = registry.handler_for(alias)

    lexer = RuleTableLexer(handler)
    return pygments.highlight(source, lexer, get_formatter_by_name(formatter, **options))


def to_pygments_tokens(handler: SimpleLexer, text: str) -> list[tuple[_TokenType, str]]:
    """Return ``(tokentype, value)`` pairs as Pygments would stream them."""
    return list(RuleTableLexer(handler).get_tokens(text))
