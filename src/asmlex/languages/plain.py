"""Plain-text handler used when a block's language is unknown."""

from __future__ import annotations

from ..lexer import SimpleLexer, create_simple_lexer
from ..registry import DEFAULT_ALIAS, LanguageRegistry
from ..rules import make_rule
from ..tokens import TokenCategory

ALIASES = (DEFAULT_ALIAS, "text", "plain")

FALLTHROUGH_RULES = (
    make_rule(TokenCategory.PLAIN, r"[\s\S]+"),
)


def create_lexer() -> SimpleLexer:
    return create_simple_lexer((), FALLTHROUGH_RULES)


def register(registry: LanguageRegistry) -> SimpleLexer:
    lexer = create_lexer()
    registry.register_lang_handler(lexer, ALIASES)
    return lexer
