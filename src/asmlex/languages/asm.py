"""Rule table for AT&T-style assembly listings.

Handles blocks tagged ``asm`` or ``att``. Shortcut rules cover constructs that
are recognizable from their first character (whitespace, strings, comments);
the fallthrough rules cover sigil tokens, identifiers, numbers and
punctuation. Order within each group is priority.
"""

from __future__ import annotations

from ..lexer import SimpleLexer, create_simple_lexer
from ..registry import LanguageRegistry
from ..rules import make_rule
from ..tokens import TokenCategory

ALIASES = ("asm", "att")

SHORTCUT_RULES = (
    # Whitespace, including non-breaking space
    make_rule(TokenCategory.PLAIN, r"[\t\n\r \xA0]+", "\t\n\r \xA0"),

    # Strings, optionally !-prefixed; unterminated strings run to end of input
    make_rule(TokenCategory.STRING, r'!?"(?:[^"\\]|\\[\s\S])*(?:"|\Z)', '"'),

    # Comments through end of line
    make_rule(TokenCategory.COMMENT, r"#[^\r\n]*", "#"),
)

FALLTHROUGH_RULES = (
    # Registers and parameters (%eax, @plt, !1)
    make_rule(TokenCategory.PLAIN, r"[%@!](?:[-a-zA-Z$._][-a-zA-Z$._0-9]*|\d+)"),

    # Mnemonics, directives without the dot, labels
    make_rule(TokenCategory.KEYWORD, r"[A-Za-z_][0-9A-Za-z_]*"),

    # Immediates and addresses ($7, 42, 0x1F); hex is tried before decimal
    make_rule(TokenCategory.LITERAL, r"\$?(?:0[xX][a-fA-F0-9]+|\d+)"),

    # Single-character punctuation, or an ellipsis closing the input
    make_rule(TokenCategory.PUNCTUATION, r"[()\[\]{},=*<>:]|\.\.\.\Z"),
)


def create_lexer() -> SimpleLexer:
    return create_simple_lexer(SHORTCUT_RULES, FALLTHROUGH_RULES)


def register(registry: LanguageRegistry) -> SimpleLexer:
    """Register the assembly lexer under ``asm`` and ``att``."""
    lexer = create_lexer()
    registry.register_lang_handler(lexer, ALIASES)
    return lexer
