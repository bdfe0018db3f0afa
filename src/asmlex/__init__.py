"""Rule-table syntax highlighting for assembly listings."""

__version__ = "0.1.0"

from .lexer import SimpleLexer, create_simple_lexer
from .registry import LanguageRegistry, create_default_registry
from .rules import Rule, make_rule
from .tokens import Token, TokenCategory

__all__ = [
    "LanguageRegistry",
    "Rule",
    "SimpleLexer",
    "Token",
    "TokenCategory",
    "create_default_registry",
    "create_simple_lexer",
    "make_rule",
]
