"""Reference scanning engine for rule tables.

The lexer walks the input left to right. At each offset it:

1. dispatches on the current character if a shortcut rule claims it,
2. otherwise tries the shortcut rules, then the fallthrough rules, in order,
3. falls back to a one-character PLAIN token so scanning always progresses.

Rule order is priority: the first rule that matches at the offset wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from .rules import Rule
from .tokens import Token, TokenCategory

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = TokenCategory.PLAIN


class SimpleLexer:
    """Lexer built from a shortcut rule group and a fallthrough rule group."""

    def __init__(
        self,
        shortcut_rules: Iterable[Rule],
        fallthrough_rules: Iterable[Rule],
    ):
        self.shortcut_rules: tuple[Rule, ...] = tuple(shortcut_rules)
        self.fallthrough_rules: tuple[Rule, ...] = tuple(fallthrough_rules)

        # Later rules claim a shared shortcut character.
        shortcuts: dict[str, Rule] = {}
        for rule in self.shortcut_rules + self.fallthrough_rules:
            for char in rule.shortcut_chars:
                shortcuts[char] = rule
        self._shortcuts = shortcuts

        logger.debug(
            "Created lexer with %d shortcut and %d fallthrough rules",
            len(self.shortcut_rules),
            len(self.fallthrough_rules),
        )

    @property
    def rules(self) -> tuple[Rule, ...]:
        """All rules in priority order."""
        return self.shortcut_rules + self.fallthrough_rules

    @property
    def shortcut_chars(self) -> frozenset[str]:
        return frozenset(self._shortcuts)

    def _match_at(self, text: str, pos: int) -> tuple[str, TokenCategory]:
        rule = self._shortcuts.get(text[pos])
        if rule is not None:
            value = rule.match(text, pos)
            if value is not None:
                return value, rule.category

        for rule in self.rules:
            value = rule.match(text, pos)
            if value is not None:
                return value, rule.category

        return text[pos], DEFAULT_CATEGORY

    def iter_tokens(self, text: str) -> Iterator[Token]:
        """Iterate over tokens without building full list."""
        pos = 0
        end = len(text)
        while pos < end:
            value, category = self._match_at(text, pos)
            yield Token(
                text=value,
                category=category,
                start=pos,
                end=pos + len(value),
            )
            pos += len(value)

    def tokenize(self, text: str) -> list[Token]:
        """Tokenize source text.

        Args:
            text: Source code.

        Returns:
            List of Token objects whose texts concatenate back to ``text``.
        """
        return list(self.iter_tokens(text))

    def decorate(
        self, text: str, base_pos: int = 0
    ) -> list[tuple[int, TokenCategory]]:
        """Return ``(offset, category)`` style boundaries for ``text``.

        Each entry marks where a run of one category starts; adjacent tokens
        of the same category are merged into one run.
        """
        decorations: list[tuple[int, TokenCategory]] = []
        for token in self.iter_tokens(text):
            if decorations and decorations[-1][1] is token.category:
                continue
            decorations.append((base_pos + token.start, token.category))
        return decorations

    def __repr__(self) -> str:
        return (
            f"SimpleLexer(shortcut_rules={len(self.shortcut_rules)}, "
            f"fallthrough_rules={len(self.fallthrough_rules)})"
        )


def create_simple_lexer(
    shortcut_rules: Sequence[Rule],
    fallthrough_rules: Sequence[Rule],
) -> SimpleLexer:
    """Build a lexer from the two ordered rule groups."""
    return SimpleLexer(shortcut_rules, fallthrough_rules)
