"""Tokenization rules.

A rule pairs a token category with a regular expression. Patterns are applied
with ``Pattern.match(text, pos)``, so every rule is implicitly anchored at the
current scan offset; use ``\\Z`` (not ``$``) for "end of input".
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .tokens import TokenCategory


@dataclass(frozen=True)
class Rule:
    """A single (category, pattern) entry of a rule table."""

    category: TokenCategory
    pattern: re.Pattern[str]
    shortcut_chars: frozenset[str] = frozenset()

    def match(self, text: str, pos: int = 0) -> str | None:
        """Return the non-empty text matched at ``pos``, or None."""
        found = self.pattern.match(text, pos)
        if found is None or found.end() == pos:
            return None
        return found.group(0)

    def describe(self) -> dict[str, object]:
        return {
            "category": self.category.name,
            "pattern": self.pattern.pattern,
            "ignore_case": bool(self.pattern.flags & re.IGNORECASE),
            "shortcut_chars": "".join(sorted(self.shortcut_chars)),
        }


def make_rule(
    category: TokenCategory | str,
    pattern: str | re.Pattern[str],
    shortcut_chars: str | None = None,
    ignore_case: bool = False,
) -> Rule:
    """Build a rule, compiling ``pattern`` if needed.

    Args:
        category: Token category (member, value like ``"kwd"`` or name).
        pattern: Regular expression source or compiled pattern.
        shortcut_chars: Characters that dispatch straight to this rule.
        ignore_case: Compile the pattern case-insensitively.

    Raises:
        ValueError: Unknown category or empty pattern.
        re.error: Malformed pattern.
    """
    resolved = TokenCategory.parse(category)

    if isinstance(pattern, re.Pattern):
        if not pattern.pattern:
            raise ValueError("Rule pattern must not be empty")
        compiled = pattern
        if ignore_case and not compiled.flags & re.IGNORECASE:
            compiled = re.compile(compiled.pattern, compiled.flags | re.IGNORECASE)
    else:
        if not pattern:
            raise ValueError("Rule pattern must not be empty")
        compiled = re.compile(pattern, re.IGNORECASE if ignore_case else 0)

    return Rule(
        category=resolved,
        pattern=compiled,
        shortcut_chars=frozenset(shortcut_chars or ""),
    )
