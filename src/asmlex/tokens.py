"""Token categories and scanned tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenCategory(str, Enum):
    """Token kinds understood by the highlighting host.

    Values are the CSS class names the host emits for each span.
    """

    PLAIN = "pln"
    STRING = "str"
    COMMENT = "com"
    LITERAL = "lit"
    KEYWORD = "kwd"
    PUNCTUATION = "pun"

    @classmethod
    def parse(cls, value: TokenCategory | str) -> TokenCategory:
        """Resolve a category from an enum member, its value, or its name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
            try:
                return cls[value.upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown token category: {value!r}")


@dataclass(frozen=True)
class Token:
    """A scanned span of source text."""
    text: str
    category: TokenCategory
    start: int  # Character offset in original text
    end: int

    def to_dict(self) -> dict[str, object]:
        return {
            "text": self.text,
            "category": self.category.name,
            "start": self.start,
            "end": self.end,
        }
