"""Built-in language handlers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import asm, plain

if TYPE_CHECKING:
    from ..registry import LanguageRegistry

BUILTIN_LANGUAGES = (asm, plain)


def register_builtin_languages(registry: LanguageRegistry) -> None:
    for module in BUILTIN_LANGUAGES:
        module.register(registry)


__all__ = ["BUILTIN_LANGUAGES", "asm", "plain", "register_builtin_languages"]
