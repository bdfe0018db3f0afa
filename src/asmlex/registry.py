"""Language handler registry.

Maps source-block language aliases (``asm``, ``att``, ...) to the lexer that
tokenizes them. A registry is created once and passed explicitly to the
routines that populate it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import ModuleType

from .lexer import SimpleLexer

logger = logging.getLogger(__name__)

DEFAULT_ALIAS = "default-code"


def _normalize_alias(alias: str) -> str:
    return alias.strip().lower()


class LanguageRegistry:
    """Alias-to-handler map for language lexers."""

    def __init__(self) -> None:
        self._handlers: dict[str, SimpleLexer] = {}

    def register_lang_handler(
        self, handler: SimpleLexer, aliases: Iterable[str]
    ) -> list[str]:
        """Register ``handler`` under each of ``aliases``.

        An alias that is already registered keeps its existing handler.

        Returns:
            The aliases that were newly registered.
        """
        if isinstance(aliases, str):
            aliases = [aliases]

        registered: list[str] = []
        for alias in aliases:
            key = _normalize_alias(alias)
            if not key:
                raise ValueError("Language alias must not be empty")
            if key in self._handlers:
                logger.warning("cannot override language handler %s", key)
                continue
            self._handlers[key] = handler
            registered.append(key)

        logger.debug("Registered language handler for %s", ", ".join(registered))
        return registered

    def get(self, alias: str) -> SimpleLexer:
        """Return the handler for ``alias`` or raise KeyError."""
        key = _normalize_alias(alias)
        try:
            return self._handlers[key]
        except KeyError:
            raise KeyError(f"No language handler registered for {alias!r}") from None

    def lookup(self, alias: str, default: SimpleLexer | None = None) -> SimpleLexer | None:
        return self._handlers.get(_normalize_alias(alias), default)

    def handler_for(self, alias: str | None) -> SimpleLexer:
        """Return the handler for ``alias``, falling back to the default handler."""
        if alias:
            handler = self.lookup(alias)
            if handler is not None:
                return handler
        handler = self.lookup(DEFAULT_ALIAS)
        if handler is None:
            raise KeyError(
                f"No language handler registered for {alias!r} and no default handler"
            )
        return handler

    def aliases(self) -> list[str]:
        return sorted(self._handlers)

    def items(self) -> Iterator[tuple[str, SimpleLexer]]:
        for alias in self.aliases():
            yield alias, self._handlers[alias]

    def __contains__(self, alias: object) -> bool:
        return isinstance(alias, str) and _normalize_alias(alias) in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)


def create_default_registry(
    plugins: Iterable[ModuleType] | None = None,
) -> LanguageRegistry:
    """Build a registry holding the built-in languages and any plugins."""
    from .languages import register_builtin_languages
    from .plugins import register_plugins

    registry = LanguageRegistry()
    register_builtin_languages(registry)
    if plugins:
        register_plugins(registry, plugins)
    return registry
