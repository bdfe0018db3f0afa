"""Configuration schema for asmlex."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


def _as_path(value: str | Path) -> Path:
    return value if isinstance(value, Path) else Path(value).expanduser().resolve()


def _as_str_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


@dataclass
class HighlightConfig:
    default_alias: str = "asm"
    formatter: str = "terminal"
    style: str = "default"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HighlightConfig":
        defaults = cls()
        values = {}
        for key in ("default_alias", "formatter", "style"):
            raw = data.get(key)
            values[key] = raw.strip() if isinstance(raw, str) and raw.strip() else getattr(defaults, key)
        return cls(**values)


@dataclass
class PluginsConfig:
    enabled_plugins: list[str] = field(default_factory=list)
    plugin_dirs: list[Path] = field(default_factory=list)
    auto_discover: bool = False
    auto_discover_prefixes: list[str] = field(default_factory=lambda: ["asmlex_lang"])

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PluginsConfig":
        enabled = _as_str_list(data.get("enabled_plugins"))
        plugin_dirs = [
            _as_path(path)
            for path in data.get("plugin_dirs", [])
            if isinstance(path, (str, Path))
        ]
        auto_discover = bool(data.get("auto_discover", False))
        prefixes = _as_str_list(data.get("auto_discover_prefixes")) or ["asmlex_lang"]
        return cls(
            enabled_plugins=enabled,
            plugin_dirs=plugin_dirs,
            auto_discover=auto_discover,
            auto_discover_prefixes=prefixes,
        )


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    json: bool = False
    log_dir: Path | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LoggingConfig":
        level = data.get("level", "WARNING")
        if not isinstance(level, str) or level.upper() not in logging.getLevelNamesMapping():
            level = "WARNING"
        log_dir = data.get("log_dir")
        return cls(
            level=level.upper(),
            json=bool(data.get("json", False)),
            log_dir=_as_path(log_dir) if log_dir else None,
        )

    @property
    def level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.level]


@dataclass
class AsmlexConfig:
    highlight: HighlightConfig = field(default_factory=HighlightConfig)
    plugins: PluginsConfig = field(default_factory=PluginsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AsmlexConfig":
        highlight = data.get("highlight", {})
        plugins = data.get("plugins", {})
        logging_data = data.get("logging", {})
        return cls(
            highlight=HighlightConfig.from_dict(highlight if isinstance(highlight, dict) else {}),
            plugins=PluginsConfig.from_dict(plugins if isinstance(plugins, dict) else {}),
            logging=LoggingConfig.from_dict(logging_data if isinstance(logging_data, dict) else {}),
        )
