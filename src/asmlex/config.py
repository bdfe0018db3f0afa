"""Config loader for asmlex."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from .schema import AsmlexConfig

CONFIG_ENV_VAR = "ASMLEX_CONFIG_PATH"
LOCAL_CONFIG_NAME = "asmlex.toml"


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_path(path: str | Path) -> Path:
    return Path(path).expanduser().resolve()


def _read_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _expand_config_paths(config_data: dict[str, Any]) -> None:
    plugins = config_data.get("plugins")
    if isinstance(plugins, dict) and "plugin_dirs" in plugins:
        plugins["plugin_dirs"] = [_expand_path(p) for p in plugins["plugin_dirs"]]

    logging_data = config_data.get("logging")
    if isinstance(logging_data, dict) and logging_data.get("log_dir"):
        logging_data["log_dir"] = _expand_path(logging_data["log_dir"])


def user_config_path() -> Path:
    return Path.home() / ".config" / "asmlex" / "config.toml"


def load_config(config_path: Path | None = None, merge_user: bool = True) -> dict[str, Any]:
    """Load configuration with basic precedence and path expansion.

    User config is overridden by ``./asmlex.toml``, which is overridden by an
    explicit path (or ``$ASMLEX_CONFIG_PATH``). Missing files are skipped;
    malformed TOML raises ``tomllib.TOMLDecodeError``.
    """
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if config_path is None and env_config:
        config_path = Path(env_config).expanduser()

    config_data: dict[str, Any] = {}

    if merge_user:
        user_path = user_config_path()
        if user_path.exists():
            config_data = _deep_merge(config_data, _read_toml(user_path))

    local_path = Path(LOCAL_CONFIG_NAME)
    if local_path.exists():
        config_data = _deep_merge(config_data, _read_toml(local_path))

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        config_data = _deep_merge(config_data, _read_toml(config_path))

    _expand_config_paths(config_data)
    return config_data


def load_config_model(
    config_path: Path | None = None,
    merge_user: bool = True,
) -> AsmlexConfig:
    """Load configuration and return a typed model."""
    data = load_config(config_path=config_path, merge_user=merge_user)
    return AsmlexConfig.from_dict(data)
