"""Logging configuration for asmlex.

Provides:
- Plain console output on stderr
- Optional JSON log file with rotation for log aggregation

Usage:
    from asmlex.logging_config import setup_logging

    logger = setup_logging(level=logging.DEBUG)
    logger.debug("Registered handlers", extra={"aliases": ["asm", "att"]})
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path

# Attributes present on every LogRecord; anything else came from ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    @staticmethod
    def _utc_isoformat() -> str:
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self._utc_isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_data, default=str)


def setup_logging(
    name: str = "asmlex",
    level: int = logging.WARNING,
    log_dir: Path | None = None,
    enable_json: bool = False,
    enable_console: bool = True,
) -> logging.Logger:
    """Set up logging for the ``asmlex`` logger tree.

    Args:
        name: Logger name
        level: Logging level
        log_dir: Directory for the rotating log file (no file if None)
        enable_json: Use JSON formatter for the console as well
        enable_console: Log to stderr

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        if enable_json:
            console_handler.setFormatter(JSONFormatter())
        else:
            console_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
                    datefmt="%H:%M:%S",
                )
            )
        logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / f"{name}.json.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``asmlex`` namespace."""
    if name == "asmlex" or name.startswith("asmlex."):
        return logging.getLogger(name)
    return logging.getLogger(f"asmlex.{name}")


__all__ = ["JSONFormatter", "get_logger", "setup_logging"]
