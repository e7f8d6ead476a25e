"""Logging helpers for the type checker.

Unification writes its trace at info level on the ``viskell`` logger,
which stays at WARNING unless configured otherwise. Call
``configure(level="INFO")`` to see the trace while debugging.
"""

from __future__ import annotations

import logging
import logging.config
from threading import RLock
from typing import Any

_CONFIG_LOCK = RLock()
_CONFIGURED = False

DEFAULT_LEVEL = "WARNING"


def _dict_config(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "formatter": "standard",
            },
        },
        "loggers": {
            "viskell": {
                "level": level,
                "handlers": ["console"],
                "propagate": True,
            },
        },
    }


def configure(level: str | None = None, *, force: bool = False) -> None:
    """Configure the ``viskell`` logger.

    The first call installs the handler; later calls only change the level
    when one is given, unless `force` reinstalls the whole configuration.

    Args:
        level: Logging level name, e.g. "INFO"
        force: Reapply the dictionary configuration

    Raises:
        ValueError: If the level name is unknown.

    """
    global _CONFIGURED  # noqa: PLW0603
    if level is not None:
        level = level.upper()
        if not isinstance(logging.getLevelName(level), int):
            msg = f"Unknown logging level: {level!r}"
            raise ValueError(msg)
    with _CONFIG_LOCK:
        if _CONFIGURED and not force:
            if level is not None:
                logging.getLogger("viskell").setLevel(level)
            return
        logging.config.dictConfig(_dict_config(level or DEFAULT_LEVEL))
        _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the configured ``viskell`` logger."""
    if not isinstance(name, str) or not name:
        msg = "logger name must be a non-empty string"
        raise ValueError(msg)
    configure()
    return logging.getLogger(name)


__all__ = ["configure", "get_logger"]
