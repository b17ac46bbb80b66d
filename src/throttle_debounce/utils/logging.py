"""Package loggers and structured event helper.

Every module logger is created through :func:`get_logger`, which attaches one
handler configured from ``Settings``: ``log_format`` picks JSON or text output
(``auto`` means JSON in production), ``log_stream`` the target stream and
``log_level`` the threshold.
"""

import logging
import sys
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from throttle_debounce.config import Settings, settings

_JSON_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s"
_TEXT_FIELDS = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def resolve_format(config: Settings) -> str:
    if config.log_format != "auto":
        return config.log_format
    return "json" if config.environment == "production" else "text"


def build_formatter(config: Settings) -> logging.Formatter:
    if resolve_format(config) == "json":
        return jsonlogger.JsonFormatter(fmt=_JSON_FIELDS, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(fmt=_TEXT_FIELDS, datefmt="%H:%M:%S")


def build_handler(config: Settings) -> logging.Handler:
    stream = sys.stdout if config.log_stream == "stdout" else sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(build_formatter(config))
    return handler


def get_logger(name: str, config: Optional[Settings] = None) -> logging.Logger:
    """Return the logger for ``name`` with the package handler attached once.

    Args:
        name: Logger name (usually __name__)
        config: Settings to configure from; the global instance by default
    """
    config = config or settings
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.addHandler(build_handler(config))
        logger.setLevel(config.log_level)
    return logger


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **payload: Any) -> None:
    """Emit a structured record; the JSON formatter flattens ``extra`` fields."""
    structured: Dict[str, Any] = {"event": event, **payload}
    logger.log(level, event, extra=structured)
