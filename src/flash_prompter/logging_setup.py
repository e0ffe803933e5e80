"""Root logger configuration: a rotating log file plus stderr."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path

LOG_LEVEL_ENV = "FLASH_PROMPTER_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"
LOG_FILE_NAME = "app.log"
MAX_LOG_BYTES = 2_000_000
LOG_BACKUPS = 5

logger = logging.getLogger(__name__)


def _default_log_dir() -> Path:
    local_appdata = os.getenv("LOCALAPPDATA")
    if local_appdata:
        return Path(local_appdata) / "FlashPrompter" / "logs"
    return Path.home() / ".flash_prompter" / "logs"


def _resolve_level() -> int:
    """Level named by the environment; unknown names mean INFO."""
    level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _is_console_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, logging.FileHandler
    )


def init_logging() -> Path:
    """Attach file and console handlers to the root logger.

    Safe to call repeatedly: a handler kind already present is left alone.
    Returns the log file path.
    """
    log_path = _default_log_dir() / LOG_FILE_NAME
    level = _resolve_level()
    root = logging.getLogger()
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    wanted: list[logging.Handler] = []
    try:
        if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
            log_path.parent.mkdir(parents=True, exist_ok=True)
            wanted.append(
                RotatingFileHandler(
                    log_path,
                    maxBytes=MAX_LOG_BYTES,
                    backupCount=LOG_BACKUPS,
                    encoding="utf-8",
                )
            )
    except OSError:
        # Unwritable log dir: console only.
        logging.basicConfig(level=level, format=LOG_FORMAT)
    if not any(_is_console_handler(h) for h in root.handlers):
        wanted.append(logging.StreamHandler())
    for handler in wanted:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logger.info("Logging to %s at %s", log_path, logging.getLevelName(level))
    return log_path


def set_console_level(level: int) -> None:
    """Change only the stderr handlers, leaving the log file verbose."""
    for handler in logging.getLogger().handlers:
        if _is_console_handler(handler):
            handler.setLevel(level)
