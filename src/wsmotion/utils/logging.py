"""Logging setup for the wsmotion editor."""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

__all__ = ["setup_logging", "get_logger", "get_log_path", "set_motion_tracing"]

LOG_FILE_NAME = "wsmotion.log"
_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_DEFAULT_LOG_DIR = Path.home() / ".wsmotion" / "logs"
# Qt debug chatter is routed through the "PySide6" logger by the app
_QUIET_LOGGERS: tuple[str, ...] = ("asyncio", "PySide6")
_MOTION_LOGGER = "wsmotion.motion"

_log_path: Path | None = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    console: bool = True,
    max_bytes: int = 1_000_000,
    backup_count: int = 3,
    force: bool = False,
) -> Path:
    """Send root logging to a rotating ``wsmotion.log`` and, optionally, stderr.

    Calling again without ``force`` keeps the first configuration. Handlers
    carry no level of their own, so :func:`set_motion_tracing` can let motion
    debug records through while the root stays at ``level``.
    """

    global _log_path
    if _log_path is not None and not force:
        return _log_path

    directory = Path(log_dir or os.environ.get("WSMOTION_LOG_DIR") or _DEFAULT_LOG_DIR).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / LOG_FILE_NAME

    logging.basicConfig(
        level=level,
        handlers=_build_handlers(path, console=console, max_bytes=max_bytes, backup_count=backup_count),
        force=True,
    )
    logging.captureWarnings(True)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    _log_path = path
    return path


def _build_handlers(path: Path, *, console: bool, max_bytes: int, backup_count: int) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)
    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    ]
    if console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def get_log_path() -> Path | None:
    """Return the active log file, or ``None`` before :func:`setup_logging` runs."""

    return _log_path


def set_motion_tracing(enabled: bool) -> None:
    """Log every cursor-motion decision at debug level, independent of the root level."""

    logging.getLogger(_MOTION_LOGGER).setLevel(logging.DEBUG if enabled else logging.NOTSET)
