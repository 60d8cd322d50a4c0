"""Package-wide logging with a replaceable logger."""

from __future__ import annotations

import enum
import logging
from logging.handlers import RotatingFileHandler
from os import PathLike
from types import SimpleNamespace
from typing import Any


class LogLevel(enum.IntEnum):
    """Severity of a log record."""

    DEBUG = -1
    INFO = 0
    WARN = 1
    ERROR = 2
    PANIC = 4
    FATAL = 5

    @classmethod
    def parse(cls, text: str | bytes) -> "LogLevel":
        """Parse a level name, case-insensitively; the empty string means INFO."""
        raw = text.decode("utf-8", "replace") if isinstance(text, (bytes, bytearray)) else text
        if raw is None:
            raise ValueError("can't parse a missing level")
        level = _LEVEL_NAMES.get(raw.lower())
        if level is None:
            raise ValueError(f"unrecognized level: {raw!r}")
        return level

    @property
    def logging_level(self) -> int:
        """The matching level of the standard logging module."""
        return _STD_LEVELS[self]


_LEVEL_NAMES = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "": LogLevel.INFO,
    "warn": LogLevel.WARN,
    "error": LogLevel.ERROR,
    "panic": LogLevel.PANIC,
    "fatal": LogLevel.FATAL,
}

_STD_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.PANIC: logging.CRITICAL,
    LogLevel.FATAL: logging.CRITICAL,
}

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5
_FILE_FORMAT = "%(asctime)s\t%(levelname)s\t%(filename)s:%(lineno)d\t%(message)s"

_state = SimpleNamespace(logger=logging.getLogger("arana"))


def init(log_path: str | PathLike[str], level: LogLevel) -> logging.Logger:
    """Log to a size-rotated file at the given level, and return that logger."""
    file_logger = logging.getLogger("arana.file")
    for handler in list(file_logger.handlers):
        file_logger.removeHandler(handler)
        handler.close()
    handler = RotatingFileHandler(
        log_path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    file_logger.addHandler(handler)
    file_logger.setLevel(LogLevel(level).logging_level)
    file_logger.propagate = False
    set_logger(file_logger)
    return file_logger


def set_logger(logger: Any) -> None:
    """Use a custom logger with debug, info, warning, error and critical methods."""
    _state.logger = logger


def get_logger() -> Any:
    """Return the logger in use."""
    return _state.logger


def _format(msg: Any, args: tuple[Any, ...]) -> str:
    return str(msg) % args if args else str(msg)


def debug(msg: Any, *args: Any) -> None:
    _state.logger.debug(msg, *args)


def info(msg: Any, *args: Any) -> None:
    _state.logger.info(msg, *args)


def warn(msg: Any, *args: Any) -> None:
    _state.logger.warning(msg, *args)


def error(msg: Any, *args: Any) -> None:
    _state.logger.error(msg, *args)


def panic(msg: Any, *args: Any) -> None:
    """Log the message at the highest level, then raise RuntimeError with it."""
    _state.logger.critical(msg, *args)
    raise RuntimeError(_format(msg, args))


def fatal(msg: Any, *args: Any) -> None:
    """Log the message at the highest level, then exit with status 1."""
    _state.logger.critical(msg, *args)
    raise SystemExit(1)