#!/usr/bin/env python3
"""
Logging setup for struct-infer.

All loggers hang off the `struct_infer` logger, which owns the handlers:
one on stderr (colored when stderr is a terminal) and, with `--log-file`,
rotating files. stdout carries generated declarations only, so nothing here
ever writes to it.

The default level is WARNING; inference reports collisions and run summaries
at INFO and interning detail at DEBUG.
"""
from __future__ import annotations

import copy
import functools
import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Dict, Optional, Union

from .constants import (
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    LOG_FILE_BACKUP_COUNT,
    MAX_LOG_FILE_SIZE,
)

ROOT_LOGGER_NAME = "struct_infer"

Level = Union[str, int]


class ColoredFormatter(logging.Formatter):
    """Wraps the level name in an ANSI color for terminal output."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color:
            # the file handler formats the same record
            record = copy.copy(record)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def _coerce_level(level: Level) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper())
    return level


def _rotating_file_handler(path: Union[str, Path], level: int) -> logging.Handler:
    log_path = Path(path)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=MAX_LOG_FILE_SIZE * 1024 * 1024,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
    return handler


class StructInferLogger:
    """Owns the handlers of the `struct_infer` logger tree."""

    _configured = False
    _loggers: Dict[str, logging.Logger] = {}

    @classmethod
    def setup_logging(
        cls, level: Level = DEFAULT_LOG_LEVEL, log_file: Optional[Union[str, Path]] = None
    ) -> None:
        """Install the stderr handler (and a file handler); runs once per process."""
        if cls._configured:
            return

        level = _coerce_level(level)
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(level)
        root.handlers.clear()

        console = logging.StreamHandler(sys.stderr)
        console.setLevel(level)
        formatter_class = ColoredFormatter if sys.stderr.isatty() else logging.Formatter
        console.setFormatter(formatter_class(DEFAULT_LOG_FORMAT))
        root.addHandler(console)

        if log_file:
            root.addHandler(_rotating_file_handler(log_file, level))

        # keep records away from the application's root logger
        root.propagate = False
        cls._configured = True

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """Logger for `name`, placed under `struct_infer.` if it is not already."""
        cls.setup_logging()

        if not name.startswith(ROOT_LOGGER_NAME):
            name = f"{ROOT_LOGGER_NAME}.{name}"
        if name not in cls._loggers:
            cls._loggers[name] = logging.getLogger(name)
        return cls._loggers[name]

    @classmethod
    def set_level(cls, level: Level) -> None:
        """Apply `level` to the tree and to every installed handler."""
        level = _coerce_level(level)
        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(level)
        for handler in root.handlers:
            handler.setLevel(level)

    @classmethod
    def add_file_handler(cls, log_file: Union[str, Path], level: Optional[Level] = None) -> None:
        """Also write records to `log_file`, at the tree's level unless given."""
        root = logging.getLogger(ROOT_LOGGER_NAME)
        handler_level = root.level if level is None else _coerce_level(level)
        root.addHandler(_rotating_file_handler(log_file, handler_level))


def get_logger(name: str) -> logging.Logger:
    """Module-level shortcut: `logger = get_logger(__name__)`."""
    return StructInferLogger.get_logger(name)


def log_performance(func):
    """Log the wall time of `func` at DEBUG; exceptions pass through."""
    logger = get_logger(func.__module__)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        started = time.time()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.debug("%s failed after %.3fs: %s", func.__name__, time.time() - started, e)
            raise
        logger.debug("%s finished in %.3fs", func.__name__, time.time() - started)
        return result

    return wrapper


__all__ = [
    "StructInferLogger",
    "ColoredFormatter",
    "get_logger",
    "log_performance",
]
