"""Logging setup with an optionally coloured text handler."""

from __future__ import annotations

import logging
import os
import threading
import time
from datetime import datetime
from typing import Any, MutableMapping, TextIO

_START = time.monotonic()

_LEVEL_STRINGS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}

_LEVEL_COLORS = {
    logging.DEBUG: 37,
    logging.INFO: 34,
    logging.WARNING: 33,
    logging.ERROR: 31,
    logging.CRITICAL: 31,
}

_ENV_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}

LOGGER_NAME = "akcli"


def _nearest(table: dict[int, Any], levelno: int) -> Any:
    key = max((lvl for lvl in table if lvl <= levelno), default=logging.DEBUG)
    return table[key]


class Handler(logging.Handler):
    """Writes log lines with fields, coloured for terminals and plain for files."""

    def __init__(self, stream: TextIO, with_colors: bool = True) -> None:
        super().__init__()
        self.stream = stream
        self.with_colors = with_colors
        self._mutex = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        color = _nearest(_LEVEL_COLORS, record.levelno)
        level = _nearest(_LEVEL_STRINGS, record.levelno)
        fields: dict[str, Any] = getattr(record, "fields", None) or {}
        message = record.getMessage()

        parts = []
        if self.with_colors:
            elapsed = int(time.monotonic() - _START)
            parts.append(f"\033[{color}m{level:>6}\033[0m[{elapsed:04d}] {message:<25}")
        else:
            stamp = datetime.now().astimezone().isoformat(timespec="seconds")
            parts.append(f"[{stamp}] {level} {message:<25}")
        for name in sorted(fields):
            if self.with_colors:
                parts.append(f" \033[{color}m{name}\033[0m={fields[name]}")
            else:
                parts.append(f" {name}={fields[name]}")
        parts.append("\n")

        with self._mutex:
            try:
                self.stream.write("".join(parts))
                self.stream.flush()
            except Exception:  # noqa: BLE001 - logging must not raise
                self.handleError(record)


class _FieldsAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches a set of fields to every record."""

    def __init__(self, logger: logging.Logger, fields: dict[str, Any]) -> None:
        super().__init__(logger, {})
        self.fields = fields

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        merged = dict(self.fields)
        merged.update(extra.get("fields") or {})
        extra["fields"] = merged
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logger(default_stream: TextIO) -> logging.Logger:
    """Configure the package logger from AKAMAI_LOG and AKAMAI_CLI_LOG_PATH."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.propagate = False
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.setLevel(logging.ERROR)
    bootstrap = Handler(default_stream, True)
    logger.addHandler(bootstrap)

    level_env = os.environ.get("AKAMAI_LOG", "")
    if level_env:
        level = _ENV_LEVELS.get(level_env.lower())
        if level is not None:
            logger.setLevel(level)
        else:
            logger.error(
                "Unknown AKAMAI_LOG value. Allowed values: fatal, error, warn, warning, info, debug"
            )

    output: TextIO = default_stream
    colored = True
    path_env = os.environ.get("AKAMAI_CLI_LOG_PATH", "")
    if path_env:
        try:
            output = open(path_env, "a", encoding="utf-8")  # noqa: SIM115 - lives as long as the logger
        except OSError as exc:
            logger.error("Invalid value of AKAMAI_CLI_LOG_PATH %s", exc)
        colored = False

    logger.removeHandler(bootstrap)
    logger.addHandler(Handler(output, colored))
    return logger


def with_command(logger: logging.Logger | logging.LoggerAdapter, command: str) -> logging.LoggerAdapter:
    """Return a logger that tags every record with the given command."""
    if isinstance(logger, _FieldsAdapter):
        fields = dict(logger.fields)
        base = logger.logger
    elif isinstance(logger, logging.LoggerAdapter):
        fields = {}
        base = logger.logger
    else:
        fields = {}
        base = logger
    fields["command"] = command
    return _FieldsAdapter(base, fields)