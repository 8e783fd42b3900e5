"""Structured Logging — Bunyan-style JSON formatter and setup for production observability.

Invariants:
    - Every JSON record carries v, name, msg, level, hostname, pid, time, target, line, file
    - Fields passed via extra= are surfaced at the top level of the record
    - A single handler is installed on the root logger; re-running setup replaces it

Design Decisions:
    - Bunyan layout: log processors (bunyan CLI, pino-pretty, Loki) read it without config
    - Sink is injectable: tests capture records in a StringIO, production writes to stdout
    - uvicorn loggers propagate to root, so access and error logs share the same format
"""

import json
import logging
import os
import socket
import sys
from datetime import datetime, timezone
from typing import TextIO

# Bunyan numeric levels
_BUNYAN_LEVELS = {
    logging.DEBUG: 20,
    logging.INFO: 30,
    logging.WARNING: 40,
    logging.ERROR: 50,
    logging.CRITICAL: 60,
}

# Attributes every LogRecord has; anything else came from extra=
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime", "taskName"}

_installed_handler: logging.Handler | None = None


def _bunyan_level(levelno: int) -> int:
    if levelno in _BUNYAN_LEVELS:
        return _BUNYAN_LEVELS[levelno]
    if levelno < logging.DEBUG:
        return 10
    return _BUNYAN_LEVELS[max(lvl for lvl in _BUNYAN_LEVELS if lvl <= levelno)]


class BunyanFormatter(logging.Formatter):
    """Format logs as Bunyan JSON records."""

    def __init__(self, name: str):
        super().__init__()
        self._name = name
        self._hostname = socket.gethostname()

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "v": 0,
            "name": self._name,
            "msg": record.getMessage(),
            "level": _bunyan_level(record.levelno),
            "hostname": self._hostname,
            "pid": record.process or os.getpid(),
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "target": record.name,
            "line": record.lineno,
            "file": record.pathname,
        }
        for key, val in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(
    name: str,
    level: str = "INFO",
    fmt: str = "json",
    sink: TextIO | None = None,
) -> logging.Handler:
    """Configure root logging for the application. Returns the installed handler."""
    global _installed_handler

    handler = logging.StreamHandler(sink if sink is not None else sys.stdout)
    if fmt == "json":
        handler.setFormatter(BunyanFormatter(name))
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))

    if _installed_handler is not None:
        logging.root.removeHandler(_installed_handler)
    logging.root.addHandler(handler)
    logging.root.setLevel(
        logging.getLevelNamesMapping().get(level.upper(), logging.INFO),
    )
    _installed_handler = handler
    return handler
