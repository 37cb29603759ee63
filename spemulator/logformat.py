"""Log line formatting and logger setup driven by environment variables."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import Mapping

TRACE = 5
OFF = logging.CRITICAL + 10

_LEVELS = {
    "off": OFF,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_STYLES = {
    "ERROR": "\x1b[1;31m",
    "WARN": "\x1b[33m",
    "INFO": "\x1b[32m",
    "DEBUG": "\x1b[34m",
    "TRACE": "\x1b[36m",
}
_RESET = "\x1b[0m"
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def _level_label(levelno: int) -> str:
    if levelno >= logging.ERROR:
        return "ERROR"
    if levelno >= logging.WARNING:
        return "WARN"
    if levelno >= logging.INFO:
        return "INFO"
    if levelno >= logging.DEBUG:
        return "DEBUG"
    return "TRACE"


class EmulatorFormatter(logging.Formatter):
    """Formats records as ``[LEVEL] [target] [time] message``.

    The time is shown only when ``LOG_SHOW_TIME`` is ``true`` in the environment.
    """

    def __init__(self, color: bool = False, environ: Mapping[str, str] | None = None) -> None:
        super().__init__()
        self.color = color
        self._environ = environ

    @property
    def show_time(self) -> bool:
        environ = os.environ if self._environ is None else self._environ
        return environ.get("LOG_SHOW_TIME", "false") == "true"

    def format(self, record: logging.LogRecord) -> str:
        label = _level_label(record.levelno)
        short = label in ("INFO", "WARN")
        padded = f"{label:<4}" if short else f"{label:<5}"
        if self.color:
            padded = f"{_STYLES[label]}{padded}{_RESET}"
        head = f"[{padded}] " if short else f"[{padded}]"
        parts = [f"{head}[{record.name}]"]
        if self.show_time:
            parts.append(f"[{datetime.fromtimestamp(record.created).strftime(_TIME_FORMAT)}]")
        parts.append(record.getMessage())
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _parse_filter(spec: str) -> tuple[int, dict[str, int]]:
    spec = spec.split("/", 1)[0]
    root: int | None = None
    targets: dict[str, int] = {}
    for directive in filter(None, (part.strip() for part in spec.split(","))):
        name, sep, level_text = directive.partition("=")
        name = name.strip()
        if sep:
            level = _LEVELS.get(level_text.strip().lower())
            if level is None:
                continue
            if name:
                targets[name] = level
            else:
                root = level
        elif name.lower() in _LEVELS:
            root = _LEVELS[name.lower()]
        else:
            targets[name] = TRACE
    if root is None:
        root = OFF if targets else logging.ERROR
    return root, targets


def initialize_logger(environ: Mapping[str, str] | None = None) -> logging.Handler:
    """Install the emulator log handler on the root logger.

    Levels come from ``RUST_LOG`` (default ``info``), as a global level
    and/or ``target=level`` directives separated by commas.
    """
    environ = os.environ if environ is None else environ
    root_level, targets = _parse_filter(environ.get("RUST_LOG", "info"))

    logging.addLevelName(TRACE, "TRACE")
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, EmulatorFormatter):
            root.removeHandler(handler)

    stream = sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(EmulatorFormatter(color=stream.isatty(), environ=environ))
    root.addHandler(handler)
    root.setLevel(root_level)
    for name, level in targets.items():
        logging.getLogger(name).setLevel(level)
    return handler