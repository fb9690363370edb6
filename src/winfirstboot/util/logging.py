"""Logging helpers.

Every record is rendered as ``HH:MM:SS - LEVEL    - message`` on both the
console and the append-only log file. Console lines are coloured by level.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import IO, Optional

from termcolor import colored

ROOT_LOGGER_NAME = "winfirstboot"
LOG_FORMAT = "%(asctime)s - %(levelname)-8s - %(message)s"
DATE_FORMAT = "%H:%M:%S"

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

LEVELS = {
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "TRACE": TRACE,
}


def resolve_level(level: Optional[str]) -> int:
    """Map a level name to its numeric value; missing or unknown names mean INFO."""
    if level is None:
        return logging.INFO
    return LEVELS.get(str(level).strip().upper(), logging.INFO)


class LineFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__(LOG_FORMAT, DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        label = getattr(record, "level_label", None)
        if label:
            record.levelname = label
        elif record.levelno >= logging.CRITICAL:
            record.levelname = "FATAL"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class ConsoleFormatter(LineFormatter):
    def __init__(self, use_colors: bool = True) -> None:
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.use_colors:
            return message
        if record.levelno >= logging.ERROR:
            return colored(message, "red", attrs=["reverse"], force_color=True)
        if record.levelno >= logging.WARNING:
            return colored(message, "yellow", force_color=True)
        if record.levelno < logging.INFO:
            return colored(message, attrs=["dark"], force_color=True)
        return message


class AppendFileHandler(logging.FileHandler):
    """File handler that opens the log for each record and closes it again.

    Write failures are raised to the caller instead of being reported on stderr.
    """

    def __init__(self, filename: Path) -> None:
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(path, mode="a", encoding="utf-8", delay=True)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            super().emit(record)
        finally:
            stream, self.stream = self.stream, None
            if stream is not None:
                stream.close()

    def handleError(self, record: logging.LogRecord) -> None:
        raise


def setup_logging(
    log_file: Optional[Path] = None,
    level: Optional[str] = None,
    *,
    stream: Optional[IO[str]] = None,
    use_colors: Optional[bool] = None,
) -> None:
    numeric_level = resolve_level(level) if level is not None else TRACE
    if stream is None:
        stream = sys.stdout
    if use_colors is None:
        use_colors = not os.environ.get("NO_COLOR") and hasattr(stream, "isatty") and stream.isatty()

    console = logging.StreamHandler(stream)
    console.setFormatter(ConsoleFormatter(use_colors=use_colors))
    handlers: list[logging.Handler] = [console]
    if log_file is not None:
        file_handler = AppendFileHandler(log_file)
        file_handler.setFormatter(LineFormatter())
        handlers.append(file_handler)

    logging.basicConfig(level=numeric_level, handlers=handlers, force=True)


def level_label(level: Optional[str]) -> str:
    """Name printed for ``level``: the caller's level name upper-cased, or INFO when missing."""
    label = str(level).strip().upper() if level is not None else ""
    return label or "INFO"


def log(level: Optional[str], message: str, logger: Optional[logging.Logger] = None) -> None:
    """Log ``message`` at ``level``.

    Unrecognised levels are logged and styled as INFO but keep their own name
    in the rendered line.
    """
    (logger or logging.getLogger(ROOT_LOGGER_NAME)).log(
        resolve_level(level), message, extra={"level_label": level_label(level)}
    )
