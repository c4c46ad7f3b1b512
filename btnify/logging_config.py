"""Opt-in log output for btnify's own loggers.

btnify is a library, so nothing here runs on import.  Call ``setup_logging()``
from the embedding application to see click and shutdown logs prefixed with
their ``[op:button]`` context, e.g. ``[click:2] Dispatching id=2 ...``.
Only the ``btnify`` logger tree is touched; the host's root logger is left alone.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from btnify.log_context import ContextFilter

LOGGER_NAME = "btnify"
MAX_BYTES = 1024 * 1024
BACKUP_COUNT = 2

LOG_FMT = "%(asctime)s %(levelname)s %(name)s: %(ctx)s%(message)s"
DATE_FMT = "%H:%M:%S"

_ANSI = {
    "DEBUG": "\x1b[36m",
    "INFO": "\x1b[32m",
    "WARNING": "\x1b[33m",
    "ERROR": "\x1b[31m",
    "CRITICAL": "\x1b[35m",
}
_RESET = "\x1b[0m"


class _ColorFormatter(logging.Formatter):
    """Colors the level name when writing to a terminal."""

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        record.levelname = f"{_ANSI.get(original, '')}{original}{_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


def _is_tty(stream: object) -> bool:
    return bool(getattr(stream, "isatty", None) and stream.isatty())  # type: ignore[attr-defined]


def setup_logging(
    level: int = logging.INFO,
    *,
    verbose: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Attach a console handler (and optionally a rotating file) to ``btnify``.

    Repeated calls replace the handlers installed by the previous call.
    ``verbose`` forces DEBUG, which logs every dispatched click.

    Returns the configured ``btnify`` logger.
    """
    if verbose:
        level = logging.DEBUG

    pkg_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
        handler.close()
    pkg_logger.setLevel(level)

    ctx_filter = ContextFilter()

    stream = sys.stderr
    if stream is not None:
        console = logging.StreamHandler(stream)
        console.addFilter(ctx_filter)
        formatter_cls = _ColorFormatter if _is_tty(stream) else logging.Formatter
        console.setFormatter(formatter_cls(LOG_FMT, datefmt=DATE_FMT))
        pkg_logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=MAX_BYTES,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.addFilter(ctx_filter)
        file_handler.setFormatter(logging.Formatter(LOG_FMT, datefmt="%Y-%m-%d %H:%M:%S"))
        pkg_logger.addHandler(file_handler)

    pkg_logger.debug("btnify logging initialized (level=%s)", logging.getLevelName(level))
    return pkg_logger
