"""
Centralized logging configuration for bench-stop runs.

Console output uses a compact ``[LEVEL] message`` format, coloured when
stdout is a terminal. An optional log file receives the technical format
with timestamps and logger names.
"""

import logging
import logging.handlers
import sys
import threading
from pathlib import Path
from typing import Optional, TextIO

_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)

_RESET = "\033[0m"
_LEVEL_COLOURS = {
    logging.DEBUG: "\033[0;36m",
    logging.INFO: "\033[0;32m",
    logging.WARNING: "\033[1;33m",
    logging.ERROR: "\033[0;31m",
    logging.CRITICAL: "\033[0;31m",
}
_LEVEL_LABELS = {logging.WARNING: "WARN"}

TECHNICAL_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
TECHNICAL_DATEFMT = "%Y-%m-%d %H:%M:%S"


class ConsoleFormatter(logging.Formatter):
    """Render records as ``[INFO] message`` with optional ANSI colour."""

    def __init__(self, use_colour: bool):
        super().__init__("%(message)s")
        self.use_colour = use_colour

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        label = _LEVEL_LABELS.get(record.levelno, record.levelname)
        if self.use_colour:
            colour = _LEVEL_COLOURS.get(record.levelno, "")
            return f"{colour}[{label}]{_RESET} {message}"
        return f"[{label}] {message}"


def _stream_is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as exc:
            _MODULE_LOGGER.debug("Handler close failed: %s", exc)
        logger.removeHandler(handler)


def _build_console_handler(stream: TextIO, verbose: bool, quiet: bool) -> logging.Handler:
    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(ConsoleFormatter(use_colour=_stream_is_tty(stream)))
    if quiet:
        console_handler.setLevel(logging.CRITICAL + 1)
    elif verbose:
        console_handler.setLevel(logging.DEBUG)
    else:
        console_handler.setLevel(logging.INFO)
    return console_handler


def _build_file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler_cls = getattr(logging.handlers, "WatchedFileHandler", logging.FileHandler)
    file_handler = handler_cls(log_file, mode="a")
    file_handler.setFormatter(logging.Formatter(TECHNICAL_FORMAT, TECHNICAL_DATEFMT))
    file_handler.setLevel(logging.DEBUG)
    return file_handler


def setup_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure the root logger; calling it again replaces previous handlers."""
    with _config_lock:
        root_logger = logging.getLogger()
        _close_handlers(root_logger)

        root_logger.addHandler(_build_console_handler(stream or sys.stdout, verbose, quiet))
        if log_file is not None:
            root_logger.addHandler(_build_file_handler(log_file))

        root_logger.setLevel(logging.DEBUG if verbose or log_file is not None else logging.INFO)
        _suppress_noisy_third_parties()


def _suppress_noisy_third_parties() -> None:
    logging.getLogger("psutil").setLevel(logging.WARNING)


__all__ = ["ConsoleFormatter", "setup_logging"]
