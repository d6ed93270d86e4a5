from __future__ import annotations

import io
import logging

import pytest

from benchstop.logging_config import ConsoleFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            handler.close()
        root.removeHandler(handler)
    for handler in saved_handlers:
        root.addHandler(handler)
    root.setLevel(saved_level)


def _record(level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord("benchstop.test", level, __file__, 1, message, None, None)


def test_console_formatter_plain_labels():
    formatter = ConsoleFormatter(use_colour=False)

    assert formatter.format(_record(logging.INFO, "Bench Worker: Stopped successfully")) == (
        "[INFO] Bench Worker: Stopped successfully"
    )
    assert formatter.format(_record(logging.WARNING, "forcing")) == "[WARN] forcing"
    assert formatter.format(_record(logging.ERROR, "failed")) == "[ERROR] failed"


def test_console_formatter_colour_wraps_label():
    formatted = ConsoleFormatter(use_colour=True).format(_record(logging.WARNING, "forcing"))

    assert formatted.startswith("\033[1;33m[WARN]\033[0m")
    assert formatted.endswith(" forcing")


def test_setup_logging_writes_info_to_stream(restore_root_logger):
    stream = io.StringIO()
    setup_logging(stream=stream)

    logging.getLogger("benchstop.sample").info("Stopping")
    logging.getLogger("benchstop.sample").debug("hidden")

    assert stream.getvalue() == "[INFO] Stopping\n"
    assert restore_root_logger.level == logging.INFO


def test_setup_logging_verbose_shows_debug(restore_root_logger):
    stream = io.StringIO()
    setup_logging(verbose=True, stream=stream)

    logging.getLogger("benchstop.sample").debug("candidate pids: [1, 2]")

    assert "[DEBUG] candidate pids: [1, 2]" in stream.getvalue()


def test_setup_logging_quiet_silences_console(restore_root_logger):
    stream = io.StringIO()
    setup_logging(quiet=True, stream=stream)

    logging.getLogger("benchstop.sample").error("Failed to kill process")

    assert stream.getvalue() == ""


def test_setup_logging_file_handler_gets_debug(restore_root_logger, tmp_path):
    stream = io.StringIO()
    log_file = tmp_path / "logs" / "bench-stop.log"
    setup_logging(quiet=True, log_file=log_file, stream=stream)

    logging.getLogger("benchstop.sample").debug("resolved via pidfile")
    for handler in restore_root_logger.handlers:
        handler.flush()

    content = log_file.read_text()
    assert "benchstop.sample - DEBUG - resolved via pidfile" in content
    assert stream.getvalue() == ""


def test_setup_logging_replaces_previous_handlers(restore_root_logger):
    setup_logging(stream=io.StringIO())
    setup_logging(stream=io.StringIO())

    assert len(restore_root_logger.handlers) == 1
    assert logging.getLogger("psutil").level == logging.WARNING
