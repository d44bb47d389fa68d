import io
import logging
import os
import re
from datetime import datetime

import pytest

import xamlns.eventlog
from xamlns.config import ScanConfig
from xamlns.eventlog import ConsoleFormatter, EventLog, EventLogFormatter

LINE_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4} \d{2}:\d{2}:\d{2}:\d{4}\tMessage: '(.*)'$")


@pytest.fixture
def event_log(tmp_path):
    log = EventLog(ScanConfig(base_directory=tmp_path), stream=io.StringIO())
    yield log
    log.stop()


def _record(level, message):
    return logging.LogRecord("xamlns.test", level, __file__, 1, message, None, None)


def test_format_time():
    record = _record(logging.INFO, "hello")
    record.created = datetime(2024, 3, 5, 14, 7, 9, 123456).timestamp()
    assert EventLogFormatter().formatTime(record) == "05-03-2024 14:07:09:1234"


def test_format_line():
    line = EventLogFormatter().format(_record(logging.INFO, "Completed"))
    match = LINE_PATTERN.match(line)
    assert match
    assert match.group(1) == "Completed"


def test_console_colours_errors_only():
    formatter = ConsoleFormatter()
    assert formatter.format(_record(logging.ERROR, "boom")).startswith("\033[31m")
    assert formatter.format(_record(logging.CRITICAL, "boom")).endswith("\033[0m")
    assert "\033[" not in formatter.format(_record(logging.WARNING, "careful"))


def test_start_creates_timestamped_log_file(event_log, tmp_path):
    path = event_log.start()
    assert path is not None
    assert os.path.dirname(path) == str(tmp_path / "Logs")
    assert re.match(r"^Log-\d{8}_\d{6}\.txt$", os.path.basename(path))


def test_messages_reach_file_and_console(event_log, monkeypatch):
    monkeypatch.setattr(xamlns.eventlog, "debugger_attached", lambda: False)
    path = event_log.start()

    logger = logging.getLogger("xamlns.test")
    logger.info("Found 3 XAML reference files")
    logger.error("Namespace missing from a.xaml - control")
    logger.debug("hidden without a debugger")
    event_log.stop()

    with open(path, encoding="utf-8") as f:
        lines = f.read().splitlines()

    assert [LINE_PATTERN.match(line).group(1) for line in lines] == [
        "Found 3 XAML reference files",
        "Namespace missing from a.xaml - control",
    ]

    console = event_log.stream.getvalue()
    assert "Found 3 XAML reference files" in console
    assert "\033[31m" in console
    assert "hidden without a debugger" not in console


def test_debug_messages_with_debugger(event_log, monkeypatch):
    monkeypatch.setattr(xamlns.eventlog, "debugger_attached", lambda: True)
    event_log.start()
    logging.getLogger("xamlns.test").debug("visible under a debugger")
    assert "visible under a debugger" in event_log.stream.getvalue()


def test_stop_restores_logger_and_is_repeatable(event_log):
    logger = logging.getLogger("xamlns")
    event_log.start()
    assert logger.propagate is False
    assert event_log.is_started

    event_log.stop()
    event_log.stop()
    assert logger.propagate is True
    assert not event_log.is_started


def test_stop_suppresses_close_errors(event_log, monkeypatch):
    event_log.start()

    def broken_close(self):
        raise OSError("disk vanished")

    monkeypatch.setattr(logging.FileHandler, "close", broken_close)
    event_log.stop()
    assert not event_log.is_started


def test_blank_log_folder_logs_to_console_only(tmp_path):
    stream = io.StringIO()
    log = EventLog(ScanConfig(base_directory=tmp_path, log_folder="  "), stream=stream)
    try:
        assert log.start() is None
        logging.getLogger("xamlns.test").warning("console only")
    finally:
        log.stop()

    assert "console only" in stream.getvalue()
    assert not (tmp_path / "Logs").exists()


def test_context_manager(tmp_path):
    with EventLog(ScanConfig(base_directory=tmp_path), stream=io.StringIO()) as log:
        assert log.is_started
    assert not log.is_started
