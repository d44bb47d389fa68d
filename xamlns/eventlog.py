import contextlib
import logging
import sys
from datetime import datetime
from typing import Optional

from xamlns.config import ScanConfig
from xamlns.storage import create_path_for_application_file

LOGGER_NAME = "xamlns"
LOG_FORMAT = "%(asctime)s\tMessage: '%(message)s'"

_RED = "\033[31m"
_RESET = "\033[0m"


def debugger_attached() -> bool:
    """True when a tracer such as pdb or an IDE debugger is active."""
    return sys.gettrace() is not None or "pydevd" in sys.modules


class EventLogFormatter(logging.Formatter):
    """
    Renders records as `dd-MM-yyyy HH:mm:ss:ffff<TAB>Message: '<text>'`.
    """

    def __init__(self):
        super().__init__(LOG_FORMAT)

    def formatTime(self, record, datefmt=None):
        created = datetime.fromtimestamp(record.created)
        return created.strftime("%d-%m-%Y %H:%M:%S:") + f"{created.microsecond // 100:04d}"


class ConsoleFormatter(EventLogFormatter):
    """Same layout as the file log, with ERROR and CRITICAL lines in red."""

    def format(self, record):
        text = super().format(record)
        if record.levelno >= logging.ERROR:
            return f"{_RED}{text}{_RESET}"
        return text


class DebuggerOnlyDebugFilter(logging.Filter):
    def filter(self, record):
        return record.levelno > logging.DEBUG or debugger_attached()


class EventLog:
    """
    Process-wide event log writing to a timestamped file under the `Logs`
    folder and to the console.

    Call `start()` once at process entry and `stop()` at exit, or use the
    instance as a context manager.
    """

    def __init__(self, config: Optional[ScanConfig] = None, stream=None):
        self.config = config or ScanConfig()
        self.stream = stream
        self.log_path: Optional[str] = None
        self._handlers = []
        self._logger = logging.getLogger(LOGGER_NAME)
        self._previous_level = self._logger.level
        self._previous_propagate = self._logger.propagate

    @property
    def is_started(self) -> bool:
        return len(self._handlers) > 0

    def _log_file_path(self) -> str:
        file_name = f"Log-{datetime.now():%Y%m%d_%H%M%S}.txt"
        return create_path_for_application_file(
            file_name, self.config.log_folder, self.config.base_directory
        )

    def start(self) -> Optional[str]:
        """
        Opens the log file and attaches file and console handlers to the
        `xamlns` logger. Returns the log file path, or None when the log
        folder setting is blank and only console output is produced.
        """
        if self.is_started:
            return self.log_path

        debug_filter = DebuggerOnlyDebugFilter()

        console = logging.StreamHandler(self.stream or sys.stdout)
        console.setFormatter(ConsoleFormatter())
        console.addFilter(debug_filter)
        self._handlers.append(console)

        self.log_path = self._log_file_path() or None
        if self.log_path:
            file_handler = logging.FileHandler(self.log_path, mode="a", encoding="utf-8")
            file_handler.setFormatter(EventLogFormatter())
            file_handler.addFilter(debug_filter)
            self._handlers.append(file_handler)

        for handler in self._handlers:
            self._logger.addHandler(handler)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        return self.log_path

    def stop(self) -> None:
        """
        Detaches and closes every handler. Errors raised while flushing or
        closing are ignored.
        """
        handlers, self._handlers = self._handlers, []
        for handler in handlers:
            self._logger.removeHandler(handler)
            with contextlib.suppress(Exception):
                handler.flush()
            with contextlib.suppress(Exception):
                handler.close()

        self._logger.setLevel(self._previous_level)
        self._logger.propagate = self._previous_propagate

    def __enter__(self) -> "EventLog":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
