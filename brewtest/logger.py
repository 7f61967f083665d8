# brewtest/logger.py
"""
@file logger.py
@brief Leveled, step-numbered test logger built on the stdlib logging module.

Output format:
  [12:30:01.250] INFO: Step 3: Tap basket button
  [12:30:01.250] INFO: Step 3: Tap basket button | home.py:42   (verbose)
"""

from __future__ import annotations

import logging
import os
import sys
import time
from datetime import datetime
from enum import IntEnum
from typing import Callable, Optional, TypeVar

T = TypeVar("T")

LOGGER_NAME = "brewtest"
SECTION_RULE = "-" * 50

_initialized: bool = False


class LogLevel(IntEnum):
    """Severity levels, ordered and aligned with the logging module."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @classmethod
    def parse(cls, value: str, default: Optional[LogLevel] = None) -> LogLevel:
        try:
            return cls[value.strip().upper()]
        except (KeyError, AttributeError):
            return default if default is not None else cls.INFO


class TestLogFormatter(logging.Formatter):
    """Formats records as '[HH:MM:SS.mmm] LEVEL: message' with optional source location."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        line = f"[{timestamp}] {record.levelname}: {record.getMessage()}"

        if getattr(record, "brewtest_verbose", False):
            line += f" | {os.path.basename(record.pathname)}:{record.lineno}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class _StderrHandler(logging.StreamHandler):
    """StreamHandler that always writes to the current sys.stderr."""

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def setup_logging(log_file: Optional[str] = None) -> logging.Logger:
    """
    Install the diagnostic handlers on the 'brewtest' logger once per process.

    Args:
        log_file: Optional path that also receives every record

    Returns:
        The configured 'brewtest' logger
    """
    global _initialized

    root_logger = logging.getLogger(LOGGER_NAME)
    if _initialized:
        return root_logger

    root_logger.setLevel(logging.DEBUG)

    console_handler = _StderrHandler()
    console_handler.setFormatter(TestLogFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setFormatter(TestLogFormatter())
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning("Could not create log file %s: %s", log_file, e)

    _initialized = True
    return root_logger


class TestLogger:
    """
    Test-facing logger.

    Entries below `min_level` are dropped before they reach the logging
    module. The step counter belongs to the instance and is reset at the
    start of every test.
    """

    __test__ = False

    def __init__(
        self,
        min_level: LogLevel = LogLevel.INFO,
        verbose: bool = True,
        name: str = LOGGER_NAME,
    ):
        self.min_level = LogLevel(min_level)
        self.verbose = verbose
        self._logger = logging.getLogger(name)
        self._step_counter = 0

    @classmethod
    def from_settings(cls, settings) -> TestLogger:
        return cls(min_level=settings.log_level, verbose=settings.verbose_logging)

    @property
    def step_counter(self) -> int:
        return self._step_counter

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.min_level

    def _emit(self, level: LogLevel, message: str, exc_info: bool = False) -> None:
        if not self.is_enabled_for(level):
            return
        # stacklevel=3 points at the caller of the public method
        self._logger.log(
            int(level),
            message,
            exc_info=exc_info,
            stacklevel=3,
            extra={"brewtest_verbose": self.verbose},
        )

    # --- core ---

    def log(self, message: str, level: LogLevel = LogLevel.INFO) -> None:
        self._emit(LogLevel(level), message)

    def debug(self, message: str) -> None:
        self._emit(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        self._emit(LogLevel.INFO, message)

    def warning(self, message: str) -> None:
        self._emit(LogLevel.WARNING, message)

    def error(self, message: str, exc_info: bool = False) -> None:
        self._emit(LogLevel.ERROR, message, exc_info=exc_info)

    def critical(self, message: str) -> None:
        self._emit(LogLevel.CRITICAL, message)

    # --- steps ---

    def step(self, description: str) -> int:
        """Log the next numbered step and return its number."""
        self._step_counter += 1
        self._emit(LogLevel.INFO, f"Step {self._step_counter}: {description}")
        return self._step_counter

    def reset_step_counter(self) -> None:
        self._step_counter = 0

    # --- structured helpers ---

    def section(self, title: str) -> None:
        self._emit(LogLevel.INFO, f"\n{SECTION_RULE}\n{title.upper()}\n{SECTION_RULE}")

    def subsection(self, title: str) -> None:
        self._emit(LogLevel.INFO, f"  |-- {title}")

    def entering_screen(self, screen_name: str) -> None:
        self._emit(LogLevel.INFO, f"Entering screen: {screen_name}")

    def validating_screen(self, screen_name: str) -> None:
        self._emit(LogLevel.INFO, f"Validating screen: {screen_name}")

    def action(self, description: str) -> None:
        self._emit(LogLevel.INFO, f"Action: {description}")

    def verify(self, description: str) -> None:
        self._emit(LogLevel.INFO, f"Verifying: {description}")

    def test_data(self, description: str) -> None:
        self._emit(LogLevel.DEBUG, f"Test Data: {description}")

    def performance(self, operation: str, duration: float) -> None:
        self._emit(LogLevel.INFO, f"Performance - {operation}: {duration:.3f}s")

    def measure_time(self, label: str, block: Callable[[], T]) -> T:
        """
        Run block, log how long it took and return its result.

        Exceptions raised by block propagate unchanged; the duration line is
        still emitted.
        """
        start = time.perf_counter()
        try:
            return block()
        finally:
            self.performance(label, time.perf_counter() - start)


TEST_LOGGER = TestLogger()
