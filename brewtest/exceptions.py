# brewtest/exceptions.py
"""
@file exceptions.py
@brief Exception types raised by the test framework.

Timeouts are not represented here: every wait returns a boolean and the
caller decides whether a negative outcome is fatal.
"""

from __future__ import annotations
from typing import Any, Optional


class BrewTestError(Exception):
    """Base exception for the framework."""
    pass


class ConfigError(BrewTestError):
    """Raised when settings, presets or the object map are invalid."""
    pass


class DriverError(BrewTestError):
    """Raised by a UI driver when a gesture cannot be dispatched."""
    pass


class AssertionFailedError(BrewTestError, AssertionError):
    """
    Hard assertion failure about observed application state.

    Subclasses AssertionError so pytest reports it as a test failure.

    Attributes:
        locator: Description of the element or screen that was checked
        expected: Expected state or value (None when not applicable)
        actual: Observed state or value (None when not applicable)
        timeout: Seconds waited before giving up (0 for an immediate check)
        screenshot: Path of the failure screenshot, if one was captured
    """

    def __init__(
        self,
        message: str,
        *,
        locator: Optional[str] = None,
        expected: Any = None,
        actual: Any = None,
        timeout: Optional[float] = None,
        screenshot: Optional[str] = None,
    ):
        super().__init__(message)
        self.locator = locator
        self.expected = expected
        self.actual = actual
        self.timeout = timeout
        self.screenshot = screenshot


class ScreenNotDisplayedError(AssertionFailedError):
    """Raised when a screen identifier did not appear in time."""

    def __init__(self, screen_name: str, locator: str, timeout: float, screenshot: Optional[str] = None):
        self.screen_name = screen_name
        super().__init__(
            f"Screen '{screen_name}' is not displayed "
            f"(identifier {locator} not found after {timeout}s)",
            locator=locator,
            expected="displayed",
            actual="not displayed",
            timeout=timeout,
            screenshot=screenshot,
        )


class RetryExhaustedError(BrewTestError):
    """
    Raised when a flaky action still fails after every allowed attempt.

    Attributes:
        description: What was being retried
        attempts: Number of attempts made
        last_error: Exception raised by the final attempt, if any
    """

    def __init__(self, description: str, attempts: int, last_error: Optional[BaseException] = None):
        self.description = description
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(self.__str__())

    def __str__(self) -> str:
        msg = f"{self.description} failed after {self.attempts} attempts"
        if self.last_error is not None:
            msg += f". Last error: {type(self.last_error).__name__}: {self.last_error}"
        return msg


class FrameworkMisuseError(BrewTestError):
    """
    Raised when the framework itself is used incorrectly, e.g. a step
    builder outliving its test case. Not an AssertionError.
    """
    pass
