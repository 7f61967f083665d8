# brewtest/__init__.py
"""
brewtest - page-object UI test framework for the iCoffee ordering app.
"""

from .base import BaseTestCase
from .config import Environment, Settings, get_settings
from .context import TestContext
from .driver import Direction, IDriver, Locator
from .element import Element
from .exceptions import (AssertionFailedError, BrewTestError, ConfigError, DriverError,
                         FrameworkMisuseError, RetryExhaustedError, ScreenNotDisplayedError)
from .logger import TEST_LOGGER, LogLevel, TestLogger
from .repository import Repository
from .testplan import Priority, SuiteType, Tag, TestPlan
from .waits import Waiter

__version__ = "1.0.0"

__all__ = [
    "BaseTestCase", "Environment", "Settings", "get_settings", "TestContext",
    "Direction", "IDriver", "Locator", "Element",
    "AssertionFailedError", "BrewTestError", "ConfigError", "DriverError",
    "FrameworkMisuseError", "RetryExhaustedError", "ScreenNotDisplayedError",
    "TEST_LOGGER", "LogLevel", "TestLogger", "Repository",
    "Priority", "SuiteType", "Tag", "TestPlan", "Waiter",
]
