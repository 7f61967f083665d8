# brewtest/element.py
"""
@file element.py
@brief Named element handle with state queries, waits and gestures.
"""

from __future__ import annotations
from typing import Optional

from .driver import Direction, IDriver, Locator
from .waits import Waiter


class Element:
    """
    Element wrapper binding a locator to a driver session.

    - State queries never raise; a missing element reads as False/None
    - Waits return booleans and never raise on timeout
    - Gestures go straight to the driver
    """

    def __init__(self, driver: IDriver, waiter: Waiter, locator: Locator, name: Optional[str] = None):
        """
        @param driver Driver session the element lives in
        @param waiter Waiter used for wait operations
        @param locator Query that finds the element
        @param name Semantic name from the object map, used in logs
        """
        self._driver = driver
        self._waiter = waiter
        self.locator = locator
        self.name = name or locator.describe()

    def __repr__(self) -> str:
        return f"Element({self.name!r}, {self.locator})"

    def describe(self) -> str:
        return f"'{self.name}' ({self.locator})" if self.name != self.locator.describe() else str(self.locator)

    # --- State Queries ---

    def exists(self) -> bool:
        """Check if element exists in the UI tree."""
        try:
            return bool(self._driver.exists(self.locator))
        except Exception:
            return False

    def is_enabled(self) -> bool:
        try:
            return self.exists() and bool(self._driver.is_enabled(self.locator))
        except Exception:
            return False

    def is_hittable(self) -> bool:
        try:
            return bool(self._driver.is_hittable(self.locator))
        except Exception:
            return False

    def is_selected(self) -> bool:
        try:
            return bool(self._driver.is_selected(self.locator))
        except Exception:
            return False

    def value(self) -> Optional[str]:
        try:
            return self._driver.value(self.locator)
        except Exception:
            return None

    def label(self) -> Optional[str]:
        try:
            return self._driver.label(self.locator)
        except Exception:
            return None

    def count(self) -> int:
        """Number of elements matching this locator (index ignored)."""
        try:
            return int(self._driver.count(self.locator))
        except Exception:
            return 0

    # --- Wait Operations ---

    def wait(self, state: str = "exists", timeout: Optional[float] = None) -> bool:
        """
        Wait for element to reach a specific state.

        @param state "exists", "gone", or any Waiter predicate name
        @param timeout Override timeout
        @return True if the state was reached in time
        """
        if state == "exists":
            return self._waiter.wait_for_existence(self.locator, timeout)
        if state == "gone":
            return self._waiter.wait_for_disappearance(self.locator, timeout)
        return self._waiter.wait_for_predicate(self.locator, state, timeout)

    def wait_until_gone(self, timeout: Optional[float] = None) -> bool:
        return self.wait("gone", timeout)

    # --- Actions ---

    def tap(self) -> None:
        self._driver.tap(self.locator)

    def type_text(self, text: str) -> None:
        self._driver.type_text(self.locator, text)

    def clear(self) -> None:
        self._driver.clear_text(self.locator)

    def swipe(self, direction: Direction) -> None:
        self._driver.swipe(self.locator, direction)

    def swipe_left(self) -> None:
        self.swipe(Direction.LEFT)

    def swipe_right(self) -> None:
        self.swipe(Direction.RIGHT)

    # --- Combined helpers ---

    def wait_and_tap(self, timeout: Optional[float] = None) -> bool:
        """Tap once the element exists. Returns False (without tapping) on timeout."""
        if not self.wait("exists", timeout):
            return False
        self.tap()
        return True

    def wait_until_hittable_and_tap(self, timeout: Optional[float] = None) -> bool:
        if not self.wait("hittable", timeout):
            return False
        self.tap()
        return True

    def wait_and_type(self, text: str, timeout: Optional[float] = None) -> bool:
        if not self.wait("exists", timeout):
            return False
        self.type_text(text)
        return True

    def clear_and_type(self, text: str, timeout: Optional[float] = None) -> bool:
        """Replace the field's contents with text."""
        if not self.wait("exists", timeout):
            return False
        self.clear()
        self.type_text(text)
        return True
