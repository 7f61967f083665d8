# brewtest/assertions.py
"""
@file assertions.py
@brief Element, alert and screen assertions with failure evidence.

Every assertion waits (bounded) for the expected state, then either logs a
"Verified" line or fails: error log, best-effort screenshot, and an
AssertionFailedError naming the element, expected vs. actual state and the
timeout used.

Default timeouts:
  exists, is_visible, is_enabled, count, count_at_least    settings.default_timeout
  not_exists, is_disabled, is_selected, label/value checks  settings.short_timeout
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from .driver import Locator
from .element import Element
from .exceptions import AssertionFailedError, ScreenNotDisplayedError
from .waits import ALERT

if TYPE_CHECKING:
    from .context import TestContext
    from .screens.base import Screen


def _timing(timeout: float) -> str:
    if timeout > 0:
        return f"[timed out after waiting {timeout}s]"
    return "[checked immediately, timeout 0s]"


class _AssertBase:
    def __init__(self, context: TestContext):
        self._ctx = context

    def _timeout(self, timeout: Optional[float], tier: str) -> float:
        return float(getattr(self._ctx.settings, tier) if timeout is None else timeout)

    def _passed(self, text: str) -> None:
        self._ctx.logger.info(f"Verified: {text}")

    def _fail(
        self,
        detail: str,
        *,
        locator: Optional[str],
        timeout: float,
        expected: Any = None,
        actual: Any = None,
        message: Optional[str] = None,
    ) -> None:
        text = f"{detail} {_timing(timeout)}"
        if message:
            text = f"{message} - {text}"
        self._ctx.logger.error(f"Assertion Failed: {text}")
        screenshot = self._ctx.artifacts.capture_best_effort(f"Assertion failure {locator or ''}")
        raise AssertionFailedError(
            text,
            locator=locator,
            expected=expected,
            actual=actual,
            timeout=timeout,
            screenshot=screenshot,
        )


class ElementAssert(_AssertBase):
    """Assertions over a single element or an element query."""

    def exists(self, element: Element, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "default_timeout")
        if not element.wait("exists", t):
            self._fail(f"Element {element.describe()} does not exist after {t}s",
                       locator=str(element.locator), timeout=t,
                       expected="exists", actual="missing", message=message)
        self._passed(f"{element.name} exists")

    def not_exists(self, element: Element, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        if not element.wait_until_gone(t):
            self._fail(f"Element {element.describe()} still exists after {t}s",
                       locator=str(element.locator), timeout=t,
                       expected="missing", actual="exists", message=message)
        self._passed(f"{element.name} does not exist")

    def is_visible(self, element: Element, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "default_timeout")
        if not element.wait("hittable", t):
            actual = "exists but not visible" if element.exists() else "missing"
            self._fail(f"Element {element.describe()} is not visible",
                       locator=str(element.locator), timeout=t,
                       expected="visible", actual=actual, message=message)
        self._passed(f"{element.name} is visible")

    def is_enabled(self, element: Element, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "default_timeout")
        if not element.wait("enabled", t):
            actual = "disabled" if element.exists() else "missing"
            self._fail(f"Element {element.describe()} is not enabled. Expected: enabled, Actual: {actual}",
                       locator=str(element.locator), timeout=t,
                       expected="enabled", actual=actual, message=message)
        self._passed(f"{element.name} is enabled")

    def is_disabled(self, element: Element, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        if not element.wait("disabled", t):
            actual = "enabled" if element.exists() else "missing"
            self._fail(f"Element {element.describe()} is not disabled. Expected: disabled, Actual: {actual}",
                       locator=str(element.locator), timeout=t,
                       expected="disabled", actual=actual, message=message)
        self._passed(f"{element.name} is disabled")

    def is_selected(self, element: Element, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        if not element.wait("selected", t):
            actual = "not selected" if element.exists() else "missing"
            self._fail(f"Element {element.describe()} is not selected. Expected: selected, Actual: {actual}",
                       locator=str(element.locator), timeout=t,
                       expected="selected", actual=actual, message=message)
        self._passed(f"{element.name} is selected")

    def has_label(self, element: Element, expected: str, timeout: Optional[float] = None,
                  message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        if not self._ctx.waiter.wait_for_predicate(element.locator, "label_equals", t, expected=expected):
            actual = element.label()
            self._fail(f"Element label mismatch for {element.describe()}. Expected: '{expected}', Actual: '{actual}'",
                       locator=str(element.locator), timeout=t,
                       expected=expected, actual=actual, message=message)
        self._passed(f"{element.name} label is '{expected}'")

    def label_contains(self, element: Element, text: str, timeout: Optional[float] = None,
                       message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        if not self._ctx.waiter.wait_for_predicate(element.locator, "label_contains", t, expected=text):
            actual = element.label()
            self._fail(f"Element label for {element.describe()} does not contain '{text}'. "
                       f"Expected to contain: '{text}', Actual: '{actual}'",
                       locator=str(element.locator), timeout=t,
                       expected=text, actual=actual, message=message)
        self._passed(f"{element.name} label contains '{text}'")

    def has_value(self, element: Element, expected: str, timeout: Optional[float] = None,
                  message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        if not self._ctx.waiter.wait_for_predicate(element.locator, "value_equals", t, expected=expected):
            actual = element.value()
            self._fail(f"Element value mismatch for {element.describe()}. Expected: '{expected}', Actual: '{actual}'",
                       locator=str(element.locator), timeout=t,
                       expected=expected, actual=actual, message=message)
        self._passed(f"{element.name} value is '{expected}'")

    def is_empty(self, element: Element, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        ok = self._ctx.waiter.wait_for_condition(
            lambda: element.exists() and not element.value(),
            timeout=t,
            description=f"{element.locator} to be empty",
        )
        if not ok:
            actual = element.value() if element.exists() else None
            detail = (f"Element {element.describe()} is not empty. Current value: '{actual}'"
                      if element.exists() else f"Element {element.describe()} does not exist")
            self._fail(detail, locator=str(element.locator), timeout=t,
                       expected="", actual=actual, message=message)
        self._passed(f"{element.name} is empty")

    def is_not_empty(self, element: Element, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        ok = self._ctx.waiter.wait_for_condition(
            lambda: bool(element.value()),
            timeout=t,
            description=f"{element.locator} to have a value",
        )
        if not ok:
            self._fail(f"Element {element.describe()} is empty. Expected: non-empty value, Actual: '{element.value()}'",
                       locator=str(element.locator), timeout=t,
                       expected="non-empty", actual=element.value(), message=message)
        self._passed(f"{element.name} is not empty")

    def count(self, element: Element, expected: int, timeout: Optional[float] = None,
              message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "default_timeout")
        if not self._ctx.waiter.wait_for_count(element.locator, expected, timeout=t):
            actual = element.count()
            self._fail(f"Element count mismatch for {element.describe()}. Expected: {expected}, Actual: {actual}",
                       locator=str(element.locator), timeout=t,
                       expected=expected, actual=actual, message=message)
        self._passed(f"{element.name} count is {expected}")

    def count_at_least(self, element: Element, minimum: int, timeout: Optional[float] = None,
                       message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "default_timeout")
        if not self._ctx.waiter.wait_for_count(element.locator, minimum, minimum=True, timeout=t):
            actual = element.count()
            self._fail(f"Element count {actual} for {element.describe()} is less than minimum {minimum}. "
                       f"Expected: >= {minimum}, Actual: {actual}",
                       locator=str(element.locator), timeout=t,
                       expected=f">= {minimum}", actual=actual, message=message)
        self._passed(f"{element.name} count is at least {minimum}")


class AlertAssert(_AssertBase):
    """Assertions over the platform's modal alert surface."""

    def is_displayed(self, title: Optional[str] = None, timeout: Optional[float] = None,
                     message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "default_timeout")
        if not self._ctx.waiter.wait_for_alert(title, t):
            what = f"Alert '{title}'" if title else "Alert"
            self._fail(f"{what} is not displayed", locator=str(Locator("alert", title)), timeout=t,
                       expected="displayed", actual=self._current_title() or "no alert", message=message)
        self._passed(f"alert '{title}' is displayed" if title else "alert is displayed")

    def has_title(self, title: str, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        if not self._ctx.waiter.wait_for_alert(title, t):
            actual = self._current_title()
            self._fail(f"Alert title mismatch. Expected: '{title}', Actual: '{actual}'",
                       locator=str(ALERT), timeout=t, expected=title, actual=actual, message=message)
        self._passed(f"alert title is '{title}'")

    def has_button(self, label: str, timeout: Optional[float] = None, message: Optional[str] = None) -> None:
        t = self._timeout(timeout, "short_timeout")
        button = self._ctx.platform_element("alert_button", label=label)
        if not button.wait("exists", t):
            self._fail(f"Alert button '{label}' does not exist",
                       locator=str(button.locator), timeout=t,
                       expected="exists", actual="missing", message=message)
        self._passed(f"alert has button '{label}'")

    def _current_title(self) -> Optional[str]:
        try:
            if self._ctx.driver.exists(ALERT):
                return self._ctx.driver.label(ALERT)
        except Exception:
            return None
        return None


class ScreenAssert(_AssertBase):

    def is_displayed(self, screen: Screen, timeout: Optional[float] = None) -> None:
        t = self._timeout(timeout, "default_timeout")
        name = type(screen).__name__
        self._ctx.logger.validating_screen(name)
        if not self._ctx.waiter.wait_for_existence(screen.identifier.locator, t):
            self._ctx.logger.error(f"Assertion Failed: Screen '{name}' is not displayed {_timing(t)}")
            screenshot = self._ctx.artifacts.capture_best_effort(f"Screen not displayed {name}")
            raise ScreenNotDisplayedError(name, str(screen.identifier.locator), t, screenshot=screenshot)
        self._passed(f"{name} is displayed")
