# brewtest/waits.py
"""
@file waits.py
@brief Bounded polling and retry primitives.

Every wait returns a boolean. A timeout is an ordinary negative outcome and
never raises; only malformed arguments raise ValueError. Callers decide
whether a negative outcome is fatal (assertions) or expected (queries).
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .config import Settings
from .driver import IDriver, Locator
from .exceptions import RetryExhaustedError
from .logger import TEST_LOGGER, TestLogger

ALERT = Locator("alert")
KEYBOARD = Locator("keyboard")
ACTIVITY_INDICATOR = Locator("activity_indicator")

# name -> (query, needs_expected)
PREDICATES: Dict[str, Tuple[Callable[[IDriver, Locator, Any], bool], bool]] = {
    "exists": (lambda d, loc, _: d.exists(loc), False),
    "hittable": (lambda d, loc, _: d.is_hittable(loc), False),
    "enabled": (lambda d, loc, _: d.exists(loc) and d.is_enabled(loc), False),
    "disabled": (lambda d, loc, _: d.exists(loc) and not d.is_enabled(loc), False),
    "selected": (lambda d, loc, _: d.is_selected(loc), False),
    "value_equals": (lambda d, loc, exp: d.value(loc) == exp, True),
    "label_equals": (lambda d, loc, exp: d.label(loc) == exp, True),
    "label_contains": (lambda d, loc, exp: exp in (d.label(loc) or ""), True),
}


class Waiter:
    """
    Condition poller bound to one driver session.

    The clock and sleep functions are injectable so the polling discipline
    can be exercised with a fake clock.
    """

    def __init__(
        self,
        driver: IDriver,
        settings: Optional[Settings] = None,
        logger: Optional[TestLogger] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.driver = driver
        self.settings = settings or Settings.default()
        self.logger = logger or TEST_LOGGER
        self._clock = clock or time.monotonic
        self._sleep = sleep or time.sleep

    def now(self) -> float:
        return self._clock()

    # --- argument handling ---

    def _resolve_timeout(self, timeout: Optional[float], tier: str = "default_timeout") -> float:
        value = getattr(self.settings, tier) if timeout is None else timeout
        if value < 0:
            raise ValueError(f"timeout must not be negative, got {value}")
        return float(value)

    def _resolve_interval(self, poll_interval: Optional[float]) -> float:
        value = self.settings.poll_interval if poll_interval is None else poll_interval
        if value <= 0:
            raise ValueError(f"poll_interval must be positive, got {value}")
        return float(value)

    def _evaluate(self, predicate: Callable[[], Any], description: str) -> bool:
        try:
            return bool(predicate())
        except Exception as e:
            self.logger.debug(f"[timing] event=predicate_error description={description} error={type(e).__name__}: {e}")
            return False

    # --- generic building block ---

    def wait_for_condition(
        self,
        predicate: Callable[[], Any],
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        description: str = "condition",
    ) -> bool:
        """
        Poll predicate until it is truthy or the timeout elapses.

        Returns True as soon as the predicate holds. After the deadline the
        predicate is evaluated one final time and that result is returned.

        @param predicate Zero-argument callable; exceptions count as False
        @param timeout Seconds to wait (settings.default_timeout when None)
        @param poll_interval Seconds between polls (settings.poll_interval when None)
        @param description Used in timing log lines
        """
        timeout = self._resolve_timeout(timeout)
        interval = self._resolve_interval(poll_interval)

        start = self._clock()
        deadline = start + timeout
        attempts = 0

        self.logger.debug(f"[timing] event=wait_start description={description} timeout_s={timeout} interval_s={interval}")

        while self._clock() < deadline:
            attempts += 1
            if self._evaluate(predicate, description):
                self.logger.debug(
                    f"[timing] event=wait_success description={description} "
                    f"attempts={attempts} elapsed_s={round(self._clock() - start, 3)}"
                )
                return True

            time_left = deadline - self._clock()
            if time_left > 0:
                self._sleep(min(interval, time_left))

        attempts += 1
        result = self._evaluate(predicate, description)
        event = "wait_success" if result else "wait_timeout"
        self.logger.debug(
            f"[timing] event={event} description={description} "
            f"attempts={attempts} elapsed_s={round(self._clock() - start, 3)}"
        )
        return result

    # --- element waits ---

    def wait_for_existence(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        """Wait for an element to appear, using the driver's native wait when it has one."""
        timeout = self._resolve_timeout(timeout)
        if self.driver.supports_native_wait:
            return bool(self.driver.wait_for_existence(locator, timeout))
        return self.wait_for_condition(
            lambda: self.driver.exists(locator),
            timeout=timeout,
            description=f"{locator} to exist",
        )

    def wait_for_disappearance(self, locator: Locator, timeout: Optional[float] = None) -> bool:
        return self.wait_for_condition(
            lambda: not self.driver.exists(locator),
            timeout=timeout,
            description=f"{locator} to disappear",
        )

    def wait_for_predicate(
        self,
        locator: Locator,
        predicate: str,
        timeout: Optional[float] = None,
        expected: Any = None,
    ) -> bool:
        """
        Wait for a named predicate over the element's observable state.

        @param predicate One of PREDICATES: "exists", "hittable", "enabled",
               "disabled", "selected", "value_equals", "label_equals",
               "label_contains"
        @param expected Required by the value/label predicates
        """
        if predicate not in PREDICATES:
            raise ValueError(f"Unknown predicate '{predicate}'. Available: {sorted(PREDICATES)}")
        query, needs_expected = PREDICATES[predicate]
        if needs_expected and expected is None:
            raise ValueError(f"Predicate '{predicate}' requires an expected value")

        return self.wait_for_condition(
            lambda: query(self.driver, locator, expected),
            timeout=timeout,
            description=f"{locator} {predicate}" + (f" {expected!r}" if needs_expected else ""),
        )

    def wait_for_count(
        self,
        locator: Locator,
        count: int,
        minimum: bool = False,
        timeout: Optional[float] = None,
    ) -> bool:
        """
        Wait until the number of matches equals count (or reaches it when minimum=True).
        """
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")

        def check() -> bool:
            actual = self.driver.count(locator)
            return actual >= count if minimum else actual == count

        op = ">=" if minimum else "=="
        return self.wait_for_condition(check, timeout=timeout, description=f"count({locator}) {op} {count}")

    def wait_for_any(self, locators: Sequence[Locator], timeout: Optional[float] = None) -> Optional[int]:
        """
        Wait until any of the locators exists.

        Returns:
            Index of the first locator found, or None on timeout
        """
        if not locators:
            raise ValueError("wait_for_any needs at least one locator")
        found: List[int] = []

        def any_present() -> bool:
            for i, loc in enumerate(locators):
                if self.driver.exists(loc):
                    found.append(i)
                    return True
            return False

        desc = ", ".join(str(loc) for loc in locators)
        if self.wait_for_condition(any_present, timeout=timeout, description=f"any of [{desc}]"):
            return found[-1]
        return None

    # --- platform surfaces ---

    def wait_for_alert(self, title: Optional[str] = None, timeout: Optional[float] = None) -> bool:
        locator = ALERT if title is None else Locator("alert", title)
        return self.wait_for_existence(locator, timeout)

    def wait_for_keyboard(self, timeout: Optional[float] = None) -> bool:
        return self.wait_for_existence(KEYBOARD, self._resolve_timeout(timeout, "short_timeout"))

    def wait_for_keyboard_to_disappear(self, timeout: Optional[float] = None) -> bool:
        return self.wait_for_disappearance(KEYBOARD, self._resolve_timeout(timeout, "short_timeout"))

    def wait_for_loading_to_complete(self, timeout: Optional[float] = None) -> bool:
        """Wait for any activity indicator to go away."""
        return self.wait_for_disappearance(ACTIVITY_INDICATOR, self._resolve_timeout(timeout, "long_timeout"))

    # --- coarse-grained retry ---

    def _run_with_retry(
        self,
        action: Callable[[], Any],
        max_attempts: Optional[int],
        delay: Optional[float],
        description: str,
    ) -> Tuple[bool, int, Optional[BaseException]]:
        attempts = self.settings.max_retry_attempts if max_attempts is None else max_attempts
        delay = self.settings.retry_delay if delay is None else delay
        if attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {attempts}")
        if delay < 0:
            raise ValueError(f"delay must not be negative, got {delay}")

        last_error: Optional[BaseException] = None
        for attempt in range(1, attempts + 1):
            try:
                result = action()
                if result is not False:
                    if attempt > 1:
                        self.logger.info(f"{description} succeeded on attempt {attempt}/{attempts}")
                    return True, attempt, None
                self.logger.warning(f"Attempt {attempt}/{attempts} of {description} returned failure")
            except Exception as e:
                last_error = e
                self.logger.warning(f"Attempt {attempt}/{attempts} of {description} failed: {type(e).__name__}: {e}")

            if attempt < attempts:
                self._sleep(delay * attempt)

        self.logger.error(f"All {attempts} attempts of {description} failed")
        return False, attempts, last_error

    def wait_with_retry(
        self,
        action: Callable[[], Any],
        max_attempts: Optional[int] = None,
        delay: Optional[float] = None,
        description: str = "action",
    ) -> bool:
        """
        Run a flaky action until it succeeds or attempts run out.

        An attempt fails when the action raises or returns False; any other
        return value counts as success. Between attempts the waiter sleeps
        delay * attempt_number. One warning is logged per failed attempt.

        @param max_attempts Defaults to settings.max_retry_attempts
        @param delay Base backoff in seconds, defaults to settings.retry_delay
        @return True if some attempt succeeded
        """
        ok, _, _ = self._run_with_retry(action, max_attempts, delay, description)
        return ok

    def retry(
        self,
        action: Callable[[], Any],
        max_attempts: Optional[int] = None,
        delay: Optional[float] = None,
        description: str = "action",
    ) -> None:
        """Same as wait_with_retry but raises RetryExhaustedError when every attempt failed."""
        ok, attempts, last_error = self._run_with_retry(action, max_attempts, delay, description)
        if not ok:
            raise RetryExhaustedError(description, attempts, last_error)
