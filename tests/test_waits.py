# tests/test_waits.py
"""
Tests for the condition poller and retry helpers.
"""

import logging

import pytest

from brewtest.driver import Locator
from brewtest.exceptions import RetryExhaustedError
from brewtest.logger import LogLevel, TestLogger
from brewtest.waits import Waiter


@pytest.fixture
def waiter(context):
    return context.waiter


class TestWaitForCondition:
    """Tests for wait_for_condition."""

    def test_returns_immediately_when_true(self, waiter, clock):
        """Should succeed on the first poll without sleeping."""
        assert waiter.wait_for_condition(lambda: True, timeout=5) is True
        assert clock.sleeps == []

    def test_waits_for_condition(self, waiter, clock):
        """Should keep polling until the predicate holds."""
        calls = {"n": 0}

        def predicate():
            calls["n"] += 1
            return calls["n"] >= 3

        assert waiter.wait_for_condition(predicate, timeout=5, poll_interval=0.5) is True
        assert calls["n"] == 3
        assert clock.sleeps == [0.5, 0.5]

    def test_timeout_returns_false(self, waiter, clock):
        """Should return False, not raise, when the deadline passes."""
        start = clock.now
        assert waiter.wait_for_condition(lambda: False, timeout=1.0, poll_interval=0.25) is False
        assert clock.now - start == pytest.approx(1.0)

    def test_sleep_never_overshoots_deadline(self, waiter, clock):
        """Last sleep should be clipped to the time left."""
        waiter.wait_for_condition(lambda: False, timeout=1.0, poll_interval=0.375)
        assert clock.sleeps == [0.375, 0.375, 0.25]

    def test_zero_timeout_checks_once(self, waiter, clock):
        """A zero timeout should evaluate once and not sleep."""
        calls = []
        assert waiter.wait_for_condition(lambda: calls.append(1) or True, timeout=0) is True
        assert calls == [1]
        assert clock.sleeps == []

    def test_final_check_after_deadline(self, waiter, clock):
        """A predicate that holds exactly at the deadline should still pass."""
        deadline = clock.now + 1.0
        assert waiter.wait_for_condition(lambda: clock.now >= deadline, timeout=1.0, poll_interval=0.5) is True

    def test_predicate_exception_counts_as_false(self, waiter):
        """Exceptions from the predicate should not escape."""
        def boom():
            raise RuntimeError("flaky")

        assert waiter.wait_for_condition(boom, timeout=0.2, poll_interval=0.1) is False

    def test_negative_timeout_raises(self, waiter):
        """Malformed timeout should raise ValueError."""
        with pytest.raises(ValueError):
            waiter.wait_for_condition(lambda: True, timeout=-1)

    def test_non_positive_interval_raises(self, waiter):
        """Malformed poll interval should raise ValueError."""
        with pytest.raises(ValueError):
            waiter.wait_for_condition(lambda: True, timeout=1, poll_interval=0)

    def test_defaults_come_from_settings(self, waiter, clock, brewtest_settings):
        """Without arguments the default tier and poll interval apply."""
        start = clock.now
        waiter.wait_for_condition(lambda: False)
        assert clock.now - start == pytest.approx(brewtest_settings.default_timeout)
        assert clock.sleeps[0] == pytest.approx(brewtest_settings.poll_interval)

    def test_timing_events_logged(self, app_driver, brewtest_settings, clock, caplog):
        """Should log wait_start and wait_success debug events."""
        caplog.set_level(logging.DEBUG, logger="brewtest")
        waiter = Waiter(app_driver, brewtest_settings, TestLogger(min_level=LogLevel.DEBUG),
                        clock=clock, sleep=clock.sleep)
        waiter.wait_for_condition(lambda: True, timeout=1, description="ready_check")
        messages = [r.getMessage() for r in caplog.records]
        assert any("event=wait_start description=ready_check" in m for m in messages)
        assert any("event=wait_success description=ready_check" in m for m in messages)


class TestElementWaits:
    """Tests for locator-based waits against the fake app."""

    def test_wait_for_existence(self, waiter):
        """Home title should exist after launch."""
        assert waiter.wait_for_existence(Locator("static_text", "iCoffee"), timeout=0.1) is True

    def test_wait_for_existence_times_out(self, waiter):
        """Missing element should yield False."""
        assert waiter.wait_for_existence(Locator("button", "Nope"), timeout=0.1) is False

    def test_wait_for_disappearance(self, waiter, fake_app):
        """Should succeed once the element is gone."""
        fake_app.logged_in = False
        assert waiter.wait_for_disappearance(Locator("button", "LogOut"), timeout=0.1) is True

    def test_native_wait_is_used_when_supported(self, waiter, app_driver):
        """Drivers with a native wait should not be polled."""
        app_driver.supports_native_wait = True
        app_driver.wait_for_existence = lambda locator, timeout: locator.identifier == "native"
        assert waiter.wait_for_existence(Locator("button", "native"), timeout=5) is True

    def test_wait_for_predicate(self, waiter):
        """Named predicates should query the driver."""
        assert waiter.wait_for_predicate(Locator("button", "Basket"), "enabled", timeout=0.1) is True
        assert waiter.wait_for_predicate(Locator("static_text", "iCoffee"), "label_equals",
                                         timeout=0.1, expected="iCoffee") is True

    def test_unknown_predicate_raises(self, waiter):
        """An unknown predicate name is a programming error."""
        with pytest.raises(ValueError, match="Unknown predicate"):
            waiter.wait_for_predicate(Locator("button", "Basket"), "sparkly")

    def test_predicate_missing_expected_raises(self, waiter):
        """Value predicates need an expected value."""
        with pytest.raises(ValueError, match="requires an expected value"):
            waiter.wait_for_predicate(Locator("button", "Basket"), "value_equals")

    def test_wait_for_count(self, waiter):
        """Catalog cell count should be reached."""
        cells = Locator("cell", within="table")
        assert waiter.wait_for_count(cells, 13, timeout=0.1) is True
        assert waiter.wait_for_count(cells, 5, minimum=True, timeout=0.1) is True
        assert waiter.wait_for_count(cells, 99, timeout=0.1) is False

    def test_wait_for_any_returns_index(self, waiter):
        """Should return the index of the locator that appeared."""
        index = waiter.wait_for_any([Locator("button", "PlaceOrder"), Locator("static_text", "iCoffee")], timeout=0.1)
        assert index == 1

    def test_wait_for_any_none_on_timeout(self, waiter):
        """Should return None when nothing appears."""
        assert waiter.wait_for_any([Locator("button", "X")], timeout=0.1) is None

    def test_wait_for_any_requires_locators(self, waiter):
        with pytest.raises(ValueError):
            waiter.wait_for_any([])

    def test_wait_for_alert(self, waiter, fake_app):
        """Alert waits should match by title."""
        fake_app._show_alert("Order confirmed", {})
        assert waiter.wait_for_alert(timeout=0.1) is True
        assert waiter.wait_for_alert("Order confirmed", timeout=0.1) is True
        assert waiter.wait_for_alert("Something else", timeout=0.1) is False

    def test_keyboard_waits(self, waiter, fake_app):
        """Keyboard appearance and dismissal."""
        assert waiter.wait_for_keyboard(timeout=0.1) is False
        fake_app.keyboard = True
        assert waiter.wait_for_keyboard() is True
        fake_app.keyboard = False
        assert waiter.wait_for_keyboard_to_disappear() is True

    def test_loading_completes_without_indicator(self, waiter):
        assert waiter.wait_for_loading_to_complete() is True


class TestRetry:
    """Tests for wait_with_retry and retry."""

    def test_succeeds_first_time(self, waiter, clock):
        """Should not sleep when the first attempt succeeds."""
        assert waiter.wait_with_retry(lambda: None, max_attempts=3, delay=1) is True
        assert clock.sleeps == []

    def test_linear_backoff(self, waiter, clock):
        """Sleeps should grow as delay * attempt."""
        calls = {"n": 0}

        def flaky():
            calls["n"] += 1
            if calls["n"] < 3:
                raise RuntimeError("not yet")

        assert waiter.wait_with_retry(flaky, max_attempts=3, delay=0.5) is True
        assert clock.sleeps == [0.5, 1.0]

    def test_recovers_after_two_failures(self, waiter, caplog):
        """Two failures then success: True, two warnings and no error."""
        caplog.set_level(logging.DEBUG, logger="brewtest")
        outcomes = iter([False, False, True])
        assert waiter.wait_with_retry(lambda: next(outcomes), max_attempts=3, delay=0.1) is True
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 2
        assert not [r for r in caplog.records if r.levelno >= logging.ERROR]

    def test_false_return_is_a_failed_attempt(self, waiter):
        """Returning False should count as failure."""
        assert waiter.wait_with_retry(lambda: False, max_attempts=2, delay=0.1) is False

    def test_one_warning_per_failed_attempt(self, waiter, caplog):
        """Each failed attempt warns; exhaustion logs one error."""
        caplog.set_level(logging.DEBUG, logger="brewtest")
        waiter.wait_with_retry(lambda: False, max_attempts=3, delay=0.1, description="tap basket")
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(warnings) == 3
        assert "Attempt 1/3 of tap basket returned failure" in warnings[0].getMessage()
        assert len(errors) == 1
        assert "All 3 attempts of tap basket failed" in errors[0].getMessage()

    def test_retry_raises_when_exhausted(self, waiter):
        """retry() should raise RetryExhaustedError carrying the last error."""
        def boom():
            raise RuntimeError("still broken")

        with pytest.raises(RetryExhaustedError) as exc_info:
            waiter.retry(boom, max_attempts=2, delay=0.1, description="open basket")
        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.last_error, RuntimeError)

    def test_invalid_arguments(self, waiter):
        with pytest.raises(ValueError):
            waiter.wait_with_retry(lambda: True, max_attempts=0)
        with pytest.raises(ValueError):
            waiter.wait_with_retry(lambda: True, max_attempts=1, delay=-1)

    def test_defaults_from_settings(self, app_driver, brewtest_settings, clock):
        """Attempts default to settings.max_retry_attempts."""
        waiter = Waiter(app_driver, brewtest_settings, clock=clock, sleep=clock.sleep)
        calls = []
        waiter.wait_with_retry(lambda: calls.append(1) or False)
        assert len(calls) == brewtest_settings.max_retry_attempts
