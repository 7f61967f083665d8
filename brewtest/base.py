# brewtest/base.py
"""
@file base.py
@brief Base class for UI test classes: per-test setup/teardown, evidence,
       retry and BDD step accessors.

Usage:

    class TestBasket(BaseTestCase):
        def test_checkout_empties_basket(self):
            basket = self.given.user_has_items_in_basket(1)
            checkout = self.when.user_places_order(basket)
            self.when.user_completes_checkout(checkout)
            self.then.basket_is_empty(self.given.user_is_on_basket_screen())

Requires the brewtest pytest plugin (`pytest_plugins = ["brewtest.pytest_plugin"]`)
for the app_driver/brewtest_settings fixtures and failure detection.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional

import pytest

from .config import Settings
from .context import TestContext
from .driver import IDriver
from .element import Element
from .exceptions import AssertionFailedError
from .report import METRICS
from .screens.home import HomeScreen
from .steps.given import GivenBuilder, GivenSteps
from .steps.then import ThenSteps
from .steps.when import WhenSteps
from .testplan import TestPlan


def _test_failed(node: Any) -> bool:
    for when in ("setup", "call"):
        rep = getattr(node, f"rep_{when}", None)
        if rep is not None and rep.failed:
            return True
    return False


class BaseTestCase:
    """
    Lifecycle per test:
      setup     context, step counter reset, metrics start, header log
      body      the test method
      teardown  always: subclass tear_down(), duration log, failure or
                success screenshot, metrics, app termination
    """

    context: TestContext
    settings: Settings
    plan: TestPlan
    test_name: str

    @pytest.fixture(autouse=True)
    def _brewtest_lifecycle(self, request: Any, app_driver: IDriver, brewtest_settings: Settings) -> Iterator[None]:
        self._set_up(request.node, app_driver, brewtest_settings)
        try:
            self.set_up()
            yield
        finally:
            self._tear_down(request.node)

    # --- hooks for subclasses ---

    def set_up(self) -> None:
        pass

    def tear_down(self) -> None:
        pass

    # --- lifecycle ---

    def _set_up(self, node: Any, driver: IDriver, settings: Settings) -> None:
        self.test_name = node.name
        self.settings = settings
        self.plan = TestPlan.from_env()
        self.context = TestContext.create(driver, settings, test_name=self.test_name)
        self.issues: List[str] = []
        self._start = time.monotonic()

        logger = self.context.logger
        logger.reset_step_counter()
        logger.section(f"Test: {self.test_name}")
        logger.info(f"Environment: {settings.environment.display_name}")
        logger.debug(f"Launch arguments: {' '.join(settings.launch_arguments)}")
        METRICS.record_start(node.nodeid)
        self.context.artifacts.start_recording(self.test_name)

    def _tear_down(self, node: Any) -> None:
        logger = self.context.logger
        try:
            self.tear_down()
        finally:
            failed = _test_failed(node)
            duration = time.monotonic() - self._start
            logger.info(f"Test {'FAILED' if failed else 'finished'}: {self.test_name} ({duration:.2f}s)")

            if failed:
                if self.settings.capture_screenshot_on_failure:
                    self.context.artifacts.capture_on_failure(self.test_name)
                self._attach_failure_context()
            elif self.settings.capture_screenshot_on_success:
                self.context.artifacts.capture_best_effort(f"SUCCESS_{self.test_name}")
            self.context.artifacts.stop_recording()

            METRICS.record_completion(node.nodeid, passed=not failed and not self.issues, duration=duration)
            node.brewtest_attachments = [a.path for a in self.context.artifacts.attachments]
            self._terminate_app()

        if self.issues and not failed:
            pytest.fail(f"{len(self.issues)} issue(s) recorded: " + "; ".join(self.issues), pytrace=False)

    def _attach_failure_context(self) -> None:
        artifacts = self.context.artifacts
        try:
            artifacts.attach_test_context()
            artifacts.attach_json("Settings", self.settings.to_dict())
        except OSError as e:
            self.context.logger.warning(f"Failure context could not be attached: {e}")

    def _terminate_app(self) -> None:
        driver = self.context.driver
        try:
            if driver.is_running:
                driver.terminate()
        except Exception as e:
            self.context.logger.warning(f"App termination failed: {type(e).__name__}: {e}")

    # --- app control ---

    def launch_app(self) -> HomeScreen:
        """Launch with the configured arguments and wait for the home screen."""
        self.context.logger.action("Launch app")
        self.context.driver.launch(self.settings.launch_arguments, self.settings.launch_environment)
        return HomeScreen(self.context).wait_for_screen_to_load(self.settings.long_timeout)

    def relaunch_app(self, reset_state: bool = False) -> HomeScreen:
        """
        Terminate and launch again. App state survives unless reset_state is True.
        """
        self.context.logger.action(f"Relaunch app (reset_state={reset_state})")
        self._terminate_app()
        args = [a for a in self.settings.launch_arguments if a != "-ResetState"]
        if reset_state:
            args.append("-ResetState")
        self.context.driver.launch(args, self.settings.launch_environment)
        return HomeScreen(self.context).validate_is_displayed(self.settings.long_timeout)

    # --- evidence ---

    def capture_screenshot(self, name: str, element: Optional[Element] = None) -> Optional[str]:
        """Best-effort capture of the screen, or of one element when given."""
        if element is None:
            return self.context.artifacts.capture_best_effort(name)
        try:
            return self.context.artifacts.capture_element(element.locator, name)
        except Exception as e:
            self.context.logger.warning(f"Screenshot '{name}' could not be captured: {type(e).__name__}: {e}")
            return None

    @contextmanager
    def activity(self, name: str) -> Iterator[int]:
        """Run a block as one numbered step; errors are logged and re-raised."""
        step = self.context.logger.step(name)
        try:
            yield step
        except Exception as e:
            self.context.logger.error(f"Step {step} failed: {name} ({type(e).__name__})")
            raise

    # --- retry ---

    def retry(
        self,
        action: Callable[[], Any],
        max_attempts: Optional[int] = None,
        description: str = "action",
        must_succeed: bool = True,
    ) -> bool:
        """
        Retry a flaky action with linear backoff.

        max_attempts defaults to RETRY_COUNT when set, else settings.max_retry_attempts.
        With must_succeed, exhaustion raises RetryExhaustedError.
        """
        if max_attempts is not None:
            attempts = max_attempts
        else:
            attempts = self.plan.retry_count or self.settings.max_retry_attempts
        if must_succeed:
            self.context.waiter.retry(action, attempts, description=description)
            return True
        return self.context.waiter.wait_with_retry(action, attempts, description=description)

    # --- assertions ---

    def assert_that(self, condition: bool, message: str) -> None:
        if not condition:
            self.fail_test(message)
        self.context.logger.info(f"Verified: {message}")

    def assert_element_exists(self, element: Element, timeout: Optional[float] = None,
                              message: Optional[str] = None) -> None:
        self.context.asserts.exists(element, timeout, message)

    def assert_element_not_exists(self, element: Element, timeout: Optional[float] = None,
                                  message: Optional[str] = None) -> None:
        self.context.asserts.not_exists(element, timeout, message)

    def fail_test(self, message: str) -> None:
        self.context.logger.error(f"Test failed: {message}")
        screenshot = self.context.artifacts.capture_best_effort(f"Failure {self.test_name}")
        raise AssertionFailedError(message, screenshot=screenshot)

    def skip_test(self, reason: str) -> None:
        self.context.logger.warning(f"Test skipped: {reason}")
        pytest.skip(reason)

    def record_issue(self, description: str) -> None:
        """Note a non-blocking problem; the test continues and fails at teardown."""
        self.context.logger.warning(f"Issue recorded: {description}")
        self.issues.append(description)

    # --- BDD steps ---

    @property
    def given(self) -> GivenSteps:
        return GivenSteps(self)

    @property
    def when(self) -> WhenSteps:
        return WhenSteps(self)

    @property
    def then(self) -> ThenSteps:
        return ThenSteps(self)

    def precondition(self) -> GivenBuilder:
        return GivenBuilder(self)
