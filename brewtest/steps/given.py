# brewtest/steps/given.py
"""
@file given.py
@brief Given steps: bring the app into a known precondition state.

Every step is idempotent with respect to the state it establishes: asking
for a logged-in user when one is already logged in does not log in again.
"""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Optional

from ..exceptions import FrameworkMisuseError
from ..screens.basket import BasketScreen
from ..screens.base import NavigableScreen, Screen
from ..screens.checkout import CheckoutScreen
from ..screens.drink_detail import DrinkDetailScreen
from ..screens.home import HomeScreen
from ..screens.login import LoginScreen
from ..screens.registration import RegistrationScreen
from ..testdata.users import CredentialsProvider, TestUser
from .core import StepGroup

if TYPE_CHECKING:
    from ..base import BaseTestCase

# Checked in this order: sheets and pushed screens before the Home screen below them.
KNOWN_SCREENS = (CheckoutScreen, BasketScreen, DrinkDetailScreen, RegistrationScreen, LoginScreen, HomeScreen)
MAX_BACK_STEPS = 3


class GivenSteps(StepGroup):
    KEYWORD = "Given"

    def _user(self, user: Optional[TestUser]) -> TestUser:
        return user or CredentialsProvider.for_environment(self.context.settings.environment)

    def _ensure_launched(self) -> HomeScreen:
        if not self.context.driver.is_running:
            return self._test.launch_app()
        return self._return_home()

    def _current_screen(self) -> Optional[Screen]:
        """The first known screen whose identifier is on display, or None."""
        screens = [cls(self.context) for cls in KNOWN_SCREENS]
        index = self.context.waiter.wait_for_any(
            [s.identifier.locator for s in screens], self.context.settings.short_timeout
        )
        return screens[index] if index is not None else None

    def _return_home(self) -> HomeScreen:
        """
        Walk back to Home from wherever the app is: acknowledge an open alert,
        navigate back through pushed screens, and relaunch (keeping the
        session) when Home cannot be reached that way.
        """
        for _ in range(MAX_BACK_STEPS + 1):
            ok = self.context.platform_element("alert_button", label="OK")
            if ok.wait_and_tap(0):
                self.logger.action("Acknowledged open alert")
            screen = self._current_screen()
            if isinstance(screen, HomeScreen):
                return screen.validate_home_screen()
            if not isinstance(screen, NavigableScreen):
                break
            self.logger.info(f"On {type(screen).__name__}, navigating back")
            screen.navigate_back()
        where = type(screen).__name__ if screen is not None else "an unknown screen"
        self.logger.info(f"Home not reachable from {where}, relaunching")
        return self._test.relaunch_app(reset_state=False)

    # --- app state ---

    def app_is_launched(self) -> HomeScreen:
        with self._step("the app is launched"):
            return self._test.launch_app().validate_home_screen()

    def user_is_on_home_screen(self) -> HomeScreen:
        with self._step("user is on the home screen"):
            return self._ensure_launched()

    # --- authentication ---

    def user_is_logged_in(self, user: Optional[TestUser] = None) -> HomeScreen:
        """Log in through the basket's login sheet unless a session already exists."""
        user = self._user(user)
        with self._step(f"user is logged in as {user.email}"):
            home = self._ensure_launched()
            if home.is_log_out_button_displayed:
                self.logger.info("Session already active")
                return home
            screen = home.open_basket()
            if isinstance(screen, LoginScreen):
                screen = screen.login_as(user)
            return screen.navigate_back().validate_user_logged_in()

    def user_is_logged_out(self) -> HomeScreen:
        with self._step("user is logged out"):
            home = self._ensure_launched()
            if home.is_log_out_button_displayed:
                home.tap_log_out()
            return home.validate_user_logged_out()

    def user_is_on_login_screen(self) -> LoginScreen:
        with self._step("user is on the login screen"):
            home = self.user_is_logged_out()
            return home.tap_basket_expecting_login().validate_login_screen()

    # --- navigation ---

    def user_is_on_basket_screen(self, user: Optional[TestUser] = None) -> BasketScreen:
        with self._step("user is on the basket screen"):
            home = self.user_is_logged_in(user)
            return home.tap_basket().validate_basket_screen()

    def user_is_on_drink_detail(self, index: int = 0) -> DrinkDetailScreen:
        with self._step(f"user is viewing drink at index {index}"):
            return self._ensure_launched().select_drink(index).validate_drink_detail_screen()

    def product_is_selected(self, name: str) -> DrinkDetailScreen:
        with self._step(f"product '{name}' is selected"):
            detail = self._ensure_launched().select_drink_named(name)
            return detail.validate_product_name(name)

    # --- basket contents ---

    def user_has_empty_basket(self, user: Optional[TestUser] = None) -> BasketScreen:
        with self._step("user has an empty basket"):
            basket = self.user_is_on_basket_screen(user)
            return basket.clear_all_items().validate_is_empty()

    def user_has_items_in_basket(self, count: int = 1, user: Optional[TestUser] = None) -> BasketScreen:
        """
        Log in, empty the basket, then add `count` distinct drinks (catalog
        rows 0..count-1). Ends on the basket screen showing exactly `count` rows.
        """
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        with self._step(f"user has {count} item(s) in the basket"):
            basket = self.user_has_empty_basket(user)
            if count == 0:
                return basket
            home = basket.navigate_back()
            for index in range(count):
                home = home.select_drink(index).add_to_basket_and_confirm()
            return home.tap_basket().validate_item_count(count)

    def user_is_on_checkout_screen(self, item_count: int = 1, user: Optional[TestUser] = None) -> CheckoutScreen:
        with self._step("user is on the checkout screen"):
            basket = self.user_has_items_in_basket(item_count, user)
            return basket.proceed_to_checkout().validate_checkout_screen()


class GivenBuilder:
    """
    Declarative precondition setup:

        basket = self.precondition().user_logged_in().with_items_in_basket(2).setup()

    The builder only holds a weak reference to its test case; calling setup()
    once that test case is gone raises FrameworkMisuseError.
    """

    def __init__(self, test: BaseTestCase):
        self._test_ref = weakref.ref(test)
        self._logged_in = False
        self._user: Optional[TestUser] = None
        self._item_count: Optional[int] = None

    def user_logged_in(self, user: Optional[TestUser] = None) -> GivenBuilder:
        self._logged_in = True
        self._user = user
        return self

    def with_items_in_basket(self, count: int) -> GivenBuilder:
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")
        self._logged_in = True
        self._item_count = count
        return self

    def setup(self) -> Screen:
        """
        Apply the collected preconditions.

        @return BasketScreen when basket contents were requested, else HomeScreen
        """
        test = self._test_ref()
        if test is None:
            raise FrameworkMisuseError("GivenBuilder.setup() called after its test case was released")
        given = GivenSteps(test)
        if self._item_count is not None:
            return given.user_has_items_in_basket(self._item_count, self._user)
        if self._logged_in:
            return given.user_is_logged_in(self._user)
        return given.user_is_on_home_screen()
