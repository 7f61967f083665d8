# brewtest/steps/then.py
"""
@file then.py
@brief Then steps: outcome checks. Key outcomes also leave a screenshot.
"""

from __future__ import annotations

from typing import Optional

from ..element import Element
from ..screens.basket import BasketScreen
from ..screens.checkout import CheckoutScreen
from ..screens.drink_detail import DrinkDetailScreen
from ..screens.home import HomeScreen
from ..screens.login import LoginScreen
from ..screens.registration import RegistrationScreen
from ..testdata.orders import PaymentMethod, TestOrder, TipPercentage
from .core import StepGroup


class ThenSteps(StepGroup):
    KEYWORD = "Then"

    # --- screens ---

    def user_sees_home_screen(self, home: HomeScreen) -> HomeScreen:
        with self._step("user sees the home screen"):
            return home.validate()

    def user_sees_login_screen(self, login: LoginScreen) -> LoginScreen:
        with self._step("user sees the login screen"):
            return login.validate()

    def user_sees_registration_screen(self, registration: RegistrationScreen) -> RegistrationScreen:
        with self._step("user sees the registration screen"):
            return registration.validate()

    def user_sees_basket_screen(self, basket: BasketScreen) -> BasketScreen:
        with self._step("user sees the basket"):
            return basket.validate()

    def user_sees_drink_detail(self, detail: DrinkDetailScreen) -> DrinkDetailScreen:
        with self._step("user sees the drink detail"):
            return detail.validate()

    def user_sees_checkout_screen(self, checkout: CheckoutScreen) -> CheckoutScreen:
        with self._step("user sees the checkout"):
            return checkout.validate()

    # --- session ---

    def user_is_logged_in(self, home: HomeScreen) -> HomeScreen:
        with self._step("user is logged in"):
            return home.validate_user_logged_in()

    def user_is_logged_out(self, home: HomeScreen) -> HomeScreen:
        with self._step("user is logged out"):
            return home.validate_user_logged_out()

    def login_fails(self, login: LoginScreen, message: Optional[str] = None) -> LoginScreen:
        """The login sheet stays up, optionally showing a specific error."""
        with self._step("login is rejected"):
            login.validate_login_screen()
            if message is not None:
                login.validate_error_message(message)
            self._test.capture_screenshot("Login rejected")
            return login

    # --- basket ---

    def basket_has_items(self, basket: BasketScreen) -> BasketScreen:
        with self._step("the basket has items"):
            return basket.validate_has_items()

    def basket_is_empty(self, basket: BasketScreen) -> BasketScreen:
        with self._step("the basket is empty"):
            return basket.validate_is_empty()

    def basket_contains_item(self, basket: BasketScreen, name: str) -> BasketScreen:
        with self._step(f"the basket contains '{name}'"):
            return basket.validate_item_in_basket(name)

    def basket_has_item_count(self, basket: BasketScreen, count: int) -> BasketScreen:
        with self._step(f"the basket has {count} item(s)"):
            basket.validate_item_count(count)
            self._test.capture_screenshot(f"Basket with {count} items")
            return basket

    def user_can_place_order(self, basket: BasketScreen) -> BasketScreen:
        with self._step("the order can be placed"):
            self.context.asserts.is_enabled(basket.element("place_order_button"))
            return basket

    def user_cannot_place_order(self, basket: BasketScreen) -> BasketScreen:
        with self._step("the order cannot be placed"):
            self.context.asserts.is_disabled(basket.element("place_order_button"))
            return basket

    # --- alerts ---

    def alert_is_displayed(self, title: Optional[str] = None, timeout: Optional[float] = None) -> None:
        with self._step(f"an alert{f' titled {title!r}' if title else ''} is displayed"):
            self.context.alerts.is_displayed(title, timeout)

    def added_to_basket_alert_is_shown(self, detail: DrinkDetailScreen) -> DrinkDetailScreen:
        with self._step("the added-to-basket confirmation is shown"):
            detail.validate_added_to_basket_alert()
            self._test.capture_screenshot("Added to basket")
            return detail

    def order_confirmation_is_shown(self, checkout: CheckoutScreen) -> CheckoutScreen:
        with self._step("the order confirmation is shown"):
            checkout.validate_order_confirmed()
            self._test.capture_screenshot("Order confirmed")
            return checkout

    # --- product / checkout ---

    def product_name_is(self, detail: DrinkDetailScreen, name: str) -> DrinkDetailScreen:
        with self._step(f"the product is '{name}'"):
            return detail.validate_product_name(name)

    def catalog_displays_products(self, home: HomeScreen, minimum: int = 1) -> HomeScreen:
        with self._step(f"the catalog shows at least {minimum} drink(s)"):
            self.context.asserts.count_at_least(home.element("drink_cells"), minimum)
            return home

    def user_can_confirm_order(self, checkout: CheckoutScreen) -> CheckoutScreen:
        with self._step("the order can be confirmed"):
            self.context.asserts.is_enabled(checkout.element("confirm_button"))
            return checkout

    def checkout_selection_is(self, checkout: CheckoutScreen, method: PaymentMethod,
                              tip: TipPercentage) -> CheckoutScreen:
        with self._step(f"{method.value} and a {tip.value} tip are selected"):
            return checkout.validate_payment_method_selected(method).validate_tip_selected(tip)

    def order_totals_are(self, checkout: CheckoutScreen, order: TestOrder) -> CheckoutScreen:
        with self._step(f"the order total is {order.formatted_total}"):
            return checkout.validate_order_totals(order)

    def order_is_completed(self, home: HomeScreen) -> BasketScreen:
        """After checkout the app is back home and the basket is empty."""
        with self._step("the order is completed"):
            home.validate_home_screen()
            basket = home.tap_basket().validate_is_empty()
            self._test.capture_screenshot("Order completed")
            return basket

    # --- generic element checks ---

    def element_exists(self, element: Element, timeout: Optional[float] = None) -> None:
        with self._step(f"{element.describe()} exists"):
            self.context.asserts.exists(element, timeout)

    def element_does_not_exist(self, element: Element, timeout: Optional[float] = None) -> None:
        with self._step(f"{element.describe()} does not exist"):
            self.context.asserts.not_exists(element, timeout)

    def element_has_label(self, element: Element, label: str) -> None:
        with self._step(f"{element.describe()} reads '{label}'"):
            self.context.asserts.has_label(element, label)

    def element_is_enabled(self, element: Element) -> None:
        with self._step(f"{element.describe()} is enabled"):
            self.context.asserts.is_enabled(element)
