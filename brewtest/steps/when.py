# brewtest/steps/when.py
"""
@file when.py
@brief When steps: the user actions under test.
"""

from __future__ import annotations

from typing import Union

from ..screens.base import NavigableScreen
from ..screens.basket import BasketScreen
from ..screens.checkout import CheckoutScreen
from ..screens.drink_detail import DrinkDetailScreen
from ..screens.home import HomeScreen
from ..screens.login import LoginScreen
from ..testdata.orders import PaymentMethod, TestOrder, TipPercentage
from ..testdata.users import TestUser
from .core import StepGroup


class WhenSteps(StepGroup):
    KEYWORD = "When"

    # --- home ---

    def user_taps_basket(self, home: HomeScreen) -> BasketScreen:
        with self._step("user taps the basket"):
            return home.tap_basket()

    def user_opens_basket(self, home: HomeScreen) -> Union[BasketScreen, LoginScreen]:
        """Tap the basket without assuming a session; returns the screen shown."""
        with self._step("user opens the basket"):
            return home.open_basket()

    def user_taps_logout(self, home: HomeScreen) -> HomeScreen:
        with self._step("user taps log out"):
            return home.tap_log_out()

    def user_selects_drink(self, home: HomeScreen, index: int = 0) -> DrinkDetailScreen:
        with self._step(f"user selects drink at index {index}"):
            return home.select_drink(index)

    def user_selects_drink_named(self, home: HomeScreen, name: str) -> DrinkDetailScreen:
        with self._step(f"user selects '{name}'"):
            return home.select_drink_named(name)

    def user_navigates_back(self, screen: NavigableScreen):
        with self._step(f"user navigates back from {type(screen).__name__}"):
            return screen.navigate_back()

    # --- login ---

    def user_enters_credentials(self, login: LoginScreen, email: str, password: str) -> LoginScreen:
        with self._step("user enters credentials"):
            return login.enter_email(email).enter_password(password).dismiss_keyboard()

    def user_taps_sign_in(self, login: LoginScreen) -> BasketScreen:
        with self._step("user taps sign in"):
            return login.tap_sign_in()

    def user_logs_in(self, login: LoginScreen, user: TestUser) -> BasketScreen:
        with self._step(f"user logs in as {user.email}"):
            return login.login_as(user)

    def user_attempts_login(self, login: LoginScreen, email: str, password: str) -> LoginScreen:
        with self._step("user attempts to log in"):
            return login.attempt_login(email, password)

    # --- drink detail ---

    def user_adds_to_basket(self, detail: DrinkDetailScreen) -> DrinkDetailScreen:
        """Tap add-to-basket and leave the confirmation alert up."""
        with self._step("user adds the drink to the basket"):
            return detail.tap_add_to_basket()

    def user_adds_and_confirms(self, detail: DrinkDetailScreen) -> HomeScreen:
        with self._step("user adds the drink and confirms"):
            return detail.add_to_basket_and_confirm()

    def user_changes_quantity(self, detail: DrinkDetailScreen, quantity: int) -> DrinkDetailScreen:
        with self._step(f"user sets quantity to {quantity}"):
            return detail.set_quantity(quantity)

    # --- basket ---

    def user_places_order(self, basket: BasketScreen) -> CheckoutScreen:
        with self._step("user places the order"):
            return basket.proceed_to_checkout()

    def user_clears_basket(self, basket: BasketScreen) -> BasketScreen:
        with self._step("user clears the basket"):
            return basket.clear_all_items()

    def user_removes_item(self, basket: BasketScreen, name: str) -> BasketScreen:
        with self._step(f"user removes '{name}'"):
            return basket.remove_item(name)

    # --- checkout ---

    def user_selects_payment(self, checkout: CheckoutScreen, method: PaymentMethod) -> CheckoutScreen:
        with self._step(f"user pays with {method.value}"):
            return checkout.select_payment_method(method)

    def user_selects_tip(self, checkout: CheckoutScreen, tip: TipPercentage) -> CheckoutScreen:
        with self._step(f"user selects a {tip.value} tip"):
            return checkout.select_tip(tip)

    def user_confirms_order(self, checkout: CheckoutScreen) -> CheckoutScreen:
        """Tap confirm and leave the confirmation alert up."""
        with self._step("user confirms the order"):
            return checkout.tap_confirm_order()

    def user_completes_checkout(
        self,
        checkout: CheckoutScreen,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
        tip: TipPercentage = TipPercentage.TEN,
    ) -> HomeScreen:
        with self._step("user completes checkout"):
            return checkout.complete_checkout(payment_method, tip)

    def user_places_complete_order(self, home: HomeScreen, order: TestOrder) -> HomeScreen:
        """Add every order line, then check out with the order's payment and tip."""
        with self._step(f"user orders {', '.join(order.product_names)}"):
            self.logger.test_data(f"Order total: {order.formatted_total}")
            for item in order.items:
                detail = home.select_drink_named(item.product.name)
                if item.quantity > 1:
                    detail.set_quantity(item.quantity)
                home = detail.add_to_basket_and_confirm()
            checkout = home.tap_basket().proceed_to_checkout()
            return checkout.complete_order(order)
