# brewtest/screens/home.py
"""
@file home.py
@brief Home / catalog screen: the drink list shown after launch.
"""

from __future__ import annotations

from typing import Optional, Union

from . import basket, drink_detail, login
from .base import Alertable, Screen, Scrollable
from ..element import Element


class DrinkCell:
    """A catalog row; tapping it opens the drink's detail screen."""

    def __init__(self, screen: HomeScreen, element: Element, description: str):
        self._screen = screen
        self.element = element
        self.description = description

    def tap(self) -> drink_detail.DrinkDetailScreen:
        self._screen.asserts.exists(self.element)
        self._screen.logger.action(f"Select drink {self.description}")
        self.element.tap()
        return self._screen._go(drink_detail.DrinkDetailScreen)


class HomeScreen(Screen, Scrollable, Alertable):
    SCREEN = "home"
    SCROLL_CONTAINER = "catalog"

    # --- actions ---

    def tap_basket(self) -> basket.BasketScreen:
        """Open the basket. Expects an authenticated session."""
        self._tap("basket_button", "Tap basket button")
        return self._go(basket.BasketScreen)

    def tap_basket_expecting_login(self) -> login.LoginScreen:
        """Open the basket while logged out; the app asks for credentials first."""
        self._tap("basket_button", "Tap basket button (logged out)")
        return self._go(login.LoginScreen)

    def open_basket(self) -> Union[basket.BasketScreen, login.LoginScreen]:
        """Tap the basket and return whichever screen the app shows."""
        self._tap("basket_button", "Tap basket button")
        candidates = (basket.BasketScreen, login.LoginScreen)
        index = self.waiter.wait_for_any([cls(self.context).identifier.locator for cls in candidates])
        if index is None:
            # neither appeared: fail on the expected destination without waiting again
            self.context.screens.is_displayed(basket.BasketScreen(self.context), timeout=0)
        return self._go(candidates[index or 0])

    def tap_log_out(self) -> HomeScreen:
        self._tap("logout_button", "Tap log out button")
        self.element("logout_button").wait_until_gone(self.settings.short_timeout)
        return self

    def drink(self, index: int) -> DrinkCell:
        return DrinkCell(self, self.element("drink_cell", index=index), f"at index {index}")

    def drink_named(self, name: str) -> DrinkCell:
        return DrinkCell(self, self.element("drink_named", drink=name), f"'{name}'")

    def select_drink(self, index: int = 0) -> drink_detail.DrinkDetailScreen:
        return self.drink(index).tap()

    def select_drink_named(self, name: str) -> drink_detail.DrinkDetailScreen:
        self.scroll_to_drink(name)
        return self.drink_named(name).tap()

    def scroll_to_drink(self, name: str, max_swipes: Optional[int] = None) -> HomeScreen:
        self.logger.action(f"Scroll to drink '{name}'")
        self.scroll_to(self.element("drink_named", drink=name), max_swipes)
        return self

    # --- validations ---

    def validate_home_screen(self) -> HomeScreen:
        self.validate_is_displayed()
        self.asserts.exists(self.element("basket_button"))
        return self

    def validate_catalog_displayed(self) -> HomeScreen:
        self.asserts.count_at_least(self.element("drink_cells"), 1, message="Catalog shows no drinks")
        return self

    def validate_user_logged_in(self) -> HomeScreen:
        self.asserts.exists(self.element("logout_button"), message="User should be logged in")
        return self

    def validate_user_logged_out(self) -> HomeScreen:
        self.asserts.not_exists(self.element("logout_button"), message="User should be logged out")
        return self

    def validate(self) -> HomeScreen:
        return self.validate_home_screen().validate_catalog_displayed()

    # --- queries ---

    @property
    def drink_count(self) -> int:
        return self.element("drink_cells").count()

    @property
    def is_log_out_button_displayed(self) -> bool:
        return self.element("logout_button").exists()
