# brewtest/screens/drink_detail.py
"""
@file drink_detail.py
@brief Drink detail screen: product info, quantity stepper and add-to-basket.
"""

from __future__ import annotations

from typing import Optional, Type

from . import home
from .base import Alertable, NavigableScreen, Screen

ADDED_ALERT_BUTTON = "OK"


class DrinkDetailScreen(Screen, NavigableScreen["home.HomeScreen"], Alertable):
    SCREEN = "drink_detail"

    def previous_screen(self) -> Type[home.HomeScreen]:
        return home.HomeScreen

    # --- actions ---

    def tap_add_to_basket(self) -> DrinkDetailScreen:
        button = self.element("add_to_basket_button")
        self.asserts.is_visible(button)
        self.logger.action(f"Add '{self.product_name}' to basket")
        button.tap()
        return self

    def confirm_added_to_basket(self) -> home.HomeScreen:
        self.context.alerts.is_displayed(self.element("added_alert").locator.identifier)
        self.accept_alert(ADDED_ALERT_BUTTON)
        return self._go(home.HomeScreen)

    def add_to_basket_and_confirm(self) -> home.HomeScreen:
        return self.tap_add_to_basket().confirm_added_to_basket()

    def increase_quantity(self, times: int = 1) -> DrinkDetailScreen:
        for _ in range(times):
            self._tap("increase_button", "Increase quantity")
        return self

    def decrease_quantity(self, times: int = 1) -> DrinkDetailScreen:
        for _ in range(times):
            self._tap("decrease_button", "Decrease quantity")
        return self

    def set_quantity(self, quantity: int) -> DrinkDetailScreen:
        if quantity < 1:
            raise ValueError(f"quantity must be at least 1, got {quantity}")
        current = self.quantity or 1
        if quantity > current:
            self.increase_quantity(quantity - current)
        elif quantity < current:
            self.decrease_quantity(current - quantity)
        self.asserts.has_label(self.element("quantity"), str(quantity))
        return self

    # --- validations ---

    def validate_drink_detail_screen(self) -> DrinkDetailScreen:
        self.validate_is_displayed()
        self.asserts.exists(self.element("product_name"))
        self.asserts.exists(self.element("price"))
        return self

    def validate_added_to_basket_alert(self) -> DrinkDetailScreen:
        self.context.alerts.is_displayed(self.element("added_alert").locator.identifier)
        self.context.alerts.has_button(ADDED_ALERT_BUTTON)
        return self

    def validate_product_name(self, name: str) -> DrinkDetailScreen:
        self.asserts.has_label(self.element("product_name"), name)
        return self

    def validate_price(self, formatted_price: str) -> DrinkDetailScreen:
        self.asserts.label_contains(self.element("price"), formatted_price)
        return self

    def validate(self) -> DrinkDetailScreen:
        return self.validate_drink_detail_screen()

    # --- queries ---

    @property
    def product_name(self) -> str:
        return self.element("product_name").label() or ""

    @property
    def quantity(self) -> Optional[int]:
        label = self.element("quantity").label()
        try:
            return int(label) if label is not None else None
        except ValueError:
            return None
