# brewtest/screens/basket.py
"""
@file basket.py
@brief Basket (order) screen: line items, removal and the place-order button.
"""

from __future__ import annotations

from typing import Type

from . import checkout, home
from .base import Alertable, NavigableScreen, Screen, Scrollable
from ..element import Element


class BasketScreen(Screen, NavigableScreen["home.HomeScreen"], Scrollable, Alertable):
    SCREEN = "basket"
    SCROLL_CONTAINER = "list"

    def previous_screen(self) -> Type[home.HomeScreen]:
        return home.HomeScreen

    def _item_cell(self, index: int) -> Element:
        items = self.element("items")
        return Element(self.driver, self.waiter, items.locator.at(index), name=f"basket.items[{index}]")

    # --- actions ---

    def tap_place_order(self) -> checkout.CheckoutScreen:
        button = self.element("place_order_button")
        self.asserts.is_enabled(button, message="Place order needs at least one item")
        self.logger.action("Tap place order")
        button.tap()
        return self._go(checkout.CheckoutScreen)

    def proceed_to_checkout(self) -> checkout.CheckoutScreen:
        return self.validate_has_items().tap_place_order()

    def tap_clear_basket(self) -> BasketScreen:
        """Tap 'Clear Basket' when the app offers it; otherwise do nothing."""
        if self._tap_if_present("clear_button", "Tap clear basket"):
            self.waiter.wait_for_count(self.element("items").locator, 0)
        return self

    def _delete_row(self, row: Element, description: str) -> BasketScreen:
        """Swipe the row to reveal Delete, then tap it."""
        self.asserts.exists(row)
        before = self.item_count
        self.logger.action(f"Remove {description} from basket")
        row.swipe_left()
        self._tap("delete_button", "Confirm delete", timeout=self.settings.short_timeout)
        self.waiter.wait_for_count(self.element("items").locator, before - 1)
        return self

    def remove_item(self, name: str) -> BasketScreen:
        return self._delete_row(self.element("item_named", item=name), f"'{name}'")

    def remove_item_at(self, index: int) -> BasketScreen:
        return self._delete_row(self._item_cell(index), f"item at index {index}")

    def clear_all_items(self) -> BasketScreen:
        """Empty the basket with the clear button, or row by row when there is none."""
        if self.is_empty:
            return self
        if self.element("clear_button").exists():
            return self.tap_clear_basket()
        for _ in range(self.item_count):
            self.remove_item_at(0)
        return self

    # --- validations ---

    def validate_basket_screen(self) -> BasketScreen:
        return self.validate_is_displayed()

    def validate_has_items(self) -> BasketScreen:
        self.asserts.count_at_least(self.element("items"), 1, message="Basket should not be empty")
        return self

    def validate_is_empty(self) -> BasketScreen:
        self.asserts.count(self.element("items"), 0, message="Basket should be empty")
        self.asserts.is_disabled(self.element("place_order_button"),
                                 message="Place order should be disabled for an empty basket")
        return self

    def validate_item_in_basket(self, name: str) -> BasketScreen:
        self.asserts.exists(self.element("item_named", item=name), message=f"'{name}' should be in the basket")
        return self

    def validate_item_count(self, expected: int) -> BasketScreen:
        self.asserts.count(self.element("items"), expected)
        return self

    def validate(self) -> BasketScreen:
        return self.validate_basket_screen()

    # --- queries ---

    @property
    def item_count(self) -> int:
        return self.element("items").count()

    @property
    def is_empty(self) -> bool:
        return self.item_count == 0

    @property
    def can_place_order(self) -> bool:
        return self.element("place_order_button").is_enabled()
