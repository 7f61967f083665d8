# brewtest/screens/checkout.py
"""
@file checkout.py
@brief Checkout screen: payment method, tip tier and order confirmation.
"""

from __future__ import annotations

from typing import Type

from . import basket, home
from .base import Alertable, NavigableScreen, Screen
from ..testdata.orders import PaymentMethod, TestOrder, TipPercentage

SWITCH_ON = "1"
CONFIRMED_ALERT_BUTTON = "OK"


class CheckoutScreen(Screen, NavigableScreen["basket.BasketScreen"], Alertable):
    SCREEN = "checkout"

    def previous_screen(self) -> Type[basket.BasketScreen]:
        return basket.BasketScreen

    # --- payment ---

    def tap_how_to_pay(self) -> CheckoutScreen:
        self._tap("how_to_pay_button", "Tap how to pay")
        return self

    def select_payment_method(self, method: PaymentMethod) -> CheckoutScreen:
        switch = self.element("payment_switch", method=method.value)
        if not switch.exists():
            self.tap_how_to_pay()
        self.asserts.exists(switch, self.settings.short_timeout)
        if switch.value() != SWITCH_ON:
            self.logger.action(f"Select payment method: {method.value}")
            switch.tap()
        self.asserts.has_value(switch, SWITCH_ON, message=f"{method.value} should be selected")
        return self

    # --- tip ---

    def select_tip(self, tip: TipPercentage) -> CheckoutScreen:
        """
        Select a tip tier. Tiers scrolled out of the segmented control are
        revealed with a swipe before tapping.
        """
        button = self.element("tip_button", tip=tip.value)
        self.asserts.exists(button)
        if not button.is_hittable():
            self.logger.action("Swipe tip selector to reveal more tiers")
            self.element("tip_control").swipe_right()
        self.asserts.is_visible(button, self.settings.short_timeout)
        self.logger.action(f"Select tip: {tip.value}")
        button.tap()
        return self

    # --- confirmation ---

    def tap_confirm_order(self) -> CheckoutScreen:
        button = self.element("confirm_button")
        self.asserts.is_enabled(button)
        self.logger.action("Tap confirm order")
        button.tap()
        return self

    def dismiss_order_confirmation(self) -> home.HomeScreen:
        self.validate_order_confirmed()
        self.accept_alert(CONFIRMED_ALERT_BUTTON)
        return self._go(home.HomeScreen)

    def complete_checkout(
        self,
        payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD,
        tip: TipPercentage = TipPercentage.TEN,
    ) -> home.HomeScreen:
        self.logger.subsection(f"Checkout with {payment_method.value}, tip {tip.value}")
        return (self.select_payment_method(payment_method)
                .select_tip(tip)
                .tap_confirm_order()
                .dismiss_order_confirmation())

    def complete_order(self, order: TestOrder) -> home.HomeScreen:
        return self.complete_checkout(order.payment_method, order.tip)

    def cancel_checkout(self) -> basket.BasketScreen:
        self._tap("cancel_button", "Cancel checkout")
        return self._go(basket.BasketScreen)

    # --- validations ---

    def validate_checkout_screen(self) -> CheckoutScreen:
        self.validate_is_displayed()
        self.asserts.exists(self.element("total"))
        return self

    def validate_order_confirmed(self) -> CheckoutScreen:
        self.context.alerts.is_displayed(self.element("confirmed_alert").locator.identifier)
        return self

    def validate_payment_method_selected(self, method: PaymentMethod) -> CheckoutScreen:
        self.asserts.has_value(self.element("payment_switch", method=method.value), SWITCH_ON)
        return self

    def validate_tip_selected(self, tip: TipPercentage) -> CheckoutScreen:
        self.asserts.is_selected(self.element("tip_button", tip=tip.value))
        return self

    def validate_total(self, formatted_total: str) -> CheckoutScreen:
        self.asserts.label_contains(self.element("total"), formatted_total)
        return self

    def validate_order_totals(self, order: TestOrder) -> CheckoutScreen:
        self.asserts.label_contains(self.element("subtotal"), order.formatted_subtotal)
        self.asserts.label_contains(self.element("tip_amount"), order.formatted_tip)
        return self.validate_total(order.formatted_total)

    def validate(self) -> CheckoutScreen:
        return self.validate_checkout_screen()

    # --- queries ---

    @property
    def can_confirm_order(self) -> bool:
        return self.element("confirm_button").is_enabled()
