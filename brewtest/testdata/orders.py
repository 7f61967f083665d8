# brewtest/testdata/orders.py
"""
@file orders.py
@brief Order fixtures. Subtotal, tip and total are derived from the items
       and tip tier only.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Tuple

from .products import CENT, PRODUCTS, TestProduct, product_named


class PaymentMethod(str, Enum):
    CREDIT_CARD = "Credit Card"
    CASH = "Cash"
    APPLE_PAY = "Apple Pay"


class TipPercentage(str, Enum):
    """Tip tiers, valued by the label shown on the segmented control."""
    NONE = "0 %"
    TEN = "10 %"
    FIFTEEN = "15 %"
    TWENTY = "20 %"

    @property
    def rate(self) -> Decimal:
        return Decimal(self.value.split()[0]) / 100


@dataclass(frozen=True)
class OrderItem:
    product: TestProduct
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"quantity must be at least 1, got {self.quantity}")

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class TestOrder:
    __test__ = False

    items: Tuple[OrderItem, ...]
    payment_method: PaymentMethod = PaymentMethod.CREDIT_CARD
    tip: TipPercentage = TipPercentage.NONE

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def tip_amount(self) -> Decimal:
        return self.subtotal * self.tip.rate

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tip_amount

    @property
    def formatted_subtotal(self) -> str:
        return f"${self.subtotal.quantize(CENT)}"

    @property
    def formatted_tip(self) -> str:
        return f"${self.tip_amount.quantize(CENT)}"

    @property
    def formatted_total(self) -> str:
        return f"${self.total.quantize(CENT)}"

    @property
    def product_names(self) -> Tuple[str, ...]:
        return tuple(item.product.name for item in self.items)


def order_of(*names: str, payment: PaymentMethod = PaymentMethod.CREDIT_CARD,
             tip: TipPercentage = TipPercentage.NONE) -> TestOrder:
    """order_of("Latte", "Latte", "Espresso") -> Latte x2, Espresso x1."""
    counts = {}
    for name in names:
        counts[name] = counts.get(name, 0) + 1
    items = tuple(OrderItem(product_named(n), q) for n, q in counts.items())
    return TestOrder(items=items, payment_method=payment, tip=tip)


SINGLE_ITEM_ORDER = order_of("Cappuccino", tip=TipPercentage.TEN)
MULTI_ITEM_ORDER = order_of("Latte", "Latte", "Espresso", "Cold Brew", tip=TipPercentage.FIFTEEN)
LARGE_ORDER = TestOrder(
    items=tuple(OrderItem(p, 2) for p in PRODUCTS),
    payment_method=PaymentMethod.CREDIT_CARD,
    tip=TipPercentage.TWENTY,
)
CASH_ORDER = order_of("Americano", payment=PaymentMethod.CASH)
