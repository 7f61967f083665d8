# brewtest/testdata/products.py
"""
@file products.py
@brief Catalog fixtures mirroring the drinks the app sells.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Tuple

from ..exceptions import ConfigError

CENT = Decimal("0.01")


class Category(str, Enum):
    HOT = "Hot"
    COLD = "Cold"
    SPECIALTY = "Specialty"


@dataclass(frozen=True)
class TestProduct:
    __test__ = False

    name: str
    price: Decimal
    category: Category
    description: str = ""

    @property
    def formatted_price(self) -> str:
        return f"${self.price.quantize(CENT)}"


PRODUCTS: Tuple[TestProduct, ...] = (
    TestProduct("Americano", Decimal("3.50"), Category.HOT, "Espresso topped with hot water"),
    TestProduct("Cappuccino", Decimal("4.00"), Category.HOT, "Espresso with steamed milk foam"),
    TestProduct("Latte", Decimal("4.50"), Category.HOT, "Espresso with steamed milk"),
    TestProduct("Espresso", Decimal("2.50"), Category.HOT, "A single shot of espresso"),
    TestProduct("Cold Brew", Decimal("4.50"), Category.COLD, "Coffee steeped cold for 12 hours"),
    TestProduct("Frappe", Decimal("5.00"), Category.COLD, "Iced coffee shaken to a foam"),
    TestProduct("Iced Latte", Decimal("5.00"), Category.COLD, "Latte served over ice"),
)

# Every drink name the app can show on a detail screen.
DRINK_NAMES: Tuple[str, ...] = (
    "Americano", "Cappuccino", "Latte", "Espresso", "Cold Brew", "Frappe",
    "Freddo Espresso", "Freddo Cappuccino", "Ice Americano", "Iced Latte",
    "Filter Coffee", "Brew Latte", "Decaf",
)


def product_named(name: str) -> TestProduct:
    for product in PRODUCTS:
        if product.name.lower() == name.lower():
            return product
    raise ConfigError(f"Unknown product: {name}")


def products_in(category: Category) -> List[TestProduct]:
    return [p for p in PRODUCTS if p.category == category]


def hot_products() -> List[TestProduct]:
    return products_in(Category.HOT)


def cold_products() -> List[TestProduct]:
    return products_in(Category.COLD)
