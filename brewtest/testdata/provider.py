# brewtest/testdata/provider.py
"""
@file provider.py
@brief Randomized fixtures and parameterized test cases.

Pass a seed to TestDataProvider to make a failing randomized run repeatable.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

from .orders import OrderItem, PaymentMethod, TestOrder, TipPercentage
from .products import PRODUCTS, TestProduct, cold_products, hot_products
from .users import Users, unique_email


class TestDataProvider:
    __test__ = False

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random_product(self) -> TestProduct:
        return self._random.choice(PRODUCTS)

    def random_hot_product(self) -> TestProduct:
        return self._random.choice(hot_products())

    def random_cold_product(self) -> TestProduct:
        return self._random.choice(cold_products())

    def random_products(self, count: int) -> List[TestProduct]:
        """Distinct products, at most the whole catalog."""
        return self._random.sample(list(PRODUCTS), min(count, len(PRODUCTS)))

    def random_order(self, item_count: int = 1) -> TestOrder:
        items = tuple(OrderItem(p, self._random.randint(1, 3)) for p in self.random_products(item_count))
        return TestOrder(
            items=items,
            payment_method=self._random.choice(list(PaymentMethod)),
            tip=self._random.choice(list(TipPercentage)),
        )

    def unique_email(self, prefix: str = "test") -> str:
        return unique_email(prefix)

    def order_reference(self) -> str:
        return f"ORD-{int(time.time() * 1000)}"


@dataclass(frozen=True)
class DataCase:
    """One row of a data-driven test."""
    name: str
    input: Dict[str, Any]
    expected: Any
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def as_param(self) -> Any:
        """Wrap for pytest.mark.parametrize with the case name as id."""
        return pytest.param(self, id=self.name)


LOGIN_CASES: Sequence[DataCase] = (
    DataCase(
        "valid_credentials",
        {"email": Users.VALID.email, "password": Users.VALID.password},
        True,
        ("Smoke", "Authentication"),
    ),
    DataCase(
        "wrong_password",
        {"email": Users.WRONG_PASSWORD.email, "password": Users.WRONG_PASSWORD.password},
        False,
        ("Authentication",),
    ),
    DataCase(
        "invalid_email",
        {"email": Users.INVALID_EMAIL.email, "password": Users.INVALID_EMAIL.password},
        False,
        ("Authentication",),
    ),
    DataCase(
        "empty_password",
        {"email": Users.EMPTY_PASSWORD.email, "password": ""},
        False,
        ("Authentication",),
    ),
    DataCase(
        "nonexistent_user",
        {"email": Users.NONEXISTENT.email, "password": Users.NONEXISTENT.password},
        False,
        ("Authentication",),
    ),
)


def login_params() -> List[Any]:
    return [case.as_param() for case in LOGIN_CASES]
