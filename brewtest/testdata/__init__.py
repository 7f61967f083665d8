from .orders import (CASH_ORDER, LARGE_ORDER, MULTI_ITEM_ORDER, SINGLE_ITEM_ORDER,
                     OrderItem, PaymentMethod, TestOrder, TipPercentage, order_of)
from .products import (DRINK_NAMES, PRODUCTS, Category, TestProduct,
                       cold_products, hot_products, product_named)
from .provider import LOGIN_CASES, DataCase, TestDataProvider, login_params
from .users import (CredentialsProvider, TestUser, TestUserBuilder, Users,
                    UserType, unique_email)

__all__ = [
    "CASH_ORDER", "LARGE_ORDER", "MULTI_ITEM_ORDER", "SINGLE_ITEM_ORDER",
    "OrderItem", "PaymentMethod", "TestOrder", "TipPercentage", "order_of",
    "DRINK_NAMES", "PRODUCTS", "Category", "TestProduct",
    "cold_products", "hot_products", "product_named",
    "LOGIN_CASES", "DataCase", "TestDataProvider", "login_params",
    "CredentialsProvider", "TestUser", "TestUserBuilder", "Users", "UserType", "unique_email",
]
