# brewtest/testdata/users.py
"""
@file users.py
@brief User fixtures, a builder for ad-hoc users and per-environment credentials.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional

from ..config import Environment


class UserType(str, Enum):
    STANDARD = "standard"
    PREMIUM = "premium"
    ADMIN = "admin"
    GUEST = "guest"


@dataclass(frozen=True)
class TestUser:
    __test__ = False

    email: str
    password: str
    first_name: str = "Test"
    last_name: str = "User"
    phone: str = "+1234567890"
    address: str = "123 Test Street, Test City"
    user_type: UserType = UserType.STANDARD

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def masked_password(self) -> str:
        return "*" * 8


class Users:
    """Predefined users."""

    DEFAULT = TestUser("test.user@ecoffee.com", "TestPassword123!")
    VALID = TestUser(
        "gupta.akki23@gmail.com", "Otrium1234",
        first_name="Akshaya", last_name="Gupta",
    )
    PREMIUM = TestUser(
        "premium.user@ecoffee.com", "PremiumPass123!",
        first_name="Premium", last_name="User", user_type=UserType.PREMIUM,
    )
    ADMIN = TestUser(
        "admin@ecoffee.com", "AdminPass123!",
        first_name="Admin", last_name="User", user_type=UserType.ADMIN,
    )
    GUEST = TestUser("", "", first_name="Guest", last_name="", user_type=UserType.GUEST)

    INVALID_EMAIL = TestUser("invalid-email", "SomePassword123!")
    WRONG_PASSWORD = replace(VALID, password="WrongPassword!")
    EMPTY_PASSWORD = replace(VALID, password="")
    NONEXISTENT = TestUser("nonexistent.user@ecoffee.com", "SomePassword123!")


def unique_email(prefix: str = "test", domain: str = "ecoffee.com") -> str:
    return f"{prefix}.{int(time.time())}.{uuid.uuid4().hex[:6]}@{domain}"


class TestUserBuilder:
    """
    Fluent construction of users:

        TestUserBuilder().with_name("Ada", "Lovelace").with_type(UserType.PREMIUM).build_unique()
    """

    __test__ = False

    def __init__(self, base: Optional[TestUser] = None):
        self._user = base or Users.DEFAULT

    def with_email(self, email: str) -> TestUserBuilder:
        self._user = replace(self._user, email=email)
        return self

    def with_password(self, password: str) -> TestUserBuilder:
        self._user = replace(self._user, password=password)
        return self

    def with_name(self, first_name: str, last_name: str) -> TestUserBuilder:
        self._user = replace(self._user, first_name=first_name, last_name=last_name)
        return self

    def with_phone(self, phone: str) -> TestUserBuilder:
        self._user = replace(self._user, phone=phone)
        return self

    def with_address(self, address: str) -> TestUserBuilder:
        self._user = replace(self._user, address=address)
        return self

    def with_type(self, user_type: UserType) -> TestUserBuilder:
        self._user = replace(self._user, user_type=user_type)
        return self

    def build(self) -> TestUser:
        return self._user

    def build_unique(self, prefix: str = "test") -> TestUser:
        """Build with a fresh email so registrations never collide."""
        return replace(self._user, email=unique_email(prefix))


class CredentialsProvider:
    """Picks the account to log in with for an environment or scenario."""

    PROD_USER = TestUser("prod.test@ecoffee.com", "ProdTest123!", first_name="Prod", last_name="Tester")

    _SCENARIOS: Dict[str, TestUser] = {
        "valid": Users.VALID,
        "default": Users.DEFAULT,
        "premium": Users.PREMIUM,
        "admin": Users.ADMIN,
        "guest": Users.GUEST,
        "invalid_email": Users.INVALID_EMAIL,
        "wrong_password": Users.WRONG_PASSWORD,
        "empty_password": Users.EMPTY_PASSWORD,
        "nonexistent": Users.NONEXISTENT,
    }

    @classmethod
    def for_environment(cls, environment: Environment) -> TestUser:
        if environment == Environment.PRODUCTION:
            return cls.PROD_USER
        return Users.VALID

    @classmethod
    def for_scenario(cls, scenario: str) -> TestUser:
        try:
            return cls._SCENARIOS[scenario.lower()]
        except KeyError:
            raise KeyError(f"Unknown credentials scenario '{scenario}'. Available: {sorted(cls._SCENARIOS)}") from None
