# brewtest/screens/login.py
"""
@file login.py
@brief Login sheet shown when an unauthenticated user opens the basket.
"""

from __future__ import annotations

from . import basket, registration
from .base import InputScreen, Screen
from ..testdata.users import TestUser


class LoginScreen(Screen, InputScreen):
    SCREEN = "login"

    # --- input ---

    def enter_email(self, email: str) -> LoginScreen:
        field = self.element("email_field")
        self.asserts.exists(field)
        self.logger.action(f"Enter email: {email}")
        field.tap()
        field.type_text(email)
        return self

    def enter_password(self, password: str) -> LoginScreen:
        field = self.element("password_field")
        self.asserts.exists(field)
        self.logger.action("Enter password: ********")
        field.tap()
        field.type_text(password)
        return self

    def clear_all_inputs(self) -> LoginScreen:
        self.logger.action("Clear login inputs")
        for name in ("email_field", "password_field"):
            field = self.element(name)
            if field.exists():
                field.clear()
        return self

    # --- actions ---

    def tap_sign_in(self) -> basket.BasketScreen:
        """Submit credentials expecting success; the sheet closes onto the basket."""
        self._tap("sign_in_button", "Tap sign in")
        self.element("sign_in_button").wait_until_gone()
        return self._go(basket.BasketScreen)

    def tap_sign_in_expecting_failure(self) -> LoginScreen:
        self._tap("sign_in_button", "Tap sign in (expecting failure)")
        return self.validate_is_displayed()

    def tap_register(self) -> registration.RegistrationScreen:
        self._tap("register_button", "Tap register")
        return self._go(registration.RegistrationScreen)

    def tap_forgot_password(self) -> LoginScreen:
        self._tap("forgot_password_button", "Tap forgot password")
        return self

    def login(self, email: str, password: str) -> basket.BasketScreen:
        self.logger.subsection(f"Login as {email}")
        return self.enter_email(email).enter_password(password).dismiss_keyboard().tap_sign_in()

    def login_as(self, user: TestUser) -> basket.BasketScreen:
        return self.login(user.email, user.password)

    def attempt_login(self, email: str, password: str) -> LoginScreen:
        """Submit credentials that should be rejected."""
        return self.enter_email(email).enter_password(password).dismiss_keyboard().tap_sign_in_expecting_failure()

    # --- validations ---

    def validate_login_screen(self) -> LoginScreen:
        self.validate_is_displayed()
        self.asserts.exists(self.element("password_field"))
        self.asserts.exists(self.element("sign_in_button"))
        return self

    def validate_error_message(self, message: str) -> LoginScreen:
        self.asserts.exists(self.element("error_message", message=message),
                            message="Login error message not shown")
        return self

    def validate_sign_in_button(self, enabled: bool = True) -> LoginScreen:
        button = self.element("sign_in_button")
        if enabled:
            self.asserts.is_enabled(button)
        else:
            self.asserts.is_disabled(button)
        return self

    def validate(self) -> LoginScreen:
        return self.validate_login_screen()

    # --- queries ---

    @property
    def is_sign_in_enabled(self) -> bool:
        return self.element("sign_in_button").is_enabled()
