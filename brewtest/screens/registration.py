# brewtest/screens/registration.py
"""
@file registration.py
@brief Profile form shown when a new user finishes signing up.
"""

from __future__ import annotations

from . import home
from .base import InputScreen, Screen
from ..testdata.users import TestUser

FIELDS = ("name_field", "surname_field", "telephone_field", "address_field")


class RegistrationScreen(Screen, InputScreen):
    SCREEN = "registration"

    def _enter(self, name: str, text: str, label: str) -> RegistrationScreen:
        field = self.element(name)
        self.asserts.exists(field)
        self.logger.action(f"Enter {label}: {text}")
        field.clear_and_type(text)
        return self

    def enter_name(self, name: str) -> RegistrationScreen:
        return self._enter("name_field", name, "name")

    def enter_surname(self, surname: str) -> RegistrationScreen:
        return self._enter("surname_field", surname, "surname")

    def enter_telephone(self, telephone: str) -> RegistrationScreen:
        return self._enter("telephone_field", telephone, "telephone")

    def enter_address(self, address: str) -> RegistrationScreen:
        return self._enter("address_field", address, "address")

    def fill_profile(self, user: TestUser) -> RegistrationScreen:
        self.logger.test_data(f"Registering profile for {user.full_name}")
        return (self.enter_name(user.first_name)
                .enter_surname(user.last_name)
                .enter_telephone(user.phone)
                .enter_address(user.address)
                .dismiss_keyboard())

    def clear_all_inputs(self) -> RegistrationScreen:
        self.logger.action("Clear registration inputs")
        for name in FIELDS:
            field = self.element(name)
            if field.exists():
                field.clear()
        return self

    def tap_finish(self) -> home.HomeScreen:
        self.asserts.is_enabled(self.element("finish_button"), message="Profile is incomplete")
        self._tap("finish_button", "Tap finish registration")
        return self._go(home.HomeScreen)

    def register(self, user: TestUser) -> home.HomeScreen:
        return self.fill_profile(user).tap_finish()

    def validate_registration_screen(self) -> RegistrationScreen:
        self.validate_is_displayed()
        for name in FIELDS:
            self.asserts.exists(self.element(name))
        return self

    def validate(self) -> RegistrationScreen:
        return self.validate_registration_screen()

    @property
    def is_finish_enabled(self) -> bool:
        return self.element("finish_button").is_enabled()
