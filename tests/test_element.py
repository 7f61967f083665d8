# tests/test_element.py
"""
Tests for the Element wait-then-act helpers.
"""

import pytest


@pytest.fixture
def login(context, fake_app):
    fake_app.screen = "login"
    return context


class TestWaitThenAct:
    """Tests for the composite wait-and-gesture helpers."""

    def test_wait_and_tap(self, login, fake_app, app_driver):
        register = login.element("login", "register_button")
        assert register.wait_and_tap(0) is True
        assert app_driver.actions[-1] == f"tap {register.locator}"
        assert fake_app.screen == "registration"

    def test_wait_and_tap_missing_element(self, login, app_driver):
        before = list(app_driver.actions)
        assert login.element("login", "error_message", message="nope").wait_and_tap(0) is False
        assert app_driver.actions == before

    def test_wait_until_hittable_and_tap(self, login, app_driver):
        email = login.element("login", "email_field")
        assert email.wait_until_hittable_and_tap(0) is True
        assert app_driver.actions[-1] == f"tap {email.locator}"

    def test_not_hittable_behind_alert(self, login, fake_app, app_driver):
        """Fields covered by an alert exist but are not tapped."""
        login.element("login", "forgot_password_button").tap()
        before = list(app_driver.actions)
        email = login.element("login", "email_field")
        assert email.exists()
        assert email.wait_until_hittable_and_tap(0) is False
        assert app_driver.actions == before

    def test_wait_and_type(self, login, fake_app):
        email = login.element("login", "email_field")
        assert email.wait_and_type("a@b.c", 0) is True
        assert email.wait_and_type("om", 0) is True
        assert fake_app.fields["EnterEmail"] == "a@b.com"

    def test_wait_and_type_missing_element(self, context, fake_app):
        assert context.element("login", "email_field").wait_and_type("x", 0) is False
        assert fake_app.fields == {}

    def test_clear_and_type_replaces_text(self, login, fake_app, app_driver):
        fake_app.fields["EnterEmail"] = "old@example.com"
        email = login.element("login", "email_field")
        assert email.clear_and_type("new@example.com", 0) is True
        assert fake_app.fields["EnterEmail"] == "new@example.com"
        assert app_driver.actions[-2:] == [f"clear {email.locator}", f"type {email.locator}"]
