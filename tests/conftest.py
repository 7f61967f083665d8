# tests/conftest.py
"""
Shared fixtures: fast settings, the fake iCoffee driver and a manual clock.
"""

import pytest

from brewtest.config import Settings
from brewtest.context import TestContext
from fake_app import FakeDriver, FakeICoffee


class FakeClock:
    """Manual monotonic clock; sleep() advances it instead of blocking."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def brewtest_settings(tmp_path):
    return Settings(
        default_timeout=0.3,
        short_timeout=0.1,
        long_timeout=0.5,
        animation_timeout=0.05,
        poll_interval=0.01,
        retry_delay=0.01,
        artifacts_dir=str(tmp_path / "artifacts"),
    )


@pytest.fixture
def fake_app():
    return FakeICoffee()


@pytest.fixture
def app_driver(fake_app):
    return FakeDriver(fake_app)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def context(app_driver, brewtest_settings, clock):
    """Context over a launched fake app with fake time."""
    app_driver.launch(brewtest_settings.launch_arguments, brewtest_settings.launch_environment)
    return TestContext.create(app_driver, brewtest_settings, test_name="unit", clock=clock, sleep=clock.sleep)
