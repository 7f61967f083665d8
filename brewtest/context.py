# brewtest/context.py
"""
@file context.py
@brief Per-test bundle of the collaborators every layer needs.

One TestContext is built at test setup and handed to screens, steps and
assertions explicitly; nothing below the test case reaches for globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, Optional

from .artifacts import ArtifactStore
from .assertions import AlertAssert, ElementAssert, ScreenAssert
from .config import Settings
from .driver import IDriver
from .element import Element
from .logger import TestLogger
from .repository import Repository
from .waits import Waiter


@lru_cache(maxsize=1)
def default_repository() -> Repository:
    return Repository()


@dataclass
class TestContext:
    __test__ = False

    driver: IDriver
    settings: Settings
    logger: TestLogger
    repository: Repository
    waiter: Waiter
    artifacts: ArtifactStore
    test_name: str = "run"
    asserts: ElementAssert = field(init=False)
    alerts: AlertAssert = field(init=False)
    screens: ScreenAssert = field(init=False)

    def __post_init__(self) -> None:
        self.asserts = ElementAssert(self)
        self.alerts = AlertAssert(self)
        self.screens = ScreenAssert(self)

    @classmethod
    def create(
        cls,
        driver: IDriver,
        settings: Optional[Settings] = None,
        test_name: str = "run",
        repository: Optional[Repository] = None,
        logger: Optional[TestLogger] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> TestContext:
        """
        Wire up a context for one test.

        @param settings Defaults to Settings.default()
        @param repository Defaults to the packaged iCoffee object map
        @param clock/sleep Injected into the Waiter (fake time in unit tests)
        """
        settings = settings or Settings.default()
        logger = logger or TestLogger.from_settings(settings)
        return cls(
            driver=driver,
            settings=settings,
            logger=logger,
            repository=repository or default_repository(),
            waiter=Waiter(driver, settings, logger, clock=clock, sleep=sleep),
            artifacts=ArtifactStore(driver, settings, logger, test_name=test_name),
            test_name=test_name,
        )

    def element(self, screen: str, name: str, **params: Any) -> Element:
        locator = self.repository.locator(screen, name, **params)
        return Element(self.driver, self.waiter, locator, name=f"{screen}.{name}")

    def platform_element(self, name: str, **params: Any) -> Element:
        locator = self.repository.platform(name, **params)
        return Element(self.driver, self.waiter, locator, name=name)
