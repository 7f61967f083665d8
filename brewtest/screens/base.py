# brewtest/screens/base.py
"""
@file base.py
@brief Screen base class and the composable capability mixins.

A concrete screen derives from Screen and opts into the capabilities it
needs, e.g. `class BasketScreen(Screen, NavigableScreen["HomeScreen"], Alertable)`.
Mixins rely on the Screen attributes (context, element, logger, ...).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, Optional, Protocol, Type, TypeVar, runtime_checkable

from ..driver import Direction
from ..waits import KEYBOARD

if TYPE_CHECKING:
    from ..context import TestContext
    from ..element import Element

S = TypeVar("S", bound="Screen")
P = TypeVar("P", bound="Screen")
T_co = TypeVar("T_co", covariant=True)


class Screen:
    """
    Base page object.

    Subclasses set SCREEN to their key in the object map; the map names the
    screen's identifier element.
    """

    SCREEN: str = ""

    def __init__(self, context: TestContext):
        self.context = context

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    # --- collaborators ---

    @property
    def driver(self):
        return self.context.driver

    @property
    def logger(self):
        return self.context.logger

    @property
    def settings(self):
        return self.context.settings

    @property
    def waiter(self):
        return self.context.waiter

    @property
    def asserts(self):
        return self.context.asserts

    def element(self, name: str, **params: Any) -> Element:
        return self.context.element(self.SCREEN, name, **params)

    # --- identity ---

    @property
    def identifier(self) -> Element:
        return self.element(self.context.repository.identifier_name(self.SCREEN))

    @property
    def is_displayed(self) -> bool:
        """Non-blocking check of the screen identifier."""
        return self.identifier.exists()

    def validate_is_displayed(self: S, timeout: Optional[float] = None) -> S:
        """
        Block until the screen identifier appears.

        @raises ScreenNotDisplayedError naming this screen type on timeout
        """
        self.context.screens.is_displayed(self, timeout)
        return self

    def wait_for_screen_to_load(self: S, timeout: Optional[float] = None) -> S:
        """Validate the screen, then wait for any loading indicator to clear."""
        self.validate_is_displayed(timeout)
        if not self.waiter.wait_for_loading_to_complete():
            self.logger.warning(f"{type(self).__name__}: loading indicator still visible")
        return self

    # --- helpers for subclasses ---

    def _tap(self, name: str, description: str, timeout: Optional[float] = None, **params: Any) -> None:
        """Tap a must-exist element, failing with evidence when it is absent."""
        el = self.element(name, **params)
        self.asserts.exists(el, timeout)
        self.logger.action(description)
        el.tap()

    def _tap_if_present(self, name: str, description: str, **params: Any) -> bool:
        """Tap an optional element. Returns False, doing nothing, when it is absent."""
        el = self.element(name, **params)
        if not el.exists():
            self.logger.debug(f"{description}: skipped, {el.describe()} not present")
            return False
        self.logger.action(description)
        el.tap()
        return True

    def _type(self, name: str, text: str, description: str, **params: Any) -> None:
        el = self.element(name, **params)
        self.asserts.exists(el)
        self.logger.action(description)
        el.type_text(text)

    def _go(self, screen_cls: Type[P], timeout: Optional[float] = None) -> P:
        """Transition to screen_cls, complete once its identifier is observed."""
        destination = screen_cls(self.context)
        destination.validate_is_displayed(timeout)
        self.logger.entering_screen(screen_cls.__name__)
        return destination


# --- capabilities ---


@runtime_checkable
class Tappable(Protocol[T_co]):
    """Something that can be tapped and leads to a known next screen."""

    def tap(self) -> T_co:
        ...


@runtime_checkable
class Validatable(Protocol):
    """A screen with a composite validation of its own."""

    def validate(self) -> Any:
        ...


class Scrollable:
    """
    Scrolling over the screen's container element.

    SCROLL_CONTAINER names the element to swipe on; None swipes the screen.
    """

    SCROLL_CONTAINER: Optional[str] = None
    MAX_SCROLL_SWIPES: int = 10

    def _scroll(self, direction: Direction) -> None:
        locator = self.element(self.SCROLL_CONTAINER).locator if self.SCROLL_CONTAINER else None
        self.driver.swipe(locator, direction)

    def scroll_down(self: S) -> S:
        """Reveal content further down (swipe up)."""
        self.logger.action("Scroll down")
        self._scroll(Direction.UP)
        return self

    def scroll_up(self: S) -> S:
        """Reveal content further up (swipe down)."""
        self.logger.action("Scroll up")
        self._scroll(Direction.DOWN)
        return self

    def scroll_to(self, target: Element, max_swipes: Optional[int] = None) -> bool:
        """
        Scroll down until target is hittable.

        @return True when the target became hittable within max_swipes
        """
        limit = self.MAX_SCROLL_SWIPES if max_swipes is None else max_swipes
        swipes = 0
        while not target.is_hittable():
            if swipes >= limit:
                self.logger.warning(f"{target.describe()} not reached after {swipes} swipes")
                return False
            self._scroll(Direction.UP)
            swipes += 1
        return True


class NavigableScreen(Generic[P]):
    """Screen with a back affordance leading to a statically known screen."""

    BACK_BUTTON: str = "back_button"

    def previous_screen(self) -> Type[P]:
        raise NotImplementedError

    def navigate_back(self) -> P:
        self._tap(self.BACK_BUTTON, "Navigate back")
        return self._go(self.previous_screen())


class InputScreen(ABC):
    """Screen with text inputs and a software keyboard."""

    @abstractmethod
    def clear_all_inputs(self: S) -> S:
        pass

    def dismiss_keyboard(self: S) -> S:
        """Tap the keyboard toolbar's Done button if a keyboard is up."""
        if not self.driver.exists(KEYBOARD):
            return self
        done = self.context.platform_element("keyboard_done")
        if done.exists():
            self.logger.action("Dismiss keyboard")
            done.tap()
            self.waiter.wait_for_keyboard_to_disappear()
        return self


class Alertable:
    """Default handling of the platform's modal alert."""

    def wait_for_alert(self, timeout: Optional[float] = None) -> bool:
        return self.waiter.wait_for_alert(None, timeout)

    def _tap_alert_button(self, button_label: str, timeout: Optional[float]) -> None:
        self.context.alerts.is_displayed(timeout=timeout)
        self.context.alerts.has_button(button_label)
        self.logger.action(f"Tap alert button '{button_label}'")
        self.context.platform_element("alert_button", label=button_label).tap()

    def accept_alert(self: S, button_label: str = "OK", timeout: Optional[float] = None) -> S:
        self._tap_alert_button(button_label, timeout)
        return self

    def dismiss_alert(self: S, button_label: str = "Cancel", timeout: Optional[float] = None) -> S:
        self._tap_alert_button(button_label, timeout)
        return self
