# brewtest/driver.py
"""
@file driver.py
@brief Locator value type and the UI driver interface the framework consumes.

The driver is an external collaborator (XCUITest bridge, Appium client,
simulator stub...). The framework only relies on the capabilities below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Locator:
    """
    Stable query for a UI element.

    Attributes:
        kind: Element type ("button", "static_text", "cell", "alert", ...)
        identifier: Accessibility identifier or label; None matches any
        index: Position among the matches; None means the first match
        within: Kind of the enclosing container ("table", "alert", "cell", ...)
    """
    kind: str
    identifier: Optional[str] = None
    index: Optional[int] = None
    within: Optional[str] = None

    def at(self, index: int) -> Locator:
        return replace(self, index=index)

    def describe(self) -> str:
        text = self.kind
        if self.within:
            text = f"{self.within}.{text}"
        if self.identifier is not None:
            text += f"['{self.identifier}']"
        if self.index is not None:
            text += f"[{self.index}]"
        return text

    def __str__(self) -> str:
        return self.describe()


class IDriver(ABC):
    """
    Abstract UI driver for one application session.

    Query methods must not raise for a missing element: `exists` returns
    False and the other queries return False/None. Gesture methods raise
    DriverError when the target cannot be found.
    """

    #: True when the driver offers a blocking, non-polling existence wait.
    supports_native_wait: bool = False

    #: True when element_screenshot can capture a single element.
    supports_element_screenshot: bool = False

    # --- queries ---

    @abstractmethod
    def exists(self, locator: Locator) -> bool:
        """Return True if an element matches the locator."""
        pass

    @abstractmethod
    def is_enabled(self, locator: Locator) -> bool:
        pass

    @abstractmethod
    def is_hittable(self, locator: Locator) -> bool:
        pass

    @abstractmethod
    def is_selected(self, locator: Locator) -> bool:
        pass

    @abstractmethod
    def value(self, locator: Locator) -> Optional[str]:
        """
        Get the element's value (text field contents, switch state...).

        Returns:
            Value as a string, or None when absent
        """
        pass

    @abstractmethod
    def label(self, locator: Locator) -> Optional[str]:
        pass

    @abstractmethod
    def count(self, locator: Locator) -> int:
        """
        Count every element matching the locator, ignoring its index.
        """
        pass

    # --- gestures ---

    @abstractmethod
    def tap(self, locator: Locator) -> None:
        pass

    @abstractmethod
    def type_text(self, locator: Locator, text: str) -> None:
        """
        Focus the element and type text into it.
        """
        pass

    @abstractmethod
    def clear_text(self, locator: Locator) -> None:
        pass

    @abstractmethod
    def swipe(self, locator: Optional[Locator], direction: Direction) -> None:
        """
        Swipe over an element, or over the whole screen when locator is None.
        """
        pass

    def wait_for_existence(self, locator: Locator, timeout: float) -> bool:
        """
        Native existence wait. Only called when supports_native_wait is True.
        """
        raise NotImplementedError

    # --- session ---

    @abstractmethod
    def screenshot(self) -> bytes:
        """
        Capture the full screen.

        Returns:
            Encoded image bytes (PNG or any format Pillow can read)
        """
        pass

    def element_screenshot(self, locator: Locator) -> bytes:
        """
        Capture only the element's frame. Only called when
        supports_element_screenshot is True.
        """
        raise NotImplementedError

    @abstractmethod
    def launch(self, arguments: List[str], environment: Dict[str, str]) -> None:
        """
        Launch (or relaunch) the application under test.

        Args:
            arguments: Launch arguments such as "-UITesting"
            environment: Launch environment variables
        """
        pass

    @abstractmethod
    def terminate(self) -> None:
        pass

    @property
    @abstractmethod
    def is_running(self) -> bool:
        pass
