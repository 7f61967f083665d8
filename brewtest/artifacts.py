# brewtest/artifacts.py
"""
@file artifacts.py
@brief Evidence capture: screenshots, text and JSON attachments.
"""

from __future__ import annotations

import io
import json
import os
import re
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from PIL import Image

from .config import Settings
from .driver import IDriver, Locator
from .logger import TEST_LOGGER, TestLogger


def _ts() -> str:
    return time.strftime("%Y-%m-%d_%H-%M-%S")


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def safe_name(text: str) -> str:
    """'Basket with 2 items' -> 'Basket_with_2_items'; path separators and pytest '::' removed."""
    name = re.sub(r"[^\w.\-]+", "_", text.strip())
    return name.strip("_") or "artifact"


@dataclass
class Attachment:
    name: str
    path: str
    kind: str  # screenshot | text | json


class ArtifactStore:
    """
    Writes evidence for one test under <artifacts_dir>/<test name>/ and
    keeps the list of what was attached.
    """

    def __init__(
        self,
        driver: IDriver,
        settings: Settings,
        logger: Optional[TestLogger] = None,
        test_name: str = "run",
    ):
        self._driver = driver
        self._settings = settings
        self._logger = logger or TEST_LOGGER
        self.test_name = test_name
        self.out_dir = os.path.join(settings.artifacts_dir, safe_name(test_name))
        self.attachments: List[Attachment] = []
        self._recording: Optional[str] = None

    def _unique_path(self, name: str, ext: str) -> str:
        ensure_dir(self.out_dir)
        path = os.path.join(self.out_dir, f"{name}.{ext}")
        n = 1
        while os.path.exists(path):
            n += 1
            path = os.path.join(self.out_dir, f"{name}_{n}.{ext}")
        return path

    def _attach(self, name: str, path: str, kind: str) -> str:
        self.attachments.append(Attachment(name=name, path=path, kind=kind))
        return path

    # --- screenshots ---

    def _save_screenshot(self, name: str, data: Optional[bytes] = None) -> str:
        if data is None:
            data = self._driver.screenshot()
        img = Image.open(io.BytesIO(data))
        img.load()
        path = self._unique_path(name, "png")
        img.save(path, format="PNG")
        self._logger.debug(f"Screenshot captured: {name}")
        return self._attach(name, path, "screenshot")

    def capture(self, context: str) -> str:
        """
        Capture the screen as '<context>_<timestamp>.png'.

        Raises whatever the driver or Pillow raise; use capture_best_effort
        where a capture problem must not surface.
        """
        return self._save_screenshot(f"{safe_name(context)}_{_ts()}")

    def capture_element(self, locator: Locator, context: str) -> str:
        """
        Capture one element as '<context>_<timestamp>.png'.

        Drivers without element capture produce a full-screen image instead.
        """
        name = f"{safe_name(context)}_{_ts()}"
        if not self._driver.supports_element_screenshot:
            self._logger.debug(f"Element capture unsupported, capturing full screen for {locator}")
            return self._save_screenshot(name)
        return self._save_screenshot(name, self._driver.element_screenshot(locator))

    def capture_best_effort(self, context: str) -> Optional[str]:
        try:
            return self.capture(context)
        except Exception as e:
            self._logger.warning(f"Screenshot '{context}' could not be captured: {type(e).__name__}: {e}")
            return None

    def capture_on_failure(self, test_name: Optional[str] = None) -> Optional[str]:
        """Capture 'FAILURE_<test>_<timestamp>.png'. Never raises."""
        name = f"FAILURE_{safe_name(test_name or self.test_name)}_{_ts()}"
        try:
            path = self._save_screenshot(name)
        except Exception as e:
            self._logger.warning(f"Failure screenshot could not be captured: {type(e).__name__}: {e}")
            return None
        self._logger.error(f"Test failed - screenshot captured: {name}")
        return path

    # --- attachments ---

    def attach_text(self, name: str, text: str) -> str:
        path = self._unique_path(safe_name(name), "txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        self._logger.debug(f"Text attachment added: {name}")
        return self._attach(name, path, "text")

    def attach_json(self, name: str, data: Any) -> str:
        path = self._unique_path(safe_name(name), "json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        self._logger.debug(f"JSON attachment added: {name}")
        return self._attach(name, path, "json")

    def attach_test_context(self) -> str:
        lines = [
            f"Test: {self.test_name}",
            f"Environment: {self._settings.environment.display_name}",
            f"Timestamp: {datetime.now().isoformat(timespec='seconds')}",
        ]
        return self.attach_text("Test Context", "\n".join(lines))

    # --- recording markers ---

    def start_recording(self, name: Optional[str] = None) -> None:
        self._recording = name or self.test_name
        self._logger.debug(f"Video recording started: {self._recording}")

    def stop_recording(self) -> None:
        if self._recording is None:
            return
        self._logger.debug(f"Video recording stopped: {self._recording}")
        self._recording = None
