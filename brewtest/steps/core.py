# brewtest/steps/core.py
"""
@file core.py
@brief Shared plumbing for the Given/When/Then step groups.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ContextManager

if TYPE_CHECKING:
    from ..base import BaseTestCase
    from ..context import TestContext
    from ..logger import TestLogger


class StepGroup:
    """A set of BDD steps bound to one running test case."""

    KEYWORD = ""

    def __init__(self, test: BaseTestCase):
        self._test = test

    @property
    def context(self) -> TestContext:
        return self._test.context

    @property
    def logger(self) -> TestLogger:
        return self._test.context.logger

    def _step(self, description: str) -> ContextManager[int]:
        return self._test.activity(f"{self.KEYWORD}: {description}")
