# brewtest/testplan.py
"""
@file testplan.py
@brief Suite/tag selection, priorities and run-level flags read from the environment.

Environment variables:
  CI           "true" when running on a CI agent
  TEST_SUITE   Smoke | Regression | Sanity | E2E | Performance | Accessibility
  TEST_TAGS    comma separated tag list, e.g. "Smoke,Checkout"
  RETRY_COUNT  attempts granted to flaky actions (0 = use settings)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterable, List, Mapping, Optional

import pytest

log = logging.getLogger("brewtest.testplan")


class SuiteType(str, Enum):
    SMOKE = "Smoke"
    REGRESSION = "Regression"
    SANITY = "Sanity"
    E2E = "E2E"
    PERFORMANCE = "Performance"
    ACCESSIBILITY = "Accessibility"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional[SuiteType]:
        if not value:
            return None
        for suite in cls:
            if suite.value.lower() == value.strip().lower():
                return suite
        log.warning("Unknown test suite %r", value)
        return None


class Tag:
    SMOKE = "Smoke"
    REGRESSION = "Regression"
    SANITY = "Sanity"
    CRITICAL = "Critical"
    AUTHENTICATION = "Authentication"
    CHECKOUT = "Checkout"
    CATALOG = "Catalog"
    ORDERS = "Orders"
    PERFORMANCE = "Performance"
    ACCESSIBILITY = "Accessibility"


class Priority(IntEnum):
    P0 = 0
    P1 = 1
    P2 = 2
    P3 = 3

    @property
    def description(self) -> str:
        return {
            Priority.P0: "Critical - Must pass for release",
            Priority.P1: "High - Core functionality",
            Priority.P2: "Medium - Important features",
            Priority.P3: "Low - Nice to have",
        }[self]


def parse_tags(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [t.strip() for t in raw.split(",") if t.strip()]


def _parse_int(raw: Optional[str], default: int = 0) -> int:
    try:
        return max(int(raw), 0) if raw is not None else default
    except ValueError:
        return default


@dataclass
class TestPlan:
    """What the current run should execute, as requested by the environment."""

    __test__ = False

    suite: SuiteType = SuiteType.REGRESSION
    suite_requested: bool = False
    tags: List[str] = field(default_factory=list)
    is_ci: bool = False
    retry_count: int = 0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> TestPlan:
        env = os.environ if environ is None else environ
        suite = SuiteType.parse(env.get("TEST_SUITE"))
        return cls(
            suite=suite or SuiteType.REGRESSION,
            suite_requested=suite is not None,
            tags=parse_tags(env.get("TEST_TAGS")),
            is_ci=env.get("CI", "").lower() == "true",
            retry_count=_parse_int(env.get("RETRY_COUNT")),
        )

    def selects(self, tags: Iterable[str] = (), suites: Iterable[str] = ()) -> bool:
        """
        Decide whether a test carrying these markers belongs to the run.

        Without TEST_TAGS every tag matches. Without TEST_SUITE, or with the
        Regression suite (the full run), every suite matches. Comparison is
        case-insensitive.
        """
        if self.tags:
            wanted = {t.lower() for t in self.tags}
            if not wanted & {t.lower() for t in tags}:
                return False
        if self.suite_requested and self.suite != SuiteType.REGRESSION:
            requested = self.suite.value.lower()
            if requested not in {s.lower() for s in suites}:
                return False
        return True

    def skip_if_ci(self, reason: str) -> None:
        if self.is_ci:
            pytest.skip(f"Skipped in CI: {reason}")

    def skip_if_not_suite(self, suite: SuiteType) -> None:
        if self.suite_requested and self.suite != suite:
            pytest.skip(f"Only runs in the {suite.value} suite (current: {self.suite.value})")
