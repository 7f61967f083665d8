# brewtest/pytest_plugin.py
"""
@file pytest_plugin.py
@brief pytest integration: fixtures, marker-based selection, per-test
       results and the end-of-run summary/JSON report.

Enable it from a conftest.py:

    pytest_plugins = ["brewtest.pytest_plugin"]

Markers:
    @pytest.mark.tags("smoke", "basket")     matched against TEST_TAGS
    @pytest.mark.suite("Smoke")              matched against TEST_SUITE
    @pytest.mark.priority(Priority.CRITICAL) informational

The app_driver fixture builds the UI driver from BREWTEST_DRIVER
("package.module:factory"); the factory receives the Settings. Projects can
override app_driver in their own conftest instead.
"""

from __future__ import annotations

import importlib
import os
from typing import Any, Callable, Iterator, List, Optional

import pytest

from .config import Settings
from .driver import IDriver
from .exceptions import FrameworkMisuseError
from .logger import setup_logging
from .report import METRICS, REPORT, TestResult, TestStatus
from .testplan import TestPlan

DRIVER_ENV = "BREWTEST_DRIVER"

MARKERS = (
    "tags(*names): tags matched against TEST_TAGS",
    "suite(*names): suites matched against TEST_SUITE",
    "priority(level): test priority (brewtest.testplan.Priority)",
)


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("brewtest")
    group.addoption(
        "--brewtest-report",
        action="store",
        default=None,
        help="Write a JSON run report to this path",
    )
    group.addoption(
        "--brewtest-preset",
        action="store",
        default=None,
        help="Timing preset (default, fast, slow, ci)",
    )


def pytest_configure(config: pytest.Config) -> None:
    for marker in MARKERS:
        config.addinivalue_line("markers", marker)

    preset = config.getoption("brewtest_preset")
    if preset:
        Settings.reset_to_defaults(preset)
    setup_logging(Settings.default().log_file)
    REPORT.clear_results()
    METRICS.reset()


def _marker_args(item: pytest.Item, name: str) -> List[str]:
    return [str(arg) for marker in item.iter_markers(name) for arg in marker.args]


def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]) -> None:
    plan = TestPlan.from_env()
    selected, deselected = [], []
    for item in items:
        if plan.selects(_marker_args(item, "tags"), _marker_args(item, "suite")):
            selected.append(item)
        else:
            deselected.append(item)
    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected


# --- results ---


def _status_of(item: pytest.Item) -> TestStatus:
    reports = [getattr(item, f"rep_{when}", None) for when in ("setup", "call", "teardown")]
    if any(rep is not None and rep.failed for rep in reports):
        return TestStatus.FAILED
    if any(rep is not None and rep.skipped for rep in reports):
        return TestStatus.SKIPPED
    return TestStatus.PASSED


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo) -> Iterator[None]:
    """Keep each phase's report on the item (item.rep_setup/rep_call/rep_teardown)."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)

    if call.excinfo is not None and (rep.failed or rep.skipped):
        errors = item.__dict__.setdefault("brewtest_errors", [])
        errors.append(call.excinfo.exconly().strip())

    if rep.when == "teardown":
        durations = [getattr(item, f"rep_{w}").duration for w in ("setup", "call", "teardown")
                     if getattr(item, f"rep_{w}", None) is not None]
        errors = getattr(item, "brewtest_errors", [])
        REPORT.record_result(TestResult(
            name=item.nodeid,
            status=_status_of(item),
            duration=sum(durations),
            error="\n".join(errors) or None,
            attachments=list(getattr(item, "brewtest_attachments", [])),
        ))


def pytest_terminal_summary(terminalreporter: Any, exitstatus: int, config: pytest.Config) -> None:
    if not REPORT.results:
        return
    settings = Settings.default()
    terminalreporter.write_sep("-", "brewtest")
    for line in REPORT.generate_summary().splitlines():
        terminalreporter.write_line(line)
    if METRICS.summary()["total"]:
        terminalreporter.write_line(METRICS.format_summary())

    path = config.getoption("brewtest_report") or settings.report_path
    if path:
        written = REPORT.write_json(path, metrics=METRICS.summary(), environment=settings.environment.value)
        terminalreporter.write_line(f"brewtest report written to {written}")


# --- fixtures ---


def load_driver_factory(spec: str) -> Callable[[Settings], IDriver]:
    """Resolve "package.module:callable" to the callable."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise FrameworkMisuseError(f"{DRIVER_ENV} must look like 'package.module:factory', got {spec!r}")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise FrameworkMisuseError(f"{module_name} has no driver factory named {attr!r}") from None


@pytest.fixture
def brewtest_settings() -> Settings:
    return Settings.default()


@pytest.fixture
def app_driver(brewtest_settings: Settings) -> Iterator[IDriver]:
    spec: Optional[str] = os.environ.get(DRIVER_ENV)
    if not spec:
        raise FrameworkMisuseError(
            f"No UI driver configured: set {DRIVER_ENV}=package.module:factory "
            "or override the app_driver fixture"
        )
    driver = load_driver_factory(spec)(brewtest_settings)
    yield driver
    if driver.is_running:
        driver.terminate()
