# tests/test_lifecycle.py
"""
BaseTestCase teardown and the pytest plugin, exercised in a child pytest run.
"""

import json
from pathlib import Path

import pytest

FAKE_APP = Path(__file__).with_name("fake_app.py").read_text(encoding="utf-8")

SETTINGS_FIXTURE = """
import pytest

from brewtest.config import Settings

pytest_plugins = ["brewtest.pytest_plugin"]


@pytest.fixture
def brewtest_settings(tmp_path_factory):
    return Settings(default_timeout=0.2, short_timeout=0.1, long_timeout=0.3, animation_timeout=0.05,
                    poll_interval=0.01, retry_delay=0.01,
                    artifacts_dir=str(tmp_path_factory.getbasetemp() / "artifacts"))
"""

DRIVER_FIXTURE = """

from fake_app import FakeDriver


@pytest.fixture
def app_driver():
    return FakeDriver()
"""


@pytest.fixture
def child(pytester, monkeypatch):
    for name in ("TEST_SUITE", "TEST_TAGS", "CI", "RETRY_COUNT", "BREWTEST_DRIVER", "TEST_ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    pytester.makepyfile(fake_app=FAKE_APP)
    pytester.makeconftest(SETTINGS_FIXTURE + DRIVER_FIXTURE)
    return pytester


class TestFailureEvidence:
    """Failures are captured and reported."""

    def test_failure_screenshot_and_report(self, child):
        child.makepyfile(test_flow="""
            from brewtest import BaseTestCase

            class TestHome(BaseTestCase):
                def test_passes(self):
                    self.given.app_is_launched()

                def test_fails(self):
                    home = self.given.app_is_launched()
                    self.then.user_is_logged_in(home)
        """)
        report_path = child.path / "report.json"
        result = child.runpytest_subprocess(f"--brewtest-report={report_path}")
        result.assert_outcomes(passed=1, failed=1)
        result.stdout.fnmatch_lines(["*TEST EXECUTION SUMMARY*", "*test_fails: *AssertionFailedError*",
                                     "Metrics: 1/2 passed (50.0%)*"])

        data = json.loads(report_path.read_text(encoding="utf-8"))
        assert data["counts"] == {"total": 2, "passed": 1, "failed": 1, "skipped": 0}
        failed = [t for t in data["tests"] if t["status"] == "failed"][0]
        assert failed["name"].endswith("test_fails")
        assert "AssertionFailedError" in failed["error"]
        assert any(Path(a).name.startswith("FAILURE_test_fails_") and Path(a).is_file()
                   for a in failed["attachments"])
        names = {Path(a).name for a in failed["attachments"]}
        assert {"Test_Context.txt", "Settings.json"} <= names
        passed = [t for t in data["tests"] if t["status"] == "passed"][0]
        assert not any(Path(a).suffix in (".txt", ".json") for a in passed["attachments"])
        assert data["metrics"]["failed"] == 1

    def test_recorded_issue_fails_at_teardown(self, child):
        child.makepyfile(test_issue="""
            from brewtest import BaseTestCase

            class TestIssue(BaseTestCase):
                def test_soft_failure(self):
                    self.given.app_is_launched()
                    self.record_issue("price looked odd")
        """)
        result = child.runpytest_subprocess()
        result.assert_outcomes(passed=1, errors=1)
        result.stdout.fnmatch_lines(["*1 issue(s) recorded: price looked odd*"])

    def test_app_is_terminated_after_each_test(self, child):
        child.makepyfile(test_terminate="""
            from brewtest import BaseTestCase

            DRIVERS = []

            class TestTerminate(BaseTestCase):
                def test_launch(self, app_driver):
                    self.given.app_is_launched()
                    DRIVERS.append(app_driver)

            def test_after():
                assert not DRIVERS[0].is_running
                assert DRIVERS[0].actions[-1] == "terminate"
        """)
        child.runpytest_subprocess().assert_outcomes(passed=2)


class TestSelection:
    """Marker selection from the environment."""

    TESTS = """
        import pytest

        @pytest.mark.tags("Smoke")
        def test_smoke():
            pass

        @pytest.mark.tags("Checkout")
        @pytest.mark.suite("Regression")
        def test_checkout():
            pass

        @pytest.mark.suite("Sanity")
        def test_sanity():
            pass
    """

    def test_all_selected_by_default(self, child):
        child.makepyfile(test_tags=self.TESTS)
        child.runpytest_subprocess().assert_outcomes(passed=3)

    def test_tags(self, child, monkeypatch):
        monkeypatch.setenv("TEST_TAGS", "smoke")
        child.makepyfile(test_tags=self.TESTS)
        child.runpytest_subprocess().assert_outcomes(passed=1, deselected=2)

    def test_suite(self, child, monkeypatch):
        monkeypatch.setenv("TEST_SUITE", "Sanity")
        child.makepyfile(test_tags=self.TESTS)
        child.runpytest_subprocess().assert_outcomes(passed=1, deselected=2)


class TestDriverFixture:
    """The plugin's app_driver fixture."""

    def test_missing_driver_is_misuse(self, pytester, monkeypatch):
        monkeypatch.delenv("BREWTEST_DRIVER", raising=False)
        pytester.makeconftest(SETTINGS_FIXTURE)
        pytester.makepyfile(test_driver="""
            from brewtest import BaseTestCase

            class TestNoDriver(BaseTestCase):
                def test_anything(self):
                    pass
        """)
        result = pytester.runpytest_subprocess()
        result.assert_outcomes(errors=1)
        result.stdout.fnmatch_lines(["*FrameworkMisuseError: No UI driver configured*"])

    def test_driver_from_environment(self, pytester, monkeypatch):
        monkeypatch.setenv("BREWTEST_DRIVER", "drivers:make_driver")
        pytester.makepyfile(fake_app=FAKE_APP)
        pytester.makepyfile(drivers="""
            from fake_app import FakeDriver

            def make_driver(settings):
                return FakeDriver()
        """)
        pytester.makeconftest(SETTINGS_FIXTURE)
        pytester.makepyfile(test_driver="""
            from brewtest import BaseTestCase

            class TestEnvDriver(BaseTestCase):
                def test_home(self):
                    self.given.app_is_launched()
        """)
        pytester.runpytest_subprocess().assert_outcomes(passed=1)
