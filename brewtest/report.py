# brewtest/report.py
"""
@file report.py
@brief Test result records, end-of-run summary and pass/fail metrics.
"""

from __future__ import annotations

import json
import os
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from jsonschema import Draft202012Validator

from .repository import PACKAGE_DIR

REPORT_SCHEMA = os.path.join(PACKAGE_DIR, "schemas", "report.schema.json")
BOX_WIDTH = 50


class TestStatus(str, Enum):
    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class TestResult:
    __test__ = False

    name: str
    status: TestStatus
    duration: float
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.now)
    attachments: List[str] = field(default_factory=list)

    @property
    def duration_formatted(self) -> str:
        if self.duration < 1:
            return f"{self.duration * 1000:.0f}ms"
        return f"{self.duration:.2f}s"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "duration_sec": round(self.duration, 3),
            "error": self.error,
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "attachments": list(self.attachments),
        }


class ReportGenerator:
    """In-memory collection of test results for one run."""

    def __init__(self) -> None:
        self.run_id = uuid4().hex
        self.started_at = datetime.now()
        self._start = time.monotonic()
        self._results: List[TestResult] = []

    def record_result(self, result: TestResult) -> None:
        self._results.append(result)

    @property
    def results(self) -> List[TestResult]:
        return list(self._results)

    def counts(self) -> Dict[str, int]:
        counts = {s.value: 0 for s in TestStatus}
        for r in self._results:
            counts[r.status.value] += 1
        counts["total"] = len(self._results)
        return counts

    @property
    def failed(self) -> List[TestResult]:
        return [r for r in self._results if r.status == TestStatus.FAILED]

    def total_duration(self) -> float:
        return sum(r.duration for r in self._results)

    def clear_results(self) -> None:
        self._results.clear()
        self.run_id = uuid4().hex
        self.started_at = datetime.now()
        self._start = time.monotonic()

    def generate_summary(self) -> str:
        counts = self.counts()
        rule = "=" * BOX_WIDTH
        lines = [
            rule,
            "TEST EXECUTION SUMMARY".center(BOX_WIDTH),
            rule,
            f"Total:    {counts['total']}",
            f"Passed:   {counts['passed']}",
            f"Failed:   {counts['failed']}",
            f"Skipped:  {counts['skipped']}",
            f"Duration: {self.total_duration():.2f}s",
            rule,
        ]
        failed = self.failed
        if failed:
            lines.append("FAILED TESTS:")
            for r in failed:
                error = (r.error or "").splitlines()[0] if r.error else "no message"
                lines.append(f"  - {r.name}: {error}")
            lines.append(rule)
        return "\n".join(lines)

    def to_dict(self, metrics: Optional[Dict[str, Any]] = None, environment: Optional[str] = None) -> Dict[str, Any]:
        counts = self.counts()
        data: Dict[str, Any] = {
            "run_id": self.run_id,
            "started_at": self.started_at.isoformat(timespec="seconds"),
            "duration_sec": round(time.monotonic() - self._start, 3),
            "environment": environment,
            "counts": {k: counts[k] for k in ("total", "passed", "failed", "skipped")},
            "tests": [r.to_dict() for r in self._results],
        }
        if metrics is not None:
            data["metrics"] = metrics
        return data

    def write_json(self, path: str, metrics: Optional[Dict[str, Any]] = None, environment: Optional[str] = None) -> str:
        """
        Validate the report against report.schema.json and write it.

        @return Absolute path of the written file
        """
        data = self.to_dict(metrics=metrics, environment=environment)
        with open(REPORT_SCHEMA, "r", encoding="utf-8") as f:
            validator = Draft202012Validator(json.load(f))
        errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
        if errors:
            lines = ["Report schema validation failed:"]
            for e in errors:
                lines.append(f"- {list(e.path)}: {e.message}")
            raise ValueError("\n".join(lines))

        path = os.path.abspath(path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return path


class MetricsCollector:
    """Start/finish bookkeeping per test, summarized as pass rate and timings."""

    def __init__(self) -> None:
        self._started: Dict[str, float] = {}
        self._durations: Dict[str, float] = {}
        self._outcomes: Dict[str, bool] = {}

    def record_start(self, name: str) -> None:
        self._started[name] = time.monotonic()

    def record_completion(self, name: str, passed: bool, duration: Optional[float] = None) -> None:
        if duration is None:
            start = self._started.pop(name, None)
            duration = time.monotonic() - start if start is not None else 0.0
        else:
            self._started.pop(name, None)
        self._durations[name] = duration
        self._outcomes[name] = passed

    def reset(self) -> None:
        self._started.clear()
        self._durations.clear()
        self._outcomes.clear()

    def summary(self) -> Dict[str, Any]:
        total = len(self._outcomes)
        passed = sum(1 for ok in self._outcomes.values() if ok)
        durations = list(self._durations.values())
        return {
            "total": total,
            "passed": passed,
            "failed": total - passed,
            "pass_rate": round(passed / total * 100, 1) if total else 0.0,
            "average_duration_sec": round(sum(durations) / len(durations), 3) if durations else 0.0,
            "slowest": max(self._durations, key=self._durations.get) if durations else None,
        }

    def format_summary(self) -> str:
        s = self.summary()
        return (
            f"Metrics: {s['passed']}/{s['total']} passed ({s['pass_rate']}%), "
            f"avg {s['average_duration_sec']}s"
        )


REPORT = ReportGenerator()
METRICS = MetricsCollector()
