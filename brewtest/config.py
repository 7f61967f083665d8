# brewtest/config.py
"""
@file config.py
@brief Run-wide settings: timeout tiers, retry policy, evidence policy,
       target environment and the launch configuration handed to the app.

Precedence when built from the process environment:
  base defaults -> timing preset -> environment variables -> configure()
"""

from __future__ import annotations

import logging
import math
import os
import threading
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .logger import LogLevel
from .timings import TIMING_FIELDS, build_preset_values

log = logging.getLogger("brewtest.config")

TIMEOUT_TIERS = ("default_timeout", "short_timeout", "long_timeout", "animation_timeout")


class Environment(str, Enum):
    """Backend the app under test talks to."""
    DEVELOPMENT = "DEV"
    STAGING = "STAGING"
    PRODUCTION = "PROD"

    @property
    def display_name(self) -> str:
        return {
            Environment.DEVELOPMENT: "Development",
            Environment.STAGING: "Staging",
            Environment.PRODUCTION: "Production",
        }[self]

    @classmethod
    def parse(cls, value: Any, default: Optional[Environment] = None) -> Environment:
        """Map a raw value onto an environment, falling back to DEV."""
        fallback = default or cls.DEVELOPMENT
        if isinstance(value, Environment):
            return value
        if not value:
            return fallback
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            log.warning("Unknown environment %r, using %s", value, fallback.value)
            return fallback


def _parse_positive_float(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


@dataclass
class Settings:
    """
    Settings shared by every layer of a run.

    Instances are plain mutable objects. Tests normally receive one through
    the TestContext; Settings.default() is the lazily built process instance.
    """

    default_timeout: float = TIMING_FIELDS["default_timeout"]
    short_timeout: float = TIMING_FIELDS["short_timeout"]
    long_timeout: float = TIMING_FIELDS["long_timeout"]
    animation_timeout: float = TIMING_FIELDS["animation_timeout"]
    poll_interval: float = TIMING_FIELDS["poll_interval"]

    max_retry_attempts: int = 3
    retry_delay: float = TIMING_FIELDS["retry_delay"]

    capture_screenshot_on_failure: bool = True
    capture_screenshot_on_success: bool = False
    artifacts_dir: str = "artifacts"

    verbose_logging: bool = True
    log_level: LogLevel = LogLevel.INFO
    log_file: Optional[str] = None

    environment: Environment = Environment.DEVELOPMENT
    reset_app_state: bool = True
    report_path: Optional[str] = None

    preset: str = "default"
    extra: Dict[str, Any] = field(default_factory=dict)

    _default_instance = None
    _lock = threading.Lock()

    def __post_init__(self) -> None:
        self.environment = Environment.parse(self.environment)
        for name in TIMEOUT_TIERS + ("poll_interval",):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be positive and finite, got {value}")

    # --- construction ---

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        preset: Optional[str] = None,
    ) -> Settings:
        """
        Build settings from a timing preset and the process environment.

        @param environ Mapping to read instead of os.environ
        @param preset Timing preset name; "ci" is implied when CI=true
        """
        env = os.environ if environ is None else environ
        if preset is None:
            preset = "ci" if env.get("CI", "").lower() == "true" else "default"

        values = build_preset_values(preset)
        settings = cls(**values, preset=preset.lower())

        settings.environment = Environment.parse(env.get("TEST_ENVIRONMENT"))

        timeout = _parse_positive_float(env.get("DEFAULT_TIMEOUT"))
        if timeout is not None:
            settings.default_timeout = timeout
        elif env.get("DEFAULT_TIMEOUT"):
            log.warning("Ignoring invalid DEFAULT_TIMEOUT=%r", env.get("DEFAULT_TIMEOUT"))

        if "VERBOSE_LOGGING" in env:
            settings.verbose_logging = env["VERBOSE_LOGGING"].lower() == "true"

        return settings

    @classmethod
    def default(cls) -> Settings:
        """Get the process-wide settings instance (built once from the environment)."""
        if cls._default_instance is None:
            with cls._lock:
                if cls._default_instance is None:
                    cls._default_instance = cls.from_env()
        return cls._default_instance

    @classmethod
    def reset_to_defaults(cls, preset: Optional[str] = None) -> None:
        """Rebuild the process-wide instance from the current environment."""
        with cls._lock:
            cls._default_instance = cls.from_env(preset=preset)

    # --- mutation ---

    def configure(
        self,
        timeout: Optional[float] = None,
        environment: Optional[Any] = None,
        **fields: Any,
    ) -> Settings:
        """
        Update only the supplied fields.

        Malformed values (non-positive timeouts, unknown field names) are
        ignored with a warning.
        """
        if timeout is not None:
            fields["default_timeout"] = timeout
        if environment is not None:
            self.environment = Environment.parse(environment, default=self.environment)

        for name, value in fields.items():
            if name.startswith("_") or name not in self.__dataclass_fields__:
                log.warning("Ignoring unknown setting %r", name)
                continue
            if name in TIMEOUT_TIERS + ("poll_interval", "retry_delay"):
                try:
                    value = float(value)
                except (TypeError, ValueError):
                    log.warning("Ignoring non-numeric %s=%r", name, value)
                    continue
                if not math.isfinite(value):
                    log.warning("Ignoring non-finite %s=%r", name, value)
                    continue
                if value <= 0:
                    log.warning("Ignoring non-positive %s=%r", name, value)
                    continue
            if name == "environment":
                value = Environment.parse(value, default=self.environment)
            setattr(self, name, value)
        return self

    # --- launch configuration ---

    @property
    def launch_arguments(self) -> List[str]:
        args = [
            "-UITesting",
            "-Environment", self.environment.value,
            "-DisableAnimations",
        ]
        if self.reset_app_state:
            args.append("-ResetState")
        return args

    @property
    def launch_environment(self) -> Dict[str, str]:
        return {
            "UITEST_RUNNING": "1",
            "ENVIRONMENT": self.environment.value,
            "ANIMATIONS_DISABLED": "1",
        }

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["environment"] = self.environment.value
        data["log_level"] = self.log_level.name
        return data


def get_settings() -> Settings:
    return Settings.default()
