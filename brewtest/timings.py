# brewtest/timings.py
"""
@file timings.py
@brief Timeout tiers and timing presets.
"""

from __future__ import annotations
from copy import deepcopy
from typing import Any, Dict

from .exceptions import ConfigError


TIMING_FIELDS: Dict[str, float] = {
    "default_timeout": 10.0,
    "short_timeout": 3.0,
    "long_timeout": 30.0,
    "animation_timeout": 0.5,
    "poll_interval": 0.1,
    "retry_delay": 1.0,
}

PRESET_OVERRIDES: Dict[str, Dict[str, float]] = {
    "fast": {
        "default_timeout": 5.0,
        "short_timeout": 1.5,
        "long_timeout": 15.0,
        "animation_timeout": 0.25,
        "poll_interval": 0.05,
        "retry_delay": 0.5,
    },
    "slow": {
        "default_timeout": 20.0,
        "short_timeout": 6.0,
        "long_timeout": 60.0,
        "animation_timeout": 1.0,
        "poll_interval": 0.2,
        "retry_delay": 2.0,
    },
    "ci": {
        "default_timeout": 20.0,
        "short_timeout": 5.0,
        "long_timeout": 60.0,
        "animation_timeout": 1.0,
        "poll_interval": 0.2,
        "retry_delay": 2.0,
    },
}


def list_presets() -> Dict[str, Dict[str, Any]]:
    return {"default": {}, **deepcopy(PRESET_OVERRIDES)}


def build_preset_values(preset: str) -> Dict[str, float]:
    preset_key = (preset or "default").lower()
    values = dict(TIMING_FIELDS)

    if preset_key == "default":
        return values

    overrides = PRESET_OVERRIDES.get(preset_key)
    if overrides is None:
        raise ConfigError(f"Unknown timing preset: {preset}")

    values.update(overrides)
    return values
