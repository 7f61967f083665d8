# brewtest/repository.py
"""
@file repository.py
@brief Object map loader: per-screen locator tables read from YAML.
"""

from __future__ import annotations

import json
import os
import string
from typing import Any, Dict, List, Optional

import yaml
from jsonschema import Draft202012Validator

from .driver import Locator
from .exceptions import ConfigError

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_OBJECT_MAP = os.path.join(PACKAGE_DIR, "object_maps", "ecoffee.yaml")
OBJECT_MAP_SCHEMA = os.path.join(PACKAGE_DIR, "schemas", "object_map.schema.json")

_FORMATTER = string.Formatter()

# Positional arguments of Repository.locator; a placeholder with one of these
# names could never be filled in as a keyword.
RESERVED_PLACEHOLDERS = ("screen", "name")


def _placeholders(value: Any) -> List[str]:
    if not isinstance(value, str):
        return []
    return [field for _, field, _, _ in _FORMATTER.parse(value) if field]


class Repository:
    """
    Loads the object map and turns element specs into Locators.

    Layout:
      platform: {name: locator}             shared platform surfaces
      screens:
        <screen>:
          identifier: <element name>        the screen's identity element
          elements: {name: locator}
    """

    def __init__(self, path: Optional[str] = None):
        self.path = os.path.abspath(path or DEFAULT_OBJECT_MAP)
        self._raw: Dict[str, Any] = self._load_yaml(self.path)
        self._validate_schema(self._raw)

        self._app: Dict[str, Any] = self._raw.get("app", {}) or {}
        self._platform: Dict[str, Dict[str, Any]] = self._raw.get("platform", {}) or {}
        self._screens: Dict[str, Dict[str, Any]] = self._raw["screens"]

        self._validate()

    @staticmethod
    def _load_yaml(path: str) -> Dict[str, Any]:
        if not os.path.exists(path):
            raise ConfigError(f"Object map YAML not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError("Object map YAML must be a mapping at root.")
        return data

    @staticmethod
    def _validate_schema(data: Dict[str, Any]) -> None:
        with open(OBJECT_MAP_SCHEMA, "r", encoding="utf-8") as f:
            validator = Draft202012Validator(json.load(f))
        errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
        if errors:
            lines = ["Object map schema validation failed:"]
            for e in errors:
                lines.append(f"- {list(e.path)}: {e.message}")
            raise ConfigError("\n".join(lines))

    def _validate(self) -> None:
        for where, spec in self._all_element_specs():
            for field in ("id", "index"):
                clash = set(_placeholders(spec.get(field))) & set(RESERVED_PLACEHOLDERS)
                if clash:
                    raise ConfigError(f"{where}: placeholder '{sorted(clash)[0]}' is reserved, rename it")
        for sname, sspec in self._screens.items():
            identifier = sspec["identifier"]
            elements = sspec["elements"]
            if identifier not in elements:
                raise ConfigError(f"screens.{sname}.identifier references unknown element '{identifier}'")
            id_spec = elements[identifier]
            if _placeholders(id_spec.get("id")) or _placeholders(id_spec.get("index")):
                raise ConfigError(f"screens.{sname}.identifier '{identifier}' must not be parameterized")

    def _all_element_specs(self):
        for name, spec in self._platform.items():
            yield f"platform.{name}", spec
        for sname, sspec in self._screens.items():
            for name, spec in sspec["elements"].items():
                yield f"screens.{sname}.{name}", spec

    # --- access ---

    @property
    def app_name(self) -> str:
        return str(self._app.get("name", ""))

    def list_screens(self) -> List[str]:
        return sorted(self._screens.keys())

    def list_elements(self, screen: str) -> List[str]:
        return sorted(self._screen_spec(screen)["elements"].keys())

    def get_element_spec(self, screen: str, name: str) -> Dict[str, Any]:
        elements = self._screen_spec(screen)["elements"]
        if name not in elements:
            raise ConfigError(f"Unknown element '{name}' on screen '{screen}'")
        return elements[name]

    def identifier_name(self, screen: str) -> str:
        return self._screen_spec(screen)["identifier"]

    def identifier(self, screen: str) -> Locator:
        """Locator whose presence means the screen is displayed."""
        return self.locator(screen, self.identifier_name(screen))

    def locator(self, screen: str, name: str, **params: Any) -> Locator:
        """
        Build the locator for a screen element.

        @param params Values for `{placeholder}` fields in the spec
        @raises ConfigError for unknown screens/elements or missing params
        """
        return self._build(self.get_element_spec(screen, name), f"{screen}.{name}", params)

    def platform(self, name: str, **params: Any) -> Locator:
        if name not in self._platform:
            raise ConfigError(f"Unknown platform element '{name}'")
        return self._build(self._platform[name], f"platform.{name}", params)

    def _screen_spec(self, screen: str) -> Dict[str, Any]:
        if screen not in self._screens:
            raise ConfigError(f"Unknown screen: {screen}")
        return self._screens[screen]

    @staticmethod
    def _build(spec: Dict[str, Any], where: str, params: Dict[str, Any]) -> Locator:
        def fill(value: Any) -> Any:
            if not isinstance(value, str):
                return value
            try:
                return value.format(**params)
            except KeyError as e:
                raise ConfigError(f"{where}: missing parameter {e} for '{value}'") from e

        index = fill(spec.get("index"))
        if isinstance(index, str):
            try:
                index = int(index)
            except ValueError as e:
                raise ConfigError(f"{where}: index must be an integer, got '{index}'") from e

        return Locator(
            kind=spec["kind"],
            identifier=fill(spec.get("id")),
            index=index,
            within=spec.get("within"),
        )
