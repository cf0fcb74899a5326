"""YAML/dict config loader for swift-colon-lint.

Supports loading from a YAML file or a plain dict (for embedding in a
larger config such as a `.swiftlint.yml`).

Example YAML:

    colon:
      severity: warning            # "warning" or "error"
      flexible_right_spacing: false
      apply_to_dictionaries: true

`strict_right_spacing` is accepted as a synonym of `flexible_right_spacing`.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

import yaml

from .rule import ColonRuleConfig
from .types import Severity

_RIGHT_SPACING_KEYS = ("strict_right_spacing", "flexible_right_spacing")


class ConfigurationError(ValueError):
    """Raised for config values the rule can't use."""


def _bool_option(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigurationError(f"{key} must be true or false, got {value!r}")
    return value


def _severity_option(data: dict[str, Any]) -> Severity:
    value = data.get("severity", Severity.WARNING.value)
    try:
        return Severity(str(value).lower())
    except ValueError:
        raise ConfigurationError(
            f"severity must be 'warning' or 'error', got {value!r}"
        ) from None


def load_config(data: dict[str, Any] | None) -> ColonRuleConfig:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"config must be a mapping, got {type(data).__name__}")
    # Support nested under "colon" key or flat
    if "colon" in data:
        data = data["colon"] or {}
        if not isinstance(data, dict):
            raise ConfigurationError("the 'colon' section must be a mapping")

    strict = False
    for key in _RIGHT_SPACING_KEYS:
        if key in data:
            strict = _bool_option(data, key, False)

    return ColonRuleConfig(
        strict_right_spacing=strict,
        apply_to_dictionaries=_bool_option(data, "apply_to_dictionaries", True),
        severity=_severity_option(data),
    )


def load_from_yaml(path: str | Path) -> ColonRuleConfig:
    """Load config from a YAML file."""
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{path}: invalid YAML: {e}") from e
    return load_config(data)
