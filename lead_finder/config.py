"""Configuration helpers for the lead finder pipeline."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


@dataclass(frozen=True)
class Settings:
    """Fixed parameters the scoring rules and the formatter depend on."""

    target_city: str = "Lexington"
    target_state: str = "KY"
    target_state_name: str = "Kentucky"
    equity_years_threshold: float = 5.0
    good_bed_range: Tuple[int, int] = (3, 5)
    header_text_limit: int = 150
    section_text_limit: int = 3000
    block_limit: int = 50
    section_safety_margin: int = 100
    ignore_addresses: Tuple[str, ...] = ()


DEFAULT_SETTINGS = Settings()

_SECTION_FIELDS = {
    "scoring": {
        "target_city",
        "target_state",
        "target_state_name",
        "equity_years_threshold",
        "good_bed_range",
    },
    "notifications": {
        "header_text_limit",
        "section_text_limit",
        "block_limit",
        "section_safety_margin",
    },
}

# Slack rejects payloads past these sizes.
_NOTIFICATION_CEILINGS = {
    "header_text_limit": 150,
    "section_text_limit": 3000,
    "block_limit": 50,
}


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        return json.loads(text)

    import yaml

    return yaml.safe_load(text) or {}


def settings_from_config(config: Mapping[str, Any] | None) -> Settings:
    """Build :class:`Settings` from the ``scoring``/``notifications`` sections."""

    if not config:
        return DEFAULT_SETTINGS

    overrides: Dict[str, Any] = {}
    for section, allowed in _SECTION_FIELDS.items():
        values = config.get(section) or {}
        if not isinstance(values, Mapping):
            raise ConfigurationError(f"Configuration section '{section}' must be a mapping")
        for key, value in values.items():
            if key not in allowed:
                LOGGER.debug("Ignoring unknown %s option %s", section, key)
                continue
            overrides[key] = value

    ignore = config.get("ignore_addresses")
    if ignore:
        if isinstance(ignore, str) or not isinstance(ignore, (list, tuple)):
            raise ConfigurationError("'ignore_addresses' must be a list of addresses")
        overrides["ignore_addresses"] = tuple(str(item) for item in ignore)

    return replace(DEFAULT_SETTINGS, **_coerce(overrides))


def load_settings(path: str | Path | None) -> Settings:
    """Load :class:`Settings` from a configuration file, or return the defaults."""

    if path is None:
        return DEFAULT_SETTINGS
    return settings_from_config(load_configuration(path))


def _coerce(overrides: Dict[str, Any]) -> Dict[str, Any]:
    types = {item.name: item.type for item in fields(Settings)}
    coerced: Dict[str, Any] = {}
    for key, value in overrides.items():
        try:
            if key == "good_bed_range":
                low, high = (int(part) for part in value)
                if low > high:
                    raise ValueError("lower bound exceeds upper bound")
                coerced[key] = (low, high)
            elif types[key] in ("int", int):
                coerced[key] = int(value)
            elif types[key] in ("float", float):
                coerced[key] = float(value)
            else:
                coerced[key] = value if isinstance(value, tuple) else str(value)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid value for '{key}': {value!r}") from exc
        ceiling = _NOTIFICATION_CEILINGS.get(key)
        if ceiling is not None and not 1 <= coerced[key] <= ceiling:
            raise ConfigurationError(f"'{key}' must be between 1 and {ceiling}, got {value!r}")
    return coerced
