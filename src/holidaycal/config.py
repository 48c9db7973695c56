"""JSON configuration files for custom holiday sets.

Example::

    {
        "observed": "nearest",
        "presets": ["de"],
        "holidays": [
            {"name": "Pi Day", "rule": {"type": "fixed", "month": 3, "day": 14}},
            {"name": "Mid-year", "rule": {"type": "year_day", "day": 183}}
        ]
    }
"""

from __future__ import annotations

import json
import logging
import pathlib
from typing import Any, NamedTuple

from holidaycal.errors import ConfigError, HolidayError
from holidaycal.presets import NamedRule, get_preset
from holidaycal.rules import ObservedRule, rule_from_dict

logger = logging.getLogger(__name__)


class HolidayConfig(NamedTuple):
    """Holidays declared by a config file."""

    holidays: list[NamedRule]
    presets: list[str]
    observed: ObservedRule | None = None

    def all_holidays(self) -> list[NamedRule]:
        """Preset holidays followed by the file's own holidays."""
        rules: list[NamedRule] = []
        for code in self.presets:
            rules.extend(get_preset(code).holidays)
        rules.extend(self.holidays)
        return rules


def parse_observed(value: str) -> ObservedRule:
    try:
        return ObservedRule(value.strip().lower())
    except ValueError:
        choices = ", ".join(r.value for r in ObservedRule)
        raise ConfigError(f"Invalid observed rule {value!r}. Choose from: {choices}") from None


def parse_config(data: Any) -> HolidayConfig:
    """Validate already-decoded config *data*."""
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object.")
    if "holidays" not in data and "presets" not in data:
        raise ConfigError("Config file must contain a 'holidays' or 'presets' key.")

    raw_presets = data.get("presets", [])
    if not isinstance(raw_presets, list) or not all(isinstance(p, str) for p in raw_presets):
        raise ConfigError("'presets' must be a list of country codes.")
    for code in raw_presets:
        try:
            get_preset(code)
        except HolidayError as exc:
            raise ConfigError(str(exc)) from None

    raw_holidays = data.get("holidays", [])
    if not isinstance(raw_holidays, list):
        raise ConfigError("'holidays' must be a list.")

    holidays: list[NamedRule] = []
    for i, raw in enumerate(raw_holidays):
        if not isinstance(raw, dict):
            raise ConfigError(f"Holiday #{i + 1} must be an object.")
        name = raw.get("name", f"Holiday {i + 1}")
        try:
            rule = rule_from_dict(raw.get("rule"))
        except HolidayError as exc:
            raise ConfigError(f"Holiday {name!r}: {exc}") from None
        holidays.append((str(name), rule))

    observed = data.get("observed")
    if observed is not None and not isinstance(observed, str):
        raise ConfigError("'observed' must be a string.")

    return HolidayConfig(
        holidays=holidays,
        presets=[p.strip().lower() for p in raw_presets],
        observed=parse_observed(observed) if observed is not None else None,
    )


def load_config(path: str | pathlib.Path) -> HolidayConfig:
    """Load and validate a holiday config file."""
    p = pathlib.Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file: {exc}") from None

    config = parse_config(data)
    logger.debug(
        "Loaded %d holidays and presets %s from %s", len(config.holidays), config.presets, p
    )
    return config
