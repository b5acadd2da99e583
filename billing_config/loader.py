"""
Configuration Loader (``billing_config.loader``).

Responsibility
--------------
Loads a YAML configuration set and parses it into the frozen
``billing_config.schema`` dataclasses. Runtime callers go through
``billing_config.get_active_config()`` rather than calling this directly.

Invariants enforced
-------------------
* Required keys are never defaulted; a missing one raises ``KeyError``.
* The base currency is a valid ISO 4217 code, the rounding mode is a
  ``decimal`` rounding constant and the log level is a standard level name.
* ``compute_checksum`` is deterministic for identical documents.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
* Invalid values  -> ``ValueError``.
"""

from __future__ import annotations

import decimal
import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from billing_config.schema import BillingConfig, LoggingSettings
from billing_kernel.domain.currency import CurrencyRegistry
from billing_kernel.exceptions import InvalidCurrencyError

ROUNDING_MODES: frozenset[str] = frozenset(
    name for name in dir(decimal) if name.startswith("ROUND_")
)

LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration document must be a mapping: {path}")
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical (sorted-key) JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def parse_base_currency(value: Any) -> str:
    try:
        return CurrencyRegistry.validate(value)
    except InvalidCurrencyError as e:
        raise ValueError(f"base_currency: {e}") from e


def parse_rounding(value: Any) -> str:
    if value not in ROUNDING_MODES:
        raise ValueError(
            f"money.rounding must be one of {sorted(ROUNDING_MODES)}, got {value!r}"
        )
    return value


def parse_logging(data: dict[str, Any]) -> LoggingSettings:
    level = str(data.get("level", "INFO")).upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"logging.level must be one of {sorted(LOG_LEVELS)}, got {level!r}")
    return LoggingSettings(level=level)


def parse_config(data: dict[str, Any]) -> BillingConfig:
    """
    Parse a configuration document into a ``BillingConfig``.

    Raises:
        KeyError: if ``config_id``, ``version`` or
            ``organization.base_currency`` is missing.
        ValueError: if any value fails validation.
    """
    version = data["version"]
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise ValueError(f"version must be a positive integer, got {version!r}")

    money = data.get("money") or {}

    return BillingConfig(
        config_id=str(data["config_id"]),
        version=version,
        base_currency=parse_base_currency(data["organization"]["base_currency"]),
        rounding=parse_rounding(money.get("rounding", decimal.ROUND_HALF_UP)),
        logging=parse_logging(data.get("logging") or {}),
        description=str(data.get("description", "")),
        checksum=compute_checksum(data),
    )


def load_config_file(path: Path) -> BillingConfig:
    return parse_config(load_yaml_file(path))


def log_level_number(settings: LoggingSettings) -> int:
    """Numeric ``logging`` level for a validated level name."""
    return logging.getLevelName(settings.level)
