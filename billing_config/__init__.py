"""
billing_config -- single public entrypoint for billing configuration.

Responsibility:
    ``get_active_config()`` is the only way to obtain configuration at
    runtime. It loads a YAML configuration set from ``billing_config/sets``
    (or an override directory), validates it and returns a frozen
    ``BillingConfig``.

Architecture position:
    Configuration -- sits above ``billing_kernel`` and beside
    ``billing_engines``. Neither the kernel nor the engines import this
    package; services pass the values they need down explicitly.

Failure modes:
    - ``FileNotFoundError`` -- no set named ``config_id``.
    - ``yaml.YAMLError`` -- malformed YAML.
    - ``KeyError`` / ``ValueError`` -- schema validation failures.

Audit relevance:
    Every successful call emits a ``BILLING_CONFIG_TRACE`` log record with
    the config id, version, checksum and base currency, tying every report
    back to the configuration that produced it.
"""

from __future__ import annotations

from pathlib import Path

from billing_config.loader import compute_checksum, load_config_file, log_level_number
from billing_config.schema import BillingConfig, LoggingSettings
from billing_kernel.logging_config import get_logger

_logger = get_logger("config")

# Default configuration sets directory
_DEFAULT_CONFIG_DIR = Path(__file__).parent / "sets"


def get_active_config(
    config_id: str = "default",
    config_dir: Path | None = None,
) -> BillingConfig:
    """
    Load and validate the configuration set ``<config_dir>/<config_id>.yaml``.

    Not cached: callers hold the returned config for as long as they need it.

    Raises:
        FileNotFoundError: If the configuration set does not exist.
        KeyError: If a required key is missing.
        ValueError: If a value fails validation.
    """
    sets_dir = config_dir or _DEFAULT_CONFIG_DIR
    path = sets_dir / f"{config_id}.yaml"
    if not path.is_file():
        raise FileNotFoundError(f"No configuration set '{config_id}' in {sets_dir}")

    config = load_config_file(path)

    _logger.info(
        "BILLING_CONFIG_TRACE",
        extra={
            "trace_type": "BILLING_CONFIG_TRACE",
            "config_id": config.config_id,
            "config_version": config.version,
            "checksum": config.checksum,
            "base_currency": config.base_currency,
            "rounding": config.rounding,
        },
    )
    return config


__all__ = [
    "BillingConfig",
    "LoggingSettings",
    "compute_checksum",
    "get_active_config",
    "log_level_number",
]
