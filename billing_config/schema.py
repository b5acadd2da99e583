"""
Billing configuration schema.

Frozen dataclasses produced by ``billing_config.loader`` from a YAML
configuration set. These are the only configuration types the rest of the
system sees.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LoggingSettings:
    """Level for the billing_kernel logger hierarchy."""

    level: str = "INFO"


@dataclass(frozen=True)
class BillingConfig:
    """
    One validated configuration set.

    ``checksum`` is the SHA-256 of the canonical JSON form of the source
    document; identical YAML always yields the same checksum.
    """

    config_id: str
    version: int
    base_currency: str
    rounding: str
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    description: str = ""
    checksum: str = ""
