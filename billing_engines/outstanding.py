"""
Module: billing_engines.outstanding
Responsibility:
    Unpaid remainder of an invoice: base total minus total paid.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Exact decimal subtraction.
    - Never clamped: an overpaid invoice has a negative outstanding.
      ``clamp_non_negative`` exists for presentation code and is not used
      by any engine.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from billing_kernel.domain.amounts import ZERO, to_decimal


def compute_outstanding(base_total: Any, total_paid: Any) -> Decimal:
    """base_total - total_paid, possibly negative."""
    return to_decimal(base_total, "base_total") - to_decimal(total_paid, "total_paid")


def clamp_non_negative(value: Any) -> Decimal:
    """max(value, 0) for display of overpaid balances."""
    amount = to_decimal(value)
    return amount if amount > ZERO else ZERO
