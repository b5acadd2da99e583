"""
Module: billing_engines.payments
Responsibility:
    Reduce the payment records of one invoice to a single "total paid"
    figure in the base currency.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Only records whose status is exactly SUCCESS contribute.
    - Refunded and partially refunded payments are excluded and NOT netted
      against the total.
    - Exact decimal running sum starting at zero; input is never mutated.

Failure modes:
    - InvalidAmountError when a SUCCESS record's base amount is not an
      exact decimal.
    - ValueError when a PaymentRecord is built with an unknown status.
    - KeyError when a mapping row has no status or no base amount under
      either ``base_amount`` or ``baseAmount``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from billing_kernel.domain.amounts import ZERO, to_decimal


class PaymentStatus(str, Enum):
    """Settlement status of a payment record."""

    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"


@dataclass(frozen=True)
class PaymentRecord:
    """One payment against an invoice, already converted to the base currency."""

    base_amount: Decimal
    status: PaymentStatus

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_amount", to_decimal(self.base_amount, "base_amount"))
        object.__setattr__(self, "status", PaymentStatus(self.status))

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> PaymentRecord:
        return cls(base_amount=_row_amount(row), status=row["status"])

    @property
    def is_settled(self) -> bool:
        return self.status == PaymentStatus.SUCCESS


def _row_amount(row: Mapping[str, Any]) -> Any:
    return row["base_amount"] if "base_amount" in row else row["baseAmount"]


def _fields(payment: PaymentRecord | Mapping[str, Any]) -> tuple[Any, Any]:
    if isinstance(payment, Mapping):
        return _row_amount(payment), payment["status"]
    return payment.base_amount, payment.status


def compute_total_paid(payments: Iterable[PaymentRecord | Mapping[str, Any]]) -> Decimal:
    """
    Sum the base amounts of SUCCESS payments.

    Accepts PaymentRecord instances or repository rows (mappings with a ``status`` key and a
    ``base_amount`` or camelCase ``baseAmount`` key). Statuses compare
    exactly: ``"SUCCESS"`` counts, ``"success"`` does not. Non-SUCCESS
    amounts are never parsed.

    Returns:
        Total paid; Decimal("0") for an empty or all-unsettled input.
    """
    total = ZERO
    for payment in payments:
        amount, status = _fields(payment)
        if status != PaymentStatus.SUCCESS:
            continue
        total += to_decimal(amount, "base_amount")
    return total
