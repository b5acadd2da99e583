"""
Module: billing_engines.invoice_status
Responsibility:
    Derive the status an invoice should display from its stored status,
    what has been paid against it, its due date and the report time.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    The status is recomputed on every call; there is no transition log.

Invariants enforced:
    Rules are evaluated in this order and the first match wins:
        1. stored CANCELLED or DRAFT        -> unchanged
        2. paid >= total                    -> PAID
        3. 0 < paid < total                 -> PARTIALLY_PAID
        4. now > due date and paid < total  -> OVERDUE
        5. otherwise                        -> SENT
    A partially paid invoice past its due date is PARTIALLY_PAID, never
    OVERDUE, because rule 3 precedes rule 4.

Failure modes:
    - InvalidAmountError when the total or paid amount is not an exact
      decimal. Statuses and dates never cause an error.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from billing_kernel.domain.amounts import ZERO, to_decimal
from billing_kernel.domain.dates import Instant, is_after


class InvoiceStatus(str, Enum):
    """Display status of an invoice."""

    DRAFT = "DRAFT"
    SENT = "SENT"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    CANCELLED = "CANCELLED"

    @property
    def is_open(self) -> bool:
        """Sent and not settled: the statuses receivables reports include."""
        return self in OPEN_STATUSES


OPEN_STATUSES = frozenset(
    {InvoiceStatus.SENT, InvoiceStatus.OVERDUE, InvoiceStatus.PARTIALLY_PAID}
)

# Set outside of payment facts; never overridden.
_AUTHORITATIVE = (InvoiceStatus.CANCELLED, InvoiceStatus.DRAFT)


def compute_invoice_status(
    base_total: Any,
    total_paid: Any,
    due_date: Instant,
    current_status: InvoiceStatus | str,
    now: Instant,
) -> InvoiceStatus:
    """
    Resolve the display status of one invoice.

    ``current_status`` may be an InvoiceStatus or its string value. Only
    CANCELLED and DRAFT are inspected, so an unrecognised stored status is
    resolved from the payment facts like any other.
    """
    if current_status in _AUTHORITATIVE:
        return InvoiceStatus(current_status)

    total = to_decimal(base_total, "base_total")
    paid = to_decimal(total_paid, "total_paid")

    if paid >= total:
        return InvoiceStatus.PAID
    if ZERO < paid < total:
        return InvoiceStatus.PARTIALLY_PAID
    if is_after(now, due_date) and paid < total:
        return InvoiceStatus.OVERDUE
    return InvoiceStatus.SENT
