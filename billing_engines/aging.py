"""
Module: billing_engines.aging
Responsibility:
    Classify the outstanding balances of a set of invoices into
    time-since-due-date buckets for receivables reporting.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import billing_kernel and sibling engine modules.

Invariants enforced:
    - Purity: ``now`` is a parameter; the clock is never read here.
    - Decimal-only accumulation of outstanding amounts.
    - Only positive outstanding balances are bucketed; fully paid and
      overpaid invoices are skipped.
    - The five buckets are mutually exclusive and exhaustive, so their sum
      equals the total positive outstanding of the input.
    - Bucket upper bounds are inclusive and evaluated in order:
      <= 0 current, <= 30, <= 60, <= 90, otherwise over 90.

Failure modes:
    - InvalidAmountError when an invoice total or paid amount is not an
      exact decimal.
    - TypeError when a due date is neither a date nor a datetime.

Usage:
    from billing_engines.aging import InvoiceAgingInput, compute_aging_buckets

    buckets = compute_aging_buckets(
        [InvoiceAgingInput(due_date=date(2024, 1, 31), base_total="500", total_paid="0")],
        now=date(2024, 3, 1),
    )
    buckets.sixty_days  # Decimal("500")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from decimal import Decimal
from enum import Enum
from typing import Any

from billing_engines.outstanding import compute_outstanding
from billing_engines.tracer import traced_engine
from billing_kernel.domain.amounts import ZERO, to_decimal
from billing_kernel.domain.dates import Instant, elapsed_days
from billing_kernel.logging_config import get_logger

logger = get_logger("engines.aging")


class AgingBucket(str, Enum):
    """Aging bucket keys, in report order."""

    CURRENT = "current"
    THIRTY_DAYS = "thirty_days"
    SIXTY_DAYS = "sixty_days"
    NINETY_DAYS = "ninety_days"
    OVER_90_DAYS = "over_90_days"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    AgingBucket.CURRENT: "Current",
    AgingBucket.THIRTY_DAYS: "1-30 days",
    AgingBucket.SIXTY_DAYS: "31-60 days",
    AgingBucket.NINETY_DAYS: "61-90 days",
    AgingBucket.OVER_90_DAYS: "90+ days",
}

# (inclusive upper bound on days past due, bucket); anything above the
# last bound is OVER_90_DAYS.
_UPPER_BOUNDS: tuple[tuple[int, AgingBucket], ...] = (
    (0, AgingBucket.CURRENT),
    (30, AgingBucket.THIRTY_DAYS),
    (60, AgingBucket.SIXTY_DAYS),
    (90, AgingBucket.NINETY_DAYS),
)


def classify_days(diff_days: int) -> AgingBucket:
    """Map whole days past due (negative when not yet due) to a bucket."""
    for upper, bucket in _UPPER_BOUNDS:
        if diff_days <= upper:
            return bucket
    return AgingBucket.OVER_90_DAYS


def days_past_due(due_date: Instant, now: Instant) -> int:
    """floor((now - due_date) / 1 day); negative for future due dates."""
    return elapsed_days(due_date, now)


@dataclass(frozen=True)
class InvoiceAgingInput:
    """Due date and base-currency figures of one invoice."""

    due_date: Instant
    base_total: Decimal
    total_paid: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_total", to_decimal(self.base_total, "base_total"))
        object.__setattr__(self, "total_paid", to_decimal(self.total_paid, "total_paid"))

    @property
    def outstanding(self) -> Decimal:
        return compute_outstanding(self.base_total, self.total_paid)


@dataclass(frozen=True)
class AgingBuckets:
    """Outstanding receivables per aging bucket."""

    current: Decimal = ZERO
    thirty_days: Decimal = ZERO
    sixty_days: Decimal = ZERO
    ninety_days: Decimal = ZERO
    over_90_days: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return sum((getattr(self, f.name) for f in fields(self)), ZERO)

    def get(self, bucket: AgingBucket) -> Decimal:
        return getattr(self, bucket.value)

    def as_dict(self) -> dict[str, Decimal]:
        return {bucket.value: self.get(bucket) for bucket in AgingBucket}


def _aging_fields(invoice: InvoiceAgingInput | Mapping[str, Any]) -> tuple[Any, Any, Any]:
    if isinstance(invoice, Mapping):
        return invoice["due_date"], invoice["base_total"], invoice["total_paid"]
    return invoice.due_date, invoice.base_total, invoice.total_paid


@traced_engine("aging", "1.0", fingerprint_fields=("invoices", "now"))
def compute_aging_buckets(
    invoices: Sequence[InvoiceAgingInput | Mapping[str, Any]],
    now: Instant,
) -> AgingBuckets:
    """
    Accumulate each invoice's positive outstanding balance into its bucket.

    Args:
        invoices: InvoiceAgingInput items, or mappings with ``due_date``,
            ``base_total`` and ``total_paid`` keys.
        now: Report time. Required; identical ``now`` and invoices always
            give identical buckets.

    Returns:
        AgingBuckets; all zero for an empty input.
    """
    totals: dict[AgingBucket, Decimal] = {bucket: ZERO for bucket in AgingBucket}
    count = skipped = 0

    for invoice in invoices:
        count += 1
        due_date, base_total, total_paid = _aging_fields(invoice)
        outstanding = compute_outstanding(base_total, total_paid)
        if outstanding <= ZERO:
            skipped += 1
            continue

        bucket = classify_days(days_past_due(due_date, now))
        totals[bucket] += outstanding

    result = AgingBuckets(**{bucket.value: amount for bucket, amount in totals.items()})

    logger.debug("aging_buckets_computed", extra={
        "invoice_count": count,
        "skipped_count": skipped,
        "total_outstanding": result.total,
    })
    return result
