"""
Module: billing_engines.receivables
Responsibility:
    Receivables figures for dashboards and aging reports, assembled from
    the conversion, payment, outstanding, aging and status engines:

    - ``compute_receivables_summary``: invoiced, paid, outstanding,
      overdue and upcoming totals, average invoice value and aging buckets
      across an organization's invoices.
    - ``age_receivables``: one aged line per open invoice with its days
      past due and bucket, plus per-bucket totals and counts.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Invoices arrive as in-memory ``InvoiceSnapshot`` values built by the
    caller's repository layer, already in the base currency.

Invariants enforced:
    - ``now`` is a parameter; the clock is never read here.
    - CANCELLED invoices never contribute to a summary, not even
      their SUCCESS payments to ``total_paid``.
    - outstanding_receivables == overdue_receivables + upcoming_receivables.
    - ``AgingReport.to_buckets()`` equals ``compute_aging_buckets`` over
      the same open invoices.

Failure modes:
    - InvalidAmountError for non-decimal totals or payment amounts.
    - ValueError for an unknown stored invoice status or payment status.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from billing_engines.aging import (
    AgingBucket,
    AgingBuckets,
    InvoiceAgingInput,
    classify_days,
    compute_aging_buckets,
    days_past_due,
)
from billing_engines.invoice_status import InvoiceStatus, compute_invoice_status
from billing_engines.outstanding import compute_outstanding
from billing_engines.payments import PaymentRecord, compute_total_paid
from billing_engines.tracer import traced_engine
from billing_kernel.domain.amounts import ZERO, to_decimal
from billing_kernel.domain.dates import Instant, is_after
from billing_kernel.domain.values import Currency, Money
from billing_kernel.logging_config import get_logger

logger = get_logger("engines.receivables")


@dataclass(frozen=True)
class InvoiceSnapshot:
    """An invoice as loaded by the repository layer, amounts in base currency."""

    invoice_id: str
    due_date: Instant
    base_total: Decimal
    status: InvoiceStatus
    payments: tuple[PaymentRecord, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_total", to_decimal(self.base_total, "base_total"))
        object.__setattr__(self, "status", InvoiceStatus(self.status))
        object.__setattr__(self, "payments", tuple(self.payments))

    @property
    def total_paid(self) -> Decimal:
        return compute_total_paid(self.payments)

    @property
    def outstanding(self) -> Decimal:
        return compute_outstanding(self.base_total, self.total_paid)

    def resolved_status(self, now: Instant) -> InvoiceStatus:
        return compute_invoice_status(
            self.base_total, self.total_paid, self.due_date, self.status, now
        )


# ---------------------------------------------------------------------------
# Dashboard summary
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReceivablesSummary:
    """Receivables totals in the organization's base currency."""

    currency: Currency
    invoice_count: int
    total_invoiced: Money
    total_paid: Money
    outstanding_receivables: Money
    overdue_receivables: Money
    upcoming_receivables: Money
    average_invoice_value: Money
    aging: AgingBuckets


@traced_engine(
    "receivables_summary", "1.0", fingerprint_fields=("invoices", "now", "currency")
)
def compute_receivables_summary(
    invoices: Sequence[InvoiceSnapshot],
    now: Instant,
    currency: Currency | str,
) -> ReceivablesSummary:
    """
    Summarize the receivables of every non-cancelled invoice.

    Only positive outstanding balances count as receivable; each is overdue
    when ``now`` is past the invoice's due date and upcoming otherwise.
    """
    base = currency if isinstance(currency, Currency) else Currency(currency)
    included = [inv for inv in invoices if inv.status != InvoiceStatus.CANCELLED]

    total_invoiced = total_paid = ZERO
    outstanding_total = overdue = upcoming = ZERO
    aging_inputs: list[InvoiceAgingInput] = []

    for inv in included:
        paid = inv.total_paid
        outstanding = compute_outstanding(inv.base_total, paid)
        total_invoiced += inv.base_total
        total_paid += paid

        if outstanding > ZERO:
            outstanding_total += outstanding
            if is_after(now, inv.due_date):
                overdue += outstanding
            else:
                upcoming += outstanding

        aging_inputs.append(
            InvoiceAgingInput(due_date=inv.due_date, base_total=inv.base_total, total_paid=paid)
        )

    average = total_invoiced / len(included) if included else ZERO

    summary = ReceivablesSummary(
        currency=base,
        invoice_count=len(included),
        total_invoiced=Money(total_invoiced, base),
        total_paid=Money(total_paid, base),
        outstanding_receivables=Money(outstanding_total, base),
        overdue_receivables=Money(overdue, base),
        upcoming_receivables=Money(upcoming, base),
        average_invoice_value=Money(average, base),
        aging=compute_aging_buckets(aging_inputs, now),
    )

    logger.info("receivables_summary_computed", extra={
        "invoice_count": len(invoices),
        "included_count": len(included),
        "currency": base.code,
        "outstanding_receivables": outstanding_total,
    })
    return summary


# ---------------------------------------------------------------------------
# Detailed aging
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AgedReceivable:
    """One open invoice placed in its aging bucket."""

    invoice_id: str
    due_date: Instant
    outstanding: Decimal
    days_past_due: int
    bucket: AgingBucket
    status: InvoiceStatus


@dataclass(frozen=True)
class BucketSummary:
    bucket: AgingBucket
    total: Decimal
    count: int

    @property
    def label(self) -> str:
        return self.bucket.label


@dataclass(frozen=True)
class AgingReport:
    """Aged open receivables as of one report time."""

    as_of: Instant
    items: tuple[AgedReceivable, ...] = field(default_factory=tuple)

    @property
    def total_outstanding(self) -> Decimal:
        return sum((item.outstanding for item in self.items), ZERO)

    def items_in_bucket(self, bucket: AgingBucket) -> tuple[AgedReceivable, ...]:
        return tuple(item for item in self.items if item.bucket == bucket)

    def summary(self) -> tuple[BucketSummary, ...]:
        """Total and count for every bucket, in report order, empty ones included."""
        rows = []
        for bucket in AgingBucket:
            in_bucket = self.items_in_bucket(bucket)
            rows.append(BucketSummary(
                bucket=bucket,
                total=sum((item.outstanding for item in in_bucket), ZERO),
                count=len(in_bucket),
            ))
        return tuple(rows)

    def to_buckets(self) -> AgingBuckets:
        return AgingBuckets(**{row.bucket.value: row.total for row in self.summary()})


@traced_engine("receivables_aging", "1.0", fingerprint_fields=("invoices", "now"))
def age_receivables(invoices: Iterable[InvoiceSnapshot], now: Instant) -> AgingReport:
    """
    Age every invoice whose resolved status is SENT, OVERDUE or
    PARTIALLY_PAID.

    An open status implies paid < total, so every aged line has a positive
    outstanding balance. ``days_past_due`` is floored at zero for display;
    the bucket is chosen from the unfloored value, which lands in CURRENT
    either way.
    """
    items: list[AgedReceivable] = []
    for inv in invoices:
        paid = inv.total_paid
        status = compute_invoice_status(inv.base_total, paid, inv.due_date, inv.status, now)
        if not status.is_open:
            continue

        diff_days = days_past_due(inv.due_date, now)
        items.append(AgedReceivable(
            invoice_id=inv.invoice_id,
            due_date=inv.due_date,
            outstanding=compute_outstanding(inv.base_total, paid),
            days_past_due=max(0, diff_days),
            bucket=classify_days(diff_days),
            status=status,
        ))

    logger.debug("receivables_aged", extra={"aged_count": len(items)})
    return AgingReport(as_of=now, items=tuple(items))


def snapshot_from_row(row: dict[str, Any]) -> InvoiceSnapshot:
    """Build an InvoiceSnapshot from a repository row with nested payment rows."""
    return InvoiceSnapshot(
        invoice_id=str(row["invoice_id"]),
        due_date=row["due_date"],
        base_total=row["base_total"],
        status=row["status"],
        payments=tuple(PaymentRecord.from_row(p) for p in row.get("payments", ())),
    )
