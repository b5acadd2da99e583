"""
Module: billing_engines
Responsibility:
    Package entrypoint re-exporting the public symbols of the pure
    financial computation engines. This is the import surface for the
    service layer and for report/dashboard assemblers.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import billing_kernel (and sibling engine modules).
    MUST NOT import billing_services or billing_config.

Invariants enforced:
    - Purity: engines never read the clock; ``now`` is always a parameter.
    - Decimal-only arithmetic: floats are never used for money.
    - Determinism: identical inputs always produce identical outputs.

Dependency order (leaves first):
    conversion, payments -> outstanding -> aging, invoice_status -> receivables

Usage:
    from billing_engines import (
        compute_aging_buckets,
        compute_invoice_status,
        compute_outstanding,
        compute_total_paid,
        convert_to_base,
    )
"""

from billing_engines.aging import (
    AgingBucket,
    AgingBuckets,
    InvoiceAgingInput,
    classify_days,
    compute_aging_buckets,
    days_past_due,
)
from billing_engines.conversion import convert_money_to_base, convert_to_base
from billing_engines.invoice_status import (
    OPEN_STATUSES,
    InvoiceStatus,
    compute_invoice_status,
)
from billing_engines.outstanding import clamp_non_negative, compute_outstanding
from billing_engines.payments import PaymentRecord, PaymentStatus, compute_total_paid
from billing_engines.receivables import (
    AgedReceivable,
    AgingReport,
    BucketSummary,
    InvoiceSnapshot,
    ReceivablesSummary,
    age_receivables,
    compute_receivables_summary,
    snapshot_from_row,
)
from billing_engines.tracer import traced_engine

__all__ = [
    # Conversion
    "convert_to_base",
    "convert_money_to_base",
    # Payments
    "PaymentRecord",
    "PaymentStatus",
    "compute_total_paid",
    # Outstanding
    "compute_outstanding",
    "clamp_non_negative",
    # Aging
    "AgingBucket",
    "AgingBuckets",
    "InvoiceAgingInput",
    "classify_days",
    "compute_aging_buckets",
    "days_past_due",
    # Status
    "InvoiceStatus",
    "OPEN_STATUSES",
    "compute_invoice_status",
    # Receivables
    "AgedReceivable",
    "AgingReport",
    "BucketSummary",
    "InvoiceSnapshot",
    "ReceivablesSummary",
    "age_receivables",
    "compute_receivables_summary",
    "snapshot_from_row",
    # Tracing
    "traced_engine",
]
