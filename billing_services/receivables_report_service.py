"""
billing_services.receivables_report_service -- receivables report assembly.

Responsibility:
    Assemble a receivables report (dashboard summary, detailed aging and
    per-invoice display status) from invoice snapshots supplied by the
    caller's repository layer.

Architecture position:
    Services -- orchestration over engines + kernel. The only layer that
    reads the clock: ``now`` is read once per report from the injected
    Clock and passed to every engine call, so all figures in one report
    agree on the same instant.

Invariants enforced:
    - One ``now`` per report.
    - No persistence and no I/O besides logging.
    - Amounts stay unrounded until ``ReceivablesReport.display_totals()``.

Failure modes:
    - Propagates InvalidAmountError / ValueError from the engines for
      malformed snapshots. No partial report is returned.

Usage:
    service = ReceivablesReportService(get_active_config(), SystemClock())
    report = service.build_report(snapshots, organization_id="org-42")
"""

from __future__ import annotations

import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid4

from billing_config import BillingConfig, log_level_number
from billing_engines.invoice_status import InvoiceStatus
from billing_engines.receivables import (
    AgingReport,
    InvoiceSnapshot,
    ReceivablesSummary,
    age_receivables,
    compute_receivables_summary,
)
from billing_kernel.domain.clock import Clock, SystemClock
from billing_kernel.domain.values import Currency, Money
from billing_kernel.logging_config import LogContext, configure_logging, get_logger

logger = get_logger("services.receivables_report")


@dataclass(frozen=True)
class ReceivablesReport:
    """Everything a receivables dashboard needs, computed at ``generated_at``."""

    report_id: UUID
    generated_at: datetime
    config_id: str
    config_checksum: str
    currency: Currency
    rounding: str
    summary: ReceivablesSummary
    aging_report: AgingReport
    statuses: Mapping[str, InvoiceStatus]

    def display_totals(self) -> dict[str, Money]:
        """Summary totals and aging buckets rounded to the currency's minor unit."""
        s = self.summary
        totals = {
            "total_invoiced": s.total_invoiced,
            "total_paid": s.total_paid,
            "outstanding_receivables": s.outstanding_receivables,
            "overdue_receivables": s.overdue_receivables,
            "upcoming_receivables": s.upcoming_receivables,
            "average_invoice_value": s.average_invoice_value,
        }
        for key, amount in s.aging.as_dict().items():
            totals[f"aging_{key}"] = Money(amount, self.currency)
        return {key: money.round(self.rounding) for key, money in totals.items()}


class ReceivablesReportService:
    """
    Builds receivables reports in the configured base currency.

    Args:
        config: Active billing configuration (base currency, rounding).
        clock: Time source; defaults to SystemClock. Tests inject a
            DeterministicClock.
    """

    def __init__(self, config: BillingConfig, clock: Clock | None = None):
        self._config = config
        self._clock = clock or SystemClock()
        self._currency = Currency(config.base_currency)

    @property
    def currency(self) -> Currency:
        return self._currency

    def resolve_statuses(
        self,
        invoices: Sequence[InvoiceSnapshot],
        now: datetime,
    ) -> dict[str, InvoiceStatus]:
        return {inv.invoice_id: inv.resolved_status(now) for inv in invoices}

    def build_report(
        self,
        invoices: Sequence[InvoiceSnapshot],
        organization_id: str | None = None,
        report_id: UUID | None = None,
    ) -> ReceivablesReport:
        """Compute summary, aging and statuses for ``invoices`` at the clock's current time."""
        report_id = report_id or uuid4()
        now = self._clock.now()

        with LogContext.bind(report_id=report_id, organization_id=organization_id):
            t0 = time.monotonic()
            logger.info("receivables_report_started", extra={
                "invoice_count": len(invoices),
                "as_of": now,
                "currency": self._currency.code,
            })

            summary = compute_receivables_summary(invoices, now, self._currency)
            aging_report = age_receivables(invoices, now)
            statuses = self.resolve_statuses(invoices, now)

            report = ReceivablesReport(
                report_id=report_id,
                generated_at=now,
                config_id=self._config.config_id,
                config_checksum=self._config.checksum,
                currency=self._currency,
                rounding=self._config.rounding,
                summary=summary,
                aging_report=aging_report,
                statuses=statuses,
            )

            duration_ms = round((time.monotonic() - t0) * 1000, 2)
            logger.info("receivables_report_completed", extra={
                "invoice_count": len(invoices),
                "aged_count": len(aging_report.items),
                "outstanding_receivables": summary.outstanding_receivables.amount,
                "duration_ms": duration_ms,
            })
        return report


def configure_service_logging(config: BillingConfig) -> None:
    """Configure the billing_kernel logger hierarchy at the configured level."""
    configure_logging(level=log_level_number(config.logging))
