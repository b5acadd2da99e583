"""
Pytest fixtures for the billing core test suite.

Provides:
- Structured logging configured once per session
- LogContext isolation between tests
- captured_logs: billing_kernel log records parsed from JSON
- A deterministic clock and invoice snapshot factory
"""

import json
import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from io import StringIO
from itertools import count

import pytest

from billing_engines.invoice_status import InvoiceStatus
from billing_engines.payments import PaymentRecord, PaymentStatus
from billing_engines.receivables import InvoiceSnapshot
from billing_kernel.domain.clock import DeterministicClock
from billing_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

# Reference "now" for engine tests: mid-day so whole-day offsets are unambiguous.
NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture billing_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            compute_aging_buckets([], now=NOW)
            logs = captured_logs()
            assert any(r["message"] == "BILLING_ENGINE_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("billing_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Time and data fixtures
# =============================================================================


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    return DeterministicClock(NOW)


def days_ago(days: float, now: datetime = NOW) -> datetime:
    """Due date ``days`` before ``now`` (negative for the future)."""
    return now - timedelta(days=days)


@pytest.fixture
def make_invoice():
    """
    Factory for InvoiceSnapshot values.

    ``paid`` entries are SUCCESS payments; ``other_payments`` is a list of
    (amount, status) pairs for anything else.
    """
    ids = count(1)

    def _make(
        total: str = "100.00",
        paid: tuple[str, ...] = (),
        due_in_days: int = 0,
        status: InvoiceStatus = InvoiceStatus.SENT,
        other_payments: tuple[tuple[str, PaymentStatus], ...] = (),
        invoice_id: str | None = None,
    ) -> InvoiceSnapshot:
        payments = [PaymentRecord(Decimal(p), PaymentStatus.SUCCESS) for p in paid]
        payments += [PaymentRecord(Decimal(a), s) for a, s in other_payments]
        return InvoiceSnapshot(
            invoice_id=invoice_id or f"INV-{next(ids):04d}",
            due_date=NOW + timedelta(days=due_in_days),
            base_total=Decimal(total),
            status=status,
            payments=tuple(payments),
        )

    return _make
