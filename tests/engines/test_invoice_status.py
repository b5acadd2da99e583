"""
Tests for invoice status resolution.

Covers:
- Rule order (first match wins)
- CANCELLED and DRAFT are never overridden
- Partially paid past due stays PARTIALLY_PAID
- Due-date comparison is strict
- Idempotence of re-resolving a resolved status
- Naive, date and aware due dates resolve without raising
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from billing_engines.invoice_status import (
    OPEN_STATUSES,
    InvoiceStatus,
    compute_invoice_status,
)
from billing_kernel.exceptions import InvalidAmountError
from conftest import NOW, days_ago

PAST = days_ago(10)
FUTURE = days_ago(-10)


def _status(total="100", paid="0", due=PAST, current=InvoiceStatus.SENT, now=NOW):
    return compute_invoice_status(Decimal(total), Decimal(paid), due, current, now)


class TestAuthoritativeStatuses:
    @pytest.mark.parametrize("current", [InvoiceStatus.CANCELLED, InvoiceStatus.DRAFT])
    def test_never_overridden(self, current):
        assert _status(paid="100", current=current) == current
        assert _status(paid="0", due=PAST, current=current) == current
        assert _status(paid="40", current=current) == current

    def test_string_status_accepted(self):
        assert _status(paid="100", current="CANCELLED") == InvoiceStatus.CANCELLED


class TestPaymentRules:
    def test_fully_paid(self):
        assert _status(paid="100") == InvoiceStatus.PAID

    def test_overpaid(self):
        assert _status(paid="120") == InvoiceStatus.PAID

    def test_paid_overrides_overdue(self):
        assert _status(paid="100", due=days_ago(200)) == InvoiceStatus.PAID

    def test_partially_paid_before_due(self):
        assert _status(paid="40", due=FUTURE) == InvoiceStatus.PARTIALLY_PAID

    def test_partially_paid_past_due_is_not_overdue(self):
        assert _status(paid="40", due=PAST) == InvoiceStatus.PARTIALLY_PAID

    def test_zero_total_is_paid(self):
        assert _status(total="0", paid="0") == InvoiceStatus.PAID


class TestDueDateRules:
    def test_unpaid_past_due_is_overdue(self):
        assert _status(due=PAST) == InvoiceStatus.OVERDUE

    def test_unpaid_not_yet_due_is_sent(self):
        assert _status(due=FUTURE) == InvoiceStatus.SENT

    def test_due_exactly_now_is_sent(self):
        """OVERDUE needs now strictly after the due date."""
        assert _status(due=NOW) == InvoiceStatus.SENT

    def test_one_second_past_due_is_overdue(self):
        assert _status(due=NOW - timedelta(seconds=1)) == InvoiceStatus.OVERDUE

    def test_plain_date_due(self):
        assert _status(due=date(2024, 6, 15)) == InvoiceStatus.OVERDUE
        assert _status(due=date(2024, 6, 16)) == InvoiceStatus.SENT

    def test_overdue_reverts_to_sent_when_due_moves_out(self):
        assert _status(due=FUTURE, current=InvoiceStatus.OVERDUE) == InvoiceStatus.SENT

    def test_unknown_stored_status_resolved_from_facts(self):
        assert _status(due=PAST, current="VOID") == InvoiceStatus.OVERDUE


class TestIdempotence:
    @pytest.mark.parametrize(
        "total, paid, due",
        [("100", "0", PAST), ("100", "0", FUTURE), ("100", "40", PAST), ("100", "100", PAST)],
    )
    def test_resolving_twice_is_stable(self, total, paid, due):
        first = _status(total=total, paid=paid, due=due)
        second = _status(total=total, paid=paid, due=due, current=first)

        assert second == first


class TestErrors:
    def test_invalid_total_raises(self):
        with pytest.raises(InvalidAmountError):
            compute_invoice_status("abc", "0", PAST, InvoiceStatus.SENT, NOW)

    def test_invalid_paid_raises(self):
        with pytest.raises(InvalidAmountError):
            compute_invoice_status("100", None, PAST, InvoiceStatus.SENT, NOW)

    def test_cancelled_short_circuits_amount_parsing(self):
        assert (
            compute_invoice_status("abc", None, PAST, InvoiceStatus.CANCELLED, NOW)
            == InvoiceStatus.CANCELLED
        )


class TestOpenStatuses:
    def test_open_statuses(self):
        assert OPEN_STATUSES == {
            InvoiceStatus.SENT,
            InvoiceStatus.OVERDUE,
            InvoiceStatus.PARTIALLY_PAID,
        }
        assert InvoiceStatus.OVERDUE.is_open
        assert not InvoiceStatus.PAID.is_open
        assert not InvoiceStatus.DRAFT.is_open


class TestMixedDueDateKinds:
    """Due dates of any kind resolve against an aware ``now`` without raising."""

    @pytest.mark.parametrize(
        "due",
        [
            datetime(2024, 6, 1),
            datetime(2024, 7, 1),
            date(2024, 6, 1),
            datetime(2024, 6, 1, tzinfo=timezone(timedelta(hours=-5))),
        ],
    )
    @pytest.mark.parametrize("current", list(InvoiceStatus))
    @pytest.mark.parametrize("paid", ["0", "40", "100"])
    def test_resolves_to_a_status(self, due, current, paid):
        assert isinstance(_status(paid=paid, due=due, current=current), InvoiceStatus)

    def test_naive_past_due_is_overdue(self):
        assert (
            compute_invoice_status("100", "0", datetime(2024, 6, 1), "SENT", NOW)
            == InvoiceStatus.OVERDUE
        )

    def test_naive_due_read_as_utc(self):
        assert _status(due=datetime(2024, 6, 15, 11, 59)) == InvoiceStatus.OVERDUE
        assert _status(due=datetime(2024, 6, 15, 12, 0)) == InvoiceStatus.SENT

    def test_naive_now_with_aware_due(self):
        assert _status(due=PAST, now=datetime(2024, 6, 15, 12, 0)) == InvoiceStatus.OVERDUE
