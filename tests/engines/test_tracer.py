"""
Tests for the engine invocation tracer.

Covers:
- One BILLING_ENGINE_TRACE record per traced call
- Fingerprint determinism and sensitivity
- Positional and keyword binding agree
- The wrapped function's result is returned unchanged
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from billing_engines.aging import InvoiceAgingInput, compute_aging_buckets
from billing_engines.tracer import compute_input_fingerprint, traced_engine
from conftest import NOW, days_ago


def _traces(records):
    return [r for r in records if r["message"] == "BILLING_ENGINE_TRACE"]


class TestTraceRecord:
    def test_aging_emits_trace(self, captured_logs):
        compute_aging_buckets([], NOW)

        traces = _traces(captured_logs())

        assert len(traces) == 1
        trace = traces[0]
        assert trace["trace_type"] == "BILLING_ENGINE_TRACE"
        assert trace["engine_name"] == "aging"
        assert trace["engine_version"] == "1.0"
        assert trace["function"] == "compute_aging_buckets"
        assert len(trace["input_fingerprint"]) == 16
        assert trace["duration_ms"] >= 0

    def test_result_unchanged(self):
        @traced_engine("double", "1.0", fingerprint_fields=("x",))
        def double(x):
            return x * 2

        assert double(Decimal("2.5")) == Decimal("5.0")
        assert double.__name__ == "double"

    def test_no_fingerprint_fields(self, captured_logs):
        @traced_engine("noop", "0.1")
        def noop():
            return None

        noop()

        (trace,) = _traces(captured_logs())
        assert trace["input_fingerprint"] == ""


class TestFingerprint:
    def test_positional_and_keyword_agree(self, captured_logs):
        invoices = [InvoiceAgingInput(days_ago(3), "10", "0")]

        compute_aging_buckets(invoices, NOW)
        compute_aging_buckets(invoices=invoices, now=NOW)

        first, second = _traces(captured_logs())
        assert first["input_fingerprint"] == second["input_fingerprint"]

    def test_different_now_changes_fingerprint(self, captured_logs):
        invoices = [InvoiceAgingInput(days_ago(3), "10", "0")]

        compute_aging_buckets(invoices, NOW)
        compute_aging_buckets(invoices, days_ago(-1))

        first, second = _traces(captured_logs())
        assert first["input_fingerprint"] != second["input_fingerprint"]

    def test_deterministic(self):
        args = {"amount": Decimal("1.10"), "on": date(2024, 1, 1)}
        assert compute_input_fingerprint(("amount", "on"), args) == compute_input_fingerprint(
            ("amount", "on"), dict(reversed(list(args.items())))
        )

    def test_decimal_exponent_is_significant(self):
        """1.1 and 1.10 are distinct inputs."""
        assert compute_input_fingerprint(("a",), {"a": Decimal("1.1")}) != compute_input_fingerprint(
            ("a",), {"a": Decimal("1.10")}
        )

    def test_mapping_key_order_ignored(self):
        first = compute_input_fingerprint(("m",), {"m": {"b": 1, "a": 2}})
        second = compute_input_fingerprint(("m",), {"m": {"a": 2, "b": 1}})
        assert first == second

    def test_dataclass_expanded(self):
        @dataclass(frozen=True)
        class Point:
            x: int
            y: int

        assert compute_input_fingerprint(("p",), {"p": Point(1, 2)}) != compute_input_fingerprint(
            ("p",), {"p": Point(2, 1)}
        )

    def test_missing_argument_counts_as_null(self):
        assert compute_input_fingerprint(("a",), {}) == compute_input_fingerprint(("a",), {"a": None})

    def test_generator_fingerprint_is_stable(self):
        first = compute_input_fingerprint(("a",), {"a": (x for x in [1, 2])})
        second = compute_input_fingerprint(("a",), {"a": (x for x in [1, 2])})

        assert first == second

    def test_generator_not_consumed(self):
        invoices = (inv for inv in [InvoiceAgingInput(days_ago(5), "10", "0")])
        compute_input_fingerprint(("invoices",), {"invoices": invoices})

        assert len(list(invoices)) == 1

    def test_traced_generator_calls_share_fingerprint(self, captured_logs):
        rows = [InvoiceAgingInput(days_ago(3), "10", "0")]
        for _ in range(2):
            compute_aging_buckets((inv for inv in rows), NOW)

        first, second = _traces(captured_logs())
        assert first["input_fingerprint"] == second["input_fingerprint"]
