"""
Pure domain layer.

Value objects and helpers with NO dependencies on persistence, I/O or the
wall clock (SystemClock aside). Everything here is immutable and
deterministic.
"""

from billing_kernel.domain.amounts import ZERO, round_amount, sum_amounts, to_decimal
from billing_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from billing_kernel.domain.currency import CurrencyInfo, CurrencyRegistry
from billing_kernel.domain.dates import as_datetime, elapsed_days, is_after
from billing_kernel.domain.values import Currency, ExchangeRate, Money

__all__ = [
    "ZERO",
    "Clock",
    "Currency",
    "CurrencyInfo",
    "CurrencyRegistry",
    "DeterministicClock",
    "ExchangeRate",
    "Money",
    "SystemClock",
    "as_datetime",
    "elapsed_days",
    "is_after",
    "round_amount",
    "sum_amounts",
    "to_decimal",
]
