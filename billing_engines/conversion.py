"""
Module: billing_engines.conversion
Responsibility:
    Convert an amount denominated in a foreign currency into the
    organization's base currency with a caller-supplied exchange rate.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    No rate lookup, no rate caching.

Invariants enforced:
    - Exact decimal multiplication, no intermediate rounding; the result
      keeps full precision until a display step rounds it.
    - Floats are converted through their shortest string form before use.

Failure modes:
    - InvalidAmountError when the amount or the rate is not an exact
      finite decimal.
    - CurrencyMismatchError from ``convert_money_to_base`` when the money
      is not in the rate's source currency.

Usage:
    from billing_engines.conversion import convert_to_base

    convert_to_base("120.50", "83.25")  # Decimal("10031.6250")
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from billing_kernel.domain.amounts import to_decimal
from billing_kernel.domain.values import Currency, ExchangeRate, Money
from billing_kernel.exceptions import CurrencyMismatchError


def convert_to_base(amount: Any, rate: Any) -> Decimal:
    """
    Multiply a foreign-currency amount by its exchange rate.

    ``amount`` may be any amount-like value (Decimal, int, str, float or
    Money). ``rate`` may be amount-like or an ExchangeRate, in which case
    its ``rate`` is used.
    """
    if isinstance(rate, ExchangeRate):
        rate = rate.rate
    return to_decimal(amount, "amount") * to_decimal(rate, "exchange rate")


def convert_money_to_base(
    money: Money,
    base_currency: Currency | str,
    rate: ExchangeRate | None = None,
) -> Money:
    """
    Currency-aware conversion of ``money`` into ``base_currency``.

    Money already in the base currency is returned unchanged and needs no
    rate. Otherwise ``rate`` must run from the money's currency to the base
    currency.

    Raises:
        ValueError: If a conversion is needed and no rate is given.
        CurrencyMismatchError: If the rate does not match either side.
    """
    base = base_currency if isinstance(base_currency, Currency) else Currency(base_currency)
    if money.currency == base:
        return money
    if rate is None:
        raise ValueError(f"An exchange rate is required to convert {money.currency} to {base}")
    if rate.to_currency != base:
        raise CurrencyMismatchError(rate.to_currency.code, base.code, "convert")
    return rate.convert(money)
