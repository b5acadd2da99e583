"""
Typed exception hierarchy for the billing kernel.

Every error is a class (catch by type, not by message), carries a
machine-readable ``code`` class attribute, and keeps its inputs as
structured attributes so log formatters and API layers can report them
without parsing strings.

    BillingKernelError (base)
    |
    +-- AmountError
    |   +-- InvalidAmountError
    |
    +-- CurrencyError
    |   +-- InvalidCurrencyError
    |   +-- CurrencyMismatchError
    |
    +-- ExchangeRateError
        +-- InvalidExchangeRateError

Error codes
-----------
Category        | Code                  | Meaning
----------------|-----------------------|------------------------------------
Amount          | INVALID_AMOUNT        | Value is not an exact finite decimal
Currency        | INVALID_CURRENCY      | Not a valid ISO 4217 code
                | CURRENCY_MISMATCH     | Two currencies mixed in one operation
Exchange rate   | INVALID_EXCHANGE_RATE | Rate is zero, negative or not a decimal

Usage::

    try:
        total = compute_total_paid(rows)
    except InvalidAmountError as e:
        api_response(code=e.code, field=e.field, value=e.value)
"""

from typing import Any


class BillingKernelError(Exception):
    """Base exception for all billing kernel errors."""

    code: str = "BILLING_KERNEL_ERROR"


# =============================================================================
# Amount errors
# =============================================================================


class AmountError(BillingKernelError):
    """Base exception for monetary amount errors."""

    code: str = "AMOUNT_ERROR"


class InvalidAmountError(AmountError):
    """
    Input cannot be represented as an exact, finite decimal.

    Raised for None, booleans, NaN/Infinity, malformed strings and
    unsupported types. Never silently coerced to zero.
    """

    code: str = "INVALID_AMOUNT"

    def __init__(self, value: Any, field: str = "amount", reason: str | None = None):
        self.value = repr(value)
        self.field = field
        self.reason = reason
        message = f"Invalid {field}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


# =============================================================================
# Currency errors
# =============================================================================


class CurrencyError(BillingKernelError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class InvalidCurrencyError(CurrencyError):
    """Invalid ISO 4217 currency code provided."""

    code: str = "INVALID_CURRENCY"

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Invalid ISO 4217 currency code: '{currency}'")


class CurrencyMismatchError(CurrencyError):
    """Attempted arithmetic or comparison across two currencies."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, currency1: str, currency2: str, operation: str = "operate on"):
        self.currency1 = currency1
        self.currency2 = currency2
        self.operation = operation
        super().__init__(
            f"Cannot {operation} Money with different currencies: "
            f"{currency1} and {currency2}"
        )


# =============================================================================
# Exchange rate errors
# =============================================================================


class ExchangeRateError(BillingKernelError):
    """Base exception for exchange rate errors."""

    code: str = "EXCHANGE_RATE_ERROR"


class InvalidExchangeRateError(ExchangeRateError):
    """Exchange rate is not a positive decimal."""

    code: str = "INVALID_EXCHANGE_RATE"

    def __init__(self, rate: Any, reason: str):
        self.rate = str(rate)
        self.reason = reason
        super().__init__(f"Invalid exchange rate {rate}: {reason}")
