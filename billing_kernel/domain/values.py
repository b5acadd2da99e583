"""
Values -- immutable, self-validating money value objects.

Responsibility:
    Currency, Money and ExchangeRate: the currency-carrying companions of
    the bare Decimal amounts the engines compute with. Callers that track
    which currency an amount is in use these; engines accept them anywhere
    an amount is expected.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Depends only on billing_kernel.domain.amounts and .currency.

Invariants enforced:
    - Money.amount is always a finite Decimal (never float).
    - Currency codes are validated ISO 4217 at construction.
    - Arithmetic and comparisons never mix currencies silently.
    - Money never auto-rounds; ``round()`` is an explicit step.

Failure modes:
    - InvalidAmountError on construction with a non-decimal amount.
    - InvalidCurrencyError on an unknown currency code.
    - CurrencyMismatchError when two currencies meet in one operation.
    - InvalidExchangeRateError when a rate is zero or negative.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from billing_kernel.domain.amounts import DEFAULT_ROUNDING, ZERO, round_amount, to_decimal
from billing_kernel.domain.currency import CurrencyRegistry
from billing_kernel.exceptions import (
    CurrencyMismatchError,
    InvalidAmountError,
    InvalidExchangeRateError,
)


@dataclass(frozen=True, slots=True)
class Currency:
    """ISO 4217 currency code, upper-cased and validated on construction."""

    code: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", CurrencyRegistry.validate(self.code))

    @property
    def decimal_places(self) -> int:
        return CurrencyRegistry.get_decimal_places(self.code)

    @property
    def name(self) -> str:
        info = CurrencyRegistry.get_info(self.code)
        return info.name if info else self.code

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Currency({self.code!r})"


def _as_currency(currency: Currency | str) -> Currency:
    if isinstance(currency, Currency):
        return currency
    if isinstance(currency, str):
        return Currency(currency)
    raise TypeError(f"currency must be Currency or str, got {type(currency)}")


@dataclass(frozen=True, slots=True)
class Money:
    """
    Monetary amount paired with its currency.

    Contract:
        The amount and currency are never separated. Arithmetic with
        another Money requires the same currency; multiplication and
        division take a bare scalar.

    Non-goals:
        - Does NOT convert between currencies (use ExchangeRate.convert).
        - Does NOT auto-round.
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", to_decimal(self.amount))
        object.__setattr__(self, "currency", _as_currency(self.currency))

    @classmethod
    def of(cls, amount: Decimal | str | int, currency: str | Currency) -> Money:
        """
        Factory method for creating Money.

        Raises:
            InvalidAmountError: If amount is not an exact decimal.
            InvalidCurrencyError: If currency is not ISO 4217.
        """
        return cls(amount=to_decimal(amount), currency=_as_currency(currency))

    @classmethod
    def zero(cls, currency: str | Currency) -> Money:
        return cls(amount=ZERO, currency=_as_currency(currency))

    @property
    def is_zero(self) -> bool:
        return self.amount == ZERO

    @property
    def is_positive(self) -> bool:
        return self.amount > ZERO

    @property
    def is_negative(self) -> bool:
        return self.amount < ZERO

    def round(self, rounding: str = DEFAULT_ROUNDING) -> Money:
        """Round to the currency's minor unit (2 places for USD, 0 for JPY)."""
        rounded = round_amount(self.amount, self.currency.decimal_places, rounding)
        return Money(amount=rounded, currency=self.currency)

    def _check_currency(self, other: Money, operation: str) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency.code, other.currency.code, operation)

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "add")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "subtract")
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __neg__(self) -> Money:
        return Money(amount=-self.amount, currency=self.currency)

    def __abs__(self) -> Money:
        return Money(amount=abs(self.amount), currency=self.currency)

    def __mul__(self, factor: Decimal | int | str) -> Money:
        if isinstance(factor, (Money, float, bool)):
            return NotImplemented
        try:
            scalar = to_decimal(factor, "factor")
        except InvalidAmountError:
            return NotImplemented
        return Money(amount=self.amount * scalar, currency=self.currency)

    def __rmul__(self, factor: Decimal | int | str) -> Money:
        return self.__mul__(factor)

    def __truediv__(self, divisor: Decimal | int | str) -> Money:
        if isinstance(divisor, (Money, float, bool)):
            return NotImplemented
        try:
            scalar = to_decimal(divisor, "divisor")
        except InvalidAmountError:
            return NotImplemented
        return Money(amount=self.amount / scalar, currency=self.currency)

    def __lt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "compare")
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "compare")
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "compare")
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other, "compare")
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.amount} {self.currency.code}"

    def __repr__(self) -> str:
        return f"Money({self.amount!r}, {self.currency!r})"


@dataclass(frozen=True, slots=True)
class ExchangeRate:
    """
    Exchange rate between two currencies.

    Contract:
        1 unit of from_currency = ``rate`` units of to_currency. The rate is
        supplied by the caller; nothing here looks rates up or caches them.

    Guarantees:
        - rate is a positive, finite Decimal.
        - convert() rejects money in any currency but from_currency.
    """

    from_currency: Currency
    to_currency: Currency
    rate: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_currency", _as_currency(self.from_currency))
        object.__setattr__(self, "to_currency", _as_currency(self.to_currency))
        try:
            rate = to_decimal(self.rate, "exchange rate")
        except InvalidAmountError as e:
            raise InvalidExchangeRateError(self.rate, "not a decimal number") from e
        if rate <= ZERO:
            raise InvalidExchangeRateError(rate, "must be positive")
        object.__setattr__(self, "rate", rate)

    @classmethod
    def of(
        cls,
        from_currency: str | Currency,
        to_currency: str | Currency,
        rate: Decimal | str | int,
    ) -> ExchangeRate:
        return cls(from_currency=from_currency, to_currency=to_currency, rate=rate)

    @classmethod
    def identity(cls, currency: str | Currency) -> ExchangeRate:
        """Rate of exactly 1 from a currency to itself."""
        return cls(from_currency=currency, to_currency=currency, rate=Decimal("1"))

    def convert(self, money: Money) -> Money:
        """
        Convert money from from_currency into to_currency.

        Raises:
            CurrencyMismatchError: If money is not in from_currency.
        """
        if money.currency != self.from_currency:
            raise CurrencyMismatchError(money.currency.code, self.from_currency.code, "convert")
        return Money(amount=money.amount * self.rate, currency=self.to_currency)

    def inverse(self) -> ExchangeRate:
        """USD->EUR at 0.85 becomes EUR->USD at 1/0.85."""
        return ExchangeRate(
            from_currency=self.to_currency,
            to_currency=self.from_currency,
            rate=Decimal("1") / self.rate,
        )

    @property
    def pair(self) -> tuple[str, str]:
        return (self.from_currency.code, self.to_currency.code)

    def __str__(self) -> str:
        return f"{self.from_currency}/{self.to_currency} = {self.rate}"

    def __repr__(self) -> str:
        return (
            f"ExchangeRate({self.from_currency!r}, "
            f"{self.to_currency!r}, {self.rate!r})"
        )
