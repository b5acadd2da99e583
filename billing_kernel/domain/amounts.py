"""
Amounts -- exact-decimal coercion and rounding shared by every engine.

Responsibility:
    Turn caller-supplied amount-like values into ``Decimal`` without any
    binary floating-point artifacts, sum them exactly, and provide the one
    sanctioned rounding function for display precision.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by values.py and by every billing engine.

Invariants enforced:
    - Decimal-only arithmetic: no engine ever adds or multiplies floats.
    - A float is converted through ``repr`` (its shortest round-trip
      string), so ``0.1`` becomes ``Decimal("0.1")`` and never
      ``Decimal("0.1000000000000000055511151231257827...")``.
    - Nothing is silently coerced to zero.

Failure modes:
    - InvalidAmountError for None, bool, NaN, +/-Infinity, malformed
      strings and unsupported types.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Union

from billing_kernel.exceptions import InvalidAmountError

ZERO = Decimal("0")

DEFAULT_ROUNDING = ROUND_HALF_UP

# Anything exposing a Decimal ``amount`` attribute (Money) is accepted too.
AmountLike = Union[Decimal, int, str, float]


def to_decimal(value: Any, field: str = "amount") -> Decimal:
    """
    Convert an amount-like value to an exact, finite Decimal.

    Accepts Decimal, int, str, float and anything exposing a Decimal
    ``amount`` attribute (``Money``).

    Raises:
        InvalidAmountError: If the value cannot be represented exactly.
    """
    amount = getattr(value, "amount", None)
    if isinstance(amount, Decimal):
        value = amount

    if value is None or isinstance(value, bool):
        raise InvalidAmountError(value, field)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = _parse(repr(value), value, field)
    elif isinstance(value, str):
        result = _parse(value.strip(), value, field)
    else:
        raise InvalidAmountError(value, field, f"unsupported type {type(value).__name__}")

    if not result.is_finite():
        raise InvalidAmountError(value, field, "not a finite number")
    return result


def _parse(text: str, original: Any, field: str) -> Decimal:
    try:
        return Decimal(text)
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError(original, field, "not a decimal number") from e


def sum_amounts(values: Iterable[Any], field: str = "amount") -> Decimal:
    """Exact sum of amount-like values; an empty iterable sums to zero."""
    total = ZERO
    for value in values:
        total += to_decimal(value, field)
    return total


def round_amount(
    value: Any,
    decimal_places: int = 2,
    rounding: str = DEFAULT_ROUNDING,
) -> Decimal:
    """
    Round a monetary value to ``decimal_places``.

    Engines never call this; it is the display/settlement step applied by
    callers once a computation is complete.
    """
    exponent = Decimal(1).scaleb(-decimal_places)
    return to_decimal(value).quantize(exponent, rounding=rounding)
