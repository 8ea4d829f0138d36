"""
Amount conversion between display units and ledger base units.

Amounts are handled as Decimal so that user-entered values such as "0.1"
convert exactly. Conversion truncates toward zero: a transfer never
authorizes more base units than the user typed.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from solpay.core.errors import InputError

NATIVE_DECIMALS = 9
LAMPORTS_PER_SOL = 10 ** NATIVE_DECIMALS

# Ledger amounts are encoded as u64
MAX_BASE_UNITS = 2 ** 64 - 1

AmountLike = Union[Decimal, str, int, float]


def parse_amount(value: AmountLike) -> Decimal:
    """
    Parse a user-supplied amount into a Decimal.

    Args:
        value: Raw amount (text from the user, or a number)

    Returns:
        The amount as a finite, non-negative Decimal

    Raises:
        InputError: If the value is not a finite non-negative number
    """
    if isinstance(value, bool):
        raise InputError(f"Invalid amount: {value!r}")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, float):
        amount = Decimal(repr(value))
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise InputError("Amount is required")
        try:
            amount = Decimal(text)
        except InvalidOperation:
            raise InputError(f"Invalid amount: {value!r}")
    else:
        raise InputError(f"Invalid amount: {value!r}")

    if not amount.is_finite():
        raise InputError(f"Amount must be finite: {value!r}")
    if amount < 0:
        raise InputError(f"Amount must not be negative: {value!r}")

    return amount


def to_base_units(amount: AmountLike, exponent: int) -> int:
    """
    Convert a display amount into integer base units.

    Computes floor(amount * 10**exponent).

    Args:
        amount: Amount in display units
        exponent: Number of decimal places of the currency

    Returns:
        Amount in base units

    Raises:
        InputError: If the amount is invalid or does not fit in a u64
    """
    if isinstance(exponent, bool) or not isinstance(exponent, int) or exponent < 0:
        raise InputError(f"Invalid decimal exponent: {exponent!r}")

    value = parse_amount(amount)
    if value and value.adjusted() + exponent > len(str(MAX_BASE_UNITS)):
        raise InputError(f"Amount too large: {value}")

    # Zero, or below one base unit
    if not value or value.adjusted() + exponent < 0:
        return 0

    _, digits, digits_exponent = value.as_tuple()
    coefficient = int("".join(map(str, digits)) or "0")

    # Exact integer arithmetic, independent of the decimal context precision
    shift = digits_exponent + exponent
    if shift >= 0:
        base_units = coefficient * 10 ** shift
    else:
        base_units = coefficient // 10 ** -shift

    if base_units > MAX_BASE_UNITS:
        raise InputError(f"Amount too large: {value}")

    return base_units


def sol_to_lamports(amount: AmountLike) -> int:
    """Convert SOL to lamports."""
    return to_base_units(amount, NATIVE_DECIMALS)


def to_display_units(base_units: int, exponent: int) -> Decimal:
    """Convert integer base units back to an exact display amount."""
    return Decimal(base_units).scaleb(-exponent)


def lamports_to_sol(lamports: int) -> Decimal:
    """Convert lamports to SOL for display."""
    return to_display_units(lamports, NATIVE_DECIMALS)
