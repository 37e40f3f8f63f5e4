from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext

from .constants import FEE_DECIMALS


def to_fixed_point(value: str | int | Decimal, decimals: int = FEE_DECIMALS) -> int:
    """Convert a decimal amount to a fixed-point integer.

    Args:
        value: Amount as a decimal string (e.g. ``"15.948864"``), int or Decimal.
        decimals: Number of fractional digits of the fixed-point representation.

    Returns:
        ``value * 10**decimals`` as an integer.

    Raises:
        ValueError: If ``value`` is not a finite, non-negative decimal number.

    Notes:
        - Fractional digits beyond ``decimals`` are truncated, never rounded up.
        - Floats are rejected; pass the original string to avoid binary rounding.
    """
    if isinstance(value, (bool, float)):
        raise ValueError(f"Unsupported amount type: {type(value).__name__}")

    try:
        amount = Decimal(value.strip() if isinstance(value, str) else value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Not a decimal number: {value!r}") from e

    if not amount.is_finite():
        raise ValueError(f"Not a finite number: {value!r}")
    if amount < 0:
        raise ValueError(f"Negative amount: {value!r}")

    # Enough precision for any uint256 plus the fractional digits
    with localcontext() as ctx:
        ctx.prec = 80 + decimals
        scaled = amount.scaleb(decimals).to_integral_value(rounding=ROUND_DOWN)
    return int(scaled)


def parse_uint(value: str | int) -> int:
    """Parse an unsigned integer given as an int or a string of decimal digits.

    Raises:
        ValueError: If ``value`` is negative or not a plain decimal integer.
    """
    if isinstance(value, bool):
        raise ValueError(f"Unsupported integer type: {type(value).__name__}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Negative integer: {value}")
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
        raise ValueError(f"Not an unsigned integer: {value!r}")
    raise ValueError(f"Unsupported integer type: {type(value).__name__}")

