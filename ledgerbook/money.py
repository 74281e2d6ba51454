"""
Money Helpers Module

Fixed-point Decimal handling for ledger amounts. NEVER uses float for
monetary values: every amount is coerced through str and quantized to cents.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from typing import Union
import re

# High precision for intermediate results (interest, fees)
getcontext().prec = 28

CENT = Decimal('0.01')
ZERO = Decimal('0.00')

AmountLike = Union[Decimal, int, float, str]


def to_money(value: AmountLike) -> Decimal:
    """
    Convert a value to a Decimal rounded to cents

    Args:
        value: Decimal, int, float or numeric string (formatted strings such
            as "$1,250.00" are parsed with decimal_from_string)

    Returns:
        Decimal quantized to two places (ROUND_HALF_UP)

    Raises:
        ValueError: If value is not numeric
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert {value!r} to money")
    if isinstance(value, str):
        value = decimal_from_string(value)
    elif not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Cannot convert {value!r} to money") from None
    if not value.is_finite():
        raise ValueError(f"Cannot convert {value!r} to money")
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Args:
        value: String representation of number, e.g. "$1,250.00"

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    # Remove currency symbols and whitespace
    clean_value = re.sub(r'[\s$€£¥]', '', value)

    if ',' in clean_value and '.' in clean_value:
        # Both comma and dot - comma is the thousands separator
        clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:  # Decimal separator
            clean_value = clean_value.replace(',', '.')
        else:  # Thousands separator
            clean_value = clean_value.replace(',', '')
    else:
        clean_value = clean_value.replace(',', '')

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal") from None


def format_money(value: Decimal) -> str:
    """Format for display, e.g. Decimal('-1234.5') -> '-$1,234.50'"""
    amount = to_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"
