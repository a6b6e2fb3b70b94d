"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re
from typing import Union

CENTS = Decimal("0.01")

AmountInput = Union[str, int, float, Decimal, None]


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "₹123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and thousands separators
    amount_str = re.sub(r"[$€£¥₹]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def round_money(amount: Decimal) -> Decimal:
    """Round a Decimal to two places, half up."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_money(value: AmountInput, default: Decimal = Decimal("0")) -> Decimal:
    """Coerce user input into a two-place monetary Decimal.

    None and blank strings yield ``default``. Floats go through ``str`` so
    that 0.1 becomes Decimal("0.10") rather than its binary expansion.

    Raises:
        ValueError: If the value is not a finite number
    """
    if value is None:
        return round_money(default)
    if isinstance(value, bool):
        raise ValueError(f"Could not parse amount '{value}'")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Could not parse amount '{value}'")
        return round_money(value)
    if isinstance(value, (int, float)):
        return round_money(parse_amount(str(value)))
    if isinstance(value, str):
        if not value.strip():
            return round_money(default)
        return round_money(parse_amount(value))
    raise ValueError(f"Could not parse amount '{value}'")
