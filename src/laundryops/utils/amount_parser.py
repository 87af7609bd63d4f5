"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse a price string into a Decimal.

    Handles various formats:
    - "15000"
    - "Rp 15000"
    - "Rp15,000"
    - "$123.45"
    - "1,234.56"

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Remove currency symbols
    amount_str = re.sub(r"^(rp\.?|idr)", "", amount_str, flags=re.IGNORECASE)
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        return Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")


def format_amount(amount: Decimal) -> str:
    """Render an amount without a trailing ``.00`` for whole values."""
    if amount == amount.to_integral_value():
        return str(amount.quantize(Decimal(1)))
    return str(amount.normalize())


def format_rupiah(amount: Decimal) -> str:
    """Render an amount as ``Rp 81,000`` for terminal output."""
    if amount == amount.to_integral_value():
        return f"Rp {amount:,.0f}"
    return f"Rp {amount:,.2f}"
