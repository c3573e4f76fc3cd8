"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from pocketledger.domain.errors import ValidationError

CENT = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    The original precision is preserved ("10.500" stays "10.500").

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValidationError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValidationError("Empty amount string")

    original = str(amount_str).strip()
    amount_str = original

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValidationError(f"Could not parse amount '{original}'")
    if not amount.is_finite():
        raise ValidationError(f"Could not parse amount '{original}'")
    return -amount if is_negative else amount


def require_cents(amount: Decimal) -> Decimal:
    """Reject amounts that cannot be stored to the cent without rounding.

    Trailing zeros are fine ("10.500" is 10.50); "10.125" is not.

    Raises:
        ValidationError: If the amount has more than 2 significant decimal places
    """
    if amount != amount.quantize(CENT):
        raise ValidationError(f"Amount '{amount}' has more than 2 decimal places")
    return amount
