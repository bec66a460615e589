"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

MAX_DECIMAL_PLACES = 2


def parse_amount(amount_str: str) -> Decimal:
    """Parse a money amount entered by a user into a Decimal.

    Handles formats such as:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "-50" (sign is kept; the domain decides whether it is allowed)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If the string is not a finite number with at most two
            decimal places
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£¥,\s]", "", amount_str)

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number: '{amount_str}'")

    if -amount.as_tuple().exponent > MAX_DECIMAL_PLACES:
        raise ValueError(
            f"Amount '{amount_str}' has more than {MAX_DECIMAL_PLACES} decimal places"
        )

    return amount
