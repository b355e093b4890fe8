"""Amount parsing utilities."""

import re


def parse_amount(amount_str: str) -> int:
    """Parse a money amount string into a positive integer.

    Handles various formats:
    - "1000"
    - "1,000"
    - "1_000"
    - "$1,000"

    Args:
        amount_str: Amount string

    Returns:
        Integer amount (always > 0)

    Raises:
        ValueError: If amount string cannot be parsed or is not positive
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = amount_str.strip()

    # Remove currency symbols and thousands separators
    cleaned = re.sub(r"[$€£¥]", "", cleaned)
    cleaned = cleaned.replace(",", "").replace("_", "").strip()

    if not re.fullmatch(r"\d+", cleaned):
        raise ValueError(f"Could not parse amount '{amount_str}': expected a whole number")

    amount = int(cleaned)
    if amount <= 0:
        raise ValueError(f"Amount must be positive, got {amount}")
    return amount
