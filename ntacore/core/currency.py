"""
Naira Formatting Helpers
Presentation helpers used by callers to display engine outputs and to sanitise
form input before it reaches the calculators.

  - format_number: en-NG digit grouping, up to 3 fraction digits
  - format_currency: "₦" + amount rounded half-up (halves towards +∞) to whole naira
  - parse_amount: strip thousands separators from user input
"""

import re
from decimal import Decimal, ROUND_FLOOR, InvalidOperation

NAIRA_SIGN = "₦"

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def round_half_up(amount: float, places: int = 0) -> float:
    """Round halves towards +infinity, so -2.5 becomes -2 and 2.5 becomes 3."""
    exponent = Decimal(1).scaleb(-places)
    shifted = Decimal(str(amount)) + exponent / 2
    # + 0.0 normalises -0.0
    return float(shifted.quantize(exponent, rounding=ROUND_FLOOR)) + 0.0


def format_number(amount: float) -> str:
    if amount in (float("inf"), float("-inf")):
        return "∞" if amount > 0 else "-∞"

    text = f"{round_half_up(amount, 3):,.3f}"
    return text.rstrip("0").rstrip(".")


def format_currency(amount: float) -> str:
    return f"{NAIRA_SIGN}{format_number(round_half_up(amount))}"


def parse_amount(value: str | float | int | None) -> float:
    """Parse a form value such as "1,250,000.50" or "₦3,000,000". Unparsable input is 0."""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)

    cleaned = _NON_NUMERIC.sub("", value.replace(",", ""))
    try:
        return float(Decimal(cleaned))
    except InvalidOperation:
        return 0.0
