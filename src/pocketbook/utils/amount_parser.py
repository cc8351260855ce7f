"""Amount parsing for command line input."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")
# ISO 4217 code before or after the number, e.g. "EUR 12" or "12.50 usd"
_CURRENCY_CODE = re.compile(r"^[A-Za-z]{3}\s+|\s+[A-Za-z]{3}$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse a user-entered amount into a Decimal.

    Accepts plain numbers ("123.45", "-5"), thousands separators
    ("1,234.56"), a currency symbol or code ("€12", "12 EUR") and
    accounting notation for negatives ("(42.00)").

    Raises:
        ValueError: If the text is not a finite number
    """
    text = (amount_str or "").strip()
    if not text:
        raise ValueError("Empty amount string")

    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]

    text = _CURRENCY_CODE.sub("", text.strip())
    text = _CURRENCY_SYMBOLS.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return -amount if negative else amount
