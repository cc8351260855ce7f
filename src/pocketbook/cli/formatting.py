"""Display formatting for CLI output."""

from decimal import Decimal

# Currencies conventionally shown without minor units
_NO_DECIMALS = {"COP", "JPY"}


def format_amount(amount: Decimal, currency: str) -> str:
    """Format an amount with thousands separators and its currency code."""
    if currency in _NO_DECIMALS:
        return f"{amount:,.0f} {currency}"
    return f"{amount:,.2f} {currency}"


def format_percent(value: Decimal) -> str:
    """Format a percentage with one decimal place."""
    return f"{value:.1f}%"
