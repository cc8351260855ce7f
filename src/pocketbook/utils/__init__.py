"""Utility functions for pocketbook."""

from pocketbook.utils.date_parser import parse_date, parse_iso_date
from pocketbook.utils.amount_parser import parse_amount
from pocketbook.utils.ids import generate_id

__all__ = ["parse_date", "parse_iso_date", "parse_amount", "generate_id"]
