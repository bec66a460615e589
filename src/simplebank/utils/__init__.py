"""Utility functions for simplebank."""

from simplebank.utils.date_parser import parse_date, get_date_range
from simplebank.utils.amount_parser import parse_amount

__all__ = ["parse_date", "get_date_range", "parse_amount"]
