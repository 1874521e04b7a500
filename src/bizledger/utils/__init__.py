"""Utility functions for bizledger."""

from bizledger.utils.date_parser import parse_date
from bizledger.utils.amount_parser import parse_amount, parse_quantity
from bizledger.utils.bank_resolver import resolve_bank

__all__ = ["parse_date", "parse_amount", "parse_quantity", "resolve_bank"]
