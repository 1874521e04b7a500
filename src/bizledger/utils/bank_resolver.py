"""Utility for resolving bank names to IDs."""

from typing import Sequence

from bizledger.domain.entities import Bank
from bizledger.domain.errors import NotFoundError, ValidationError


def resolve_bank(banks: Sequence[Bank], bank: str) -> str:
    """Resolve a bank id or bank name to a bank id.

    Ids take precedence over names.

    Args:
        banks: Known banks
        bank: Bank id or bank name

    Returns:
        Bank ID

    Raises:
        NotFoundError: If no bank matches
        ValidationError: If the name matches more than one bank
    """
    for candidate in banks:
        if candidate.id == bank:
            return candidate.id

    matches = [candidate for candidate in banks if candidate.bank_name == bank]
    if len(matches) > 1:
        raise ValidationError(f"Bank name '{bank}' is ambiguous; use the bank id")
    if matches:
        return matches[0].id

    raise NotFoundError(f"Bank '{bank}' not found")
