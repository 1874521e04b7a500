"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DecodeError(DomainError):
    """Stored record could not be decoded into a domain entity."""

    def __init__(self, collection: str, record_id: str | None, reason: str):
        self.collection = collection
        self.record_id = record_id
        self.reason = reason
        where = f"{collection}[{record_id}]" if record_id is not None else collection
        super().__init__(f"Could not decode {where}: {reason}")


class ReferentialWarning(UserWarning):
    """A transaction refers to a bank that no longer exists."""


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction '{transaction_id}' not found"


def invoice_not_found(invoice_id: str) -> str:
    """Return message for missing invoice."""
    return f"Invoice '{invoice_id}' not found"


def bank_not_found(bank_id: str) -> str:
    """Return message for missing bank."""
    return f"Bank '{bank_id}' not found"


def reserved_transaction_id(transaction_id: str) -> str:
    """Return message for a manual transaction using the invoice-derived prefix."""
    return (
        f"Transaction id '{transaction_id}' is reserved for invoice-derived "
        "transactions"
    )


def derived_transaction_locked(transaction_id: str) -> str:
    """Return message when a manual edit targets an invoice-derived transaction."""
    return (
        f"Transaction '{transaction_id}' was generated from an invoice; "
        "edit or delete the invoice instead"
    )


def duplicate_id(kind: str, entity_id: str) -> str:
    """Return message for a duplicate entity id."""
    return f"{kind} with id '{entity_id}' already exists"
