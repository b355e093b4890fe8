"""Shared domain error messages and error types."""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories reported by the core operations."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_ARGUMENT = "invalid_argument"
    AUTHENTICATION_FAILED = "authentication_failed"
    LOCKED = "locked"
    STORAGE_FAILURE = "storage_failure"


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """

    kind: ErrorKind


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    kind = ErrorKind.INVALID_ARGUMENT


class NotFoundError(DomainError):
    """Requested account or transaction does not exist."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or a stale balance."""

    kind = ErrorKind.CONFLICT


class AuthenticationError(DomainError):
    """Supplied banking password did not match."""

    kind = ErrorKind.AUTHENTICATION_FAILED


class AccountLockedError(DomainError):
    """Account is locked; the credential was not evaluated."""

    kind = ErrorKind.LOCKED


class StorageError(DomainError):
    """Underlying store operation failed."""

    kind = ErrorKind.STORAGE_FAILURE


def account_not_found(country_id: str) -> str:
    """Return message for missing account."""
    return f"Account {country_id} not found"


def transaction_not_found(transaction_id: str) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def email_already_registered(email: str) -> str:
    return f"Email '{email}' is already registered"


def country_id_already_registered(country_id: str) -> str:
    return f"Country ID '{country_id}' is already registered"


def minimum_deposit_not_met(tier: str, minimum: int) -> str:
    """Return message for an initial deposit below the tier minimum."""
    return (
        f"{tier.capitalize()} debit card first deposit must be equal or more "
        f"than {minimum:,}"
    )


def insufficient_funds(country_id: str, balance: int, amount: int) -> str:
    return f"Insufficient funds in account {country_id}: balance {balance:,}, requested {amount:,}"


def stale_balance(country_id: str) -> str:
    """Return message when a balance changed between read and write."""
    return f"Balance of account {country_id} changed concurrently; retry the operation"
