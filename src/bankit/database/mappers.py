"""Mapper functions to convert SQLAlchemy models into domain entities.

SQLite drops timezone information, so timestamps are re-tagged as UTC on
the way out; the domain layer only ever sees aware datetimes.
"""

from datetime import datetime, UTC
from typing import Optional

from bankit.domain import entities as domain
from bankit.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def _transaction_type(value: str) -> domain.TransactionType | str:
    try:
        return domain.TransactionType(value)
    except ValueError:
        return value


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        country_id=orm_account.country_id,
        name=orm_account.name,
        email=orm_account.email,
        birth_date=orm_account.birth_date,
        debit_card_type=domain.CardTier(orm_account.debit_card_type),
        balance=orm_account.balance,
        password_hash=orm_account.password_hash,
        is_locked=bool(orm_account.is_locked),
        locked_reason=orm_account.locked_reason,
        locked_at=_as_utc(orm_account.locked_at),
        failed_login_attempts=orm_account.failed_login_attempts or 0,
        last_failed_login=_as_utc(orm_account.last_failed_login),
        created_at=_as_utc(orm_account.created_at),
        updated_at=_as_utc(orm_account.updated_at),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        transaction_id=orm_transaction.transaction_id,
        country_id=orm_transaction.country_id,
        transaction_type=_transaction_type(orm_transaction.transaction_type),
        amount=orm_transaction.amount,
        balance_before=orm_transaction.balance_before,
        balance_after=orm_transaction.balance_after,
        description=orm_transaction.description,
        counterparty_country_id=orm_transaction.counterparty_country_id,
        status=domain.TransactionStatus(orm_transaction.status),
        created_at=_as_utc(orm_transaction.created_at),
        updated_at=_as_utc(orm_transaction.updated_at),
    )
