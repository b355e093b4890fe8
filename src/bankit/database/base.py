"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime

# Import entities directly to avoid circular import through domain/__init__.py
from bankit.domain.entities import (
    Account,
    BalanceUpdate,
    CardTier,
    Transaction,
    TransactionStatus,
    TransactionType,
)


class Database(ABC):
    """Abstract ledger store for bankit.

    Implementations raise ``StorageError`` when the underlying store fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        country_id: str,
        name: str,
        email: str,
        birth_date: date,
        debit_card_type: CardTier,
        balance: int,
        password_hash: str,
    ) -> Account:
        """Create a new unlocked account with no failed logins."""
        pass

    @abstractmethod
    def get_account(self, country_id: str) -> Optional[Account]:
        """Get account by country ID."""
        pass

    @abstractmethod
    def get_account_by_email(self, email: str) -> Optional[Account]:
        """Get account by email."""
        pass

    @abstractmethod
    def list_accounts(
        self, balance_min: Optional[int] = None, balance_max: Optional[int] = None
    ) -> list[Account]:
        """List accounts, optionally restricted to an inclusive balance range."""
        pass

    @abstractmethod
    def delete_account(self, country_id: str) -> None:
        """Delete an account. Its transactions are kept."""
        pass

    # Lockout operations
    @abstractmethod
    def record_failed_login(
        self,
        country_id: str,
        at: datetime,
        lock_after: Optional[int] = None,
        lock_reason: str = "security",
    ) -> int:
        """Increment the failed-login counter. Returns the new count.

        When ``lock_after`` is given and the new count reaches it, the
        account is locked with ``lock_reason`` in the same database
        transaction as the increment.
        """
        pass

    @abstractmethod
    def reset_failed_logins(self, country_id: str) -> None:
        """Reset the failed-login counter and clear the last failure time."""
        pass

    @abstractmethod
    def set_lock(self, country_id: str, reason: str, at: datetime) -> None:
        """Mark an account locked with the given reason and time."""
        pass

    @abstractmethod
    def clear_lock(self, country_id: str) -> None:
        """Unlock an account and reset its failed-login counter."""
        pass

    # Balance operations
    @abstractmethod
    def apply_balance_updates(self, updates: list[BalanceUpdate]) -> list[Transaction]:
        """Apply balance changes and record their transactions atomically.

        Each update is a compare-and-set on the account balance. If any
        account's balance differs from ``expected_balance``, nothing is
        written and ``ConflictError`` is raised.

        Returns:
            The recorded transactions, in the order of ``updates``
        """
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        transaction_id: str,
        country_id: str,
        transaction_type: TransactionType,
        amount: int,
        balance_before: int,
        balance_after: int,
        description: Optional[str] = None,
        counterparty_country_id: Optional[str] = None,
        status: TransactionStatus = TransactionStatus.COMPLETED,
    ) -> Transaction:
        """Append a transaction record without touching any balance."""
        pass

    @abstractmethod
    def settle_transaction(self, transaction_id: str, update: BalanceUpdate) -> Transaction:
        """Complete a pending transaction by applying its balance change.

        The balance compare-and-set and the record's move to ``completed``,
        with its ``balance_before`` and ``balance_after`` rewritten from
        ``update``, happen atomically. Raises ``ConflictError`` if the
        balance moved or the record is no longer pending.
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        """Get transaction by its transaction ID."""
        pass

    @abstractmethod
    def update_transaction_status(
        self, transaction_id: str, status: TransactionStatus
    ) -> None:
        """Update transaction status."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        country_id: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        transaction_type: Optional[TransactionType] = None,
    ) -> list[Transaction]:
        """List an account's transactions, most recent first.

        Args:
            country_id: Owning account
            start: Optional inclusive lower bound on creation time
            end: Optional inclusive upper bound on creation time
            transaction_type: Optional type filter
        """
        pass

    @abstractmethod
    def recent_transactions(self, country_id: str, limit: int = 5) -> list[Transaction]:
        """Get the most recent transactions for an account."""
        pass

    @abstractmethod
    def count_transactions(self, country_id: str) -> int:
        """Count transactions recorded for an account."""
        pass
