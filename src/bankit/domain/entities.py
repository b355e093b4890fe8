"""Domain model entities for bankit.

These are pure data classes representing banking concepts, independent of
the database schema. Services and the CLI only ever see these types; the
ORM models stay behind the database layer.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional

from bankit.domain.errors import AccountLockedError, AuthenticationError


class CardTier(str, Enum):
    """Debit card tier chosen when an account is opened."""

    BRONZE = "bronze"
    EXPRESS = "express"
    GOLD = "gold"

    @classmethod
    def parse(cls, value: str) -> "CardTier":
        """Parse a tier name case-insensitively.

        Raises:
            ValueError: If the name is not a known tier
        """
        return cls(value.strip().lower())


# Minimum initial deposit per card tier
TIER_MINIMUM_DEPOSIT: dict[CardTier, int] = {
    CardTier.BRONZE: 50_000,
    CardTier.EXPRESS: 100_000,
    CardTier.GOLD: 200_000,
}


class TransactionType(str, Enum):
    """Kind of balance-affecting event."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"

    @property
    def sign(self) -> int:
        """Direction of the balance change (+1 credit, -1 debit)."""
        if self in (TransactionType.DEPOSIT, TransactionType.TRANSFER_IN):
            return 1
        return -1


class TransactionStatus(str, Enum):
    """Transaction processing status."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class LockState(str, Enum):
    """Lock state of an account."""

    UNLOCKED = "unlocked"
    LOCKED = "locked"


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    id: int
    country_id: str
    name: str
    email: str
    birth_date: date
    debit_card_type: CardTier
    balance: int
    password_hash: str = field(repr=False)
    is_locked: bool
    locked_reason: Optional[str]
    locked_at: Optional[datetime]
    failed_login_attempts: int
    last_failed_login: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    @property
    def lock_state(self) -> LockState:
        return LockState.LOCKED if self.is_locked else LockState.UNLOCKED


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``transaction_type`` is kept as a plain string when the stored value is
    not one of the known types, so such records can still be listed.
    """

    id: int
    transaction_id: str
    country_id: str
    transaction_type: TransactionType | str
    amount: int
    balance_before: int
    balance_after: int
    description: Optional[str]
    counterparty_country_id: Optional[str]
    status: TransactionStatus
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class BalanceUpdate:
    """A balance compare-and-set paired with the transaction that explains it."""

    country_id: str
    expected_balance: int
    new_balance: int
    transaction_type: TransactionType
    amount: int
    description: str
    counterparty_country_id: Optional[str] = None


@dataclass(frozen=True)
class AccountStatus:
    """Read-only snapshot of an account's lockout state."""

    country_id: str
    state: LockState
    locked_reason: Optional[str]
    locked_at: Optional[datetime]
    failed_login_attempts: int
    last_failed_login: Optional[datetime]

    @classmethod
    def from_account(cls, account: Account) -> "AccountStatus":
        return cls(
            country_id=account.country_id,
            state=account.lock_state,
            locked_reason=account.locked_reason,
            locked_at=account.locked_at,
            failed_login_attempts=account.failed_login_attempts,
            last_failed_login=account.last_failed_login,
        )

    @property
    def is_locked(self) -> bool:
        return self.state is LockState.LOCKED


@dataclass(frozen=True)
class CredentialCheck:
    """Outcome of a banking password check."""

    success: bool
    locked: bool = False
    remaining_attempts: Optional[int] = None
    message: str = ""

    def raise_for_failure(self) -> None:
        """Raise the matching domain error if the check failed."""
        if self.success:
            return
        if self.locked:
            raise AccountLockedError(self.message)
        raise AuthenticationError(self.message)


@dataclass(frozen=True)
class TransactionFilters:
    """Optional filters for transaction history queries.

    Date bounds are inclusive calendar days.
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    transaction_type: Optional[TransactionType] = None
    min_amount: Optional[int] = None
    max_amount: Optional[int] = None

    @property
    def has_date_range(self) -> bool:
        return self.start_date is not None or self.end_date is not None


@dataclass(frozen=True)
class TransactionPage:
    """One page of transaction history."""

    transactions: tuple[Transaction, ...]
    page: int
    page_size: int
    total_transactions: int
    total_pages: int


@dataclass(frozen=True)
class TypeTotals:
    """Count and summed amount for one transaction type."""

    count: int = 0
    amount: int = 0


@dataclass(frozen=True)
class TransactionSummary:
    """Per-type aggregation over a set of transactions."""

    by_type: dict[TransactionType, TypeTotals]

    @property
    def total_transactions(self) -> int:
        return sum(totals.count for totals in self.by_type.values())

    def count(self, transaction_type: TransactionType) -> int:
        return self.by_type.get(transaction_type, TypeTotals()).count

    def total(self, transaction_type: TransactionType) -> int:
        return self.by_type.get(transaction_type, TypeTotals()).amount
