"""Transaction domain service."""

import uuid
from datetime import date
from typing import Optional

from bankit.database.base import Database
from bankit.domain.entities import (
    Transaction,
    TransactionFilters,
    TransactionPage,
    TransactionStatus,
    TransactionSummary,
    TransactionType,
)
from bankit.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
)
from bankit.utils.date_parser import day_bounds
from bankit.utils import transaction_filters

RECENT_LIMIT = 5
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# Allowed status transitions; completed and failed are final
STATUS_TRANSITIONS: dict[TransactionStatus, frozenset[TransactionStatus]] = {
    TransactionStatus.PENDING: frozenset({TransactionStatus.COMPLETED, TransactionStatus.FAILED}),
    TransactionStatus.COMPLETED: frozenset(),
    TransactionStatus.FAILED: frozenset(),
}


def describe(transaction_type: TransactionType, amount: int, counterparty: Optional[str] = None) -> str:
    """Default human-readable description for a transaction."""
    if transaction_type is TransactionType.DEPOSIT:
        return f"Deposit of {amount}"
    if transaction_type is TransactionType.WITHDRAWAL:
        return f"Withdrawal of {amount}"
    if transaction_type is TransactionType.TRANSFER_IN:
        return f"Transfer of {amount} from {counterparty}"
    return f"Transfer of {amount} to {counterparty}"


class TransactionService:
    """Service for recording and querying transactions."""

    def __init__(
        self,
        db: Database,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        """Initialize transaction service.

        Args:
            db: Database instance
            default_page_size: Page size used when none is given
            max_page_size: Largest page size accepted by ``history``
        """
        self.db = db
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def _require_account(self, country_id: str) -> None:
        if self.db.get_account(country_id) is None:
            raise NotFoundError(account_not_found(country_id))

    def record_transaction(
        self,
        country_id: str,
        transaction_type: TransactionType,
        amount: int,
        balance_before: int,
        balance_after: int,
        description: Optional[str] = None,
        counterparty_country_id: Optional[str] = None,
        status: TransactionStatus = TransactionStatus.COMPLETED,
    ) -> Transaction:
        """Append a standalone transaction record.

        Balance mutations record their transactions through
        ``Database.apply_balance_updates`` instead; this is for records whose
        balance effect was applied elsewhere, usually created as pending.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the amount is not positive or the balances
                do not match the type's sign
        """
        transaction_type = TransactionType(transaction_type)
        if amount <= 0:
            raise ValidationError(f"Amount must be positive, got {amount}")
        if balance_after != balance_before + transaction_type.sign * amount:
            raise ValidationError(
                f"balance_after {balance_after} does not follow from balance_before "
                f"{balance_before} and a {transaction_type.value} of {amount}"
            )
        self._require_account(country_id)

        return self.db.create_transaction(
            transaction_id=str(uuid.uuid4()),
            country_id=country_id,
            transaction_type=transaction_type,
            amount=amount,
            balance_before=balance_before,
            balance_after=balance_after,
            description=description or describe(transaction_type, amount, counterparty_country_id),
            counterparty_country_id=counterparty_country_id,
            status=status,
        )

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Get transaction by transaction ID.

        Raises:
            NotFoundError: If no such transaction exists
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return txn

    def update_status(self, transaction_id: str, status: TransactionStatus) -> Transaction:
        """Move a transaction to a new status.

        Only ``pending -> completed`` and ``pending -> failed`` are allowed.
        Balances are not touched; ``BalanceService.settle`` completes a held
        deposit or withdrawal.

        Raises:
            NotFoundError: If no such transaction exists
            ValidationError: If the transition is not allowed
        """
        status = TransactionStatus(status)
        txn = self.get_transaction(transaction_id)
        if status not in STATUS_TRANSITIONS[txn.status]:
            raise ValidationError(
                f"Cannot change transaction {transaction_id} from {txn.status.value} to {status.value}"
            )
        self.db.update_transaction_status(transaction_id, status)
        return self.get_transaction(transaction_id)

    def history(
        self,
        country_id: str,
        filters: Optional[TransactionFilters] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> TransactionPage:
        """Get a page of an account's transactions, most recent first.

        The store narrows records by date range and type; the amount
        filters are applied in memory.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If page or page size is out of range
        """
        if page_size is None:
            page_size = self.default_page_size
        if page < 1:
            raise ValidationError(f"Page must be at least 1, got {page}")
        if not 1 <= page_size <= self.max_page_size:
            raise ValidationError(f"Page size must be between 1 and {self.max_page_size}, got {page_size}")
        filters = filters or TransactionFilters()
        self._validate_filters(filters)
        self._require_account(country_id)

        if filters.has_date_range:
            start, end = day_bounds(filters.start_date, filters.end_date)
            transactions = self.db.list_transactions(
                country_id, start=start, end=end, transaction_type=filters.transaction_type
            )
        else:
            transactions = self.db.list_transactions(
                country_id, transaction_type=filters.transaction_type
            )

        selected = transaction_filters.apply_filters(transactions, filters)
        ordered = transaction_filters.sort_by_date(selected, descending=True)
        return transaction_filters.paginate(ordered, page, page_size)

    def recent(self, country_id: str) -> list[Transaction]:
        """Get up to the five most recent transactions.

        Raises:
            NotFoundError: If the account does not exist
        """
        self._require_account(country_id)
        return self.db.recent_transactions(country_id, limit=RECENT_LIMIT)

    def summary(
        self,
        country_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> TransactionSummary:
        """Aggregate count and amount per type over an optional day range.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If start_date is after end_date
        """
        self._validate_filters(TransactionFilters(start_date=start_date, end_date=end_date))
        self._require_account(country_id)
        start, end = day_bounds(start_date, end_date)
        transactions = self.db.list_transactions(country_id, start=start, end=end)
        return transaction_filters.summarize(transactions)

    def _validate_filters(self, filters: TransactionFilters) -> None:
        if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
            raise ValidationError("Start date must not be after end date")
        if (
            filters.min_amount is not None
            and filters.max_amount is not None
            and filters.min_amount > filters.max_amount
        ):
            raise ValidationError("Minimum amount must not exceed maximum amount")
