"""Transaction filtering, ordering, pagination and aggregation helpers.

All functions are pure: they take sequences of domain transactions and
return new values without touching the database.
"""

import math
from typing import Iterable, Optional, Sequence

from bankit.domain.entities import (
    Transaction,
    TransactionFilters,
    TransactionPage,
    TransactionSummary,
    TransactionType,
    TypeTotals,
)
from bankit.utils.date_parser import day_bounds


def filter_by_type(
    transactions: Iterable[Transaction], transaction_type: Optional[TransactionType]
) -> list[Transaction]:
    """Keep transactions of the given type (all of them if type is None)."""
    if transaction_type is None:
        return list(transactions)
    return [txn for txn in transactions if txn.transaction_type == transaction_type]


def filter_by_date_range(
    transactions: Iterable[Transaction], filters: TransactionFilters
) -> list[Transaction]:
    """Keep transactions created within the filters' inclusive day range."""
    start, end = day_bounds(filters.start_date, filters.end_date)
    return [
        txn
        for txn in transactions
        if (start is None or txn.created_at >= start) and (end is None or txn.created_at <= end)
    ]


def filter_by_amount_range(
    transactions: Iterable[Transaction],
    min_amount: Optional[int] = None,
    max_amount: Optional[int] = None,
) -> list[Transaction]:
    """Keep transactions whose amount lies within the inclusive range."""
    return [
        txn
        for txn in transactions
        if (min_amount is None or txn.amount >= min_amount)
        and (max_amount is None or txn.amount <= max_amount)
    ]


def apply_filters(
    transactions: Iterable[Transaction], filters: Optional[TransactionFilters] = None
) -> list[Transaction]:
    """Apply every filter set in ``filters``."""
    result = list(transactions)
    if filters is None:
        return result
    result = filter_by_type(result, filters.transaction_type)
    if filters.has_date_range:
        result = filter_by_date_range(result, filters)
    if filters.min_amount is not None or filters.max_amount is not None:
        result = filter_by_amount_range(result, filters.min_amount, filters.max_amount)
    return result


def sort_by_date(transactions: Iterable[Transaction], descending: bool = True) -> list[Transaction]:
    """Sort by creation time; ties keep insertion order via the row id."""
    return sorted(transactions, key=lambda txn: (txn.created_at, txn.id), reverse=descending)


def paginate(transactions: Sequence[Transaction], page: int, page_size: int) -> TransactionPage:
    """Slice out a 1-based page.

    A page past the end yields an empty slice rather than an error.
    """
    if page < 1:
        raise ValueError(f"Page must be at least 1, got {page}")
    if page_size < 1:
        raise ValueError(f"Page size must be at least 1, got {page_size}")

    total = len(transactions)
    start = (page - 1) * page_size
    return TransactionPage(
        transactions=tuple(transactions[start : start + page_size]),
        page=page,
        page_size=page_size,
        total_transactions=total,
        total_pages=math.ceil(total / page_size),
    )


def summarize(transactions: Iterable[Transaction]) -> TransactionSummary:
    """Total count and amount per transaction type.

    Transactions with unknown types are ignored. Empty input gives zeros.
    """
    counts = {txn_type: 0 for txn_type in TransactionType}
    amounts = {txn_type: 0 for txn_type in TransactionType}
    for txn in transactions:
        if txn.transaction_type not in counts:
            continue
        counts[txn.transaction_type] += 1
        amounts[txn.transaction_type] += txn.amount or 0

    return TransactionSummary(
        by_type={
            txn_type: TypeTotals(count=counts[txn_type], amount=amounts[txn_type])
            for txn_type in TransactionType
        }
    )
