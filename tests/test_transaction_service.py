"""Tests for transaction history, recent list, summary and status changes."""

import math
from datetime import datetime, timedelta, UTC

import pytest

from bankit.domain.entities import TransactionFilters, TransactionStatus, TransactionType
from bankit.domain.errors import NotFoundError, ValidationError


@pytest.fixture
def busy_account(balance_service, sample_account):
    """Account with 7 deposits (100..700) and 3 withdrawals (10..30)."""
    country_id = sample_account.country_id
    for i in range(1, 8):
        balance_service.deposit(country_id, i * 100)
    for i in range(1, 4):
        balance_service.withdraw(country_id, i * 10)
    return sample_account


def test_history_newest_first(transaction_service, busy_account):
    page = transaction_service.history(busy_account.country_id)

    assert page.page == 1
    assert page.page_size == 10
    assert page.total_transactions == 10
    assert page.total_pages == 1
    amounts = [txn.amount for txn in page.transactions]
    assert amounts == [30, 20, 10, 700, 600, 500, 400, 300, 200, 100]


def test_history_balances_chain(transaction_service, busy_account):
    transactions = list(reversed(transaction_service.history(busy_account.country_id).transactions))
    for earlier, later in zip(transactions, transactions[1:]):
        assert later.balance_before == earlier.balance_after


@pytest.mark.parametrize("page_size", [1, 3, 4, 10, 11])
def test_pages_cover_everything_once(transaction_service, busy_account, page_size):
    country_id = busy_account.country_id
    first = transaction_service.history(country_id, page=1, page_size=page_size)
    assert first.total_pages == math.ceil(10 / page_size)

    collected = []
    for page in range(1, first.total_pages + 1):
        collected.extend(transaction_service.history(country_id, page=page, page_size=page_size).transactions)

    full = transaction_service.history(country_id, page_size=100).transactions
    assert [txn.transaction_id for txn in collected] == [txn.transaction_id for txn in full]


def test_page_past_end_is_empty(transaction_service, busy_account):
    page = transaction_service.history(busy_account.country_id, page=5, page_size=5)
    assert page.transactions == ()
    assert page.total_transactions == 10
    assert page.total_pages == 2


def test_history_no_transactions(transaction_service, sample_account):
    page = transaction_service.history(sample_account.country_id)
    assert page.transactions == ()
    assert page.total_transactions == 0
    assert page.total_pages == 0


def test_history_invalid_paging(transaction_service, sample_account):
    with pytest.raises(ValidationError):
        transaction_service.history(sample_account.country_id, page=0)
    with pytest.raises(ValidationError):
        transaction_service.history(sample_account.country_id, page_size=0)
    with pytest.raises(ValidationError):
        transaction_service.history(sample_account.country_id, page_size=101)


def test_history_unknown_account(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.history("missing")


def test_history_type_filter(transaction_service, busy_account):
    page = transaction_service.history(
        busy_account.country_id,
        filters=TransactionFilters(transaction_type=TransactionType.WITHDRAWAL),
    )
    assert page.total_transactions == 3
    assert all(txn.transaction_type is TransactionType.WITHDRAWAL for txn in page.transactions)


def test_history_amount_filter(transaction_service, busy_account):
    page = transaction_service.history(
        busy_account.country_id,
        filters=TransactionFilters(min_amount=20, max_amount=300),
    )
    assert sorted(txn.amount for txn in page.transactions) == [20, 30, 100, 200, 300]


def test_history_date_filter(transaction_service, busy_account):
    country_id = busy_account.country_id
    day = transaction_service.recent(country_id)[0].created_at.date()

    same_day = transaction_service.history(
        country_id, filters=TransactionFilters(start_date=day, end_date=day)
    )
    assert same_day.total_transactions == 10

    open_start = transaction_service.history(country_id, filters=TransactionFilters(end_date=day))
    assert open_start.total_transactions == 10

    later = transaction_service.history(
        country_id, filters=TransactionFilters(start_date=day + timedelta(days=1))
    )
    assert later.total_transactions == 0


def test_history_invalid_filters(transaction_service, sample_account):
    day = sample_account.created_at.date()
    with pytest.raises(ValidationError):
        transaction_service.history(
            sample_account.country_id,
            filters=TransactionFilters(start_date=day, end_date=day - timedelta(days=1)),
        )
    with pytest.raises(ValidationError):
        transaction_service.history(
            sample_account.country_id, filters=TransactionFilters(min_amount=10, max_amount=5)
        )


def test_recent_returns_five(transaction_service, busy_account):
    recent = transaction_service.recent(busy_account.country_id)
    assert [txn.amount for txn in recent] == [30, 20, 10, 700, 600]


def test_recent_fewer_than_five(transaction_service, balance_service, sample_account):
    balance_service.deposit(sample_account.country_id, 1)
    assert len(transaction_service.recent(sample_account.country_id)) == 1


def test_recent_unknown_account(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.recent("missing")


def test_summary(transaction_service, busy_account):
    summary = transaction_service.summary(busy_account.country_id)

    assert summary.count(TransactionType.DEPOSIT) == 7
    assert summary.total(TransactionType.DEPOSIT) == 2_800
    assert summary.count(TransactionType.WITHDRAWAL) == 3
    assert summary.total(TransactionType.WITHDRAWAL) == 60
    assert summary.count(TransactionType.TRANSFER_IN) == 0
    assert summary.total_transactions == 10


def test_summary_empty_is_zero(transaction_service, sample_account):
    summary = transaction_service.summary(sample_account.country_id)

    assert summary.total_transactions == 0
    for txn_type in TransactionType:
        assert summary.count(txn_type) == 0
        assert summary.total(txn_type) == 0


def test_summary_outside_range_is_zero(transaction_service, busy_account):
    day = busy_account.created_at.date() + timedelta(days=2)
    summary = transaction_service.summary(busy_account.country_id, start_date=day)
    assert summary.total_transactions == 0


def test_summary_unknown_account(transaction_service):
    with pytest.raises(NotFoundError):
        transaction_service.summary("missing")


def test_record_pending_and_complete(transaction_service, sample_account):
    txn = transaction_service.record_transaction(
        country_id=sample_account.country_id,
        transaction_type=TransactionType.DEPOSIT,
        amount=500,
        balance_before=100_000,
        balance_after=100_500,
        status=TransactionStatus.PENDING,
    )
    assert txn.status is TransactionStatus.PENDING
    assert txn.description == "Deposit of 500"

    completed = transaction_service.update_status(txn.transaction_id, TransactionStatus.COMPLETED)
    assert completed.status is TransactionStatus.COMPLETED

    with pytest.raises(ValidationError):
        transaction_service.update_status(txn.transaction_id, TransactionStatus.FAILED)


def test_record_rejects_inconsistent_balances(transaction_service, sample_account):
    with pytest.raises(ValidationError):
        transaction_service.record_transaction(
            country_id=sample_account.country_id,
            transaction_type=TransactionType.WITHDRAWAL,
            amount=500,
            balance_before=100_000,
            balance_after=100_500,
        )
    with pytest.raises(ValidationError):
        transaction_service.record_transaction(
            country_id=sample_account.country_id,
            transaction_type=TransactionType.DEPOSIT,
            amount=0,
            balance_before=100_000,
            balance_after=100_000,
        )


def test_get_transaction(transaction_service, balance_service, sample_account):
    txn = balance_service.deposit(sample_account.country_id, 700)

    found = transaction_service.get_transaction(txn.transaction_id)
    assert found == txn

    with pytest.raises(NotFoundError):
        transaction_service.get_transaction("no-such-id")
    with pytest.raises(NotFoundError):
        transaction_service.update_status("no-such-id", TransactionStatus.COMPLETED)


def test_record_requires_account(transaction_service, temp_db):
    with pytest.raises(NotFoundError):
        transaction_service.record_transaction(
            country_id="missing",
            transaction_type=TransactionType.DEPOSIT,
            amount=500,
            balance_before=0,
            balance_after=500,
        )

    assert temp_db.count_transactions("missing") == 0


def test_history_type_filter_reaches_store(transaction_service, temp_db, busy_account, monkeypatch):
    calls = []
    list_transactions = temp_db.list_transactions

    def recording_list(country_id, **kwargs):
        calls.append(kwargs)
        return list_transactions(country_id, **kwargs)

    monkeypatch.setattr(temp_db, "list_transactions", recording_list)
    filters = TransactionFilters(transaction_type=TransactionType.WITHDRAWAL)
    today = datetime.now(UTC).date()

    result = transaction_service.history(busy_account.country_id, filters=filters)
    dated = transaction_service.history(
        busy_account.country_id,
        filters=TransactionFilters(
            start_date=today - timedelta(days=1),
            end_date=today,
            transaction_type=TransactionType.WITHDRAWAL,
        ),
    )

    assert [call["transaction_type"] for call in calls] == [TransactionType.WITHDRAWAL] * 2
    assert result.transactions
    assert all(t.transaction_type is TransactionType.WITHDRAWAL for t in result.transactions)
    assert dated.total_transactions == result.total_transactions
