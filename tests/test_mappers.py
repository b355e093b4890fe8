"""Tests for database mappers."""

from datetime import datetime, date, UTC

from bankit.database.models import (
    Account as ORMAccount,
    Transaction as ORMTransaction,
)
from bankit.database.mappers import account_to_domain, transaction_to_domain
from bankit.domain.entities import (
    Account,
    CardTier,
    Transaction,
    TransactionStatus,
    TransactionType,
)


class TestAccountMapper:
    """Tests for Account mapper."""

    def test_account_to_domain(self):
        """Test converting ORM Account to domain Account."""
        naive = datetime(2024, 3, 1, 12, 30)
        orm_account = ORMAccount(
            id=1,
            country_id="3201010101",
            name="Budi",
            email="budi@example.com",
            birth_date=date(1990, 1, 1),
            debit_card_type="express",
            balance=100_000,
            password_hash="scrypt$x",
            is_locked=True,
            locked_reason="security",
            locked_at=naive,
            failed_login_attempts=5,
            last_failed_login=naive,
            created_at=naive,
            updated_at=naive,
        )
        domain_account = account_to_domain(orm_account)

        assert isinstance(domain_account, Account)
        assert domain_account.debit_card_type is CardTier.EXPRESS
        assert domain_account.is_locked is True
        assert domain_account.failed_login_attempts == 5
        # SQLite returns naive timestamps; they are stored as UTC
        assert domain_account.created_at == naive.replace(tzinfo=UTC)
        assert domain_account.locked_at.tzinfo is UTC


class TestTransactionMapper:
    """Tests for Transaction mapper."""

    def _orm(self, transaction_type):
        now = datetime.now(UTC)
        return ORMTransaction(
            id=7,
            transaction_id="abc",
            country_id="3201010101",
            transaction_type=transaction_type,
            amount=500,
            balance_before=1_000,
            balance_after=500,
            description="Withdrawal of 500",
            counterparty_country_id=None,
            status="pending",
            created_at=now,
            updated_at=now,
        )

    def test_transaction_to_domain(self):
        """Test converting ORM Transaction to domain Transaction."""
        orm_txn = self._orm("withdrawal")
        domain_txn = transaction_to_domain(orm_txn)

        assert isinstance(domain_txn, Transaction)
        assert domain_txn.transaction_type is TransactionType.WITHDRAWAL
        assert domain_txn.status is TransactionStatus.PENDING
        assert domain_txn.created_at == orm_txn.created_at

    def test_unknown_type_kept_as_string(self):
        domain_txn = transaction_to_domain(self._orm("interest"))
        assert domain_txn.transaction_type == "interest"
