"""Balance mutation domain service.

Every balance change is paired with exactly one transaction record and both
are written in a single store transaction (``apply_balance_updates``). The
per-account lock serializes writers inside this process; the store's
compare-and-set on the previous balance catches writers outside it.

A deposit or withdrawal can also be held as a pending record and settled
later; settling applies it to the balance the account has at that time.
"""

import uuid
from typing import Optional

from bankit.database.base import Database
from bankit.domain.entities import (
    Account,
    BalanceUpdate,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from bankit.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    insufficient_funds,
    transaction_not_found,
)
from bankit.domain.locks import AccountLockRegistry
from bankit.domain.transaction import STATUS_TRANSITIONS, describe
from bankit.logging import get_logger

logger = get_logger(__name__)


def _require_positive(amount: int) -> None:
    # bool is an int subclass but never a valid amount
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise ValidationError(f"Amount must be a positive integer, got {amount!r}")


class BalanceService:
    """Service for deposits, withdrawals and transfers."""

    def __init__(
        self,
        db: Database,
        locks: Optional[AccountLockRegistry] = None,
        allow_overdraft: bool = False,
    ):
        """Initialize balance service.

        Args:
            db: Database instance
            locks: Lock registry shared with other services; a private one
                is created if omitted
            allow_overdraft: If True, withdrawals may take the balance below zero
        """
        self.db = db
        self.locks = locks or AccountLockRegistry()
        self.allow_overdraft = allow_overdraft

    def _get_account(self, country_id: str) -> Account:
        account = self.db.get_account(country_id)
        if account is None:
            raise NotFoundError(account_not_found(country_id))
        return account

    def _check_funds(self, account: Account, amount: int) -> None:
        if not self.allow_overdraft and account.balance - amount < 0:
            raise ValidationError(insufficient_funds(account.country_id, account.balance, amount))

    def deposit(self, country_id: str, amount: int) -> Transaction:
        """Add money to an account.

        Returns:
            The recorded deposit; ``balance_after`` is the new balance

        Raises:
            ValidationError: If amount is not a positive integer
            NotFoundError: If the account does not exist
            ConflictError: If the balance changed underneath the update
            StorageError: If the store fails; nothing is written
        """
        _require_positive(amount)
        with self.locks.hold(country_id):
            account = self._get_account(country_id)
            new_balance = account.balance + amount
            (record,) = self.db.apply_balance_updates(
                [
                    BalanceUpdate(
                        country_id=country_id,
                        expected_balance=account.balance,
                        new_balance=new_balance,
                        transaction_type=TransactionType.DEPOSIT,
                        amount=amount,
                        description=describe(TransactionType.DEPOSIT, amount),
                    )
                ]
            )
        logger.info(
            "Deposited %d into %s (balance %d)",
            amount,
            country_id,
            new_balance,
            extra={"extra": {"country_id": country_id, "amount": amount, "balance": new_balance}},
        )
        return record

    def withdraw(self, country_id: str, amount: int) -> Transaction:
        """Take money out of an account.

        Returns:
            The recorded withdrawal; ``balance_after`` is the new balance

        Raises:
            ValidationError: If amount is not a positive integer, or the
                balance would go negative and overdraft is not allowed
            NotFoundError: If the account does not exist
            ConflictError: If the balance changed underneath the update
            StorageError: If the store fails; nothing is written
        """
        _require_positive(amount)
        with self.locks.hold(country_id):
            account = self._get_account(country_id)
            self._check_funds(account, amount)
            new_balance = account.balance - amount
            (record,) = self.db.apply_balance_updates(
                [
                    BalanceUpdate(
                        country_id=country_id,
                        expected_balance=account.balance,
                        new_balance=new_balance,
                        transaction_type=TransactionType.WITHDRAWAL,
                        amount=amount,
                        description=describe(TransactionType.WITHDRAWAL, amount),
                    )
                ]
            )
        logger.info(
            "Withdrew %d from %s (balance %d)",
            amount,
            country_id,
            new_balance,
            extra={"extra": {"country_id": country_id, "amount": amount, "balance": new_balance}},
        )
        return record

    def transfer(self, source_id: str, destination_id: str, amount: int) -> tuple[Transaction, Transaction]:
        """Move money between two accounts.

        Returns:
            ``(transfer_out, transfer_in)`` records for source and destination

        Raises:
            ValidationError: Non-positive amount, same account on both sides,
                or insufficient funds without overdraft
            NotFoundError: If either account does not exist
            ConflictError: If either balance changed underneath the update
            StorageError: If the store fails; nothing is written
        """
        _require_positive(amount)
        if source_id == destination_id:
            raise ValidationError("Cannot transfer to the same account")

        with self.locks.hold(source_id, destination_id):
            source = self._get_account(source_id)
            destination = self._get_account(destination_id)
            self._check_funds(source, amount)
            outgoing, incoming = self.db.apply_balance_updates(
                [
                    BalanceUpdate(
                        country_id=source_id,
                        expected_balance=source.balance,
                        new_balance=source.balance - amount,
                        transaction_type=TransactionType.TRANSFER_OUT,
                        amount=amount,
                        description=describe(TransactionType.TRANSFER_OUT, amount, destination_id),
                        counterparty_country_id=destination_id,
                    ),
                    BalanceUpdate(
                        country_id=destination_id,
                        expected_balance=destination.balance,
                        new_balance=destination.balance + amount,
                        transaction_type=TransactionType.TRANSFER_IN,
                        amount=amount,
                        description=describe(TransactionType.TRANSFER_IN, amount, source_id),
                        counterparty_country_id=source_id,
                    ),
                ]
            )
        logger.info(
            "Transferred %d from %s to %s",
            amount,
            source_id,
            destination_id,
            extra={
                "extra": {
                    "country_id": source_id,
                    "counterparty_country_id": destination_id,
                    "amount": amount,
                }
            },
        )
        return outgoing, incoming

    def hold(self, country_id: str, transaction_type: TransactionType, amount: int) -> Transaction:
        """Record a deposit or withdrawal as pending without moving money.

        The record's balances are projected from the current balance and are
        rewritten when the transaction is settled.

        Raises:
            ValidationError: If amount is not a positive integer, the type is
                a transfer, or a withdrawal exceeds the balance
            NotFoundError: If the account does not exist
        """
        transaction_type = TransactionType(transaction_type)
        _require_positive(amount)
        if transaction_type not in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL):
            raise ValidationError("Only deposits and withdrawals can be held as pending")

        with self.locks.hold(country_id):
            account = self._get_account(country_id)
            if transaction_type is TransactionType.WITHDRAWAL:
                self._check_funds(account, amount)
            record = self.db.create_transaction(
                transaction_id=str(uuid.uuid4()),
                country_id=country_id,
                transaction_type=transaction_type,
                amount=amount,
                balance_before=account.balance,
                balance_after=account.balance + transaction_type.sign * amount,
                description=describe(transaction_type, amount),
                status=TransactionStatus.PENDING,
            )
        logger.info(
            "Held pending %s of %d for %s",
            transaction_type.value,
            amount,
            country_id,
            extra={
                "extra": {
                    "country_id": country_id,
                    "amount": amount,
                    "transaction_id": record.transaction_id,
                }
            },
        )
        return record

    def settle(self, transaction_id: str, status: TransactionStatus) -> Transaction:
        """Complete or fail a pending transaction.

        Completing applies the amount to the account's current balance and
        marks the record completed in one store transaction. Failing only
        changes the status.

        Raises:
            NotFoundError: If the transaction or its account does not exist
            ValidationError: If the record is not pending, or a withdrawal
                exceeds the current balance
            ConflictError: If the balance changed underneath the update
        """
        status = TransactionStatus(status)
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        if status not in STATUS_TRANSITIONS[txn.status]:
            raise ValidationError(
                f"Cannot change transaction {transaction_id} from {txn.status.value} to {status.value}"
            )

        if status is TransactionStatus.FAILED:
            self.db.update_transaction_status(transaction_id, status)
            logger.info("Failed pending transaction %s", transaction_id)
            return self.db.get_transaction(transaction_id)

        if txn.transaction_type not in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL):
            raise ValidationError(f"Cannot settle a pending {txn.transaction_type.value}")
        with self.locks.hold(txn.country_id):
            account = self._get_account(txn.country_id)
            if txn.transaction_type is TransactionType.WITHDRAWAL:
                self._check_funds(account, txn.amount)
            new_balance = account.balance + txn.transaction_type.sign * txn.amount
            record = self.db.settle_transaction(
                transaction_id,
                BalanceUpdate(
                    country_id=txn.country_id,
                    expected_balance=account.balance,
                    new_balance=new_balance,
                    transaction_type=txn.transaction_type,
                    amount=txn.amount,
                    description=txn.description or describe(txn.transaction_type, txn.amount),
                ),
            )
        logger.info(
            "Completed pending %s %s (balance %d)",
            txn.transaction_type.value,
            transaction_id,
            new_balance,
            extra={"extra": {"country_id": txn.country_id, "amount": txn.amount, "balance": new_balance}},
        )
        return record
