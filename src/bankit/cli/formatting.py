"""Plain-text rendering of domain entities for the CLI."""

from datetime import datetime
from typing import Optional

from bankit.domain.entities import Account, AccountStatus, Transaction, TransactionType


def money(amount: int) -> str:
    return f"{amount:,}"


def timestamp(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else "-"


def type_name(transaction_type: TransactionType | str) -> str:
    return getattr(transaction_type, "value", transaction_type)


def account_line(account: Account) -> str:
    lock = " [LOCKED]" if account.is_locked else ""
    return (
        f"{account.country_id:<16} | {account.name:<20} | {account.debit_card_type.value:<7} | "
        f"{money(account.balance):>14}{lock}"
    )


def account_details(account: Account) -> list[str]:
    return [
        f"Country ID:  {account.country_id}",
        f"Name:        {account.name}",
        f"Email:       {account.email}",
        f"Birth date:  {account.birth_date.isoformat()}",
        f"Debit card:  {account.debit_card_type.value}",
        f"Balance:     {money(account.balance)}",
        *status_lines(AccountStatus.from_account(account)),
    ]


def status_lines(status: AccountStatus) -> list[str]:
    lines = [f"State:       {status.state.value}"]
    if status.is_locked:
        lines.append(f"Reason:      {status.locked_reason}")
        lines.append(f"Locked at:   {timestamp(status.locked_at)}")
    lines.append(f"Failed logins: {status.failed_login_attempts}")
    if status.last_failed_login:
        lines.append(f"Last failure:  {timestamp(status.last_failed_login)}")
    return lines


TRANSACTION_HEADER = (
    f"{'Created':<19}  {'Type':<12} {'Amount':>12} {'Before':>14} {'After':>14}  {'Status':<9}  Transaction ID"
)


def transaction_line(txn: Transaction) -> str:
    return (
        f"{timestamp(txn.created_at):<19}  {type_name(txn.transaction_type):<12} "
        f"{money(txn.amount):>12} {money(txn.balance_before):>14} {money(txn.balance_after):>14}  "
        f"{txn.status.value:<9}  {txn.transaction_id}"
    )
