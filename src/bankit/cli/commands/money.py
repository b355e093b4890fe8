"""Deposit, withdrawal and transfer commands.

Each command confirms the holder of the debited (or credited) account first:
the banking password typed twice and the account's email. Wrong passwords
count towards the lockout.
"""

import click

from bankit.cli.error_handling import handle_domain_error
from bankit.cli.services import balance_service, lockout_service
from bankit.domain.entities import TransactionType
from bankit.domain.errors import DomainError
from bankit.utils.amount_parser import parse_amount


def credential_options(func):
    """Add the email and password confirmation options to a command."""
    func = click.option(
        "--password-confirm",
        prompt="Confirm password",
        hide_input=True,
        help="Banking password again",
    )(func)
    func = click.option(
        "--password", prompt=True, hide_input=True, help="Banking password of the account"
    )(func)
    func = click.option("--email", prompt=True, help="Email registered to the account")(func)
    return func


pending_option = click.option(
    "--pending",
    is_flag=True,
    help="Only record the transaction as pending; settle it with 'transaction set-status'",
)


def _parse_amount_or_exit(ctx: click.Context, amount: str) -> int:
    try:
        return parse_amount(amount)
    except ValueError as e:
        handle_domain_error(ctx, e)


def _authorize_or_exit(
    ctx: click.Context, country_id: str, email: str, password: str, password_confirm: str
) -> None:
    try:
        lockout_service(ctx).authorize(country_id, password, password_confirm, email)
    except DomainError as e:
        handle_domain_error(ctx, e)


def _hold_or_exit(ctx: click.Context, country_id: str, transaction_type: TransactionType, value: int):
    try:
        txn = balance_service(ctx).hold(country_id, transaction_type, value)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Pending {transaction_type.value} {txn.transaction_id} of {txn.amount:,} for {country_id}")


@click.command("deposit")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.argument("amount", metavar="AMOUNT")
@credential_options
@pending_option
@click.pass_context
def deposit(ctx, country_id: str, amount: str, email: str, password: str, password_confirm: str, pending: bool):
    """Deposit AMOUNT into an account."""
    value = _parse_amount_or_exit(ctx, amount)
    _authorize_or_exit(ctx, country_id, email, password, password_confirm)
    if pending:
        _hold_or_exit(ctx, country_id, TransactionType.DEPOSIT, value)
        return
    try:
        txn = balance_service(ctx).deposit(country_id, value)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deposited {txn.amount:,} into {country_id}. New balance: {txn.balance_after:,}")


@click.command("withdraw")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.argument("amount", metavar="AMOUNT")
@credential_options
@pending_option
@click.pass_context
def withdraw(ctx, country_id: str, amount: str, email: str, password: str, password_confirm: str, pending: bool):
    """Withdraw AMOUNT from an account."""
    value = _parse_amount_or_exit(ctx, amount)
    _authorize_or_exit(ctx, country_id, email, password, password_confirm)
    if pending:
        _hold_or_exit(ctx, country_id, TransactionType.WITHDRAWAL, value)
        return
    try:
        txn = balance_service(ctx).withdraw(country_id, value)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Withdrew {txn.amount:,} from {country_id}. New balance: {txn.balance_after:,}")


@click.command("transfer")
@click.argument("source", metavar="FROM_COUNTRY_ID")
@click.argument("destination", metavar="TO_COUNTRY_ID")
@click.argument("amount", metavar="AMOUNT")
@credential_options
@click.pass_context
def transfer(ctx, source: str, destination: str, amount: str, email: str, password: str, password_confirm: str):
    """Transfer AMOUNT between two accounts (credentials of the sender)."""
    value = _parse_amount_or_exit(ctx, amount)
    _authorize_or_exit(ctx, source, email, password, password_confirm)
    try:
        outgoing, incoming = balance_service(ctx).transfer(source, destination, value)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Transferred {outgoing.amount:,} from {source} to {destination}. "
        f"New balances: {source} {outgoing.balance_after:,}, {destination} {incoming.balance_after:,}"
    )


def register_commands(cli):
    """Register money movement commands with main CLI."""
    cli.add_command(deposit)
    cli.add_command(withdraw)
    cli.add_command(transfer)
