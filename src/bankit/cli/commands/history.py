"""Transaction history and reporting commands."""

import click

from bankit.cli.date_filters import period_option, resolve_cli_date_range
from bankit.cli.error_handling import handle_domain_error
from bankit.cli.formatting import TRANSACTION_HEADER, money, timestamp, transaction_line, type_name
from bankit.cli.services import balance_service, transaction_service
from bankit.domain.entities import TransactionFilters, TransactionStatus, TransactionType
from bankit.domain.errors import DomainError

TYPE_CHOICES = [t.value for t in TransactionType]


@click.command("history")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_option
@click.option("--type", "txn_type", type=click.Choice(TYPE_CHOICES), help="Only this transaction type")
@click.option("--min-amount", type=click.IntRange(min=0), help="Minimum amount")
@click.option("--max-amount", type=click.IntRange(min=0), help="Maximum amount")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option("--page-size", type=int, help="Transactions per page")
@click.pass_context
def history(
    ctx,
    country_id: str,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    txn_type: str | None,
    min_amount: int | None,
    max_amount: int | None,
    page: int,
    page_size: int | None,
):
    """Show an account's transaction history, most recent first.

    Examples:
        bankit history 3201010101
        bankit history 3201010101 --period this-month --type deposit
        bankit history 3201010101 --start-date 2024-01-01 --page 2 --page-size 20
    """
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)
    filters = TransactionFilters(
        start_date=start,
        end_date=end,
        transaction_type=TransactionType(txn_type) if txn_type else None,
        min_amount=min_amount,
        max_amount=max_amount,
    )

    try:
        result = transaction_service(ctx).history(
            country_id, filters=filters, page=page, page_size=page_size
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not result.transactions:
        click.echo("No transactions found.")
        return

    click.echo(
        f"\nPage {result.page} of {result.total_pages} "
        f"({result.total_transactions} transaction(s)):"
    )
    click.echo(TRANSACTION_HEADER)
    click.echo("-" * len(TRANSACTION_HEADER))
    for txn in result.transactions:
        click.echo(transaction_line(txn))


@click.command("recent")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.pass_context
def recent(ctx, country_id: str):
    """Show the five most recent transactions."""
    try:
        transactions = transaction_service(ctx).recent(country_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(TRANSACTION_HEADER)
    click.echo("-" * len(TRANSACTION_HEADER))
    for txn in transactions:
        click.echo(transaction_line(txn))


@click.command("summary")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative)")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
@period_option
@click.pass_context
def summary(ctx, country_id: str, start_date: str | None, end_date: str | None, period: str | None):
    """Show transaction counts and totals per type."""
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period=period)

    try:
        result = transaction_service(ctx).summary(country_id, start_date=start, end_date=end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if start or end:
        start_str = start.isoformat() if start else "beginning"
        end_str = end.isoformat() if end else "today"
        click.echo(f"\nSummary for {country_id} ({start_str} to {end_str}):")
    else:
        click.echo(f"\nSummary for {country_id}:")
    click.echo("-" * 44)
    click.echo(f"{'Type':<14} {'Count':>8} {'Amount':>20}")
    for txn_type in TransactionType:
        click.echo(
            f"{txn_type.value:<14} {result.count(txn_type):>8} {money(result.total(txn_type)):>20}"
        )
    click.echo("-" * 44)
    click.echo(f"{'Total':<14} {result.total_transactions:>8}")


@click.group("transaction")
def transaction_group():
    """Inspect individual transactions."""
    pass


@transaction_group.command("show")
@click.argument("transaction_id", metavar="TRANSACTION_ID")
@click.pass_context
def show_transaction(ctx, transaction_id: str):
    """Show a transaction by its ID."""
    try:
        txn = transaction_service(ctx).get_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Transaction:  {txn.transaction_id}")
    click.echo(f"Account:      {txn.country_id}")
    click.echo(f"Type:         {type_name(txn.transaction_type)}")
    click.echo(f"Amount:       {money(txn.amount)}")
    click.echo(f"Balance:      {money(txn.balance_before)} -> {money(txn.balance_after)}")
    if txn.counterparty_country_id:
        click.echo(f"Counterparty: {txn.counterparty_country_id}")
    if txn.description:
        click.echo(f"Description:  {txn.description}")
    click.echo(f"Status:       {txn.status.value}")
    click.echo(f"Created:      {timestamp(txn.created_at)}")


@transaction_group.command("set-status")
@click.argument("transaction_id", metavar="TRANSACTION_ID")
@click.argument(
    "status",
    type=click.Choice([TransactionStatus.COMPLETED.value, TransactionStatus.FAILED.value]),
)
@click.pass_context
def set_status(ctx, transaction_id: str, status: str):
    """Complete or fail a pending transaction.

    Completing a pending deposit or withdrawal applies it to the balance.
    """
    try:
        txn = balance_service(ctx).settle(transaction_id, TransactionStatus(status))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Transaction {txn.transaction_id} is now {txn.status.value}")


def register_commands(cli):
    """Register history commands with main CLI."""
    cli.add_command(history)
    cli.add_command(recent)
    cli.add_command(summary)
    cli.add_command(transaction_group, name="transaction")
