"""Account management commands."""

import click

from bankit.cli.error_handling import handle_domain_error
from bankit.cli.formatting import account_details, account_line
from bankit.cli.services import account_service
from bankit.domain.entities import TIER_MINIMUM_DEPOSIT
from bankit.domain.errors import DomainError
from bankit.utils.amount_parser import parse_amount
from bankit.utils.date_parser import parse_date


@click.group()
def account_group():
    """Manage bank accounts."""
    pass


@account_group.command("open")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.option("--name", required=True, help="Account holder name")
@click.option("--email", required=True, help="Account holder email")
@click.option("--birth-date", required=True, help="Birth date (YYYY-MM-DD)")
@click.option(
    "--card",
    "card",
    required=True,
    help="Debit card tier: " + ", ".join(
        f"{tier.value} (min {minimum:,})" for tier, minimum in TIER_MINIMUM_DEPOSIT.items()
    ),
)
@click.option("--deposit", required=True, help="Initial deposit")
@click.password_option(help="Banking password")
@click.pass_context
def open_account(
    ctx, country_id: str, name: str, email: str, birth_date: str, card: str, deposit: str, password: str
):
    """Open a new account.

    The initial deposit must meet the card tier's minimum.

    Examples:
        bankit account open 3201010101 --name "Budi" --email budi@example.com \\
            --birth-date 1990-01-01 --card bronze --deposit 50000
    """
    try:
        born = parse_date(birth_date)
        amount = parse_amount(deposit)
    except ValueError as e:
        handle_domain_error(ctx, e)

    service = account_service(ctx)
    try:
        account = service.open_account(
            country_id=country_id,
            name=name,
            email=email,
            birth_date=born,
            debit_card_type=card,
            initial_deposit=amount,
            password=password,
            password_confirm=password,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Opened {account.debit_card_type.value} account {account.country_id} "
        f"for {account.name} with balance {account.balance:,}"
    )


@account_group.command("show")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.pass_context
def show_account(ctx, country_id: str):
    """Show account details including lock status."""
    try:
        account = account_service(ctx).get_account(country_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    for line in account_details(account):
        click.echo(line)


@account_group.command("list")
@click.option("--min-balance", type=click.IntRange(min=0), help="Only accounts with at least this balance")
@click.option("--max-balance", type=click.IntRange(min=0), help="Only accounts with at most this balance")
@click.pass_context
def list_accounts(ctx, min_balance: int | None, max_balance: int | None):
    """List accounts, optionally within a balance range."""
    try:
        accounts = account_service(ctx).list_accounts(balance_min=min_balance, balance_max=max_balance)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo(f"\n{len(accounts)} account(s):")
    click.echo("-" * 72)
    for acc in accounts:
        click.echo(account_line(acc))


@account_group.command("close")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def close_account(ctx, country_id: str, yes: bool):
    """Close (delete) an account. Its transaction history is kept."""
    service = account_service(ctx)
    try:
        account = service.get_account(country_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Are you sure you want to close account {account.country_id} ({account.name})?"
    ):
        click.echo("Closing cancelled.")
        return

    try:
        service.close_account(country_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Closed account {country_id}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
