"""Account lock commands."""

import click

from bankit.cli.error_handling import handle_domain_error
from bankit.cli.formatting import status_lines
from bankit.cli.services import lockout_service
from bankit.domain.errors import DomainError


@click.group()
def security_group():
    """Check passwords and manage account locks."""
    pass


@security_group.command("check")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.option("--password", prompt=True, hide_input=True, help="Banking password")
@click.pass_context
def check_password(ctx, country_id: str, password: str):
    """Check a banking password. Wrong passwords count towards the lock."""
    try:
        result = lockout_service(ctx).verify_credential(country_id, password)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if result.success:
        click.echo(result.message)
        return
    click.echo(f"Error: {result.message}", err=True)
    ctx.exit(1)


@security_group.command("lock")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.option("--reason", required=True, help="Why the account is locked")
@click.pass_context
def lock_account(ctx, country_id: str, reason: str):
    """Lock an account."""
    try:
        lockout_service(ctx).lock(country_id, reason)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Locked account {country_id}: {reason}")


@security_group.command("unlock")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.pass_context
def unlock_account(ctx, country_id: str):
    """Unlock an account and reset its failed login counter."""
    try:
        lockout_service(ctx).unlock(country_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Unlocked account {country_id}")


@security_group.command("status")
@click.argument("country_id", metavar="COUNTRY_ID")
@click.pass_context
def account_status(ctx, country_id: str):
    """Show lock state and failed login count."""
    try:
        status = lockout_service(ctx).status(country_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Account:     {status.country_id}")
    for line in status_lines(status):
        click.echo(line)


def register_commands(cli):
    """Register security commands with main CLI."""
    cli.add_command(security_group, name="security")
