"""Main CLI entry point."""

import click

from bankit.config import BankitConfig, ConfigurationError
from bankit.database.factories import create_sqlite_database
from bankit.domain.locks import AccountLockRegistry
from bankit.logging import setup_logging

# Import and register all commands at module level
from bankit.cli.commands import account, money, security, history


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BANKIT_DB_PATH environment variable)",
    envvar="BANKIT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level (overrides BANKIT_LOG_LEVEL environment variable)",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None):
    """Bankit - toy banking ledger.

    Open accounts, move money in and out, lock accounts after repeated wrong
    passwords, and report transaction history.
    """
    ctx.ensure_object(dict)

    try:
        config = BankitConfig.from_env()
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    setup_logging(level=log_level or config.log_level, format_type=config.log_format)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path or config.database_path)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["config"] = config
        ctx.obj["locks"] = AccountLockRegistry()


# Register all commands
account.register_commands(cli)
money.register_commands(cli)
security.register_commands(cli)
history.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
