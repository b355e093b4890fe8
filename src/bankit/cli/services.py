"""Build domain services from the CLI context."""

import click

from bankit.domain.account import AccountService
from bankit.domain.balance import BalanceService
from bankit.domain.lockout import LockoutService
from bankit.domain.transaction import TransactionService


def account_service(ctx: click.Context) -> AccountService:
    return AccountService(ctx.obj["db"])


def lockout_service(ctx: click.Context) -> LockoutService:
    config = ctx.obj["config"]
    return LockoutService(
        ctx.obj["db"], locks=ctx.obj["locks"], max_failed_attempts=config.max_failed_attempts
    )


def balance_service(ctx: click.Context) -> BalanceService:
    config = ctx.obj["config"]
    return BalanceService(ctx.obj["db"], locks=ctx.obj["locks"], allow_overdraft=config.allow_overdraft)


def transaction_service(ctx: click.Context) -> TransactionService:
    config = ctx.obj["config"]
    return TransactionService(
        ctx.obj["db"],
        default_page_size=config.default_page_size,
        max_page_size=config.max_page_size,
    )
