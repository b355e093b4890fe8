"""Shared pytest fixtures for bankit tests."""

import logging
import os
import tempfile
import time
from datetime import date

import pytest

from bankit.database.factories import create_sqlite_database
from bankit.domain.account import AccountService
from bankit.domain.balance import BalanceService
from bankit.domain.lockout import LockoutService
from bankit.domain.locks import AccountLockRegistry
from bankit.domain.transaction import TransactionService

SAMPLE_PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def restore_logging():
    """Restore root logging handlers after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def locks():
    return AccountLockRegistry()


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def lockout_service(temp_db, locks):
    """Create a LockoutService with a temporary database."""
    return LockoutService(temp_db, locks=locks)


@pytest.fixture
def balance_service(temp_db, locks):
    """Create a BalanceService with a temporary database."""
    return BalanceService(temp_db, locks=locks)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def password():
    """Banking password used by every sample account."""
    return SAMPLE_PASSWORD


@pytest.fixture
def make_account(account_service):
    """Return a helper that opens an account with the sample password."""

    def _open(country_id, email, card="bronze", deposit=100_000):
        return account_service.open_account(
            country_id=country_id,
            name=f"Holder {country_id}",
            email=email,
            birth_date=date(1990, 1, 1),
            debit_card_type=card,
            initial_deposit=deposit,
            password=SAMPLE_PASSWORD,
            password_confirm=SAMPLE_PASSWORD,
        )

    return _open


@pytest.fixture
def sample_account(make_account):
    """Open a bronze account with a balance of 100,000."""
    return make_account("3201010101", "budi@example.com")


@pytest.fixture
def second_account(make_account):
    """Open a gold account with a balance of 250,000."""
    return make_account(
        "3202020202", "siti@example.com", card="gold", deposit=250_000
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def far_east_timezone(monkeypatch):
    """Run the test with the process clock at UTC+14."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "Etc/GMT-14")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
