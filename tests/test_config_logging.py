"""Tests for configuration loading and logging setup."""

import json
import logging

import pytest

from bankit.config import BankitConfig, ConfigurationError
from bankit.logging import JsonFormatter, get_logger, setup_logging

ENV_VARS = (
    "BANKIT_DB_PATH",
    "BANKIT_LOG_LEVEL",
    "BANKIT_LOG_FORMAT",
    "BANKIT_MAX_FAILED_ATTEMPTS",
    "BANKIT_ALLOW_OVERDRAFT",
    "BANKIT_PAGE_SIZE",
    "BANKIT_MAX_PAGE_SIZE",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestBankitConfig:
    """Tests for BankitConfig."""

    def test_default_values(self, clean_env) -> None:
        config = BankitConfig.from_env()

        assert config.database_path is None
        assert config.log_level == "WARNING"
        assert config.log_format == "standard"
        assert config.max_failed_attempts == 5
        assert config.allow_overdraft is False
        assert config.default_page_size == 10
        assert config.max_page_size == 100

    def test_from_env(self, clean_env) -> None:
        clean_env.setenv("BANKIT_DB_PATH", "/tmp/bank.db")
        clean_env.setenv("BANKIT_LOG_FORMAT", "JSON")
        clean_env.setenv("BANKIT_MAX_FAILED_ATTEMPTS", "3")
        clean_env.setenv("BANKIT_ALLOW_OVERDRAFT", "yes")
        clean_env.setenv("BANKIT_PAGE_SIZE", "25")

        config = BankitConfig.from_env()

        assert config.database_path == "/tmp/bank.db"
        assert config.log_format == "json"
        assert config.max_failed_attempts == 3
        assert config.allow_overdraft is True
        assert config.default_page_size == 25

    @pytest.mark.parametrize(
        "name,value",
        [
            ("BANKIT_MAX_FAILED_ATTEMPTS", "many"),
            ("BANKIT_MAX_FAILED_ATTEMPTS", "0"),
            ("BANKIT_ALLOW_OVERDRAFT", "maybe"),
            ("BANKIT_LOG_FORMAT", "xml"),
            ("BANKIT_PAGE_SIZE", "500"),
        ],
    )
    def test_invalid_values(self, clean_env, name, value) -> None:
        clean_env.setenv(name, value)
        with pytest.raises(ConfigurationError):
            BankitConfig.from_env()

    def test_frozen(self) -> None:
        config = BankitConfig()
        with pytest.raises(Exception):
            config.max_failed_attempts = 10


class TestLogging:
    """Tests for logging helpers."""

    def test_setup_logging_sets_level(self) -> None:
        setup_logging(level="DEBUG")
        assert logging.getLogger("bankit").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy").level == logging.WARNING

        setup_logging(level="WARNING")
        assert len(logging.getLogger().handlers) == 1

    def test_setup_logging_json(self) -> None:
        setup_logging(level="INFO", format_type="json")
        handler = logging.getLogger().handlers[0]
        assert isinstance(handler.formatter, JsonFormatter)
        setup_logging()

    def test_json_formatter(self) -> None:
        record = logging.LogRecord(
            name="bankit.domain.balance",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Deposited %d into %s",
            args=(1000, "3201010101"),
            exc_info=None,
        )

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "bankit.domain.balance"
        assert data["message"] == "Deposited 1000 into 3201010101"
        assert "timestamp" in data

    def test_json_formatter_merges_extra_fields(self, caplog) -> None:
        logger = get_logger("bankit.domain.balance")
        with caplog.at_level(logging.INFO, logger="bankit.domain.balance"):
            logger.info("Deposited", extra={"extra": {"country_id": "3201010101", "amount": 1000}})

        data = json.loads(JsonFormatter().format(caplog.records[-1]))

        assert data["message"] == "Deposited"
        assert data["country_id"] == "3201010101"
        assert data["amount"] == 1000

    def test_get_logger(self) -> None:
        assert get_logger("bankit.test").name == "bankit.test"
