"""Configuration management for bankit."""

import os
from dataclasses import dataclass
from typing import Optional


class ConfigurationError(ValueError):
    """Raised when configuration is invalid."""


LOG_FORMATS = ("standard", "json")


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'")
    if value < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got '{raw}'")


@dataclass(frozen=True)
class BankitConfig:
    """Main configuration for bankit."""

    database_path: Optional[str] = None
    log_level: str = "WARNING"
    log_format: str = "standard"
    max_failed_attempts: int = 5
    allow_overdraft: bool = False
    default_page_size: int = 10
    max_page_size: int = 100

    def __post_init__(self) -> None:
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"log_format must be one of {', '.join(LOG_FORMATS)}, got '{self.log_format}'"
            )
        if self.max_failed_attempts < 1:
            raise ConfigurationError("max_failed_attempts must be at least 1")
        if not 1 <= self.default_page_size <= self.max_page_size:
            raise ConfigurationError(
                "default_page_size must be between 1 and max_page_size"
            )

    @classmethod
    def from_env(cls) -> "BankitConfig":
        """Create config from environment variables."""
        return cls(
            database_path=os.getenv("BANKIT_DB_PATH") or None,
            log_level=os.getenv("BANKIT_LOG_LEVEL", "WARNING"),
            log_format=os.getenv("BANKIT_LOG_FORMAT", "standard").lower(),
            max_failed_attempts=_env_int("BANKIT_MAX_FAILED_ATTEMPTS", 5),
            allow_overdraft=_env_bool("BANKIT_ALLOW_OVERDRAFT", False),
            default_page_size=_env_int("BANKIT_PAGE_SIZE", 10),
            max_page_size=_env_int("BANKIT_MAX_PAGE_SIZE", 100),
        )
