"""Account lockout state machine.

An account is either UNLOCKED or LOCKED. Wrong passwords are counted; the
attempt that reaches ``max_failed_attempts`` locks the account with reason
``"security"``. While locked, passwords are not evaluated at all. A correct
password resets the counter, and ``unlock`` always returns the account to
UNLOCKED with a zero counter.
"""

from datetime import datetime, UTC
from typing import Optional

from bankit.database.base import Database
from bankit.domain.entities import Account, AccountStatus, CredentialCheck
from bankit.domain.errors import NotFoundError, ValidationError, account_not_found
from bankit.domain.locks import AccountLockRegistry
from bankit.logging import get_logger
from bankit.utils.password import password_matches

logger = get_logger(__name__)

MAX_FAILED_ATTEMPTS = 5
SECURITY_LOCK_REASON = "security"


class LockoutService:
    """Service for credential checks and account lock state."""

    def __init__(
        self,
        db: Database,
        locks: Optional[AccountLockRegistry] = None,
        max_failed_attempts: int = MAX_FAILED_ATTEMPTS,
    ):
        """Initialize lockout service.

        Args:
            db: Database instance
            locks: Lock registry shared with other services; a private one
                is created if omitted
            max_failed_attempts: Failed attempts that trigger a lock
        """
        self.db = db
        self.locks = locks or AccountLockRegistry()
        self.max_failed_attempts = max_failed_attempts

    def _get_account(self, country_id: str) -> Account:
        account = self.db.get_account(country_id)
        if account is None:
            raise NotFoundError(account_not_found(country_id))
        return account

    def verify_credential(self, country_id: str, password: str) -> CredentialCheck:
        """Check a banking password and update the lockout state.

        Returns:
            CredentialCheck describing success, lock or remaining attempts

        Raises:
            NotFoundError: If the account does not exist
        """
        with self.locks.hold(country_id):
            account = self._get_account(country_id)

            if account.is_locked:
                return CredentialCheck(success=False, locked=True, message="Account is locked")

            if password_matches(password, account.password_hash):
                if account.failed_login_attempts or account.last_failed_login is not None:
                    self.db.reset_failed_logins(country_id)
                return CredentialCheck(success=True, message="Password correct")

            now = datetime.now(UTC)
            attempts = self.db.record_failed_login(
                country_id,
                now,
                lock_after=self.max_failed_attempts,
                lock_reason=SECURITY_LOCK_REASON,
            )
            logger.warning("Failed password attempt %d for account %s", attempts, country_id)

            if attempts >= self.max_failed_attempts:
                logger.warning("Locked account %s after %d failed attempts", country_id, attempts)
                return CredentialCheck(
                    success=False,
                    locked=True,
                    message="Account locked due to multiple failed login attempts",
                )

            remaining = self.max_failed_attempts - attempts
            return CredentialCheck(
                success=False,
                remaining_attempts=remaining,
                message=f"Wrong password. {remaining} attempts remaining.",
            )

    def authorize(
        self, country_id: str, password: str, password_confirm: str, email: str
    ) -> None:
        """Confirm the holder of an account before a balance change.

        The password must be typed twice and must verify; the email must be
        registered and belong to this account. A wrong password counts
        toward the lockout like any other failed attempt.

        Raises:
            ValidationError: If the confirmation or email does not match
            AuthenticationError: If the password is wrong
            AccountLockedError: If the account is locked
            NotFoundError: If the account does not exist
        """
        if password != password_confirm:
            raise ValidationError("Password confirmation mismatched")
        self.verify_credential(country_id, password).raise_for_failure()

        owner = self.db.get_account_by_email(email)
        if owner is None:
            raise ValidationError("Email is not registered")
        if owner.country_id != country_id:
            raise ValidationError("Email confirmation mismatched")

    def lock(self, country_id: str, reason: str) -> AccountStatus:
        """Force an account into the locked state.

        Locking an already locked account records the new reason and time.

        Raises:
            ValidationError: If reason is empty
            NotFoundError: If the account does not exist
        """
        reason = reason.strip()
        if not reason:
            raise ValidationError("Lock reason must not be empty")
        with self.locks.hold(country_id):
            self._get_account(country_id)
            self.db.set_lock(country_id, reason, datetime.now(UTC))
            logger.warning("Locked account %s: %s", country_id, reason)
            return self.status(country_id)

    def unlock(self, country_id: str) -> AccountStatus:
        """Return an account to the unlocked state with a zero counter.

        Raises:
            NotFoundError: If the account does not exist
        """
        with self.locks.hold(country_id):
            self._get_account(country_id)
            self.db.clear_lock(country_id)
            logger.info("Unlocked account %s", country_id)
            return self.status(country_id)

    def status(self, country_id: str) -> AccountStatus:
        """Read the lockout state without side effects.

        Raises:
            NotFoundError: If the account does not exist
        """
        return AccountStatus.from_account(self._get_account(country_id))
