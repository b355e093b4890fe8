"""Account domain service."""

from datetime import date
from typing import Optional

from bankit.database.base import Database
from bankit.domain.entities import Account, CardTier, TIER_MINIMUM_DEPOSIT
from bankit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    country_id_already_registered,
    email_already_registered,
    minimum_deposit_not_met,
)
from bankit.logging import get_logger
from bankit.utils.password import hash_password

logger = get_logger(__name__)


class AccountService:
    """Service for opening, looking up and closing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def open_account(
        self,
        country_id: str,
        name: str,
        email: str,
        birth_date: date,
        debit_card_type: str,
        initial_deposit: int,
        password: str,
        password_confirm: str,
    ) -> Account:
        """Open a new account.

        Every precondition is checked before anything is written.

        Args:
            country_id: External identifier, unique across accounts
            name: Account holder name
            email: Email, unique across accounts
            birth_date: Holder birth date
            debit_card_type: Tier name (bronze, express or gold; any case)
            initial_deposit: Opening balance
            password: Banking password
            password_confirm: Must equal ``password``

        Returns:
            The created account

        Raises:
            ValidationError: Password mismatch, unknown tier or deposit below
                the tier minimum
            ConflictError: Email or country ID already registered
        """
        if password != password_confirm:
            raise ValidationError("Password confirmation mismatched")

        if self.email_is_registered(email):
            raise ConflictError(email_already_registered(email))

        if self.country_id_is_registered(country_id):
            raise ConflictError(country_id_already_registered(country_id))

        try:
            tier = CardTier.parse(debit_card_type)
        except ValueError:
            raise ValidationError("Only bronze, express, and gold debit card types exist")

        minimum = TIER_MINIMUM_DEPOSIT[tier]
        if initial_deposit < minimum:
            raise ValidationError(minimum_deposit_not_met(tier.value, minimum))

        account = self.db.create_account(
            country_id=country_id,
            name=name,
            email=email,
            birth_date=birth_date,
            debit_card_type=tier,
            balance=initial_deposit,
            password_hash=hash_password(password),
        )
        logger.info("Opened %s account %s", tier.value, country_id)
        return account

    def get_account(self, country_id: str) -> Account:
        """Get account by country ID.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = self.db.get_account(country_id)
        if account is None:
            raise NotFoundError(account_not_found(country_id))
        return account

    def list_accounts(
        self, balance_min: Optional[int] = None, balance_max: Optional[int] = None
    ) -> list[Account]:
        """List accounts, optionally within an inclusive balance range.

        Raises:
            ValidationError: If a bound is negative or min exceeds max
        """
        if balance_min is not None and balance_min < 0:
            raise ValidationError("Minimum balance must not be negative")
        if balance_max is not None and balance_max < 0:
            raise ValidationError("Maximum balance must not be negative")
        if balance_min is not None and balance_max is not None and balance_min > balance_max:
            raise ValidationError("Minimum balance must not exceed maximum balance")
        return self.db.list_accounts(balance_min=balance_min, balance_max=balance_max)

    def close_account(self, country_id: str) -> None:
        """Delete an account. Its transaction history is kept.

        Raises:
            NotFoundError: If the account does not exist
        """
        self.get_account(country_id)
        self.db.delete_account(country_id)
        logger.info("Closed account %s", country_id)

    def email_is_registered(self, email: str) -> bool:
        return self.db.get_account_by_email(email) is not None

    def country_id_is_registered(self, country_id: str) -> bool:
        return self.db.get_account(country_id) is not None
