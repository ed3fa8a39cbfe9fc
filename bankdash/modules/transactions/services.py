from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
from decimal import Decimal, InvalidOperation
from typing import Tuple, Union
import logging

from bankdash.core.exceptions import (
    InsufficientFundsError, NotFoundError, StoreError, ValidationError
)
from bankdash.modules.accounts.models import Account
from bankdash.modules.transactions.models import Transaction, TransactionType
from bankdash.modules.transactions.schemas import TransactionResult

logger = logging.getLogger(__name__)


class TransactionService:
    """Applies deposits, withdrawals and transfers to a single account"""

    def __init__(self, db: AsyncSession):
        self.db = db

    @staticmethod
    def _validate_input(
        transaction_type: Union[TransactionType, str, None],
        amount,
        description: Union[str, None]
    ) -> Tuple[TransactionType, Decimal, str]:
        try:
            txn_type = TransactionType(transaction_type)
        except ValueError:
            raise ValidationError(
                "Transaction type must be one of DEPOSIT, WITHDRAWAL, TRANSFER."
            )

        try:
            value = Decimal(str(amount)) if amount is not None else None
        except InvalidOperation:
            value = None
        if value is None or not value.is_finite() or value <= 0:
            raise ValidationError("Amount must be greater than zero.")

        if not isinstance(description, str) or not description.strip():
            raise ValidationError("Description is required.")

        return txn_type, value, description.strip()

    @staticmethod
    def compute_new_balance(balance: Decimal, transaction_type: TransactionType, amount: Decimal) -> Decimal:
        if transaction_type == TransactionType.DEPOSIT:
            return balance + amount
        return balance - amount

    async def _get_account(self, account_id: str) -> Account:
        try:
            result = await self.db.execute(select(Account).where(Account.id == account_id))
        except SQLAlchemyError as e:
            logger.error(f"Error fetching account {account_id}: {e}")
            raise StoreError("Failed to fetch account details.") from e

        account = result.scalar_one_or_none()
        if not account:
            raise NotFoundError("Account not found.")
        return account

    async def create_transaction(
        self,
        account_id: str,
        transaction_type: Union[TransactionType, str],
        amount,
        description: str
    ) -> TransactionResult:
        """
        Record a transaction and move the account balance to match.

        The new row and the balance update are committed together; if
        either write fails the session is rolled back and neither lands.
        """
        txn_type, value, description = self._validate_input(transaction_type, amount, description)

        account = await self._get_account(account_id)
        new_balance = self.compute_new_balance(Decimal(account.balance), txn_type, value)

        if new_balance < 0:
            logger.warning(
                f"Rejected {txn_type.value} of {value} on account {account_id}: insufficient funds"
            )
            raise InsufficientFundsError("Insufficient funds for this transaction.")

        try:
            db_txn = Transaction(
                type=txn_type,
                amount=value,
                description=description,
                account_id=account.id
            )
            self.db.add(db_txn)
            await self.db.flush()

            account.balance = new_balance
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Failed to apply {txn_type.value} to account {account_id}")
            raise StoreError("Failed to create transaction.") from e

        logger.info(
            f"Applied {txn_type.value} of {value} to account {account_id}; new balance {new_balance}"
        )

        return TransactionResult(
            transaction_type=txn_type,
            amount=value,
            new_balance=new_balance
        )
