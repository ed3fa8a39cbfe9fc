from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select, func
from datetime import datetime, timezone
from decimal import Decimal
from typing import List
import logging

from bankdash.core.exceptions import NotFoundError, StoreError, ValidationError
from bankdash.modules.accounts.models import Account, AccountType
from bankdash.modules.transactions.models import Transaction
from bankdash.modules.transactions import schemas as txn_schemas

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10

SAMPLE_ACCOUNTS = [
    {
        "id": "1",
        "account_number": "1001",
        "account_type": AccountType.CHECKING,
        "balance": Decimal("5000.00"),
        "account_holder": "John Doe",
    },
    {
        "id": "2",
        "account_number": "1002",
        "account_type": AccountType.SAVINGS,
        "balance": Decimal("10000.00"),
        "account_holder": "Jane Smith",
    },
]


class QueryService:
    """Read-side operations over accounts and their transaction history"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_accounts(self) -> List[Account]:
        """All accounts in store order"""
        try:
            result = await self.db.execute(select(Account))
        except SQLAlchemyError as e:
            logger.error(f"Failed to list accounts: {e}")
            raise StoreError("Failed to fetch accounts.") from e
        return list(result.scalars().all())

    async def get_account(self, account_id: str) -> Account:
        """Get specific account"""
        try:
            result = await self.db.execute(select(Account).where(Account.id == account_id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch account {account_id}: {e}")
            raise StoreError("Failed to fetch account details.") from e

        account = result.scalar_one_or_none()
        if not account:
            raise NotFoundError("Account not found")

        return account

    async def list_transactions(
        self,
        account_id: str,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE
    ) -> txn_schemas.TransactionPage:
        """
        One page of an account's transactions, newest first.

        The account itself is not looked up: an unknown id yields an
        empty page with zero totals.
        """
        if page < 1 or limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(
                "Invalid pagination parameters. Page must be >= 1, "
                f"limit must be between 1 and {MAX_PAGE_SIZE}."
            )

        try:
            count_result = await self.db.execute(
                select(func.count(Transaction.id)).where(Transaction.account_id == account_id)
            )
            total = count_result.scalar() or 0

            # Pages past the end are empty without a query, so the
            # offset handed to the driver is always below the row count
            offset = (page - 1) * limit
            transactions = []
            if offset < total:
                query = (
                    select(Transaction)
                    .where(Transaction.account_id == account_id)
                    .order_by(Transaction.date.desc(), Transaction.id.desc())
                    .offset(offset)
                    .limit(limit)
                )
                result = await self.db.execute(query)
                transactions = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch transactions for account {account_id}: {e}")
            raise StoreError("Failed to fetch transactions.") from e

        total_pages = (total + limit - 1) // limit

        return txn_schemas.TransactionPage(
            transactions=[txn_schemas.TransactionRow.model_validate(t) for t in transactions],
            pagination=txn_schemas.Pagination(
                current_page=page,
                limit=limit,
                total_transactions=total,
                total_pages=total_pages,
                has_next_page=page < total_pages,
                has_previous_page=page > 1,
            ),
        )


async def seed_sample_accounts(db: AsyncSession) -> int:
    """Insert the demo accounts that are not already present. Returns how many were added."""
    added = 0
    for data in SAMPLE_ACCOUNTS:
        existing = await db.get(Account, data["id"])
        if existing is not None:
            continue
        db.add(Account(created_at=datetime.now(timezone.utc), **data))
        added += 1

    await db.commit()
    if added:
        logger.info(f"Seeded {added} sample account(s)")
    return added
