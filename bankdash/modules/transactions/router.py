from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from bankdash.core.database import get_db
from bankdash.modules.accounts.services import QueryService, DEFAULT_PAGE_SIZE
from bankdash.modules.transactions import schemas
from bankdash.modules.transactions.services import TransactionService

router = APIRouter(prefix="/api/accounts", tags=["transactions"])


@router.get("/{account_id}/transactions", response_model=schemas.TransactionListResponse)
async def list_account_transactions(
    account_id: str,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    db: AsyncSession = Depends(get_db)
):
    """
    Paginated transaction history, newest first.

    - page must be >= 1
    - limit must be between 1 and 100
    """
    page_data = await QueryService(db).list_transactions(account_id, page=page, limit=limit)
    return schemas.TransactionListResponse(data=page_data)


@router.post(
    "/{account_id}/transactions",
    response_model=schemas.TransactionCreatedResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_transaction(
    account_id: str,
    txn: schemas.TransactionCreateRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a deposit, withdrawal or transfer.

    - Withdrawals and transfers may not take the balance below zero
    - The transaction row and the balance update commit together
    """
    service = TransactionService(db)
    result = await service.create_transaction(
        account_id, txn.type, txn.amount, txn.description
    )
    return schemas.TransactionCreatedResponse(data=result)
