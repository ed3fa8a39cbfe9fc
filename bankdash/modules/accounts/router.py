from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from bankdash.core.database import get_db
from bankdash.core.exceptions import BankingError
from bankdash.modules.accounts import schemas
from bankdash.modules.accounts.services import QueryService

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


def _error(exc: BankingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@router.get(
    "",
    response_model=List[schemas.AccountResponse],
    responses={500: {"model": schemas.ErrorResponse}}
)
async def list_accounts(db: AsyncSession = Depends(get_db)):
    """
    List all accounts.
    """
    try:
        return await QueryService(db).list_accounts()
    except BankingError as e:
        return _error(e)


@router.get(
    "/{account_id}",
    response_model=schemas.AccountResponse,
    responses={404: {"model": schemas.ErrorResponse}, 500: {"model": schemas.ErrorResponse}}
)
async def get_account(account_id: str, db: AsyncSession = Depends(get_db)):
    """
    Get account details.
    """
    try:
        return await QueryService(db).get_account(account_id)
    except BankingError as e:
        return _error(e)
