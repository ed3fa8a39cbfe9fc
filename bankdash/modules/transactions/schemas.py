from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from decimal import Decimal
from typing import List

from bankdash.modules.transactions.models import TransactionType


class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class TransactionCreateRequest(BaseModel):
    """Every field is required; a request missing any of them is rejected"""
    type: TransactionType
    amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)
    description: str = Field(..., min_length=1, max_length=500)

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Description is required")
        return value


class TransactionResult(CamelModel):
    transaction_type: TransactionType
    amount: float
    new_balance: float


class TransactionCreatedResponse(BaseModel):
    type: str = "Success"
    message: str = "Transaction created and balance updated successfully."
    data: TransactionResult


class TransactionRow(CamelModel):
    id: int
    type: TransactionType
    amount: float
    description: str
    account_id: str
    date: datetime


class Pagination(CamelModel):
    current_page: int
    limit: int
    total_transactions: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool


class TransactionPage(CamelModel):
    transactions: List[TransactionRow]
    pagination: Pagination


class TransactionListResponse(BaseModel):
    type: str = "Success"
    message: str = "Transaction details fetched successfully."
    data: TransactionPage
