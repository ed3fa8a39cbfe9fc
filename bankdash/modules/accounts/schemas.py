from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime

from bankdash.modules.accounts.models import AccountType


class AccountResponse(BaseModel):
    """Account as rendered on the dashboard"""
    id: str
    account_number: str
    account_type: AccountType
    balance: float
    account_holder: str
    created_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class ErrorResponse(BaseModel):
    error: str
