from sqlalchemy import Column, String, Numeric, DateTime, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from bankdash.core.database import Base
import enum


class AccountType(str, enum.Enum):
    """Account type enumeration"""
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"


class Account(Base):
    """Holder's balance record. Only the transaction service mutates it."""
    __tablename__ = "accounts"

    # Primary Key
    id = Column(String(36), primary_key=True, index=True)

    # Account Identifiers
    account_number = Column(String(20), unique=True, nullable=False, index=True)
    account_type = Column(
        SQLEnum(AccountType, name="account_type", create_constraint=True),
        default=AccountType.CHECKING,
        nullable=False
    )

    # Numeric for precision with money
    balance = Column(Numeric(15, 2), default=0.00, nullable=False)
    account_holder = Column(String(200), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    transactions = relationship(
        "Transaction",
        back_populates="account",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    def __repr__(self):
        return f"<Account(id={self.id}, account_number={self.account_number}, type={self.account_type})>"
