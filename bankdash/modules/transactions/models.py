from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, Text, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from bankdash.core.database import Base
import enum


class TransactionType(str, enum.Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER = "TRANSFER"


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    type = Column(
        SQLEnum(TransactionType, name="transaction_type", create_constraint=True),
        nullable=False
    )
    amount = Column(Numeric(15, 2), nullable=False)
    description = Column(Text, nullable=False)
    account_id = Column(
        String(36),
        ForeignKey("accounts.id", ondelete="CASCADE", onupdate="CASCADE"),
        nullable=False,
        index=True
    )
    # Assigned by the database at insert time
    date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    account = relationship("Account", back_populates="transactions")

    __mapper_args__ = {"eager_defaults": True}

    def __repr__(self):
        return f"<Transaction(id={self.id}, account_id={self.account_id}, type={self.type}, amount={self.amount})>"
