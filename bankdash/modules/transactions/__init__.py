# Transaction module
from bankdash.modules.transactions.models import Transaction, TransactionType
from bankdash.modules.transactions.services import TransactionService

__all__ = ["Transaction", "TransactionType", "TransactionService"]
