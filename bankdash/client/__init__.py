from .api import BankingClient, ClientError, validate_transaction_input

__all__ = ["BankingClient", "ClientError", "validate_transaction_input"]
