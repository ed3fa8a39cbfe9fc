"""
HTTP client for the dashboard API.
"""
from typing import Any, Dict, List, Optional
import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3001/api"
TRANSACTION_TYPES = ("DEPOSIT", "WITHDRAWAL", "TRANSFER")


class ClientError(Exception):
    """Raised for any non-2xx response; carries the server's message when it sent one"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def validate_transaction_input(
    transaction_type: Optional[str],
    amount: Optional[float],
    description: Optional[str],
    balance: Optional[float] = None
) -> Dict[str, str]:
    """
    Form-level checks run before a transaction is submitted.

    Returns a mapping of field name to error message; empty when the
    input is acceptable. When ``balance`` is given, withdrawals and
    transfers larger than it are flagged as well.
    """
    errors = {}

    if not transaction_type:
        errors["type"] = "Transaction type is required"
    elif transaction_type not in TRANSACTION_TYPES:
        errors["type"] = f"Transaction type must be one of {', '.join(TRANSACTION_TYPES)}"

    if amount is None:
        errors["amount"] = "Amount is required"
    elif amount <= 0:
        errors["amount"] = "Amount must be greater than zero"
    elif balance is not None and transaction_type != "DEPOSIT" and amount > balance:
        errors["amount"] = "Insufficient balance"

    if not description or not description.strip():
        errors["description"] = "Description is required"

    return errors


class BankingClient:
    """Thin wrapper over the REST endpoints, one method per call"""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ClientError(f"{fallback}: {e}") from e

        if response.is_error:
            raise ClientError(self._error_message(response, fallback), response.status_code)
        return response.json()

    @staticmethod
    def _error_message(response: httpx.Response, fallback: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict):
            return body.get("message") or body.get("error") or fallback
        return fallback

    def get_accounts(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/accounts", "Failed to fetch accounts")

    def get_account(self, account_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/accounts/{account_id}", "Failed to fetch account")

    def create_transaction(self, account_id: str, transaction_data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request(
            "POST",
            f"/accounts/{account_id}/transactions",
            "Failed to insert account transactions",
            json=transaction_data
        )

    def get_transactions(self, account_id: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        return self._request(
            "GET",
            f"/accounts/{account_id}/transactions",
            "Failed to fetch account transactions",
            params={"page": page, "limit": limit}
        )
