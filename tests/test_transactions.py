"""
Tests for the transaction service and the transaction-creation endpoint
"""
import logging
import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError

from bankdash.core.exceptions import (
    InsufficientFundsError, NotFoundError, StoreError, ValidationError
)
from bankdash.modules.accounts.models import Account
from bankdash.modules.transactions.models import Transaction, TransactionType
from bankdash.modules.transactions.services import TransactionService


async def _balance(db_session, account_id: str) -> Decimal:
    result = await db_session.execute(select(Account.balance).where(Account.id == account_id))
    return Decimal(result.scalar_one())


async def _transaction_count(db_session, account_id: str) -> int:
    result = await db_session.execute(
        select(func.count(Transaction.id)).where(Transaction.account_id == account_id)
    )
    return result.scalar_one()


class TestTransactionService:
    """Tests for TransactionService"""

    @pytest.mark.unit
    def test_compute_new_balance(self):
        """Deposits add, withdrawals and transfers subtract"""
        balance = Decimal("100.00")

        assert TransactionService.compute_new_balance(balance, TransactionType.DEPOSIT, Decimal("25.50")) == Decimal("125.50")
        assert TransactionService.compute_new_balance(balance, TransactionType.WITHDRAWAL, Decimal("25.50")) == Decimal("74.50")
        assert TransactionService.compute_new_balance(balance, TransactionType.TRANSFER, Decimal("100.00")) == Decimal("0.00")

    @pytest.mark.unit
    @pytest.mark.parametrize("txn_type, amount, description", [
        ("LOAN", Decimal("10"), "bad type"),
        (None, Decimal("10"), "missing type"),
        ("DEPOSIT", Decimal("0"), "zero"),
        ("DEPOSIT", Decimal("-5"), "negative"),
        ("DEPOSIT", None, "missing amount"),
        ("DEPOSIT", "abc", "not a number"),
        ("DEPOSIT", Decimal("10"), ""),
        ("DEPOSIT", Decimal("10"), "   "),
        ("DEPOSIT", Decimal("10"), None),
    ])
    async def test_invalid_input_rejected_before_store(self, txn_type, amount, description):
        """Input violations raise ValidationError without touching the session"""
        db = AsyncMock()
        service = TransactionService(db)

        with pytest.raises(ValidationError):
            await service.create_transaction("1", txn_type, amount, description)

        db.execute.assert_not_called()
        db.commit.assert_not_called()

    @pytest.mark.integration
    async def test_deposit(self, db_session, test_account):
        service = TransactionService(db_session)

        result = await service.create_transaction("1", TransactionType.DEPOSIT, Decimal("500"), "payroll")

        assert result.transaction_type == TransactionType.DEPOSIT
        assert result.amount == 500
        assert result.new_balance == 5500
        assert await _balance(db_session, "1") == Decimal("5500.00")
        assert await _transaction_count(db_session, "1") == 1

    @pytest.mark.integration
    async def test_withdrawal_to_exactly_zero(self, db_session, test_account):
        service = TransactionService(db_session)

        result = await service.create_transaction("1", "WITHDRAWAL", Decimal("5000.00"), "close out")

        assert result.new_balance == 0
        assert await _balance(db_session, "1") == Decimal("0.00")

    @pytest.mark.integration
    async def test_transaction_row_fields(self, db_session, test_account):
        """The stored row carries the request fields and a server-assigned date"""
        service = TransactionService(db_session)
        await service.create_transaction("1", "TRANSFER", Decimal("12.34"), "  rent  ")

        result = await db_session.execute(select(Transaction).where(Transaction.account_id == "1"))
        txn = result.scalar_one()

        assert txn.type == TransactionType.TRANSFER
        assert Decimal(txn.amount) == Decimal("12.34")
        assert txn.description == "rent"
        assert txn.date is not None

    @pytest.mark.integration
    async def test_unknown_account(self, db_session, test_account):
        service = TransactionService(db_session)

        with pytest.raises(NotFoundError):
            await service.create_transaction("999", "DEPOSIT", Decimal("10"), "nobody")

    @pytest.mark.integration
    async def test_insufficient_funds_changes_nothing(self, db_session, test_account, caplog):
        service = TransactionService(db_session)

        with caplog.at_level(logging.WARNING, logger="bankdash"):
            with pytest.raises(InsufficientFundsError, match="Insufficient funds"):
                await service.create_transaction("1", "WITHDRAWAL", Decimal("6000"), "too much")

        assert await _balance(db_session, "1") == Decimal("5000.00")
        assert await _transaction_count(db_session, "1") == 0
        assert "insufficient funds" in caplog.text

    @pytest.mark.integration
    async def test_store_failure_rolls_back_both_writes(self, db_session, test_account, monkeypatch):
        """A failure after the row is flushed leaves neither the row nor the new balance"""
        service = TransactionService(db_session)
        monkeypatch.setattr(db_session, "commit", AsyncMock(side_effect=SQLAlchemyError("disk I/O error")))

        with pytest.raises(StoreError, match="Failed to create transaction"):
            await service.create_transaction("1", "DEPOSIT", Decimal("250"), "lost write")

        monkeypatch.undo()
        assert await _balance(db_session, "1") == Decimal("5000.00")
        assert await _transaction_count(db_session, "1") == 0

    @pytest.mark.integration
    async def test_balance_matches_transaction_history(self, db_session, sample_accounts):
        """balance == initial + deposits - (withdrawals + transfers), rejected requests excluded"""
        service = TransactionService(db_session)
        steps = [
            ("2", "DEPOSIT", "150.25"),
            ("2", "WITHDRAWAL", "4000.00"),
            ("2", "TRANSFER", "6150.25"),
            ("2", "WITHDRAWAL", "0.01"),  # rejected: balance is 0.00 here
            ("2", "DEPOSIT", "99.99"),
            ("1", "TRANSFER", "1.00"),
        ]

        expected = {"1": Decimal("5000.00"), "2": Decimal("10000.00")}
        for account_id, txn_type, amount in steps:
            value = Decimal(amount)
            try:
                await service.create_transaction(account_id, txn_type, value, "step")
            except InsufficientFundsError:
                continue
            expected[account_id] += value if txn_type == "DEPOSIT" else -value

        assert await _balance(db_session, "1") == expected["1"] == Decimal("4999.00")
        assert await _balance(db_session, "2") == expected["2"] == Decimal("99.99")
        assert await _transaction_count(db_session, "2") == 4


class TestCreateTransactionEndpoint:
    """POST /api/accounts/{id}/transactions"""

    @pytest.mark.integration
    async def test_deposit_then_get_account(self, client, test_account):
        response = await client.post(
            "/api/accounts/1/transactions",
            json={"type": "DEPOSIT", "amount": 500, "description": "payroll"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["type"] == "Success"
        assert body["message"] == "Transaction created and balance updated successfully."
        assert body["data"] == {"transactionType": "DEPOSIT", "amount": 500, "newBalance": 5500}

        account = await client.get("/api/accounts/1")
        assert account.json()["balance"] == 5500

    @pytest.mark.integration
    async def test_withdrawal_over_balance(self, client, test_account):
        response = await client.post(
            "/api/accounts/1/transactions",
            json={"type": "WITHDRAWAL", "amount": 6000, "description": "rent"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "type": "Error",
            "message": "Insufficient funds for this transaction.",
        }

        account = await client.get("/api/accounts/1")
        assert account.json()["balance"] == 5000

        history = await client.get("/api/accounts/1/transactions")
        assert history.json()["data"]["pagination"]["totalTransactions"] == 0

    @pytest.mark.integration
    async def test_unknown_account(self, client, test_account):
        response = await client.post(
            "/api/accounts/404/transactions",
            json={"type": "DEPOSIT", "amount": 1, "description": "x"}
        )

        assert response.status_code == 404
        assert response.json() == {"type": "Error", "message": "Account not found."}

    @pytest.mark.integration
    async def test_store_failure_returns_500(self, client, db_session, test_account, monkeypatch):
        monkeypatch.setattr(db_session, "commit", AsyncMock(side_effect=SQLAlchemyError("boom")))

        response = await client.post(
            "/api/accounts/1/transactions",
            json={"type": "DEPOSIT", "amount": 1, "description": "x"}
        )

        assert response.status_code == 500
        assert response.json()["message"] == "Failed to create transaction."


class TestCreateTransactionValidation:
    """Request body checks: any missing or invalid field is a 400"""

    @pytest.mark.unit
    @pytest.mark.parametrize("payload", [
        {"amount": 100, "description": "no type"},
        {"type": "DEPOSIT", "description": "no amount"},
        {"type": "DEPOSIT", "amount": 100},
        {"type": "DEPOSIT", "amount": 0, "description": "zero"},
        {"type": "DEPOSIT", "amount": -10, "description": "negative"},
        {"type": "DEPOSIT", "amount": 100, "description": "   "},
        {"type": "deposit", "amount": 100, "description": "lowercase type"},
        {"type": "REFUND", "amount": 100, "description": "unknown type"},
        {},
    ])
    async def test_rejected(self, client, test_account, payload):
        response = await client.post("/api/accounts/1/transactions", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "Error"
        assert body["message"] == "Incomplete transaction details."
        assert body["details"]

        account = await client.get("/api/accounts/1")
        assert account.json()["balance"] == 5000

    @pytest.mark.unit
    async def test_single_missing_field_is_enough(self, client, test_account):
        """Only the description is missing; type and a positive amount are present"""
        response = await client.post(
            "/api/accounts/1/transactions",
            json={"type": "WITHDRAWAL", "amount": 10}
        )

        assert response.status_code == 400
        history = await client.get("/api/accounts/1/transactions")
        assert history.json()["data"]["transactions"] == []
