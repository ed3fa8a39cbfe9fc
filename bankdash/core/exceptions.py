"""
Error taxonomy shared by the services and the HTTP layer.

Services raise these; routers and the application-level handlers in
``main.py`` turn them into JSON envelopes using ``status_code``.
"""


class BankingError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message

    @property
    def content(self) -> dict:
        return {"type": "Error", "message": self.message}


class ValidationError(BankingError):
    status_code = 400


class NotFoundError(BankingError):
    status_code = 404


class InsufficientFundsError(BankingError):
    status_code = 400


class StoreError(BankingError):
    status_code = 500
