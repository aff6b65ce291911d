"""Error codes and exceptions shared by the application layer

Expected failures travel as ``libs.result.Error`` codes. Only two
conditions are exceptions:

- ``ProviderError``: any failed call to the payment provider (HTTP error,
  non-2xx response, timeout). Use cases convert it to ``PROVIDER_ERROR``.
- ``ModelMismatch``: a repository was handed the wrong entity type.
  This is a programming error and is never caught.
"""

from typing import Optional


class ErrorCode:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    NO_PAYOUT_ACCOUNT = "NO_PAYOUT_ACCOUNT"
    DUPLICATE_ACCOUNT = "DUPLICATE_ACCOUNT"
    SUBSCRIPTION_CONFLICT = "SUBSCRIPTION_CONFLICT"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    PAYOUT_ACCOUNT_NOT_FOUND = "PAYOUT_ACCOUNT_NOT_FOUND"
    LEDGER_NOT_FOUND = "LEDGER_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"


class ProviderError(Exception):
    """Payment provider call failed"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class ModelMismatch(TypeError):
    """Repository update called with an entity of the wrong type"""

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Expected {expected} entity, got {actual}")
        self.expected = expected
        self.actual = actual
