"""API error handling

Use case errors reach HTTP clients as ``{"error": {"code", "message", "reason"}}``.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error
from src.app.errors import ErrorCode

_STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INSUFFICIENT_BALANCE: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.NO_PAYOUT_ACCOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_ACCOUNT: status.HTTP_409_CONFLICT,
    ErrorCode.SUBSCRIPTION_CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.PROVIDER_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.PAYOUT_ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.LEDGER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def status_for(error: Error) -> int:
    return _STATUS_BY_CODE.get(error.code, status.HTTP_400_BAD_REQUEST)


class ClientError(Exception):
    """Error returned to the API caller"""

    def __init__(self, error: Error, status_code: int = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_for(error)


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error.model_dump(exclude_none=True)},
    )
