"""Earnings API Routes

FastAPI routes for seller earnings and withdrawals.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.payout_request import WithdrawRequestSchema
from src.app.use_cases.earnings.dtos import EarningsResponseDTO, EarningsSummaryDTO
from src.app.use_cases.earnings.get_earnings import GetEarnings
from src.app.use_cases.earnings.get_earnings_summary import GetEarningsSummary
from src.app.use_cases.payouts.dtos import InitiatePayoutCommandDTO, PayoutResponseDTO
from src.app.use_cases.payouts.initiate_payout import InitiatePayout
from src.app.services.ledger_store import LedgerStore
from src.app.services.payment_provider import PaymentProvider
from src.adapter.repositories.ledger_repository import SqlAlchemyLedgerRepository
from src.adapter.repositories.ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from src.adapter.repositories.payout_account_repository import SqlAlchemyPayoutAccountRepository
from src.adapter.repositories.payout_repository import SqlAlchemyPayoutRepository
from src.adapter.repositories.revenue_repository import SqlAlchemyRevenueRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_payment_provider
from src.api.error import ClientError

router = APIRouter(prefix="/earnings", tags=["Earnings"])


@router.get(
    "/summary",
    response_model=EarningsSummaryDTO,
    status_code=status.HTTP_200_OK,
)
async def get_earnings_summary(session: AsyncSession = Depends(get_session)):
    """Platform-wide earnings totals and platform revenue (admin)."""
    use_case = GetEarningsSummary(
        SqlAlchemyLedgerRepository(session), SqlAlchemyRevenueRepository(session)
    )
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/users/{user_id}",
    response_model=EarningsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_earnings(user_id: str, session: AsyncSession = Depends(get_session)):
    """
    Get a user's earnings.

    **Returns:**
    - 200: total, withdrawn, pending and available earnings (zeros if the user never earned)
    """
    use_case = GetEarnings(SqlAlchemyLedgerRepository(session))
    result = await use_case.execute(user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/withdraw",
    response_model=PayoutResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        402: {
            "description": "Insufficient balance",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_BALANCE",
                            "message": "Insufficient balance. You cannot withdraw more than your current balance."
                        }
                    }
                }
            }
        },
        400: {
            "description": "No active payout account",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "NO_PAYOUT_ACCOUNT",
                            "message": "Add and activate a payout account before withdrawing"
                        }
                    }
                }
            }
        },
        502: {"description": "Payment provider could not start the transfer"},
    }
)
async def withdraw(
    request: WithdrawRequestSchema,
    session: AsyncSession = Depends(get_session),
    provider: PaymentProvider = Depends(get_payment_provider),
):
    """
    Withdraw earnings to the active payout account.

    The amount is reserved immediately and the payout stays `pending`
    until Paystack reports the transfer outcome.

    **Request body:**
    - `user_id` (required): User withdrawing earnings
    - `amount` (required): Amount in minor units (must be > 0)
    """
    uow = SqlAlchemyUnitOfWork(session)
    ledger_store = LedgerStore(
        SqlAlchemyLedgerRepository(session), SqlAlchemyLedgerEntryRepository(session)
    )

    command = InitiatePayoutCommandDTO(user_id=request.user_id, amount=request.amount)

    use_case = InitiatePayout(
        uow,
        ledger_store,
        SqlAlchemyPayoutAccountRepository(session),
        SqlAlchemyPayoutRepository(session),
        provider,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
