"""Payout Account API Routes

FastAPI routes for managing the bank accounts users are paid out to.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.payout_request import AddPayoutAccountRequestSchema, AccountActionRequestSchema
from src.app.use_cases.payout_accounts.dtos import AddPayoutAccountCommandDTO, PayoutAccountResponseDTO
from src.app.use_cases.payout_accounts.add_payout_account import AddPayoutAccount
from src.app.use_cases.payout_accounts.set_active_payout_account import SetActivePayoutAccount
from src.app.use_cases.payout_accounts.deactivate_payout_account import DeactivatePayoutAccount
from src.app.use_cases.payout_accounts.get_active_payout_account import GetActivePayoutAccount
from src.app.use_cases.payout_accounts.list_payout_accounts import ListPayoutAccounts
from src.app.services.payment_provider import PaymentProvider
from src.adapter.repositories.payout_account_repository import SqlAlchemyPayoutAccountRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_payment_provider
from src.api.error import ClientError

router = APIRouter(prefix="/payout-accounts", tags=["Payout Accounts"])


@router.post(
    "",
    response_model=PayoutAccountResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Account number already registered",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "DUPLICATE_ACCOUNT",
                            "message": "This account number is already registered"
                        }
                    }
                }
            }
        },
        502: {"description": "Payment provider could not register the account"},
    }
)
async def add_payout_account(
    request: AddPayoutAccountRequestSchema,
    session: AsyncSession = Depends(get_session),
    provider: PaymentProvider = Depends(get_payment_provider),
):
    """
    Register a bank account for payouts.

    The account is resolved at the bank and registered as a Paystack
    transfer recipient. The user's first account becomes active.
    """
    command = AddPayoutAccountCommandDTO(
        user_id=request.user_id,
        account_number=request.account_number,
        account_name=request.account_name,
        bank_code=request.bank_code,
        bank_name=request.bank_name,
    )

    use_case = AddPayoutAccount(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPayoutAccountRepository(session),
        SqlAlchemyUserRepository(session),
        provider,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/users/{user_id}",
    response_model=List[PayoutAccountResponseDTO],
    status_code=status.HTTP_200_OK,
)
async def list_payout_accounts(user_id: str, session: AsyncSession = Depends(get_session)):
    use_case = ListPayoutAccounts(SqlAlchemyPayoutAccountRepository(session))
    result = await use_case.execute(user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/users/{user_id}/active",
    response_model=PayoutAccountResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_active_payout_account(user_id: str, session: AsyncSession = Depends(get_session)):
    use_case = GetActivePayoutAccount(SqlAlchemyPayoutAccountRepository(session))
    result = await use_case.execute(user_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{account_id}/activate",
    response_model=PayoutAccountResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def activate_payout_account(
    account_id: str,
    request: AccountActionRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Make this account the withdrawal destination; the user's other accounts are deactivated."""
    use_case = SetActivePayoutAccount(
        SqlAlchemyUnitOfWork(session), SqlAlchemyPayoutAccountRepository(session)
    )
    result = await use_case.execute(request.user_id, account_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{account_id}/deactivate",
    response_model=PayoutAccountResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def deactivate_payout_account(
    account_id: str,
    request: AccountActionRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    use_case = DeactivatePayoutAccount(
        SqlAlchemyUnitOfWork(session), SqlAlchemyPayoutAccountRepository(session)
    )
    result = await use_case.execute(request.user_id, account_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
