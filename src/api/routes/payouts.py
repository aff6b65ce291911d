"""Payout API Routes"""

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.payouts.dtos import PayoutListResponseDTO
from src.app.use_cases.payouts.list_payouts import ListPayouts
from src.adapter.repositories.payout_repository import SqlAlchemyPayoutRepository
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/payouts", tags=["Payouts"])


@router.get(
    "/users/{user_id}",
    response_model=PayoutListResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_payouts(
    user_id: str,
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    limit: int = Query(20),
    offset: int = Query(0),
    session: AsyncSession = Depends(get_session),
):
    """
    Payout history for a user, newest first.

    **Query parameters:**
    - `start_date`, `end_date` (optional): filter by creation date (both required to apply)
    - `limit` (default 20, max 100), `offset` (default 0)
    """
    use_case = ListPayouts(SqlAlchemyPayoutRepository(session))
    result = await use_case.execute(
        user_id, start_date=start_date, end_date=end_date, limit=limit, offset=offset
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value
