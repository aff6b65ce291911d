"""ListPayouts Use Case

Paginated payout history for a user.
"""

from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode
from src.app.repositories.payout_repository import PayoutRepository
from .dtos import PayoutListResponseDTO
from .initiate_payout import to_response_dto


class ListPayouts:
    """
    Use Case: List payouts

    Business Rules:
    - Newest first
    - Date range filter applies only when both bounds are given
    - limit in [1, 100], offset >= 0
    """

    def __init__(self, payout_repo: PayoutRepository):
        self.payout_repo = payout_repo

    async def execute(
        self,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> Result[PayoutListResponseDTO]:
        if limit < 1 or limit > 100 or offset < 0:
            return Return.err(
                Error(
                    code=ErrorCode.VALIDATION_ERROR,
                    message="limit must be between 1 and 100 and offset must not be negative",
                    reason=f"limit={limit}, offset={offset}",
                )
            )

        if start_date and end_date and start_date > end_date:
            return Return.err(
                Error(
                    code=ErrorCode.VALIDATION_ERROR,
                    message="start_date must be before end_date",
                )
            )

        payouts, total = await self.payout_repo.get_by_user_id(
            user_id, start_date=start_date, end_date=end_date, limit=limit, offset=offset
        )
        return Return.ok(
            PayoutListResponseDTO(
                payouts=[to_response_dto(p) for p in payouts],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
