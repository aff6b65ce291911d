"""Get Earnings Use Case

Retrieves a user's current earnings.
"""

from libs.result import Result, Return
from src.app.repositories.ledger_repository import LedgerRepository
from .dtos import EarningsResponseDTO


class GetEarnings:
    """
    Get Earnings Use Case

    Read-only. A user who has never been credited has no ledger yet;
    they get an all-zero response rather than an error.
    """

    def __init__(self, ledger_repo: LedgerRepository):
        self.ledger_repo = ledger_repo

    async def execute(self, user_id: str) -> Result[EarningsResponseDTO]:
        ledger = await self.ledger_repo.get_by_user_id(user_id)

        if not ledger:
            return Return.ok(
                EarningsResponseDTO(
                    user_id=user_id,
                    total_earnings=0,
                    withdrawn_earnings=0,
                    pending=0,
                    available_earnings=0,
                )
            )

        return Return.ok(
            EarningsResponseDTO(
                user_id=ledger.user_id,
                total_earnings=ledger.total_earnings,
                withdrawn_earnings=ledger.withdrawn_earnings,
                pending=ledger.pending,
                available_earnings=ledger.available,
                last_updated=ledger.updated_at,
            )
        )
