"""GetActivePayoutAccount Use Case"""

from libs.result import Result, Return, Error
from src.app.errors import ErrorCode
from src.app.repositories.payout_account_repository import PayoutAccountRepository
from .add_payout_account import to_response_dto
from .dtos import PayoutAccountResponseDTO


class GetActivePayoutAccount:
    def __init__(self, account_repo: PayoutAccountRepository):
        self.account_repo = account_repo

    async def execute(self, user_id: str) -> Result[PayoutAccountResponseDTO]:
        account = await self.account_repo.get_active(user_id)
        if not account:
            return Return.err(
                Error(
                    code=ErrorCode.PAYOUT_ACCOUNT_NOT_FOUND,
                    message="No active payout account",
                    reason=f"user_id={user_id}",
                )
            )
        return Return.ok(to_response_dto(account))
