"""ListPayoutAccounts Use Case"""

from typing import List
from libs.result import Result, Return
from src.app.repositories.payout_account_repository import PayoutAccountRepository
from .add_payout_account import to_response_dto
from .dtos import PayoutAccountResponseDTO


class ListPayoutAccounts:
    """Lists a user's payout accounts, active and inactive"""

    def __init__(self, account_repo: PayoutAccountRepository):
        self.account_repo = account_repo

    async def execute(self, user_id: str) -> Result[List[PayoutAccountResponseDTO]]:
        accounts = await self.account_repo.get_by_user_id(user_id)
        return Return.ok([to_response_dto(a) for a in accounts])
