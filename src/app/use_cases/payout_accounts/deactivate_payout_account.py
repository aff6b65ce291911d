"""DeactivatePayoutAccount Use Case"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, ModelMismatch
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.payout_account_repository import PayoutAccountRepository
from .add_payout_account import to_response_dto
from .dtos import PayoutAccountResponseDTO

logger = logging.getLogger(__name__)


class DeactivatePayoutAccount:
    """
    Use Case: Deactivate a payout account

    The account is kept (payouts reference it). A user with no active
    account cannot withdraw until they activate one again.
    """

    def __init__(self, uow: UnitOfWork, account_repo: PayoutAccountRepository):
        self.uow = uow
        self.account_repo = account_repo

    async def execute(self, user_id: str, account_id: str) -> Result[PayoutAccountResponseDTO]:
        try:
            account = await self.account_repo.get_by_id(account_id, for_update=True)
            if not account or account.user_id != user_id:
                return Return.err(
                    Error(
                        code=ErrorCode.PAYOUT_ACCOUNT_NOT_FOUND,
                        message=f"Payout account {account_id} not found",
                        reason=f"user_id={user_id}",
                    )
                )

            if not account.active:
                return Return.ok(to_response_dto(account))

            account.active = False
            account.updated_at = datetime.utcnow()
            updated = await self.account_repo.update(account)
            await self.uow.commit()

            logger.info(f"Payout account {account_id} deactivated for user {user_id}")
            return Return.ok(to_response_dto(updated))

        except ModelMismatch:
            raise
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DEACTIVATE_PAYOUT_ACCOUNT_FAILED",
                    message="Failed to deactivate payout account",
                    reason=str(e),
                )
            )
