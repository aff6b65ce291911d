"""SetActivePayoutAccount Use Case

Makes one of a user's payout accounts the withdrawal destination.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.errors import ErrorCode, ModelMismatch
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.payout_account_repository import PayoutAccountRepository
from .add_payout_account import to_response_dto
from .dtos import PayoutAccountResponseDTO

logger = logging.getLogger(__name__)


class SetActivePayoutAccount:
    """
    Use Case: Activate a payout account

    Business Rules:
    1. The account must belong to the user
    2. Siblings are deactivated and the target activated in one transaction
    3. All of the user's accounts are locked first so concurrent
       activations serialize

    Siblings are flushed inactive before the target is flushed active,
    so the partial unique index on (user_id WHERE active) never sees two
    active rows.
    """

    def __init__(self, uow: UnitOfWork, account_repo: PayoutAccountRepository):
        self.uow = uow
        self.account_repo = account_repo

    async def execute(self, user_id: str, account_id: str) -> Result[PayoutAccountResponseDTO]:
        try:
            # Step 1: Lock every account of the user
            accounts = await self.account_repo.get_by_user_id(user_id, for_update=True)
            target = next((a for a in accounts if a.id == account_id), None)

            if not target:
                return Return.err(
                    Error(
                        code=ErrorCode.PAYOUT_ACCOUNT_NOT_FOUND,
                        message=f"Payout account {account_id} not found",
                        reason=f"user_id={user_id}",
                    )
                )

            if target.active:
                return Return.ok(to_response_dto(target))

            # Step 2: Deactivate siblings, then activate target
            await self.account_repo.deactivate_siblings(user_id, keep_account_id=account_id)

            target.active = True
            target.updated_at = datetime.utcnow()
            updated = await self.account_repo.update(target)

            # Step 3: Commit
            await self.uow.commit()

            logger.info(f"Payout account {account_id} activated for user {user_id}")
            return Return.ok(to_response_dto(updated))

        except ModelMismatch:
            raise
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SET_ACTIVE_PAYOUT_ACCOUNT_FAILED",
                    message="Failed to activate payout account",
                    reason=str(e),
                )
            )
